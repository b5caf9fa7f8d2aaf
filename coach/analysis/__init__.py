"""Decision support module."""

from .decision import (
    BettingState,
    DecisionConfig,
    Recommendation,
    recommend,
    required_equity,
    street_name,
)

__all__ = [
    "BettingState",
    "DecisionConfig",
    "Recommendation",
    "recommend",
    "required_equity",
    "street_name",
]
