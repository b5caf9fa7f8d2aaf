"""Game representation module."""

from .cards import Card, Hand, full_deck, remove_used, parse, parse_cards, get_all_hands
from .evaluator import HandCategory, HandRank, evaluate5, best_of_7, get_hand_class
from .ranges import RangeStyle, in_range, parse_style, range_frequency, range_hands
from .rng import RandomSource, sample_random, xorshift
from .equity import (
    CancelToken,
    EngineConfig,
    EquityEngine,
    EquityRequest,
    EquityResult,
    Seat,
    SimResult,
    calculate_equity,
)

__all__ = [
    "Card",
    "Hand",
    "full_deck",
    "remove_used",
    "parse",
    "parse_cards",
    "get_all_hands",
    "HandCategory",
    "HandRank",
    "evaluate5",
    "best_of_7",
    "get_hand_class",
    "RangeStyle",
    "in_range",
    "parse_style",
    "range_frequency",
    "range_hands",
    "RandomSource",
    "sample_random",
    "xorshift",
    "CancelToken",
    "EngineConfig",
    "EquityEngine",
    "EquityRequest",
    "EquityResult",
    "Seat",
    "SimResult",
    "calculate_equity",
]
