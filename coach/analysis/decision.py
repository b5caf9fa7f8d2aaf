"""Pot odds and action recommendations."""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class DecisionConfig:
    """Equity thresholds for recommendations."""
    margin: float = 0.03      # Band around required equity treated as a marginal call
    value_bet: float = 0.62   # Bet for value above this equity when checked to
    weak: float = 0.35        # Check below this equity when checked to


@dataclass
class BettingState:
    """
    Bets in front of each seat on the current street.

    ``pot`` holds chips from previous streets; ``bets`` the amounts put
    in on this street, keyed by seat id.
    """
    pot: float = 0.0
    bets: dict[int, float] = field(default_factory=dict)
    hero_seat: int = 1

    @property
    def current_pot(self) -> float:
        return self.pot + sum(self.bets.values())

    @property
    def max_bet(self) -> float:
        return max([0.0, *self.bets.values()])

    @property
    def hero_bet(self) -> float:
        return self.bets.get(self.hero_seat, 0.0)

    @property
    def to_call(self) -> float:
        return self.max_bet - self.hero_bet

    def place_bet(self, seat_id: int, amount: float) -> None:
        if amount < 0:
            raise ValueError(f"Bet must be non-negative, got {amount}")
        self.bets[seat_id] = amount

    def reset_street(self) -> None:
        """Clear street bets (a new board card was dealt)."""
        self.bets = {}

    @property
    def required_equity(self) -> float:
        return required_equity(self.to_call, self.current_pot)


def required_equity(to_call: float, pot: float) -> float:
    """
    Minimum equity for a breakeven call.

    Args:
        to_call: Amount hero must put in
        pot: Pot including every bet already made

    Returns:
        to_call / (pot + to_call), or 0 when there is nothing to call
    """
    if to_call <= 0:
        return 0.0
    return to_call / (pot + to_call)


@dataclass(frozen=True)
class Recommendation:
    """A suggested action; ``kind`` is one of good, bad, neutral, info."""
    label: str
    detail: str
    kind: str


def recommend(
    equity: float,
    to_call: float,
    pot: float,
    opponents: int,
    hero_ready: bool = True,
    config: Optional[DecisionConfig] = None,
) -> Recommendation:
    """
    Recommend an action from equity and pot odds.

    Args:
        equity: Hero equity (0-1)
        to_call: Amount to call (0 when checked to)
        pot: Current pot including street bets
        opponents: Active opponents
        hero_ready: False until both hole cards are known
        config: Thresholds

    Returns:
        Recommendation
    """
    config = config or DecisionConfig()

    if not hero_ready:
        return Recommendation("Pick your hand", "Choose both hole cards to start.", "info")
    if opponents <= 0:
        return Recommendation("Check / bet small", "You are alone in the pot.", "info")

    if to_call <= 0:
        if equity > config.value_bet:
            return Recommendation(
                "Bet (value)",
                "Your equity is strong. Bet about 2/3 pot for value.",
                "good",
            )
        if equity < config.weak:
            return Recommendation(
                "Check",
                "Proceed carefully. Avoid bluffing without a reason.",
                "neutral",
            )
        return Recommendation("Check or bet small", "Medium equity, keep the pot small.", "neutral")

    needed = required_equity(to_call, pot)
    if equity < needed - config.margin:
        return Recommendation(
            "Fold",
            f"Your equity ({equity:.1%}) is below the pot odds ({needed:.1%}).",
            "bad",
        )
    if equity < needed + config.margin:
        return Recommendation(
            "Call",
            "Marginal spot, but the pot odds justify a call.",
            "neutral",
        )
    return Recommendation(
        "Raise",
        "Clear equity edge. Raise 2.5x to 3x.",
        "good",
    )


def street_name(board_count: int) -> str:
    """Street for a number of known board cards."""
    if board_count <= 0:
        return "Preflop"
    if board_count <= 3:
        return "Flop"
    if board_count == 4:
        return "Turn"
    return "River"
