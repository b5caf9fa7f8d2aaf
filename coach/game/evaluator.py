"""
Native 5-card and best-of-7 hand evaluation.

Every hand is reduced to a single integer so that two hands compare in
O(1): the category occupies the most significant base-15 digit and up to
five tie-break ranks fill the digits below it, highest first.
"""

from collections import Counter
from dataclasses import dataclass, field
from enum import IntEnum
from itertools import combinations
from typing import Sequence

from .cards import Card


class HandCategory(IntEnum):
    """Hand categories, weakest first."""
    HIGH_CARD = 0
    ONE_PAIR = 1
    TWO_PAIR = 2
    THREE_OF_A_KIND = 3
    STRAIGHT = 4
    FLUSH = 5
    FULL_HOUSE = 6
    FOUR_OF_A_KIND = 7
    STRAIGHT_FLUSH = 8

    @property
    def label(self) -> str:
        return CATEGORY_LABELS[self]


CATEGORY_LABELS = {
    HandCategory.HIGH_CARD: "High Card",
    HandCategory.ONE_PAIR: "Pair",
    HandCategory.TWO_PAIR: "Two Pair",
    HandCategory.THREE_OF_A_KIND: "Three of a Kind",
    HandCategory.STRAIGHT: "Straight",
    HandCategory.FLUSH: "Flush",
    HandCategory.FULL_HOUSE: "Full House",
    HandCategory.FOUR_OF_A_KIND: "Four of a Kind",
    HandCategory.STRAIGHT_FLUSH: "Straight Flush",
}

RADIX = 15
TIEBREAK_SLOTS = 5

WHEEL = {14, 5, 4, 3, 2}


def pack(category: int, tiebreak: Sequence[int]) -> int:
    """Encode category and tie-break ranks as one comparable integer."""
    value = category
    padded = list(tiebreak) + [0] * (TIEBREAK_SLOTS - len(tiebreak))
    for rank in padded[:TIEBREAK_SLOTS]:
        value = value * RADIX + rank
    return value


@dataclass(frozen=True, order=True)
class HandRank:
    """Evaluated strength of a five-card hand; compares by ``value``."""
    value: int
    category: HandCategory = field(compare=False)
    tiebreak: tuple[int, ...] = field(compare=False)

    @classmethod
    def build(cls, category: HandCategory, tiebreak: Sequence[int]) -> "HandRank":
        return cls(pack(category, tiebreak), category, tuple(tiebreak))

    @property
    def name(self) -> str:
        """Human-readable category, e.g. "Three of a Kind"."""
        return self.category.label


def _straight_top(ranks: list[int]) -> int:
    """Top rank of a straight made by five distinct ranks, or 0."""
    if len(set(ranks)) != 5:
        return 0
    if max(ranks) - min(ranks) == 4:
        return max(ranks)
    if set(ranks) == WHEEL:
        return 5
    return 0


def evaluate5(cards: Sequence[Card]) -> HandRank:
    """
    Score exactly five cards.

    Args:
        cards: Five distinct cards

    Returns:
        HandRank with category and tie-break ranks
    """
    if len(cards) != 5:
        raise ValueError(f"evaluate5 needs 5 cards, got {len(cards)}")

    ranks = sorted((c.rank for c in cards), reverse=True)
    is_flush = len({c.suit for c in cards}) == 1
    straight_top = _straight_top(ranks)

    if is_flush and straight_top:
        return HandRank.build(HandCategory.STRAIGHT_FLUSH, [straight_top])

    # Group by (count, rank) so quads/trips/pairs come first, higher rank first
    groups = sorted(Counter(ranks).items(), key=lambda rc: (rc[1], rc[0]), reverse=True)
    counts = [count for _, count in groups]
    grouped = [rank for rank, _ in groups]

    if counts[0] == 4:
        return HandRank.build(HandCategory.FOUR_OF_A_KIND, grouped[:2])
    if counts[0] == 3 and counts[1] == 2:
        return HandRank.build(HandCategory.FULL_HOUSE, grouped[:2])
    if is_flush:
        return HandRank.build(HandCategory.FLUSH, ranks)
    if straight_top:
        return HandRank.build(HandCategory.STRAIGHT, [straight_top])
    if counts[0] == 3:
        return HandRank.build(HandCategory.THREE_OF_A_KIND, grouped[:3])
    if counts[0] == 2 and counts[1] == 2:
        return HandRank.build(HandCategory.TWO_PAIR, grouped[:3])
    if counts[0] == 2:
        return HandRank.build(HandCategory.ONE_PAIR, grouped[:4])
    return HandRank.build(HandCategory.HIGH_CARD, ranks)


def best_of_7(cards: Sequence[Card]) -> HandRank:
    """
    Best five-card hand out of up to seven cards.

    Evaluates every 5-card subset (21 for seven cards) and keeps the max.
    """
    if len(cards) < 5:
        raise ValueError(f"Need at least 5 cards, got {len(cards)}")
    return max(evaluate5(combo) for combo in combinations(cards, 5))


def get_hand_class(cards: Sequence[Card]) -> str:
    """Hand class name for the best hand in ``cards``."""
    return best_of_7(cards).name
