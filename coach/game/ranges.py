"""Style-based starting hand ranges."""

import random
from enum import Enum
from typing import Callable, Optional

from .cards import Card, Hand, Rank, get_all_hands


class RangeStyle(str, Enum):
    """
    Named playing styles, each mapping to a starting-hand range.

    - ANY: every two cards
    - TIGHT: premium pairs, suited broadways, AK-AJ/KQ offsuit
    - REG: solid regular, all pairs and strong suited/offsuit broadways
    - LOOSE: wide, any ace plus connected and broadway holdings
    - MANIAC: nearly anything, plus random trash
    """
    ANY = "any"
    TIGHT = "tight"
    REG = "reg"
    LOOSE = "loose"
    MANIAC = "maniac"

    def __str__(self) -> str:
        return self.value


# Share of out-of-range hands a maniac still plays
MANIAC_FALLBACK_RATE = 0.3


def parse_style(name: str) -> RangeStyle:
    """Look up a style by name, case-insensitively."""
    try:
        return RangeStyle(name.strip().lower())
    except ValueError:
        valid = ", ".join(s.value for s in RangeStyle)
        raise ValueError(f"Unknown range style: {name!r} (expected one of {valid})") from None


SUITED_CONNECTORS = ((Rank.TEN, Rank.NINE), (Rank.NINE, Rank.EIGHT))
SMALL_SUITED_CONNECTORS = ((Rank.SIX, Rank.FIVE), (Rank.FIVE, Rank.FOUR))


def _is_broadway(rank: int) -> bool:
    return rank >= Rank.TEN


def _tight(hi: int, lo: int, pair: bool, suited: bool) -> bool:
    if pair:
        return hi >= Rank.EIGHT
    if suited:
        return (hi >= Rank.KING and _is_broadway(lo)) or (hi, lo) in SUITED_CONNECTORS
    return (hi == Rank.ACE and lo >= Rank.JACK) or (hi, lo) == (Rank.KING, Rank.QUEEN)


def _reg(hi: int, lo: int, pair: bool, suited: bool) -> bool:
    if pair:
        return True
    if suited:
        if hi == Rank.ACE:
            return True
        if Rank.JACK <= hi <= Rank.KING and lo >= Rank.NINE:
            return True
        return (hi, lo) in SUITED_CONNECTORS
    return (
        (hi == Rank.ACE and lo >= Rank.TEN)
        or (hi == Rank.KING and lo >= Rank.JACK)
        or (hi, lo) == (Rank.QUEEN, Rank.JACK)
    )


def _loose(hi: int, lo: int, pair: bool, suited: bool) -> bool:
    if pair:
        return True
    if suited:
        if hi >= Rank.KING:
            return True
        if _is_broadway(hi) and lo >= Rank.SEVEN:
            return True
        return (hi, lo) in SMALL_SUITED_CONNECTORS
    if hi == Rank.ACE:
        return True
    if _is_broadway(hi) and _is_broadway(lo):
        return True
    return hi == Rank.KING and lo >= Rank.NINE


def _maniac_core(hi: int, lo: int, pair: bool, suited: bool) -> bool:
    if pair or suited:
        return True
    if hi >= Rank.JACK:
        return True
    return hi - lo <= 2 and hi >= Rank.SIX


_RULES = {
    RangeStyle.TIGHT: _tight,
    RangeStyle.REG: _reg,
    RangeStyle.LOOSE: _loose,
    RangeStyle.MANIAC: _maniac_core,
}


def in_range(
    style: RangeStyle,
    card_a: Card,
    card_b: Card,
    rng: Optional[Callable[[], float]] = None,
) -> bool:
    """
    Check whether two hole cards belong to a style's range.

    Card order does not matter. Only the maniac style is random: a hand
    outside its core range is still accepted with probability
    MANIAC_FALLBACK_RATE, drawn from ``rng``. Pass the simulation's seeded
    source to keep that draw reproducible; without one the module-level
    ``random.random`` is used.

    Args:
        style: Range style
        card_a: First hole card
        card_b: Second hole card
        rng: Zero-argument callable returning floats in [0, 1)

    Returns:
        True if the hand is played by this style
    """
    style = RangeStyle(style)
    if style is RangeStyle.ANY:
        return True

    hi, lo = max(card_a.rank, card_b.rank), min(card_a.rank, card_b.rank)
    pair = hi == lo
    suited = card_a.suit == card_b.suit

    if _RULES[style](hi, lo, pair, suited):
        return True
    if style is RangeStyle.MANIAC:
        draw = rng() if rng is not None else random.random()
        return draw < MANIAC_FALLBACK_RATE
    return False


def range_frequency(style: RangeStyle, canonical: str) -> float:
    """
    Probability that a canonical hand ('AKs', 'QQ', '72o') passes one
    ``in_range`` check for ``style``.
    """
    hand = Hand.from_string(canonical)
    style = RangeStyle(style)
    if style is RangeStyle.ANY:
        return 1.0
    hi, lo = hand.card1.rank, hand.card2.rank
    if _RULES[style](hi, lo, hand.is_pair, hand.is_suited):
        return 1.0
    if style is RangeStyle.MANIAC:
        return MANIAC_FALLBACK_RATE
    return 0.0


def range_hands(style: RangeStyle) -> list[str]:
    """Canonical hands always played by ``style``."""
    return [h for h in get_all_hands() if range_frequency(style, h) == 1.0]
