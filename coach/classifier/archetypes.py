"""Seat style inference from HUD statistics and table position."""

from dataclasses import dataclass, replace
from typing import Optional, Sequence

from coach.game.equity import Seat
from coach.game.ranges import RangeStyle

HERO_SEAT = 1


@dataclass
class SeatStats:
    """
    HUD statistics for one seat.

    Percentages are stored as values 0-100.
    """
    vpip: float = 25.0        # Voluntarily Put $ In Pot %
    pfr: float = 18.0         # Preflop Raise %
    af: float = 2.5           # Aggression Factor (bets+raises) / calls
    three_bet: float = 5.0    # 3-bet %
    cbet: float = 55.0        # Continuation bet %

    def __repr__(self) -> str:
        return (
            f"SeatStats(VPIP={self.vpip:.1f}, PFR={self.pfr:.1f}, "
            f"AF={self.af:.1f}, 3bet={self.three_bet:.1f})"
        )


DEFAULT_STATS = SeatStats()

STYLE_DESCRIPTIONS = {
    RangeStyle.ANY: "Any - no read, every two cards",
    RangeStyle.TIGHT: "Tight - premium pairs and big broadways",
    RangeStyle.REG: "Reg - solid regular, standard opening range",
    RangeStyle.LOOSE: "Loose - wide range, any ace and connected cards",
    RangeStyle.MANIAC: "Maniac - plays almost anything",
}


def infer_style(stats: SeatStats) -> RangeStyle:
    """
    Map HUD stats to a range style.

    Rules are checked in order; the first match wins:
    - VPIP <= 20 and PFR <= 16: tight
    - VPIP <= 28 and PFR <= 22: loose if aggressive (AF > 3 or 3bet > 8), else reg
    - VPIP > 35, PFR > 25 and very aggressive: maniac
    - VPIP >= 40 or a VPIP-PFR gap >= 18: maniac if AF > 3, else loose
    - otherwise reg
    """
    gap = max(0.0, stats.vpip - stats.pfr)

    if stats.vpip <= 20 and stats.pfr <= 16:
        return RangeStyle.TIGHT
    if stats.vpip <= 28 and stats.pfr <= 22:
        if stats.af > 3 or stats.three_bet > 8:
            return RangeStyle.LOOSE
        return RangeStyle.REG
    if stats.vpip > 35 and stats.pfr > 25 and (stats.af > 3.5 or stats.three_bet > 10):
        return RangeStyle.MANIAC
    if stats.vpip >= 40 or gap >= 18:
        return RangeStyle.MANIAC if stats.af > 3 else RangeStyle.LOOSE
    return RangeStyle.REG


class StyleClassifier:
    """
    Assigns range styles to opponent seats.

    The hero seat is never reclassified.
    """

    def __init__(self, auto_classify: bool = True, hero_seat: int = HERO_SEAT):
        """
        Initialize classifier.

        Args:
            auto_classify: Infer styles from stats; when False seats keep theirs
            hero_seat: Seat id of the hero
        """
        self.auto_classify = auto_classify
        self.hero_seat = hero_seat

    def classify(self, stats: Optional[SeatStats]) -> RangeStyle:
        return infer_style(stats or DEFAULT_STATS)

    def classify_seats(
        self,
        seats: Sequence[Seat],
        stats: dict[int, SeatStats],
    ) -> list[Seat]:
        """
        Return copies of ``seats`` with styles inferred from ``stats``.

        Seats without stats use DEFAULT_STATS.
        """
        if not self.auto_classify:
            return list(seats)
        return [
            seat if seat.id == self.hero_seat
            else replace(seat, range=self.classify(stats.get(seat.id)))
            for seat in seats
        ]


def default_seats(seat_count: int = 6) -> list[Seat]:
    """A fresh table: hero inactive in seat 1, everyone else a reg."""
    return [
        Seat(id=i + 1, active=i != 0, range=RangeStyle.ANY if i == 0 else RangeStyle.REG)
        for i in range(seat_count)
    ]


def seat_order_from_dealer(seat_count: int, dealer: int) -> list[int]:
    """Seat ids starting at the button and going clockwise."""
    return [((dealer - 1 + i) % seat_count) + 1 for i in range(seat_count)]


# Styles by role, starting at the button
POSITION_STYLES_6MAX = [  # BTN, SB, BB, UTG, HJ, CO
    RangeStyle.LOOSE, RangeStyle.MANIAC, RangeStyle.REG,
    RangeStyle.TIGHT, RangeStyle.REG, RangeStyle.REG,
]
POSITION_STYLES_FULL_RING = [
    RangeStyle.LOOSE, RangeStyle.MANIAC, RangeStyle.REG,
    RangeStyle.TIGHT, RangeStyle.TIGHT, RangeStyle.REG,
    RangeStyle.REG, RangeStyle.REG, RangeStyle.REG,
]


def apply_position_preset(
    seats: Sequence[Seat],
    dealer: int,
    hero_seat: int = HERO_SEAT,
) -> list[Seat]:
    """
    Assign each opponent the default style for its position.

    Args:
        seats: Table seats (ids 1..n)
        dealer: Seat id holding the button
        hero_seat: Seat left untouched

    Returns:
        New seat list
    """
    order = seat_order_from_dealer(len(seats), dealer)
    styles = POSITION_STYLES_6MAX if len(seats) <= 6 else POSITION_STYLES_FULL_RING

    result = []
    for seat in seats:
        if seat.id == hero_seat:
            result.append(seat)
            continue
        idx = order.index(seat.id)
        style = styles[idx] if idx < len(styles) else RangeStyle.REG
        result.append(replace(seat, range=style))
    return result


# Typical population reads keyed by seat id
ONLINE_MICRO = {
    2: SeatStats(vpip=18, pfr=15, af=2.6, three_bet=5, cbet=60),
    3: SeatStats(vpip=25, pfr=20, af=2.8, three_bet=7, cbet=62),
    4: SeatStats(vpip=33, pfr=26, af=3.4, three_bet=10, cbet=68),
    5: SeatStats(vpip=46, pfr=34, af=4.0, three_bet=14, cbet=75),
    6: SeatStats(vpip=26, pfr=20, af=2.7, three_bet=7, cbet=60),
    7: SeatStats(vpip=28, pfr=22, af=2.9, three_bet=8, cbet=62),
    8: SeatStats(vpip=34, pfr=26, af=3.2, three_bet=9, cbet=66),
    9: SeatStats(vpip=20, pfr=16, af=2.4, three_bet=5, cbet=58),
}
ONLINE_MICRO_DEFAULT = SeatStats(vpip=25, pfr=18, af=2.5, three_bet=6, cbet=60)

LIVE_1_2 = {
    2: SeatStats(vpip=22, pfr=16, af=2.2, three_bet=4, cbet=54),
    3: SeatStats(vpip=28, pfr=20, af=2.3, three_bet=5, cbet=55),
    4: SeatStats(vpip=36, pfr=22, af=2.6, three_bet=6, cbet=57),
    5: SeatStats(vpip=50, pfr=30, af=3.2, three_bet=8, cbet=62),
    6: SeatStats(vpip=30, pfr=20, af=2.4, three_bet=5, cbet=55),
    7: SeatStats(vpip=34, pfr=22, af=2.5, three_bet=5, cbet=56),
    8: SeatStats(vpip=40, pfr=24, af=2.7, three_bet=6, cbet=58),
    9: SeatStats(vpip=24, pfr=16, af=2.1, three_bet=4, cbet=54),
}
LIVE_1_2_DEFAULT = SeatStats(vpip=28, pfr=19, af=2.3, three_bet=5, cbet=55)

STAT_PRESETS = {
    "online-micro": (ONLINE_MICRO, ONLINE_MICRO_DEFAULT),
    "live-1-2": (LIVE_1_2, LIVE_1_2_DEFAULT),
}


def preset_stats(name: str, seat_count: int, hero_seat: int = HERO_SEAT) -> dict[int, SeatStats]:
    """Stats for every non-hero seat from a named preset."""
    if name not in STAT_PRESETS:
        raise ValueError(f"Unknown stats preset: {name!r}")
    by_seat, fallback = STAT_PRESETS[name]
    return {
        seat_id: replace(by_seat.get(seat_id, fallback))
        for seat_id in range(1, seat_count + 1)
        if seat_id != hero_seat
    }
