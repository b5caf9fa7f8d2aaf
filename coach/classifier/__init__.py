"""Seat style classification module."""

from .archetypes import (
    DEFAULT_STATS,
    SeatStats,
    StyleClassifier,
    infer_style,
    apply_position_preset,
    default_seats,
    preset_stats,
    seat_order_from_dealer,
)

__all__ = [
    "DEFAULT_STATS",
    "SeatStats",
    "StyleClassifier",
    "infer_style",
    "apply_position_preset",
    "default_seats",
    "preset_stats",
    "seat_order_from_dealer",
]
