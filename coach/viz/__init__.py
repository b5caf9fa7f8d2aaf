"""Visualization module."""

from .ranges import RangeDisplay, display_style

__all__ = [
    "RangeDisplay",
    "display_style",
]
