"""Pytest configuration and fixtures."""

import pytest

from coach.game.cards import parse_cards
from coach.game.equity import EngineConfig, EquityEngine


@pytest.fixture
def board_flop():
    return parse_cards("Ks 7d 2c")


@pytest.fixture
def board_river():
    return parse_cards("Ks 7d 2c 9h 3s")


@pytest.fixture
def engine():
    return EquityEngine()


@pytest.fixture
def small_batch_engine():
    """Engine with small batches so progress/cancel points are frequent."""
    return EquityEngine(EngineConfig(batch_size=100))
