"""Seedable pseudo-random source for reproducible sampling."""

import time
from typing import Callable, Iterator, Optional, Sequence, TypeVar

T = TypeVar("T")

MASK32 = 0xFFFFFFFF
DEFAULT_SEED = 123456789


def xorshift(seed: int) -> Iterator[float]:
    """
    Infinite xorshift32 stream of floats in [0, 1).

    The same seed always yields the same sequence. A seed that reduces
    to zero (which would lock xorshift at zero) is replaced by a fixed
    default.
    """
    x = (seed & MASK32) or DEFAULT_SEED
    while True:
        x ^= (x << 13) & MASK32
        x ^= x >> 17
        x ^= (x << 5) & MASK32
        yield x / 4294967296


class RandomSource:
    """
    Callable random source: ``rng()`` returns the next float in [0, 1).

    Without an explicit seed the wall clock (milliseconds) is used, so
    only seeded sources are reproducible.
    """

    def __init__(self, seed: Optional[int] = None):
        self.seed = 0
        self._stream: Iterator[float] = iter(())
        self.reseed(seed)

    def reseed(self, seed: Optional[int] = None) -> None:
        """Restart the sequence from ``seed`` (or the current time)."""
        if seed is None:
            seed = int(time.time() * 1000)
        self.seed = seed
        self._stream = xorshift(seed)

    def __call__(self) -> float:
        return next(self._stream)

    def randint(self, n: int) -> int:
        """Uniform index in [0, n)."""
        return int(self() * n)


def sample_random(pool: Sequence[T], n: int, rng: Callable[[], float]) -> list[T]:
    """
    Draw ``n`` distinct elements of ``pool`` without replacement.

    Picks a uniform index into a shrinking copy of the pool each time;
    ``pool`` itself is left untouched.
    """
    remaining = list(pool)
    picked = []
    for _ in range(n):
        j = int(rng() * len(remaining))
        picked.append(remaining.pop(j))
    return picked
