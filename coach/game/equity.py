"""
Monte Carlo equity against range-constrained opponents.

Each trial deals every active opponent a hand from its style's range,
completes the board, and compares best-of-7 hands. Trials run in batches;
between batches the engine reports progress and honours cancellation, so a
host event loop or UI thread stays responsive and a cancelled run keeps
its partial counts.
"""

import logging
import threading
from dataclasses import dataclass, field
from typing import Callable, Iterator, Optional, Sequence

import numpy as np

from .cards import Card, full_deck, remove_used
from .evaluator import best_of_7
from .ranges import RangeStyle, in_range, parse_style
from .rng import RandomSource, sample_random

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


@dataclass
class EngineConfig:
    """Configuration for the equity engine."""
    batch_size: int = 300          # Trials between progress/cancel checks
    max_range_tries: int = 200     # Rejection-sampling attempts per opponent hand
    default_trials: int = 5000


@dataclass(frozen=True)
class Seat:
    """An opponent seat as seen by the engine (read only)."""
    id: int
    active: bool = True
    range: RangeStyle = RangeStyle.REG


@dataclass
class EquityRequest:
    """
    Everything one simulation needs.

    Hero has 0-2 cards (fewer than 2 means "not ready yet"); board has 0-5
    cards dealt in flop, turn, river order.
    """
    hero: list[Card] = field(default_factory=list)
    board: list[Card] = field(default_factory=list)
    opponents: list[Seat] = field(default_factory=list)
    trials: int = 5000
    seed: Optional[int] = None

    @classmethod
    def from_codes(
        cls,
        hero: Sequence[str],
        board: Sequence[str] = (),
        styles: Sequence[str] = (),
        trials: int = 5000,
        seed: Optional[int] = None,
    ) -> "EquityRequest":
        """Build a request from card codes and one range style per opponent."""
        return cls(
            hero=[Card.from_string(c) for c in hero],
            board=[Card.from_string(c) for c in board],
            opponents=[
                Seat(id=i + 2, range=parse_style(style))
                for i, style in enumerate(styles)
            ],
            trials=trials,
            seed=seed,
        )

    @property
    def active_opponents(self) -> list[Seat]:
        return [s for s in self.opponents if s.active]

    @property
    def ready(self) -> bool:
        return len(self.hero) == 2

    def validate(self) -> None:
        """Raise ValueError if the known cards can't describe a real deal."""
        if len(self.hero) > 2:
            raise ValueError(f"Hero holds at most 2 cards, got {len(self.hero)}")
        if len(self.board) > 5:
            raise ValueError(f"Board has at most 5 cards, got {len(self.board)}")

        known = list(self.hero) + list(self.board)
        if len(set(known)) != len(known):
            raise ValueError("Duplicate cards detected")

    def check_capacity(self) -> None:
        """Raise ValueError if the deck can't hold every opponent's hand."""
        known = len(self.hero) + len(self.board)
        needed = 2 * len(self.active_opponents) + (5 - len(self.board))
        if known + needed > 52:
            raise ValueError(
                f"Not enough cards for {len(self.active_opponents)} opponents"
            )


@dataclass
class SimResult:
    """
    Win/tie/loss accumulator for one run (or one batch of it).

    ``ties`` is the fractional pot share won in split pots;
    ``tied_trials`` counts the trials that ended in a split; ``fallbacks``
    the opponent hands dealt without their range after rejection sampling
    gave up.
    """
    wins: int = 0
    ties: float = 0.0
    losses: int = 0
    tied_trials: int = 0
    fallbacks: int = 0

    @property
    def trials(self) -> int:
        return self.wins + self.tied_trials + self.losses

    @property
    def equity(self) -> float:
        total = self.wins + self.ties + self.losses
        if total == 0:
            return 0.0
        return (self.wins + self.ties) / total

    def record(self, tying_opponents: int, lost: bool) -> None:
        """Tally one trial."""
        if lost:
            self.losses += 1
        elif tying_opponents > 0:
            self.ties += 1 / (tying_opponents + 1)
            self.tied_trials += 1
        else:
            self.wins += 1

    def merge(self, other: "SimResult") -> None:
        """Add another accumulator's counts into this one."""
        self.wins += other.wins
        self.ties += other.ties
        self.losses += other.losses
        self.tied_trials += other.tied_trials
        self.fallbacks += other.fallbacks


@dataclass
class EquityResult:
    """Snapshot of a simulation, final or in progress."""
    wins: int = 0
    ties: float = 0.0
    losses: int = 0
    tied_trials: int = 0
    fallbacks: int = 0
    equity: float = 0.0
    trials: int = 0        # Trials completed
    total: int = 0         # Trials requested
    done: bool = False
    cancelled: bool = False
    ready: bool = True

    @classmethod
    def from_sim(cls, sim: SimResult, total: int, **flags) -> "EquityResult":
        return cls(
            wins=sim.wins,
            ties=sim.ties,
            losses=sim.losses,
            tied_trials=sim.tied_trials,
            fallbacks=sim.fallbacks,
            equity=sim.equity,
            trials=sim.trials,
            total=total,
            **flags,
        )

    @property
    def progress(self) -> float:
        """Fraction of requested trials completed (0-1)."""
        if self.total <= 0:
            return 1.0 if self.done else 0.0
        return self.trials / self.total

    @property
    def std_error(self) -> float:
        """Binomial standard error of the equity estimate."""
        if self.trials <= 0:
            return 0.0
        p = np.clip(self.equity, 0.0, 1.0)
        return float(np.sqrt(p * (1 - p) / self.trials))


class CancelToken:
    """Cooperative cancellation flag, safe to set from another thread."""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    def reset(self) -> None:
        self._event.clear()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


class EquityEngine:
    """
    Monte Carlo equity simulator.

    Deals opponent hands from style ranges with bounded rejection
    sampling, completes the board, and tallies hero's win/tie/loss
    outcomes. Each run keeps its counts in its own accumulator, so one
    engine can serve several runs at once.
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        """
        Initialize engine.

        Args:
            config: Engine configuration
        """
        self.config = config or EngineConfig()

    def run(
        self,
        request: EquityRequest,
        progress: Optional[ProgressCallback] = None,
        cancel: Optional[CancelToken] = None,
    ) -> EquityResult:
        """
        Run a simulation to completion (or cancellation).

        Args:
            request: Cards, opponents and trial count
            progress: Optional callback(completed, total) after each batch
            cancel: Optional token checked between batches

        Returns:
            Final result; partial counts if cancelled
        """
        result = EquityResult(ready=request.ready)
        for result in self.iter_batches(request, cancel):
            if progress is not None and result.ready and not result.cancelled:
                progress(result.trials, result.total)
        return result

    def iter_batches(
        self,
        request: EquityRequest,
        cancel: Optional[CancelToken] = None,
    ) -> Iterator[EquityResult]:
        """
        Run a simulation one batch at a time.

        Yields a snapshot after every batch; the last snapshot is the
        final result. Cancellation is checked before each batch, so a
        cancelled run ends with the counts of the last yielded snapshot.
        """
        request.validate()
        total = max(request.trials, 0)

        if not request.ready:
            yield EquityResult(total=total, ready=False)
            return

        opponents = request.active_opponents
        if not opponents:
            yield EquityResult(equity=1.0, total=total, done=True)
            return
        if total > 0:
            request.check_capacity()

        rng = RandomSource(request.seed)
        pool = remove_used(full_deck(), request.hero + request.board)
        sim = SimResult()

        logger.debug(
            "Simulating %d trials: hero=%s board=%s opponents=%s seed=%d",
            total,
            "".join(map(str, request.hero)),
            "".join(map(str, request.board)),
            ",".join(str(s.range) for s in opponents),
            rng.seed,
        )

        while sim.trials < total:
            if cancel is not None and cancel.cancelled:
                logger.info("Simulation cancelled after %d/%d trials", sim.trials, total)
                yield EquityResult.from_sim(sim, total, cancelled=True)
                return

            todo = min(self.config.batch_size, total - sim.trials)
            sim.merge(self._run_batch(request, opponents, pool, rng, todo))
            if sim.trials < total:
                yield EquityResult.from_sim(sim, total)

        if sim.fallbacks:
            logger.debug("Range sampling fell back to random hands %d times", sim.fallbacks)
        logger.info("Simulation finished: %d trials, equity %.3f", sim.trials, sim.equity)
        yield EquityResult.from_sim(sim, total, done=True)

    def _run_batch(
        self,
        request: EquityRequest,
        opponents: list[Seat],
        pool: list[Card],
        rng: RandomSource,
        count: int,
    ) -> SimResult:
        """Play ``count`` independent trials into a fresh accumulator."""
        batch = SimResult()
        need_board = 5 - len(request.board)

        for _ in range(count):
            remaining = pool
            opp_hands = []
            for seat in opponents:
                a, b = self.deal_from_range(remaining, seat.range, rng, batch)
                remaining = [c for c in remaining if c != a and c != b]
                opp_hands.append((a, b))

            runout = sample_random(remaining, need_board, rng) if need_board > 0 else []
            board = request.board + runout
            hero_rank = best_of_7(request.hero + board)

            lost = False
            tying = 0
            for a, b in opp_hands:
                opp_rank = best_of_7([a, b] + board)
                if opp_rank > hero_rank:
                    lost = True
                    break
                if opp_rank == hero_rank:
                    tying += 1
            batch.record(tying, lost)

        return batch

    def deal_from_range(
        self,
        pool: Sequence[Card],
        style: RangeStyle,
        rng: RandomSource,
        tally: Optional[SimResult] = None,
    ) -> tuple[Card, Card]:
        """
        Deal two cards from ``pool`` that ``style`` would play.

        Rejection-samples up to ``max_range_tries`` pairs, then settles for
        an unconditional random pair rather than failing the trial; the
        fallback is counted on ``tally`` when one is given.
        """
        for _ in range(self.config.max_range_tries):
            a, b = self._random_pair(pool, rng)
            if in_range(style, a, b, rng) or in_range(style, b, a, rng):
                return a, b

        if tally is not None:
            tally.fallbacks += 1
        return self._random_pair(pool, rng)

    @staticmethod
    def _random_pair(pool: Sequence[Card], rng: RandomSource) -> tuple[Card, Card]:
        i = rng.randint(len(pool))
        a = pool[i]
        rest = list(pool[:i]) + list(pool[i + 1:])
        b = rest[rng.randint(len(rest))]
        return a, b


def calculate_equity(
    hero: Sequence[str],
    board: Sequence[str] = (),
    styles: Sequence[str] = ("any",),
    num_simulations: int = 5000,
    seed: Optional[int] = None,
) -> float:
    """
    Hero equity against opponents drawn from the given styles.

    Args:
        hero: Hero's two card codes
        board: Known board card codes
        styles: One range style per opponent
        num_simulations: Number of trials
        seed: Optional seed for a reproducible estimate

    Returns:
        Equity (0-1)
    """
    request = EquityRequest.from_codes(hero, board, styles, num_simulations, seed)
    return EquityEngine().run(request).equity
