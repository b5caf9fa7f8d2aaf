#!/usr/bin/env python3
"""Estimate hero equity against a table and recommend an action."""

import argparse
import logging
import sys
import threading
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.progress import BarColumn, Progress, TextColumn, TimeRemainingColumn
from rich.table import Table

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from coach.game.cards import parse_cards
from coach.game.equity import (
    CancelToken, EngineConfig, EquityEngine, EquityRequest, EquityResult, Seat
)
from coach.game.ranges import parse_style
from coach.classifier.archetypes import (
    STYLE_DESCRIPTIONS, StyleClassifier, apply_position_preset, default_seats, preset_stats
)
from coach.analysis.decision import BettingState, recommend, street_name

KIND_COLORS = {"good": "green", "bad": "red", "neutral": "white", "info": "blue"}


def main():
    parser = argparse.ArgumentParser(
        description="Monte Carlo equity vs. range-based opponents, with a pot-odds recommendation"
    )
    parser.add_argument(
        "-H", "--hero",
        default="",
        help="Hero hole cards (e.g., 'AsKd'); omit to only show the table",
    )
    parser.add_argument(
        "-b", "--board",
        default="",
        help="Board cards (e.g., 'Qs7h2c' or 'Qs 7h 2c')",
    )
    parser.add_argument(
        "-o", "--opponents",
        help="Comma-separated range styles, one per opponent (e.g., 'tight,reg,maniac')",
    )
    parser.add_argument(
        "--seats",
        type=int,
        default=6,
        help="Table size when styles come from a preset (default: 6)",
    )
    parser.add_argument(
        "--stats",
        choices=["online-micro", "live-1-2"],
        help="Infer opponent styles from a population stats preset",
    )
    parser.add_argument(
        "--dealer",
        type=int,
        help="Button seat; assigns opponent styles by position",
    )
    parser.add_argument(
        "-n", "--trials",
        type=int,
        default=EngineConfig.default_trials,
        help=f"Number of Monte Carlo trials (default: {EngineConfig.default_trials})",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for a reproducible run",
    )
    parser.add_argument(
        "-p", "--pot",
        type=float,
        default=10.0,
        help="Pot before the bet to call, in chips or BBs (default: 10)",
    )
    parser.add_argument(
        "-c", "--to-call",
        type=float,
        default=0.0,
        help="Amount hero must call (default: 0, checked to)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output",
    )

    args = parser.parse_args()
    console = Console()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )

    try:
        hero = parse_cards(args.hero)
        board = parse_cards(args.board)
        opponents = _build_opponents(args)
        request = EquityRequest(
            hero=hero,
            board=board,
            opponents=opponents,
            trials=args.trials,
            seed=args.seed,
        )
        request.validate()
        if request.ready:
            request.check_capacity()
    except ValueError as e:
        console.print(f"[red]{e}[/]")
        return 1

    console.print(f"[bold]Hero:[/] {' '.join(map(str, hero)) or '-'}")
    console.print(f"[bold]Board:[/] {' '.join(map(str, board)) or '-'} ({street_name(len(board))})")
    console.print()
    _display_table(console, opponents)

    if not request.ready:
        console.print("[yellow]Pick both hole cards to run a simulation.[/]")
        return 0

    result = _run_with_progress(console, request)

    console.print()
    _display_result(console, result)

    betting = BettingState(pot=args.pot)
    if args.to_call > 0:
        betting.place_bet(2, args.to_call)

    rec = recommend(
        result.equity,
        betting.to_call,
        betting.current_pot,
        opponents=len(request.active_opponents),
        hero_ready=request.ready,
    )
    console.print()
    console.print(f"[bold]Required equity:[/] {betting.required_equity:.1%}")
    console.print(Panel(
        rec.detail,
        title=f"[bold]{rec.label}[/]",
        border_style=KIND_COLORS.get(rec.kind, "white"),
    ))

    return 0


def _build_opponents(args) -> list[Seat]:
    """Opponent seats from explicit styles or a stats/position preset."""
    if args.opponents:
        styles = [parse_style(s) for s in args.opponents.split(",") if s.strip()]
        return [Seat(id=i + 2, range=style) for i, style in enumerate(styles)]

    seats = default_seats(args.seats)
    if args.dealer is not None:
        if not 1 <= args.dealer <= args.seats:
            raise ValueError(f"Dealer seat must be between 1 and {args.seats}")
        seats = apply_position_preset(seats, args.dealer)
    if args.stats:
        seats = StyleClassifier().classify_seats(seats, preset_stats(args.stats, args.seats))
    return [s for s in seats if s.id != 1]


def _run_with_progress(console: Console, request: EquityRequest) -> EquityResult:
    """Run the engine in a worker thread; Ctrl-C cancels between batches."""
    engine = EquityEngine()
    cancel = CancelToken()
    outcome: dict[str, EquityResult] = {}

    with Progress(
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TextColumn("{task.completed}/{task.total}"),
        TimeRemainingColumn(),
        console=console,
    ) as progress:
        task = progress.add_task("Simulating...", total=max(request.trials, 1))

        def on_progress(done: int, total: int) -> None:
            progress.update(task, completed=done)

        def work() -> None:
            outcome["result"] = engine.run(request, progress=on_progress, cancel=cancel)

        worker = threading.Thread(target=work, daemon=True)
        worker.start()
        try:
            while worker.is_alive():
                worker.join(timeout=0.1)
        except KeyboardInterrupt:
            cancel.cancel()
            progress.update(task, description="Cancelling...")
            worker.join()

    result = outcome["result"]
    if result.cancelled:
        console.print(f"[yellow]Cancelled after {result.trials} trials; showing partial result.[/]")
    return result


def _display_table(console: Console, opponents: list[Seat]) -> None:
    """Display opponent seats and their ranges."""
    table = Table(title="Opponents")
    table.add_column("Seat", justify="right")
    table.add_column("Active")
    table.add_column("Range", style="cyan")

    for seat in opponents:
        table.add_row(
            str(seat.id),
            "yes" if seat.active else "[dim]no[/]",
            STYLE_DESCRIPTIONS[seat.range],
        )

    console.print(table)


def _display_result(console: Console, result: EquityResult) -> None:
    """Display simulation counts and equity."""
    table = Table(title="Equity", show_header=False)
    table.add_column("Stat", style="cyan")
    table.add_column("Value", justify="right")

    table.add_row("Trials", f"{result.trials}/{result.total}")
    table.add_row("Wins", str(result.wins))
    table.add_row("Ties (pot share)", f"{result.ties:.2f}")
    table.add_row("Losses", str(result.losses))
    table.add_row("Equity", f"[bold]{result.equity:.1%}[/] ± {result.std_error:.1%}")

    console.print(table)


if __name__ == "__main__":
    sys.exit(main())
