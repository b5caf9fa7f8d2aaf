#!/usr/bin/env python3
"""Show the starting-hand grid for a range style."""

import argparse
import sys
from pathlib import Path

from rich.console import Console

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from coach.game.ranges import RangeStyle, parse_style
from coach.viz import display_style


def main():
    parser = argparse.ArgumentParser(description="Display a range style as a 13x13 grid")
    parser.add_argument(
        "styles",
        nargs="*",
        default=[s.value for s in RangeStyle],
        help="Styles to show (default: all)",
    )
    parser.add_argument(
        "--plot",
        help="Also save a matplotlib heatmap of the first style to this path",
    )

    args = parser.parse_args()
    console = Console()

    try:
        styles = [parse_style(s) for s in args.styles]
    except ValueError as e:
        console.print(f"[red]{e}[/]")
        return 1

    displays = [display_style(style, console) for style in styles]

    if args.plot and displays:
        if displays[0].plot(title=f"{styles[0].value.title()} range", save_path=args.plot):
            console.print(f"\n[bold]Heatmap saved to:[/] {args.plot}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
