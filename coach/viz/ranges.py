"""Range grids for the terminal (rich) and as heat maps (matplotlib)."""

from dataclasses import dataclass
from typing import Optional

import numpy as np

try:
    import matplotlib.pyplot as plt
    HAS_MATPLOTLIB = True
except ImportError:
    HAS_MATPLOTLIB = False

from rich.console import Console
from rich.style import Style
from rich.table import Table
from rich.text import Text

from coach.game.cards import RANKS_DESC, TOTAL_COMBOS, Hand
from coach.game.ranges import RangeStyle, range_frequency

RANKS = RANKS_DESC


def _grid_hand(row: int, col: int) -> str:
    """Canonical hand at a grid cell: pairs on the diagonal, suited above."""
    hi, lo = RANKS[min(row, col)], RANKS[max(row, col)]
    if row == col:
        return hi + lo
    return hi + lo + ("s" if row < col else "o")


HAND_MATRIX = [[_grid_hand(i, j) for j in range(13)] for i in range(13)]

# (minimum frequency, cell style), checked top down
CELL_STYLES = [
    (0.8, Style(bgcolor="green", color="white")),
    (0.2, Style(bgcolor="orange3", color="black")),
    (0.0, Style(bgcolor="red", color="white")),
]
EMPTY_CELL = Style(bgcolor="grey30", color="grey50")


def _cell_style(frequency: float) -> Style:
    for threshold, style in CELL_STYLES:
        if frequency > threshold:
            return style
    return EMPTY_CELL


@dataclass
class RangeData:
    """One grid cell."""
    hand: str
    frequency: float = 0.0  # Chance the hand is played, 0-1


class RangeDisplay:
    """
    A 13x13 starting-hand grid for one range style.

    Cells hold the probability that a style plays the hand: 1.0 inside
    the range, 0.0 outside, and the maniac fallback rate for trash hands
    a maniac sometimes plays.
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()
        self.range_data: dict[str, RangeData] = {
            hand: RangeData(hand) for row in HAND_MATRIX for hand in row
        }

    def set_frequency(self, hand: str, frequency: float) -> None:
        """Set one cell; names outside the grid are ignored."""
        if hand in self.range_data:
            self.range_data[hand].frequency = frequency

    def load_style(self, style: RangeStyle) -> None:
        for hand in self.range_data:
            self.set_frequency(hand, range_frequency(style, hand))

    def frequency_matrix(self) -> np.ndarray:
        """Cell frequencies laid out like HAND_MATRIX."""
        return np.array([
            [self.range_data[hand].frequency for hand in row]
            for row in HAND_MATRIX
        ])

    def coverage(self) -> float:
        """Fraction of all 1326 two-card deals the grid plays."""
        played = sum(
            Hand.from_string(hand).combos * data.frequency
            for hand, data in self.range_data.items()
        )
        return played / TOTAL_COMBOS

    def display_terminal(self, title: str = "Range") -> None:
        """Print the grid as a colored rich table."""
        table = Table(title=title, show_header=True, header_style="bold")
        table.add_column("", style="bold")
        for rank in RANKS:
            table.add_column(rank, justify="center")

        for rank, row in zip(RANKS, HAND_MATRIX):
            cells = [
                Text(hand.center(3), style=_cell_style(self.range_data[hand].frequency))
                for hand in row
            ]
            table.add_row(rank, *cells)

        self.console.print(table)
        self.console.print(f"[dim]Coverage: {self.coverage():.1%} of starting hands[/]")

    def plot(
        self,
        title: str = "Range",
        figsize: tuple[int, int] = (10, 10),
        cmap: str = "RdYlGn",
        save_path: Optional[str] = None,
    ) -> bool:
        """
        Draw the grid as a heat map.

        Args:
            title: Plot title
            figsize: Figure size
            cmap: Colormap name
            save_path: Write the figure here instead of showing it

        Returns:
            False if matplotlib is not installed
        """
        if not HAS_MATPLOTLIB:
            self.console.print("[red]matplotlib not available. Use terminal display.[/]")
            return False

        matrix = self.frequency_matrix()
        fig, ax = plt.subplots(figsize=figsize)
        im = ax.imshow(matrix, cmap=cmap, vmin=0, vmax=1)

        ticks = np.arange(len(RANKS))
        ax.set_xticks(ticks)
        ax.set_yticks(ticks)
        ax.set_xticklabels(list(RANKS))
        ax.set_yticklabels(list(RANKS))

        for (i, j), freq in np.ndenumerate(matrix):
            ax.text(
                j, i, HAND_MATRIX[i][j],
                ha="center", va="center", fontsize=8,
                color="black" if freq >= 0.5 else "white",
            )

        ax.set_title(title)
        fig.colorbar(im, ax=ax, label="Frequency")

        if save_path:
            fig.savefig(save_path, dpi=150, bbox_inches="tight")
            plt.close(fig)
        else:
            plt.show()
        return True


def display_style(style: RangeStyle, console: Optional[Console] = None) -> RangeDisplay:
    """Print ``style``'s grid and return the populated display."""
    display = RangeDisplay(console)
    display.load_style(style)
    display.display_terminal(title=f"{RangeStyle(style).value.title()} range")
    return display
