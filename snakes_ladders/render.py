"""Draw the board: plain text for the terminal, PNG via matplotlib."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import matplotlib
matplotlib.use("Agg")  # non-interactive backend

import matplotlib.pyplot as plt
from matplotlib.patches import Circle, PathPatch, Rectangle
from matplotlib.path import Path as CurvePath

from snakes_ladders.board import FINAL_SQUARE
from snakes_ladders.game import BoardSnapshot
from snakes_ladders.topology import (
    BOARD_SIDE,
    DEFAULT_CELL_SIZE,
    row_squares,
    snake_control_point,
    square_center,
    square_to_cell,
)

PLAYER_COLORS = {1: "#3B82F6", 2: "#EF4444"}
LADDER_COLOR = "green"
SNAKE_COLOR = "red"


def _on_board(position: int) -> int | None:
    """Square to draw a pawn on; None while it hasn't entered yet."""
    if position <= 0:
        return None
    return min(position, FINAL_SQUARE)


# ── Text ─────────────────────────────────────────────────────────────

def format_board(snapshot: BoardSnapshot) -> str:
    """Render the board as a text grid with pawn markers."""
    p1 = _on_board(snapshot.player1_position)
    p2 = _on_board(snapshot.player2_position)
    lines = []
    for row in range(BOARD_SIDE):
        cells = []
        for square in row_squares(row):
            if square == p1 and square == p2:
                mark = "*"
            elif square == p1:
                mark = "1"
            elif square == p2:
                mark = "2"
            elif square in snapshot.ladders:
                mark = "L"
            elif square in snapshot.snakes:
                mark = "S"
            else:
                mark = " "
            cells.append(f"{square:>3}{mark}")
        lines.append(" ".join(cells))
    lines.append("")
    lines.append(
        f"Player 1: {snapshot.player1_position}   "
        f"Player 2: {snapshot.player2_position}"
    )
    return "\n".join(lines)


# ── PNG ──────────────────────────────────────────────────────────────

def render_board(
    snapshot: BoardSnapshot,
    output_path: str | Path = "board.png",
    cell_size: float = DEFAULT_CELL_SIZE,
    title: str = "Snakes & Ladders",
) -> str:
    """Draw the grid, connectors and pawns, and save as PNG.

    Returns the path to the saved PNG.
    """
    side = BOARD_SIDE * cell_size
    fig, ax = plt.subplots(figsize=(7, 7))

    for square in range(1, BOARD_SIDE * BOARD_SIDE + 1):
        row, col = square_to_cell(square)
        shade = "#E5E7EB" if (row + col) % 2 == 0 else "white"
        ax.add_patch(Rectangle(
            (col * cell_size, row * cell_size), cell_size, cell_size,
            facecolor=shade, edgecolor="#D1D5DB",
        ))
        x, y = square_center(square, cell_size)
        ax.text(x, y, str(square), ha="center", va="center", fontsize=8, fontweight="bold")

    # Ladders are straight lines
    for start, end in snapshot.ladders.items():
        x1, y1 = square_center(start, cell_size)
        x2, y2 = square_center(end, cell_size)
        ax.plot([x1, x2], [y1, y2], color=LADDER_COLOR, linewidth=4, alpha=0.8)

    # Snakes are quadratic curves bent to one side
    for head, tail in snapshot.snakes.items():
        start = square_center(head, cell_size)
        control = snake_control_point(head, tail, cell_size)
        end = square_center(tail, cell_size)
        curve = CurvePath(
            [start, control, end],
            [CurvePath.MOVETO, CurvePath.CURVE3, CurvePath.CURVE3],
        )
        ax.add_patch(PathPatch(curve, facecolor="none", edgecolor=SNAKE_COLOR, linewidth=4, alpha=0.8))

    radius = cell_size / 3
    for player, position, dx in (
        (1, snapshot.player1_position, -radius / 3),
        (2, snapshot.player2_position, radius / 3),
    ):
        square = _on_board(position)
        if square is None:
            continue
        x, y = square_center(square, cell_size)
        ax.add_patch(Circle(
            (x + dx, y), radius, facecolor=PLAYER_COLORS[player],
            edgecolor="white", linewidth=1.5, zorder=5,
        ))

    ax.set_xlim(0, side)
    ax.set_ylim(side, 0)  # pixel coordinates: y grows downward
    ax.set_aspect("equal")
    ax.axis("off")
    caption = snapshot.message or f"Player {snapshot.current_player} to roll"
    ax.set_title(f"{title}\n{caption}", fontsize=12, fontweight="bold")

    plt.tight_layout()
    fig.savefig(output_path, dpi=100)
    plt.close(fig)
    return str(output_path)


@dataclass
class PngBoardObserver:
    """Observer that keeps a PNG of the board up to date."""

    output_path: str | Path
    cell_size: float = DEFAULT_CELL_SIZE

    def on_state(self, snapshot: BoardSnapshot) -> None:
        render_board(snapshot, self.output_path, cell_size=self.cell_size)
