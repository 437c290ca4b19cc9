"""Serpentine square layout and drawing geometry.

Row 0 is the top of the board and holds squares 91–100. Even rows run
right-to-left in square numbering, odd rows left-to-right, so square
N + 1 always shares an edge with square N.
"""

from __future__ import annotations

BOARD_SIDE = 10
SQUARE_COUNT = BOARD_SIDE * BOARD_SIDE
DEFAULT_CELL_SIZE = 48


def square_to_cell(square: int) -> tuple[int, int]:
    """Grid ``(row, col)`` of *square* (1–100)."""
    if not 1 <= square <= SQUARE_COUNT:
        raise ValueError(f"square {square} is off the board")
    row = (SQUARE_COUNT - square) // BOARD_SIDE
    offset = (square - 1) % BOARD_SIDE
    col = BOARD_SIDE - 1 - offset if row % 2 == 0 else offset
    return row, col


def cell_to_square(row: int, col: int) -> int:
    """Inverse of :func:`square_to_cell`."""
    if not (0 <= row < BOARD_SIDE and 0 <= col < BOARD_SIDE):
        raise ValueError(f"cell ({row}, {col}) is off the board")
    start = SQUARE_COUNT - row * BOARD_SIDE
    if row % 2 == 0:
        return start - col
    return start - (BOARD_SIDE - 1) + col


def row_squares(row: int) -> list[int]:
    """Square numbers of *row* in left-to-right display order."""
    return [cell_to_square(row, col) for col in range(BOARD_SIDE)]


def square_center(square: int, cell_size: float = DEFAULT_CELL_SIZE) -> tuple[float, float]:
    """Pixel center ``(x, y)`` of *square*; y grows downward."""
    row, col = square_to_cell(square)
    return col * cell_size + cell_size / 2, row * cell_size + cell_size / 2


def snake_control_point(
    head: int, tail: int, cell_size: float = DEFAULT_CELL_SIZE,
) -> tuple[float, float]:
    """Quadratic-curve control point for a snake from *head* to *tail*.

    The straight-line midpoint pushed sideways by a quarter of the
    perpendicular vector.
    """
    hx, hy = square_center(head, cell_size)
    tx, ty = square_center(tail, cell_size)
    mid_x = (hx + tx) / 2
    mid_y = (hy + ty) / 2
    return mid_x + (hy - ty) / 4, mid_y - (hx - tx) / 4
