from __future__ import annotations

from typing import Optional

import numpy as np

from .pieces import Piece


class Board:
    """Fixed-size grid of locked cells.

    The grid uses 0 for empty cells and ``k + 1`` for a cell locked by a
    piece of type ``k``. Row 0 is the top of the well.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def reset(self) -> None:
        self.grid.fill(0)

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def can_place(self, piece: Piece, dx: int = 0, dy: int = 0) -> bool:
        for x, y in piece.cells_at(dx, dy):
            if not self.is_inside(x, y):
                return False
            if self.grid[y, x] != 0:
                return False
        return True

    def lock(self, piece: Piece) -> None:
        """Write the piece's cells into the grid (no collision check)."""
        for x, y in piece.cells_at():
            if self.is_inside(x, y):
                self.grid[y, x] = piece.tag

    def is_row_full(self, y: int) -> bool:
        return bool(np.all(self.grid[y] != 0))

    def _collapse_row(self, y: int) -> None:
        self.grid[y].fill(0)
        if y > 0:
            self.grid[1 : y + 1] = self.grid[0:y].copy()
        self.grid[0].fill(0)

    def clear_full_lines(self) -> int:
        """Remove every full row, bottom to top, and return how many went.

        After a collapse the same index is checked again because the row
        above has dropped into it.
        """
        cleared = 0
        y = self.height - 1
        while y >= 0:
            if self.is_row_full(y):
                self._collapse_row(y)
                cleared += 1
            else:
                y -= 1
        return cleared

    def render(self, piece: Optional[Piece] = None) -> np.ndarray:
        """Copy of the grid with ``piece`` drawn on top of it."""
        state = self.grid.copy()
        if piece is not None:
            for x, y in piece.cells_at():
                if self.is_inside(x, y):
                    state[y, x] = piece.tag
        return state
