from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Tuple

import numpy as np


BLOCK = 4

Coordinate = Tuple[int, int]
Shape = np.ndarray


class PieceType(IntEnum):
    I = 0  # bar
    O = 1  # square, never rotates
    T = 2
    J = 3
    L = 4
    S = 5
    Z = 6

    @property
    def tag(self) -> int:
        """Board cell value written when a piece of this type locks."""
        return int(self) + 1

    @property
    def rotates(self) -> bool:
        return self is not PieceType.O


def _template(*rows: Tuple[int, int, int, int]) -> Shape:
    shape = np.zeros((BLOCK, BLOCK), dtype=np.int8)
    for i, row in enumerate(rows):
        shape[i] = row
    return shape


TEMPLATES = {
    PieceType.I: _template((0, 0, 0, 0), (1, 1, 1, 1)),
    PieceType.O: _template((1, 1, 0, 0), (1, 1, 0, 0)),
    PieceType.T: _template((0, 1, 0, 0), (1, 1, 1, 0)),
    PieceType.J: _template((1, 0, 0, 0), (1, 1, 1, 0)),
    PieceType.L: _template((0, 0, 1, 0), (1, 1, 1, 0)),
    PieceType.S: _template((0, 1, 1, 0), (1, 1, 0, 0)),
    PieceType.Z: _template((1, 1, 0, 0), (0, 1, 1, 0)),
}


def rotate_shape(shape: Shape) -> Shape:
    """Quarter turn clockwise: cell (i, j) moves to (j, 3 - i)."""
    return np.rot90(shape, 1, axes=(1, 0)).copy()


def find_min_xy(shape: Shape) -> Tuple[int, int]:
    """Smallest filled column and row of a shape, (BLOCK, BLOCK) if empty."""
    rows, cols = np.nonzero(shape)
    if rows.size == 0:
        return BLOCK, BLOCK
    return int(cols.min()), int(rows.min())


@dataclass
class Piece:
    kind: PieceType
    shape: Shape = field(repr=False)
    x: int = 0
    y: int = 0
    rotation: int = 0  # 0..3

    @classmethod
    def from_template(cls, kind: PieceType, x: int = 0, y: int = 0) -> "Piece":
        return cls(PieceType(kind), TEMPLATES[PieceType(kind)].copy(), x, y, 0)

    @property
    def tag(self) -> int:
        return self.kind.tag

    def with_shape(self, shape: Shape) -> "Piece":
        return Piece(self.kind, shape, self.x, self.y, self.rotation)

    def cells_at(self, dx: int = 0, dy: int = 0) -> List[Coordinate]:
        cells: List[Coordinate] = []
        for i in range(BLOCK):
            for j in range(BLOCK):
                if self.shape[i, j]:
                    cells.append((self.x + j + dx, self.y + i + dy))
        return cells

    def preview(self) -> np.ndarray:
        """4x4 projection of the shape filled with this piece's tag."""
        return (self.shape != 0).astype(np.int8) * np.int8(self.tag)


def rotation_candidate(piece: Piece) -> Piece:
    """Return the rotated piece, recentred, without checking the board.

    The anchor moves so the top-left of the filled bounding box stays put.
    The bar then gets a fixed correction that alternates with the parity of
    its rotation counter before the turn, so two turns return it to the
    original cells.
    """
    new_shape = rotate_shape(piece.shape)
    old_min_x, old_min_y = find_min_xy(piece.shape)
    new_min_x, new_min_y = find_min_xy(new_shape)
    x = piece.x + old_min_x - new_min_x
    y = piece.y + old_min_y - new_min_y
    if piece.kind is PieceType.I:
        if piece.rotation % 2 == 0:
            x, y = x + 1, y - 1
        else:
            x, y = x - 1, y + 1
    return Piece(piece.kind, new_shape, x, y, (piece.rotation + 1) % 4)
