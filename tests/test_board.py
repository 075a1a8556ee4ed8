from __future__ import annotations

import numpy as np

from brick_game.tetris import Board, Piece, PieceType


def test_can_place_on_empty_board():
    board = Board(10, 20)
    piece = Piece.from_template(PieceType.T, 3, 0)
    assert board.can_place(piece)
    assert board.can_place(piece, dx=1)
    assert board.can_place(piece, dy=18)


def test_can_place_rejects_out_of_bounds():
    board = Board(10, 20)
    piece = Piece.from_template(PieceType.T, 0, 0)
    assert not board.can_place(piece, dx=-1)
    # T occupies columns 0..2 of its matrix
    assert board.can_place(piece, dx=7)
    assert not board.can_place(piece, dx=8)
    # bottom row of T is matrix row 1
    assert board.can_place(piece, dy=18)
    assert not board.can_place(piece, dy=19)
    assert not board.can_place(piece, dy=-1)


def test_can_place_rejects_overlap_and_is_pure():
    board = Board(10, 20)
    board.grid[1, 4] = 3
    before = board.grid.copy()
    piece = Piece.from_template(PieceType.T, 3, 0)
    assert not board.can_place(piece)
    assert board.can_place(piece, dy=1) is False
    assert board.can_place(piece, dy=2)
    np.testing.assert_array_equal(board.grid, before)
    assert (piece.x, piece.y) == (3, 0)


def test_lock_writes_type_tag():
    board = Board(10, 20)
    piece = Piece.from_template(PieceType.Z, 3, 10)
    board.lock(piece)
    filled = {(int(x), int(y)) for y, x in np.argwhere(board.grid)}
    assert filled == set(piece.cells_at())
    assert set(board.grid[board.grid != 0].tolist()) == {int(PieceType.Z) + 1}


def test_clear_single_full_row_shifts_rows_above():
    board = Board(10, 20)
    board.grid[19, :] = 2
    board.grid[18, 0] = 5
    board.grid[17, 9] = 6
    assert board.clear_full_lines() == 1
    assert board.grid[19, 0] == 5
    assert board.grid[18, 9] == 6
    assert np.count_nonzero(board.grid) == 2


def test_clear_non_adjacent_rows_rechecks_same_index():
    board = Board(10, 20)
    row_a = np.array([1, 0, 0, 0, 0, 0, 0, 0, 0, 0], dtype=np.int8)
    row_b = np.array([0, 3, 0, 0, 0, 0, 0, 0, 0, 0], dtype=np.int8)
    board.grid[16] = row_a
    board.grid[17, :] = 2
    board.grid[18] = row_b
    board.grid[19, :] = 4

    assert board.clear_full_lines() == 2

    np.testing.assert_array_equal(board.grid[19], row_b)
    np.testing.assert_array_equal(board.grid[18], row_a)
    assert not board.grid[:18].any()


def test_clear_four_rows_leaves_empty_rows_on_top():
    board = Board(10, 20)
    board.grid[16:20, :] = 7
    board.grid[15, 2] = 1
    assert board.clear_full_lines() == 4
    assert board.grid[19, 2] == 1
    assert np.count_nonzero(board.grid) == 1
    assert board.grid.shape == (20, 10)


def test_clear_without_full_rows_changes_nothing():
    board = Board(10, 20)
    board.grid[19, :9] = 1
    before = board.grid.copy()
    assert board.clear_full_lines() == 0
    np.testing.assert_array_equal(board.grid, before)


def test_render_overlays_piece_on_a_copy():
    board = Board(10, 20)
    board.grid[19, 0] = 1
    piece = Piece.from_template(PieceType.O, 3, 0)
    state = board.render(piece)
    assert state[0, 3] == state[1, 4] == int(PieceType.O) + 1
    assert state[19, 0] == 1
    assert not board.grid[:2].any()
