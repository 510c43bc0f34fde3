from __future__ import annotations

import pytest

from hexachess import Board, Cell, Piece, PieceColor, PieceType, encode

WHITE = PieceColor.WHITE
BLACK = PieceColor.BLACK


def test_new_board_is_empty():
    board = Board()
    assert list(board.pieces()) == []
    assert all(not board.cell(key).has_piece() for key in board.keys())


def test_set_piece_reports_success():
    board = Board()
    assert board.set_piece(encode(5, 5), PieceType.QUEEN, WHITE) is True
    assert board.piece_at(encode(5, 5)) == Piece(PieceType.QUEEN, WHITE)


def test_set_piece_off_board_fails():
    board = Board()
    assert board.set_piece(encode(0, 6), PieceType.QUEEN, WHITE) is False
    assert board.piece_at(encode(0, 6)) is None
    assert len(board) == 91


def test_last_write_wins():
    board = Board()
    board.set_piece(encode(2, 2), PieceType.PAWN, WHITE)
    board.set_piece(encode(2, 2), PieceType.ROOK, BLACK)
    assert board.piece_at(encode(2, 2)) == Piece(PieceType.ROOK, BLACK)


def test_half_empty_piece_collapses_to_empty():
    board = Board()
    board.set_piece(encode(2, 2), PieceType.ROOK, PieceColor.ABSENT)
    assert not board.cell(encode(2, 2)).has_piece()
    board.set_piece(encode(2, 2), PieceType.NONE, BLACK)
    assert board.piece_at(encode(2, 2)) == Piece()


def test_remove_piece_keeps_membership():
    board = Board()
    key = encode(4, 4)
    board.set_piece(key, PieceType.KNIGHT, BLACK)
    assert board.remove_piece(key)
    assert key in board
    assert not board.cell(key).has_piece()
    assert not board.remove_piece(encode(11, 0))


def test_move_piece_captures():
    board = Board()
    board.set_piece(encode(5, 5), PieceType.ROOK, WHITE)
    board.set_piece(encode(5, 8), PieceType.PAWN, BLACK)
    assert board.move_piece(encode(5, 5), encode(5, 8))
    assert board.piece_at(encode(5, 8)) == Piece(PieceType.ROOK, WHITE)
    assert not board.cell(encode(5, 5)).has_piece()


def test_move_piece_rejects_inconsistent_moves():
    board = Board()
    board.set_piece(encode(5, 5), PieceType.ROOK, WHITE)
    assert not board.move_piece(encode(4, 4), encode(4, 5))
    assert not board.move_piece(encode(5, 5), encode(5, 11))
    assert not board.move_piece(encode(0, 6), encode(5, 5))
    assert board.piece_at(encode(5, 5)) == Piece(PieceType.ROOK, WHITE)


def test_copy_is_independent():
    board = Board()
    board.set_piece(encode(5, 5), PieceType.ROOK, WHITE)
    clone = board.copy()
    assert clone == board
    clone.move_piece(encode(5, 5), encode(5, 6))
    assert board.piece_at(encode(5, 5)) == Piece(PieceType.ROOK, WHITE)
    assert clone.piece_at(encode(5, 6)) == Piece(PieceType.ROOK, WHITE)
    assert clone != board


def test_piece_keys_in_key_order():
    board = Board()
    for x, y in ((7, 1), (1, 3), (5, 0)):
        board.set_piece(encode(x, y), PieceType.PAWN, WHITE)
    board.set_piece(encode(3, 3), PieceType.PAWN, BLACK)
    assert board.piece_keys(WHITE) == [encode(1, 3), encode(5, 0), encode(7, 1)]
    assert board.piece_keys(BLACK) == [encode(3, 3)]


def test_king_key():
    board = Board()
    assert board.king_key(WHITE) is None
    board.set_piece(encode(6, 0), PieceType.KING, WHITE)
    assert board.king_key(WHITE) == encode(6, 0)
    assert board.king_key(BLACK) is None


def test_cell_color_predicates():
    white = Cell(Piece(PieceType.PAWN, WHITE))
    black = Cell(Piece(PieceType.KNIGHT, BLACK))
    empty = Cell()
    assert white.has_piece_of_color(WHITE)
    assert not white.has_piece_of_color(PieceColor.ABSENT)
    assert white.has_piece_of_opposite_color(black)
    assert not white.has_piece_of_same_color(black)
    assert not white.has_piece_of_opposite_color(empty)
    assert not empty.has_piece_of_opposite_color(white)
    assert not empty.has_piece_of_same_color(empty)


def test_color_opposite():
    assert WHITE.opposite() is BLACK
    assert BLACK.opposite() is WHITE
    assert PieceColor.ABSENT.opposite() is PieceColor.ABSENT


def test_cells_compare_by_piece_but_do_not_hash():
    assert Cell(Piece(PieceType.ROOK, WHITE)) == Cell(Piece(PieceType.ROOK, WHITE))
    assert Cell() != Cell(Piece(PieceType.ROOK, WHITE))
    with pytest.raises(TypeError):
        hash(Cell())
    assert hash(Piece(PieceType.ROOK, WHITE)) == hash(Piece(PieceType.ROOK, WHITE))
