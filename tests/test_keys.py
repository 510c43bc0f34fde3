from __future__ import annotations

from hexachess import Board, encode, decode
from hexachess.keys import column_height, mirror


def test_encode_layout():
    assert encode(0, 0) == 0
    assert encode(1, 0) == 256
    assert encode(5, 4) == 1284
    assert encode(9, 6) == 2310


def test_round_trip_on_every_cell():
    board = Board()
    for key in board.keys():
        x, y = decode(key)
        assert encode(x, y) == key
        assert decode(encode(x, y)) == (x, y)


def test_board_has_91_cells():
    board = Board()
    assert len(board) == 91
    assert len(set(board.keys())) == 91


def test_columns_symmetric_about_center():
    heights = [column_height(x) for x in range(11)]
    assert heights == [5, 6, 7, 8, 9, 10, 9, 8, 7, 6, 5]
    assert heights == heights[::-1]


def test_cells_outside_region_are_invalid():
    board = Board()
    assert encode(0, 5) in board
    assert encode(0, 6) not in board
    assert encode(5, 10) in board
    assert encode(5, 11) not in board
    assert encode(11, 0) not in board
    assert -1 not in board


def test_mirror_is_an_involution():
    board = Board()
    for key in board.keys():
        assert mirror(key) in board
        assert mirror(mirror(key)) == key
