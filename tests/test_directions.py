from __future__ import annotations

import pytest

from hexachess import Board, encode
from hexachess.directions import ALL_DIRECTIONS, Direction, offset, step
from hexachess.keys import mirror

OPPOSITE = {
    Direction.UP: Direction.DOWN,
    Direction.TOP_RIGHT: Direction.BOTTOM_LEFT,
    Direction.TOP_LEFT: Direction.BOTTOM_RIGHT,
    Direction.DIAG_TOP_RIGHT: Direction.DIAG_BOTTOM_LEFT,
    Direction.DIAG_TOP_LEFT: Direction.DIAG_BOTTOM_RIGHT,
    Direction.DIAG_RIGHT: Direction.DIAG_LEFT,
}
OPPOSITE.update({v: k for k, v in list(OPPOSITE.items())})

MIRRORED = {
    Direction.UP: Direction.DOWN,
    Direction.TOP_RIGHT: Direction.BOTTOM_RIGHT,
    Direction.TOP_LEFT: Direction.BOTTOM_LEFT,
    Direction.DIAG_TOP_RIGHT: Direction.DIAG_BOTTOM_RIGHT,
    Direction.DIAG_TOP_LEFT: Direction.DIAG_BOTTOM_LEFT,
}
MIRRORED.update({v: k for k, v in list(MIRRORED.items())})
MIRRORED[Direction.DIAG_RIGHT] = Direction.DIAG_RIGHT
MIRRORED[Direction.DIAG_LEFT] = Direction.DIAG_LEFT


@pytest.mark.parametrize(
    "direction, start, expected",
    [
        (Direction.UP, (2, 3), (2, 4)),
        (Direction.DOWN, (2, 3), (2, 2)),
        (Direction.TOP_RIGHT, (2, 3), (3, 4)),
        (Direction.TOP_RIGHT, (5, 3), (6, 3)),
        (Direction.TOP_LEFT, (5, 3), (4, 3)),
        (Direction.TOP_LEFT, (7, 3), (6, 4)),
        (Direction.BOTTOM_RIGHT, (2, 3), (3, 3)),
        (Direction.BOTTOM_RIGHT, (5, 3), (6, 2)),
        (Direction.BOTTOM_LEFT, (5, 3), (4, 2)),
        (Direction.BOTTOM_LEFT, (7, 3), (6, 3)),
        (Direction.DIAG_TOP_RIGHT, (2, 3), (3, 5)),
        (Direction.DIAG_TOP_RIGHT, (5, 3), (6, 4)),
        (Direction.DIAG_TOP_LEFT, (5, 3), (4, 4)),
        (Direction.DIAG_TOP_LEFT, (7, 3), (6, 5)),
        (Direction.DIAG_BOTTOM_RIGHT, (2, 3), (3, 2)),
        (Direction.DIAG_BOTTOM_RIGHT, (5, 3), (6, 1)),
        (Direction.DIAG_BOTTOM_LEFT, (5, 3), (4, 1)),
        (Direction.DIAG_BOTTOM_LEFT, (7, 3), (6, 2)),
        (Direction.DIAG_RIGHT, (4, 2), (6, 2)),
        (Direction.DIAG_RIGHT, (3, 2), (5, 3)),
        (Direction.DIAG_RIGHT, (2, 2), (4, 3)),
        (Direction.DIAG_RIGHT, (5, 3), (7, 2)),
        (Direction.DIAG_LEFT, (6, 2), (4, 2)),
        (Direction.DIAG_LEFT, (5, 3), (3, 2)),
        (Direction.DIAG_LEFT, (7, 2), (5, 3)),
        (Direction.DIAG_LEFT, (8, 2), (6, 3)),
    ],
)
def test_offset_table(direction, start, expected):
    assert step(direction, encode(*start)) == encode(*expected)


def test_steps_have_inverses():
    board = Board()
    for key in board.keys():
        for direction in ALL_DIRECTIONS:
            target = step(direction, key)
            if target in board:
                assert step(OPPOSITE[direction], target) == key, (key, direction)


def test_steps_mirror_top_to_bottom():
    board = Board()
    for key in board.keys():
        for direction in ALL_DIRECTIONS:
            target = step(direction, key)
            if target in board:
                assert step(MIRRORED[direction], mirror(key)) == mirror(target), (key, direction)


def test_vertical_offsets_ignore_column():
    for x in range(11):
        assert offset(Direction.UP, x) == (0, 1)
        assert offset(Direction.DOWN, x) == (0, -1)


def test_step_off_the_board_is_not_a_cell():
    board = Board()
    assert step(Direction.DOWN, encode(3, 0)) not in board
    assert step(Direction.BOTTOM_LEFT, encode(0, 2)) not in board
    assert step(Direction.DIAG_LEFT, encode(1, 3)) not in board
