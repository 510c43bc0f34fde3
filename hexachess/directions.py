"""Step functions for the twelve hex directions.

Steps operate on packed keys. The row offset of every non-vertical step
depends on which side of the median column the source cell sits, because
columns grow taller towards the center and shrink after it. Two-column
"far" diagonals additionally depend on the parity of the column.
"""

from __future__ import annotations

from enum import Enum
from typing import Tuple

from .config import MEDIAN
from .keys import STEP_X


class Direction(Enum):
    UP = "up"
    DOWN = "down"

    # Edge neighbours of a hex
    TOP_RIGHT = "top_right"
    TOP_LEFT = "top_left"
    BOTTOM_RIGHT = "bottom_right"
    BOTTOM_LEFT = "bottom_left"

    # Vertex neighbours of a hex
    DIAG_TOP_RIGHT = "diag_top_right"
    DIAG_TOP_LEFT = "diag_top_left"
    DIAG_BOTTOM_RIGHT = "diag_bottom_right"
    DIAG_BOTTOM_LEFT = "diag_bottom_left"
    DIAG_RIGHT = "diag_right"
    DIAG_LEFT = "diag_left"


ORTHOGONAL: Tuple[Direction, ...] = (
    Direction.TOP_RIGHT,
    Direction.TOP_LEFT,
    Direction.BOTTOM_RIGHT,
    Direction.BOTTOM_LEFT,
    Direction.UP,
    Direction.DOWN,
)

DIAGONAL: Tuple[Direction, ...] = (
    Direction.DIAG_TOP_RIGHT,
    Direction.DIAG_TOP_LEFT,
    Direction.DIAG_BOTTOM_RIGHT,
    Direction.DIAG_BOTTOM_LEFT,
    Direction.DIAG_RIGHT,
    Direction.DIAG_LEFT,
)

ALL_DIRECTIONS: Tuple[Direction, ...] = ORTHOGONAL + DIAGONAL


def offset(direction: Direction, x: int) -> Tuple[int, int]:
    """Return the (dx, dy) of one step in ``direction`` from column ``x``."""
    if direction is Direction.UP:
        return 0, 1
    if direction is Direction.DOWN:
        return 0, -1

    if direction is Direction.TOP_RIGHT:
        return (1, 1) if x < MEDIAN else (1, 0)
    if direction is Direction.TOP_LEFT:
        return (-1, 1) if x > MEDIAN else (-1, 0)
    if direction is Direction.BOTTOM_RIGHT:
        return (1, 0) if x < MEDIAN else (1, -1)
    if direction is Direction.BOTTOM_LEFT:
        return (-1, 0) if x > MEDIAN else (-1, -1)

    if direction is Direction.DIAG_TOP_RIGHT:
        return (1, 2) if x < MEDIAN else (1, 1)
    if direction is Direction.DIAG_TOP_LEFT:
        return (-1, 2) if x > MEDIAN else (-1, 1)
    if direction is Direction.DIAG_BOTTOM_RIGHT:
        return (1, -1) if x < MEDIAN else (1, -2)
    if direction is Direction.DIAG_BOTTOM_LEFT:
        return (-1, -1) if x > MEDIAN else (-1, -2)

    if direction is Direction.DIAG_RIGHT:
        # crossing the median from the column just left of it keeps the row
        if x % 2 == 0 and x == MEDIAN - 1:
            return 2, 0
        return (2, 1) if x < MEDIAN else (2, -1)
    if direction is Direction.DIAG_LEFT:
        if x % 2 == 0:
            if x == MEDIAN + 1:
                return -2, 0
            return (-2, -1) if x < MEDIAN else (-2, 1)
        return (-2, -1) if x <= MEDIAN else (-2, 1)

    raise ValueError(f"Unknown direction: {direction!r}")


def step(direction: Direction, key: int) -> int:
    """Return the key one step away from ``key`` in ``direction``.

    The result may not be a board key; callers check membership.
    """
    dx, dy = offset(direction, key >> 8)
    return key + dx * STEP_X + dy


def walk(key: int, *directions: Direction) -> int:
    """Apply several steps in sequence."""
    for direction in directions:
        key = step(direction, key)
    return key
