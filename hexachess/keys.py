"""Packed integer keys for hex cells.

A cell at column ``x`` and row ``y`` is stored as ``(x << 8) | y``. Keys are
sparse: only the 91 cells created by :class:`hexachess.board.Board` are valid,
and any other integer simply names no cell.
"""

from __future__ import annotations

from typing import Tuple

from .config import MAX_INDEX, MEDIAN

Coord = Tuple[int, int]

STEP_X = 1 << 8
Y_MASK = 0xFF


def encode(x: int, y: int) -> int:
    return (x << 8) | y


def decode(key: int) -> Coord:
    return key >> 8, key & Y_MASK


def column_height(x: int) -> int:
    """Highest valid row index for column ``x`` (columns 0..10)."""
    y_max = MEDIAN + x
    if y_max > MAX_INDEX:
        y_max = MAX_INDEX - y_max % MAX_INDEX
    return y_max


def mirror(key: int) -> int:
    """Reflect a key top-to-bottom within its column."""
    x, y = decode(key)
    return encode(x, column_height(x) - y)
