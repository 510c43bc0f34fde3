from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class PieceType(Enum):
    NONE = "none"
    PAWN = "pawn"
    KNIGHT = "knight"
    BISHOP = "bishop"
    ROOK = "rook"
    QUEEN = "queen"
    KING = "king"

    @classmethod
    def parse(cls, name: str) -> "PieceType":
        try:
            return cls(name.strip().lower())
        except ValueError:
            raise ValueError(f"Unknown piece type: {name}") from None


class PieceColor(Enum):
    ABSENT = "absent"
    WHITE = "white"
    BLACK = "black"

    def opposite(self) -> "PieceColor":
        if self is PieceColor.WHITE:
            return PieceColor.BLACK
        if self is PieceColor.BLACK:
            return PieceColor.WHITE
        return PieceColor.ABSENT

    @classmethod
    def parse(cls, name: str) -> "PieceColor":
        try:
            return cls(name.strip().lower())
        except ValueError:
            raise ValueError(f"Unknown piece color: {name}") from None


@dataclass(frozen=True)
class Piece:
    type: PieceType = PieceType.NONE
    color: PieceColor = PieceColor.ABSENT

    @classmethod
    def make(cls, piece_type: PieceType, color: PieceColor) -> "Piece":
        """Build a piece, collapsing half-empty pairs to the empty piece."""
        if piece_type is PieceType.NONE or color is PieceColor.ABSENT:
            return EMPTY
        return cls(piece_type, color)

    @property
    def is_empty(self) -> bool:
        return self.type is PieceType.NONE


EMPTY = Piece()


class Cell:
    """A single board slot holding one :class:`Piece` by value."""

    __slots__ = ("piece",)

    def __init__(self, piece: Piece = EMPTY) -> None:
        self.piece = piece

    def set_piece(self, piece_type: PieceType, color: PieceColor) -> None:
        self.piece = Piece.make(piece_type, color)

    def remove_piece(self) -> None:
        self.piece = EMPTY

    @property
    def piece_type(self) -> PieceType:
        return self.piece.type

    @property
    def color(self) -> PieceColor:
        return self.piece.color

    def has_piece(self) -> bool:
        return self.piece.type is not PieceType.NONE

    def has_piece_of_color(self, color: PieceColor) -> bool:
        return self.has_piece() and color is not PieceColor.ABSENT and self.piece.color is color

    def has_piece_of_same_color(self, other: "Cell") -> bool:
        return self.has_piece_of_color(other.color)

    def has_piece_of_opposite_color(self, other: "Cell") -> bool:
        other_color = other.color
        return (
            self.has_piece()
            and other_color is not PieceColor.ABSENT
            and self.piece.color is not other_color
        )

    def copy(self) -> "Cell":
        return Cell(self.piece)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cell):
            return NotImplemented
        return self.piece == other.piece

    # mutable; compare cells, hash their pieces
    __hash__ = None

    def __repr__(self) -> str:
        if not self.has_piece():
            return "Cell(empty)"
        return f"Cell({self.piece.color.value} {self.piece.type.value})"
