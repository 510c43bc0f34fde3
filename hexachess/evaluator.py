from __future__ import annotations

from typing import TYPE_CHECKING, Dict

from .cell import PieceColor, PieceType
from .config import PIECE_VALUES

if TYPE_CHECKING:
    from .board import Board


class Evaluator:
    """Static evaluation for hexachess positions.

    Positive scores favor White, negative scores favor Black. Units are pawns.
    Kings carry no material; a king that can be captured costs its side the
    full king value instead.
    """

    MATERIAL_VALUES: Dict[PieceType, int] = {
        PieceType.PAWN: PIECE_VALUES["pawn"],
        PieceType.KNIGHT: PIECE_VALUES["knight"],
        PieceType.BISHOP: PIECE_VALUES["bishop"],
        PieceType.ROOK: PIECE_VALUES["rook"],
        PieceType.QUEEN: PIECE_VALUES["queen"],
        PieceType.KING: PIECE_VALUES["king"],
    }

    @classmethod
    def evaluate(cls, board: "Board") -> int:
        score = 0
        for color, sign in ((PieceColor.WHITE, 1), (PieceColor.BLACK, -1)):
            for key, piece in board.pieces(color):
                if piece.type is PieceType.KING:
                    if board.is_capturable(key):
                        score -= sign * cls.MATERIAL_VALUES[PieceType.KING]
                else:
                    score += sign * cls.MATERIAL_VALUES[piece.type]
        return score

    @classmethod
    def material(cls, board: "Board", color: PieceColor) -> int:
        """Non-king material of one side."""
        return sum(
            cls.MATERIAL_VALUES[piece.type]
            for _, piece in board.pieces(color)
            if piece.type is not PieceType.KING
        )
