from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple, Union

from .ai import AIPlayer, MoveResult
from .board import Board
from .cell import PieceColor, PieceType
from .keys import Y_MASK, Coord, decode, encode
from .tasks import Callback, SearchRunner, SearchTask

logger = logging.getLogger(__name__)

PieceTypeLike = Union[PieceType, str]
PieceColorLike = Union[PieceColor, str]

# Glinski starting position, white side; black mirrors it within each column.
STANDARD_WHITE: Tuple[Tuple[PieceType, Coord], ...] = (
    (PieceType.KING, (6, 0)),
    (PieceType.QUEEN, (4, 0)),
    (PieceType.BISHOP, (5, 0)),
    (PieceType.BISHOP, (5, 1)),
    (PieceType.BISHOP, (5, 2)),
    (PieceType.KNIGHT, (3, 0)),
    (PieceType.KNIGHT, (7, 0)),
    (PieceType.ROOK, (2, 0)),
    (PieceType.ROOK, (8, 0)),
    (PieceType.PAWN, (1, 0)),
    (PieceType.PAWN, (2, 1)),
    (PieceType.PAWN, (3, 2)),
    (PieceType.PAWN, (4, 3)),
    (PieceType.PAWN, (5, 4)),
    (PieceType.PAWN, (6, 3)),
    (PieceType.PAWN, (7, 2)),
    (PieceType.PAWN, (8, 1)),
    (PieceType.PAWN, (9, 0)),
)

STANDARD_BLACK: Tuple[Tuple[PieceType, Coord], ...] = (
    (PieceType.KING, (6, 9)),
    (PieceType.QUEEN, (4, 9)),
    (PieceType.BISHOP, (5, 10)),
    (PieceType.BISHOP, (5, 9)),
    (PieceType.BISHOP, (5, 8)),
    (PieceType.KNIGHT, (3, 8)),
    (PieceType.KNIGHT, (7, 8)),
    (PieceType.ROOK, (2, 7)),
    (PieceType.ROOK, (8, 7)),
) + tuple((PieceType.PAWN, (x, 6)) for x in range(1, 10))


def _piece_type(value: PieceTypeLike) -> PieceType:
    return value if isinstance(value, PieceType) else PieceType.parse(value)


def _piece_color(value: PieceColorLike) -> PieceColor:
    return value if isinstance(value, PieceColor) else PieceColor.parse(value)


def _key(x: int, y: int) -> Optional[int]:
    """Pack ``(x, y)``, or ``None`` when ``y`` would spill into the column bits."""
    if not 0 <= y <= Y_MASK:
        return None
    key = encode(x, y)
    return key if decode(key) == (x, y) else None


class Game:
    """Host-facing controller around one authoritative :class:`Board`.

    Coordinates at this seam are ``(x, y)`` pairs; keys stay internal. The
    board is only ever mutated through this object, from one thread.
    Background searches work on their own snapshot.
    """

    def __init__(self, standard: bool = False, runner: Optional[SearchRunner] = None) -> None:
        self.board = Board()
        self.turn = PieceColor.WHITE
        self.last_move: Optional[Tuple[Coord, Coord]] = None
        self.last_move_was_capture: bool = False
        self._runner = runner
        if standard:
            self.setup_standard()

    @classmethod
    def standard(cls) -> "Game":
        return cls(standard=True)

    def reset(self, standard: bool = False) -> None:
        self.board = Board()
        self.turn = PieceColor.WHITE
        self.last_move = None
        self.last_move_was_capture = False
        if standard:
            self.setup_standard()
        logger.info("Game reset (%s position)", "standard" if standard else "empty")

    def setup_standard(self) -> None:
        for color, layout in ((PieceColor.WHITE, STANDARD_WHITE), (PieceColor.BLACK, STANDARD_BLACK)):
            for piece_type, (x, y) in layout:
                self.place_piece(x, y, piece_type, color)

    # ------------------------------------------------------------------
    # Placement and queries

    def place_piece(self, x: int, y: int, piece_type: PieceTypeLike, color: PieceColorLike) -> bool:
        piece_type, color = _piece_type(piece_type), _piece_color(color)
        key = _key(x, y)
        if key is None:
            logger.warning("Rejected placement at %s: not a board cell", (x, y))
            return False
        return self.board.set_piece(key, piece_type, color)

    def remove_piece(self, x: int, y: int) -> bool:
        key = _key(x, y)
        return key is not None and self.board.remove_piece(key)

    def piece_at(self, x: int, y: int) -> Optional[Tuple[str, str]]:
        key = _key(x, y)
        piece = self.board.piece_at(key) if key is not None else None
        if piece is None or piece.is_empty:
            return None
        return piece.type.value, piece.color.value

    def legal_moves(self, x: int, y: int) -> List[Coord]:
        key = _key(x, y)
        if key is None:
            return []
        return [decode(to_key) for to_key in self.board.valid_moves(key)]

    def player_moves(self, color: PieceColorLike) -> List[Tuple[Coord, Coord]]:
        return [
            (decode(from_key), decode(to_key))
            for from_key, to_key in self.board.legal_moves_for(_piece_color(color))
        ]

    def is_attacked(self, x: int, y: int) -> bool:
        key = _key(x, y)
        return key is not None and self.board.is_capturable(key)

    def attackers(self, x: int, y: int, color: PieceColorLike) -> List[Coord]:
        key = _key(x, y)
        if key is None:
            return []
        return [decode(source) for source in self.board.attackers_of(key, _piece_color(color))]

    def has_any_legal_move(self, color: PieceColorLike) -> bool:
        return self.board.has_any_legal_move(_piece_color(color))

    def is_in_check(self, color: Optional[PieceColorLike] = None) -> bool:
        return self.board.is_in_check(self.turn if color is None else _piece_color(color))

    # ------------------------------------------------------------------
    # Moves

    def apply_move(self, from_xy: Coord, to_xy: Coord) -> bool:
        """Move a piece without any legality check.

        Returns ``False`` when the source is off the board or empty, or the
        destination is off the board; the board is unchanged in that case.
        """
        from_key, to_key = _key(*from_xy), _key(*to_xy)
        if from_key is None or to_key is None:
            logger.warning("Rejected move %s -> %s", from_xy, to_xy)
            return False
        target = self.board.piece_at(to_key)
        captured = target is not None and not target.is_empty
        if not self.board.move_piece(from_key, to_key):
            logger.warning("Rejected move %s -> %s", from_xy, to_xy)
            return False
        self.last_move = (tuple(from_xy), tuple(to_xy))
        self.last_move_was_capture = captured
        logger.info("Moved %s -> %s%s", from_xy, to_xy, " (capture)" if captured else "")
        return True

    def push_move(self, from_xy: Coord, to_xy: Coord) -> None:
        """Play a legal move for the side to move and pass the turn.

        Raises ``ValueError`` for anything that is not a legal move.
        """
        from_key, to_key = _key(*from_xy), _key(*to_xy)
        piece = self.board.piece_at(from_key) if from_key is not None else None
        if piece is None or piece.color is not self.turn:
            raise ValueError(f"No {self.turn.value} piece at {tuple(from_xy)}")
        if to_key is None or to_key not in self.board.valid_moves(from_key):
            raise ValueError(f"Illegal move: {tuple(from_xy)} -> {tuple(to_xy)}")
        self.apply_move(from_xy, to_xy)
        self.turn = self.turn.opposite()

    def push_result(self, result: MoveResult) -> bool:
        """Play a search result for the side to move; ``False`` for no move."""
        if not result.is_move:
            return False
        self.push_move(decode(result.from_key), decode(result.to_key))
        return True

    # ------------------------------------------------------------------
    # AI

    def best_move(self, color: PieceColorLike, depth: Union[int, str]) -> MoveResult:
        return AIPlayer().choose_move(self.board, _piece_color(color) is PieceColor.WHITE, depth)

    def best_move_async(
        self,
        color: PieceColorLike,
        depth: Union[int, str],
        callback: Optional[Callback] = None,
    ) -> SearchTask:
        if self._runner is None:
            self._runner = SearchRunner()
        white = _piece_color(color) is PieceColor.WHITE
        return self._runner.submit(self.board, white, depth, callback)

    def close(self) -> None:
        if self._runner is not None:
            self._runner.shutdown(wait=False)
            self._runner = None

    # ------------------------------------------------------------------
    # Status

    def status(self) -> str:
        if self.board.has_any_legal_move(self.turn):
            return "ongoing"
        return "checkmate" if self.board.is_in_check(self.turn) else "stalemate"

    def is_game_over(self) -> bool:
        return self.status() != "ongoing"

    def get_result(self, status: Optional[str] = None) -> Optional[str]:
        status = status or self.status()
        if status == "ongoing":
            return None
        if status == "stalemate":
            return "1/2-1/2"
        return "0-1" if self.turn is PieceColor.WHITE else "1-0"

    def snapshot(self) -> Dict[str, object]:
        pieces = [
            {"x": x, "y": y, "type": piece.type.value, "color": piece.color.value}
            for (x, y), piece in ((decode(key), piece) for key, piece in self.board.pieces())
        ]
        in_check = self.board.is_in_check(self.turn)
        check_cell: Optional[Coord] = None
        if in_check:
            king = self.board.king_key(self.turn)
            if king is not None:
                check_cell = decode(king)
        status = self.status()
        return {
            "pieces": pieces,
            "turn": self.turn.value,
            "status": status,
            "game_over": status != "ongoing",
            "result": self.get_result(status),
            "in_check": in_check,
            "check_cell": list(check_cell) if check_cell else None,
            "last_move": [list(c) for c in self.last_move] if self.last_move else None,
            "last_move_capture": self.last_move_was_capture,
        }

