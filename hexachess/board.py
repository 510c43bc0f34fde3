from __future__ import annotations

import logging
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .cell import Cell, Piece, PieceColor, PieceType
from .config import MAX_INDEX
from .directions import DIAGONAL, ORTHOGONAL, ALL_DIRECTIONS, Direction, step, walk
from .evaluator import Evaluator
from .keys import column_height, decode, encode

logger = logging.getLogger(__name__)

Move = Tuple[int, int]

WHITE_PAWN_START = frozenset(
    encode(x, y)
    for x, y in ((1, 0), (2, 1), (3, 2), (4, 3), (5, 4), (6, 3), (7, 2), (8, 1), (9, 0))
)
BLACK_PAWN_START = frozenset(encode(x, 6) for x in range(1, 10))

# (two-step run, one of two closing steps)
KNIGHT_LEAPS: Tuple[Tuple[Tuple[Direction, Direction], Tuple[Direction, Direction]], ...] = (
    ((Direction.UP, Direction.UP), (Direction.TOP_RIGHT, Direction.TOP_LEFT)),
    ((Direction.DOWN, Direction.DOWN), (Direction.BOTTOM_RIGHT, Direction.BOTTOM_LEFT)),
    ((Direction.TOP_RIGHT, Direction.TOP_RIGHT), (Direction.UP, Direction.BOTTOM_RIGHT)),
    ((Direction.BOTTOM_RIGHT, Direction.BOTTOM_RIGHT), (Direction.DOWN, Direction.TOP_RIGHT)),
    ((Direction.BOTTOM_LEFT, Direction.BOTTOM_LEFT), (Direction.DOWN, Direction.TOP_LEFT)),
    ((Direction.TOP_LEFT, Direction.TOP_LEFT), (Direction.UP, Direction.BOTTOM_LEFT)),
)


class Board:
    """Hexagonal chess board of 91 cells keyed by packed coordinates.

    The set of keys is fixed at construction; removing a piece only empties
    its cell. Move generation, check filtering and capture queries all work
    on ``self``, so speculative analysis runs on a :meth:`copy`.
    """

    def __init__(self) -> None:
        self._cells: Dict[int, Cell] = {}
        for x in range(MAX_INDEX + 1):
            for y in range(column_height(x) + 1):
                self._cells[encode(x, y)] = Cell()

    @classmethod
    def _from_cells(cls, cells: Dict[int, Cell]) -> "Board":
        board = cls.__new__(cls)
        board._cells = cells
        return board

    def copy(self) -> "Board":
        return Board._from_cells({key: cell.copy() for key, cell in self._cells.items()})

    # ------------------------------------------------------------------
    # Cells and pieces

    def __contains__(self, key: object) -> bool:
        return key in self._cells

    def __len__(self) -> int:
        return len(self._cells)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._cells == other._cells

    def keys(self) -> List[int]:
        return list(self._cells)

    def is_valid(self, key: int) -> bool:
        return key in self._cells

    def cell(self, key: int) -> Optional[Cell]:
        return self._cells.get(key)

    def piece_at(self, key: int) -> Optional[Piece]:
        cell = self._cells.get(key)
        return cell.piece if cell is not None else None

    def set_piece(self, key: int, piece_type: PieceType, color: PieceColor) -> bool:
        cell = self._cells.get(key)
        if cell is None:
            logger.warning("Rejected placement of %s %s at %s: not a board cell",
                           color.value, piece_type.value, decode(key))
            return False
        cell.set_piece(piece_type, color)
        return True

    def remove_piece(self, key: int) -> bool:
        cell = self._cells.get(key)
        if cell is None:
            return False
        cell.remove_piece()
        return True

    def move_piece(self, from_key: int, to_key: int) -> bool:
        """Move whatever stands on ``from_key`` to ``to_key``, capturing.

        No legality check is made. Returns ``False`` and leaves the board
        untouched when either key is off the board or the source is empty.
        """
        source = self._cells.get(from_key)
        target = self._cells.get(to_key)
        if source is None or target is None or not source.has_piece():
            return False
        if from_key == to_key:
            return True
        target.piece = source.piece
        source.remove_piece()
        return True

    def pieces(self, color: Optional[PieceColor] = None) -> Iterator[Tuple[int, Piece]]:
        """Yield ``(key, piece)`` for occupied cells in ascending key order."""
        # cells are created column by column, so dict order is key order
        for key, cell in self._cells.items():
            if not cell.has_piece():
                continue
            if color is not None and cell.color is not color:
                continue
            yield key, cell.piece

    def piece_keys(self, color: PieceColor) -> List[int]:
        return [key for key, _ in self.pieces(color)]

    def king_key(self, color: PieceColor) -> Optional[int]:
        for key, piece in self.pieces(color):
            if piece.type is PieceType.KING:
                return key
        return None

    # ------------------------------------------------------------------
    # Move generation

    def valid_moves(self, key: int, filtered: bool = True) -> List[int]:
        """Destinations reachable by the piece on ``key``.

        With ``filtered`` set, moves that leave the mover's own king
        capturable are dropped. Filtering is skipped when the mover has no
        king on this board.
        """
        cell = self._cells.get(key)
        if cell is None or not cell.has_piece():
            return []
        moves = self._pseudo_moves(key, cell)
        if not filtered or self.king_key(cell.color) is None:
            return moves
        return [to_key for to_key in moves if leaves_king_safe(self, key, to_key)]

    def legal_moves_for(self, color: PieceColor, filtered: bool = True) -> List[Move]:
        """All ``(from, to)`` pairs for ``color``, pieces in ascending key order."""
        moves: List[Move] = []
        for key in self.piece_keys(color):
            moves.extend((key, to_key) for to_key in self.valid_moves(key, filtered))
        return moves

    def destinations_for(self, color: PieceColor, filtered: bool = True) -> List[int]:
        return [to_key for _, to_key in self.legal_moves_for(color, filtered)]

    def has_any_legal_move(self, color: PieceColor) -> bool:
        for key in self.piece_keys(color):
            if self.valid_moves(key):
                return True
        return False

    def attackers_of(self, key: int, color: PieceColor) -> List[int]:
        """Keys of ``color`` pieces whose unfiltered moves reach ``key``."""
        return [
            source for source in self.piece_keys(color)
            if key in self.valid_moves(source, filtered=False)
        ]

    def is_capturable(self, key: int, by: Optional[PieceColor] = None) -> bool:
        """Whether ``key`` is a destination of the attacking side's raw moves.

        The attacker defaults to the opposite of the piece standing on
        ``key``; an empty cell with no explicit attacker is never capturable.
        Raw (unfiltered) generation is required here since filtering itself
        asks this question.
        """
        cell = self._cells.get(key)
        if cell is None:
            return False
        if by is None:
            by = cell.color.opposite()
        if by is PieceColor.ABSENT:
            return False
        for source in self.piece_keys(by):
            if key in self._pseudo_moves(source, self._cells[source]):
                return True
        return False

    def is_in_check(self, color: PieceColor) -> bool:
        king = self.king_key(color)
        return king is not None and self.is_capturable(king)

    def evaluate(self) -> int:
        return Evaluator.evaluate(self)

    def _pseudo_moves(self, key: int, cell: Cell) -> List[int]:
        piece_type = cell.piece_type
        moves: List[int] = []
        if piece_type is PieceType.PAWN:
            self._add_pawn_moves(moves, key, cell)
        elif piece_type is PieceType.KNIGHT:
            self._add_knight_moves(moves, key, cell)
        elif piece_type is PieceType.BISHOP:
            self._add_sliding_moves(moves, key, cell, DIAGONAL)
        elif piece_type is PieceType.ROOK:
            self._add_sliding_moves(moves, key, cell, ORTHOGONAL)
        elif piece_type is PieceType.QUEEN:
            self._add_sliding_moves(moves, key, cell, DIAGONAL)
            self._add_sliding_moves(moves, key, cell, ORTHOGONAL)
        elif piece_type is PieceType.KING:
            for direction in ALL_DIRECTIONS:
                self._add_if_valid(moves, step(direction, key), cell, can_take=True)
        return moves

    def _add_pawn_moves(self, moves: List[int], key: int, cell: Cell) -> None:
        if cell.color is PieceColor.WHITE:
            forward = Direction.UP
            takes = (Direction.TOP_LEFT, Direction.TOP_RIGHT)
            start = WHITE_PAWN_START
        elif cell.color is PieceColor.BLACK:
            forward = Direction.DOWN
            takes = (Direction.BOTTOM_LEFT, Direction.BOTTOM_RIGHT)
            start = BLACK_PAWN_START
        else:
            return

        one = step(forward, key)
        ahead = self._cells.get(one)
        if ahead is not None and not ahead.has_piece():
            moves.append(one)
            if key in start:
                self._add_if_valid(moves, step(forward, one), cell, can_take=False)

        for direction in takes:
            take = step(direction, key)
            target = self._cells.get(take)
            if target is not None and target.has_piece_of_opposite_color(cell):
                moves.append(take)

    def _add_knight_moves(self, moves: List[int], key: int, cell: Cell) -> None:
        for run, closers in KNIGHT_LEAPS:
            pivot = walk(key, *run)
            for closer in closers:
                self._add_if_valid(moves, step(closer, pivot), cell, can_take=True)

    def _add_sliding_moves(
        self, moves: List[int], key: int, cell: Cell, directions: Iterable[Direction]
    ) -> None:
        for direction in directions:
            current = step(direction, key)
            target = self._cells.get(current)
            while target is not None:
                if target.has_piece():
                    if target.has_piece_of_opposite_color(cell):
                        moves.append(current)
                    break
                moves.append(current)
                current = step(direction, current)
                target = self._cells.get(current)

    def _add_if_valid(self, moves: List[int], key: int, cell: Cell, can_take: bool) -> None:
        target = self._cells.get(key)
        if target is None:
            return
        if not target.has_piece():
            moves.append(key)
        elif can_take and target.has_piece_of_opposite_color(cell):
            moves.append(key)

    def __repr__(self) -> str:
        occupied = sum(1 for _ in self.pieces())
        return f"Board(cells={len(self._cells)}, pieces={occupied})"


def leaves_king_safe(board: Board, from_key: int, to_key: int) -> bool:
    """Whether moving ``from_key`` -> ``to_key`` keeps the mover's king safe.

    The move is played on a copy; ``board`` is never modified. A side
    without a king is always safe.
    """
    piece = board.piece_at(from_key)
    if piece is None or piece.is_empty:
        return True
    trial = board.copy()
    if not trial.move_piece(from_key, to_key):
        return True
    if piece.type is PieceType.KING:
        king = to_key
    else:
        king = trial.king_key(piece.color)
    if king is None:
        return True
    return not trial.is_capturable(king, by=piece.color.opposite())
