from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import NamedTuple, Optional, Union

from .board import Board
from .cell import PieceColor
from .config import depth_for
from .evaluator import Evaluator

logger = logging.getLogger(__name__)

INFINITY = 10**9


class MoveResult(NamedTuple):
    from_key: int = -1
    to_key: int = -1
    score: int = -1

    @property
    def is_move(self) -> bool:
        return self.from_key >= 0 and self.to_key >= 0


NO_MOVE = MoveResult(-1, -1, -1)


@dataclass
class SearchStats:
    nodes: int = 0
    cutoffs: int = 0
    elapsed_s: float = 0.0
    depth: int = 0
    started_at: float = field(default_factory=time.perf_counter, repr=False)


class SearchCancelled(Exception):
    pass


def color_for(white: bool) -> PieceColor:
    return PieceColor.WHITE if white else PieceColor.BLACK


class AIPlayer:
    """Minimax with alpha-beta pruning over hexachess boards.

    White maximizes and black minimizes the :class:`Evaluator` score. Every
    search starts from its own copy of the board, so the caller's board is
    never read again after the search begins. The cancel event travels
    down the recursion, so one instance may serve searches on several
    threads; ``last_stats`` then holds whichever search finished last.
    """

    def __init__(self) -> None:
        self.last_stats: Optional[SearchStats] = None

    def choose_move(
        self,
        board: Board,
        white: bool,
        depth: Union[int, str],
        cancel: Optional[threading.Event] = None,
    ) -> MoveResult:
        """Pick the best move for one side, or :data:`NO_MOVE`.

        ``depth`` is a ply count or a difficulty name (easy/normal/hard).
        Depth 0 looks no further than the current board and yields its
        evaluation with sentinel keys. Setting ``cancel`` from another
        thread aborts the search with :class:`SearchCancelled`.
        """
        plies = depth_for(depth)
        color = color_for(white)
        snapshot = board.copy()

        if not snapshot.has_any_legal_move(color):
            logger.debug("No legal move for %s", color.value)
            return NO_MOVE

        stats = SearchStats(depth=plies)
        try:
            result = self.minimax(snapshot, plies, white, -INFINITY, INFINITY, stats, cancel)
        finally:
            stats.elapsed_s = time.perf_counter() - stats.started_at
            self.last_stats = stats

        logger.debug(
            "Search for %s at depth %d: %s (nodes=%d cutoffs=%d %.3fs)",
            color.value, plies, result, stats.nodes, stats.cutoffs, stats.elapsed_s,
        )
        return result

    def minimax(
        self,
        board: Board,
        depth: int,
        white: bool,
        alpha: int = -INFINITY,
        beta: int = INFINITY,
        stats: Optional[SearchStats] = None,
        cancel: Optional[threading.Event] = None,
    ) -> MoveResult:
        if stats is not None:
            stats.nodes += 1
        _guard_cancel(cancel)

        color = color_for(white)
        moves = board.legal_moves_for(color) if depth > 0 else []
        if not moves:
            return MoveResult(-1, -1, Evaluator.evaluate(board))

        best = MoveResult(-1, -1, -INFINITY if white else INFINITY)
        for from_key, to_key in moves:
            child = board.copy()
            child.move_piece(from_key, to_key)
            score = self.minimax(child, depth - 1, not white, alpha, beta, stats, cancel).score

            if white:
                if score > best.score:
                    best = MoveResult(from_key, to_key, score)
                alpha = max(alpha, best.score)
            else:
                if score < best.score:
                    best = MoveResult(from_key, to_key, score)
                beta = min(beta, best.score)
            if alpha >= beta:
                if stats is not None:
                    stats.cutoffs += 1
                break
        return best


def _guard_cancel(cancel: Optional[threading.Event]) -> None:
    if cancel is not None and cancel.is_set():
        raise SearchCancelled()
