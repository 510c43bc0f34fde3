"""Background move search.

A :class:`SearchRunner` owns a small thread pool. Each submission copies the
board immediately, so the caller may keep using (or mutating) its own board
while the search runs on the snapshot. Results are handed back through a
future and, optionally, a callback that fires at most once.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import CancelledError, Future, ThreadPoolExecutor
from typing import Callable, Optional, Union

from .ai import AIPlayer, MoveResult, SearchCancelled
from .board import Board

logger = logging.getLogger(__name__)

Callback = Callable[[MoveResult], None]


class SearchTask:
    """Handle on one in-flight search."""

    def __init__(self, future: "Future[MoveResult]", cancel: threading.Event,
                 callback: Optional[Callback] = None) -> None:
        self._future = future
        self._cancel = cancel
        self._callback = callback
        self._lock = threading.Lock()
        self._delivered = False
        future.add_done_callback(self._on_done)

    @property
    def abandoned(self) -> bool:
        return self._cancel.is_set()

    def done(self) -> bool:
        return self._future.done()

    def result(self, timeout: Optional[float] = None) -> Optional[MoveResult]:
        """Block for the search result; ``None`` if the task was abandoned."""
        if self._cancel.is_set():
            return None
        try:
            result = self._future.result(timeout)
        except (CancelledError, SearchCancelled):
            return None
        return None if self._cancel.is_set() else result

    def abandon(self) -> None:
        """Stop caring about this search without waiting for it."""
        self._cancel.set()
        self._future.cancel()
        logger.debug("Search task abandoned")

    def _on_done(self, future: "Future[MoveResult]") -> None:
        if future.cancelled() or self._cancel.is_set():
            return
        if future.exception() is not None:
            logger.error("Search task failed", exc_info=future.exception())
            return
        with self._lock:
            if self._delivered:
                return
            self._delivered = True
        if self._callback is not None:
            self._callback(future.result())


class SearchRunner:
    def __init__(self, max_workers: int = 1) -> None:
        self._executor = ThreadPoolExecutor(max_workers=max_workers,
                                            thread_name_prefix="hexachess-search")

    def submit(
        self,
        board: Board,
        white: bool,
        depth: Union[int, str],
        callback: Optional[Callback] = None,
    ) -> SearchTask:
        snapshot = board.copy()
        cancel = threading.Event()
        future = self._executor.submit(self._run, snapshot, white, depth, cancel)
        logger.debug("Submitted search for %s at depth %s",
                     "white" if white else "black", depth)
        return SearchTask(future, cancel, callback)

    @staticmethod
    def _run(board: Board, white: bool, depth: Union[int, str],
             cancel: threading.Event) -> MoveResult:
        return AIPlayer().choose_move(board, white, depth, cancel=cancel)

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> "SearchRunner":
        return self

    def __exit__(self, *exc_info) -> None:
        self.shutdown()
