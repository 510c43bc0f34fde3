"""Hexagonal chess engine: board, move generation, evaluation, and AI search.

Modules:
- keys / directions: packed cell keys and the twelve hex step functions
- cell / board: piece values, board state, move generation and check filtering
- evaluator: material evaluation of a position
- ai: Minimax with alpha-beta pruning
- tasks: background searches delivered through futures
- game: host controller working in (x, y) coordinates
"""

from .ai import AIPlayer, MoveResult, NO_MOVE, SearchStats
from .board import Board, leaves_king_safe
from .cell import Cell, Piece, PieceColor, PieceType
from .config import EngineConfig, depth_for
from .evaluator import Evaluator
from .game import Game
from .keys import decode, encode
from .tasks import SearchRunner, SearchTask

__all__ = [
    "AIPlayer",
    "Board",
    "Cell",
    "EngineConfig",
    "Evaluator",
    "Game",
    "MoveResult",
    "NO_MOVE",
    "Piece",
    "PieceColor",
    "PieceType",
    "SearchRunner",
    "SearchStats",
    "SearchTask",
    "decode",
    "depth_for",
    "encode",
    "leaves_king_safe",
]
