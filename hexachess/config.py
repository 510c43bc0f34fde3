"""Engine constants and runtime configuration.

Board geometry and piece values are fixed. Runtime knobs (default AI
difficulty, worker pool size, log level) live on :class:`EngineConfig` and
can be overridden from ``HEXACHESS_*`` environment variables.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Union

# Board geometry: 11 columns (0..10) around the center column 5
MEDIAN = 5
MAX_INDEX = 10

# Material values, indexed by piece name
PIECE_VALUES: Dict[str, int] = {
    "pawn": 1,
    "knight": 3,
    "bishop": 3,
    "rook": 5,
    "queen": 9,
    "king": 100,
}

# AI difficulty -> minimax depth
DIFFICULTY_DEPTHS: Dict[str, int] = {
    "easy": 2,
    "normal": 3,
    "hard": 4,
}

DEFAULT_DIFFICULTY = "easy"


def depth_for(difficulty: Union[str, int, None]) -> int:
    """Resolve a difficulty name or an explicit depth to a search depth."""
    if difficulty is None:
        return DIFFICULTY_DEPTHS[DEFAULT_DIFFICULTY]
    if isinstance(difficulty, int):
        if difficulty < 0:
            raise ValueError(f"Search depth must be >= 0, got {difficulty}")
        return difficulty
    name = difficulty.strip().lower()
    if name.isdigit():
        return int(name)
    try:
        return DIFFICULTY_DEPTHS[name]
    except KeyError:
        raise ValueError(f"Unknown difficulty: {difficulty}") from None


@dataclass
class EngineConfig:
    default_difficulty: str = DEFAULT_DIFFICULTY
    max_workers: int = 1
    log_level: str = "WARNING"

    @property
    def default_depth(self) -> int:
        return depth_for(self.default_difficulty)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EngineConfig":
        env = os.environ if environ is None else environ
        config = cls()
        if env.get("HEXACHESS_DIFFICULTY"):
            config.default_difficulty = env["HEXACHESS_DIFFICULTY"].strip().lower()
            # fail early on a bad value
            depth_for(config.default_difficulty)
        if env.get("HEXACHESS_MAX_WORKERS"):
            config.max_workers = max(1, int(env["HEXACHESS_MAX_WORKERS"]))
        if env.get("HEXACHESS_LOG_LEVEL"):
            config.log_level = env["HEXACHESS_LOG_LEVEL"].strip().upper()
        return config
