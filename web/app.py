from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

from flask import Flask, jsonify, request

# Ensure project root is importable when running this file directly
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from hexachess import EngineConfig, Game, depth_for
from hexachess.cell import PieceColor
from hexachess.keys import decode
from hexachess.tasks import SearchRunner

logger = logging.getLogger(__name__)


def _coord(value) -> tuple:
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise ValueError(f"Expected [x, y], got {value!r}")
    try:
        return int(value[0]), int(value[1])
    except (TypeError, ValueError):
        raise ValueError(f"Expected integer coordinates, got {value!r}") from None


def create_app(config: Optional[EngineConfig] = None) -> Flask:
    app = Flask(__name__)

    engine_config = config or EngineConfig.from_env()
    game = Game(runner=SearchRunner(max_workers=engine_config.max_workers))
    state = {"human": PieceColor.WHITE}

    def _depth(payload) -> int:
        if "depth" in payload:
            return depth_for(int(payload["depth"]))
        return depth_for(payload.get("difficulty") or engine_config.default_difficulty)

    def _ai_reply(depth: int) -> Optional[list]:
        """Let the AI move if it is its turn; returns the move played."""
        if game.turn is state["human"] or game.is_game_over():
            return None
        # search runs on a snapshot in the worker pool
        result = game.best_move_async(game.turn, depth).result()
        if result is None or not game.push_result(result):
            return None
        return [list(decode(result.from_key)), list(decode(result.to_key))]

    @app.errorhandler(ValueError)
    def bad_request(exc):
        logger.warning("Bad request: %s", exc)
        return jsonify({"error": str(exc)}), 400

    @app.post("/api/new")
    def api_new():
        data = request.get_json(silent=True) or {}
        standard = bool(data.get("standard", True))
        human = PieceColor.parse(data.get("color") or "white")
        if human is PieceColor.ABSENT:
            return jsonify({"error": "color must be white or black"}), 400
        state["human"] = human
        depth = _depth(data)

        game.reset(standard=standard)

        # If the human plays black, the AI (white) opens
        ai_move = _ai_reply(depth) if standard else None

        snap = game.snapshot()
        snap["ai_move"] = ai_move
        return jsonify(snap)

    @app.post("/api/place")
    def api_place():
        data = request.get_json(silent=True) or {}
        x, y = _coord([data.get("x"), data.get("y")])
        if not game.place_piece(x, y, data.get("type") or "", data.get("color") or ""):
            return jsonify({"error": f"Not a board cell: ({x}, {y})"}), 400
        return jsonify(game.snapshot())

    @app.get("/api/moves")
    def api_moves():
        x = request.args.get("x", type=int)
        y = request.args.get("y", type=int)
        if x is None or y is None:
            return jsonify({"error": "Missing x or y"}), 400
        return jsonify({"moves": [list(c) for c in game.legal_moves(x, y)]})

    @app.get("/api/state")
    def api_state():
        return jsonify(game.snapshot())

    @app.post("/api/move")
    def api_move():
        payload = request.get_json(silent=True) or {}
        if "from" not in payload or "to" not in payload:
            return jsonify({"error": "Missing move"}), 400
        depth = _depth(payload)

        try:
            game.push_move(_coord(payload["from"]), _coord(payload["to"]))
        except ValueError as exc:
            return jsonify({"error": str(exc)}), 400

        snap_ai_move = _ai_reply(depth)
        snap = game.snapshot()
        snap["ai_move"] = snap_ai_move
        return jsonify(snap)

    return app


app = create_app()


if __name__ == "__main__":
    logging.basicConfig(level=EngineConfig.from_env().log_level)
    app.run(host="127.0.0.1", port=5000, debug=True)
