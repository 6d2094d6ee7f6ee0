from __future__ import annotations

from flask import Flask, jsonify, request
import os
import sys
from pathlib import Path
from typing import Mapping, Optional

# Ensure project root is importable when running this file directly
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from engine import AIPlayer, InvalidMove, Mark, SessionStore
from engine.sessions import DEFAULT_MAX_SESSIONS

DEFAULT_SESSION = "default"


def create_app(config: Optional[Mapping[str, object]] = None) -> Flask:
    app = Flask(__name__)
    app.config.update(SEARCH_PRUNING=False, MAX_SESSIONS=DEFAULT_MAX_SESSIONS)
    app.config.from_prefixed_env("TICTACTOE")
    if config:
        app.config.update(config)

    store = SessionStore(
        ai=AIPlayer(mark=Mark.O, pruning=bool(app.config["SEARCH_PRUNING"])),
        max_sessions=app.config["MAX_SESSIONS"],
    )
    app.extensions["tictactoe_sessions"] = store

    def session_id() -> str:
        return request.args.get("session") or DEFAULT_SESSION

    @app.get("/api/game")
    def api_game():
        with store.session(session_id(), create=False) as game:
            return jsonify(game.snapshot())

    @app.post("/api/move")
    def api_move():
        payload = request.get_json(silent=True) or {}
        if not isinstance(payload, dict) or "position" not in payload:
            return jsonify({"error": "Missing position"}), 400
        position = payload["position"]

        sid = session_id()
        with store.session(sid) as game:
            try:
                snap = game.accept_move(position)
            except InvalidMove as exc:
                app.logger.info("Rejected move %r in session %s: %s", position, sid, exc)
                return jsonify({"error": str(exc)}), 400

        app.logger.info(
            "Session %s: human played %s, AI replied %s", sid, position, snap["ai_move"]
        )
        if snap["game_over"]:
            app.logger.info("Session %s finished, winner: %s", sid, snap["winner"])
        return jsonify(snap)

    @app.post("/api/reset")
    def api_reset():
        sid = session_id()
        snap = store.reset(sid)
        app.logger.info("Session %s reset", sid)
        return jsonify(snap)

    @app.get("/api/hint")
    def api_hint():
        with store.session(session_id(), create=False) as game:
            try:
                position = game.hint()
            except InvalidMove as exc:
                return jsonify({"error": str(exc)}), 400
        return jsonify({"position": position})

    return app


app = create_app()

if __name__ == "__main__":
    app.run(host=os.environ.get("HOST", "0.0.0.0"), port=int(os.environ.get("PORT", 3000)))
