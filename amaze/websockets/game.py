"""Socket.IO game handlers.

Events:
    - describe: no payload; reveal cells visible from the current position
    - move: payload { position: {x, y} }

Emits:
    - reveal: describe payload { positions, values, player }
    - move_rejected: { error, code } when the move is refused
    - error: { message, field, code } for malformed payloads or no game
"""

from flask import session
from flask_socketio import emit

from amaze import socketio
from amaze.logging_utils import get_logger
from amaze.maze import MoveError, Position
from amaze.services import game_service

from .validation import MOVE, validate

log = get_logger("amaze.websockets.game")


def _current_game():
    instance = game_service.load_instance(session.get("game_id"))
    if instance is None:
        emit("error", {"message": "No game in progress", "field": None, "code": "no_game"})
        return None, None
    return instance, game_service.get_cached_session(instance)


@socketio.on("describe")
def handle_describe(data=None):
    instance, game = _current_game()
    if game is None:
        return
    emit("reveal", game_service.describe_game(game))


@socketio.on("move")
def handle_move(data):
    ok, result = validate(data or {}, MOVE)
    if not ok:
        emit("error", {"message": f"Invalid move: {result['error']}", "field": result["field"], "code": result["code"]})
        return
    instance, game = _current_game()
    if game is None:
        return
    target = Position(result["position"]["x"], result["position"]["y"])
    try:
        payload = game_service.move_game(instance, game, target)
    except MoveError as e:
        emit("move_rejected", {"error": str(e), "code": e.code})
        log.info(event="ws_move_rejected", game_id=instance.id, target=str(target), code=e.code)
        return
    emit("reveal", payload)
