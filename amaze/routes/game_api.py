"""
project: Amaze
module: game_api.py
License: MIT

Maze game API routes.

The active game id lives in the Flask session cookie. All responses are JSON;
rejected actions return 400 with ``{"error": str, "code": str}``.
"""

from flask import Blueprint, current_app, jsonify, request, session

from amaze.maze import InvalidSizeError, MoveError, Position, value_to_type
from amaze.services import game_service
from amaze.logging_utils import get_logger

log = get_logger("amaze.routes.game")

bp_game = Blueprint("game", __name__)


def _bad_request(message: str, code: str):
    return jsonify({"error": message, "code": code}), 400


def _no_game():
    return jsonify({"error": "No game in progress", "code": "no_game"}), 404


def _int_field(data: dict, name: str, default):
    value = data.get(name)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer")
    return value


@bp_game.route("/api/game/start", methods=["POST"])
def start_game():
    """Start a new game, replacing the one tied to this session.

    Body JSON (all optional):
      { "width": int, "height": int, "seed_count": int, "seed": int|str }
    Response: { "game_id", "seed", "cols", "rows", "player": {x,y} }
    """
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return _bad_request("request body must be a JSON object", "invalid_request")
    try:
        width = _int_field(data, "width", current_app.config["AMAZE_DEFAULT_WIDTH"])
        height = _int_field(data, "height", current_app.config["AMAZE_DEFAULT_HEIGHT"])
        seed_count = _int_field(data, "seed_count", None)
    except ValueError as e:
        return _bad_request(str(e), "invalid_request")
    max_size = current_app.config["AMAZE_MAX_SIZE"]
    if width > max_size or height > max_size:
        log.info(event="start_rejected", width=width, height=height, limit=max_size)
        return _bad_request(f"maze size {width}x{height} exceeds the {max_size}x{max_size} limit", "invalid_size")
    max_seeds = current_app.config["AMAZE_MAX_SEED_COUNT"]
    if seed_count is not None and not 0 <= seed_count <= max_seeds:
        log.info(event="start_rejected", seed_count=seed_count, limit=max_seeds)
        return _bad_request(f"seed_count must be between 0 and {max_seeds}", "invalid_seed_count")
    try:
        instance, game = game_service.start_game(width, height, seed_count, data.get("seed"))
    except InvalidSizeError as e:
        log.info(event="start_rejected", width=width, height=height)
        return _bad_request(str(e), e.code)
    previous = session.get("game_id")
    if previous:
        game_service.evict(previous)
    session["game_id"] = instance.id
    return jsonify(
        {
            "game_id": instance.id,
            "seed": game.seed,
            "cols": game.width,
            "rows": game.height,
            "player": game.player.to_dict(),
        }
    )


@bp_game.route("/api/game/describe")
def describe():
    """Return cells revealed since the last describe call.

    Response: { "positions": [{x,y}...], "values": [int...], "player": {x,y} }
    A second call without an intervening move returns empty arrays.
    """
    instance = game_service.load_instance(session.get("game_id"))
    if not instance:
        return _no_game()
    game = game_service.get_cached_session(instance)
    return jsonify(game_service.describe_game(game))


@bp_game.route("/api/game/move", methods=["POST"])
def move():
    """Move the player to a target cell.

    Body JSON: { "position": {"x": int, "y": int} }
    Moving onto a door crosses it. On success the response is the describe
    payload for the new position.
    """
    instance = game_service.load_instance(session.get("game_id"))
    if not instance:
        return _no_game()
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return _bad_request("failed to parse request body", "invalid_request")
    try:
        target = Position.from_dict(data.get("position"))
    except ValueError as e:
        return _bad_request(f"Move failed: {e}", "invalid_move")
    game = game_service.get_cached_session(instance)
    try:
        payload = game_service.move_game(instance, game, target)
    except MoveError as e:
        log.info(event="move_rejected", game_id=instance.id, target=str(target), code=e.code)
        return _bad_request(f"Move failed: {e}", e.code)
    return jsonify(payload)


@bp_game.route("/api/game/state")
def state():
    """Current game metadata without revealing anything new."""
    instance = game_service.load_instance(session.get("game_id"))
    if not instance:
        return _no_game()
    game = game_service.get_cached_session(instance)
    with game.lock:
        tile = game.tile()
        return jsonify(
            {
                "game_id": instance.id,
                "seed": game.seed,
                "cols": game.width,
                "rows": game.height,
                "player": game.player.to_dict(),
                "tile": value_to_type(tile),
                "opened_doors": [d.to_dict() for d in game.opened_doors],
            }
        )


@bp_game.route("/api/game/metrics")
def metrics():
    """Generation metrics for the active game (empty when metrics are disabled)."""
    instance = game_service.load_instance(session.get("game_id"))
    if not instance:
        return _no_game()
    game = game_service.get_cached_session(instance)
    return jsonify({"seed": game.seed, "size": [game.width, game.height], "metrics": game.metrics})
