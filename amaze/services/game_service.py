"""Game session service shared by the HTTP routes and Socket.IO handlers.

Responsibilities:
  * Creating GameInstance rows and their in-memory GameSession
  * An in-process session cache keyed by game id (rebuilt from the row on miss)
  * Persisting position / opened doors after a successful move
  * Serializing reveal sets into the wire shape

Wire shapes:
  Position          {"x": int, "y": int}
  describe payload  {"positions": [Position], "values": [int], "player": Position}
"""

from __future__ import annotations

import hashlib
import random
import threading
from collections import OrderedDict
from typing import Any, Dict, Optional

from flask import current_app

from amaze import db
from amaze.logging_utils import get_logger
from amaze.maze import GameSession, MazeConfig, Position
from amaze.maze.visibility import Reveal
from amaze.models.game_instance import GameInstance

log = get_logger("amaze.services.game")

SQLITE_MAX_INT = 9223372036854775807

_session_cache: "OrderedDict[int, GameSession]" = OrderedDict()
_session_cache_lock = threading.Lock()


def coerce_seed(payload_seed) -> int:
    """Convert provided seed (int or str) into a bounded 64-bit signed int."""
    if payload_seed is None or isinstance(payload_seed, bool):
        return random.randint(1, 1_000_000)
    if isinstance(payload_seed, int):
        return payload_seed % SQLITE_MAX_INT
    if isinstance(payload_seed, str):
        s = payload_seed.strip()
        if not s:
            return random.randint(1, 1_000_000)
        if s.isdigit():
            return int(s) % SQLITE_MAX_INT
        h = hashlib.sha256(s.encode("utf-8")).digest()
        return int.from_bytes(h[:8], "big") % SQLITE_MAX_INT
    return random.randint(1, 1_000_000)


def build_config(width: int, height: int, seed_count: Optional[int], seed: int) -> MazeConfig:
    cfg = current_app.config
    return MazeConfig(
        width=width,
        height=height,
        seed_count=seed_count,
        seed=seed,
        thickness=int(cfg.get("AMAZE_WALL_THICKNESS", 4)),
        min_seed_distance=float(cfg.get("AMAZE_MIN_SEED_DISTANCE", 6)),
        enable_metrics=bool(cfg.get("AMAZE_ENABLE_GENERATION_METRICS", True)),
    )


def start_game(width: int, height: int, seed_count: Optional[int] = None, seed=None):
    """Generate a maze and persist a new GameInstance.

    Raises InvalidSizeError before anything is written.
    Returns (instance, session).
    """
    config = build_config(width, height, seed_count, coerce_seed(seed))
    game = GameSession.new(width, height, config=config)
    instance = GameInstance(
        seed=game.seed,
        width=game.width,
        height=game.height,
        seed_count=game.seed_count,
        pos_x=game.player.x,
        pos_y=game.player.y,
        opened_doors=[],
        inventory={},
    )
    db.session.add(instance)
    db.session.commit()
    _cache_put(instance.id, game)
    log.bind(game_id=instance.id).info(event="game_started", seed=game.seed, width=width, height=height,
                                       seeds=game.seed_count, doors=game.metrics.get("doors_created"))
    return instance, game


def load_instance(game_id) -> Optional[GameInstance]:
    if not game_id:
        return None
    return db.session.get(GameInstance, game_id)


def get_cached_session(instance: GameInstance) -> GameSession:
    with _session_cache_lock:
        game = _session_cache.get(instance.id)
        if game is not None:
            _session_cache.move_to_end(instance.id)
            return game
    snap = instance.to_snapshot()
    config = build_config(instance.width, instance.height, instance.seed_count, instance.seed)
    game = GameSession.restore(snap, config=config)
    log.info(event="game_restored", game_id=instance.id, seed=instance.seed, doors_replayed=len(game.opened_doors))
    return _cache_put(instance.id, game)


def _cache_put(game_id: int, game: GameSession) -> GameSession:
    limit = int(current_app.config.get("AMAZE_SESSION_CACHE_MAX", 32))
    with _session_cache_lock:
        existing = _session_cache.get(game_id)
        if existing is not None:
            return existing
        _session_cache[game_id] = game
        while len(_session_cache) > max(1, limit):
            _session_cache.popitem(last=False)
    return game


def evict(game_id: Optional[int] = None):
    """Drop one cached session (or all of them when game_id is None)."""
    with _session_cache_lock:
        if game_id is None:
            _session_cache.clear()
        else:
            _session_cache.pop(game_id, None)


def persist(instance: GameInstance, game: GameSession):
    instance.apply_snapshot(game.snapshot())
    try:
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise


def reveal_payload(reveal: Reveal, game: GameSession) -> Dict[str, Any]:
    ordered = sorted(reveal.items(), key=lambda kv: (kv[0].x, kv[0].y))
    return {
        "positions": [pos.to_dict() for pos, _ in ordered],
        "values": [val for _, val in ordered],
        "player": game.player.to_dict(),
    }


def describe_game(game: GameSession) -> Dict[str, Any]:
    with game.lock:
        return reveal_payload(game.describe(), game)


def move_game(instance: GameInstance, game: GameSession, target: Position) -> Dict[str, Any]:
    """Apply a move, persist it and return the fresh reveal payload.

    MoveError propagates untouched; the session is unchanged in that case.
    """
    strict = bool(current_app.config.get("AMAZE_STRICT_MOVES", False))
    game_log = log.bind(game_id=instance.id)
    # Persist under the session lock so commits land in move order
    with game.lock:
        game.move(target, strict=strict)
        payload = reveal_payload(game.describe(), game)
        try:
            persist(instance, game)
        except Exception:
            # The cached session is ahead of the row; rebuild it on next access
            evict(instance.id)
            game_log.error(event="persist_failed", target=str(target))
            raise
    game_log.debug(event="moved", player=str(game.player), doors=len(game.opened_doors))
    return payload


__all__ = [
    "coerce_seed",
    "build_config",
    "start_game",
    "load_instance",
    "get_cached_session",
    "evict",
    "persist",
    "reveal_payload",
    "describe_game",
    "move_game",
]
