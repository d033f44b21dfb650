"""
project: Amaze
module: __init__.py
License: MIT

Flask application and core extensions setup.

This module wires together the Flask app, SQLAlchemy and Flask-SocketIO.
Configuration is sourced from environment variables (optionally loaded from
a .env file) with reasonable defaults for development. A local `instance/`
directory is used for SQLite and the rotating log file.
"""

import logging
import os
import uuid
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask, jsonify
from flask_socketio import SocketIO
from flask_sqlalchemy import SQLAlchemy

# Load .env if present so `SECRET_KEY`, `DATABASE_URL`, etc. can be supplied
# without exporting shell variables during development.
load_dotenv()


def _env_flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


app = Flask(__name__, instance_relative_config=True)

try:
    os.makedirs(app.instance_path, exist_ok=True)
except OSError:
    # Read-only checkouts still work with an explicit DATABASE_URL
    pass

secret_key = os.getenv("SECRET_KEY", "dev-secret-change-me")
database_url = os.getenv("DATABASE_URL")

# During pytest runs, isolate to a separate database file
if not database_url:
    db_filename = "amaze_test.db" if os.getenv("PYTEST_CURRENT_TEST") else "amaze.db"
    database_url = f"sqlite:///{(Path(app.instance_path) / db_filename).as_posix()}"

app.config.update(
    SECRET_KEY=secret_key,
    SQLALCHEMY_DATABASE_URI=database_url,
    SQLALCHEMY_TRACK_MODIFICATIONS=False,
    # Maze defaults / feature flags
    AMAZE_DEFAULT_WIDTH=_env_int("AMAZE_DEFAULT_WIDTH", 40),
    AMAZE_DEFAULT_HEIGHT=_env_int("AMAZE_DEFAULT_HEIGHT", 40),
    AMAZE_WALL_THICKNESS=_env_int("AMAZE_WALL_THICKNESS", 4),
    AMAZE_MIN_SEED_DISTANCE=_env_int("AMAZE_MIN_SEED_DISTANCE", 6),
    AMAZE_STRICT_MOVES=_env_flag("AMAZE_STRICT_MOVES"),
    AMAZE_SESSION_CACHE_MAX=_env_int("AMAZE_SESSION_CACHE_MAX", 32),
    AMAZE_ENABLE_GENERATION_METRICS=_env_flag("AMAZE_ENABLE_GENERATION_METRICS", "1"),
    # Upper bounds on client-requested mazes
    AMAZE_MAX_SIZE=_env_int("AMAZE_MAX_SIZE", 200),
    AMAZE_MAX_SEED_COUNT=_env_int("AMAZE_MAX_SEED_COUNT", 500),
)

engine_opts = {}
if database_url.startswith("sqlite:///") and ":memory:" not in database_url:
    engine_opts["connect_args"] = {
        "timeout": 10,  # busy timeout (seconds) for sqlite
        "check_same_thread": False,  # socketio handlers may run on other threads
    }
db = SQLAlchemy(app, session_options={"expire_on_commit": False}, engine_options=engine_opts)

# Let Flask-SocketIO select best async_mode based on installed deps (eventlet/gevent/threading)
socketio = SocketIO(
    app,
    async_mode=os.getenv("SOCKETIO_ASYNC_MODE") or None,
    cors_allowed_origins=os.getenv("CORS_ALLOWED_ORIGINS", "*"),
    ping_interval=20,
    ping_timeout=10,
)

# Register HTTP blueprints (import after app/db created)
from amaze.routes.game_api import bp_game  # noqa: E402

app.register_blueprint(bp_game)

# Import websocket handlers so their event decorators register with Socket.IO (side-effect)
from amaze.websockets import game as _ws_game  # noqa: F401,E402


def create_app():
    """Return the Flask app instance with its tables created."""
    with app.app_context():
        from amaze.models import GameInstance  # noqa: F401

        db.create_all()
    return app


@app.errorhandler(500)
def internal_error(e):
    error_id = uuid.uuid4().hex[:8]
    logging.exception("Unhandled exception (id=%s)", error_id)
    return jsonify({"error": "internal server error", "error_id": error_id}), 500
