import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

# Must be set before the Flask app module is imported
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

from amaze import create_app  # noqa: E402
from amaze.services import game_service  # noqa: E402


@pytest.fixture(scope="session")
def test_app():
    app = create_app()
    app.config.update({"TESTING": True, "AMAZE_STRICT_MOVES": False})
    return app


@pytest.fixture(autouse=True)
def _push_app_context(test_app):
    ctx = test_app.app_context()
    ctx.push()
    try:
        yield
    finally:
        ctx.pop()


@pytest.fixture(autouse=True)
def _clear_session_cache():
    """Cached sessions must not leak between tests (ids restart per DB)."""
    game_service.evict()
    yield
    game_service.evict()


@pytest.fixture()
def client(test_app):
    return test_app.test_client()


@pytest.fixture()
def game_client(client):
    """Client with a small deterministic game already started."""
    r = client.post("/api/game/start", json={"width": 20, "height": 20, "seed_count": 5, "seed": 4242})
    assert r.status_code == 200, r.get_json()
    return client
