import pytest

from amaze import app, socketio
from amaze.websockets.validation import MOVE, validate


@pytest.fixture()
def ws(game_client):
    test_client = socketio.test_client(app, flask_test_client=game_client)
    yield test_client
    test_client.disconnect()


def _extract(event_name, received):
    return [p["args"][0] for p in received if p["name"] == event_name]


def test_describe_emits_reveal(ws):
    ws.emit("describe")
    reveals = _extract("reveal", ws.get_received())
    assert reveals
    assert reveals[0]["player"] == {"x": 0, "y": 0}
    assert reveals[0]["positions"]
    ws.emit("describe")
    again = _extract("reveal", ws.get_received())
    assert again and again[0]["positions"] == []


def test_move_emits_reveal(ws):
    ws.emit("describe")
    first = _extract("reveal", ws.get_received())[0]
    target = next(p for p, v in zip(first["positions"], first["values"]) if v == 0 and p != {"x": 0, "y": 0})
    ws.emit("move", {"position": target})
    reveals = _extract("reveal", ws.get_received())
    assert reveals and reveals[0]["player"] == target


def test_move_rejected(ws):
    ws.emit("move", {"position": {"x": -1, "y": 0}})
    rejected = _extract("move_rejected", ws.get_received())
    assert rejected and rejected[0]["code"] == "invalid_move"


def test_move_bad_payload(ws):
    ws.emit("move", {"position": {"x": "a", "y": 0}})
    errors = _extract("error", ws.get_received())
    assert errors
    assert errors[0]["field"] == "position.x"
    assert errors[0]["code"] == "type"


def test_no_game_error(client):
    test_client = socketio.test_client(app, flask_test_client=client)
    try:
        test_client.emit("describe")
        errors = _extract("error", test_client.get_received())
        assert errors and errors[0]["code"] == "no_game"
    finally:
        test_client.disconnect()


def test_validate_move_schema():
    ok, data = validate({"position": {"x": 1, "y": 2}}, MOVE)
    assert ok and data == {"position": {"x": 1, "y": 2}}
    ok, err = validate({}, MOVE)
    assert not ok and err["code"] == "required"
    ok, err = validate({"position": {"x": True, "y": 2}}, MOVE)
    assert not ok and err["field"] == "position.x"
    ok, err = validate("nope", MOVE)
    assert not ok and err["field"] == "__root__"


def test_validate_only_knows_int_and_dict():
    ok, err = validate({"name": "bob"}, {"name": ("str", True)})
    assert not ok and err["code"] == "schema"
    ok, data = validate({"n": 5}, {"n": ("int", True), "opt": ("dict", False)})
    assert ok and data == {"n": 5}
