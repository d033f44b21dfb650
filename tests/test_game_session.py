from amaze.maze import DOOR, FLOOR, GameSession, MazeConfig, Position
from amaze.maze.session import START


def test_new_session_starts_at_origin():
    s = GameSession.new(20, 20, 5, seed=7)
    assert s.player == START == Position(0, 0)
    assert (s.width, s.height) == (20, 20)
    assert s.seed == 7 and s.seed_count == 5
    assert s.inventory == {}
    assert s.metrics["doors_created"] >= 1


def test_config_overrides_positional_size():
    s = GameSession.new(0, 0, config=MazeConfig(width=24, height=21, seed=3))
    assert (s.width, s.height) == (24, 21)
    assert s.seed_count == 10


def test_snapshot_shape():
    s = GameSession.new(20, 20, 5, seed=7)
    s.inventory["lantern"] = True
    snap = s.snapshot()
    assert snap == {
        "seed": 7,
        "width": 20,
        "height": 20,
        "seed_count": 5,
        "player": {"x": 0, "y": 0},
        "opened_doors": [],
        "inventory": {"lantern": True},
    }


def test_restore_replays_doors_and_position():
    original = GameSession.new(20, 20, 5, seed=7)
    doors = list(original.grid.positions(DOOR))
    assert doors
    snap = original.snapshot()
    snap["opened_doors"] = [doors[0].to_dict()]
    snap["player"] = {"x": 3, "y": 4}

    restored = GameSession.restore(snap)
    assert restored.player == Position(3, 4)
    assert restored.opened_doors == [doors[0]]
    assert restored.grid.get(doors[0]) == FLOOR
    # everything else regenerates identically
    expected = original.grid.copy()
    expected.set(doors[0], FLOOR)
    assert restored.grid.to_rows() == expected.to_rows()


def test_restore_ignores_out_of_bounds_player():
    snap = GameSession.new(20, 20, 5, seed=9).snapshot()
    snap["player"] = {"x": 50, "y": 0}
    assert GameSession.restore(snap).player == START


def test_restore_starts_with_nothing_revealed():
    s = GameSession.new(20, 20, 5, seed=11)
    first = s.describe()
    restored = GameSession.restore(s.snapshot())
    assert restored.describe() == first
