import importlib
import json
import sys

import pytest

# run.py is imported as a module; start_server is patched so no networking starts.


@pytest.fixture()
def run_module():
    # Clean import each time (run.py reads VERSION once)
    if "run" in sys.modules:
        del sys.modules["run"]
    return importlib.import_module("run")


def test_version_flag_outputs_version(run_module, capsys):
    ver = run_module.__version__
    with pytest.raises(SystemExit) as exc:
        run_module.parse_args(["--version"])
    assert exc.value.code == 0
    out = capsys.readouterr().out
    assert ver in out
    assert "Amaze Server" in out


def test_default_command_is_server(run_module):
    ns = run_module.parse_args([])
    assert ns.command == "server"


def test_server_main_invokes_start_server(monkeypatch, run_module, capsys):
    calls = {}

    def fake_start_server(host, port, debug):
        calls.update(host=host, port=port, debug=debug)

    monkeypatch.setenv("PORT", "5555")
    monkeypatch.setenv("HOST", "127.0.0.1")
    import amaze.server as server_mod

    monkeypatch.setattr(server_mod, "start_server", fake_start_server)

    assert run_module.main(["server"]) == 0
    assert calls == {"host": "127.0.0.1", "port": 5555, "debug": False}
    assert "Amaze Server Bootup" in capsys.readouterr().out


def test_server_main_debug_and_port_flags(monkeypatch, run_module):
    calls = {}

    def fake_start_server(host, port, debug):
        calls.update(port=port, debug=debug)

    import amaze.server as server_mod

    monkeypatch.setattr(server_mod, "start_server", fake_start_server)
    run_module.main(["server", "--debug", "--port", "6123"])
    assert calls == {"port": 6123, "debug": True}


def test_generate_prints_summary(run_module, capsys):
    assert run_module.main(["generate", "--width", "20", "--height", "22", "--seed", "5", "--rows"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["seed"] == 5
    assert (data["width"], data["height"]) == (20, 22)
    assert data["seeds"] >= 2
    assert sum(data["cells"].values()) == 20 * 22
    assert data["cells"]["door"] == data["metrics"]["doors_created"]
    assert len(data["rows"]) == 22 and len(data["rows"][0]) == 20


def test_generate_rejects_small_maze(run_module, capsys):
    assert run_module.main(["generate", "--width", "10", "--height", "10"]) == 2
    assert "[ERROR]" in capsys.readouterr().err


def test_env_file_argument(monkeypatch, tmp_path, run_module):
    env_file = tmp_path / ".env"
    env_file.write_text("HOST=0.0.0.0\nPORT=6001\n")
    monkeypatch.setenv("PORT", "0")
    monkeypatch.delenv("PORT")
    calls = {}

    def fake_start_server(host, port, debug):
        calls.update(host=host, port=port)

    import amaze.server as server_mod

    monkeypatch.setattr(server_mod, "start_server", fake_start_server)
    run_module.main(["--env-file", str(env_file), "server"])
    assert calls["port"] == 6001
