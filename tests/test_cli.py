import io
import json

import pytest

from keymaze import cli
from keymaze.config import Settings
from keymaze.maze import factory
from keymaze.records import BestTimeStore


@pytest.fixture(autouse=True)
def isolated_data_dir(tmp_path, monkeypatch):
    monkeypatch.setenv("KEYMAZE_DATA_DIR", str(tmp_path / "data"))
    return tmp_path / "data"


@pytest.fixture()
def store(tmp_path):
    return BestTimeStore(tmp_path / "best_time.json")


def run_game(store, text, **kwargs):
    out = io.StringIO()
    game = cli.TerminalGame(Settings(), store, stdin=io.StringIO(text), stdout=out, **kwargs)
    code = game.run()
    return code, out.getvalue()


def test_results_without_record():
    out = io.StringIO()
    assert cli.main(["results"], stdout=out) == 0
    assert out.getvalue() == "Your best time: No record\n"


def test_generate_prints_grid():
    out = io.StringIO()
    assert cli.main(["generate", "--width", "5", "--height", "5", "--seed", "3"], stdout=out) == 0
    lines = out.getvalue().splitlines()
    # 5 rows separated by 4 spacer lines
    assert len(lines) == 9
    assert lines[0].startswith("P")


def test_generate_is_reproducible_with_seed():
    a, b = io.StringIO(), io.StringIO()
    cli.main(["generate", "--seed", "21"], stdout=a)
    cli.main(["generate", "--seed", "21"], stdout=b)
    assert a.getvalue() == b.getvalue()


def test_generate_json_summary():
    out = io.StringIO()
    argv = ["generate", "--width", "6", "--height", "5", "--seed", "4", "--json"]
    assert cli.main(argv, stdout=out) == 0
    summary = json.loads(out.getvalue())
    assert (summary["width"], summary["height"]) == (6, 5)
    assert len(summary["masks"]) == 5
    assert all(len(row) == 6 for row in summary["masks"])
    assert summary["masks"][4][5] == 15
    assert len(summary["keys"]) == 1 and len(summary["doors"]) == 1
    assert isinstance(summary["signature"], str)


def test_generate_rejects_unsupported_size():
    out = io.StringIO()
    assert cli.main(["generate", "--width", "4", "--height", "5"], stdout=out) == 1
    assert out.getvalue() == ""


def test_bad_settings_file_is_an_error(tmp_path):
    bad = tmp_path / "settings.yaml"
    bad.write_text("bogus_key: 1\n", encoding="utf-8")
    assert cli.main(["--settings", str(bad), "results"], stdout=io.StringIO()) == 1


def test_version_flag(capsys):
    with pytest.raises(SystemExit) as exc:
        cli.parse_args(["--version"])
    assert exc.value.code == 0
    assert "keymaze" in capsys.readouterr().out


def test_menu_results_then_exit(store):
    code, output = run_game(store, "2\n3\n")
    assert code == 0
    assert output.count(cli.MENU_TEXT) == 2
    assert "Your best time: No record" in output
    assert output.rstrip().endswith("Goodbye!")


def test_end_of_input_leaves_cleanly(store):
    code, output = run_game(store, "")
    assert code == 0
    assert "Goodbye!" in output


def test_unknown_menu_choice(store):
    _, output = run_game(store, "7\nexit\n")
    assert "Unknown choice: 7" in output


def test_full_game_sets_record(store, make_session, monkeypatch):
    monkeypatch.setattr(
        cli, "new_session", lambda *a, **kw: make_session(keys=[(1, 1)], doors=[(2, 2)])
    )
    moves = "d\ns\nd\ns\nd\nd\ns\ns\n"
    code, output = run_game(store, "1\n5\n5\n" + moves + "2\n3\n")

    assert code == 0
    assert cli.GAME_HELP in output
    assert "You found a key!" in output
    assert "You used a key to open the door!" in output
    assert "Congratulations! New record time: 0 seconds" in output
    assert "Your best time: 0 seconds" in output
    assert store.best_time() == 0.0


def test_slower_game_does_not_replace_record(store, make_session, monkeypatch):
    store.submit(0.0)
    monkeypatch.setattr(cli, "new_session", lambda *a, **kw: make_session())
    _, output = run_game(store, "1\n5\n5\nd\ns\nd\ns\nd\nd\ns\ns\n3\n")
    assert "Congratulations! You completed the maze in 0 seconds" in output


def test_game_commands(store, make_session, monkeypatch):
    monkeypatch.setattr(cli, "new_session", lambda *a, **kw: make_session(keys=[(4, 0)], doors=[(2, 2)]))
    text = "1\n5\n5\njump\nd\ns\nd\ns\nr\nq\n3\n"
    code, output = run_game(store, text)
    assert code == 0
    assert "Unknown command: jump" in output
    assert "You need a key to open this door!" in output
    assert "Maze regenerated." in output
    assert output.rstrip().endswith("Goodbye!")


def test_exit_with_locked_door_message(store, make_session, monkeypatch):
    monkeypatch.setattr(cli, "new_session", lambda *a, **kw: make_session(doors=[(0, 4)]))
    _, output = run_game(store, "1\n5\n5\nd\ns\nd\ns\nd\nd\ns\ns\nq\n3\n")
    assert "You need to open all doors to win!" in output
    assert "Congratulations" not in output


def test_end_of_input_mid_game(store, make_session, monkeypatch):
    monkeypatch.setattr(cli, "new_session", lambda *a, **kw: make_session())
    code, output = run_game(store, "1\n5\n5\nd\n")
    assert code == 0
    assert "Goodbye!" not in output


def test_results_with_corrupt_record(isolated_data_dir):
    isolated_data_dir.mkdir(parents=True)
    (isolated_data_dir / "best_time.json").write_bytes(b"\xff\xfe\x00garbage")
    out = io.StringIO()
    assert cli.main(["results"], stdout=out) == 0
    assert out.getvalue() == "Your best time: No record\n"


def test_debug_logging_stays_off_stdout(capsys):
    argv = ["--debug", "generate", "--width", "5", "--height", "5", "--seed", "2", "--json"]
    assert cli.main(argv) == 0
    captured = capsys.readouterr()
    summary = json.loads(captured.out)
    assert summary["width"] == 5
    assert "DEBUG" in captured.err


def test_generation_failure_exits_with_error(monkeypatch, tmp_path):
    monkeypatch.setattr(factory, "is_solvable", lambda *a, **k: False)
    user = tmp_path / "settings.yaml"
    user.write_text("max_generation_attempts: 2\n", encoding="utf-8")
    out = io.StringIO()
    code = cli.main(["--settings", str(user), "generate", "--width", "5", "--height", "5"], stdout=out)
    assert code == 1
    assert out.getvalue() == ""
