import json

from colorlines.serialization import game_state_from_dict

from main import AutoplaySession, main


def test_autoplay_session_plays_legal_turns():
    session = AutoplaySession(seed=4)
    played = session.play(20)
    assert played == 20
    state = session.state
    assert state.statistics.turns_count == 20
    assert state.timer_active
    assert state.timer > 0


def test_autoplay_runs_until_game_over():
    session = AutoplaySession(seed=1)
    played = session.play(2000)
    assert session.state.game_over
    assert played == session.state.statistics.turns_count
    assert not session.play_turn()


def test_new_game_after_game_over():
    session = AutoplaySession(seed=1)
    session.play(2000)
    high = session.state.high_score
    session.new_game()
    assert not session.state.game_over
    assert session.state.high_score == high
    assert session.play_turn()


def test_main_prints_summary_and_saves(tmp_path, capsys):
    target = tmp_path / "state.json"
    assert main(["--seed", "3", "--turns", "5", "--save", str(target)]) == 0
    out = capsys.readouterr().out
    assert "turns=5" in out
    restored = game_state_from_dict(json.loads(target.read_text(encoding="utf-8")))
    assert restored.statistics.turns_count == 5


def test_main_resumes_from_snapshot(tmp_path, capsys):
    target = tmp_path / "state.json"
    main(["--seed", "3", "--turns", "5", "--save", str(target)])
    capsys.readouterr()
    assert main(["--seed", "3", "--turns", "2", "--load", str(target), "--save", str(target)]) == 0
    restored = game_state_from_dict(json.loads(target.read_text(encoding="utf-8")))
    assert restored.statistics.turns_count == 7


def test_main_reports_bad_snapshot(tmp_path):
    target = tmp_path / "broken.json"
    target.write_text("{}", encoding="utf-8")
    assert main(["--load", str(target)]) == 2


def test_main_reports_undecodable_snapshot(tmp_path):
    target = tmp_path / "binary.json"
    target.write_bytes(b'{"board": "\xff\xfe"}')
    assert main(["--load", str(target)]) == 2
