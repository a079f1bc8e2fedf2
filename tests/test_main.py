from underflow.main import main


def test_match_prints_result(capsys):
    code = main(["match", "--size", "3", "--difficulty", "easy", "medium", "--seed", "4",
                 "--max-moves", "60", "--log-level", "WARNING"])
    assert code == 0
    out = capsys.readouterr().out
    assert "P0: Easy (random)" in out
    assert "wins!" in out or "Draw." in out


def test_match_rejects_bad_seat_count(capsys):
    assert main(["match", "--difficulty", "easy"]) == 2
    assert "Unsupported player count" in capsys.readouterr().err


def test_match_rejects_unknown_difficulty(capsys):
    assert main(["match", "--difficulty", "easy", "brutal"]) == 2


def test_unknown_command_prints_usage(capsys):
    assert main(["tournament"]) == 2
    assert "Usage" in capsys.readouterr().out
