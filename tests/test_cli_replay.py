def test_cli_replays_and_scores(capsys):
    from blackbox_cli import main

    rc = main(["--size", "5x5", "--ball", "1,1", "--ball", "2,2",
               "F3", "F3", "T2,2", "T3,3", "R"])
    out = capsys.readouterr().out
    assert rc == 0
    assert "Rejected: F3" in out
    assert "CORRECT!" in out
    assert "right=2 wrong=0 missed=0 consistent=True" in out


def test_cli_reads_moves_file(tmp_path, capsys):
    from blackbox_cli import main

    moves = tmp_path / "moves.txt"
    moves.write_text("# opening\nF0\nT1,1\n", encoding="utf-8")
    rc = main(["--size", "4x4", "--ball", "0,0", "--moves-file", str(moves)])
    out = capsys.readouterr().out
    assert rc == 0
    assert "Click button to verify guesses." in out


def test_cli_bad_input(capsys):
    from blackbox_cli import main

    assert main(["--size", "5x5", "--ball", "9,9"]) == 1
    assert "Bad puzzle" in capsys.readouterr().out
    assert main(["--size", "5x5", "--ball", "1,1", "Q7"]) == 1
    assert "Bad move" in capsys.readouterr().out
