import pytest


@pytest.mark.parametrize("text,kind,fields", [
    ("T2,3", "TOGGLE_BALL", {"x": 2, "y": 3}),
    ("t 2, 3", "TOGGLE_BALL", {"x": 2, "y": 3}),
    ("LB1,4", "TOGGLE_LOCK", {"x": 1, "y": 4}),
    ("LC5", "TOGGLE_COLUMN_LOCK", {"x": 5}),
    ("lr 2", "TOGGLE_ROW_LOCK", {"y": 2}),
    ("F17", "FIRE", {"index": 17}),
    ("  F   0  # first shot", "FIRE", {"index": 0}),
    ("R", "REVEAL", {}),
    ("s", "SOLVE", {}),
])
def test_parse_each_move(text, kind, fields):
    from blackbox_core.models import MoveKind
    from blackbox_core.parser import parse_move

    m = parse_move(text)
    assert m.kind is MoveKind[kind]
    for name, value in fields.items():
        assert getattr(m, name) == value


def test_negative_numbers_parse_and_are_left_to_the_game():
    from blackbox_core.parser import parse_move

    assert parse_move("F−1").index == -1   # unicode minus
    assert parse_move("T-1,2").x == -1


@pytest.mark.parametrize("bad", ["", "# only a comment", "X1", "T1", "F", "LB3", "LC", "RR", "F1,2"])
def test_malformed_moves_raise(bad):
    from blackbox_core.parser import MoveSyntaxError, parse_move

    with pytest.raises(MoveSyntaxError):
        parse_move(bad)


def test_encode_is_accepted_by_parser():
    from blackbox_core.models import Move
    from blackbox_core.parser import parse_move

    for m in [Move.toggle_ball(3, 1), Move.toggle_lock(2, 2), Move.toggle_column_lock(4),
              Move.toggle_row_lock(1), Move.fire(9), Move.reveal(), Move.solve()]:
        assert parse_move(m.encode()) == m


def test_parse_moves_skips_blanks_and_reports_line():
    from blackbox_core.parser import MoveSyntaxError, parse_moves

    moves = parse_moves(["F1", "", "# note", "T1,1", "R"])
    assert [m.encode() for m in moves] == ["F1", "T1,1", "R"]

    with pytest.raises(MoveSyntaxError, match="line 2"):
        parse_moves(["F1", "Q"])


def test_cli_helpers():
    from blackbox_core.parser import parse_ball, parse_ball_range, parse_size

    assert parse_size("5x7") == (5, 7)
    assert parse_ball(" 0, 4") == (0, 4)
    assert parse_ball_range("5") == (5, 5)
    assert parse_ball_range("3-6") == (3, 6)
    with pytest.raises(ValueError):
        parse_size("5by5")
    with pytest.raises(ValueError):
        parse_ball_range("a-b")
