import copy
import pytest


def _game(w=5, h=5, balls=((1, 1), (2, 2)), lo=2, hi=2):
    from blackbox_core.game import GameState
    from blackbox_core.models import PuzzleParams

    return GameState.new_game(PuzzleParams(w=w, h=h, minballs=lo, maxballs=hi), list(balls))


def _play(state, *texts):
    from blackbox_core.game import execute_move
    from blackbox_core.parser import parse_move

    for t in texts:
        new = execute_move(state, parse_move(t))
        assert new is not None, f"move {t} rejected"
        state = new
    return state


def test_new_game_validates_layout():
    from blackbox_core.game import GameState
    from blackbox_core.models import PuzzleParams

    with pytest.raises(ValueError):
        GameState.new_game(PuzzleParams(w=5, h=5, minballs=3, maxballs=3), [(0, 0)])
    with pytest.raises(ValueError):
        GameState.new_game(PuzzleParams(w=5, h=5, minballs=1, maxballs=1), [(5, 5)])
    with pytest.raises(ValueError):
        GameState.new_game(PuzzleParams(w=5, h=5, minballs=3, maxballs=2), [(0, 0)])


def test_toggle_ball_tracks_guess_count():
    s = _game()
    s = _play(s, "T1,1", "T2,2")
    assert s.nguesses == 2
    s = _play(s, "T1,1")
    assert s.nguesses == 1
    assert s.board.guesses() == {(2, 2)}


def test_moves_do_not_touch_the_old_state():
    s0 = _game()
    s1 = _play(s0, "T3,3", "F0", "LB1,1")
    assert s0.nguesses == 0
    assert not s0.board.exits[0].fired
    assert not s0.board.cell(1, 1).lock
    assert s1.board.exits[0].fired


def test_locked_cell_refuses_guess():
    from blackbox_core.game import execute_move
    from blackbox_core.models import Move

    s = _play(_game(), "LB2,3")
    assert execute_move(s, Move.toggle_ball(2, 3)) is None
    s = _play(s, "LB2,3", "T2,3")
    assert s.board.cell(2, 3).guess


def test_lock_can_be_set_on_a_guess():
    s = _play(_game(), "T4,4", "LB4,4")
    c = s.board.cell(4, 4)
    assert c.guess and c.lock


def test_out_of_range_moves_rejected():
    from blackbox_core.game import execute_move
    from blackbox_core.models import Move

    s = _game()
    for move in [Move.toggle_ball(0, 1), Move.toggle_ball(6, 1), Move.toggle_lock(1, 6),
                 Move.toggle_column_lock(0), Move.toggle_row_lock(6), Move.fire(20), Move.fire(-1)]:
        assert execute_move(s, move) is None, move.encode()


def test_refire_is_a_no_op():
    from blackbox_core.game import execute_move
    from blackbox_core.models import Move

    s = _play(_game(), "F3")
    before = copy.deepcopy(s.board.exits)
    assert execute_move(s, Move.fire(3)) is None
    assert execute_move(s, Move.fire(s.board.exits[3].partner)) is None
    assert s.board.exits == before


def test_column_lock_majority():
    """Height 4: three locked -> all unlocked; one locked -> all locked."""
    s = _game(w=3, h=4, balls=[(0, 0)], lo=1, hi=1)
    s = _play(s, "LB2,1", "LB2,2", "LB2,3", "LC2")
    assert not any(s.board.cell(2, y).lock for y in range(1, 5))

    s = _play(s, "LB2,4", "LC2")
    assert all(s.board.cell(2, y).lock for y in range(1, 5))

    # two of four is not a majority
    s = _play(_game(w=3, h=4, balls=[(0, 0)], lo=1, hi=1), "LB1,1", "LB1,2", "LC1")
    assert all(s.board.cell(1, y).lock for y in range(1, 5))


def test_row_lock_majority():
    s = _game(w=4, h=3, balls=[(0, 0)], lo=1, hi=1)
    s = _play(s, "LB1,2", "LB2,2", "LB4,2", "LR2")
    assert not any(s.board.cell(x, 2).lock for x in range(1, 5))
    s = _play(s, "LR2")
    assert all(s.board.cell(x, 2).lock for x in range(1, 5))
    # other rows untouched
    assert not any(s.board.cell(x, 1).lock for x in range(1, 5))


def test_reveal_needs_guess_count_in_range():
    from blackbox_core.game import can_reveal, execute_move
    from blackbox_core.models import Move

    s = _play(_game(), "T1,1")
    assert not can_reveal(s)
    assert execute_move(s, Move.reveal()) is None
    s = _play(s, "T2,2", "T3,3")
    assert execute_move(s, Move.reveal()) is None
    s = _play(s, "T3,3")
    assert can_reveal(s)
    assert execute_move(s, Move.reveal()) is not None


def test_reveal_scores_and_locks_the_game():
    from blackbox_core.game import Phase, execute_move, status_text
    from blackbox_core.models import Move

    # truth: arena (2,2) and (3,3)
    s = _play(_game(), "F3", "T2,2", "T4,4", "R")
    assert s.phase is Phase.REVEALED
    res = s.result
    assert not res.consistent
    assert (res.right, res.wrong, res.missed) == (1, 1, 1)
    assert s.board.exits[3].wrong
    assert status_text(s) == "1 wrong and 1 missed balls."

    frozen = copy.deepcopy(s)
    for move in [Move.toggle_ball(1, 1), Move.toggle_lock(1, 1), Move.toggle_column_lock(1),
                 Move.toggle_row_lock(1), Move.fire(0), Move.reveal(), Move.solve()]:
        assert execute_move(s, move) is None, move.encode()
    assert s == frozen


def test_correct_reveal():
    from blackbox_core.game import status_text

    s = _play(_game(), "T2,2", "T3,3", "R")
    assert s.result.consistent
    assert status_text(s) == "CORRECT!"


def test_equivalent_guess_is_correct():
    """The boxed-in centre ball cannot be found, so leaving it out is still right."""
    from blackbox_core.game import status_text

    ring = [(2, 1), (1, 2), (3, 2), (2, 3)]
    s = _game(balls=ring + [(2, 2)], lo=4, hi=5)
    s = _play(s, "T3,2", "T2,3", "T4,3", "T3,4", "R")
    assert s.result.consistent
    assert (s.result.wrong, s.result.missed) == (0, 0)
    assert status_text(s) == "CORRECT!"
    assert s.board.balls() == s.board.guesses()


def test_solve_reveals_without_scoring():
    from blackbox_core.game import status_text

    s = _play(_game(), "T5,5", "S")
    assert s.revealed
    assert s.result is None
    assert s.board.balls() == {(2, 2), (3, 3)}
    assert status_text(s) == "Solution shown."


def test_status_while_guessing():
    from blackbox_core.game import status_text

    s = _game()
    assert status_text(s) == "Balls marked: 0 / 2"
    s = _play(s, "T1,1", "T1,2")
    assert status_text(s) == "Click button to verify guesses."
    s = _play(s, "T1,3")
    assert status_text(s) == "1 too many balls marked."

    r = _game(balls=[(0, 0), (1, 1), (2, 2)], lo=3, hi=6)
    assert status_text(r) == "Balls marked: 0 / 3-6."


def test_replay_collects_rejections():
    from blackbox_core.game import replay
    from blackbox_core.parser import parse_moves

    moves = parse_moves(["F0", "F0", "T1,1", "R", "T2,2", "R", "F1"])
    s, rejected = replay(_game(), moves)
    assert [m.encode() for m in rejected] == ["F0", "R", "F1"]
    assert s.revealed
