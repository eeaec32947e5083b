"""Guess checking.

Several ball layouts can give identical results for every laser, so a guess
is judged by firing all 2(w+h) lasers on the true layout and on the guessed
layout and comparing the two exit tables, not by comparing ball positions.
"""
from __future__ import annotations
import copy
import logging
from dataclasses import dataclass
from typing import List, Tuple
from .board import Board
from .models import ExitKind
from .simulator import fire_all

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CheckResult:
    """Outcome of a reveal.

    consistent -- the guess behaves like the true layout for every laser
    right / wrong / missed -- guessed and true / guessed only / true only
    mismatched -- range indices whose result differs between the layouts
    """
    consistent: bool
    right: int
    wrong: int
    missed: int
    mismatched: Tuple[int, ...] = ()


def solution_board(board: Board) -> Board:
    """Independent copy of `board` with every laser cleared."""
    solution = copy.deepcopy(board)
    solution.clear_lasers()
    return solution


def guess_board(board: Board) -> Board:
    """Independent copy of `board` whose balls are the player's guesses, lasers cleared."""
    guesses = solution_board(board)
    for _, _, c in guesses.arena():
        c.ball = c.guess
    return guesses


def count_balls(board: Board) -> Tuple[int, int, int]:
    """Return (right, wrong, missed) over the arena."""
    right = wrong = missed = 0
    for _, _, c in board.arena():
        if c.guess and c.ball:
            right += 1
        elif c.guess:
            wrong += 1
        elif c.ball:
            missed += 1
    return right, wrong, missed


def compare_exits(solution: Board, guesses: Board) -> List[int]:
    """Range indices where the two fully fired boards disagree."""
    return [
        i for i in range(solution.nlasers)
        if not solution.exits[i].same_result(guesses.exits[i])
    ]


def _add_omitted(board: Board, solution: Board, index: int) -> None:
    """Show the true result of a laser the player never fired."""
    truth = solution.exits[index]
    if truth.kind is ExitKind.PAIRED:
        other = truth.partner
        rayno = board.next_laserno()
        for i, j in ((index, other), (other, index)):
            board.exits[i].kind = ExitKind.PAIRED
            board.exits[i].partner = j
            board.exits[i].omitted = True
            board.ray_ids[i] = rayno
    else:
        board.exits[index].kind = truth.kind
        board.exits[index].partner = None
        board.exits[index].omitted = True


def check_guesses(board: Board) -> CheckResult:
    """
    Check the guessed balls on `board` against the true ones for all lasers.

    `board` is annotated in place:
    - consistent: the true balls become exactly the guessed balls, since both
      layouts have been shown to be equally valid;
    - inconsistent: every differing laser the player had not fired is added
      with its true result and flagged `omitted`; every differing laser the
      player had fired is flagged `wrong`.
    """
    solution = solution_board(board)
    guesses = guess_board(board)

    fire_all(solution)
    fire_all(guesses)

    mismatched = compare_exits(solution, guesses)
    logger.debug("check: %d of %d lasers differ", len(mismatched), board.nlasers)

    for i in mismatched:
        ex = board.exits[i]
        if ex.omitted:
            # other end of a pair already added
            continue
        if ex.fired:
            ex.wrong = True
        else:
            _add_omitted(board, solution, i)

    consistent = not mismatched
    if consistent:
        for _, _, c in board.arena():
            c.ball = c.guess

    right, wrong, missed = count_balls(board)
    logger.info("check: consistent=%s right=%d wrong=%d missed=%d",
                consistent, right, wrong, missed)
    return CheckResult(
        consistent=consistent,
        right=right,
        wrong=wrong,
        missed=missed,
        mismatched=tuple(mismatched),
    )
