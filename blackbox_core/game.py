"""Move handling.

A game is a sequence of immutable-by-convention `GameState`s: `execute_move`
works on a deep copy and returns it, or returns None when the move is not
allowed (the old state is never touched). Hosts get undo by keeping the old
states around.
"""
from __future__ import annotations
import copy
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Tuple
from .board import Board
from .models import Move, MoveKind, PuzzleParams
from .simulator import fire_laser
from .solver import CheckResult, check_guesses

logger = logging.getLogger(__name__)


class Phase(str, Enum):
    GUESSING = "guessing"
    REVEALED = "revealed"


@dataclass
class GameState:
    params: PuzzleParams
    board: Board
    nguesses: int = 0
    phase: Phase = Phase.GUESSING
    result: Optional[CheckResult] = None

    @property
    def revealed(self) -> bool:
        return self.phase is Phase.REVEALED

    @property
    def nballs(self) -> int:
        return len(self.board.balls())

    @classmethod
    def new_game(cls, params: PuzzleParams, balls: Iterable[Tuple[int, int]]) -> "GameState":
        """Start a game from 0-indexed true ball positions."""
        params.validate()
        board = Board.from_layout(params.w, params.h, balls)
        n = len(board.balls())
        if not (params.minballs <= n <= params.maxballs):
            raise ValueError(
                f"Layout has {n} balls, expected {params.ball_range()}."
            )
        return cls(params=params, board=board)


def can_reveal(state: GameState) -> bool:
    p = state.params
    return not state.revealed and p.minballs <= state.nguesses <= p.maxballs


def _toggle_lock_line(board: Board, cells: List[Tuple[int, int]], half: int) -> None:
    # more than half locked -> unlock all, otherwise lock all
    locked = sum(1 for x, y in cells if board.cell(x, y).lock)
    lock = not (locked > half)
    for x, y in cells:
        board.cell(x, y).lock = lock


def execute_move(state: GameState, move: Move) -> Optional[GameState]:
    """Apply `move` to a copy of `state`; None if the move is rejected."""
    if state.revealed:
        logger.debug("rejected %s: game already revealed", move.encode())
        return None

    board = state.board
    kind = move.kind

    if kind is MoveKind.TOGGLE_BALL:
        if move.x is None or move.y is None or not board.in_arena(move.x, move.y):
            return _reject(move, "not an arena cell")
        if board.cell(move.x, move.y).lock:
            return _reject(move, "cell is locked")
        ret = copy.deepcopy(state)
        c = ret.board.cell(move.x, move.y)
        c.guess = not c.guess
        ret.nguesses += 1 if c.guess else -1
        return ret

    if kind is MoveKind.TOGGLE_LOCK:
        if move.x is None or move.y is None or not board.in_arena(move.x, move.y):
            return _reject(move, "not an arena cell")
        ret = copy.deepcopy(state)
        c = ret.board.cell(move.x, move.y)
        c.lock = not c.lock
        return ret

    if kind is MoveKind.TOGGLE_COLUMN_LOCK:
        if move.x is None or not 1 <= move.x <= board.w:
            return _reject(move, "no such column")
        ret = copy.deepcopy(state)
        cells = [(move.x, y) for y in range(1, board.h + 1)]
        _toggle_lock_line(ret.board, cells, board.h // 2)
        return ret

    if kind is MoveKind.TOGGLE_ROW_LOCK:
        if move.y is None or not 1 <= move.y <= board.h:
            return _reject(move, "no such row")
        ret = copy.deepcopy(state)
        cells = [(x, move.y) for x in range(1, board.w + 1)]
        _toggle_lock_line(ret.board, cells, board.w // 2)
        return ret

    if kind is MoveKind.FIRE:
        if move.index is None or board.index_to_grid(move.index) is None:
            return _reject(move, "no such laser")
        if board.exits[move.index].fired:
            return _reject(move, "laser already fired")
        ret = copy.deepcopy(state)
        fire_laser(ret.board, move.index)
        return ret

    if kind is MoveKind.REVEAL:
        if not can_reveal(state):
            return _reject(move, f"{state.nguesses} balls marked, need {state.params.ball_range()}")
        ret = copy.deepcopy(state)
        ret.result = check_guesses(ret.board)
        ret.phase = Phase.REVEALED
        return ret

    if kind is MoveKind.SOLVE:
        ret = copy.deepcopy(state)
        ret.phase = Phase.REVEALED
        return ret

    return _reject(move, "unknown move")


def _reject(move: Move, why: str) -> None:
    logger.debug("rejected %s: %s", move.encode(), why)
    return None


def replay(state: GameState, moves: Iterable[Move]) -> Tuple[GameState, List[Move]]:
    """Apply `moves` in order, skipping rejected ones; returns (final state, rejected moves)."""
    rejected: List[Move] = []
    for move in moves:
        new = execute_move(state, move)
        if new is None:
            rejected.append(move)
        else:
            state = new
    return state, rejected


def status_text(state: GameState) -> str:
    """Status-bar line for the host."""
    p = state.params
    if state.revealed:
        res = state.result
        if res is None:
            return "Solution shown."
        if res.wrong == 0 and res.missed == 0 and res.right >= p.minballs:
            return "CORRECT!"
        return f"{res.wrong} wrong and {res.missed} missed balls."
    if state.nguesses > p.maxballs:
        return f"{state.nguesses - p.maxballs} too many balls marked."
    if p.minballs <= state.nguesses <= p.maxballs:
        return "Click button to verify guesses."
    if p.minballs == p.maxballs:
        return f"Balls marked: {state.nguesses} / {p.minballs}"
    return f"Balls marked: {state.nguesses} / {p.minballs}-{p.maxballs}."
