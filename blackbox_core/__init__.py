# blackbox_core/__init__.py
from .models import CellFlags, Direction, Exit, ExitKind, Look, Move, MoveKind, PuzzleParams
from .board import Board
from .parser import MoveSyntaxError, parse_move, parse_moves
from .simulator import fire_all, fire_laser
from .solver import CheckResult, check_guesses
from .game import GameState, Phase, can_reveal, execute_move, replay, status_text
__all__ = [
    "CellFlags", "Direction", "Exit", "ExitKind", "Look", "Move", "MoveKind", "PuzzleParams",
    "Board", "MoveSyntaxError", "parse_move", "parse_moves", "fire_all", "fire_laser",
    "CheckResult", "check_guesses", "GameState", "Phase", "can_reveal", "execute_move",
    "replay", "status_text",
]
