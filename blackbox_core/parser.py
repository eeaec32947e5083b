from __future__ import annotations
import re
from typing import Iterable, List, Tuple
from .models import Move, MoveKind

# T x,y / LB x,y / LC x / LR y / F i / R / S, case-insensitive
_XY = r"(?P<x>-?\d+)\s*,\s*(?P<y>-?\d+)"
_N = r"(?P<n>-?\d+)"
MOVE_PATTERNS = [
    (MoveKind.TOGGLE_LOCK, re.compile(rf"^LB\s*{_XY}$", re.IGNORECASE)),
    (MoveKind.TOGGLE_COLUMN_LOCK, re.compile(rf"^LC\s*{_N}$", re.IGNORECASE)),
    (MoveKind.TOGGLE_ROW_LOCK, re.compile(rf"^LR\s*{_N}$", re.IGNORECASE)),
    (MoveKind.TOGGLE_BALL, re.compile(rf"^T\s*{_XY}$", re.IGNORECASE)),
    (MoveKind.FIRE, re.compile(rf"^F\s*{_N}$", re.IGNORECASE)),
    (MoveKind.REVEAL, re.compile(r"^R$", re.IGNORECASE)),
    (MoveKind.SOLVE, re.compile(r"^S$", re.IGNORECASE)),
]

SIZE = re.compile(r"^(?P<w>\d+)\s*[xX]\s*(?P<h>\d+)$")
BALL_RANGE = re.compile(r"^(?P<lo>\d+)(\s*-\s*(?P<hi>\d+))?$")


class MoveSyntaxError(ValueError):
    pass


def _normalize(line: str) -> str:
    """Normalize a raw move for robust parsing.

    - Strip comments (leading '#' or ' #' after spaces).
    - Replace Unicode minus and dashes with ASCII '-'.
    - Collapse multiple spaces/tabs.
    - Trim.
    """
    line = re.split(r"\s#", line, maxsplit=1)[0]
    if line.strip().startswith('#'):
        return ""
    line = line.replace('−', '-').replace('–', '-').replace('—', '-')
    line = re.sub(r"\s+", " ", line).strip()
    return line


def parse_move(text: str) -> Move:
    ln = _normalize(text)
    if not ln:
        raise MoveSyntaxError("Empty move.")
    for kind, pattern in MOVE_PATTERNS:
        m = pattern.match(ln)
        if not m:
            continue
        groups = m.groupdict()
        if kind in (MoveKind.TOGGLE_BALL, MoveKind.TOGGLE_LOCK):
            return Move(kind, x=int(groups['x']), y=int(groups['y']))
        if kind is MoveKind.TOGGLE_COLUMN_LOCK:
            return Move(kind, x=int(groups['n']))
        if kind is MoveKind.TOGGLE_ROW_LOCK:
            return Move(kind, y=int(groups['n']))
        if kind is MoveKind.FIRE:
            return Move(kind, index=int(groups['n']))
        return Move(kind)
    raise MoveSyntaxError(f"Unrecognized move: '{ln}'")


def parse_moves(lines: Iterable[str]) -> List[Move]:
    """Parse one move per line, skipping blank and comment lines."""
    moves: List[Move] = []
    for lineno, raw in enumerate(lines, 1):
        if not _normalize(raw):
            continue
        try:
            moves.append(parse_move(raw))
        except MoveSyntaxError as e:
            raise MoveSyntaxError(f"line {lineno}: {e}") from e
    return moves


def parse_size(text: str) -> Tuple[int, int]:
    """'8x8' -> (8, 8)"""
    m = SIZE.match(text.strip())
    if not m:
        raise ValueError(f"Bad grid size '{text}' (expected WxH).")
    return int(m.group('w')), int(m.group('h'))


def parse_ball(text: str) -> Tuple[int, int]:
    """'3,4' -> (3, 4); 0-indexed arena coordinates."""
    m = re.match(rf"^{_XY}$", text.strip())
    if not m:
        raise ValueError(f"Bad ball position '{text}' (expected x,y).")
    return int(m.group('x')), int(m.group('y'))


def parse_ball_range(text: str) -> Tuple[int, int]:
    """'5' -> (5, 5), '3-6' -> (3, 6)"""
    m = BALL_RANGE.match(text.strip())
    if not m:
        raise ValueError(f"Bad number of balls '{text}' (expected N or A-B).")
    lo = int(m.group('lo'))
    hi = int(m.group('hi')) if m.group('hi') is not None else lo
    return lo, hi
