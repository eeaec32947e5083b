"""Core dataclasses and enums for the Black Box engine.

Coordinate conventions:
- The grid is (w+2) x (h+2). Arena cells are (x, y) with 1 <= x <= w and
  1 <= y <= h; row/column 0 and w+1/h+1 form the firing range, and the four
  corners are unused.
- Balls handed in from outside (a generated layout) are 0-indexed arena
  coordinates and are shifted by one when stored.
- Perimeter ("range") indices run 0 .. 2(w+h)-1 clockwise, starting at the
  range cell right of the top-left corner.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional, Tuple


class Direction(IntEnum):
    # Values must stay in clockwise order; turning is arithmetic mod 4.
    UP = 0
    RIGHT = 1
    DOWN = 2
    LEFT = 3

    @property
    def offset(self) -> Tuple[int, int]:
        return _OFFSETS[self]

    def clockwise(self) -> "Direction":
        return Direction((self + 1) % 4)

    def anticlockwise(self) -> "Direction":
        return Direction((self + 3) % 4)


_OFFSETS = {
    Direction.UP: (0, -1),
    Direction.RIGHT: (1, 0),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
}


class Look(str, Enum):
    """Where a laser looks for a ball, relative to the cell in front of it."""
    LEFT = "left"
    FORWARD = "forward"
    RIGHT = "right"


@dataclass
class CellFlags:
    """State of one arena cell.

    ball  -- a true (hidden) ball
    guess -- the player marked a ball here
    lock  -- the player locked the cell; guesses cannot be toggled
    """
    ball: bool = False
    guess: bool = False
    lock: bool = False


class ExitKind(str, Enum):
    EMPTY = "empty"      # never fired
    HIT = "hit"          # absorbed
    REFLECT = "reflect"  # came back out where it went in
    PAIRED = "paired"    # came out at `Exit.partner`


@dataclass
class Exit:
    """One slot of the exit table.

    `omitted` and `wrong` are presentation flags set when a guess is
    revealed; they never change how lasers are fired or compared.
    """
    kind: ExitKind = ExitKind.EMPTY
    partner: Optional[int] = None
    omitted: bool = False
    wrong: bool = False

    @property
    def fired(self) -> bool:
        return self.kind is not ExitKind.EMPTY

    def same_result(self, other: "Exit") -> bool:
        return self.kind is other.kind and self.partner == other.partner

    @staticmethod
    def paired(partner: int) -> "Exit":
        return Exit(kind=ExitKind.PAIRED, partner=partner)


class MoveKind(str, Enum):
    TOGGLE_BALL = "T"
    TOGGLE_LOCK = "LB"
    TOGGLE_COLUMN_LOCK = "LC"
    TOGGLE_ROW_LOCK = "LR"
    FIRE = "F"
    REVEAL = "R"
    SOLVE = "S"


@dataclass(frozen=True)
class Move:
    """A symbolic move. Arena coordinates are 1-indexed."""
    kind: MoveKind
    x: Optional[int] = None
    y: Optional[int] = None
    index: Optional[int] = None

    @staticmethod
    def toggle_ball(x: int, y: int) -> "Move":
        return Move(MoveKind.TOGGLE_BALL, x=x, y=y)

    @staticmethod
    def toggle_lock(x: int, y: int) -> "Move":
        return Move(MoveKind.TOGGLE_LOCK, x=x, y=y)

    @staticmethod
    def toggle_column_lock(x: int) -> "Move":
        return Move(MoveKind.TOGGLE_COLUMN_LOCK, x=x)

    @staticmethod
    def toggle_row_lock(y: int) -> "Move":
        return Move(MoveKind.TOGGLE_ROW_LOCK, y=y)

    @staticmethod
    def fire(index: int) -> "Move":
        return Move(MoveKind.FIRE, index=index)

    @staticmethod
    def reveal() -> "Move":
        return Move(MoveKind.REVEAL)

    @staticmethod
    def solve() -> "Move":
        return Move(MoveKind.SOLVE)

    def encode(self) -> str:
        """Textual form accepted by `parser.parse_move`."""
        k = self.kind
        if k in (MoveKind.TOGGLE_BALL, MoveKind.TOGGLE_LOCK):
            return f"{k.value}{self.x},{self.y}"
        if k is MoveKind.TOGGLE_COLUMN_LOCK:
            return f"{k.value}{self.x}"
        if k is MoveKind.TOGGLE_ROW_LOCK:
            return f"{k.value}{self.y}"
        if k is MoveKind.FIRE:
            return f"{k.value}{self.index}"
        return k.value


@dataclass(frozen=True)
class PuzzleParams:
    """Grid size and the accepted number of balls."""
    w: int = 8
    h: int = 8
    minballs: int = 5
    maxballs: int = 5

    def validate(self) -> None:
        if self.w < 2 or self.h < 2:
            raise ValueError("Grid must be at least 2 wide and 2 high")
        # ball coordinates travel as single bytes
        if self.w > 255 or self.h > 255:
            raise ValueError("Grid must be < 255 in each direction")
        if self.minballs > self.maxballs:
            raise ValueError("Min. balls must be <= max. balls")
        if self.minballs >= self.w * self.h:
            raise ValueError("Too many balls for grid")

    def ball_range(self) -> str:
        if self.minballs == self.maxballs:
            return f"{self.minballs}"
        return f"{self.minballs}-{self.maxballs}"
