from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Set, Tuple
from .models import CellFlags, Direction, Exit, ExitKind


@dataclass
class Board:
    """Board stores the arena and the firing range (no tracing here).

    - `cells[y-1][x-1]` holds the flags of arena cell (x, y).
    - `exits` has one slot per range index.
    - `ray_ids` holds the number stamped on each range cell by a pass-through
      laser (both ends carry the same number); None elsewhere.
    - `laserno` is the number the next pass-through laser will be given.
    """
    w: int
    h: int
    cells: List[List[CellFlags]]
    exits: List[Exit] = field(default_factory=list)
    ray_ids: List[Optional[int]] = field(default_factory=list)
    laserno: int = 1

    def __post_init__(self) -> None:
        if not self.exits:
            self.exits = [Exit() for _ in range(self.nlasers)]
        if not self.ray_ids:
            self.ray_ids = [None] * self.nlasers

    @property
    def nlasers(self) -> int:
        return 2 * (self.w + self.h)

    def in_arena(self, x: int, y: int) -> bool:
        return 1 <= x <= self.w and 1 <= y <= self.h

    def cell(self, x: int, y: int) -> CellFlags:
        if not self.in_arena(x, y):
            raise IndexError(f"Cell ({x}, {y}) is not in the arena")
        return self.cells[y - 1][x - 1]

    def has_ball(self, x: int, y: int) -> bool:
        # the firing range never holds a ball
        if not self.in_arena(x, y):
            return False
        return self.cells[y - 1][x - 1].ball

    def arena(self) -> Iterable[Tuple[int, int, CellFlags]]:
        for y in range(1, self.h + 1):
            for x in range(1, self.w + 1):
                yield x, y, self.cells[y - 1][x - 1]

    def balls(self) -> Set[Tuple[int, int]]:
        return {(x, y) for x, y, c in self.arena() if c.ball}

    def guesses(self) -> Set[Tuple[int, int]]:
        return {(x, y) for x, y, c in self.arena() if c.guess}

    # --- firing range <-> grid -------------------------------------------

    def index_to_grid(self, index: int) -> Optional[Tuple[int, int, Direction]]:
        """Map a range index to its grid cell and the direction facing into the arena."""
        w, h = self.w, self.h
        if index < 0:
            return None
        if index < w:
            # top row, left to right
            return index + 1, 0, Direction.DOWN
        index -= w
        if index < h:
            # right-hand side, top to bottom
            return w + 1, index + 1, Direction.LEFT
        index -= h
        if index < w:
            # bottom row, counts backwards
            return w - index, h + 1, Direction.UP
        index -= w
        if index < h:
            # left-hand side, counts backwards
            return 0, h - index, Direction.RIGHT
        return None

    def grid_to_index(self, x: int, y: int) -> Optional[int]:
        """Inverse of index_to_grid; None for arena cells, corners and cells off the grid."""
        w, h = self.w, self.h
        x1, y1 = w + 1, h + 1
        if 0 < x < x1 and 0 < y < y1:
            return None
        if x < 0 or x > x1 or y < 0 or y > y1:
            return None
        if x in (0, x1) and y in (0, y1):
            return None
        if y == 0:
            return x - 1
        if x == x1:
            return y - 1 + w
        if y == y1:
            return (w - x) + w + h
        return (h - y) + 2 * w + h

    # --- lasers ----------------------------------------------------------

    def clear_lasers(self) -> None:
        self.exits = [Exit() for _ in range(self.nlasers)]
        self.ray_ids = [None] * self.nlasers

    def next_laserno(self) -> int:
        n = self.laserno
        self.laserno += 1
        return n

    def label(self, index: int) -> str:
        """Text shown on a range cell: H, R, the ray number, or '' if unfired."""
        ex = self.exits[index]
        if ex.kind is ExitKind.HIT:
            return "H"
        if ex.kind is ExitKind.REFLECT:
            return "R"
        if ex.kind is ExitKind.PAIRED:
            return str(self.ray_ids[index])
        return ""

    @classmethod
    def empty(cls, w: int, h: int) -> "Board":
        cells = [[CellFlags() for _ in range(w)] for _ in range(h)]
        return cls(w=w, h=h, cells=cells)

    @classmethod
    def from_layout(cls, w: int, h: int, balls: Iterable[Tuple[int, int]]) -> "Board":
        """Build a board from 0-indexed ball coordinates (0 <= x < w, 0 <= y < h)."""
        if not (2 <= w <= 255 and 2 <= h <= 255):
            raise ValueError(f"Grid size {w}x{h} out of range (2..255 each way).")
        board = cls.empty(w, h)
        for bx, by in balls:
            if not (0 <= bx < w and 0 <= by < h):
                raise ValueError(f"Ball ({bx}, {by}) does not fit on a {w}x{h} grid.")
            c = board.cells[by][bx]
            if c.ball:
                raise ValueError(f"Ball ({bx}, {by}) given twice.")
            c.ball = True
        return board

    # Pretty printers useful during development
    def to_ascii(self, reveal: bool = False) -> str:
        """Render the whole grid.

        Arena while guessing: '*' guess, '#' locked, '.' empty. With reveal:
        'o' right guess, 'x' wrong guess, '@' missed ball. Range cells show
        their label ('-' when unfired), with '!' appended when omitted/wrong.
        """
        width = max(2, len(str(self.laserno)))
        rows = []
        for y in range(self.h + 2):
            row = []
            for x in range(self.w + 2):
                idx = self.grid_to_index(x, y)
                if idx is not None:
                    text = self.label(idx) or "-"
                    if self.exits[idx].wrong or self.exits[idx].omitted:
                        text += "!"
                elif self.in_arena(x, y):
                    text = self._cell_char(self.cell(x, y), reveal)
                else:
                    text = " "
                row.append(text.rjust(width))
            rows.append(" ".join(row))
        return "\n".join(rows)

    @staticmethod
    def _cell_char(c: CellFlags, reveal: bool) -> str:
        if reveal:
            if c.guess and c.ball:
                return "o"
            if c.guess:
                return "x"
            if c.ball:
                return "@"
        elif c.guess:
            return "*"
        if c.lock:
            return "#"
        return "."

    def summary(self) -> str:
        fired = sum(1 for ex in self.exits if ex.fired)
        return (
            f"Board {self.w}x{self.h}\n"
            f"Lasers fired: {fired}/{self.nlasers}\n"
            f"Guesses: {len(self.guesses())}\n"
        )
