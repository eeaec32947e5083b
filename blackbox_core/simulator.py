"""Laser tracing.

A laser fired from a range cell travels into the arena and, at every cell,
looks at the cell in front of it and the two cells diagonally in front:

- a ball straight ahead absorbs it (HIT);
- a ball front-left turns it clockwise, a ball front-right anticlockwise
  (front-left is looked at first), without moving;
- otherwise it steps forward.

At the range cell itself the same look decides an instant HIT or an instant
REFLECT (absorption first). A laser that comes back out where it went in is
a REFLECT; any other exit pairs the two range indices.
"""
from __future__ import annotations
import logging
from .board import Board
from .models import Direction, Exit, ExitKind, Look

logger = logging.getLogger(__name__)


def is_ball(board: Board, x: int, y: int, direction: Direction, look: Look) -> bool:
    """
    Whether there is a ball in front of (x, y), or to its front-left / front-right.

    Cells on the firing range (or off the grid) never hold a ball.
    """
    dx, dy = direction.offset
    x, y = x + dx, y + dy
    if look is Look.LEFT:
        dx, dy = direction.anticlockwise().offset
        x, y = x + dx, y + dy
    elif look is Look.RIGHT:
        dx, dy = direction.clockwise().offset
        x, y = x + dx, y + dy
    return board.has_ball(x, y)


def _max_steps(board: Board) -> int:
    # a laser visits each (cell, direction) at most once
    return 4 * (board.w + 2) * (board.h + 2)


def fire_laser(board: Board, index: int) -> None:
    """
    Fire the laser at range `index`, recording its fate in `board.exits`.

    Pass-through lasers stamp a fresh number from `board.laserno` on both of
    their range cells.
    """
    start = board.index_to_grid(index)
    if start is None:
        raise ValueError(f"Range index {index} out of range 0..{board.nlasers - 1}")
    if board.exits[index].fired:
        raise ValueError(f"Laser {index} has already been fired")

    xstart, ystart, direction = start
    x, y = xstart, ystart

    # Entry rules: an instant hit wins over an instant reflection.
    if is_ball(board, x, y, direction, Look.FORWARD):
        logger.debug("laser %d: instant hit at (%d, %d)", index, x, y)
        board.exits[index] = Exit(kind=ExitKind.HIT)
        return
    if is_ball(board, x, y, direction, Look.LEFT) or is_ball(board, x, y, direction, Look.RIGHT):
        logger.debug("laser %d: instant reflection at (%d, %d)", index, x, y)
        board.exits[index] = Exit(kind=ExitKind.REFLECT)
        return

    dx, dy = direction.offset
    x, y = x + dx, y + dy

    steps = 0
    limit = _max_steps(board)
    while True:
        steps += 1
        if steps > limit:
            raise RuntimeError(f"Laser {index} did not leave the arena after {limit} steps")

        exitno = board.grid_to_index(x, y)
        if exitno is not None:
            # back on the firing range
            if (x, y) == (xstart, ystart):
                logger.debug("laser %d: reflected back to its start", index)
                board.exits[index] = Exit(kind=ExitKind.REFLECT)
            else:
                rayno = board.next_laserno()
                logger.debug("laser %d: exits at %d as ray %d", index, exitno, rayno)
                board.exits[index] = Exit.paired(exitno)
                board.exits[exitno] = Exit.paired(index)
                board.ray_ids[index] = rayno
                board.ray_ids[exitno] = rayno
            return

        assert not board.has_ball(x, y), f"laser {index} is sitting on a ball at ({x}, {y})"

        if is_ball(board, x, y, direction, Look.FORWARD):
            logger.debug("laser %d: ball ahead of (%d, %d), hit", index, x, y)
            board.exits[index] = Exit(kind=ExitKind.HIT)
            return
        if is_ball(board, x, y, direction, Look.LEFT):
            direction = direction.clockwise()
            logger.debug("laser %d: ball front-left at (%d, %d), now %s", index, x, y, direction.name)
            continue
        if is_ball(board, x, y, direction, Look.RIGHT):
            direction = direction.anticlockwise()
            logger.debug("laser %d: ball front-right at (%d, %d), now %s", index, x, y, direction.name)
            continue

        dx, dy = direction.offset
        x, y = x + dx, y + dy


def fire_all(board: Board) -> None:
    """Fire every laser that has not been fired yet (pairs fill two slots at once)."""
    for index in range(board.nlasers):
        if not board.exits[index].fired:
            fire_laser(board, index)
