#!/usr/bin/env python3
"""
Black Box - command-line move replay

Sets up a puzzle from a known ball layout, replays a list of moves against it
and prints the resulting board and status line.

    python blackbox_cli.py --size 5x5 --ball 1,1 --ball 3,2 --balls 2 F0 F7 T2,2 T4,3 R
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import List

from blackbox_core import GameState, PuzzleParams, replay, status_text
from blackbox_core.parser import MoveSyntaxError, parse_ball, parse_ball_range, parse_moves, parse_size


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Replay Black Box moves against a known layout.")
    ap.add_argument("moves", nargs="*", help="moves such as F3, T2,4, LB1,1, LC2, LR3, R, S")
    ap.add_argument("--size", default="8x8", help="arena size WxH (default 8x8)")
    ap.add_argument("--ball", action="append", default=[], metavar="X,Y",
                    help="true ball, 0-indexed; repeat for each ball")
    ap.add_argument("--balls", default=None, metavar="N|A-B",
                    help="accepted number of guessed balls (default: number of --ball)")
    ap.add_argument("--moves-file", default=None, help="file with one move per line")
    ap.add_argument("--debug", action="store_true", help="log every laser step")
    return ap


def main(argv: List[str] = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        w, h = parse_size(args.size)
        balls = [parse_ball(b) for b in args.ball]
        if args.balls is not None:
            lo, hi = parse_ball_range(args.balls)
        else:
            lo = hi = len(balls)
        params = PuzzleParams(w=w, h=h, minballs=lo, maxballs=hi)
        state = GameState.new_game(params, balls)

        lines = list(args.moves)
        if args.moves_file:
            lines += Path(args.moves_file).read_text(encoding="utf-8").splitlines()
        moves = parse_moves(lines)
    except MoveSyntaxError as e:
        print(f"Bad move: {e}")
        return 1
    except (ValueError, OSError) as e:
        print(f"Bad puzzle: {e}")
        return 1

    print(state.board.summary())
    state, rejected = replay(state, moves)
    for move in rejected:
        print(f"Rejected: {move.encode()}")

    print(state.board.to_ascii(reveal=state.revealed))
    print()
    print(status_text(state))
    if state.result is not None:
        res = state.result
        print(f"right={res.right} wrong={res.wrong} missed={res.missed} consistent={res.consistent}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
