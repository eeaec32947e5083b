#!/usr/bin/env python3
# scripts/find_equivalent.py
"""
List ball layouts that no laser can tell apart.

For each ball count, every layout on the grid is fired from all range
positions and layouts are grouped by their full exit table; groups with more
than one layout are puzzles whose guess can be "right" without matching.

    python scripts/find_equivalent.py 5x5 2-5
"""
import sys
from pathlib import Path

# add the project root so blackbox_core imports without installing
_script_dir = Path(__file__).resolve().parent
_project_root = _script_dir.parent
sys.path.insert(0, str(_project_root))

from collections import defaultdict
from concurrent.futures import ProcessPoolExecutor, TimeoutError as FutureTimeoutError
from itertools import combinations
from time import perf_counter
from blackbox_core.board import Board
from blackbox_core.parser import parse_ball_range, parse_size
from blackbox_core.simulator import fire_all


def signature(w, h, balls):
    board = Board.from_layout(w, h, balls)
    fire_all(board)
    return tuple((ex.kind.value, ex.partner) for ex in board.exits)


def equivalent_groups(w, h, nballs):
    """Groups (lists of 0-indexed layouts) sharing one exit table."""
    cells = [(x, y) for y in range(h) for x in range(w)]
    groups = defaultdict(list)
    for layout in combinations(cells, nballs):
        groups[signature(w, h, layout)].append(layout)
    return [g for g in groups.values() if len(g) > 1]


def search_one(w, h, nballs, time_limit_s=60.0):
    t0 = perf_counter()
    try:
        with ProcessPoolExecutor(max_workers=1) as executor:
            future = executor.submit(equivalent_groups, w, h, nballs)
            try:
                groups = future.result(timeout=time_limit_s)
            except FutureTimeoutError:
                print(f"  {nballs} balls: timed out ({time_limit_s}s)")
                future.cancel()
                return {"nballs": nballs, "status": "TIMEOUT", "time_s": round(time_limit_s, 3)}
    except OSError as e:
        print(f"  process pool unavailable, searching in-process: {e}")
        groups = equivalent_groups(w, h, nballs)
    elapsed = perf_counter() - t0
    return {"nballs": nballs, "status": "OK", "groups": groups, "time_s": round(elapsed, 3)}


def main():
    if len(sys.argv) < 3:
        print("usage: python scripts/find_equivalent.py WxH N|A-B [time_limit_s]")
        sys.exit(1)
    w, h = parse_size(sys.argv[1])
    lo, hi = parse_ball_range(sys.argv[2])
    limit = float(sys.argv[3]) if len(sys.argv) > 3 else 60.0

    results = []
    for n in range(lo, hi + 1):
        print(f"[{w}x{h}] searching {n}-ball layouts...")
        results.append(search_one(w, h, n, time_limit_s=limit))

    print("\n=== Equivalent layouts ===")
    for r in results:
        line = f"{r['nballs']:3d} balls  {r['status']:8s}  {r['time_s']:>7}s"
        if "groups" in r:
            line += f"  groups={len(r['groups'])}"
        print(line)
        for g in r.get("groups", [])[:5]:
            print("    " + "  ==  ".join(str(list(layout)) for layout in g))


if __name__ == "__main__":
    main()
