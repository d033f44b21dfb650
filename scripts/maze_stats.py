#!/usr/bin/env python3
"""Maze structural diagnostics for specific seeds.

Usage:
  python scripts/maze_stats.py 292372 730727
  python scripts/maze_stats.py --size 60 101 202

If no seeds are provided as CLI args, a default list is used.
Exits with non-zero status if any structural check fails.
"""

from __future__ import annotations

import json
import os
import sys
from typing import List

# Ensure project root on path if executed directly
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from amaze.maze import CELL_VALUES, DOOR, MazeConfig, MazeGenerator, WALL  # noqa: E402 import after path fix

DEFAULT_SEEDS = [292372, 730727]


def longest_wall_run(grid) -> int:
    best = 0
    for lines in (grid.to_rows(), grid.cells):
        for line in lines:
            run = 0
            for val in line:
                run = run + 1 if val == WALL else 0
                best = max(best, run)
    return best


def run_for_seed(seed: int, size: int) -> dict:
    gen = MazeGenerator(MazeConfig(width=size, height=size, seed=seed))
    grid = gen.run()
    bad_values = sum(1 for col in grid.cells for v in col if v not in CELL_VALUES)
    issues = {
        "bad_values": bad_values,
        "thick_walls": int(longest_wall_run(grid) > gen.config.thickness),
        "excess_doors": max(0, grid.count(DOOR) - len(gen.seeds)),
    }
    return {
        "seed": seed,
        "seeds": len(gen.seeds),
        "doors": grid.count(DOOR),
        "runtime_ms": gen.metrics.get("runtime_ms"),
        "issues": issues,
        "ok": all(v == 0 for v in issues.values()),
    }


def main(argv: List[str]) -> int:
    size = 40
    if argv[:1] == ["--size"]:
        size = int(argv[1])
        argv = argv[2:]
    seeds = [int(a) for a in argv] if argv else DEFAULT_SEEDS
    results = [run_for_seed(s, size) for s in seeds]
    print(json.dumps({"size": size, "results": results}, indent=2))
    if not all(r["ok"] for r in results):
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
