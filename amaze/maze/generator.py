"""Multi-seed flood-fill maze generator.

Generation phases (run in order by :meth:`MazeGenerator.run`):
    * Pick seeds: two fixed corners plus up to ``seed_count`` random points,
      each at least ``min_seed_distance`` away from every seed accepted so far.
    * Flood fill all seeds at once from a single FIFO queue. Where two regions
      meet, the cell being expanded turns into a wall.
    * Normalize leftover region tags to floor.
    * Bound wall runs to ``thickness`` cells along rows and columns.
    * Place doors: from every original seed, BFS to the nearest wall and turn
      that wall into a door.

The result is a :class:`Grid` holding only FLOOR, WALL and DOOR values.
Randomness comes from a local ``random.Random`` so a given seed always yields
the same maze.
"""

from __future__ import annotations

import math
import random
import time
from collections import deque
from dataclasses import replace
from typing import Any, Deque, Dict, List, Optional, Tuple

from amaze.logging_utils import get_logger

from .config import MIN_SIZE, MazeConfig
from .errors import InvalidSizeError
from .grid import Grid, Position
from .tiles import DOOR, FIRST_REGION, FLOOR, WALL

log = get_logger("amaze.maze.generator")


def init_metrics() -> Dict[str, Any]:
    return {
        "seeds_attempted": 0,
        "seeds_accepted": 0,
        "seeds_rejected": 0,
        "frontier_walls": 0,
        "walls_trimmed": 0,
        "doors_created": 0,
        "runtime_ms": 0.0,
    }


class MazeGenerator:
    def __init__(self, config: MazeConfig):
        if config.width < MIN_SIZE or config.height < MIN_SIZE:
            raise InvalidSizeError(config.width, config.height, MIN_SIZE)
        # Private copy: the caller's config keeps seed=None
        self.config = replace(config)
        if self.config.seed is None:
            self.config.seed = random.randint(1, 1_000_000)
        self.seed = self.config.seed
        self._rng = random.Random(self.seed)
        self.metrics: Dict[str, Any] = init_metrics() if config.enable_metrics else {}
        self.grid = Grid(config.width, config.height)
        # Scratch ownership matrix for the flood fill; replaced before door placement.
        self.visited = self.grid.bool_matrix()
        self.seeds: List[Tuple[int, Position]] = []

    def _bump(self, key: str, amount: int = 1):
        if self.config.enable_metrics:
            self.metrics[key] = self.metrics.get(key, 0) + amount

    # ------------------------------------------------------------------
    # Phases
    # ------------------------------------------------------------------
    def pick_seeds(self) -> List[Tuple[int, Position]]:
        w, h = self.config.width, self.config.height
        seeds = [(FIRST_REGION, Position(0, 0)), (FIRST_REGION + 1, Position(w - 1, h - 1))]
        next_region = FIRST_REGION + 2
        for _ in range(self.config.resolved_seed_count()):
            point = Position(self._rng.randrange(w), self._rng.randrange(h))
            self._bump("seeds_attempted")
            # Greedy: compared only against seeds accepted earlier in this pass
            if all(_distance(pos, point) >= self.config.min_seed_distance for _, pos in seeds):
                seeds.append((next_region, point))
                next_region += 1
                self._bump("seeds_accepted")
            else:
                self._bump("seeds_rejected")
        self.seeds = seeds
        return seeds

    def flood_fill(self):
        grid, visited = self.grid, self.visited
        queue: Deque[Tuple[int, Position]] = deque()
        for region, pos in self.seeds:
            grid.try_set(pos, region)
            visited[pos.x][pos.y] = True
            queue.append((region, pos))
        while queue:
            region, current = queue.popleft()
            for check in grid.neighbors(current):
                val, ok = grid.try_get(check)
                if not ok:
                    continue
                if not visited[check.x][check.y]:
                    grid.try_set(check, region)
                    visited[check.x][check.y] = True
                    queue.append((region, check))
                    continue
                if val == region:
                    continue
                # Frontier with another region (or an existing wall)
                grid.try_set(current, WALL)
                self._bump("frontier_walls")
                break

    def normalize_regions(self):
        for col in self.grid.cells:
            for y, val in enumerate(col):
                if val > WALL:
                    col[y] = FLOOR

    def bound_wall_thickness(self):
        thickness = self.config.thickness
        cells = self.grid.cells
        w, h = self.grid.width, self.grid.height
        trimmed = 0
        for y in range(h):
            run = 0
            for x in range(w):
                if cells[x][y] != WALL:
                    run = 0
                    continue
                run += 1
                if run > thickness:
                    cells[x][y] = FLOOR
                    trimmed += 1
        for x in range(w):
            run = 0
            for y in range(h):
                if cells[x][y] != WALL:
                    run = 0
                    continue
                run += 1
                if run > thickness:
                    cells[x][y] = FLOOR
                    trimmed += 1
        self._bump("walls_trimmed", trimmed)

    def place_doors(self):
        grid = self.grid
        self.visited = visited = grid.bool_matrix()
        for _region, origin in self.seeds:
            queue: Deque[Position] = deque([origin])
            door: Optional[Position] = None
            while queue and door is None:
                current = queue.popleft()
                for check in grid.neighbors(current):
                    val, ok = grid.try_get(check)
                    if not ok or visited[check.x][check.y]:
                        continue
                    if val == WALL:
                        grid.try_set(check, DOOR)
                        door = check
                        break
                    visited[check.x][check.y] = True
                    queue.append(check)
            if door is not None:
                self._bump("doors_created")

    def run(self) -> Grid:
        """Execute all phases and return the finished grid.

        When metrics are enabled, ``metrics['phase_ms']`` maps phase name to its
        duration in milliseconds.
        """
        start = time.perf_counter()
        phase_times: Dict[str, int] = {}

        def _phase(label, fn):
            ps = time.perf_counter()
            fn()
            phase_times[label] = int((time.perf_counter() - ps) * 1000)

        _phase("pick_seeds", self.pick_seeds)
        _phase("flood_fill", self.flood_fill)
        _phase("normalize_regions", self.normalize_regions)
        _phase("bound_wall_thickness", self.bound_wall_thickness)
        _phase("place_doors", self.place_doors)
        if self.config.enable_metrics:
            self.metrics["runtime_ms"] = int((time.perf_counter() - start) * 1000)
            self.metrics["phase_ms"] = phase_times
        log.debug(
            event="maze_generated",
            seed=self.seed,
            width=self.grid.width,
            height=self.grid.height,
            seeds=len(self.seeds),
            doors=self.metrics.get("doors_created"),
        )
        return self.grid


def generate_maze(width: int, height: int, seed_count: Optional[int] = None, *, seed: Optional[int] = None) -> Grid:
    """Build a maze grid. Raises InvalidSizeError below 20x20."""
    return MazeGenerator(MazeConfig(width=width, height=height, seed_count=seed_count, seed=seed)).run()


def _distance(p: Position, q: Position) -> float:
    return math.hypot(q.x - p.x, q.y - p.y)


__all__ = ["MazeGenerator", "generate_maze", "init_metrics"]
