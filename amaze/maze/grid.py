"""Grid and Position primitives.

The grid is column-major (``cells[x][y]``), matching the rest of the maze
package. Two access disciplines coexist on purpose:

    * ``try_get`` / ``try_set`` never raise; traversal code probes neighbors
      that may fall outside the grid and simply skips them.
    * ``get`` / ``set`` raise :class:`OutOfBounds`; they are used to validate
      coordinates supplied from outside (e.g. a client move request).

Traversal scratch space comes from :meth:`Grid.bool_matrix` and is allocated
per call, never shared.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Tuple

from .errors import OutOfBounds

# N, S, E, W. Order matters: door crossing picks the first qualifying neighbor.
DIRECTIONS: Tuple[Tuple[int, int], ...] = ((0, 1), (0, -1), (1, 0), (-1, 0))


@dataclass(frozen=True)
class Position:
    x: int
    y: int

    def __add__(self, other: "Position") -> "Position":
        return Position(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Position") -> "Position":
        return Position(self.x - other.x, self.y - other.y)

    def is_zero(self) -> bool:
        return self.x == 0 and self.y == 0

    def to_dict(self):
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data) -> "Position":
        """Build a Position from ``{"x": int, "y": int}``.

        Raises ValueError for anything else (missing keys, bools, floats).
        """
        if not isinstance(data, dict):
            raise ValueError("position must be an object")
        x, y = data.get("x"), data.get("y")
        for v in (x, y):
            if not isinstance(v, int) or isinstance(v, bool):
                raise ValueError("position coordinates must be integers")
        return cls(x, y)

    def __str__(self) -> str:
        return f"({self.x},{self.y})"


class Grid:
    __slots__ = ("width", "height", "cells")

    def __init__(self, width: int, height: int, fill: int = 0):
        self.width = width
        self.height = height
        self.cells: List[List[int]] = [[fill for _ in range(height)] for _ in range(width)]

    @classmethod
    def filled(cls, width: int, height: int, value: int) -> "Grid":
        return cls(width, height, fill=value)

    @classmethod
    def from_rows(cls, rows: List[List[int]]) -> "Grid":
        """Build a grid from row-major data (``rows[y][x]``), handy for fixtures."""
        height = len(rows)
        width = len(rows[0]) if rows else 0
        grid = cls(width, height)
        for y, row in enumerate(rows):
            if len(row) != width:
                raise ValueError("rows must all have the same length")
            for x, value in enumerate(row):
                grid.cells[x][y] = value
        return grid

    def to_rows(self) -> List[List[int]]:
        """Row-major copy (``rows[y][x]``) so clients index rows visually."""
        return [[self.cells[x][y] for x in range(self.width)] for y in range(self.height)]

    def copy(self) -> "Grid":
        clone = Grid(self.width, self.height)
        clone.cells = [list(col) for col in self.cells]
        return clone

    # ------------------------------------------------------------------
    # Bounds
    # ------------------------------------------------------------------
    def in_bounds(self, p: Position) -> bool:
        return 0 <= p.x < self.width and 0 <= p.y < self.height

    def neighbors(self, p: Position) -> Iterator[Position]:
        """Yield the 4-connected neighbors of ``p`` (may be out of bounds)."""
        for dx, dy in DIRECTIONS:
            yield Position(p.x + dx, p.y + dy)

    # ------------------------------------------------------------------
    # Silent accessors (traversal)
    # ------------------------------------------------------------------
    def try_get(self, p: Position) -> Tuple[int, bool]:
        if not self.in_bounds(p):
            return 0, False
        return self.cells[p.x][p.y], True

    def try_set(self, p: Position, value: int) -> bool:
        if not self.in_bounds(p):
            return False
        self.cells[p.x][p.y] = value
        return True

    # ------------------------------------------------------------------
    # Strict accessors (external coordinates)
    # ------------------------------------------------------------------
    def get(self, p: Position) -> int:
        if not self.in_bounds(p):
            raise OutOfBounds(p, self.width, self.height)
        return self.cells[p.x][p.y]

    def set(self, p: Position, value: int) -> None:
        if not self.in_bounds(p):
            raise OutOfBounds(p, self.width, self.height)
        self.cells[p.x][p.y] = value

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def bool_matrix(self) -> List[List[bool]]:
        return [[False] * self.height for _ in range(self.width)]

    def count(self, value: int) -> int:
        return sum(col.count(value) for col in self.cells)

    def positions(self, value: int) -> Iterator[Position]:
        for x in range(self.width):
            for y in range(self.height):
                if self.cells[x][y] == value:
                    yield Position(x, y)

    def __repr__(self) -> str:
        return f"<Grid {self.width}x{self.height}>"


__all__ = ["DIRECTIONS", "Position", "Grid"]
