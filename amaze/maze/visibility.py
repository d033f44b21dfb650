"""Fog-of-war reveal computation.

``describe`` returns the cells that become visible from the player's position
and that were not handed out before, then flags them in the caller's
``revealed`` matrix so a repeated call returns nothing new.

Two reveal policies, picked by the tile under the player:

    room mode (FLOOR)      BFS through floor; doors are revealed but not seen
                           through; walls stop the flood.
    corridor mode (WALL)   BFS along connected corridor cells without a sight
                           check; floor cells touching the corridor are revealed
                           only when ``check_view`` passes; doors are leaves.

BFS bookkeeping uses a scratch matrix allocated per call. The persistent
``revealed`` matrix only filters what gets emitted.
"""

from __future__ import annotations

from collections import deque
from typing import Deque, Dict, List

from .grid import Grid, Position
from .tiles import DOOR, FLOOR, WALL

Reveal = Dict[Position, int]


def describe(grid: Grid, player: Position, revealed: List[List[bool]]) -> Reveal:
    tile = grid.get(player)
    if tile == WALL:
        seen = corridor_reveal(grid, player)
    else:
        seen = room_reveal(grid, player)
    fresh: Reveal = {}
    for pos, val in seen.items():
        if revealed[pos.x][pos.y]:
            continue
        revealed[pos.x][pos.y] = True
        fresh[pos] = val
    return fresh


def room_reveal(grid: Grid, player: Position) -> Reveal:
    """Everything reachable from the player through floor, plus bordering doors."""
    visited = grid.bool_matrix()
    visited[player.x][player.y] = True
    seen: Reveal = {player: grid.get(player)}
    queue: Deque[Position] = deque([player])
    while queue:
        current = queue.popleft()
        for check in grid.neighbors(current):
            val, ok = grid.try_get(check)
            if not ok or visited[check.x][check.y] or val == WALL:
                continue
            visited[check.x][check.y] = True
            seen[check] = val
            if val == FLOOR:
                queue.append(check)
    return seen


def corridor_reveal(grid: Grid, player: Position) -> Reveal:
    visited = grid.bool_matrix()
    visited[player.x][player.y] = True
    seen: Reveal = {player: grid.get(player)}
    queue: Deque[Position] = deque([player])
    while queue:
        current = queue.popleft()
        for check in grid.neighbors(current):
            val, ok = grid.try_get(check)
            if not ok or visited[check.x][check.y]:
                continue
            visited[check.x][check.y] = True
            if val == WALL:
                seen[check] = val
                queue.append(check)
            elif val == DOOR:
                seen[check] = val
            elif check_view(grid, check, player):
                seen[check] = val
    return seen


def check_view(grid: Grid, candidate: Position, player: Position) -> bool:
    """Digital-line sight test from ``candidate`` back to ``player``.

    Each step moves one unit along X or Y, whichever keeps the walk closest
    to the ideal line. Any floor cell stepped on before reaching the player
    blocks sight. The walk direction makes this asymmetric:
    ``check_view(a, b)`` and ``check_view(b, a)`` may differ.
    """
    diff = candidate - player
    if diff.is_zero():
        return True
    step_x = -1 if diff.x > 0 else 1
    step_y = -1 if diff.y > 0 else 1
    span_x, span_y = abs(diff.x), abs(diff.y)
    # Vertical sight line: no run to divide by
    slope = diff.y / diff.x if diff.x else None
    run = rise = 0
    x, y = candidate.x, candidate.y
    while True:
        if slope is None or run == span_x:
            move_y = True
        elif rise == span_y:
            move_y = False
        else:
            # Ties step along Y first
            move_y = abs(run * slope) >= abs(rise)
        if move_y:
            y += step_y
            rise += 1
        else:
            x += step_x
            run += 1
        if x == player.x and y == player.y:
            return True
        val, ok = grid.try_get(Position(x, y))
        if not ok or val == FLOOR:
            return False


__all__ = ["describe", "room_reveal", "corridor_reveal", "check_view"]
