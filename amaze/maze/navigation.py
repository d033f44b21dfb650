"""Player movement and door crossing.

The player's state is implied by the tile it stands on (room floor or
corridor). Stepping onto a door crosses it: the player lands on the first
neighbor of the door whose tile type differs from the one it left, and the
door is opened (turned into floor and un-revealed so the next describe call
reports it again).

Moves onto ordinary cells are not collision checked unless ``strict`` is set,
in which case wall cells the player has never seen are refused.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from amaze.logging_utils import get_logger

from .errors import InvalidMoveError, NoTraversableExitError, NotADoorError
from .grid import Position
from .tiles import DOOR, FLOOR, WALL

if TYPE_CHECKING:  # pragma: no cover
    from .session import GameSession

log = get_logger("amaze.maze.navigation")


def move(session: "GameSession", to: Position, *, strict: bool = False) -> Position:
    """Move the player to ``to`` and return the resulting position."""
    grid = session.grid
    if not isinstance(to, Position):
        raise InvalidMoveError(f"malformed move target {to!r}")
    val, ok = grid.try_get(to)
    if not ok:
        raise InvalidMoveError(f"move target {to} is outside the {grid.width}x{grid.height} maze")
    if val == DOOR:
        return open_door(session, to)
    if strict and val == WALL and not session.revealed[to.x][to.y]:
        raise InvalidMoveError(f"move target {to} has not been discovered")
    session.player = to
    return to


def open_door(session: "GameSession", door: Position) -> Position:
    grid = session.grid
    val, ok = grid.try_get(door)
    if not ok or val != DOOR:
        raise NotADoorError(f"{door} is not a door")
    tile_type = grid.get(session.player)
    exit_pos = None
    for check in grid.neighbors(door):
        nval, nok = grid.try_get(check)
        if nok and nval != tile_type:
            exit_pos = check
            break
    if exit_pos is None:
        raise NoTraversableExitError(f"door at {door} has no exit from a {tile_type} tile")
    grid.set(door, FLOOR)
    session.revealed[door.x][door.y] = False
    session.opened_doors.append(door)
    session.player = exit_pos
    log.debug(event="door_opened", door=str(door), exit=str(exit_pos), tile=tile_type)
    return exit_pos


__all__ = ["move", "open_door"]
