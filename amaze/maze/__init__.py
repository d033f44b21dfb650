"""Public maze package interface.

Generation, fog-of-war reveal and movement for a single game session.
"""

from .config import MIN_SIZE, MazeConfig
from .errors import (
    InvalidMoveError,
    InvalidSizeError,
    MazeError,
    MoveError,
    NoTraversableExitError,
    NotADoorError,
    OutOfBounds,
)
from .generator import MazeGenerator, generate_maze
from .grid import Grid, Position
from .navigation import move, open_door
from .session import GameSession
from .tiles import CELL_VALUES, CORRIDOR, DOOR, FLOOR, WALL, value_to_type
from .visibility import check_view, describe

__all__ = [
    "MIN_SIZE",
    "MazeConfig",
    "MazeGenerator",
    "generate_maze",
    "Grid",
    "Position",
    "GameSession",
    "describe",
    "check_view",
    "move",
    "open_door",
    "CELL_VALUES",
    "FLOOR",
    "WALL",
    "CORRIDOR",
    "DOOR",
    "value_to_type",
    "MazeError",
    "InvalidSizeError",
    "OutOfBounds",
    "MoveError",
    "InvalidMoveError",
    "NotADoorError",
    "NoTraversableExitError",
]
