"""Error taxonomy for maze generation and movement.

Every error carries a short machine readable ``code`` so the route and
websocket layers can forward it to clients without string matching.

- InvalidSizeError: generation requested below the minimum size; no grid.
- OutOfBounds: strict grid accessor used with a position outside the grid.
- MoveError and subclasses: a rejected move. Session state is unchanged.
"""

from __future__ import annotations


class MazeError(Exception):
    code = "maze_error"


class InvalidSizeError(MazeError, ValueError):
    code = "invalid_size"

    def __init__(self, width: int, height: int, minimum: int):
        super().__init__(f"Invalid maze size requested: {width}x{height} (minimum {minimum}x{minimum})")
        self.width = width
        self.height = height
        self.minimum = minimum


class OutOfBounds(MazeError, IndexError):
    code = "out_of_bounds"

    def __init__(self, position, width: int, height: int):
        super().__init__(f"invalid position access {position} for {width}x{height} grid")
        self.position = position


class MoveError(MazeError):
    code = "move_rejected"


class InvalidMoveError(MoveError):
    code = "invalid_move"


class NotADoorError(MoveError):
    code = "not_a_door"


class NoTraversableExitError(MoveError):
    code = "no_exit"


__all__ = [
    "MazeError",
    "InvalidSizeError",
    "OutOfBounds",
    "MoveError",
    "InvalidMoveError",
    "NotADoorError",
    "NoTraversableExitError",
]
