"""Game session: one maze, one player.

A session exclusively owns its grid, the player position, the opaque
inventory bag and the ``revealed`` matrix that makes ``describe`` idempotent.
Callers sharing a session across threads must hold ``session.lock`` around
``describe``/``move``; nothing in the maze package locks internally.

Sessions can be rebuilt from :meth:`snapshot` output because generation is
deterministic for a seed; only opened doors and the position are replayed.
"""

from __future__ import annotations

import threading
from typing import Any, Dict, List, Optional

from .config import MazeConfig
from .generator import MazeGenerator
from .grid import Grid, Position
from .navigation import move as _move
from .tiles import FLOOR
from .visibility import Reveal, describe as _describe

START = Position(0, 0)


class GameSession:
    def __init__(self, grid: Grid, *, seed: Optional[int] = None, seed_count: Optional[int] = None,
                 player: Position = START, metrics: Optional[Dict[str, Any]] = None):
        self.grid = grid
        self.seed = seed
        self.seed_count = seed_count
        self.player = player
        self.inventory: Dict[str, bool] = {}
        self.revealed: List[List[bool]] = grid.bool_matrix()
        self.opened_doors: List[Position] = []
        self.metrics: Dict[str, Any] = metrics or {}
        self.lock = threading.Lock()

    @classmethod
    def new(cls, width: int, height: int, seed_count: Optional[int] = None, seed: Optional[int] = None,
            *, config: Optional[MazeConfig] = None) -> "GameSession":
        if config is None:
            config = MazeConfig(width=width, height=height, seed_count=seed_count, seed=seed)
        gen = MazeGenerator(config)
        grid = gen.run()
        return cls(grid, seed=gen.seed, seed_count=config.resolved_seed_count(), metrics=gen.metrics)

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    def tile(self) -> int:
        return self.grid.get(self.player)

    def describe(self) -> Reveal:
        return _describe(self.grid, self.player, self.revealed)

    def move(self, to: Position, *, strict: bool = False) -> Position:
        return _move(self, to, strict=strict)

    # ------------------------------------------------------------------
    # Snapshot / restore
    # ------------------------------------------------------------------
    def snapshot(self) -> Dict[str, Any]:
        return {
            "seed": self.seed,
            "width": self.width,
            "height": self.height,
            "seed_count": self.seed_count,
            "player": self.player.to_dict(),
            "opened_doors": [d.to_dict() for d in self.opened_doors],
            "inventory": dict(self.inventory),
        }

    @classmethod
    def restore(cls, data: Dict[str, Any], *, config: Optional[MazeConfig] = None) -> "GameSession":
        """Regenerate the maze from its seed and replay opened doors and position.

        The revealed matrix starts empty: the next describe call re-reports
        everything visible from the restored position.
        """
        if config is None:
            config = MazeConfig(
                width=data["width"],
                height=data["height"],
                seed_count=data.get("seed_count"),
                seed=data["seed"],
            )
        session = cls.new(config.width, config.height, config=config)
        for raw in data.get("opened_doors") or []:
            door = Position.from_dict(raw)
            session.grid.try_set(door, FLOOR)
            session.opened_doors.append(door)
        player = data.get("player")
        if player:
            pos = Position.from_dict(player)
            if session.grid.in_bounds(pos):
                session.player = pos
        session.inventory = dict(data.get("inventory") or {})
        return session


__all__ = ["GameSession", "START"]
