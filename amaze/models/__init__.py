# Model package init
from .game_instance import GameInstance  # noqa: F401 re-export

__all__ = ["GameInstance"]
