from dataclasses import dataclass
from typing import Optional

MIN_SIZE = 20


@dataclass
class MazeConfig:
    width: int = 40
    height: int = 40
    # None => min(width, height) // 2
    seed_count: Optional[int] = None
    seed: Optional[int] = None
    thickness: int = 4
    min_seed_distance: float = 6.0
    enable_metrics: bool = True

    def resolved_seed_count(self) -> int:
        if self.seed_count is None:
            return min(self.width, self.height) // 2
        return max(0, int(self.seed_count))


__all__ = ["MazeConfig", "MIN_SIZE"]
