from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Difficulty(Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


@dataclass(frozen=True)
class LevelConfig:
    """Static description of one stage of play."""

    id: int
    name: str
    difficulty: Difficulty
    initial_rows: int
    initial_cols: int
    initial_filled_rows: int
    target_score: int
    initial_timer: int
    timer_boost_per_score: int
    max_timer_boosts: int
    add_row_count: int
    description: str = ""

    def __post_init__(self) -> None:
        if self.initial_rows <= 0 or self.initial_cols <= 0:
            raise ValueError(f"Level '{self.name}' needs a positive grid size")
        if not 0 <= self.initial_filled_rows <= self.initial_rows:
            raise ValueError(f"Level '{self.name}' fills more rows than it has")
        if self.initial_timer <= 0:
            raise ValueError(f"Level '{self.name}' needs a positive initial_timer")
        for field_name in ("target_score", "timer_boost_per_score", "max_timer_boosts", "add_row_count"):
            if getattr(self, field_name) < 0:
                raise ValueError(f"Level '{self.name}' has a negative {field_name}")
