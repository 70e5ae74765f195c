"""Read-only projections handed to hosts and progression strategies."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Tuple

from numbermatch.components.cell import Cell


class LevelStatus(Enum):
    """Lifecycle of the current level."""
    INACTIVE = auto()
    ACTIVE = auto()
    COMPLETED = auto()
    FAILED = auto()


class Progression(Enum):
    CONTINUE = "continue"
    LEVEL_UP = "level_up"
    LEVEL_FAIL = "level_fail"


@dataclass(frozen=True, slots=True)
class ProgressionState:
    """Inputs a progression strategy decides on."""
    level_number: int
    score: int
    timer: int
    target_score: int


@dataclass(frozen=True, slots=True)
class GameStateData:
    """Snapshot of a session; never the live mutable state."""
    current_level: int
    score: int
    timer: int
    add_row_uses: int
    is_game_over: bool
    is_paused: bool
    grid: Tuple[Tuple[Cell, ...], ...]
    current_level_target_score: int
