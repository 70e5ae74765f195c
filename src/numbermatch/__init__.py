"""Number-match puzzle engine: grid, match rules, scoring, timer and level flow."""
from __future__ import annotations

from numbermatch.components.board_position import Position
from numbermatch.components.cell import Cell
from numbermatch.components.game_state import GameStateData, LevelStatus, Progression, ProgressionState
from numbermatch.components.level import Difficulty, LevelConfig
from numbermatch.components.match_result import MatchResult
from numbermatch.components.selection import SelectionResult
from numbermatch.constants import LEVEL_CONFIGS, LEVEL_SEQUENCE, MAX_LEVELS
from numbermatch.events.bus import ALL_EVENTS, EventBus
from numbermatch.game import GameState
from numbermatch.systems import (
    GridEngine,
    LevelManager,
    LevelProgressionStrategy,
    MatchEngine,
    ScoreBasedProgressionStrategy,
    WaveBasedProgressionStrategy,
    XPBasedProgressionStrategy,
)

__all__ = [
    "ALL_EVENTS",
    "Cell",
    "Difficulty",
    "EventBus",
    "GameState",
    "GameStateData",
    "GridEngine",
    "LEVEL_CONFIGS",
    "LEVEL_SEQUENCE",
    "LevelConfig",
    "LevelManager",
    "LevelProgressionStrategy",
    "LevelStatus",
    "MAX_LEVELS",
    "MatchEngine",
    "MatchResult",
    "Position",
    "Progression",
    "ProgressionState",
    "ScoreBasedProgressionStrategy",
    "SelectionResult",
    "WaveBasedProgressionStrategy",
    "XPBasedProgressionStrategy",
]
