from __future__ import annotations

from numbermatch.systems.grid_engine import GridEngine
from numbermatch.systems.level_manager import (
    LevelManager,
    LevelProgressionStrategy,
    ScoreBasedProgressionStrategy,
    WaveBasedProgressionStrategy,
    XPBasedProgressionStrategy,
)
from numbermatch.systems.match_engine import MatchEngine, values_match

__all__ = [
    "GridEngine",
    "LevelManager",
    "LevelProgressionStrategy",
    "MatchEngine",
    "ScoreBasedProgressionStrategy",
    "WaveBasedProgressionStrategy",
    "XPBasedProgressionStrategy",
    "values_match",
]
