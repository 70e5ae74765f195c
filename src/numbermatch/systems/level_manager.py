from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping, Protocol, Sequence

from numbermatch.components.game_state import LevelStatus, Progression, ProgressionState
from numbermatch.components.level import LevelConfig
from numbermatch.constants import LEVEL_CONFIGS, LEVEL_SEQUENCE
from numbermatch.events.bus import (
    EVENT_LEVEL_COMPLETED,
    EVENT_LEVEL_FAILED,
    EVENT_LEVEL_STARTED,
    EventBus,
)

logger = logging.getLogger(__name__)


class LevelProgressionStrategy(Protocol):
    """Interface deciding when a level is won or lost."""

    def should_level_up(self, state: ProgressionState) -> bool:
        ...

    def should_level_fail(self, state: ProgressionState) -> bool:
        ...

    def get_next_level(self, level_number: int) -> int:
        ...


class ScoreBasedProgressionStrategy:
    """Win by reaching the level's target score, lose when the timer runs out."""

    def should_level_up(self, state: ProgressionState) -> bool:
        return state.score >= state.target_score

    def should_level_fail(self, state: ProgressionState) -> bool:
        return state.timer <= 0

    def get_next_level(self, level_number: int) -> int:
        return level_number + 1


@dataclass(slots=True)
class XPBasedProgressionStrategy:
    """Each match earns ``xp_per_match``; level N needs ``base_xp * growth ** (N - 1)``."""

    xp_per_match: int = 10
    base_xp: int = 100
    growth: float = 1.5

    def required_xp(self, level_number: int) -> int:
        return int(self.base_xp * self.growth ** max(0, level_number - 1))

    def should_level_up(self, state: ProgressionState) -> bool:
        return state.score * self.xp_per_match >= self.required_xp(state.level_number)

    def should_level_fail(self, state: ProgressionState) -> bool:
        return state.timer <= 0

    def get_next_level(self, level_number: int) -> int:
        return level_number + 1


@dataclass(slots=True)
class WaveBasedProgressionStrategy:
    """A level is ``waves_per_level`` waves of ``matches_per_wave`` matches."""

    waves_per_level: int = 3
    matches_per_wave: int = 5

    def waves_cleared(self, state: ProgressionState) -> int:
        if self.matches_per_wave <= 0:
            return self.waves_per_level
        return state.score // self.matches_per_wave

    def should_level_up(self, state: ProgressionState) -> bool:
        return self.waves_cleared(state) >= self.waves_per_level

    def should_level_fail(self, state: ProgressionState) -> bool:
        return state.timer <= 0

    def get_next_level(self, level_number: int) -> int:
        return level_number + 1


class LevelManager:
    """Walks an ordered sequence of levels.

    Flow per level:
      INACTIVE -> ACTIVE (start_level) -> COMPLETED | FAILED -> INACTIVE
    Whether a level is won or lost is left to the progression strategy.
    """

    def __init__(
        self,
        event_bus: EventBus,
        *,
        levels: Mapping[int, LevelConfig] = LEVEL_CONFIGS,
        sequence: Sequence[int] = LEVEL_SEQUENCE,
        strategy: LevelProgressionStrategy | None = None,
    ):
        if not sequence:
            raise ValueError("Level sequence is empty")
        missing = [level_id for level_id in sequence if level_id not in levels]
        if missing:
            raise ValueError(f"Unknown level id(s) in sequence: {missing}")
        self.event_bus = event_bus
        self.levels = levels
        self.sequence = tuple(sequence)
        self.strategy: LevelProgressionStrategy = strategy or ScoreBasedProgressionStrategy()
        self.current_index = 0
        self.status = LevelStatus.INACTIVE

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_current_level(self) -> LevelConfig:
        return self.levels[self.sequence[self.current_index]]

    def get_current_level_number(self) -> int:
        return self.current_index + 1

    def get_level_count(self) -> int:
        return len(self.sequence)

    def get_status(self) -> LevelStatus:
        return self.status

    def is_level_active(self) -> bool:
        return self.status is LevelStatus.ACTIVE

    def has_next_level(self) -> bool:
        return self.current_index < self.get_level_count() - 1

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start_level(self) -> LevelConfig:
        level = self.get_current_level()
        self.status = LevelStatus.ACTIVE
        logger.debug("Level %d (%s) started", self.get_current_level_number(), level.name)
        self.event_bus.emit(
            EVENT_LEVEL_STARTED,
            level=level,
            level_number=self.get_current_level_number(),
        )
        return level

    def restart_current_level(self) -> LevelConfig:
        self.status = LevelStatus.INACTIVE
        return self.start_level()

    def complete_level(self) -> None:
        self.status = LevelStatus.COMPLETED
        logger.debug("Level %d completed", self.get_current_level_number())
        self.event_bus.emit(
            EVENT_LEVEL_COMPLETED,
            level=self.get_current_level(),
            level_number=self.get_current_level_number(),
            has_next_level=self.has_next_level(),
        )

    def fail_level(self) -> None:
        self.status = LevelStatus.FAILED
        logger.debug("Level %d failed", self.get_current_level_number())
        self.event_bus.emit(
            EVENT_LEVEL_FAILED,
            level=self.get_current_level(),
            level_number=self.get_current_level_number(),
        )

    def advance_to_next_level(self) -> LevelConfig | None:
        """Move to and start the next level; None when the sequence is exhausted."""
        if not self.has_next_level():
            return None
        next_number = self.strategy.get_next_level(self.get_current_level_number())
        next_index = next_number - 1
        if not self.current_index < next_index < len(self.sequence):
            return None
        self.status = LevelStatus.INACTIVE
        self.current_index = next_index
        return self.start_level()

    def evaluate_progression(self, state: ProgressionState) -> Progression:
        if not self.is_level_active():
            return Progression.CONTINUE
        if self.strategy.should_level_up(state):
            return Progression.LEVEL_UP
        if self.strategy.should_level_fail(state):
            return Progression.LEVEL_FAIL
        return Progression.CONTINUE
