"""Top-level facade a host UI drives: taps, add-row, timer ticks and level flow."""
from __future__ import annotations

import logging
import random
from typing import Callable, Mapping, Sequence, Tuple

from esper import World

from numbermatch.components.board_position import Position
from numbermatch.components.cell import Cell
from numbermatch.components.game_state import GameStateData, Progression, ProgressionState
from numbermatch.components.level import LevelConfig
from numbermatch.components.selection import SelectionResult
from numbermatch.components.session_state import SessionState
from numbermatch.constants import LEVEL_CONFIGS, LEVEL_SEQUENCE
from numbermatch.events.bus import (
    EVENT_CELL_SELECTED,
    EVENT_GAME_OVER,
    EVENT_GAME_PAUSED,
    EVENT_GAME_RESUMED,
    EVENT_GAME_STARTED,
    EVENT_SCORE_UPDATED,
    EVENT_TIMER_EXPIRED,
    EVENT_TIMER_UPDATED,
    EventBus,
)
from numbermatch.systems.grid_engine import GridEngine
from numbermatch.systems.level_manager import LevelManager, LevelProgressionStrategy
from numbermatch.systems.match_engine import MatchEngine
from numbermatch.utils.session import get_or_create_session
from numbermatch.utils.time_format import format_time
from numbermatch.world import create_world

logger = logging.getLogger(__name__)


class GameState:
    """Composes the grid, match and level engines for one game session.

    Every level gets a fresh world, GridEngine and MatchEngine; nothing from
    the previous grid carries over. Matches resolve synchronously, so a host
    wanting to show both cells highlighted delays its own re-render.
    """

    def __init__(
        self,
        event_bus: EventBus | None = None,
        *,
        levels: Mapping[int, LevelConfig] = LEVEL_CONFIGS,
        sequence: Sequence[int] = LEVEL_SEQUENCE,
        strategy: LevelProgressionStrategy | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.event_bus = event_bus or EventBus()
        self._rng = rng or random.Random()
        self.level_manager = LevelManager(
            self.event_bus,
            levels=levels,
            sequence=sequence,
            strategy=strategy,
        )
        self.world: World
        self.grid_engine: GridEngine
        self.match_engine: MatchEngine
        self._destroyed = False
        self._load_level(self.level_manager.start_level())

    def _load_level(self, level: LevelConfig) -> None:
        self.world = create_world(level, rng=self._rng)
        self.grid_engine = GridEngine(
            self.world,
            self.event_bus,
            level.initial_rows,
            level.initial_cols,
            level.initial_filled_rows,
            rng=self._rng,
        )
        self.match_engine = MatchEngine(self.grid_engine, self.event_bus)
        self.event_bus.emit(EVENT_GAME_STARTED, state=self.get_state_snapshot())

    def _session(self) -> SessionState:
        return get_or_create_session(self.world)

    # ------------------------------------------------------------------
    # Subscription
    # ------------------------------------------------------------------

    def get_event_bus(self) -> EventBus:
        return self.event_bus

    def on(self, event: str, callback: Callable) -> None:
        self.event_bus.subscribe(event, callback)

    def off(self, event: str, callback: Callable) -> None:
        self.event_bus.unsubscribe(event, callback)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_grid(self) -> Tuple[Tuple[Cell, ...], ...]:
        return self.grid_engine.get_grid()

    def get_score(self) -> int:
        return self._session().score

    def get_timer(self) -> int:
        return self._session().timer

    def get_formatted_timer(self) -> str:
        return format_time(self._session().timer)

    def get_add_row_uses(self) -> int:
        return self._session().add_row_uses

    def is_over(self) -> bool:
        return self._session().is_game_over

    def get_paused(self) -> bool:
        return self._session().is_paused

    def get_current_level(self) -> LevelConfig:
        return self.level_manager.get_current_level()

    def get_current_level_number(self) -> int:
        return self.level_manager.get_current_level_number()

    def get_current_level_target_score(self) -> int:
        return self._session().target_score

    def has_next_level(self) -> bool:
        return self.level_manager.has_next_level()

    def get_selected_cell(self) -> Position | None:
        return self._session().selected

    def has_available_moves(self) -> bool:
        return self.grid_engine.has_available_moves()

    def get_hint(self) -> Tuple[Position, Position] | None:
        return self.match_engine.find_hint()

    def get_state_snapshot(self) -> GameStateData:
        session = self._session()
        return GameStateData(
            current_level=self.level_manager.get_current_level_number(),
            score=session.score,
            timer=session.timer,
            add_row_uses=session.add_row_uses,
            is_game_over=session.is_game_over,
            is_paused=session.is_paused,
            grid=self.grid_engine.get_grid(),
            current_level_target_score=session.target_score,
        )

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def select_cell(self, row: int, col: int) -> SelectionResult:
        session = self._session()
        if session.is_game_over or session.is_paused:
            return SelectionResult(success=False)
        cell = self.grid_engine.get_cell(row, col)
        if cell is None or not cell.is_active:
            return SelectionResult(success=False)

        position = cell.position
        first = session.selected

        if first == position:
            session.selected = None
            self.event_bus.emit(EVENT_CELL_SELECTED, position=None, is_first=False)
            return SelectionResult(success=True)

        if first is None:
            session.selected = position
            self.event_bus.emit(EVENT_CELL_SELECTED, position=position, is_first=True)
            return SelectionResult(success=True)

        result = self.match_engine.can_match(first, position)
        if not result.is_valid:
            # The last tapped cell becomes the pending first pick.
            session.selected = position
            self.event_bus.emit(EVENT_CELL_SELECTED, position=position, is_first=True)
            return SelectionResult(success=False, invalid_path=list(result.blocking_cells))

        session.selected = position
        self.event_bus.emit(EVENT_CELL_SELECTED, position=position, is_first=False)
        self.match_engine.execute_match(first, position, publish_grid=False)
        self._increment_score()
        self.grid_engine.publish()
        session.selected = None
        self.event_bus.emit(EVENT_CELL_SELECTED, position=None, is_first=False)
        self._check_level_progression()
        return SelectionResult(success=True, matched=True)

    def clear_selection(self) -> None:
        self._session().selected = None

    def _increment_score(self) -> None:
        session = self._session()
        session.score += 1
        self.event_bus.emit(EVENT_SCORE_UPDATED, score=session.score)

        level = self.get_current_level()
        if level.timer_boost_per_score > 0 and session.timer_boost_count < level.max_timer_boosts:
            session.timer += level.timer_boost_per_score
            session.timer_boost_count += 1
            self.event_bus.emit(EVENT_TIMER_UPDATED, timer=session.timer)

    def decrement_timer(self) -> None:
        """One-second tick; the host owns the clock that calls this."""
        session = self._session()
        if session.is_game_over or session.is_paused or session.timer <= 0:
            return
        session.timer -= 1
        self.event_bus.emit(EVENT_TIMER_UPDATED, timer=session.timer)
        if session.timer <= 0:
            logger.debug("Timer expired on level %d", self.get_current_level_number())
            self.event_bus.emit(EVENT_TIMER_EXPIRED)
            self._check_level_progression()

    def add_row(self) -> bool:
        session = self._session()
        if session.add_row_uses <= 0:
            return False
        success = self.grid_engine.add_new_row()
        if success:
            session.add_row_uses -= 1
        return success

    def pause(self) -> None:
        session = self._session()
        if not session.is_game_over:
            session.is_paused = True
            self.event_bus.emit(EVENT_GAME_PAUSED)

    def resume(self) -> None:
        session = self._session()
        if not session.is_game_over:
            session.is_paused = False
            self.event_bus.emit(EVENT_GAME_RESUMED)

    # ------------------------------------------------------------------
    # Level flow
    # ------------------------------------------------------------------

    def _check_level_progression(self) -> Progression:
        session = self._session()
        progression = self.level_manager.evaluate_progression(
            ProgressionState(
                level_number=self.get_current_level_number(),
                score=session.score,
                timer=session.timer,
                target_score=session.target_score,
            )
        )
        if progression is Progression.LEVEL_UP:
            self.level_manager.complete_level()
        elif progression is Progression.LEVEL_FAIL:
            self.level_manager.fail_level()
            self._end_game()
        return progression

    def _end_game(self) -> None:
        session = self._session()
        session.is_game_over = True
        all_levels_complete = (
            not self.has_next_level() and session.score >= self.get_current_level().target_score
        )
        logger.debug("Game over at level %d with score %d", self.get_current_level_number(), session.score)
        self.event_bus.emit(
            EVENT_GAME_OVER,
            final_score=session.score,
            level=self.get_current_level_number(),
            all_levels_complete=all_levels_complete,
        )

    def start_next_level(self) -> None:
        if not self.has_next_level():
            self._end_game()
            return
        level = self.level_manager.advance_to_next_level()
        if level is not None:
            self._load_level(level)

    def restart_level(self) -> None:
        self._load_level(self.level_manager.restart_current_level())

    def destroy(self) -> None:
        """Drop every subscription; safe to call more than once."""
        if self._destroyed:
            return
        self.event_bus.remove_all_listeners()
        self._destroyed = True
