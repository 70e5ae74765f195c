import logging
from typing import Callable, Dict

from blinker import Signal

logger = logging.getLogger(__name__)


class EventBus:
    """Per-session event bus leveraging blinker Signal objects.

    Handlers are called as ``fn(sender, **payload)``. A handler that raises is
    logged and skipped; the remaining handlers still receive the event.
    """
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn: Callable):
        sig = self._signals.setdefault(name, Signal(name))
        # Strong reference so handlers defined inline (lambdas, closures) stay connected.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn: Callable):
        sig = self._signals.get(name)
        if sig is not None:
            sig.disconnect(fn)

    on = subscribe
    off = unsubscribe

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig is None:
            return
        for receiver in list(sig.receivers_for(self)):
            try:
                receiver(self, **payload)
            except Exception:
                logger.exception("Error in event handler for %s", name)

    def remove_all_listeners(self, name: str | None = None):
        if name is None:
            self._signals.clear()
        else:
            self._signals.pop(name, None)

    def listener_count(self, name: str) -> int:
        sig = self._signals.get(name)
        return len(sig.receivers) if sig is not None else 0


# ============================================================================
# GRID
# ============================================================================
EVENT_GRID_UPDATED = "grid:updated"      # payload: grid=tuple[tuple[Cell, ...], ...]
EVENT_CELL_SELECTED = "cell:selected"    # payload: position=Position|None, is_first=bool
EVENT_CELLS_MATCHED = "cells:matched"    # payload: positions=(Position, Position), path=list[Position], values=(int, int)
EVENT_ROW_ADDED = "row:added"            # payload: rows=list[int], expanded=bool, next_count=int


# ============================================================================
# SCORE & TIMER
# ============================================================================
EVENT_SCORE_UPDATED = "score:updated"    # payload: score=int
EVENT_TIMER_UPDATED = "timer:updated"    # payload: timer=int
EVENT_TIMER_EXPIRED = "timer:expired"    # payload: None


# ============================================================================
# LEVELS
# ============================================================================
EVENT_LEVEL_STARTED = "level:started"        # payload: level=LevelConfig, level_number=int
EVENT_LEVEL_COMPLETED = "level:completed"    # payload: level=LevelConfig, level_number=int, has_next_level=bool
EVENT_LEVEL_FAILED = "level:failed"          # payload: level=LevelConfig, level_number=int


# ============================================================================
# GAME FLOW
# ============================================================================
EVENT_GAME_STARTED = "game:started"    # payload: state=GameStateData
EVENT_GAME_PAUSED = "game:paused"      # payload: None
EVENT_GAME_RESUMED = "game:resumed"    # payload: None
EVENT_GAME_OVER = "game:over"          # payload: final_score=int, level=int, all_levels_complete=bool


ALL_EVENTS = (
    EVENT_GRID_UPDATED,
    EVENT_CELL_SELECTED,
    EVENT_CELLS_MATCHED,
    EVENT_ROW_ADDED,
    EVENT_SCORE_UPDATED,
    EVENT_TIMER_UPDATED,
    EVENT_TIMER_EXPIRED,
    EVENT_LEVEL_STARTED,
    EVENT_LEVEL_COMPLETED,
    EVENT_LEVEL_FAILED,
    EVENT_GAME_STARTED,
    EVENT_GAME_PAUSED,
    EVENT_GAME_RESUMED,
    EVENT_GAME_OVER,
)
