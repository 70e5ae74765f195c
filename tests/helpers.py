from __future__ import annotations

import random
from typing import List, Sequence, Tuple

from numbermatch.components.level import Difficulty, LevelConfig
from numbermatch.events.bus import EventBus
from numbermatch.systems.grid_engine import GridEngine
from numbermatch.world import create_world


def build_grid(
    values: Sequence[Sequence[int | None]],
    *,
    bus: EventBus | None = None,
    seed: int = 0,
) -> Tuple[GridEngine, EventBus]:
    """GridEngine whose cells hold exactly ``values`` (one inner list per row)."""
    bus = bus or EventBus()
    rng = random.Random(seed)
    world = create_world(rng=rng)
    grid = GridEngine(world, bus, len(values), len(values[0]), 0, rng=rng)
    load_values(grid, values)
    return grid, bus


def load_values(grid: GridEngine, values: Sequence[Sequence[int | None]]) -> None:
    """Overwrite the top rows of an existing grid; rows not listed become empty."""
    for r in range(grid.rows):
        row = values[r] if r < len(values) else ()
        for c in range(grid.cols):
            value = row[c] if c < len(row) else None
            grid.update_cell(r, c, skip_emit=True, value=value, faded=False)


def make_level(level_id: int = 1, **overrides) -> LevelConfig:
    fields = dict(
        id=level_id,
        name=f"Test {level_id}",
        difficulty=Difficulty.EASY,
        initial_rows=4,
        initial_cols=4,
        initial_filled_rows=2,
        target_score=3,
        initial_timer=10,
        timer_boost_per_score=1,
        max_timer_boosts=2,
        add_row_count=2,
    )
    fields.update(overrides)
    return LevelConfig(**fields)


class EventRecorder:
    """Collects (event_name, payload) pairs in emission order."""

    def __init__(self, bus: EventBus, names: Sequence[str]):
        self.events: List[Tuple[str, dict]] = []
        for name in names:
            bus.subscribe(name, self._handler_for(name))

    def _handler_for(self, name: str):
        def _capture(sender, **payload):
            self.events.append((name, payload))
        return _capture

    def names(self) -> List[str]:
        return [name for name, _ in self.events]

    def payloads(self, name: str) -> List[dict]:
        return [payload for event, payload in self.events if event == name]
