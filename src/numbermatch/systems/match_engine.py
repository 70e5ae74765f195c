from __future__ import annotations

import logging
from typing import List, Tuple

from numbermatch.components.board_position import Position
from numbermatch.components.match_result import MatchResult
from numbermatch.constants import MATCH_SUM
from numbermatch.events.bus import EVENT_CELLS_MATCHED, EventBus
from numbermatch.systems.grid_engine import GridEngine

logger = logging.getLogger(__name__)

REASON_MISSING_CELL = "missing_cell"
REASON_EMPTY_CELL = "empty_cell"
REASON_SAME_CELL = "same_cell"
REASON_FADED_CELL = "faded_cell"
REASON_VALUE_MISMATCH = "value_mismatch"
REASON_PATH_BLOCKED = "path_blocked"

ROUTE_HORIZONTAL = "horizontal"
ROUTE_VERTICAL = "vertical"
ROUTE_DIAGONAL = "diagonal"
ROUTE_SEQUENCE = "sequence"
ROUTE_WRAP = "wrap"

Candidate = Tuple[str, List[Position], List[Position]]  # route, interior, blockers


def values_match(a: int | None, b: int | None) -> bool:
    """Equal values, or values that add up to MATCH_SUM."""
    if a is None or b is None:
        return False
    return a == b or a + b == MATCH_SUM


class MatchEngine:
    """Decides whether two cells may be cleared together.

    A pair is connected when every interior cell is inactive (empty or faded)
    along either:
      - the straight line between them (row, column or 45 degree diagonal), or
      - the grid read as one row-major loop, walking forward from the lower
        index to the higher one, or onward past the last cell, around to
        index 0 and up to the lower one.
    """

    def __init__(self, grid: GridEngine, event_bus: EventBus):
        self.grid = grid
        self.event_bus = event_bus

    def can_match(self, first: Tuple[int, int], second: Tuple[int, int]) -> MatchResult:
        a = Position(*first)
        b = Position(*second)
        cell_a = self.grid.get_cell(a.row, a.col)
        cell_b = self.grid.get_cell(b.row, b.col)
        if cell_a is None or cell_b is None:
            return MatchResult(is_valid=False, reason=REASON_MISSING_CELL)
        if cell_a.value is None or cell_b.value is None:
            return MatchResult(is_valid=False, reason=REASON_EMPTY_CELL)
        if a == b:
            return MatchResult(is_valid=False, reason=REASON_SAME_CELL)
        if cell_a.faded or cell_b.faded:
            return MatchResult(is_valid=False, reason=REASON_FADED_CELL)
        if not values_match(cell_a.value, cell_b.value):
            return MatchResult(is_valid=False, reason=REASON_VALUE_MISMATCH)

        candidates: List[Candidate] = []
        line = self._line_candidate(a, b)
        if line is not None:
            candidates.append(line)
        candidates.extend(self._sequence_candidates(a, b))

        for route, interior, blockers in candidates:
            if not blockers:
                return MatchResult(is_valid=True, path=[a, *interior, b], route=route)

        # Shortest blocking set wins; ties keep the earlier (more direct) candidate.
        shortest = min(candidates, key=lambda candidate: len(candidate[2]))
        return MatchResult(
            is_valid=False,
            reason=REASON_PATH_BLOCKED,
            blocking_cells=list(shortest[2]),
        )

    def execute_match(
        self,
        first: Tuple[int, int],
        second: Tuple[int, int],
        *,
        publish_grid: bool = True,
    ) -> bool:
        """Fade a valid pair and announce it. Invalid pairs are left untouched."""
        result = self.can_match(first, second)
        if not result.is_valid:
            return False
        a = Position(*first)
        b = Position(*second)
        values = (self.grid.get_cell(*a).value, self.grid.get_cell(*b).value)
        self.grid.fade_cells([a, b], skip_emit=True)
        logger.debug("Matched %s and %s via %s", a, b, result.route)
        self.event_bus.emit(EVENT_CELLS_MATCHED, positions=(a, b), path=result.path, values=values)
        if publish_grid:
            self.grid.publish()
        return True

    def find_hint(self) -> Tuple[Position, Position] | None:
        """First valid pair in row-major order, or None when the board is stuck."""
        active = [
            Position(r, c)
            for r in range(self.grid.rows)
            for c in range(self.grid.cols)
            if self.grid.is_active(r, c)
        ]
        for i, a in enumerate(active):
            for b in active[i + 1:]:
                if self.can_match(a, b).is_valid:
                    return a, b
        return None

    # ------------------------------------------------------------------
    # Path candidates
    # ------------------------------------------------------------------

    def _blockers(self, cells: List[Position]) -> List[Position]:
        return [pos for pos in cells if self.grid.is_active(pos.row, pos.col)]

    def _line_candidate(self, a: Position, b: Position) -> Candidate | None:
        row_diff = b.row - a.row
        col_diff = b.col - a.col
        if row_diff == 0:
            route = ROUTE_HORIZONTAL
        elif col_diff == 0:
            route = ROUTE_VERTICAL
        elif abs(row_diff) == abs(col_diff):
            route = ROUTE_DIAGONAL
        else:
            return None
        steps = max(abs(row_diff), abs(col_diff))
        r_step = (row_diff > 0) - (row_diff < 0)
        c_step = (col_diff > 0) - (col_diff < 0)
        interior = [Position(a.row + r_step * i, a.col + c_step * i) for i in range(1, steps)]
        return route, interior, self._blockers(interior)

    def _sequence_candidates(self, a: Position, b: Position) -> List[Candidate]:
        cols = self.grid.cols
        total = self.grid.rows * cols
        index_a = a.row * cols + a.col
        index_b = b.row * cols + b.col
        low, high = sorted((index_a, index_b))

        def to_position(index: int) -> Position:
            index %= total
            return Position(index // cols, index % cols)

        forward = [to_position(i) for i in range(low + 1, high)]
        wrapped = [to_position(i) for i in range(high + 1, total + low)]
        # Interiors are walked from a towards b.
        if index_a > index_b:
            forward.reverse()
        else:
            wrapped.reverse()
        return [
            (ROUTE_SEQUENCE, forward, self._blockers(forward)),
            (ROUTE_WRAP, wrapped, self._blockers(wrapped)),
        ]
