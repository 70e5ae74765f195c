from __future__ import annotations

import logging
import random
from typing import Iterable, List, Tuple

from esper import World

from numbermatch.components.board import Board
from numbermatch.components.board_position import BoardPosition, Position
from numbermatch.components.cell import Cell
from numbermatch.components.cell_id import CellId
from numbermatch.components.cell_value import CellValue
from numbermatch.components.fade_state import FadeState
from numbermatch.constants import MAX_CELL_VALUE, MIN_CELL_VALUE
from numbermatch.events.bus import EVENT_GRID_UPDATED, EVENT_ROW_ADDED, EventBus
from numbermatch.utils.ids import make_id, rederive_id

logger = logging.getLogger(__name__)

_UPDATABLE_FIELDS = frozenset({"value", "faded", "color"})


class GridEngine:
    """Sole owner and mutator of the cell matrix.

    Each cell is an entity carrying BoardPosition, CellId, CellValue and
    FadeState. ``self._cells`` keeps the entity ids in row-major order so the
    matrix shape is explicit and lookups stay O(1). Callers only ever see
    frozen Cell snapshots.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        rows: int = 9,
        cols: int = 9,
        filled_rows: int = 3,
        *,
        rng: random.Random | None = None,
    ):
        self.world = world
        self.event_bus = event_bus
        self._rng = rng or getattr(world, "random", None) or random.Random()
        self.board_entity = self.world.create_entity(
            Board(
                rows=rows,
                cols=cols,
                initial_rows=rows,
                filled_rows=filled_rows,
                last_added_row_count=filled_rows,
            )
        )
        self._cells: List[List[int]] = []
        self.generate_initial_grid(filled_rows)

    # ------------------------------------------------------------------
    # Dimensions
    # ------------------------------------------------------------------

    @property
    def board(self) -> Board:
        return self.world.component_for_entity(self.board_entity, Board)

    @property
    def rows(self) -> int:
        return self.board.rows

    @property
    def cols(self) -> int:
        return self.board.cols

    @property
    def last_added_row_count(self) -> int:
        return self.board.last_added_row_count

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < len(self._cells) and 0 <= col < self.cols

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------

    def generate_initial_grid(self, filled_rows: int) -> None:
        """Rebuild every row; the first ``filled_rows`` get random values, the rest stay empty."""
        board = self.board
        self._clear_cells()
        for r in range(board.initial_rows):
            self._cells.append(self._create_row(r, filled=r < filled_rows))
        board.rows = board.initial_rows
        board.filled_rows = filled_rows

    def reset(self, filled_rows: int | None = None) -> None:
        """Regenerate the grid with the dimensions it was created with."""
        board = self.board
        if filled_rows is None:
            filled_rows = board.filled_rows
        self.generate_initial_grid(filled_rows)
        board.last_added_row_count = filled_rows
        self.publish()

    def _random_value(self) -> int:
        return self._rng.randint(MIN_CELL_VALUE, MAX_CELL_VALUE)

    def _create_row(self, row: int, *, filled: bool) -> List[int]:
        entities: List[int] = []
        for c in range(self.cols):
            entities.append(
                self.world.create_entity(
                    BoardPosition(row=row, col=c),
                    CellId(id=make_id(row, c, self._rng)),
                    CellValue(value=self._random_value() if filled else None),
                    FadeState(),
                )
            )
        return entities

    def _refill_row(self, row: int) -> None:
        for c, entity in enumerate(self._cells[row]):
            self.world.component_for_entity(entity, CellId).id = make_id(row, c, self._rng)
            value = self.world.component_for_entity(entity, CellValue)
            value.value = self._random_value()
            value.color = None
            self.world.component_for_entity(entity, FadeState).faded = False

    def _clear_cells(self) -> None:
        for row in self._cells:
            for entity in row:
                self.world.delete_entity(entity, immediate=True)
        self._cells = []

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def _entity_at(self, row: int, col: int) -> int | None:
        if not self.in_bounds(row, col):
            return None
        return self._cells[row][col]

    def _snapshot(self, entity: int) -> Cell:
        pos = self.world.component_for_entity(entity, BoardPosition)
        value = self.world.component_for_entity(entity, CellValue)
        return Cell(
            id=self.world.component_for_entity(entity, CellId).id,
            row=pos.row,
            col=pos.col,
            value=value.value,
            faded=self.world.component_for_entity(entity, FadeState).faded,
            color=value.color,
        )

    def get_cell(self, row: int, col: int) -> Cell | None:
        entity = self._entity_at(row, col)
        if entity is None:
            return None
        return self._snapshot(entity)

    def get_row(self, row: int) -> Tuple[Cell, ...]:
        if not 0 <= row < len(self._cells):
            return ()
        return tuple(self._snapshot(entity) for entity in self._cells[row])

    def get_grid(self) -> Tuple[Tuple[Cell, ...], ...]:
        return tuple(self.get_row(r) for r in range(len(self._cells)))

    def is_active(self, row: int, col: int) -> bool:
        """True when the slot holds a value that has not been faded."""
        entity = self._entity_at(row, col)
        if entity is None:
            return False
        if self.world.component_for_entity(entity, CellValue).value is None:
            return False
        return not self.world.component_for_entity(entity, FadeState).faded

    def is_row_empty(self, row: int) -> bool:
        return all(
            self.world.component_for_entity(entity, CellValue).value is None
            for entity in self._cells[row]
        )

    def empty_rows(self) -> List[int]:
        return [r for r in range(len(self._cells)) if self.is_row_empty(r)]

    def count_active(self) -> int:
        return sum(
            1
            for r in range(len(self._cells))
            for c in range(self.cols)
            if self.is_active(r, c)
        )

    def has_available_moves(self) -> bool:
        """Coarse hint: any two 4-neighbour active cells, regardless of their values."""
        for r in range(len(self._cells)):
            for c in range(self.cols):
                if not self.is_active(r, c):
                    continue
                if self.is_active(r, c + 1) or self.is_active(r + 1, c):
                    return True
        return False

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def publish(self) -> None:
        self.event_bus.emit(EVENT_GRID_UPDATED, grid=self.get_grid())

    def update_cell(self, row: int, col: int, skip_emit: bool = False, **changes) -> bool:
        """Merge ``changes`` (value, faded, color) into a cell.

        Pass ``skip_emit=True`` for all but the last update of a batch so the
        batch produces a single grid update.
        """
        unknown = set(changes) - _UPDATABLE_FIELDS
        if unknown:
            raise TypeError(f"Unknown cell field(s): {', '.join(sorted(unknown))}")
        entity = self._entity_at(row, col)
        if entity is None:
            return False
        if "value" in changes:
            self.world.component_for_entity(entity, CellValue).value = changes["value"]
        if "color" in changes:
            self.world.component_for_entity(entity, CellValue).color = changes["color"]
        fade = self.world.component_for_entity(entity, FadeState)
        if "faded" in changes:
            fade.faded = bool(changes["faded"])
        # Only a cell holding a value can be faded.
        if self.world.component_for_entity(entity, CellValue).value is None:
            fade.faded = False
        if not skip_emit:
            self.publish()
        return True

    def fade_cells(self, positions: Iterable[Tuple[int, int]], skip_emit: bool = False) -> int:
        """Mark cells as matched; emits one grid update for the whole batch."""
        in_bounds = [Position(r, c) for r, c in positions if self.in_bounds(r, c)]
        for index, (r, c) in enumerate(in_bounds):
            last = index == len(in_bounds) - 1
            self.update_cell(r, c, skip_emit=skip_emit or not last, faded=True)
        return len(in_bounds)

    def add_new_row(self) -> bool:
        """Bring new numbers onto the board.

        Empty rows are refilled first, up to ``last_added_row_count`` of them;
        the batch size doubles only when that many were available. With no
        empty rows the grid grows by ``last_added_row_count`` rows and the
        batch size doubles unconditionally.
        """
        board = self.board
        count = board.last_added_row_count
        if count <= 0 or self.cols <= 0:
            return False

        empty = self.empty_rows()
        if empty:
            targets = empty[:count]
            for row in targets:
                self._refill_row(row)
            if len(empty) >= count:
                board.last_added_row_count = count * 2
            expanded = False
        else:
            start = len(self._cells)
            targets = list(range(start, start + count))
            for row in targets:
                self._cells.append(self._create_row(row, filled=True))
            board.rows = len(self._cells)
            board.last_added_row_count = count * 2
            self.reindex()
            expanded = True

        logger.debug(
            "Added rows %s (expanded=%s, next batch=%d)", targets, expanded, board.last_added_row_count
        )
        self.event_bus.emit(
            EVENT_ROW_ADDED,
            rows=targets,
            expanded=expanded,
            next_count=board.last_added_row_count,
        )
        self.publish()
        return True

    def reindex(self) -> None:
        """Align every cell's BoardPosition and id with its slot in the matrix."""
        for r, row in enumerate(self._cells):
            for c, entity in enumerate(row):
                pos = self.world.component_for_entity(entity, BoardPosition)
                if pos.as_position() == (r, c):
                    continue
                pos.row, pos.col = r, c
                cell_id = self.world.component_for_entity(entity, CellId)
                cell_id.id = rederive_id(cell_id.id, r, c)
