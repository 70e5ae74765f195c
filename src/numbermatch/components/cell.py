from __future__ import annotations

from dataclasses import dataclass

from numbermatch.components.board_position import Position


@dataclass(frozen=True, slots=True)
class Cell:
    """Read-only view of one grid slot, assembled from the cell entity's components."""

    id: str
    row: int
    col: int
    value: int | None = None
    faded: bool = False
    color: str | None = None

    @property
    def position(self) -> Position:
        return Position(self.row, self.col)

    @property
    def is_active(self) -> bool:
        """Active cells block paths and can be selected."""
        return self.value is not None and not self.faded
