from dataclasses import dataclass
from typing import NamedTuple


class Position(NamedTuple):
    """Grid coordinate reference; compares equal to a plain ``(row, col)`` tuple."""
    row: int
    col: int


@dataclass(slots=True)
class BoardPosition:
    row: int
    col: int

    def as_position(self) -> Position:
        return Position(self.row, self.col)
