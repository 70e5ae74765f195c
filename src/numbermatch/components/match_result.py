from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from numbermatch.components.board_position import Position


@dataclass(slots=True)
class MatchResult:
    """Outcome of a match check between two cells.

    ``path`` runs from the first cell to the second, endpoints included, and is
    only filled for valid matches. ``blocking_cells`` lists the active cells
    that obstruct the least obstructed candidate path of a failed attempt.
    """

    is_valid: bool
    path: List[Position] = field(default_factory=list)
    reason: str | None = None
    blocking_cells: List[Position] = field(default_factory=list)
    route: str | None = None
