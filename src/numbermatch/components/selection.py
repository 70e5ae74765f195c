from __future__ import annotations

from dataclasses import dataclass
from typing import List

from numbermatch.components.board_position import Position


@dataclass(slots=True)
class SelectionResult:
    """Answer to a cell tap.

    ``invalid_path`` is set only for a rejected pair and lists the cells a host
    may shake to show what is in the way (empty when values did not match).
    """
    success: bool
    invalid_path: List[Position] | None = None
    matched: bool = False
