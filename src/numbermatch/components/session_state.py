from dataclasses import dataclass

from numbermatch.components.board_position import Position


@dataclass(slots=True)
class SessionState:
    """Singleton component holding the per-level counters of a game session."""
    score: int = 0
    timer: int = 0
    add_row_uses: int = 0
    is_game_over: bool = False
    is_paused: bool = False
    selected: Position | None = None
    timer_boost_count: int = 0
    target_score: int = 0
