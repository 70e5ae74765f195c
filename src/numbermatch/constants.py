from typing import Mapping, Tuple

from numbermatch.components.level import Difficulty, LevelConfig

# Cell values are drawn uniformly from this inclusive range.
MIN_CELL_VALUE = 1
MAX_CELL_VALUE = 9
# Two values match when equal or when they add up to this.
MATCH_SUM = 10

# Length of the random suffix appended to "row-col" in cell ids.
CELL_ID_SUFFIX_LENGTH = 4


# ============================================================================
# LEVELS
# ============================================================================
LEVEL_CONFIGS: Mapping[int, LevelConfig] = {
    1: LevelConfig(
        id=1,
        name="Easy Breeze",
        difficulty=Difficulty.EASY,
        initial_rows=11,
        initial_cols=9,
        initial_filled_rows=3,
        target_score=10,
        initial_timer=60,
        timer_boost_per_score=2,
        max_timer_boosts=10,
        add_row_count=3,
        description="Welcome! Match numbers to score 10 points. You have 60 seconds!",
    ),
    2: LevelConfig(
        id=2,
        name="Medium Challenge",
        difficulty=Difficulty.MEDIUM,
        initial_rows=9,
        initial_cols=9,
        initial_filled_rows=4,
        target_score=100,
        initial_timer=90,
        timer_boost_per_score=2,
        max_timer_boosts=15,
        add_row_count=2,
        description="Good job! Now reach 100 points. Time boosts reduced!",
    ),
    3: LevelConfig(
        id=3,
        name="Hard Core",
        difficulty=Difficulty.HARD,
        initial_rows=9,
        initial_cols=9,
        initial_filled_rows=5,
        target_score=200,
        initial_timer=120,
        timer_boost_per_score=0,  # no timer boosts in hard mode
        max_timer_boosts=0,
        add_row_count=3,
        description="Final challenge! Score 200 points with no timer boosts. Good luck!",
    ),
}

LEVEL_SEQUENCE: Tuple[int, ...] = (1, 2, 3)

MAX_LEVELS = len(LEVEL_SEQUENCE)
