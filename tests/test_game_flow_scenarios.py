import random

from numbermatch.components.game_state import LevelStatus
from numbermatch.events.bus import (
    EVENT_GAME_OVER,
    EVENT_LEVEL_COMPLETED,
    EVENT_LEVEL_FAILED,
    EVENT_LEVEL_STARTED,
    EVENT_TIMER_EXPIRED,
    EVENT_TIMER_UPDATED,
)
from numbermatch.game import GameState
from tests.helpers import EventRecorder, load_values, make_level

PAIRED_ROW = [1, 1, 2, 2, 3, 3, 4, 4, 5]
PAIRS_PER_ROW = [(0, 1), (2, 3), (4, 5), (6, 7)]


def _play_pairs(game, count):
    played = 0
    for row in range(3):
        for left, right in PAIRS_PER_ROW:
            if played == count:
                return
            game.select_cell(row, left)
            assert game.select_cell(row, right).matched
            played += 1


def test_first_level_completes_after_ten_matches():
    game = GameState(rng=random.Random(11))
    load_values(game.grid_engine, [PAIRED_ROW] * 3)
    recorder = EventRecorder(game.event_bus, [EVENT_LEVEL_COMPLETED, EVENT_GAME_OVER])

    _play_pairs(game, 9)
    assert game.get_score() == 9
    assert recorder.events == []

    game.select_cell(2, 2)
    assert game.select_cell(2, 3).matched

    assert game.get_score() == 10
    # Every match granted a 2 second boost, ten boosts allowed.
    assert game.get_timer() == 60 + 10 * 2
    completed = recorder.payloads(EVENT_LEVEL_COMPLETED)
    assert len(completed) == 1
    assert completed[0]["has_next_level"] is True
    assert completed[0]["level_number"] == 1
    assert game.level_manager.get_status() is LevelStatus.COMPLETED
    assert not game.is_over()


def test_next_level_after_completion():
    game = GameState(rng=random.Random(12))
    load_values(game.grid_engine, [PAIRED_ROW] * 3)
    _play_pairs(game, 10)
    recorder = EventRecorder(game.event_bus, [EVENT_LEVEL_STARTED])

    game.start_next_level()

    assert game.get_current_level_number() == 2
    assert game.get_timer() == game.get_current_level().initial_timer
    assert recorder.payloads(EVENT_LEVEL_STARTED)[0]["level_number"] == 2


def test_timer_expiry_fails_level_and_ends_game():
    game = GameState(rng=random.Random(13))
    recorder = EventRecorder(
        game.event_bus,
        [EVENT_TIMER_UPDATED, EVENT_TIMER_EXPIRED, EVENT_LEVEL_FAILED, EVENT_GAME_OVER],
    )

    while game.get_timer() > 1:
        game.decrement_timer()
    assert not game.is_over()
    recorder.events.clear()

    game.decrement_timer()

    assert game.get_timer() == 0
    assert recorder.names() == [EVENT_TIMER_UPDATED, EVENT_TIMER_EXPIRED, EVENT_LEVEL_FAILED, EVENT_GAME_OVER]
    assert recorder.payloads(EVENT_GAME_OVER)[0] == {
        "final_score": 0,
        "level": 1,
        "all_levels_complete": False,
    }
    assert game.is_over()

    # Terminal: further ticks and taps do nothing.
    game.decrement_timer()
    assert game.get_timer() == 0
    assert not game.select_cell(0, 0).success


def test_restart_after_game_over_revives_level():
    level = make_level(initial_timer=1)
    game = GameState(levels={1: level}, sequence=(1,), rng=random.Random(14))
    game.decrement_timer()
    assert game.is_over()

    game.restart_level()

    assert not game.is_over()
    assert game.get_timer() == 1
    assert game.level_manager.is_level_active()


def test_clearing_the_final_level_reports_all_levels_complete():
    level = make_level(target_score=1)
    game = GameState(levels={1: level}, sequence=(1,), rng=random.Random(15))
    load_values(game.grid_engine, [[4, 6, 1, 2]])
    recorder = EventRecorder(game.event_bus, [EVENT_LEVEL_COMPLETED, EVENT_GAME_OVER])

    game.select_cell(0, 0)
    game.select_cell(0, 1)
    assert recorder.payloads(EVENT_LEVEL_COMPLETED)[0]["has_next_level"] is False

    game.start_next_level()
    assert game.is_over()
    assert recorder.payloads(EVENT_GAME_OVER)[0]["all_levels_complete"] is True


def test_same_seed_replays_same_opening_grid():
    first = GameState(rng=random.Random(99))
    second = GameState(rng=random.Random(99))
    assert [[cell.value for cell in row] for row in first.get_grid()] == [
        [cell.value for cell in row] for row in second.get_grid()
    ]
