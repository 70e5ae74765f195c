import random

from esper import World

from numbermatch.components.level import LevelConfig
from numbermatch.components.session_state import SessionState


def create_world(level: LevelConfig | None = None, *, rng: random.Random | None = None) -> World:
    """Build the world backing one level of play.

    The session counters start from the level's initial values; the grid
    itself is populated by GridEngine.
    """
    world = World()
    setattr(world, "random", rng or random.Random())

    session = SessionState()
    if level is not None:
        session.timer = level.initial_timer
        session.add_row_uses = level.add_row_count
        session.target_score = level.target_score
    world.create_entity(session)
    return world
