import random
import string

from numbermatch.constants import CELL_ID_SUFFIX_LENGTH

_ALPHABET = string.digits + string.ascii_lowercase


def random_suffix(rng: random.Random, length: int = CELL_ID_SUFFIX_LENGTH) -> str:
    return "".join(rng.choice(_ALPHABET) for _ in range(length))


def make_id(row: int, col: int, rng: random.Random) -> str:
    return f"{row}-{col}-{random_suffix(rng)}"


def rederive_id(cell_id: str, row: int, col: int) -> str:
    """Re-key an existing id to a new coordinate, keeping its random suffix."""
    suffix = cell_id.rsplit("-", 1)[-1]
    return f"{row}-{col}-{suffix}"
