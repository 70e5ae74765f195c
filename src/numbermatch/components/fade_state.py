from dataclasses import dataclass

@dataclass(slots=True)
class FadeState:
    """Per-cell cleared flag.

    faded: True once the cell has been matched. The value is kept for display,
    but the cell no longer blocks paths and cannot be selected.
    """
    faded: bool = False
