from dataclasses import dataclass

@dataclass(slots=True)
class CellId:
    """Opaque id used by hosts to reconcile rendered cells.

    Derived from the cell's row/col plus a random suffix (see utils.ids).
    """
    id: str
