from dataclasses import dataclass

@dataclass(slots=True)
class CellValue:
    """Displayed number of a cell. ``None`` marks an empty slot."""
    value: int | None = None
    color: str | None = None
