from dataclasses import dataclass

@dataclass(slots=True)
class Board:
    rows: int
    cols: int
    # Dimensions and fill the board was generated with; reset() goes back to these.
    initial_rows: int = 0
    filled_rows: int = 0
    # Batch size for the next add-row request; doubles after each full batch.
    last_added_row_count: int = 0
