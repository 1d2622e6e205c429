from typing import NamedTuple


class Seat(NamedTuple):
    """A 1-indexed (row, column) coordinate inside a hall."""

    row: int
    column: int
