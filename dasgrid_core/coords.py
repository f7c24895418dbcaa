from __future__ import annotations

from enum import Enum
from typing import Tuple

from .errors import OutOfBounds

Coord = Tuple[int, int]  # (row, col)
Dims = Tuple[int, int]   # (rows, cols)

MOVE_UP: Coord = (-1, 0)
MOVE_DOWN: Coord = (1, 0)
MOVE_LEFT: Coord = (0, -1)
MOVE_RIGHT: Coord = (0, 1)


class MoveDirection(Enum):
    """Unit steps on the (row, col) plane. Row 0 is the top of the grid."""
    UP = MOVE_UP
    DOWN = MOVE_DOWN
    LEFT = MOVE_LEFT
    RIGHT = MOVE_RIGHT

    @property
    def offset(self) -> Coord:
        return self.value

    def apply(self, coord: Coord) -> Coord:
        dr, dc = self.value
        return coord[0] + dr, coord[1] + dc

    @classmethod
    def parse(cls, text: str) -> 'MoveDirection':
        """Looks up a direction by name, case-insensitive ('up', 'Down', ...)."""
        try:
            return cls[text.strip().upper()]
        except KeyError:
            raise ValueError(f'Unknown direction: {text!r}') from None

    def __str__(self) -> str:
        dr, dc = self.value
        return f"{self.name.capitalize()} ({dr}, {dc})"


def in_bounds(coord: Coord, dims: Dims) -> bool:
    r, c = coord
    rows, cols = dims
    return 0 <= r < rows and 0 <= c < cols


def check_bounds(coord: Coord, dims: Dims) -> None:
    """Raises OutOfBounds unless 0 <= r < rows and 0 <= c < cols."""
    if not in_bounds(coord, dims):
        raise OutOfBounds(coord, dims)


def to_index(coord: Coord, dims: Dims) -> int:
    """Row-major offset of an already validated coordinate."""
    r, c = coord
    return r * dims[1] + c


def from_index(index: int, dims: Dims) -> Coord:
    """Inverse of to_index."""
    return divmod(index, dims[1])


def offset(coord: Coord, delta: Coord) -> Coord:
    return coord[0] + delta[0], coord[1] + delta[1]
