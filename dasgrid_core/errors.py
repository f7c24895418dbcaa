from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .coords import Coord, Dims


class GridError(Exception):
    """Base class for recoverable grid errors.

    Fatal construction problems (zero-area grids, mismatched seed sequences)
    raise ValueError instead and are not part of this hierarchy.
    """
    message = 'grid error'

    def __str__(self) -> str:
        return self.message


class OutOfBounds(GridError):
    message = 'value is out of the grid rows and cols'

    def __init__(self, coord: Coord, dims: Dims) -> None:
        super().__init__(coord, dims)
        self.coord = coord
        self.dims = dims

    def __str__(self) -> str:
        return f"{self.message}: {self.coord} not inside {self.dims}"


class RegionOverflow(GridError):
    message = 'the subgrid cols or rows is greater than the parent grid'

    def __init__(self, region: Dims, dims: Dims) -> None:
        super().__init__(region, dims)
        self.region = region
        self.dims = dims

    def __str__(self) -> str:
        return f"{self.message}: {self.region} > {self.dims}"


class RuleFailed(GridError):
    message = 'failed to meet the rule requirements'

    def __init__(self, coord: Coord, value: Any = None) -> None:
        super().__init__(coord, value)
        self.coord = coord
        self.value = value

    def __str__(self) -> str:
        return f"{self.message} at {self.coord}"


class ValueNotFound(GridError):
    message = "the value isn't found at the position"

    def __init__(self, coord: Coord) -> None:
        super().__init__(coord)
        self.coord = coord

    def __str__(self) -> str:
        return f"{self.message}: {self.coord}"
