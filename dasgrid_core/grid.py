from __future__ import annotations

from typing import Any, Callable, Generic, Iterable, Iterator, List, Optional, Sequence, Tuple, TypeVar

from .coords import Coord, Dims, MoveDirection, check_bounds, from_index, in_bounds, offset, to_index
from .errors import RegionOverflow, ValueNotFound
from .rules import Rule, check_rules

T = TypeVar('T')
CellSize = Tuple[float, float]


def _check_dims(dims: Dims) -> Dims:
    rows, cols = int(dims[0]), int(dims[1])
    if rows * cols == 0:
        raise ValueError('0x0 grid is forbidden')
    if rows < 0 or cols < 0:
        raise ValueError(f'Grid dimensions must be positive, got {dims}')
    return rows, cols


class CellRef(Generic[T]):
    """Writable handle on one cell. Reads and writes go straight to the grid."""
    __slots__ = ('grid', 'coord')

    def __init__(self, grid: 'Grid[T]', coord: Coord) -> None:
        self.grid = grid
        self.coord = coord

    @property
    def value(self) -> T:
        return self.grid.get(self.coord)

    @value.setter
    def value(self, new_value: T) -> None:
        self.grid.set(self.coord, new_value)

    def update(self, fn: Callable[[T], T]) -> T:
        new_value = fn(self.value)
        self.grid.set(self.coord, new_value)
        return new_value

    def __repr__(self) -> str:
        return f"CellRef({self.coord}, value={self.value!r})"


class Grid(Generic[T]):
    """Fixed-size 2D grid stored as one flat, row-major list.

    Coordinates are (row, col) pairs; a 20x10 Tetris well is
    ``Grid((20, 10), (32.0, 32.0), 0)`` and holds 200 cells. Values are
    expected to be plain immutable payloads (ints, strings, enum members):
    every cell of a fresh grid is the same default object.
    """

    def __init__(self, dims: Dims, cell_size: Optional[CellSize], default_value: T) -> None:
        self._dims = _check_dims(dims)
        self._cell_size = cell_size
        self._default = default_value
        self._cells: List[T] = [default_value] * (self._dims[0] * self._dims[1])

    @classmethod
    def from_sequence(cls, dims: Dims, cell_size: Optional[CellSize], values: Iterable[T]) -> 'Grid[T]':
        """Builds a grid from row-major values. The first value becomes the default."""
        cells = list(values)
        if not cells:
            raise ValueError('0x0 grid is forbidden')
        rows, cols = _check_dims(dims)
        if rows * cols != len(cells):
            raise ValueError(f'cols and rows should be same sequence size: {rows}x{cols} != {len(cells)}')
        grid = cls((rows, cols), cell_size, cells[0])
        grid._cells = cells
        return grid

    # --- metadata -------------------------------------------------------

    @property
    def dims(self) -> Dims:
        """(rows, cols) of the grid."""
        return self._dims

    @property
    def rows(self) -> int:
        return self._dims[0]

    @property
    def cols(self) -> int:
        return self._dims[1]

    @property
    def default_value(self) -> T:
        """Value written back into a cell when its content moves away."""
        return self._default

    def size(self) -> int:
        """Returns the number of cells, rows * cols."""
        return len(self._cells)

    def get_cell_size(self) -> Optional[CellSize]:
        """Gets the (width, height) of one cell, or None when not set."""
        return self._cell_size

    def _check_overflow(self, region: Dims) -> None:
        if region[0] > self.rows or region[1] > self.cols:
            raise RegionOverflow(region, self._dims)

    # --- single cells ---------------------------------------------------

    def get(self, coord: Coord) -> T:
        """Gets the value at the given (row, col) coordinate."""
        check_bounds(coord, self._dims)
        try:
            return self._cells[to_index(coord, self._dims)]
        except IndexError:
            raise ValueNotFound(coord) from None

    def get_mut(self, coord: Coord) -> CellRef[T]:
        """Gets a handle that writes through to the cell at coord."""
        check_bounds(coord, self._dims)
        return CellRef(self, coord)

    def set(self, coord: Coord, value: T) -> None:
        """Sets the value at a given coordinate."""
        check_bounds(coord, self._dims)
        self._cells[to_index(coord, self._dims)] = value

    def set_with_rules(self, coord: Coord, value: T, rules: Sequence[Rule]) -> None:
        """Sets the value only if every rule accepts (coord, value)."""
        check_rules(rules, coord, value)
        self.set(coord, value)

    # --- moves ----------------------------------------------------------

    def move(self, src: Coord, dst: Coord) -> None:
        """Moves the value at src to dst and resets src to the default value."""
        check_bounds(src, self._dims)
        check_bounds(dst, self._dims)
        prev = self.get(src)
        self.set(src, self._default)
        self.set(dst, prev)

    def move_with_rules(self, src: Coord, dst: Coord, rules: Sequence[Rule]) -> None:
        """Like move, but the rules judge the value currently sitting at dst."""
        check_bounds(src, self._dims)
        check_bounds(dst, self._dims)
        check_rules(rules, dst, self.get(dst))
        self.move(src, dst)

    def move_by_direction(self, src: Coord, direction: MoveDirection) -> Coord:
        """Moves one step in direction and returns the destination."""
        dst = direction.apply(src)
        self.move(src, dst)
        return dst

    def move_by_direction_with_rules(self, src: Coord, direction: MoveDirection, rules: Sequence[Rule]) -> Coord:
        dst = direction.apply(src)
        self.move_with_rules(src, dst, rules)
        return dst

    # --- regions --------------------------------------------------------

    def fill(self, value: T) -> None:
        """Sets every cell to value."""
        self._cells = [value] * len(self._cells)

    def fill_region(self, origin: Coord, region: Dims, value: T) -> 'Grid[T]':
        """Fills the region anchored at origin. Cells past the edge are dropped.

        Returns an empty grid shaped like the region.
        """
        check_bounds(origin, self._dims)
        self._check_overflow(region)
        shape: Grid[T] = Grid(region, self._cell_size, self._default)
        for rel in shape.enumerate():
            dst = offset(origin, rel)
            if in_bounds(dst, self._dims):
                self.set(dst, value)
        return shape

    def stamp(self, origin: Coord, source: 'Grid[T]') -> None:
        """Copies source into this grid with its top-left cell at origin.

        Source cells landing outside this grid bleed off silently.
        """
        self._check_overflow(source.dims)
        check_bounds(origin, self._dims)
        for r, c, v in source.enumerate_with_value():
            dst = offset(origin, (r, c))
            if in_bounds(dst, self._dims):
                self.set(dst, v)

    def stamp_with_rules(self, origin: Coord, source: 'Grid[T]', rules: Sequence[Rule]) -> None:
        """Like stamp, but each destination's current value must pass the rules.

        Stops at the first rejected cell. Cells stamped before it keep their
        new values.
        """
        self._check_overflow(source.dims)
        check_bounds(origin, self._dims)
        for r, c, v in source.enumerate_with_value():
            dst = offset(origin, (r, c))
            if not in_bounds(dst, self._dims):
                continue
            check_rules(rules, dst, self.get(dst))
            self.set(dst, v)

    def get_subgrid(self, origin: Coord, rows: int, cols: int) -> 'Grid[T]':
        """Copies a rows x cols window starting at origin into a new grid.

        Positions past this grid's edge keep the default value.
        """
        check_bounds(origin, self._dims)
        self._check_overflow((rows, cols))
        sub: Grid[T] = Grid((rows, cols), self._cell_size, self._default)
        for rel in sub.enumerate():
            src = offset(origin, rel)
            if in_bounds(src, self._dims):
                sub.set(rel, self.get(src))
        return sub

    def get_row(self, row: int) -> List[T]:
        """Returns a copy of one row, left to right."""
        check_bounds((row, 0), self._dims)
        start = row * self.cols
        return self._cells[start:start + self.cols]

    def get_col(self, col: int) -> List[T]:
        """Returns a copy of one column, top to bottom."""
        check_bounds((0, col), self._dims)
        return self._cells[col::self.cols]

    def get_flattened(self) -> List[T]:
        """All values in row-major order."""
        return list(self._cells)

    def copy(self) -> 'Grid[T]':
        dup: Grid[T] = Grid(self._dims, self._cell_size, self._default)
        dup._cells = list(self._cells)
        return dup

    # --- enumeration ----------------------------------------------------

    def enumerate(self) -> List[Coord]:
        """Lists every (row, col) in row-major order."""
        return [from_index(i, self._dims) for i in range(len(self._cells))]

    def enumerate_with_value(self) -> List[Tuple[int, int, T]]:
        """Lists (row, col, value) for every cell in row-major order."""
        out: List[Tuple[int, int, T]] = []
        for i, v in enumerate(self._cells):
            r, c = from_index(i, self._dims)
            out.append((r, c, v))
        return out

    def enumerate_float(self) -> List[Tuple[float, float]]:
        """Same as enumerate, with float coordinates for drawing code."""
        return [(float(r), float(c)) for r, c in self.enumerate()]

    def enumerate_with_value_float(self) -> List[Tuple[float, float, T]]:
        return [(float(r), float(c), v) for r, c, v in self.enumerate_with_value()]

    # --- python protocols -----------------------------------------------

    def __len__(self) -> int:
        return len(self._cells)

    def __iter__(self) -> Iterator[T]:
        return iter(self._cells)

    def __getitem__(self, coord: Coord) -> T:
        return self.get(coord)

    def __setitem__(self, coord: Coord, value: T) -> None:
        self.set(coord, value)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return (
            self._dims == other._dims
            and self._cell_size == other._cell_size
            and self._default == other._default
            and self._cells == other._cells
        )

    __hash__ = None  # type: ignore[assignment]

    # --- display --------------------------------------------------------

    def pretty(self) -> str:
        """Multi-line dump of every value tagged with its coordinate."""
        rows, cols = self._dims
        lines: List[str] = []
        for r in range(rows):
            row: List[str] = []
            for c in range(cols):
                v = self._cells[to_index((r, c), self._dims)]
                row.append(f"  {str(v):10} (r: {r} c: {c})")
            lines.append(''.join(row))
        body = '\n'.join(lines)
        return f"Grid {{ rows: {rows}, cols: {cols}, cells: [\n{body}\n] }}"

    def debug(self) -> None:
        print(self.pretty())

    def __str__(self) -> str:
        return f"Grid {{ rows: {self.rows}, cols: {self.cols}, cells: [...] }}"

    def __repr__(self) -> str:
        return f"Grid(dims={self._dims}, cell_size={self._cell_size}, default_value={self._default!r})"
