"""
dasgrid core Python package.

A generic, fixed-size 2D grid for tile and board games (chess, Tetris,
match-3). Rendering, input and game rules stay with the caller.
Modules:
- coords.py: Coord, Dims, bounds checks, row-major index mapping, MoveDirection
- errors.py: GridError and its recoverable subclasses
- rules.py: rule predicates and the fail-fast evaluator
- grid.py: Grid, CellRef
- cli.py: demo command line driver
"""
from .errors import GridError, OutOfBounds, RegionOverflow, RuleFailed, ValueNotFound
from .coords import (
    Coord,
    Dims,
    MoveDirection,
    MOVE_UP,
    MOVE_DOWN,
    MOVE_LEFT,
    MOVE_RIGHT,
    check_bounds,
    in_bounds,
    to_index,
    from_index,
)
from .rules import Rule, check_rules, forbid_values, require_value
from .grid import CellRef, CellSize, Grid

__all__ = [
    'GridError',
    'OutOfBounds',
    'RegionOverflow',
    'RuleFailed',
    'ValueNotFound',
    'Coord',
    'Dims',
    'MoveDirection',
    'MOVE_UP',
    'MOVE_DOWN',
    'MOVE_LEFT',
    'MOVE_RIGHT',
    'check_bounds',
    'in_bounds',
    'to_index',
    'from_index',
    'Rule',
    'check_rules',
    'forbid_values',
    'require_value',
    'CellRef',
    'CellSize',
    'Grid',
]
