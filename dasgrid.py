from __future__ import annotations

# Facade module that re-exports the dasgrid core API.
# Used by the Flask app and tests; single-responsibility modules live under dasgrid_core/*.

from dasgrid_core.errors import (
    GridError,
    OutOfBounds,
    RegionOverflow,
    RuleFailed,
    ValueNotFound,
)
from dasgrid_core.coords import (
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
    offset,
)
from dasgrid_core.rules import Rule, check_rules, forbid_values, require_value
from dasgrid_core.grid import CellRef, CellSize, Grid


def main() -> int:
    # CLI driver delegated to dasgrid_core.cli
    from dasgrid_core.cli import main as _main
    return _main()


if __name__ == '__main__':
    raise SystemExit(main())
