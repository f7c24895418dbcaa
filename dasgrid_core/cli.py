from __future__ import annotations

import argparse
import os
import sys
from typing import Any, List, Optional, Tuple

from .coords import Coord, MoveDirection
from .errors import GridError
from .grid import Grid


def parse_value(text: str) -> Any:
    """Cell values on the command line: ints when they parse, strings otherwise."""
    try:
        return int(text)
    except ValueError:
        return text


def parse_coord(text: str) -> Coord:
    sep = ',' if ',' in text else ' '
    r_s, c_s = [t for t in text.split(sep) if t != '']
    return int(r_s), int(c_s)


def parse_set(text: str) -> Tuple[Coord, Any]:
    """'r,c=value' -> ((r, c), value)."""
    coord_s, value_s = text.split('=', 1)
    return parse_coord(coord_s), parse_value(value_s)


def parse_move(text: str) -> Tuple[Coord, MoveDirection]:
    """'r,c:direction' -> ((r, c), MoveDirection)."""
    coord_s, dir_s = text.rsplit(':', 1)
    return parse_coord(coord_s), MoveDirection.parse(dir_s)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Build a grid, apply operations and dump it')
    parser.add_argument('--rows', type=int, default=4, help='Number of rows')
    parser.add_argument('--cols', type=int, default=4, help='Number of columns')
    parser.add_argument('--default', default='0', help='Default cell value')
    parser.add_argument('--cell-size', type=float, nargs=2, default=None, metavar=('W', 'H'),
                        help='Cell size metadata')
    parser.add_argument('--fill', default=None, help='Fill every cell with this value first')
    parser.add_argument('--set', dest='sets', action='append', default=[], metavar='R,C=V',
                        help='Set a cell (repeatable)')
    parser.add_argument('--move', dest='moves', action='append', default=[], metavar='R,C:DIR',
                        help='Move a cell one step up/down/left/right (repeatable)')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    debug = os.getenv('DASGRID_DEBUG', '0').lower() in ('1', 'true', 'yes', 'on')

    try:
        sets = [parse_set(s) for s in args.sets]
        moves = [parse_move(m) for m in args.moves]
    except ValueError as e:
        print(f'error: could not parse operation: {e}')
        return 2

    cell_size = tuple(args.cell_size) if args.cell_size else None
    try:
        grid: Grid[Any] = Grid((args.rows, args.cols), cell_size, parse_value(args.default))
    except ValueError as e:
        print(f'error: {e}')
        return 2

    try:
        if args.fill is not None:
            grid.fill(parse_value(args.fill))
        for coord, value in sets:
            if debug:
                print(f'[grid] set {coord} = {value!r}')
            grid.set(coord, value)
        for coord, direction in moves:
            dst = grid.move_by_direction(coord, direction)
            if debug:
                print(f'[grid] move {coord} {direction} -> {dst}')
    except GridError as e:
        print(f'error: {e}')
        print(grid.pretty())
        return 1

    print(grid.pretty())
    return 0


if __name__ == '__main__':
    sys.exit(main())
