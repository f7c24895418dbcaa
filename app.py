from __future__ import annotations

import os
from typing import Any, Dict, List, Optional, Tuple

from flask import Flask, jsonify, request

from dasgrid_core.coords import Coord, MoveDirection
from dasgrid_core.errors import GridError
from dasgrid_core.grid import Grid
from dasgrid_core.rules import Rule, forbid_values

# Stateless API: every request carries the grid it operates on and gets the
# resulting grid back, so the server keeps nothing between calls.
app = Flask(__name__)


def _debug_enabled() -> bool:
    return os.getenv("DASGRID_DEBUG", "0").lower() in ("1", "true", "yes", "on")


def _trace(msg: str) -> None:
    if _debug_enabled():
        print(f"[grid] {msg}")


def grid_to_json(g: Grid[Any]) -> Dict[str, Any]:
    cell_size = g.get_cell_size()
    return {
        "rows": int(g.rows),
        "cols": int(g.cols),
        "cellSize": [float(cell_size[0]), float(cell_size[1])] if cell_size is not None else None,
        "default": g.default_value,
        "cells": g.get_flattened(),
    }


def _cell_size_from_json(raw: Any) -> Optional[Tuple[float, float]]:
    if raw is None:
        return None
    w, h = raw
    return float(w), float(h)


def json_to_grid(obj: Dict[str, Any]) -> Grid[Any]:
    """Rebuilds a grid from its JSON shape. Raises ValueError/KeyError/TypeError on bad input."""
    rows, cols = int(obj["rows"]), int(obj["cols"])
    cells = list(obj["cells"])
    g: Grid[Any] = Grid((rows, cols), _cell_size_from_json(obj.get("cellSize")), obj.get("default"))
    if len(cells) != g.size():
        raise ValueError(f"expected {g.size()} cells, got {len(cells)}")
    for coord, v in zip(g.enumerate(), cells):
        g.set(coord, v)
    return g


def _coord(raw: Any) -> Coord:
    r, c = raw
    return int(r), int(c)


def _rules(body: Dict[str, Any]) -> List[Rule]:
    forbid = body.get("forbid")
    if forbid is None:
        return []
    if not isinstance(forbid, list):
        raise TypeError("forbid must be a list of values")
    if not forbid:
        return []
    return [forbid_values(*forbid)]


def _grid_error(e: GridError) -> Any:
    return jsonify({"ok": False, "error": str(e), "kind": type(e).__name__}), 400


def _bad_request(msg: str) -> Any:
    return jsonify({"ok": False, "error": msg}), 400


def _load(body: Dict[str, Any], key: str = "grid") -> Grid[Any]:
    g_in = body.get(key)
    if not isinstance(g_in, dict):
        raise ValueError(f"{key} required")
    return json_to_grid(g_in)


@app.post("/api/new")
def api_new() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    try:
        g: Grid[Any] = Grid(
            (int(body.get("rows", 0)), int(body.get("cols", 0))),
            _cell_size_from_json(body.get("cellSize")),
            body.get("default", 0),
        )
    except (ValueError, TypeError) as e:
        return _bad_request(f"bad grid: {e}")
    _trace(f"new {g}")
    return jsonify({"ok": True, "grid": grid_to_json(g)})


@app.post("/api/new_from")
def api_new_from() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    try:
        g = Grid.from_sequence(
            (int(body["rows"]), int(body["cols"])),
            _cell_size_from_json(body.get("cellSize")),
            list(body["cells"]),
        )
    except (KeyError, ValueError, TypeError) as e:
        return _bad_request(f"bad grid: {e}")
    return jsonify({"ok": True, "grid": grid_to_json(g)})


@app.post("/api/get")
def api_get() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    try:
        g = _load(body)
        at = _coord(body["at"])
    except (KeyError, ValueError, TypeError) as e:
        return _bad_request(f"bad grid: {e}")
    try:
        value = g.get(at)
    except GridError as e:
        return _grid_error(e)
    return jsonify({"ok": True, "value": value})


@app.post("/api/set")
def api_set() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    try:
        g = _load(body)
        at = _coord(body["at"])
        value = body["value"]
        rules = _rules(body)
    except (KeyError, ValueError, TypeError) as e:
        return _bad_request(f"bad grid: {e}")
    try:
        g.set_with_rules(at, value, rules)
    except GridError as e:
        return _grid_error(e)
    _trace(f"set {at} = {value!r}")
    return jsonify({"ok": True, "grid": grid_to_json(g)})


@app.post("/api/move")
def api_move() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    try:
        g = _load(body)
        src = _coord(body["src"])
        dst = _coord(body["dst"])
        rules = _rules(body)
    except (KeyError, ValueError, TypeError) as e:
        return _bad_request(f"bad grid: {e}")
    try:
        g.move_with_rules(src, dst, rules)
    except GridError as e:
        return _grid_error(e)
    _trace(f"move {src} -> {dst}")
    return jsonify({"ok": True, "grid": grid_to_json(g)})


@app.post("/api/move_to")
def api_move_to() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    try:
        g = _load(body)
        src = _coord(body["src"])
        direction = MoveDirection.parse(str(body["direction"]))
        rules = _rules(body)
    except (KeyError, ValueError, TypeError) as e:
        return _bad_request(f"bad grid: {e}")
    try:
        dst = g.move_by_direction_with_rules(src, direction, rules)
    except GridError as e:
        return _grid_error(e)
    _trace(f"move {src} {direction} -> {dst}")
    return jsonify({"ok": True, "grid": grid_to_json(g), "dst": [dst[0], dst[1]]})


@app.post("/api/fill")
def api_fill() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    try:
        g = _load(body)
        value = body["value"]
        at = _coord(body["at"]) if "at" in body else None
        size = _coord(body["size"]) if "size" in body else None
    except (KeyError, ValueError, TypeError) as e:
        return _bad_request(f"bad grid: {e}")
    if (at is None) != (size is None):
        return _bad_request("bad region: at and size must be given together")
    try:
        if at is None:
            g.fill(value)
        else:
            g.fill_region(at, size, value)
    except GridError as e:
        return _grid_error(e)
    except ValueError as e:
        return _bad_request(f"bad region: {e}")
    return jsonify({"ok": True, "grid": grid_to_json(g)})


@app.post("/api/subgrid")
def api_subgrid() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    try:
        g = _load(body)
        at = _coord(body["at"])
        rows, cols = _coord(body["size"])
    except (KeyError, ValueError, TypeError) as e:
        return _bad_request(f"bad grid: {e}")
    try:
        sub = g.get_subgrid(at, rows, cols)
    except GridError as e:
        return _grid_error(e)
    except ValueError as e:
        return _bad_request(f"bad region: {e}")
    return jsonify({"ok": True, "grid": grid_to_json(sub)})


@app.post("/api/stamp")
def api_stamp() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    try:
        g = _load(body)
        source = _load(body, "source")
        at = _coord(body["at"])
        rules = _rules(body)
    except (KeyError, ValueError, TypeError) as e:
        return _bad_request(f"bad grid: {e}")
    try:
        if rules:
            g.stamp_with_rules(at, source, rules)
        else:
            g.stamp(at, source)
    except GridError as e:
        return _grid_error(e)
    return jsonify({"ok": True, "grid": grid_to_json(g)})


@app.post("/api/row")
def api_row() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    try:
        g = _load(body)
        index = int(body["index"])
    except (KeyError, ValueError, TypeError) as e:
        return _bad_request(f"bad grid: {e}")
    try:
        values = g.get_row(index)
    except GridError as e:
        return _grid_error(e)
    return jsonify({"ok": True, "values": values})


@app.post("/api/col")
def api_col() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    try:
        g = _load(body)
        index = int(body["index"])
    except (KeyError, ValueError, TypeError) as e:
        return _bad_request(f"bad grid: {e}")
    try:
        values = g.get_col(index)
    except GridError as e:
        return _grid_error(e)
    return jsonify({"ok": True, "values": values})


@app.post("/api/dump")
def api_dump() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    try:
        g = _load(body)
    except (KeyError, ValueError, TypeError) as e:
        return _bad_request(f"bad grid: {e}")
    return jsonify({"ok": True, "text": g.pretty()})


# Entrypoint for "python app.py"
if __name__ == "__main__":
    debug = os.getenv("FLASK_DEBUG", os.getenv("DEBUG", "0")).lower() in ("1", "true", "yes", "on")
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")), debug=debug)
