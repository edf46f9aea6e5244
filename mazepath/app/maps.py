# mazepath/app/maps.py
#!/usr/bin/env python3
"""
JSON maze maps.

    {
      "width": 10, "depth": 10,
      "cells": [[1, 1, ...], ...],   # one row per z, `width` entries each
      "start": [1, 1],               # optional, (x, z)
      "goal":  [8, 8]                # optional
    }

"height" is accepted in place of "depth" so workshop maps load unchanged.
"""

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Union

from mazepath.core.errors import InvalidGrid
from mazepath.core.types import Grid, Location

BUNDLED_MAP_DIR = Path(__file__).resolve().parents[2] / "maps"


def default_map_dir() -> Path:
    """MAZEPATH_MAP_DIR if set (read on every call), else maps/ at the repo root."""
    return Path(os.getenv("MAZEPATH_MAP_DIR") or BUNDLED_MAP_DIR)


@dataclass
class MazeMap:
    name: str
    grid: Grid
    start: Optional[Location] = None
    goal: Optional[Location] = None


def _location(data: dict, key: str, grid: Grid) -> Optional[Location]:
    raw = data.get(key)
    if raw is None:
        return None
    try:
        x, z = (int(v) for v in raw)
    except (TypeError, ValueError) as exc:
        raise InvalidGrid(f"{key} must be an [x, z] pair, got {raw!r}") from exc
    loc = Location(x, z)
    if not grid.in_bounds(loc):
        raise InvalidGrid(f"{key} out of bounds")
    return loc


def parse_map(data: dict, name: str = "custom") -> MazeMap:
    try:
        width = int(data["width"])
        depth = int(data.get("depth", data.get("height")))
        cells = data["cells"]
    except (KeyError, TypeError, ValueError) as exc:
        raise InvalidGrid(f"map {name!r} needs width, depth and cells") from exc

    grid = Grid.from_rows(cells)
    if (grid.width, grid.depth) != (width, depth):
        raise InvalidGrid(f"cells size mismatch: declared {width}x{depth}, got {grid.width}x{grid.depth}")

    return MazeMap(name, grid, _location(data, "start", grid), _location(data, "goal", grid))


def load_map(path: Union[str, Path]) -> MazeMap:
    path = Path(path)
    with open(path, "r") as f:
        data = json.load(f)
    return parse_map(data, name=path.stem)


def available_maps(map_dir: Optional[Path] = None) -> Dict[str, Path]:
    map_dir = default_map_dir() if map_dir is None else Path(map_dir)
    if not map_dir.is_dir():
        return {}
    return {p.stem: p for p in sorted(map_dir.glob("*.json"))}


def resolve_map(ref: str, map_dir: Optional[Path] = None) -> Path:
    """A file path, or the stem of a map in `map_dir`."""
    path = Path(ref)
    if path.is_file():
        return path
    maps = available_maps(map_dir)
    if ref in maps:
        return maps[ref]
    raise InvalidGrid(f"no map named {ref!r} (known: {', '.join(maps) or 'none'})")
