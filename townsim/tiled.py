"""Loading of Tiled Map Editor JSON maps into a grid."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from townsim.grid import Cell, Grid, ObstacleType, Zone

log = logging.getLogger(__name__)

# Object layers give pixel coordinates; zones are measured in 32-pixel tiles.
_ZONE_TILE_SIZE = 32

_OBSTACLE_NAMES = {
    "Wall": ObstacleType.WALL,
    "wall": ObstacleType.WALL,
    "Water": ObstacleType.WATER,
    "water": ObstacleType.WATER,
    "Forest": ObstacleType.FOREST,
    "forest": ObstacleType.FOREST,
    "Grass": ObstacleType.GRASS,
    "grass": ObstacleType.GRASS,
    "Path": ObstacleType.PATH,
    "path": ObstacleType.PATH,
    "None": ObstacleType.NONE,
    "none": ObstacleType.NONE,
}

_DEFAULT_COSTS = {
    ObstacleType.WALL: 9999,
    ObstacleType.WATER: 50,
    ObstacleType.FOREST: 10,
    ObstacleType.GRASS: 1,
    ObstacleType.PATH: 0,
}


class TiledMapError(ValueError):
    """The file is not a usable Tiled map."""


@dataclass
class TiledTileset:
    """An embedded tileset with per-tile types and costs keyed by global id."""

    firstgid: int = 1
    name: str = ""
    tilewidth: int = 32
    tileheight: int = 32
    tilecount: int = 0
    columns: int = 1
    image: str = ""
    tile_types: dict[int, str] = field(default_factory=dict)
    tile_costs: dict[int, int] = field(default_factory=dict)


def obstacle_type_from_string(name: str) -> ObstacleType:
    """Map a Tiled tile type name to an obstacle type; unknown names are NONE."""
    return _OBSTACLE_NAMES.get(name, ObstacleType.NONE)


def default_cost(obstacle: ObstacleType) -> int:
    """Movement cost used for a tile that has no cost property."""
    return _DEFAULT_COSTS.get(obstacle, 1)


def _read_tileset(ref: dict[str, Any], tile_width: int, tile_height: int) -> TiledTileset | None:
    tileset = TiledTileset(firstgid=ref.get("firstgid", 1))
    if "source" in ref:
        log.warning("External tilesets are not supported: %s", ref["source"])
        return None
    tileset.name = ref.get("name", "")
    tileset.tilewidth = ref.get("tilewidth", tile_width)
    tileset.tileheight = ref.get("tileheight", tile_height)
    tileset.tilecount = ref.get("tilecount", 0)
    tileset.columns = ref.get("columns", 1)
    tileset.image = ref.get("image", "")

    for tile in ref.get("tiles", []):
        global_id = tileset.firstgid + tile.get("id", 0)
        if "type" in tile:
            tileset.tile_types[global_id] = tile["type"]
        for prop in tile.get("properties", []):
            if prop.get("name") == "cost":
                tileset.tile_costs[global_id] = prop.get("value", 1)
    return tileset


def _tileset_for(gid: int, tilesets: list[TiledTileset]) -> TiledTileset | None:
    return next((ts for ts in reversed(tilesets) if gid >= ts.firstgid), None)


def _apply_tile_layer(layer: dict[str, Any], grid: Grid, tilesets: list[TiledTileset]) -> None:
    log.info("Processing tile layer: %s", layer.get("name", ""))
    if "data" not in layer:
        return
    layer_width = layer.get("width", 0)
    layer_height = layer.get("height", 0)
    data = list(layer["data"])

    for y in range(min(layer_height, grid.height)):
        for x in range(min(layer_width, grid.width)):
            index = y * layer_width + x
            if index >= len(data):
                continue
            gid = data[index]
            if gid == 0:
                continue
            tileset = _tileset_for(gid, tilesets)
            if tileset is None:
                continue
            cell: Cell = grid.at(x, y)
            if gid in tileset.tile_types:
                cell.obstacle = obstacle_type_from_string(tileset.tile_types[gid])
            cell.cost = tileset.tile_costs.get(gid, default_cost(cell.obstacle))


def _apply_object_group(layer: dict[str, Any], grid: Grid) -> None:
    log.info("Processing object group: %s", layer.get("name", ""))
    for obj in layer.get("objects", []):
        name = obj.get("name", "")
        tile_x = int(float(obj.get("x", 0.0)) / _ZONE_TILE_SIZE)
        tile_y = int(float(obj.get("y", 0.0)) / _ZONE_TILE_SIZE)
        tile_w = int(float(obj.get("width", 0.0)) / _ZONE_TILE_SIZE)
        tile_h = int(float(obj.get("height", 0.0)) / _ZONE_TILE_SIZE)
        if name and tile_w > 0 and tile_h > 0:
            grid.zones[name] = Zone(tile_x, tile_y, tile_w, tile_h)
            log.info("Added zone: %s (%d,%d %dx%d)", name, tile_x, tile_y, tile_w, tile_h)


def load_tiled_map(filename: str | os.PathLike) -> Grid:
    """Build a grid from a Tiled JSON map.

    Raises OSError if the file cannot be read and TiledMapError if it is not
    valid JSON or not a Tiled map.
    """
    text = Path(filename).read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise TiledMapError(f"error parsing Tiled JSON: {exc}") from exc

    if not isinstance(data, dict) or data.get("type") != "map":
        raise TiledMapError("not a valid Tiled map file")

    map_width = data.get("width", 0)
    map_height = data.get("height", 0)
    tile_width = data.get("tilewidth", 32)
    tile_height = data.get("tileheight", 32)
    log.info(
        "Loading Tiled map: %dx%d (tile size: %dx%d)", map_width, map_height, tile_width, tile_height
    )

    grid = Grid(map_width, map_height)

    tilesets = [
        ts
        for ref in data.get("tilesets", [])
        if (ts := _read_tileset(ref, tile_width, tile_height)) is not None
    ]

    for layer in data.get("layers", []):
        if not layer.get("visible", True):
            continue
        layer_type = layer.get("type", "")
        if layer_type == "tilelayer":
            _apply_tile_layer(layer, grid, tilesets)
        elif layer_type == "objectgroup":
            _apply_object_group(layer, grid)

    return grid