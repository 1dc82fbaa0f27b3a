import json

import pytest

from townsim.grid import ObstacleType, Zone
from townsim.tiled import (
    TiledMapError,
    default_cost,
    load_tiled_map,
    obstacle_type_from_string,
)


def _write(tmp_path, document):
    path = tmp_path / "map.json"
    path.write_text(json.dumps(document), encoding="utf-8")
    return path


def _map(layers, tilesets=None, width=3, height=2):
    return {
        "type": "map",
        "width": width,
        "height": height,
        "tilewidth": 32,
        "tileheight": 32,
        "tilesets": tilesets if tilesets is not None else [
            {
                "firstgid": 1,
                "name": "terrain",
                "tiles": [
                    {"id": 0, "type": "Wall"},
                    {"id": 1, "type": "water",
                     "properties": [{"name": "cost", "value": 7}]},
                ],
            }
        ],
        "layers": layers,
    }


@pytest.mark.parametrize(
    "name, expected",
    [
        ("Wall", ObstacleType.WALL),
        ("wall", ObstacleType.WALL),
        ("water", ObstacleType.WATER),
        ("Forest", ObstacleType.FOREST),
        ("grass", ObstacleType.GRASS),
        ("Path", ObstacleType.PATH),
        ("none", ObstacleType.NONE),
        ("lava", ObstacleType.NONE),
        ("WALL", ObstacleType.NONE),
    ],
)
def test_obstacle_type_from_string(name, expected):
    assert obstacle_type_from_string(name) is expected


@pytest.mark.parametrize(
    "obstacle, cost",
    [
        (ObstacleType.WALL, 9999),
        (ObstacleType.WATER, 50),
        (ObstacleType.FOREST, 10),
        (ObstacleType.GRASS, 1),
        (ObstacleType.PATH, 0),
        (ObstacleType.NONE, 1),
    ],
)
def test_default_cost(obstacle, cost):
    assert default_cost(obstacle) == cost


def test_tile_layer_sets_types_and_costs(tmp_path):
    layer = {"type": "tilelayer", "name": "ground", "width": 3, "height": 2,
             "data": [1, 2, 0, 0, 1, 0]}
    grid = load_tiled_map(_write(tmp_path, _map([layer])))
    assert (grid.width, grid.height) == (3, 2)
    assert grid.at(0, 0).obstacle is ObstacleType.WALL
    assert grid.at(0, 0).cost == default_cost(ObstacleType.WALL)
    assert grid.at(1, 0).obstacle is ObstacleType.WATER
    assert grid.at(1, 0).cost == 7
    assert grid.at(2, 0).obstacle is ObstacleType.NONE
    assert grid.at(1, 1).obstacle is ObstacleType.WALL


def test_short_data_leaves_remaining_cells_default(tmp_path):
    layer = {"type": "tilelayer", "width": 3, "height": 2, "data": [1]}
    grid = load_tiled_map(_write(tmp_path, _map([layer])))
    assert grid.at(0, 0).obstacle is ObstacleType.WALL
    assert grid.at(2, 1).obstacle is ObstacleType.NONE
    assert grid.at(2, 1).cost == 1


def test_invisible_layer_is_ignored(tmp_path):
    layer = {"type": "tilelayer", "width": 3, "height": 2, "visible": False,
             "data": [1, 1, 1, 1, 1, 1]}
    grid = load_tiled_map(_write(tmp_path, _map([layer])))
    assert all(grid.at(x, y).obstacle is ObstacleType.NONE
               for x in range(3) for y in range(2))


def test_external_tileset_is_skipped(tmp_path):
    tilesets = [{"firstgid": 1, "source": "terrain.tsx"}]
    layer = {"type": "tilelayer", "width": 3, "height": 2, "data": [1, 1, 1, 1, 1, 1]}
    grid = load_tiled_map(_write(tmp_path, _map([layer], tilesets=tilesets)))
    assert grid.at(0, 0).obstacle is ObstacleType.NONE
    assert grid.at(0, 0).cost == 1


def test_gid_uses_tileset_with_highest_matching_firstgid(tmp_path):
    tilesets = [
        {"firstgid": 1, "tiles": [{"id": 0, "type": "Wall"}]},
        {"firstgid": 5, "tiles": [{"id": 0, "type": "Forest"}]},
    ]
    layer = {"type": "tilelayer", "width": 2, "height": 1, "data": [1, 5]}
    grid = load_tiled_map(_write(tmp_path, _map([layer], tilesets=tilesets, width=2, height=1)))
    assert grid.at(0, 0).obstacle is ObstacleType.WALL
    assert grid.at(1, 0).obstacle is ObstacleType.FOREST
    assert grid.at(1, 0).cost == default_cost(ObstacleType.FOREST)


def test_object_group_adds_zones_in_tiles(tmp_path):
    layer = {"type": "objectgroup", "name": "zones", "objects": [
        {"name": "Cafe", "x": 32, "y": 64, "width": 64, "height": 32},
        {"name": "Tiny", "x": 0, "y": 0, "width": 16, "height": 64},
        {"name": "", "x": 0, "y": 0, "width": 64, "height": 64},
    ]}
    grid = load_tiled_map(_write(tmp_path, _map([layer])))
    assert grid.zones == {"Cafe": Zone(1, 2, 2, 1)}


def test_not_a_map_raises(tmp_path):
    path = _write(tmp_path, {"type": "tileset"})
    with pytest.raises(TiledMapError):
        load_tiled_map(path)


def test_invalid_json_raises(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(TiledMapError):
        load_tiled_map(path)


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_tiled_map(tmp_path / "absent.json")