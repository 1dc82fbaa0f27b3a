"""Tile grid with movement costs and named rectangular zones."""

from __future__ import annotations

import json
import os
import re
import sys
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class ObstacleType(Enum):
    """Kind of terrain occupying a cell."""

    NONE = "None"
    WALL = "Wall"
    WATER = "Water"
    FOREST = "Forest"
    GRASS = "Grass"
    PATH = "Path"


@dataclass
class Cell:
    obstacle: ObstacleType = ObstacleType.NONE
    cost: int = 1


@dataclass
class Zone:
    x: int
    y: int
    width: int
    height: int

    def contains(self, x: int, y: int) -> bool:
        """Whether cell ``(x, y)`` lies inside the zone."""
        return self.x <= x < self.x + self.width and self.y <= y < self.y + self.height


# Order and cost applied when a tile is cycled by the editor.
_CYCLE = {
    ObstacleType.NONE: (ObstacleType.GRASS, 10),
    ObstacleType.GRASS: (ObstacleType.PATH, 5),
    ObstacleType.PATH: (ObstacleType.FOREST, 20),
    ObstacleType.FOREST: (ObstacleType.WATER, 100),
    ObstacleType.WATER: (ObstacleType.WALL, 9999),
    ObstacleType.WALL: (ObstacleType.NONE, 1),
}

_SAVED_TILE_PROPERTIES = {
    "Wall": {"cost": 9999},
    "Forest": {"cost": 20},
    "Water": {"cost": 50},
    "Grass": {"cost": 10},
    "Path": {"cost": 5},
    "Plain": {"cost": 0},
}

_SAVED_ZONES = {
    "Cafe": (1, 1, 4, 4),
    "Bureau": (20, 2, 4, 3),
    "Work": (8, 7, 10, 8),
    "Home": (25, 10, 2, 2),
    "Home_2": (30, 10, 2, 2),
    "Home_3": (35, 10, 2, 2),
    "Home_4": (25, 16, 2, 2),
    "Home_5": (29, 15, 4, 4),
    "Home_6": (34, 15, 4, 4),
    "Stadium": (15, 22, 10, 6),
    "Forest_0": (5, 10, 3, 3),
    "Forest_1": (30, 5, 3, 3),
    "Forest_2": (5, 25, 4, 4),
    "Forest_3": (35, 20, 5, 3),
    "Water_1": (15, 3, 2, 2),
    "Water_2": (25, 5, 3, 2),
    "Water_3": (2, 20, 9, 1),
    "Water_4": (28, 22, 4, 4),
}

_COMMENT_RE = re.compile(r'("(?:\\.|[^"\\])*")|//[^\n]*|/\*.*?\*/', re.DOTALL)


def _strip_comments(text: str) -> str:
    return _COMMENT_RE.sub(lambda m: m.group(1) or " ", text)


def _obstacle_from_name(name: str) -> ObstacleType:
    try:
        return ObstacleType(name)
    except ValueError:
        return ObstacleType.NONE


@dataclass
class Grid:
    """A width-by-height field of cells with named zones."""

    width: int
    height: int
    zones: dict[str, Zone] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self._cells = [Cell() for _ in range(self.width * self.height)]

    def _in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def at(self, x: int, y: int) -> Cell:
        """Return the cell at ``(x, y)``; raise IndexError outside the grid."""
        if not self._in_bounds(x, y):
            raise IndexError(f"cell ({x}, {y}) outside {self.width}x{self.height} grid")
        return self._cells[y * self.width + x]

    def render_ascii(self) -> str:
        """Render costs and zones as a text table."""
        lines = [
            f"Grid ({self.width}x{self.height}):",
            "Legend: # = Wall, numbers = movement cost",
            "",
            "   " + "".join(f"{x:3d}" for x in range(self.width)),
        ]
        border = "  +" + "---" * self.width + "+"
        lines.append(border)
        for y in range(self.height):
            row = "".join(
                "99+" if cell.cost >= 100 else f"{cell.cost:2d} "
                for cell in (self.at(x, y) for x in range(self.width))
            )
            lines.append(f"{y:2d}|{row}|")
        lines.append(border)
        lines.append("")
        if self.zones:
            lines.append("Loaded Zones:")
            lines.extend(
                f" - {name:<10} (x:{z.x}, y:{z.y}, w:{z.width}, h:{z.height})"
                for name, z in self.zones.items()
            )
            lines.append("")
        return "\n".join(lines) + "\n"

    def dump(self) -> str:
        """Write the ASCII rendering to standard output and return it."""
        text = self.render_ascii()
        sys.stdout.write(text)
        sys.stdout.flush()
        return text

    def load_from_json(self, filename: str | os.PathLike) -> None:
        """Load size, tiles and zones from an environment JSON file.

        Comments in the file are ignored. Raises OSError if the file cannot
        be read and ValueError if it is not valid JSON.
        """
        text = Path(filename).read_text(encoding="utf-8")
        data = json.loads(_strip_comments(text))

        self.width = data.get("width", 0)
        self.height = data.get("height", 0)
        self._cells = [Cell() for _ in range(self.width * self.height)]

        tile_costs = {
            name: props.get("cost", 1)
            for name, props in data.get("tile_properties", {}).items()
        }

        for tile in data.get("tiles", []):
            x = tile.get("x", -1)
            y = tile.get("y", -1)
            type_name = tile.get("type", "None")
            if self._in_bounds(x, y):
                cell = self.at(x, y)
                cell.obstacle = _obstacle_from_name(type_name)
                cell.cost = tile_costs.get(type_name, 1)

        for name, zone in data.get("zones", {}).items():
            self.zones[name] = Zone(
                zone.get("x", 0), zone.get("y", 0), zone.get("width", 0), zone.get("height", 0)
            )

    def cycle_tile_type(self, x: int, y: int) -> None:
        """Advance a tile to the next terrain type; ignore cells outside the grid."""
        if not self._in_bounds(x, y):
            return
        cell = self.at(x, y)
        cell.obstacle, cell.cost = _CYCLE[cell.obstacle]

    def save_to_json(self, filename: str | os.PathLike) -> None:
        """Write the tiles to an environment JSON file with the standard zones."""
        tiles = [
            {"type": cell.obstacle.value, "x": x, "y": y}
            for y in range(self.height)
            for x in range(self.width)
            if (cell := self.at(x, y)).obstacle is not ObstacleType.NONE
        ]
        document = {
            "width": self.width,
            "height": self.height,
            "tile_properties": _SAVED_TILE_PROPERTIES,
            "tiles": tiles,
            "zones": {
                name: {"x": x, "y": y, "width": w, "height": h}
                for name, (x, y, w, h) in _SAVED_ZONES.items()
            },
        }
        Path(filename).write_text(json.dumps(document, indent=2, sort_keys=True), encoding="utf-8")