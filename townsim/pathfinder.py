"""A* path search over a grid, avoiding walls and weighing cell costs."""

from __future__ import annotations

import heapq
import itertools
from typing import NamedTuple

from townsim.grid import Grid, ObstacleType


class Point(NamedTuple):
    """A grid coordinate."""

    x: int
    y: int


_STEPS = ((0, 1), (0, -1), (1, 0), (-1, 0))


def manhattan(a: Point, b: Point) -> int:
    """Manhattan distance between two points."""
    return abs(a.x - b.x) + abs(a.y - b.y)


class Pathfinder:
    """Finds paths on a grid; moves are horizontal or vertical only."""

    def __init__(self, grid: Grid) -> None:
        self.grid = grid

    def _passable(self, p: Point) -> bool:
        return (
            0 <= p.x < self.grid.width
            and 0 <= p.y < self.grid.height
            and self.grid.at(p.x, p.y).obstacle is not ObstacleType.WALL
        )

    def find_path(self, start: Point, end: Point) -> list[Point]:
        """Return the path from ``start`` to ``end`` inclusive, or an empty list.

        The list is empty when start equals end, when the end is a wall, or
        when no path exists.
        """
        start, end = Point(*start), Point(*end)
        if start == end or self.grid.at(end.x, end.y).obstacle is ObstacleType.WALL:
            return []

        came_from: dict[Point, Point] = {}
        g_cost: dict[Point, int] = {start: 0}
        counter = itertools.count()
        open_set = [(manhattan(start, end), next(counter), 0, start)]

        while open_set:
            _, _, g, current = heapq.heappop(open_set)
            if current == end:
                return self._reconstruct(came_from, current)
            if g > g_cost[current]:
                continue
            for dx, dy in _STEPS:
                neighbor = Point(current.x + dx, current.y + dy)
                if not self._passable(neighbor):
                    continue
                tentative = g_cost[current] + self.grid.at(neighbor.x, neighbor.y).cost
                if tentative < g_cost.get(neighbor, float("inf")):
                    came_from[neighbor] = current
                    g_cost[neighbor] = tentative
                    f = tentative + manhattan(neighbor, end)
                    heapq.heappush(open_set, (f, next(counter), tentative, neighbor))

        return []

    @staticmethod
    def _reconstruct(came_from: dict[Point, Point], current: Point) -> list[Point]:
        path = [current]
        while current in came_from:
            current = came_from[current]
            path.append(current)
        path.reverse()
        return path

    def find_path_to_zone(self, start: Point, zone_name: str) -> list[Point]:
        """Return the shortest path to any non-wall cell of a named zone.

        Empty if the zone is unknown or no cell of it can be reached.
        """
        zone = self.grid.zones.get(zone_name)
        if zone is None:
            return []

        best: list[Point] = []
        for y in range(zone.y, zone.y + zone.height):
            for x in range(zone.x, zone.x + zone.width):
                target = Point(x, y)
                if not self._passable(target):
                    continue
                path = self.find_path(start, target)
                if path and (not best or len(path) < len(best)):
                    best = path
        return best