"""Grid-based town simulation: day cycle, clock, grid and Tiled maps, A* pathfinding, homes, a small ECS and NPC routines."""

__version__ = "0.1.0"