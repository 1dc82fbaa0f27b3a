[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "townsim"
version = "0.1.0"
description = "Grid-based town simulation: day cycle, A* pathfinding, homes, a small ECS and NPC daily-routine AI"
requires-python = ">=3.10"
dependencies = []
keywords = ["simulation", "npc", "ecs", "pathfinding", "a-star", "grid", "tiled"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment :: Simulation",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["townsim"]

[tool.pytest.ini_options]
addopts = "-ra"
