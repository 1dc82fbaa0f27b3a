# townsim

A small simulation library for a grid-based town. NPCs follow a daily
routine: they work, eat, relax and sleep. They find their way between
named zones with A* pathfinding. The package has no third-party
dependencies.

## Modules

- `townsim.timeofday`
  - `DayPeriod` names the five parts of the day: dawn, morning,
    afternoon, evening and night.
  - `period_for_hour(hour)` returns the period that contains an hour.
  - `TimeOfDay` holds the current period. It answers `is_work_hours`
    (9–17), `is_sleep_time` (22–6) and `is_meal_time` (7–9, 12–13,
    18–20), and gives a `suggested_activity(hour)`.
- `townsim.clock`
  - `Clock` turns real seconds into simulated days, hours and minutes.
    The default scale is 60, so one real second is one simulated minute.
  - A new clock reads `Day 1 - 08:00`.
  - After an `update()` the time is computed from the total simulated
    seconds, counting from midnight of day 1.
  - It has `time_string()`, `pause()` and `resume()`.
- `townsim.grid`
  - `Grid` is a field of `Cell`s. Each cell has an `ObstacleType` and a
    movement cost. The grid also holds a dict of named `Zone` rectangles.
  - `at(x, y)` raises `IndexError` outside the grid.
  - `cycle_tile_type(x, y)` steps a tile through the terrain types in
    this order, setting the cost shown for each: none → grass (10) →
    path (5) → forest (20) → water (100) → wall (9999) → none (1).
  - `render_ascii()` returns the costs and zones as text. `dump()` prints
    that text.
  - `load_from_json(filename)` reads an environment file and accepts
    `//` and `/* */` comments. It raises `OSError` or `ValueError`.
  - `save_to_json(filename)` writes the grid's tiles. It writes a fixed
    standard set of zones, not the grid's own zones.
- `townsim.tiled`
  - `load_tiled_map(filename)` builds a `Grid` from a JSON map exported
    by the Tiled map editor. It reads embedded tilesets, tile layers and
    object layers; object layers become zones, in 32-pixel tiles.
  - External tilesets are skipped with a warning.
  - A file that is not valid JSON, or not a map, raises `TiledMapError`.
  - `obstacle_type_from_string()` and `default_cost()` are the mappings
    the loader uses.
- `townsim.pathfinder`
  - `Pathfinder.find_path(start, end)` returns the cheapest four-way
    path, start and end included. It steps around walls and weighs cell
    costs.
  - `find_path_to_zone(start, name)` returns the shortest path to any
    non-wall cell of a zone.
  - Both return an empty list when there is no path. `find_path` also
    returns an empty list when start equals end.
- `townsim.homes`
  - `HomeManager` gives each NPC a home zone of its own. The zones are
    taken from `Home`, `Home_2` … `Home_6` by default.
  - It also answers who lives where and the centre cell of an NPC's home.
- `townsim.ticks`
  - `TickManager` runs callbacks at their own intervals, lowest priority
    first.
  - Each callback receives the time since its last tick.
- `townsim.entities`, `townsim.components`, `townsim.registry`,
  `townsim.world`: a small entity-component-system.
  - `World` creates and destroys entities and reuses freed ids.
  - It attaches components by type and runs `System`s in the order they
    were added.
  - `MovementSystem` moves entities towards their `Movement` target.
- `townsim.managers`
  - There are dict-based managers for AI state, descriptions, info boxes,
    positions and movement.
  - `MovementManager.update()` advances the movement phases: planning,
    moving, arriving and idle. It moves positions towards their targets.
- `townsim.controllers`
  - `ControllerManager` creates controllers by type name: `player`,
    `guardian` or `citizen`.
  - `handle_key()` passes a key (`"w"`, `"a"`, `"s"`, `"d"` or a
    `Direction`) to every player controller.
  - A player controller starts a one-cell move unless the target cell is
    a wall, lies outside the grid, or the entity is already moving.
- `townsim.scene`
  - `Scene.load_from_file()` reads a JSON scene file and fills the
    managers it is given.
  - It returns the ids it loaded. It raises `SceneError` for an invalid
    file.
- `townsim.ai`
  - `AISystem` chooses an activity and a zone for each NPC from the hour.
  - It walks the NPC there one cell at a time and counts down the
    activity.
  - It keeps each NPC's info-box text up to date.
  - A `random.Random` can be passed as `rng` for repeatable choices.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Examples

Pathfinding and the clock:

```python
from townsim.clock import Clock
from townsim.grid import Grid, Zone
from townsim.pathfinder import Pathfinder, Point

grid = Grid(10, 10)
grid.zones["Cafe"] = Zone(7, 7, 2, 2)

path = Pathfinder(grid).find_path_to_zone(Point(0, 0), "Cafe")
print(path[0], path[-1])

clock = Clock()
print(clock.time_string())   # Day 1 - 08:00
clock.update(3600)           # one real hour at the default scale of 60
print(clock.time_string())
```

The ECS:

```python
from townsim.world import World, MovementSystem
from townsim.components import PositionComponent, Movement

world = World()
world.add_system(MovementSystem, world)
npc = world.create_entity()
world.add_component(npc, PositionComponent, 0.0, 0.0)
world.add_component(npc, Movement, 100.0).set_target(100.0, 50.0)
world.update(0.1)
print(world.get_component(npc, PositionComponent))
```

A simulation loop with NPC routines:

```python
from townsim.ai import AISystem
from townsim.clock import Clock
from townsim.grid import Grid, Zone
from townsim.homes import HomeManager
from townsim.managers import (
    AIManager, DescriptionManager, InfoBoxManager, MovementManager, PositionManager,
)
from townsim.pathfinder import Pathfinder

cell_size = 32
grid = Grid(20, 20)
grid.zones.update(Cafe=Zone(1, 1, 3, 3), Work=Zone(10, 10, 4, 4), Home=Zone(15, 2, 2, 2))

ai, pos, moves = AIManager(), PositionManager(), MovementManager()
desc, boxes, homes = DescriptionManager(), InfoBoxManager(), HomeManager()

desc.create(1, "Ada", "A baker")
pos.create(1, 16.0, 16.0)
moves.create(1, 64.0)
ai.create(1)
boxes.create(1, "Ada\nIdle")
homes.assign_home(1, "Ada")

clock = Clock()
system = AISystem(ai, pos, moves, desc, Pathfinder(grid), grid, boxes, clock, homes, cell_size)

for _ in range(600):
    dt = 1 / 60
    clock.update(dt)
    moves.update(pos, dt)
    system.update(dt)

print(boxes.get(1).text)
```

## What it does not do

This is a library of simulation logic only.

- It draws nothing and opens no window.
- It has no event loop and no command-line program.
- Player control takes key names you pass in. It does not read a
  keyboard.
- Scene files give each entity its description, position, controller,
  movement and AI state. Shapes and colours in those files are ignored.
- NPC activities are chosen by fixed rules. No text is generated for
  them.