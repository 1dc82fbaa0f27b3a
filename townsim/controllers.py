"""Controllers that steer entities, including keyboard-driven players."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from townsim.components import MovementPhase
from townsim.grid import Grid, ObstacleType
from townsim.managers import MovementManager, PositionManager

log = logging.getLogger(__name__)


class Direction(Enum):
    """A one-cell step on the grid."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]


_KEYS = {
    "w": Direction.UP,
    "s": Direction.DOWN,
    "a": Direction.LEFT,
    "d": Direction.RIGHT,
}


def _direction_for(key: Direction | str) -> Direction | None:
    if isinstance(key, Direction):
        return key
    return _KEYS.get(key.lower())


@dataclass
class Controller:
    """Marks an entity as steered by some kind of controller."""

    controller_type: str = "unknown"


@dataclass
class PlayerController(Controller):
    """Turns W/A/S/D key presses into one-cell moves."""

    controller_type: str = "player"

    def handle_key(
        self,
        key: Direction | str,
        uid: int,
        move_manager: MovementManager,
        pos_manager: PositionManager,
        grid: Grid,
        cell_size: int,
    ) -> bool:
        """Start a move to the neighbouring cell; return whether one started.

        Keys other than W/A/S/D (or a Direction) are ignored, as are moves
        into walls, out of the grid, or while the entity is already moving.
        """
        movement = move_manager.get(uid)
        if movement is None:
            log.debug("No movement component for entity %d", uid)
            return False
        if movement.is_moving:
            log.debug("Entity %d is already moving, ignoring input", uid)
            return False
        pos = pos_manager.get(uid)
        if pos is None:
            return False
        direction = _direction_for(key)
        if direction is None:
            return False

        current_x = int(pos.x / cell_size)
        current_y = int(pos.y / cell_size)
        target_x = current_x + direction.dx
        target_y = current_y + direction.dy

        if not (0 <= target_x < grid.width and 0 <= target_y < grid.height):
            log.debug("Cannot move to (%d,%d) - out of bounds", target_x, target_y)
            return False
        if grid.at(target_x, target_y).obstacle is ObstacleType.WALL:
            log.debug("Cannot move to (%d,%d) - blocked by Wall", target_x, target_y)
            return False

        movement.set_target(
            target_x * cell_size + cell_size / 2.0,
            target_y * cell_size + cell_size / 2.0,
        )
        movement.phase = MovementPhase.MOVING
        movement.phase_timer = 0.0
        movement.is_moving = True
        log.debug(
            "Player moving from (%d,%d) to (%d,%d)", current_x, current_y, target_x, target_y
        )
        return True


class ControllerManager:
    """Controllers of all entities that have one."""

    def __init__(self) -> None:
        self.controllers: dict[int, Controller] = {}

    def create(self, entity_uid: int, controller_type: str = "unknown") -> Controller | None:
        """Create a controller by type name; unknown types create nothing."""
        log.debug("Creating controller for entity %d with type: %s", entity_uid, controller_type)
        if controller_type == "player":
            controller: Controller = PlayerController()
        elif controller_type in ("guardian", "citizen"):
            controller = Controller()
        else:
            return None
        self.controllers[entity_uid] = controller
        return controller

    def get(self, entity_uid: int) -> Controller | None:
        return self.controllers.get(entity_uid)

    def handle_key(
        self,
        key: Direction | str,
        move_manager: MovementManager,
        pos_manager: PositionManager,
        grid: Grid,
        cell_size: int,
    ) -> None:
        """Pass a key press to every player controller."""
        for uid, controller in self.controllers.items():
            if controller.controller_type == "player" and isinstance(controller, PlayerController):
                controller.handle_key(key, uid, move_manager, pos_manager, grid, cell_size)

    def dump(self) -> None:
        for uid, controller in self.controllers.items():
            print(f"Entity UID: {uid} Controller Type: {controller.controller_type}")