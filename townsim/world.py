"""The world that ties entities, components and systems together."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import Any, Mapping, TypeVar

from townsim.components import Movement, MovementPhase, PositionComponent
from townsim.entities import EntityManager
from townsim.registry import ComponentRegistry

T = TypeVar("T")
S = TypeVar("S", bound="System")

# Closer than this to the target counts as arrived.
_ARRIVAL_DISTANCE = 1.0


class System(ABC):
    """A unit of logic run once per world update."""

    @property
    def name(self) -> str:
        """Name of the system, used for display."""
        return type(self).__name__

    @abstractmethod
    def update(self, delta_time: float) -> None:
        """Advance the system by ``delta_time`` seconds."""


class SystemManager:
    """Runs systems in the order they were added."""

    def __init__(self) -> None:
        self._systems: list[System] = []

    def add_system(self, system_type: type[S], *args: Any, **kwargs: Any) -> S:
        """Construct a system from the arguments and append it."""
        system = system_type(*args, **kwargs)
        self._systems.append(system)
        return system

    def update_systems(self, delta_time: float) -> None:
        for system in self._systems:
            system.update(delta_time)

    def get_system(self, system_type: type[S]) -> S | None:
        """The first system that is an instance of ``system_type``, or None."""
        return next((s for s in self._systems if isinstance(s, system_type)), None)

    def clear(self) -> None:
        self._systems.clear()

    def __len__(self) -> int:
        return len(self._systems)


class World:
    """Central access point for entities, their components and the systems."""

    def __init__(self) -> None:
        self.entity_manager = EntityManager()
        self.component_registry = ComponentRegistry()
        self.system_manager = SystemManager()

    def create_entity(self) -> int:
        return self.entity_manager.create_entity()

    def destroy_entity(self, entity_id: int) -> bool:
        """Destroy an entity and all its components; False if it was not alive."""
        if not self.entity_manager.is_alive(entity_id):
            return False
        self.component_registry.remove_all_components(entity_id)
        return self.entity_manager.destroy_entity(entity_id)

    def is_entity_alive(self, entity_id: int) -> bool:
        return self.entity_manager.is_alive(entity_id)

    def add_component(
        self, entity_id: int, component_type: type[T], *args: Any, **kwargs: Any
    ) -> T | None:
        """Attach a new component; None if the entity is not alive."""
        if not self.entity_manager.is_alive(entity_id):
            return None
        return self.component_registry.add_component(entity_id, component_type, *args, **kwargs)

    def get_component(self, entity_id: int, component_type: type[T]) -> T | None:
        return self.component_registry.get_component(entity_id, component_type)

    def has_component(self, entity_id: int, component_type: type) -> bool:
        return self.component_registry.has_component(entity_id, component_type)

    def remove_component(self, entity_id: int, component_type: type) -> None:
        self.component_registry.remove_component(entity_id, component_type)

    def all_entities(self) -> list[int]:
        return self.entity_manager.all_entities()

    def all_components(self, component_type: type[T]) -> Mapping[int, T]:
        return self.component_registry.all_components(component_type)

    def add_system(self, system_type: type[S], *args: Any, **kwargs: Any) -> S:
        return self.system_manager.add_system(system_type, *args, **kwargs)

    def get_system(self, system_type: type[S]) -> S | None:
        return self.system_manager.get_system(system_type)

    def update(self, delta_time: float) -> None:
        """Run every system once."""
        self.system_manager.update_systems(delta_time)

    def entity_count(self) -> int:
        return len(self.entity_manager)

    def clear(self) -> None:
        """Remove all systems, components and entities."""
        self.system_manager.clear()
        self.component_registry.clear()
        self.entity_manager.clear()


class MovementSystem(System):
    """Moves entities with a position towards their movement target."""

    def __init__(self, world: World) -> None:
        self.world = world

    def update(self, delta_time: float) -> None:
        for entity_id, movement in list(self.world.all_components(Movement).items()):
            if movement is None or not movement.is_moving:
                continue
            position = self.world.get_component(entity_id, PositionComponent)
            if position is None:
                continue
            self._step(position, movement, delta_time)

    @staticmethod
    def _step(position: PositionComponent, movement: Movement, delta_time: float) -> None:
        dx = movement.target_x - position.x
        dy = movement.target_y - position.y
        distance = math.hypot(dx, dy)

        if distance < _ARRIVAL_DISTANCE:
            position.x = movement.target_x
            position.y = movement.target_y
            movement.is_moving = False
            movement.phase = MovementPhase.ARRIVING
            movement.phase_timer = 0.0
            return

        move_distance = min(movement.speed * delta_time, distance)
        position.x += dx / distance * move_distance
        position.y += dy / distance * move_distance