"""Per-type component managers keyed by entity id."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod

from townsim.components import (
    AIState,
    DescriptionComponent,
    InfoBoxComponent,
    Movement,
    MovementPhase,
    PositionComponent,
)


class ComponentManager(ABC):
    """Owns every component of one type across all entities."""

    @abstractmethod
    def dump(self) -> None:
        """Print the managed components to standard output."""


class AIManager(ComponentManager):
    """AI state of every entity that has one."""

    def __init__(self) -> None:
        self.states: dict[int, AIState] = {}

    def create(self, uid: int) -> AIState:
        """Give the entity a fresh AI state, replacing any previous one."""
        state = AIState()
        self.states[uid] = state
        return state

    def get(self, uid: int) -> AIState | None:
        return self.states.get(uid)

    def dump(self) -> None:
        print("--- AIManager Dump ---")
        for uid, state in self.states.items():
            print(
                f"Entity UID: {uid} State: {state.current_state.name}"
                f" Target: {state.target_zone!r} Activity: {state.intended_activity!r}"
            )


class DescriptionManager(ComponentManager):
    """Names and descriptive texts of entities."""

    def __init__(self) -> None:
        self.descriptions: dict[int, DescriptionComponent] = {}

    def create(self, entity_uid: int, name: str, text: str) -> DescriptionComponent:
        description = DescriptionComponent(name, text)
        self.descriptions[entity_uid] = description
        return description

    def get(self, entity_uid: int) -> DescriptionComponent | None:
        return self.descriptions.get(entity_uid)

    def dump(self) -> None:
        print("--- Description Components ---")
        for uid, description in self.descriptions.items():
            print(f"Entity {uid}: {description.name} - {description.text}")


class InfoBoxManager(ComponentManager):
    """Text boxes shown above entities."""

    def __init__(self) -> None:
        self.info_boxes: dict[int, InfoBoxComponent] = {}

    def create(self, uid: int, initial_text: str = "") -> InfoBoxComponent:
        info_box = InfoBoxComponent(initial_text)
        self.info_boxes[uid] = info_box
        return info_box

    def get(self, uid: int) -> InfoBoxComponent | None:
        return self.info_boxes.get(uid)

    def dump(self) -> None:
        print("--- InfoBoxManager Dump ---")
        if not self.info_boxes:
            print("No info boxes to display.")
            return
        for uid, info_box in self.info_boxes.items():
            print(f'Entity UID: {uid} | Text: "{info_box.text}"')
        print("---------------------------")


class PositionManager(ComponentManager):
    """Pixel positions of entities."""

    def __init__(self) -> None:
        self.positions: dict[int, PositionComponent] = {}

    def create(self, entity_uid: int, x: float, y: float) -> PositionComponent:
        position = PositionComponent(x, y)
        self.positions[entity_uid] = position
        return position

    def get(self, entity_uid: int) -> PositionComponent | None:
        return self.positions.get(entity_uid)

    def dump(self) -> None:
        print("PositionManager Dump:")
        if not self.positions:
            print("No positions available.")
            return
        print(f"Total positions: {len(self.positions)}")
        print("Positions:")
        print("-------------------")
        print("Entity UID | Position (x, y)")
        print("-------------------")
        for uid, pos in self.positions.items():
            print(f"Entity UID: {uid} Position: ({pos.x}, {pos.y})")


class MovementManager(ComponentManager):
    """Movement targets and phases; moves positions towards targets."""

    def __init__(self) -> None:
        self.movements: dict[int, Movement] = {}

    def create(self, entity_uid: int, speed: float) -> Movement:
        movement = Movement(speed)
        self.movements[entity_uid] = movement
        return movement

    def get(self, entity_uid: int) -> Movement | None:
        return self.movements.get(entity_uid)

    def update(self, pos_manager: PositionManager, delta_time: float, time_scale: float = 1.0) -> None:
        """Advance phase timers and move entities in the moving phase."""
        for uid, movement in self.movements.items():
            movement.phase_timer += delta_time * time_scale
            if movement.phase is MovementPhase.PLANNING:
                if movement.phase_timer >= movement.planning_duration:
                    movement.phase = MovementPhase.IDLE
                    movement.phase_timer = 0.0
            elif movement.phase is MovementPhase.ARRIVING:
                if movement.phase_timer >= movement.arriving_duration:
                    movement.phase = MovementPhase.IDLE
                    movement.phase_timer = 0.0
            elif movement.phase is MovementPhase.MOVING:
                self._move(uid, movement, pos_manager, delta_time, time_scale)

    @staticmethod
    def _move(
        uid: int,
        movement: Movement,
        pos_manager: PositionManager,
        delta_time: float,
        time_scale: float,
    ) -> None:
        pos = pos_manager.get(uid)
        if pos is None:
            return
        dx = movement.target_x - pos.x
        dy = movement.target_y - pos.y
        distance = math.hypot(dx, dy)
        move_distance = movement.speed * delta_time * time_scale

        if distance <= move_distance:
            pos.x = movement.target_x
            pos.y = movement.target_y
            movement.is_moving = False
            movement.phase = MovementPhase.ARRIVING
            movement.phase_timer = 0.0
        else:
            pos.x += dx / distance * move_distance
            pos.y += dy / distance * move_distance

    def entities_in_phase(self, phase: MovementPhase) -> list[int]:
        """Ids of all entities currently in ``phase``."""
        return [uid for uid, movement in self.movements.items() if movement.phase is phase]

    def can_entity_move(self, entity_uid: int) -> bool:
        """Whether the entity can take a new target; True if it has no movement."""
        movement = self.get(entity_uid)
        return movement.can_accept_new_target() if movement is not None else True

    def dump(self) -> None:
        print("--- MovementManager Dump ---")
        for uid, movement in self.movements.items():
            print(
                f"Entity UID: {uid} Phase: {movement.phase.name}"
                f" Target: ({movement.target_x}, {movement.target_y}) Speed: {movement.speed}"
            )