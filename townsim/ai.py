"""Daily-routine AI that sends NPCs between zones."""

from __future__ import annotations

import logging
import random

from townsim.clock import Clock
from townsim.components import AIState, AIStateName, MovementPhase, PositionComponent
from townsim.grid import Grid
from townsim.homes import HomeManager
from townsim.managers import AIManager, DescriptionManager, InfoBoxManager, MovementManager, PositionManager
from townsim.pathfinder import Pathfinder, Point
from townsim.timeofday import DayPeriod

log = logging.getLogger(__name__)

_LEISURE_KEYWORDS = ("Cafe", "Forest", "Water", "Stadium")
# Activity timers count down by one frame at roughly 60 FPS per planning pass.
_FRAME_MS = 16.67


def _is_home(zone_name: str) -> bool:
    return "Home" in zone_name


class AISystem:
    """Chooses activities by time of day and drives NPC movement to zones."""

    def __init__(
        self,
        ai_manager: AIManager,
        pos_manager: PositionManager,
        move_manager: MovementManager,
        desc_manager: DescriptionManager,
        pathfinder: Pathfinder,
        grid: Grid,
        info_box_manager: InfoBoxManager,
        clock: Clock,
        home_manager: HomeManager | None,
        cell_size: int,
        *,
        rng: random.Random | None = None,
    ) -> None:
        self.ai_manager = ai_manager
        self.pos_manager = pos_manager
        self.move_manager = move_manager
        self.desc_manager = desc_manager
        self.pathfinder = pathfinder
        self.grid = grid
        self.info_box_manager = info_box_manager
        self.clock = clock
        self.home_manager = home_manager
        self.cell_size = cell_size
        self.ai_update_timer = 0.0
        self.ai_update_interval = 0.5
        self._rng = rng if rng is not None else random.Random()

    # -- helpers -----------------------------------------------------------

    def _name(self, uid: int) -> str:
        description = self.desc_manager.get(uid)
        return description.name if description is not None else "Unknown"

    def _set_info(self, uid: int, text: str) -> None:
        info_box = self.info_box_manager.get(uid)
        if info_box is not None:
            info_box.text = text

    def _cell(self, position: PositionComponent) -> Point:
        return Point(int(position.x / self.cell_size), int(position.y / self.cell_size))

    def _activity_duration(self) -> float:
        return 300.0 + self._rng.randrange(600)

    def _non_home_zones(self) -> list[str]:
        return [name for name in self.grid.zones if not _is_home(name)]

    def _sleeping_at_home(self, state: AIState) -> bool:
        return self.clock.time_of_day.is_sleep_time(self.clock.hour) and _is_home(state.target_zone)

    # -- update passes -----------------------------------------------------

    def update(self, delta_time: float) -> None:
        """Run the thinking, arrival and planning passes."""
        self.update_ai(delta_time)
        self.process_arriving_entities()
        self.process_planning_entities()

    def update_ai(self, delta_time: float) -> None:
        """Every half second, give idle NPCs a new plan."""
        self.ai_update_timer += delta_time
        if self.ai_update_timer < self.ai_update_interval:
            return
        self.ai_update_timer -= self.ai_update_interval

        for uid, state in list(self.ai_manager.states.items()):
            movement = self.move_manager.get(uid)
            if movement is None or self.pos_manager.get(uid) is None:
                continue
            if movement.phase is MovementPhase.IDLE:
                self.plan_next_action(uid)
            elif (
                movement.phase is MovementPhase.MOVING
                and state.current_state is AIStateName.MOVING_TO_ZONE
            ):
                self._set_info(uid, f"{self._name(uid)}\nMoving to {state.target_zone}")

    def process_arriving_entities(self) -> None:
        """Start activities for NPCs that reached their zone; keep others walking."""
        for uid, state in list(self.ai_manager.states.items()):
            movement = self.move_manager.get(uid)
            position = self.pos_manager.get(uid)
            if movement is None or position is None:
                continue
            if not (
                state.current_state is AIStateName.MOVING_TO_ZONE
                and movement.phase is MovementPhase.IDLE
                and not movement.is_moving
            ):
                continue
            zone = self.grid.zones.get(state.target_zone)
            if zone is None:
                continue
            cell = self._cell(position)
            if zone.contains(cell.x, cell.y):
                state.current_state = AIStateName.PERFORMING_ACTIVITY
                activity = state.intended_activity or "Idle"
                if self._sleeping_at_home(state):
                    activity = "Sleeping"
                self._set_info(uid, f"{self._name(uid)}\n{activity}")
                state.activity_timer = self._activity_duration()
                log.info("NPC %d arrived at %s and is now %s", uid, state.target_zone, activity)
            else:
                self.execute_movement_plan(uid)

    def process_planning_entities(self) -> None:
        """Count down activities and start movement once planning is over."""
        for uid, state in list(self.ai_manager.states.items()):
            movement = self.move_manager.get(uid)
            if movement is None or self.pos_manager.get(uid) is None:
                continue
            name = self._name(uid)

            if state.current_state is AIStateName.PERFORMING_ACTIVITY:
                state.activity_timer -= _FRAME_MS
                if self._sleeping_at_home(state):
                    self._set_info(uid, f"{name}\nSleeping")
                    continue
                if state.activity_timer <= 0 or self.should_replan_activity(uid):
                    self.plan_next_action(uid)

            if (
                state.current_state is AIStateName.MOVING_TO_ZONE
                and movement.phase is MovementPhase.PLANNING
                and movement.phase_timer >= movement.planning_duration
            ):
                self.execute_movement_plan(uid)
                activity = (
                    f"Moving to {state.intended_activity}" if state.intended_activity else "Moving"
                )
                self._set_info(uid, f"{name}\n{activity}")

    # -- decisions ---------------------------------------------------------

    def plan_next_action(self, entity_uid: int) -> None:
        """Pick an activity and target zone for the current hour."""
        state = self.ai_manager.get(entity_uid)
        movement = self.move_manager.get(entity_uid)
        if state is None or movement is None or self.pos_manager.get(entity_uid) is None:
            return

        time_of_day = self.clock.time_of_day
        hour = self.clock.hour
        target: str | None

        if time_of_day.is_sleep_time(hour):
            activity, target = "Sleeping", self.home_zone(entity_uid)
        elif time_of_day.is_work_hours(hour):
            activity, target = "Working", "Work"
        elif time_of_day.is_meal_time(hour):
            activity, target = "Eating", "Cafe"
        elif time_of_day.current_period is DayPeriod.EVENING:
            activity, target = "Relaxing", self.random_leisure_zone()
        else:
            activity = time_of_day.suggested_activity(hour)
            candidates = self._non_home_zones()
            target = self._rng.choice(candidates) if candidates else None

        state.intended_activity = activity

        if target and target in self.grid.zones:
            state.target_zone = target
            state.current_state = AIStateName.MOVING_TO_ZONE
            movement.start_planning()
        else:
            self._set_info(entity_uid, f"{self._name(entity_uid)}\n{activity}")

    def execute_movement_plan(self, entity_uid: int) -> None:
        """Step the NPC one cell along the path to its target zone."""
        state = self.ai_manager.get(entity_uid)
        movement = self.move_manager.get(entity_uid)
        position = self.pos_manager.get(entity_uid)
        if state is None or movement is None or position is None:
            return
        if state.current_state is not AIStateName.MOVING_TO_ZONE:
            return

        zone = self.grid.zones.get(state.target_zone)
        if zone is None:
            state.current_state = AIStateName.IDLE
            movement.phase = MovementPhase.IDLE
            return

        cell = self._cell(position)
        if zone.contains(cell.x, cell.y):
            state.current_state = AIStateName.PERFORMING_ACTIVITY
            movement.phase = MovementPhase.IDLE
            state.activity_timer = self._activity_duration()
            return

        path = self.pathfinder.find_path_to_zone(cell, state.target_zone)
        if len(path) > 1:
            next_step = path[1]
            half = self.cell_size / 2.0
            movement.set_target(next_step.x * self.cell_size + half, next_step.y * self.cell_size + half)
            movement.phase = MovementPhase.MOVING
            movement.phase_timer = 0.0
            movement.is_moving = True
            log.info(
                "NPC %d moving to (%d, %d) towards %s",
                entity_uid,
                next_step.x,
                next_step.y,
                state.target_zone,
            )
        else:
            log.info("No path found for NPC %d to %s", entity_uid, state.target_zone)
            state.current_state = AIStateName.IDLE
            movement.phase = MovementPhase.IDLE

    def home_zone(self, npc_id: int) -> str | None:
        """The NPC's assigned home, else any home zone, else any zone."""
        if self.home_manager is not None:
            assigned = self.home_manager.npc_home(npc_id)
            if assigned:
                return assigned
        home = next((name for name in self.grid.zones if _is_home(name)), None)
        if home is not None:
            return home
        return next(iter(self.grid.zones), None)

    def random_leisure_zone(self) -> str | None:
        """A random leisure zone, else a random non-home zone, else None."""
        leisure = [
            name
            for name in self.grid.zones
            if any(keyword in name for keyword in _LEISURE_KEYWORDS) and not _is_home(name)
        ]
        if leisure:
            return self._rng.choice(leisure)
        others = self._non_home_zones()
        return self._rng.choice(others) if others else None

    def should_replan_activity(self, entity_uid: int) -> bool:
        """Whether the hour calls for a different place than the current target."""
        state = self.ai_manager.get(entity_uid)
        if state is None:
            return False
        time_of_day = self.clock.time_of_day
        hour = self.clock.hour
        if time_of_day.is_sleep_time(hour) and not _is_home(state.target_zone):
            return True
        if time_of_day.is_work_hours(hour) and state.target_zone != "Work":
            return True
        if time_of_day.is_meal_time(hour) and state.target_zone != "Cafe":
            return True
        return False