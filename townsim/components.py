"""Plain data components attached to entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class AIStateName(Enum):
    IDLE = auto()  # waiting for a new goal
    MOVING_TO_ZONE = auto()  # travelling to a destination
    PERFORMING_ACTIVITY = auto()  # doing something at a location


@dataclass
class AIState:
    current_state: AIStateName = AIStateName.IDLE
    target_zone: str = ""
    intended_activity: str = ""
    time_in_current_state: float = 0.0
    activity_timer: float = 0.0


class MovementPhase(Enum):
    """Phases that coordinate AI planning with movement."""

    IDLE = auto()
    PLANNING = auto()
    MOVING = auto()
    ARRIVING = auto()


@dataclass
class Movement:
    """A movement target, speed and phase."""

    speed: float
    target_x: float = 0.0
    target_y: float = 0.0
    is_moving: bool = False
    phase: MovementPhase = MovementPhase.IDLE
    phase_timer: float = 0.0
    planning_duration: float = 0.5
    arriving_duration: float = 0.2

    def set_target(self, x: float, y: float) -> None:
        """Set a destination and enter the moving phase."""
        self.target_x = x
        self.target_y = y
        self.is_moving = True
        self.phase = MovementPhase.MOVING
        self.phase_timer = 0.0

    def start_planning(self) -> None:
        """Enter the planning phase and stop moving."""
        self.phase = MovementPhase.PLANNING
        self.phase_timer = 0.0
        self.is_moving = False

    def can_accept_new_target(self) -> bool:
        return self.phase in (MovementPhase.IDLE, MovementPhase.ARRIVING)


@dataclass
class DescriptionComponent:
    name: str
    text: str


@dataclass
class InfoBoxComponent:
    """Text shown above an entity."""

    text: str = ""


@dataclass
class PositionComponent:
    x: float = 0.0
    y: float = 0.0