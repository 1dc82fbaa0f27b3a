"""Coordinated, interval-based updates of several systems."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

TickCallback = Callable[[float], None]


@dataclass
class SystemRegistration:
    callback: TickCallback
    tick_interval: float
    priority: int = 0
    last_tick_time: float = 0.0


@dataclass
class TickManager:
    """Calls registered systems at their own intervals, lowest priority first."""

    systems: list[SystemRegistration] = field(default_factory=list)
    total_time: float = 0.0

    def register_system(self, callback: TickCallback, tick_interval: float, priority: int = 0) -> None:
        """Register ``callback`` to run every ``tick_interval`` seconds."""
        self.systems.append(SystemRegistration(callback, tick_interval, priority))
        self.systems.sort(key=lambda s: s.priority)

    def update(self, delta_time: float) -> None:
        """Advance time and tick every system whose interval has elapsed."""
        self.total_time += delta_time
        for system in self.systems:
            elapsed = self.total_time - system.last_tick_time
            if elapsed >= system.tick_interval:
                system.callback(elapsed)
                system.last_tick_time = self.total_time

    def force_tick(self, delta_time: float) -> None:
        """Tick every system now with the given delta."""
        for system in self.systems:
            system.callback(delta_time)
            system.last_tick_time = self.total_time

    def reset_timers(self) -> None:
        """Reset total time and every system's last tick."""
        self.total_time = 0.0
        for system in self.systems:
            system.last_tick_time = 0.0