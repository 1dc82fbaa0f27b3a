"""Simulation clock counting days, hours and minutes."""

from __future__ import annotations

from townsim.timeofday import TimeOfDay


class Clock:
    """Advances simulated time from real elapsed time.

    With the default scale one real second is sixty simulated seconds.
    """

    def __init__(self, time_scale: float = 60.0) -> None:
        self.total_seconds = 0.0
        self.hour = 8
        self.minute = 0
        self.day = 1
        self.time_of_day = TimeOfDay()
        self.time_scale = time_scale
        self.paused = False
        self.time_of_day.update_from_hour(self.hour)

    def update(self, delta_time: float) -> None:
        """Advance the clock by ``delta_time`` real seconds."""
        if self.paused:
            return
        self.total_seconds += delta_time * self.time_scale
        self._update_components()

    def _update_components(self) -> None:
        total_minutes = int(self.total_seconds / 60.0)
        total_hours = total_minutes // 60
        self.minute = total_minutes % 60
        self.hour = total_hours % 24
        self.day = 1 + total_hours // 24
        self.time_of_day.update_from_hour(self.hour)

    def time_string(self) -> str:
        """Format the time as ``Day N - HH:MM``."""
        return f"Day {self.day} - {self.hour:02d}:{self.minute:02d}"

    def pause(self) -> None:
        self.paused = True

    def resume(self) -> None:
        self.paused = False