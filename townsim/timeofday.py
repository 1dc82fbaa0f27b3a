"""Periods of the day and the activities that suit them."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class DayPeriod(Enum):
    """Named part of the day."""

    DAWN = "Dawn"  # 5:00 - 8:00
    MORNING = "Morning"  # 8:00 - 12:00
    AFTERNOON = "Afternoon"  # 12:00 - 17:00
    EVENING = "Evening"  # 17:00 - 20:00
    NIGHT = "Night"  # 20:00 - 5:00


def period_for_hour(hour: int) -> DayPeriod:
    """Return the period of the day that contains ``hour``."""
    if 5 <= hour < 8:
        return DayPeriod.DAWN
    if 8 <= hour < 12:
        return DayPeriod.MORNING
    if 12 <= hour < 17:
        return DayPeriod.AFTERNOON
    if 17 <= hour < 20:
        return DayPeriod.EVENING
    return DayPeriod.NIGHT


_PERIOD_ACTIVITIES = {
    DayPeriod.DAWN: "Morning routine",
    DayPeriod.MORNING: "Socializing",
    DayPeriod.AFTERNOON: "Activities",
    DayPeriod.EVENING: "Relaxing",
    DayPeriod.NIGHT: "Resting",
}


@dataclass
class TimeOfDay:
    """The current period of the day and schedule rules."""

    current_period: DayPeriod = DayPeriod.MORNING

    def update_from_hour(self, hour: int) -> None:
        """Set the current period from an hour of the day."""
        self.current_period = period_for_hour(hour)

    def period_name(self) -> str:
        """Human-readable name of the current period."""
        return self.current_period.value

    def is_day(self) -> bool:
        return self.current_period is not DayPeriod.NIGHT

    def is_night(self) -> bool:
        return self.current_period is DayPeriod.NIGHT

    def is_work_hours(self, hour: int) -> bool:
        """Work runs from 9:00 to 17:00."""
        return 9 <= hour < 17

    def is_sleep_time(self, hour: int) -> bool:
        """Sleep runs from 22:00 to 6:00."""
        return hour >= 22 or hour < 6

    def is_meal_time(self, hour: int) -> bool:
        """Breakfast 7-9, lunch 12-13, dinner 18-20."""
        return 7 <= hour < 9 or 12 <= hour < 13 or 18 <= hour < 20

    def suggested_activity(self, hour: int) -> str:
        """Suggest an activity for the given hour."""
        if self.is_sleep_time(hour):
            return "Sleeping"
        if self.is_work_hours(hour):
            return "Working"
        if self.is_meal_time(hour):
            return "Eating"
        return _PERIOD_ACTIVITIES[self.current_period]

    def is_good_time_for_work(self, hour: int) -> bool:
        return self.is_work_hours(hour)

    def is_good_time_for_sleep(self, hour: int) -> bool:
        return self.is_sleep_time(hour)

    def is_good_time_for_leisure(self, hour: int) -> bool:
        return self.current_period in (DayPeriod.EVENING, DayPeriod.AFTERNOON) or (
            not self.is_work_hours(hour) and not self.is_sleep_time(hour)
        )