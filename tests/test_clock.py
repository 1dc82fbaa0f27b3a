from townsim.clock import Clock
from townsim.timeofday import DayPeriod


def test_initial_state():
    clock = Clock()
    assert clock.time_string() == "Day 1 - 08:00"
    assert clock.time_of_day.current_period is DayPeriod.MORNING
    assert clock.total_seconds == 0.0
    assert clock.paused is False


def test_update_scales_elapsed_time():
    clock = Clock(time_scale=60.0)
    clock.update(2.0)
    assert clock.total_seconds == 2.0 * 60.0


def test_hours_and_minutes_from_total():
    hours, minutes = 9, 5
    clock = Clock(time_scale=1.0)
    clock.update(hours * 3600 + minutes * 60)
    assert clock.hour == hours
    assert clock.minute == minutes
    assert clock.time_string() == "Day 1 - 09:05"


def test_day_advances_after_24_hours():
    clock = Clock(time_scale=1.0)
    clock.update(24 * 3600)
    start_day = clock.day
    assert clock.hour == 0
    clock.update(24 * 3600 + 3 * 3600)
    assert clock.day == start_day + 1
    assert clock.hour == 3


def test_time_of_day_follows_hour():
    clock = Clock(time_scale=1.0)
    clock.update(20 * 3600)
    assert clock.time_of_day.current_period is DayPeriod.NIGHT
    assert clock.time_of_day.is_night()


def test_pause_and_resume():
    clock = Clock(time_scale=1.0)
    clock.pause()
    assert clock.paused is True
    clock.update(5000.0)
    assert clock.total_seconds == 0.0
    clock.resume()
    assert clock.paused is False
    clock.update(5000.0)
    assert clock.total_seconds == 5000.0


def test_time_scale_can_change():
    clock = Clock(time_scale=1.0)
    clock.time_scale = 10.0
    clock.update(6.0)
    assert clock.total_seconds == 60.0
    assert clock.minute == 1