import itertools

import pytest

from app.scheduling.entry import ScheduleKey
from app.scheduling.interval import TimeInterval, format_minutes, parse_time_to_minutes


def test_parse_time_to_minutes():
    assert parse_time_to_minutes("00:00") == 0
    assert parse_time_to_minutes("09:30") == 570
    assert parse_time_to_minutes("23:59") == 1439
    assert parse_time_to_minutes("24:00") == 1440


@pytest.mark.parametrize(
    "value", ["9:00", "24:01", "12:60", "ab:cd", "", "09:00:00", "09:00\n", " 09:00", None, 900]
)
def test_parse_time_rejects_malformed_values(value):
    with pytest.raises(ValueError, match="HH:MM"):
        parse_time_to_minutes(value)


def test_format_minutes_round_trips_display_values():
    assert format_minutes(0) == "00:00"
    assert format_minutes(630) == "10:30"
    assert format_minutes(1440) == "24:00"


def test_interval_rejects_empty_or_reversed_range():
    with pytest.raises(ValueError, match="End time must be after start time"):
        TimeInterval(600, 600)
    with pytest.raises(ValueError, match="End time must be after start time"):
        TimeInterval.parse("11:00", "10:00")


@pytest.mark.parametrize("start,end", [(-1, 60), (60, 1441), (1441, 1500)])
def test_interval_rejects_bounds_outside_the_day(start, end):
    with pytest.raises(ValueError, match="single day"):
        TimeInterval(start, end)


def test_interval_accessors():
    interval = TimeInterval.parse("09:00", "10:30")
    assert interval.duration == 90
    assert interval.start_time == "09:00"
    assert interval.end_time == "10:30"
    assert str(interval) == "09:00-10:30"


def test_touching_intervals_do_not_overlap():
    morning = TimeInterval.parse("09:00", "10:00")
    next_slot = TimeInterval.parse("10:00", "11:00")
    assert not morning.overlaps(next_slot)
    assert not next_slot.overlaps(morning)


def test_nested_and_partial_intervals_overlap():
    outer = TimeInterval.parse("09:00", "12:00")
    assert outer.overlaps(TimeInterval.parse("10:00", "11:00"))
    assert outer.overlaps(TimeInterval.parse("11:30", "13:00"))
    assert outer.overlaps(TimeInterval.parse("08:00", "09:01"))
    assert outer.overlaps(outer)


def test_overlap_is_symmetric():
    bounds = range(0, 8 * 30 + 1, 30)
    intervals = [TimeInterval(start, end) for start, end in itertools.combinations(bounds, 2)]
    for first, second in itertools.product(intervals, repeat=2):
        assert first.overlaps(second) == second.overlaps(first)
        expected = max(first.start, second.start) < min(first.end, second.end)
        assert first.overlaps(second) == expected


def test_schedule_key_orders_and_compares_by_value():
    assert ScheduleKey("2025-S1", 1) == ScheduleKey("2025-S1", 1)
    assert ScheduleKey("2025-S1", 1) != ScheduleKey("2025-S2", 1)
    assert sorted([ScheduleKey("B", 2), ScheduleKey("A", 5), ScheduleKey("A", 1)]) == [
        ScheduleKey("A", 1),
        ScheduleKey("A", 5),
        ScheduleKey("B", 2),
    ]
