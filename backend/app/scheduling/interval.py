from __future__ import annotations

import re
from dataclasses import dataclass

MINUTES_PER_DAY = 24 * 60

# "24:00" is allowed so a session can run to midnight.
TIME_PATTERN = re.compile(r"(?:([01]\d|2[0-3]):([0-5]\d)|24:00)")


def parse_time_to_minutes(value: str) -> int:
    if not isinstance(value, str) or not TIME_PATTERN.fullmatch(value):
        raise ValueError("Time must be in HH:MM 24-hour format")
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


def format_minutes(value: int) -> str:
    hours, minutes = divmod(value, 60)
    return f"{hours:02d}:{minutes:02d}"


@dataclass(frozen=True, order=True)
class TimeInterval:
    """Half-open range ``[start, end)`` of minutes within one day.

    Sessions that only touch at a boundary (one ends at 10:00, the next
    starts at 10:00) do not overlap.
    """

    start: int
    end: int

    def __post_init__(self) -> None:
        if not (0 <= self.start <= MINUTES_PER_DAY and 0 <= self.end <= MINUTES_PER_DAY):
            raise ValueError("Times must fall within a single day (00:00 to 24:00)")
        if self.start >= self.end:
            raise ValueError("End time must be after start time")

    @classmethod
    def parse(cls, start_time: str, end_time: str) -> TimeInterval:
        return cls(parse_time_to_minutes(start_time), parse_time_to_minutes(end_time))

    @property
    def duration(self) -> int:
        return self.end - self.start

    @property
    def start_time(self) -> str:
        return format_minutes(self.start)

    @property
    def end_time(self) -> str:
        return format_minutes(self.end)

    def overlaps(self, other: TimeInterval) -> bool:
        return self.start < other.end and other.start < self.end

    def __str__(self) -> str:
        return f"{self.start_time}-{self.end_time}"
