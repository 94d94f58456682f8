from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from typing import Any, NamedTuple

from app.core.exceptions import ValidationError
from app.scheduling.interval import TimeInterval

REQUIRED_FIELDS = ("section_id", "day_of_week", "start_time", "end_time", "semester")

FIELD_LABELS = {
    "section_id": "sectionId",
    "day_of_week": "dayOfWeek",
    "start_time": "startTime",
    "end_time": "endTime",
    "room_id": "roomId",
    "faculty_id": "facultyId",
    "semester": "semester",
}


class ScheduleKey(NamedTuple):
    """Partition inside which sessions can conflict at all."""

    semester: str
    day_of_week: int


@dataclass(frozen=True)
class TimetableEntry:
    """A validated class session; ``id`` is None until the store assigns one."""

    section_id: str
    day_of_week: int
    interval: TimeInterval
    semester: str
    room_id: str | None = None
    faculty_id: str | None = None
    id: str | None = None

    @property
    def key(self) -> ScheduleKey:
        return ScheduleKey(self.semester, self.day_of_week)

    @property
    def has_resources(self) -> bool:
        return self.room_id is not None or self.faculty_id is not None

    def same_placement(self, other: TimetableEntry) -> bool:
        return (
            self.key == other.key
            and self.interval == other.interval
            and self.room_id == other.room_id
            and self.faculty_id == other.faculty_id
        )

    def to_draft(self) -> TimetableDraft:
        return TimetableDraft(
            section_id=self.section_id,
            day_of_week=self.day_of_week,
            start_time=self.interval.start_time,
            end_time=self.interval.end_time,
            room_id=self.room_id,
            faculty_id=self.faculty_id,
            semester=self.semester,
        )


@dataclass(frozen=True)
class TimetableDraft:
    """Unvalidated field values for a proposed session."""

    section_id: str | None = None
    day_of_week: int | None = None
    start_time: str | None = None
    end_time: str | None = None
    room_id: str | None = None
    faculty_id: str | None = None
    semester: str | None = None

    def merged(self, changes: Mapping[str, Any]) -> TimetableDraft:
        known = {item.name for item in fields(self)}
        unknown = sorted(set(changes) - known)
        if unknown:
            raise ValidationError(f"Unknown timetable field(s): {', '.join(unknown)}")
        return replace(self, **changes)

    def validate(self, *, entry_id: str | None = None) -> TimetableEntry:
        missing = [name for name in REQUIRED_FIELDS if _is_blank(getattr(self, name))]
        if missing:
            raise ValidationError(
                "Section ID, day of week, start time, end time, and semester are required",
                details={"missing": [FIELD_LABELS[name] for name in missing]},
            )

        for name in ("section_id", "semester"):
            if not isinstance(getattr(self, name), str):
                raise ValidationError(f"{FIELD_LABELS[name]} must be a string")

        day = self.day_of_week
        if isinstance(day, bool) or not isinstance(day, int) or not 1 <= day <= 7:
            raise ValidationError(
                "Day of week must be between 1 (Monday) and 7 (Sunday)",
                details={"dayOfWeek": day},
            )

        try:
            interval = TimeInterval.parse(self.start_time, self.end_time)
        except ValueError as exc:
            raise ValidationError(
                str(exc),
                details={"startTime": self.start_time, "endTime": self.end_time},
            ) from exc

        return TimetableEntry(
            id=entry_id,
            section_id=self.section_id.strip(),
            day_of_week=day,
            interval=interval,
            semester=self.semester.strip(),
            room_id=_optional_ref(self.room_id),
            faculty_id=_optional_ref(self.faculty_id),
        )


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _optional_ref(value: str | None) -> str | None:
    if value is None:
        return None
    value = str(value).strip()
    return value or None
