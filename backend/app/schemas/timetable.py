from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from app.models.timetable import Timetable
from app.scheduling.audit import ScheduleClash
from app.scheduling.detector import ConflictFinding, ConflictReport
from app.scheduling.entry import TimetableDraft, TimetableEntry
from app.scheduling.interval import TIME_PATTERN, format_minutes
from app.schemas.common import Pagination


def _validate_time(value: str | None) -> str | None:
    if value is not None and not TIME_PATTERN.fullmatch(value):
        raise ValueError("Time must be in HH:MM 24-hour format")
    return value


class TimetableCreate(BaseModel):
    section_id: str = Field(alias="sectionId", min_length=1, max_length=36)
    day_of_week: int = Field(alias="dayOfWeek", ge=1, le=7)
    start_time: str = Field(alias="startTime")
    end_time: str = Field(alias="endTime")
    room_id: str | None = Field(default=None, alias="roomId", max_length=36)
    faculty_id: str | None = Field(default=None, alias="facultyId", max_length=36)
    semester: str = Field(min_length=1, max_length=50)

    model_config = {"populate_by_name": True}

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_time_format(cls, value: str) -> str:
        return _validate_time(value)

    def to_draft(self) -> TimetableDraft:
        return TimetableDraft(**self.model_dump())


class TimetableUpdate(BaseModel):
    section_id: str | None = Field(default=None, alias="sectionId", min_length=1, max_length=36)
    day_of_week: int | None = Field(default=None, alias="dayOfWeek", ge=1, le=7)
    start_time: str | None = Field(default=None, alias="startTime")
    end_time: str | None = Field(default=None, alias="endTime")
    room_id: str | None = Field(default=None, alias="roomId", max_length=36)
    faculty_id: str | None = Field(default=None, alias="facultyId", max_length=36)
    semester: str | None = Field(default=None, min_length=1, max_length=50)

    model_config = {"populate_by_name": True}

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_time_format(cls, value: str | None) -> str | None:
        return _validate_time(value)

    def changes(self) -> dict:
        # Only fields the client sent; an explicit null clears roomId/facultyId.
        return self.model_dump(exclude_unset=True)


class TimetableOut(BaseModel):
    id: str
    section_id: str = Field(alias="sectionId")
    day_of_week: int = Field(alias="dayOfWeek")
    start_time: str = Field(alias="startTime")
    end_time: str = Field(alias="endTime")
    room_id: str | None = Field(default=None, alias="roomId")
    faculty_id: str | None = Field(default=None, alias="facultyId")
    semester: str
    created_at: datetime | None = Field(default=None, alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_row(cls, row: Timetable) -> "TimetableOut":
        return cls(
            id=row.id,
            section_id=row.section_id,
            day_of_week=row.day_of_week,
            start_time=format_minutes(row.start_minute),
            end_time=format_minutes(row.end_minute),
            room_id=row.room_id,
            faculty_id=row.faculty_id,
            semester=row.semester,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    @classmethod
    def from_entry(cls, entry: TimetableEntry) -> "TimetableOut":
        return cls(
            id=entry.id,
            section_id=entry.section_id,
            day_of_week=entry.day_of_week,
            start_time=entry.interval.start_time,
            end_time=entry.interval.end_time,
            room_id=entry.room_id,
            faculty_id=entry.faculty_id,
            semester=entry.semester,
        )


class TimetableList(BaseModel):
    timetables: list[TimetableOut]
    pagination: Pagination


class ConflictFindingOut(BaseModel):
    entry_id: str = Field(alias="entryId")
    kind: Literal["room", "faculty"]
    message: str
    entry: TimetableOut

    model_config = {"populate_by_name": True}

    @classmethod
    def from_finding(cls, finding: ConflictFinding) -> "ConflictFindingOut":
        return cls(
            entry_id=finding.entry.id,
            kind=finding.kind.value,
            message=finding.message,
            entry=TimetableOut.from_entry(finding.entry),
        )


class ConflictReportOut(BaseModel):
    schedulable: bool
    conflicts: list[ConflictFindingOut]

    @classmethod
    def from_report(cls, report: ConflictReport) -> "ConflictReportOut":
        return cls(
            schedulable=report.is_clean,
            conflicts=[ConflictFindingOut.from_finding(finding) for finding in report],
        )


class ScheduleClashOut(BaseModel):
    kind: Literal["room", "faculty"]
    message: str
    entries: list[TimetableOut]

    @classmethod
    def from_clash(cls, clash: ScheduleClash) -> "ScheduleClashOut":
        return cls(
            kind=clash.kind.value,
            message=clash.message,
            entries=[TimetableOut.from_entry(clash.first), TimetableOut.from_entry(clash.second)],
        )


class ScheduleAuditOut(BaseModel):
    semester: str
    day_of_week: int | None = Field(default=None, alias="dayOfWeek")
    entries_checked: int = Field(alias="entriesChecked")
    clashes: list[ScheduleClashOut]

    model_config = {"populate_by_name": True}
