from __future__ import annotations

import zlib
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from sqlalchemy import func, or_, select, text
from sqlalchemy.orm import Session

from app.models.timetable import Timetable
from app.scheduling.entry import ScheduleKey, TimetableEntry
from app.scheduling.interval import TimeInterval


def to_entry(row: Timetable) -> TimetableEntry:
    return TimetableEntry(
        id=row.id,
        section_id=row.section_id,
        day_of_week=row.day_of_week,
        interval=TimeInterval(row.start_minute, row.end_minute),
        semester=row.semester,
        room_id=row.room_id,
        faculty_id=row.faculty_id,
    )


def _apply_entry(row: Timetable, entry: TimetableEntry) -> None:
    row.section_id = entry.section_id
    row.day_of_week = entry.day_of_week
    row.start_minute = entry.interval.start
    row.end_minute = entry.interval.end
    row.semester = entry.semester
    row.room_id = entry.room_id
    row.faculty_id = entry.faculty_id


def advisory_lock_id(key: ScheduleKey) -> int:
    return zlib.crc32(f"timetable|{key.semester}|{key.day_of_week}".encode("utf-8"))


@dataclass(frozen=True)
class TimetableFilters:
    section_id: str | None = None
    faculty_id: str | None = None
    semester: str | None = None
    day_of_week: int | None = None
    room_id: str | None = None


class SqlConflictIndex:
    """``ConflictIndex`` answered by one query on the (semester, day) index."""

    def __init__(self, db: Session) -> None:
        self._db = db

    def query(
        self,
        key: ScheduleKey,
        interval: TimeInterval,
        *,
        room_id: str | None = None,
        faculty_id: str | None = None,
    ) -> list[TimetableEntry]:
        stmt = select(Timetable).where(
            Timetable.semester == key.semester,
            Timetable.day_of_week == key.day_of_week,
            Timetable.start_minute < interval.end,
            Timetable.end_minute > interval.start,
        )
        resource_filters = []
        if room_id is not None:
            resource_filters.append(Timetable.room_id == room_id)
        if faculty_id is not None:
            resource_filters.append(Timetable.faculty_id == faculty_id)
        if resource_filters:
            stmt = stmt.where(or_(*resource_filters))
        return [to_entry(row) for row in self._db.execute(stmt).scalars()]


class SqlTimetableStore:
    def __init__(self, db: Session) -> None:
        self._db = db

    def get_row(self, entry_id: str) -> Timetable | None:
        return self._db.get(Timetable, entry_id, populate_existing=True)

    def get(self, entry_id: str) -> TimetableEntry | None:
        row = self.get_row(entry_id)
        return to_entry(row) if row is not None else None

    def insert(self, entry: TimetableEntry) -> TimetableEntry:
        row = Timetable()
        _apply_entry(row, entry)
        self._db.add(row)
        self._db.flush()
        return to_entry(row)

    def save(self, entry: TimetableEntry) -> TimetableEntry:
        row = self._db.get(Timetable, entry.id)
        _apply_entry(row, entry)
        self._db.flush()
        return to_entry(row)

    def remove(self, entry_id: str) -> bool:
        row = self._db.get(Timetable, entry_id)
        if row is None:
            return False
        self._db.delete(row)
        self._db.flush()
        return True

    def conflict_index(self) -> SqlConflictIndex:
        return SqlConflictIndex(self._db)

    @contextmanager
    def transaction(self, keys: Iterable[ScheduleKey]) -> Iterator[None]:
        try:
            if self._db.get_bind().dialect.name == "postgresql":
                for key in sorted(set(keys)):
                    self._db.execute(
                        text("SELECT pg_advisory_xact_lock(:lock_id)"),
                        {"lock_id": advisory_lock_id(key)},
                    )
            yield
            self._db.commit()
        except Exception:
            self._db.rollback()
            raise

    def list_rows(self, filters: TimetableFilters, *, limit: int, offset: int) -> tuple[list[Timetable], int]:
        conditions = []
        if filters.section_id:
            conditions.append(Timetable.section_id == filters.section_id)
        if filters.faculty_id:
            conditions.append(Timetable.faculty_id == filters.faculty_id)
        if filters.semester:
            conditions.append(Timetable.semester == filters.semester)
        if filters.day_of_week is not None:
            conditions.append(Timetable.day_of_week == filters.day_of_week)
        if filters.room_id:
            conditions.append(Timetable.room_id == filters.room_id)

        total = self._db.execute(select(func.count()).select_from(Timetable).where(*conditions)).scalar_one()
        rows = self._db.execute(
            select(Timetable)
            .where(*conditions)
            .order_by(Timetable.day_of_week.asc(), Timetable.start_minute.asc(), Timetable.id.asc())
            .limit(limit)
            .offset(offset)
        ).scalars()
        return list(rows), total

    def entries_for(self, semester: str, day_of_week: int | None = None) -> list[TimetableEntry]:
        stmt = select(Timetable).where(Timetable.semester == semester)
        if day_of_week is not None:
            stmt = stmt.where(Timetable.day_of_week == day_of_week)
        return [to_entry(row) for row in self._db.execute(stmt).scalars()]
