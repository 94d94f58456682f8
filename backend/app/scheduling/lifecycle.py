from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from contextlib import AbstractContextManager
from typing import Any, Protocol

from app.core.exceptions import ConflictError, ResourceNotFoundError
from app.scheduling.conflict_index import ConflictIndex
from app.scheduling.detector import ConflictDetector, ConflictReport
from app.scheduling.entry import ScheduleKey, TimetableDraft, TimetableEntry
from app.scheduling.locks import ScheduleLockRegistry, get_schedule_locks

logger = logging.getLogger(__name__)


class TimetableStore(Protocol):
    """Persistence collaborator for timetable entries."""

    def get(self, entry_id: str) -> TimetableEntry | None: ...

    def insert(self, entry: TimetableEntry) -> TimetableEntry: ...

    def save(self, entry: TimetableEntry) -> TimetableEntry: ...

    def remove(self, entry_id: str) -> bool: ...

    def conflict_index(self) -> ConflictIndex: ...

    def transaction(self, keys: Iterable[ScheduleKey]) -> AbstractContextManager[None]:
        """Commit on clean exit, roll back on error, serialise writers on ``keys``."""
        ...


class ScheduleLifecycleController:
    """Create, update and delete timetable entries without double-booking.

    A proposal is validated, checked against the schedule and written inside
    one critical section per schedule key. A rejected proposal never reaches
    the store.
    """

    def __init__(self, store: TimetableStore, locks: ScheduleLockRegistry | None = None) -> None:
        self._store = store
        self._locks = locks or get_schedule_locks()

    def _detector(self) -> ConflictDetector:
        return ConflictDetector(self._store.conflict_index())

    def get(self, entry_id: str) -> TimetableEntry:
        entry = self._store.get(entry_id)
        if entry is None:
            raise ResourceNotFoundError("Timetable", entry_id)
        return entry

    def _prepare_update(
        self, entry_id: str, changes: Mapping[str, Any]
    ) -> tuple[TimetableEntry, TimetableEntry]:
        current = self.get(entry_id)
        candidate = current.to_draft().merged(changes).validate(entry_id=entry_id)
        return current, candidate

    def check_create(self, draft: TimetableDraft) -> ConflictReport:
        proposed = draft.validate()
        return self._detector().detect(proposed)

    def check_update(self, entry_id: str, changes: Mapping[str, Any]) -> ConflictReport:
        current, candidate = self._prepare_update(entry_id, changes)
        if candidate.same_placement(current):
            return ConflictReport()
        return self._detector().detect(candidate, exclude_id=entry_id)

    def create(self, draft: TimetableDraft) -> TimetableEntry:
        proposed = draft.validate()
        keys = [proposed.key]
        with self._locks.hold(keys), self._store.transaction(keys):
            self._reject_conflicts(self._detector().detect(proposed), proposed)
            created = self._store.insert(proposed)
        logger.info(
            "Scheduled timetable entry %s (semester=%s day=%d %s room=%s faculty=%s)",
            created.id,
            created.semester,
            created.day_of_week,
            created.interval,
            created.room_id,
            created.faculty_id,
        )
        return created

    def update(self, entry_id: str, changes: Mapping[str, Any]) -> TimetableEntry:
        while True:
            current, candidate = self._prepare_update(entry_id, changes)
            keys = {current.key, candidate.key}
            with self._locks.hold(keys), self._store.transaction(keys):
                current, candidate = self._prepare_update(entry_id, changes)
                if not {current.key, candidate.key} <= keys:
                    # Moved by another writer since the first read; retry with fresh keys.
                    continue
                if not candidate.same_placement(current):
                    report = self._detector().detect(candidate, exclude_id=entry_id)
                    self._reject_conflicts(report, candidate)
                updated = self._store.save(candidate)
            logger.info("Updated timetable entry %s", entry_id)
            return updated

    def delete(self, entry_id: str) -> None:
        with self._store.transaction(()):
            if not self._store.remove(entry_id):
                raise ResourceNotFoundError("Timetable", entry_id)
        logger.info("Deleted timetable entry %s", entry_id)

    def _reject_conflicts(self, report: ConflictReport, proposed: TimetableEntry) -> None:
        if report.is_clean:
            return
        logger.info(
            "Rejected timetable proposal for section %s (semester=%s day=%d %s): %d conflict(s) with %s",
            proposed.section_id,
            proposed.semester,
            proposed.day_of_week,
            proposed.interval,
            len(report),
            ", ".join(report.conflicting_ids()),
        )
        raise ConflictError(report)
