from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from app.scheduling.conflict_index import IntervalConflictIndex
from app.scheduling.detector import ConflictDetector, ConflictKind
from app.scheduling.entry import TimetableEntry


@dataclass(frozen=True)
class ScheduleClash:
    kind: ConflictKind
    first: TimetableEntry
    second: TimetableEntry
    message: str


def find_schedule_clashes(entries: Iterable[TimetableEntry]) -> list[ScheduleClash]:
    """List every clashing pair in an already persisted schedule.

    Rows can reach the store without going through the lifecycle controller
    (imports, manual fixes), so this re-checks each entry against all the
    others. A pair is reported once per resource kind.
    """
    index = IntervalConflictIndex(entries)
    detector = ConflictDetector(index)
    clashes: list[ScheduleClash] = []
    seen: set[tuple[str, str, ConflictKind]] = set()

    ordered = sorted(
        index.entries(),
        key=lambda item: (item.semester, item.day_of_week, item.interval.start, item.id),
    )
    for entry in ordered:
        for finding in detector.detect(entry, exclude_id=entry.id):
            first, second = sorted((entry, finding.entry), key=lambda item: item.id)
            marker = (first.id, second.id, finding.kind)
            if marker in seen:
                continue
            seen.add(marker)
            clashes.append(ScheduleClash(finding.kind, first, second, finding.message))
    return clashes
