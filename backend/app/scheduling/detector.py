from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum

from app.scheduling.conflict_index import ConflictIndex
from app.scheduling.entry import TimetableEntry

ROOM_CONFLICT_MESSAGE = "Room is already booked at this time"
FACULTY_CONFLICT_MESSAGE = "Faculty is already assigned at this time"


class ConflictKind(str, Enum):
    room = "room"
    faculty = "faculty"


@dataclass(frozen=True)
class ConflictFinding:
    entry: TimetableEntry
    kind: ConflictKind
    message: str

    @property
    def entry_id(self) -> str | None:
        return self.entry.id

    def as_dict(self) -> dict:
        entry = self.entry
        return {
            "entryId": entry.id,
            "kind": self.kind.value,
            "message": self.message,
            "entry": {
                "id": entry.id,
                "sectionId": entry.section_id,
                "dayOfWeek": entry.day_of_week,
                "startTime": entry.interval.start_time,
                "endTime": entry.interval.end_time,
                "roomId": entry.room_id,
                "facultyId": entry.faculty_id,
                "semester": entry.semester,
            },
        }


@dataclass
class ConflictReport:
    findings: list[ConflictFinding] = field(default_factory=list)

    def __iter__(self) -> Iterator[ConflictFinding]:
        return iter(self.findings)

    def __len__(self) -> int:
        return len(self.findings)

    @property
    def is_clean(self) -> bool:
        return not self.findings

    def of_kind(self, kind: ConflictKind) -> list[ConflictFinding]:
        return [finding for finding in self.findings if finding.kind == kind]

    def conflicting_ids(self) -> list[str]:
        seen: dict[str, None] = {}
        for finding in self.findings:
            seen.setdefault(finding.entry.id, None)
        return list(seen)

    def summary(self) -> str:
        if not self.findings:
            return "No timetable conflicts"
        return f"Timetable conflicts detected: {', '.join(finding.message for finding in self.findings)}"


class ConflictDetector:
    """Turns a proposed entry into a complete ``ConflictReport``.

    Only sessions sharing the proposal's semester and day are considered,
    and of those only ones that overlap in time and share a room or faculty.
    The scan never stops at the first hit.
    """

    def __init__(self, index: ConflictIndex) -> None:
        self._index = index

    def detect(self, proposed: TimetableEntry, *, exclude_id: str | None = None) -> ConflictReport:
        report = ConflictReport()
        if not proposed.has_resources:
            return report

        overlapping = self._index.query(
            proposed.key,
            proposed.interval,
            room_id=proposed.room_id,
            faculty_id=proposed.faculty_id,
        )
        for existing in overlapping:
            if exclude_id is not None and existing.id == exclude_id:
                continue
            if proposed.room_id is not None and existing.room_id == proposed.room_id:
                report.findings.append(ConflictFinding(existing, ConflictKind.room, ROOM_CONFLICT_MESSAGE))
            if proposed.faculty_id is not None and existing.faculty_id == proposed.faculty_id:
                report.findings.append(ConflictFinding(existing, ConflictKind.faculty, FACULTY_CONFLICT_MESSAGE))
        return report
