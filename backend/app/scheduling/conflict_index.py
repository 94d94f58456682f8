from __future__ import annotations

from bisect import bisect_left, bisect_right
from collections.abc import Iterable
from threading import RLock
from typing import Protocol

from app.scheduling.entry import ScheduleKey, TimetableEntry
from app.scheduling.interval import TimeInterval


class ConflictIndex(Protocol):
    def query(
        self,
        key: ScheduleKey,
        interval: TimeInterval,
        *,
        room_id: str | None = None,
        faculty_id: str | None = None,
    ) -> list[TimetableEntry]:
        """Return every entry under ``key`` overlapping ``interval``.

        With ``room_id`` and/or ``faculty_id`` only entries using that room or
        that faculty are returned; an entry matching both appears once.
        """
        ...


class _SortedBucket:
    """Entries of one resource under one key, ordered by start minute.

    ``longest`` bounds how far back from the query start an overlapping entry
    can begin, so a query only inspects a slice of the bucket.
    """

    __slots__ = ("starts", "entries", "longest")

    def __init__(self) -> None:
        self.starts: list[int] = []
        self.entries: list[TimetableEntry] = []
        self.longest = 0

    def __len__(self) -> int:
        return len(self.entries)

    def insert(self, entry: TimetableEntry) -> None:
        position = bisect_right(self.starts, entry.interval.start)
        self.starts.insert(position, entry.interval.start)
        self.entries.insert(position, entry)
        self.longest = max(self.longest, entry.interval.duration)

    def remove(self, entry: TimetableEntry) -> None:
        low = bisect_left(self.starts, entry.interval.start)
        high = bisect_right(self.starts, entry.interval.start)
        for position in range(low, high):
            if self.entries[position].id == entry.id:
                del self.starts[position]
                del self.entries[position]
                break
        if entry.interval.duration == self.longest:
            self.longest = max((item.interval.duration for item in self.entries), default=0)

    def overlapping(self, interval: TimeInterval) -> list[TimetableEntry]:
        if not self.entries:
            return []
        low = bisect_left(self.starts, interval.start - self.longest + 1)
        high = bisect_left(self.starts, interval.end)
        return [entry for entry in self.entries[low:high] if entry.interval.end > interval.start]


_ALL = ("*", "")


class IntervalConflictIndex:
    """In-memory ``ConflictIndex`` keyed by schedule key and resource.

    Every entry lives in the key's catch-all bucket plus one bucket for its
    room and one for its faculty, so resource-filtered queries never look at
    sessions held in other rooms or by other faculty.
    """

    def __init__(self, entries: Iterable[TimetableEntry] = ()) -> None:
        self._buckets: dict[ScheduleKey, dict[tuple[str, str], _SortedBucket]] = {}
        self._by_id: dict[str, TimetableEntry] = {}
        self._lock = RLock()
        for entry in entries:
            self.add(entry)

    def __len__(self) -> int:
        return len(self._by_id)

    def __contains__(self, entry_id: object) -> bool:
        return entry_id in self._by_id

    def get(self, entry_id: str) -> TimetableEntry | None:
        return self._by_id.get(entry_id)

    def add(self, entry: TimetableEntry) -> None:
        if entry.id is None:
            raise ValueError("Only persisted entries can be indexed")
        with self._lock:
            self.discard(entry.id)
            buckets = self._buckets.setdefault(entry.key, {})
            for resource in _resource_slots(entry):
                buckets.setdefault(resource, _SortedBucket()).insert(entry)
            self._by_id[entry.id] = entry

    def discard(self, entry_id: str) -> TimetableEntry | None:
        with self._lock:
            entry = self._by_id.pop(entry_id, None)
            if entry is None:
                return None
            buckets = self._buckets[entry.key]
            for resource in _resource_slots(entry):
                bucket = buckets[resource]
                bucket.remove(entry)
                if not bucket:
                    del buckets[resource]
            if not buckets:
                del self._buckets[entry.key]
            return entry

    def entries(self, key: ScheduleKey | None = None) -> list[TimetableEntry]:
        with self._lock:
            if key is None:
                return list(self._by_id.values())
            bucket = self._buckets.get(key, {}).get(_ALL)
            return list(bucket.entries) if bucket else []

    def query(
        self,
        key: ScheduleKey,
        interval: TimeInterval,
        *,
        room_id: str | None = None,
        faculty_id: str | None = None,
    ) -> list[TimetableEntry]:
        with self._lock:
            buckets = self._buckets.get(key)
            if not buckets:
                return []
            if room_id is None and faculty_id is None:
                bucket = buckets.get(_ALL)
                return bucket.overlapping(interval) if bucket else []

            matches: dict[str, TimetableEntry] = {}
            for resource in (("room", room_id), ("faculty", faculty_id)):
                if resource[1] is None:
                    continue
                bucket = buckets.get(resource)
                if bucket is None:
                    continue
                for entry in bucket.overlapping(interval):
                    matches.setdefault(entry.id, entry)
            return list(matches.values())


def _resource_slots(entry: TimetableEntry) -> list[tuple[str, str]]:
    slots = [_ALL]
    if entry.room_id is not None:
        slots.append(("room", entry.room_id))
    if entry.faculty_id is not None:
        slots.append(("faculty", entry.faculty_id))
    return slots
