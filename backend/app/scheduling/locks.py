from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Iterator
from contextlib import ExitStack, contextmanager
from threading import Lock

from app.scheduling.entry import ScheduleKey


class ScheduleLockRegistry:
    """One mutex per schedule key, held across conflict check and write.

    Several keys are always acquired in sorted order, so an update moving a
    session between days cannot deadlock against another moving it back.
    """

    def __init__(self) -> None:
        self._locks: dict[ScheduleKey, Lock] = defaultdict(Lock)
        self._guard = Lock()

    def _lock_for(self, key: ScheduleKey) -> Lock:
        with self._guard:
            return self._locks[key]

    @contextmanager
    def hold(self, keys: Iterable[ScheduleKey]) -> Iterator[None]:
        with ExitStack() as stack:
            for key in sorted(set(keys)):
                lock = self._lock_for(key)
                lock.acquire()
                stack.callback(lock.release)
            yield

    def clear(self) -> None:
        """Forget every per-key lock. Used between tests.

        Refuses while any key is held, otherwise a later caller would get a
        fresh lock for a key another thread is still inside.
        """
        with self._guard:
            held = sorted(key for key, lock in self._locks.items() if lock.locked())
            if held:
                raise RuntimeError(f"Cannot clear schedule locks while held: {held}")
            self._locks.clear()


_registry = ScheduleLockRegistry()


def get_schedule_locks() -> ScheduleLockRegistry:
    return _registry


def clear_schedule_locks() -> None:
    _registry.clear()
