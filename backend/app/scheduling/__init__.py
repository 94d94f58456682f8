from app.scheduling.conflict_index import ConflictIndex, IntervalConflictIndex  # noqa: F401
from app.scheduling.detector import (  # noqa: F401
    ConflictDetector,
    ConflictFinding,
    ConflictKind,
    ConflictReport,
)
from app.scheduling.entry import ScheduleKey, TimetableDraft, TimetableEntry  # noqa: F401
from app.scheduling.interval import TimeInterval  # noqa: F401
from app.scheduling.lifecycle import ScheduleLifecycleController, TimetableStore  # noqa: F401
from app.scheduling.locks import ScheduleLockRegistry  # noqa: F401
