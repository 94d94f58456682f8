from collections.abc import Generator

from fastapi import Depends, Query
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.db.session import SessionLocal
from app.scheduling.lifecycle import ScheduleLifecycleController
from app.services.timetable_store import SqlTimetableStore


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_timetable_store(db: Session = Depends(get_db)) -> SqlTimetableStore:
    return SqlTimetableStore(db)


def get_schedule_controller(
    store: SqlTimetableStore = Depends(get_timetable_store),
) -> ScheduleLifecycleController:
    return ScheduleLifecycleController(store)


class PageParams:
    def __init__(
        self,
        page: int = Query(default=1, ge=1),
        limit: int | None = Query(default=None, ge=1),
    ) -> None:
        settings = get_settings()
        self.page = page
        self.limit = min(limit or settings.default_page_size, settings.max_page_size)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit
