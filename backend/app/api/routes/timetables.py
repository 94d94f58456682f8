from fastapi import APIRouter, Depends, Query, status

from app.api.deps import PageParams, get_schedule_controller, get_timetable_store
from app.core.exceptions import ResourceNotFoundError
from app.scheduling.audit import find_schedule_clashes
from app.scheduling.lifecycle import ScheduleLifecycleController
from app.schemas.common import Pagination
from app.schemas.timetable import (
    ConflictReportOut,
    ScheduleAuditOut,
    ScheduleClashOut,
    TimetableCreate,
    TimetableList,
    TimetableOut,
    TimetableUpdate,
)
from app.services.timetable_store import SqlTimetableStore, TimetableFilters

router = APIRouter()


def _load_out(store: SqlTimetableStore, entry_id: str) -> TimetableOut:
    row = store.get_row(entry_id)
    if row is None:
        raise ResourceNotFoundError("Timetable", entry_id)
    return TimetableOut.from_row(row)


@router.get("", response_model=TimetableList)
def list_timetables(
    page: PageParams = Depends(),
    section_id: str | None = Query(default=None, alias="sectionId"),
    faculty_id: str | None = Query(default=None, alias="facultyId"),
    semester: str | None = Query(default=None),
    day_of_week: int | None = Query(default=None, alias="dayOfWeek", ge=1, le=7),
    room_id: str | None = Query(default=None, alias="roomId"),
    store: SqlTimetableStore = Depends(get_timetable_store),
) -> TimetableList:
    filters = TimetableFilters(
        section_id=section_id,
        faculty_id=faculty_id,
        semester=semester,
        day_of_week=day_of_week,
        room_id=room_id,
    )
    rows, total = store.list_rows(filters, limit=page.limit, offset=page.offset)
    return TimetableList(
        timetables=[TimetableOut.from_row(row) for row in rows],
        pagination=Pagination.build(page=page.page, limit=page.limit, total=total),
    )


@router.get("/conflicts", response_model=ScheduleAuditOut)
def audit_schedule(
    semester: str = Query(min_length=1),
    day_of_week: int | None = Query(default=None, alias="dayOfWeek", ge=1, le=7),
    store: SqlTimetableStore = Depends(get_timetable_store),
) -> ScheduleAuditOut:
    entries = store.entries_for(semester, day_of_week)
    clashes = find_schedule_clashes(entries)
    return ScheduleAuditOut(
        semester=semester,
        day_of_week=day_of_week,
        entries_checked=len(entries),
        clashes=[ScheduleClashOut.from_clash(clash) for clash in clashes],
    )


@router.post("/check", response_model=ConflictReportOut)
def check_create(
    payload: TimetableCreate,
    controller: ScheduleLifecycleController = Depends(get_schedule_controller),
) -> ConflictReportOut:
    return ConflictReportOut.from_report(controller.check_create(payload.to_draft()))


@router.get("/{timetable_id}", response_model=TimetableOut)
def get_timetable(
    timetable_id: str,
    store: SqlTimetableStore = Depends(get_timetable_store),
) -> TimetableOut:
    return _load_out(store, timetable_id)


@router.post("", response_model=TimetableOut, status_code=status.HTTP_201_CREATED)
def create_timetable(
    payload: TimetableCreate,
    controller: ScheduleLifecycleController = Depends(get_schedule_controller),
    store: SqlTimetableStore = Depends(get_timetable_store),
) -> TimetableOut:
    created = controller.create(payload.to_draft())
    return _load_out(store, created.id)


@router.post("/{timetable_id}/check", response_model=ConflictReportOut)
def check_update(
    timetable_id: str,
    payload: TimetableUpdate,
    controller: ScheduleLifecycleController = Depends(get_schedule_controller),
) -> ConflictReportOut:
    return ConflictReportOut.from_report(controller.check_update(timetable_id, payload.changes()))


@router.put("/{timetable_id}", response_model=TimetableOut)
def update_timetable(
    timetable_id: str,
    payload: TimetableUpdate,
    controller: ScheduleLifecycleController = Depends(get_schedule_controller),
    store: SqlTimetableStore = Depends(get_timetable_store),
) -> TimetableOut:
    controller.update(timetable_id, payload.changes())
    return _load_out(store, timetable_id)


@router.delete("/{timetable_id}")
def delete_timetable(
    timetable_id: str,
    controller: ScheduleLifecycleController = Depends(get_schedule_controller),
) -> dict:
    controller.delete(timetable_id)
    return {"success": True}
