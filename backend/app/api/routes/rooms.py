from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.api.deps import PageParams, get_db
from app.core.exceptions import ResourceNotFoundError, ValidationError
from app.models.building import Building
from app.models.room import Room, RoomType
from app.schemas.common import Pagination
from app.schemas.room import RoomCreate, RoomList, RoomOut, RoomUpdate

router = APIRouter()

NON_NULLABLE_FIELDS = {"room_number": "roomNumber", "room_type": "roomType", "is_active": "isActive"}


def _ensure_building_exists(db: Session, building_id: str | None) -> None:
    if building_id is not None and db.get(Building, building_id) is None:
        raise ResourceNotFoundError("Building", building_id)


@router.get("", response_model=RoomList)
def list_rooms(
    page: PageParams = Depends(),
    building_id: str | None = Query(default=None, alias="buildingId"),
    room_type: RoomType | None = Query(default=None, alias="roomType"),
    is_active: bool | None = Query(default=None, alias="isActive"),
    db: Session = Depends(get_db),
) -> RoomList:
    conditions = []
    if building_id:
        conditions.append(Room.building_id == building_id)
    if room_type is not None:
        conditions.append(Room.room_type == room_type)
    if is_active is not None:
        conditions.append(Room.is_active == is_active)

    total = db.execute(select(func.count()).select_from(Room).where(*conditions)).scalar_one()
    rooms = db.execute(
        select(Room)
        .where(*conditions)
        .order_by(Room.room_number.asc(), Room.id.asc())
        .limit(page.limit)
        .offset(page.offset)
    ).scalars()
    return RoomList(
        rooms=[RoomOut.model_validate(room) for room in rooms],
        pagination=Pagination.build(page=page.page, limit=page.limit, total=total),
    )


@router.get("/{room_id}", response_model=RoomOut)
def get_room(room_id: str, db: Session = Depends(get_db)) -> RoomOut:
    room = db.get(Room, room_id)
    if room is None:
        raise ResourceNotFoundError("Room", room_id)
    return room


@router.post("", response_model=RoomOut, status_code=status.HTTP_201_CREATED)
def create_room(payload: RoomCreate, db: Session = Depends(get_db)) -> RoomOut:
    _ensure_building_exists(db, payload.building_id)
    room = Room(**payload.model_dump(), is_active=True)
    db.add(room)
    db.commit()
    db.refresh(room)
    return room


@router.put("/{room_id}", response_model=RoomOut)
def update_room(room_id: str, payload: RoomUpdate, db: Session = Depends(get_db)) -> RoomOut:
    room = db.get(Room, room_id)
    if room is None:
        raise ResourceNotFoundError("Room", room_id)

    data = payload.model_dump(exclude_unset=True)
    cleared = [label for name, label in NON_NULLABLE_FIELDS.items() if name in data and data[name] is None]
    if cleared:
        raise ValidationError(f"Field(s) cannot be null: {', '.join(cleared)}")
    if data.get("facilities", []) is None:
        data["facilities"] = []
    if "building_id" in data:
        _ensure_building_exists(db, data["building_id"])

    for key, value in data.items():
        setattr(room, key, value)
    db.commit()
    db.refresh(room)
    return room
