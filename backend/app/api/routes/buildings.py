from fastapi import APIRouter, Depends, status
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.api.deps import PageParams, get_db
from app.core.exceptions import DuplicateResourceError, ResourceNotFoundError
from app.models.building import Building
from app.schemas.building import BuildingCreate, BuildingList, BuildingOut
from app.schemas.common import Pagination

router = APIRouter()


@router.get("", response_model=BuildingList)
def list_buildings(page: PageParams = Depends(), db: Session = Depends(get_db)) -> BuildingList:
    total = db.execute(select(func.count()).select_from(Building)).scalar_one()
    buildings = db.execute(
        select(Building).order_by(Building.name.asc(), Building.id.asc()).limit(page.limit).offset(page.offset)
    ).scalars()
    return BuildingList(
        buildings=[BuildingOut.model_validate(building) for building in buildings],
        pagination=Pagination.build(page=page.page, limit=page.limit, total=total),
    )


@router.get("/{building_id}", response_model=BuildingOut)
def get_building(building_id: str, db: Session = Depends(get_db)) -> BuildingOut:
    building = db.get(Building, building_id)
    if building is None:
        raise ResourceNotFoundError("Building", building_id)
    return building


@router.post("", response_model=BuildingOut, status_code=status.HTTP_201_CREATED)
def create_building(payload: BuildingCreate, db: Session = Depends(get_db)) -> BuildingOut:
    existing = db.execute(select(Building).where(Building.code == payload.code)).scalar_one_or_none()
    if existing:
        raise DuplicateResourceError("Building", "code", payload.code)
    building = Building(**payload.model_dump())
    db.add(building)
    try:
        db.commit()
    except IntegrityError as exc:
        # Another request inserted the same code after the lookup above.
        db.rollback()
        raise DuplicateResourceError("Building", "code", payload.code) from exc
    db.refresh(building)
    return building
