from datetime import datetime

from pydantic import BaseModel, Field

from app.schemas.common import Pagination


class BuildingBase(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    code: str = Field(min_length=1, max_length=50)
    campus_id: str | None = Field(default=None, alias="campusId", max_length=36)
    floors: int | None = Field(default=None, ge=1, le=200)
    address: str | None = Field(default=None, max_length=500)

    model_config = {"populate_by_name": True}


class BuildingCreate(BuildingBase):
    pass


class BuildingOut(BuildingBase):
    id: str
    created_at: datetime | None = Field(default=None, alias="createdAt")

    model_config = {"populate_by_name": True, "from_attributes": True}


class BuildingList(BaseModel):
    buildings: list[BuildingOut]
    pagination: Pagination
