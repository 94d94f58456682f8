from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from app.models.room import RoomType
from app.schemas.common import Pagination


def _clean_facilities(value: list[str] | None) -> list[str] | None:
    if value is None:
        return None
    cleaned: list[str] = []
    for item in value:
        label = item.strip()
        if label and label not in cleaned:
            cleaned.append(label)
    return cleaned


class RoomBase(BaseModel):
    room_number: str = Field(alias="roomNumber", min_length=1, max_length=50)
    building_id: str | None = Field(default=None, alias="buildingId", max_length=36)
    room_type: RoomType = Field(alias="roomType")
    capacity: int | None = Field(default=None, gt=0, le=10000)
    facilities: list[str] = Field(default_factory=list, max_length=50)

    model_config = {"populate_by_name": True}

    @field_validator("facilities")
    @classmethod
    def validate_facilities(cls, value: list[str]) -> list[str]:
        return _clean_facilities(value)


class RoomCreate(RoomBase):
    pass


class RoomUpdate(BaseModel):
    room_number: str | None = Field(default=None, alias="roomNumber", min_length=1, max_length=50)
    building_id: str | None = Field(default=None, alias="buildingId", max_length=36)
    room_type: RoomType | None = Field(default=None, alias="roomType")
    capacity: int | None = Field(default=None, gt=0, le=10000)
    facilities: list[str] | None = Field(default=None, max_length=50)
    is_active: bool | None = Field(default=None, alias="isActive")

    model_config = {"populate_by_name": True}

    @field_validator("facilities")
    @classmethod
    def validate_facilities(cls, value: list[str] | None) -> list[str] | None:
        return _clean_facilities(value)


class RoomOut(RoomBase):
    id: str
    is_active: bool = Field(alias="isActive")
    created_at: datetime | None = Field(default=None, alias="createdAt")

    model_config = {"populate_by_name": True, "from_attributes": True}


class RoomList(BaseModel):
    rooms: list[RoomOut]
    pagination: Pagination
