import uuid
from datetime import datetime
from enum import Enum

from sqlalchemy import Boolean, DateTime, Enum as SAEnum, ForeignKey, Integer, JSON, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from app.db.base import Base


class RoomType(str, Enum):
    classroom = "classroom"
    lab = "lab"
    auditorium = "auditorium"
    library = "library"
    other = "other"


class Room(Base):
    __tablename__ = "rooms"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    room_number: Mapped[str] = mapped_column(String(50), index=True, nullable=False)
    building_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("buildings.id", ondelete="SET NULL"), index=True, nullable=True
    )
    room_type: Mapped[RoomType] = mapped_column(SAEnum(RoomType, name="room_type"), nullable=False)
    capacity: Mapped[int | None] = mapped_column(Integer, nullable=True)
    facilities: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), onupdate=func.now())
