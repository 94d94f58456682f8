import uuid
from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from app.db.base import Base


class Timetable(Base):
    """One scheduled class session. Times are minutes from midnight."""

    __tablename__ = "timetables"
    __table_args__ = (
        Index("ix_timetables_semester_day", "semester", "day_of_week"),
        CheckConstraint("day_of_week BETWEEN 1 AND 7", name="ck_timetables_day_of_week"),
        CheckConstraint("start_minute >= 0 AND end_minute <= 1440", name="ck_timetables_minutes_in_day"),
        CheckConstraint("start_minute < end_minute", name="ck_timetables_start_before_end"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    section_id: Mapped[str] = mapped_column(String(36), index=True, nullable=False)
    day_of_week: Mapped[int] = mapped_column(Integer, nullable=False)
    start_minute: Mapped[int] = mapped_column(Integer, nullable=False)
    end_minute: Mapped[int] = mapped_column(Integer, nullable=False)
    room_id: Mapped[str | None] = mapped_column(String(36), index=True, nullable=True)
    faculty_id: Mapped[str | None] = mapped_column(String(36), index=True, nullable=True)
    semester: Mapped[str] = mapped_column(String(50), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), onupdate=func.now())
