"""create buildings, rooms and timetables

Revision ID: 20261019_0001
Revises: None
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None


room_type_enum = sa.Enum("classroom", "lab", "auditorium", "library", "other", name="room_type")


def upgrade() -> None:
    op.create_table(
        "buildings",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("code", sa.String(length=50), nullable=False),
        sa.Column("campus_id", sa.String(length=36), nullable=True),
        sa.Column("floors", sa.Integer(), nullable=True),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_buildings_code", "buildings", ["code"], unique=True)

    op.create_table(
        "rooms",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("room_number", sa.String(length=50), nullable=False),
        sa.Column(
            "building_id",
            sa.String(length=36),
            sa.ForeignKey("buildings.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("room_type", room_type_enum, nullable=False),
        sa.Column("capacity", sa.Integer(), nullable=True),
        sa.Column("facilities", sa.JSON(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_rooms_room_number", "rooms", ["room_number"])
    op.create_index("ix_rooms_building_id", "rooms", ["building_id"])

    op.create_table(
        "timetables",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("section_id", sa.String(length=36), nullable=False),
        sa.Column("day_of_week", sa.Integer(), nullable=False),
        sa.Column("start_minute", sa.Integer(), nullable=False),
        sa.Column("end_minute", sa.Integer(), nullable=False),
        sa.Column("room_id", sa.String(length=36), nullable=True),
        sa.Column("faculty_id", sa.String(length=36), nullable=True),
        sa.Column("semester", sa.String(length=50), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint("day_of_week BETWEEN 1 AND 7", name="ck_timetables_day_of_week"),
        sa.CheckConstraint("start_minute >= 0 AND end_minute <= 1440", name="ck_timetables_minutes_in_day"),
        sa.CheckConstraint("start_minute < end_minute", name="ck_timetables_start_before_end"),
    )
    op.create_index("ix_timetables_semester_day", "timetables", ["semester", "day_of_week"])
    op.create_index("ix_timetables_section_id", "timetables", ["section_id"])
    op.create_index("ix_timetables_room_id", "timetables", ["room_id"])
    op.create_index("ix_timetables_faculty_id", "timetables", ["faculty_id"])


def downgrade() -> None:
    op.drop_index("ix_timetables_faculty_id", table_name="timetables")
    op.drop_index("ix_timetables_room_id", table_name="timetables")
    op.drop_index("ix_timetables_section_id", table_name="timetables")
    op.drop_index("ix_timetables_semester_day", table_name="timetables")
    op.drop_table("timetables")
    op.drop_index("ix_rooms_building_id", table_name="rooms")
    op.drop_index("ix_rooms_room_number", table_name="rooms")
    op.drop_table("rooms")
    room_type_enum.drop(op.get_bind(), checkfirst=True)
    op.drop_index("ix_buildings_code", table_name="buildings")
    op.drop_table("buildings")
