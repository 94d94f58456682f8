from __future__ import annotations

import logging

from sqlalchemy import inspect
from sqlalchemy.engine import Engine

from app.core.config import get_settings
from app.db.base import Base
from app.db.session import engine as default_engine

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS: dict[str, set[str]] = {
    "buildings": {"id", "name", "code"},
    "rooms": {"id", "room_number", "building_id", "room_type", "is_active"},
    "timetables": {
        "id",
        "section_id",
        "day_of_week",
        "start_minute",
        "end_minute",
        "room_id",
        "faculty_id",
        "semester",
    },
}


def find_schema_gaps(engine: Engine) -> tuple[list[str], dict[str, list[str]]]:
    missing_tables: list[str] = []
    missing_columns: dict[str, list[str]] = {}
    with engine.connect() as connection:
        inspector = inspect(connection)
        table_names = set(inspector.get_table_names())
        for table_name, columns in REQUIRED_COLUMNS.items():
            if table_name not in table_names:
                missing_tables.append(table_name)
                continue
            existing = {item["name"] for item in inspector.get_columns(table_name)}
            missing = sorted(columns - existing)
            if missing:
                missing_columns[table_name] = missing
    return missing_tables, missing_columns


def ensure_runtime_schema_compatibility(engine: Engine | None = None) -> None:
    import app.models  # noqa: F401

    target = engine or default_engine
    if get_settings().auto_create_schema:
        Base.metadata.create_all(bind=target)

    missing_tables, missing_columns = find_schema_gaps(target)
    if missing_tables or missing_columns:
        logger.warning(
            "Database schema is behind the models (missing tables: %s, missing columns: %s); run alembic upgrade",
            missing_tables,
            missing_columns,
        )
