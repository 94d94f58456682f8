from sqlalchemy import create_engine, text
from sqlalchemy.pool import StaticPool

from app.db.bootstrap import REQUIRED_COLUMNS, ensure_runtime_schema_compatibility, find_schema_gaps


def _empty_engine():
    return create_engine(
        "sqlite+pysqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


def test_find_schema_gaps_reports_nothing_for_current_models(engine):
    assert find_schema_gaps(engine) == ([], {})


def test_find_schema_gaps_lists_missing_tables_and_columns():
    engine = _empty_engine()
    with engine.begin() as connection:
        connection.execute(text("CREATE TABLE timetables (id VARCHAR(36) PRIMARY KEY, semester VARCHAR(50))"))

    missing_tables, missing_columns = find_schema_gaps(engine)

    assert sorted(missing_tables) == ["buildings", "rooms"]
    assert missing_columns == {"timetables": sorted(REQUIRED_COLUMNS["timetables"] - {"id", "semester"})}
    engine.dispose()


def test_ensure_runtime_schema_compatibility_creates_tables():
    engine = _empty_engine()

    ensure_runtime_schema_compatibility(engine)

    assert find_schema_gaps(engine) == ([], {})
    engine.dispose()
