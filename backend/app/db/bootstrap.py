from __future__ import annotations

import logging

from sqlalchemy import inspect, text

from app.db.base import Base
from app.db.session import engine

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS: dict[str, set[str]] = {
    "teaching_sessions": {
        "id",
        "subject_type",
        "teacher_id",
        "teaching_assistant_id",
        "date",
        "start_time",
        "end_time",
        "data",
    },
}


def _ensure_teaching_sessions_data_column() -> None:
    with engine.begin() as connection:
        inspector = inspect(connection)
        if "teaching_sessions" not in set(inspector.get_table_names()):
            return
        column_names = {item["name"] for item in inspector.get_columns("teaching_sessions")}
        if "data" in column_names:
            return

        if connection.dialect.name == "postgresql":
            connection.execute(
                text("ALTER TABLE teaching_sessions ADD COLUMN data JSONB NOT NULL DEFAULT '{}'::jsonb")
            )
            return

        connection.execute(text("ALTER TABLE teaching_sessions ADD COLUMN data JSON NOT NULL DEFAULT '{}'"))


def _assert_required_columns() -> None:
    with engine.begin() as connection:
        inspector = inspect(connection)
        table_names = set(inspector.get_table_names())
        missing_tables = [name for name in REQUIRED_COLUMNS if name not in table_names]
        if missing_tables:
            raise RuntimeError(f"Missing required tables: {', '.join(sorted(missing_tables))}")

        missing_columns: list[str] = []
        for table_name, required in REQUIRED_COLUMNS.items():
            existing = {item["name"] for item in inspector.get_columns(table_name)}
            for column_name in sorted(required - existing):
                missing_columns.append(f"{table_name}.{column_name}")
        if missing_columns:
            raise RuntimeError(f"Missing required columns: {', '.join(missing_columns)}")


def ensure_runtime_schema_compatibility() -> None:
    try:
        # Ensure missing tables are present before additive compatibility patches.
        import app.models  # noqa: F401

        Base.metadata.create_all(bind=engine)
        _ensure_teaching_sessions_data_column()
        _assert_required_columns()
    except Exception as exc:  # pragma: no cover - runtime environment dependent
        logger.exception("Runtime schema compatibility bootstrap failed")
        raise RuntimeError("Runtime schema compatibility bootstrap failed") from exc
