from __future__ import annotations

from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory
from sqlalchemy import inspect
from sqlalchemy.ext.asyncio import AsyncEngine

from habit_tracker.core.logging import log


class SchemaOutOfDateError(RuntimeError):
    """The database revision does not match the Alembic head."""


async def ensure_schema_up_to_date(engine: AsyncEngine, alembic_ini_path: str = "alembic.ini") -> None:
    """
    Stage/Prod startup gate:
      - Alembic version table must exist
      - DB revision must equal alembic head
    """
    cfg = Config(alembic_ini_path)
    head = ScriptDirectory.from_config(cfg).get_current_head()

    def _get_current_rev(sync_conn) -> str | None:
        if not inspect(sync_conn).has_table("alembic_version"):
            raise SchemaOutOfDateError(
                "Database schema is not initialized via Alembic (missing alembic_version). "
                "Run: alembic upgrade head"
            )
        return MigrationContext.configure(sync_conn).get_current_revision()

    async with engine.connect() as conn:
        current = await conn.run_sync(_get_current_rev)

    if current != head:
        raise SchemaOutOfDateError(
            f"Database schema is out of date: current={current}, head={head}. "
            "Run: alembic upgrade head"
        )
    log.info("schema_up_to_date", revision=current)
