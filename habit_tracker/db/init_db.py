from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine

from habit_tracker.db.base import Base
from habit_tracker.models.habit import HabitModel, ProgressLogModel  # noqa: F401


async def init_db(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
