from __future__ import annotations

from datetime import date

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from habit_tracker.core.logging import log
from habit_tracker.domain.entities.base import utcnow
from habit_tracker.domain.entities.habit import Habit
from habit_tracker.domain.entities.progress_log import ProgressLog
from habit_tracker.domain.enums import FrequencyUnit, HabitCategory
from habit_tracker.infrastructure.persistence.repositories.habit_repository import SqlAlchemyHabitRepository
from habit_tracker.models.habit import HabitModel

DEMO_HABITS = (
    {
        "name": "Daily Exercise",
        "frequency_unit": FrequencyUnit.DAILY,
        "tags": ("exercise", "fitness", "health"),
        "log": (date(2024, 1, 2), "Ran 3 miles"),
    },
    {
        "name": "Read Books",
        "frequency_unit": FrequencyUnit.WEEKLY,
        "tags": ("reading", "books", "learning"),
        "log": (date(2024, 1, 3), "Finished 2 chapters"),
    },
)


def _build_demo_habit(demo: dict) -> Habit:
    now = utcnow()
    # demo tags replace the category defaults
    habit = Habit.restore(
        id=None,
        name=demo["name"],
        category=HabitCategory.PERSONAL_DEVELOPMENT,
        frequency=1,
        frequency_unit=demo["frequency_unit"],
        start_date=date(2024, 1, 1),
        tags=demo["tags"],
        progress_logs=[],
        created_at=now,
        updated_at=now,
    )
    log_date, note = demo["log"]
    habit.add_progress_log(ProgressLog(log_date, True, note))
    return habit


async def seed_demo_data(session: AsyncSession) -> int:
    """Insert the demo habits into an empty database. Returns the number inserted."""
    existing = (await session.execute(select(func.count(HabitModel.id)))).scalar_one()
    if existing:
        log.info("seed_skipped", existing_habits=existing)
        return 0

    repo = SqlAlchemyHabitRepository(session)
    for demo in DEMO_HABITS:
        await repo.add(_build_demo_habit(demo))
    await session.commit()

    log.info("seed_completed", habits=len(DEMO_HABITS))
    return len(DEMO_HABITS)
