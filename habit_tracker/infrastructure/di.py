from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from habit_tracker.application.services.habit_service import HabitService
from habit_tracker.infrastructure.persistence.repositories.habit_repository import SqlAlchemyHabitRepository


def create_habit_service(db: AsyncSession) -> HabitService:
    repository = SqlAlchemyHabitRepository(db)
    return HabitService(repository)
