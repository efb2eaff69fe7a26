from __future__ import annotations

import uuid
from typing import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from habit_tracker.domain.entities.habit import Habit
from habit_tracker.domain.enums import HabitCategory
from habit_tracker.domain.exceptions import HabitNotFoundError
from habit_tracker.domain.interfaces.repositories.habit_repository import HabitRepository
from habit_tracker.infrastructure.persistence import mappers
from habit_tracker.models.habit import HabitModel


class SqlAlchemyHabitRepository(HabitRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    def _query(self):
        return select(HabitModel).options(selectinload(HabitModel.progress_logs))

    async def _get_model(self, habit_id: uuid.UUID) -> HabitModel | None:
        res = await self._session.execute(self._query().where(HabitModel.id == habit_id))
        return res.scalar_one_or_none()

    async def add(self, habit: Habit) -> Habit:
        if habit.id is None:
            habit.id = uuid.uuid4()
        for log in habit.progress_logs:
            if log.id is None:
                log.id = uuid.uuid4()

        self._session.add(mappers.habit_to_model(habit))
        await self._session.flush()
        return habit

    async def get(self, habit_id: uuid.UUID) -> Habit | None:
        row = await self._get_model(habit_id)
        return mappers.model_to_habit(row) if row else None

    async def list_all(self) -> Iterable[Habit]:
        res = await self._session.execute(self._query().order_by(HabitModel.created_at, HabitModel.name))
        return [mappers.model_to_habit(row) for row in res.scalars().all()]

    async def list_by_category(self, category: HabitCategory) -> Iterable[Habit]:
        res = await self._session.execute(
            self._query()
            .where(HabitModel.category == HabitCategory(category).value)
            .order_by(HabitModel.created_at, HabitModel.name)
        )
        return [mappers.model_to_habit(row) for row in res.scalars().all()]

    async def save(self, habit: Habit) -> None:
        if habit.id is None:
            await self.add(habit)
            return

        model = await self._get_model(habit.id)
        if model is None:
            raise HabitNotFoundError(f"No habit found for id: {habit.id}")
        mappers.update_habit_model(model, habit)

        # flush removals first so a re-added date does not trip uq_progress_logs_habit_id_date
        kept_ids = {log.id for log in habit.progress_logs if log.id is not None}
        stale = [row for row in model.progress_logs if row.id not in kept_ids]
        for row in stale:
            model.progress_logs.remove(row)
        if stale:
            await self._session.flush()

        rows_by_id = {row.id: row for row in model.progress_logs}
        for position, log in enumerate(habit.progress_logs):
            row = rows_by_id.get(log.id) if log.id is not None else None
            if row is None:
                if log.id is None:
                    log.id = uuid.uuid4()
                model.progress_logs.append(mappers.progress_log_to_model(log, habit_id=habit.id, position=position))
            else:
                mappers.update_progress_log_model(row, log, position=position)

        await self._session.flush()

    async def delete(self, habit_id: uuid.UUID) -> None:
        model = await self._get_model(habit_id)
        if model is None:
            raise HabitNotFoundError(f"No habit found for id: {habit_id}")
        await self._session.delete(model)
        await self._session.flush()
