from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable

from habit_tracker.core.config import settings
from habit_tracker.core.logging import log
from habit_tracker.domain.entities.base import as_date, utctoday
from habit_tracker.domain.entities.habit import Habit
from habit_tracker.domain.entities.progress_log import ProgressLog
from habit_tracker.domain.enums import FrequencyUnit, HabitCategory
from habit_tracker.domain.exceptions import HabitNotFoundError, ValidationError
from habit_tracker.domain.interfaces.repositories.habit_repository import HabitRepository


@dataclass(frozen=True)
class HabitSummary:
    habit_id: uuid.UUID
    name: str
    window_start: date
    window_end: date
    completion_rate: float
    current_streak: int
    longest_streak: int
    next_due_date: date


class HabitService:
    def __init__(self, repo: HabitRepository, *, stats_window_days: int | None = None) -> None:
        if stats_window_days is None:
            stats_window_days = settings.STATS_WINDOW_DAYS
        if stats_window_days <= 0:
            raise ValidationError("stats_window_days must be greater than zero")
        self._repo = repo
        self._stats_window_days = stats_window_days

    async def list_habits(self) -> list[Habit]:
        return list(await self._repo.list_all())

    async def get_habit(self, habit_id: uuid.UUID) -> Habit:
        habit = await self._repo.get(habit_id)
        if habit is None:
            raise HabitNotFoundError(f"No habit found for id: {habit_id}")
        return habit

    async def create_habit(
        self,
        name: str,
        start_date: date | datetime,
        *,
        category: HabitCategory | None = HabitCategory.OTHER,
        frequency: int = 1,
        frequency_unit: FrequencyUnit = FrequencyUnit.DAILY,
        tags: Iterable[str] = (),
    ) -> Habit:
        habit = Habit(name, start_date, category, frequency, frequency_unit)
        for tag in tags:
            habit.add_tag(tag)

        await self._repo.add(habit)
        log.info("habit_created", habit_id=str(habit.id), name=habit.name, category=str(habit.category))
        return habit

    async def delete_habit(self, habit_id: uuid.UUID) -> None:
        await self._repo.delete(habit_id)
        log.info("habit_deleted", habit_id=str(habit_id))

    async def log_progress(
        self,
        habit_id: uuid.UUID,
        day: date | datetime,
        is_completed: bool = False,
        note: str | None = None,
    ) -> ProgressLog:
        habit = await self.get_habit(habit_id)
        entry = ProgressLog(day, is_completed, note)
        habit.add_progress_log(entry)
        await self._repo.save(habit)
        log.info("progress_logged", habit_id=str(habit_id), date=entry.date.isoformat(), completed=entry.is_completed)
        return entry

    async def update_progress(
        self,
        habit_id: uuid.UUID,
        day: date | datetime,
        is_completed: bool,
        note: str | None = None,
    ) -> ProgressLog:
        habit = await self.get_habit(habit_id)
        habit.update_progress_log(ProgressLog(day, is_completed, note))
        await self._repo.save(habit)

        day = as_date(day)
        entry = next(entry for entry in habit.progress_logs if entry.date == day)
        log.info("progress_updated", habit_id=str(habit_id), date=day.isoformat(), completed=entry.is_completed)
        return entry

    async def record_progress(
        self,
        habit_id: uuid.UUID,
        day: date | datetime,
        is_completed: bool,
        note: str | None = None,
    ) -> ProgressLog:
        """Add a log for ``day``, or overwrite the one already there."""
        habit = await self.get_habit(habit_id)
        if any(entry.date == as_date(day) for entry in habit.progress_logs):
            return await self.update_progress(habit_id, day, is_completed, note)
        return await self.log_progress(habit_id, day, is_completed, note)

    async def remove_progress(self, habit_id: uuid.UUID, day: date | datetime) -> None:
        habit = await self.get_habit(habit_id)
        habit.remove_progress_log(day)
        await self._repo.save(habit)
        log.info("progress_removed", habit_id=str(habit_id), date=as_date(day).isoformat())

    async def add_tag(self, habit_id: uuid.UUID, tag: str) -> Habit:
        habit = await self.get_habit(habit_id)
        habit.add_tag(tag)
        await self._repo.save(habit)
        log.info("habit_tag_added", habit_id=str(habit_id), tag=tag)
        return habit

    async def find_by_category(self, category: HabitCategory) -> list[Habit]:
        return list(await self._repo.list_by_category(category))

    async def find_by_tag(self, tag: str) -> list[Habit]:
        return Habit.get_habits_by_tag(await self._repo.list_all(), tag)

    async def summarize(self, habit_id: uuid.UUID, as_of: date | datetime | None = None) -> HabitSummary:
        """Completion rate over the stats window plus streaks and the next due date.

        The window ends at ``as_of`` (today by default) and never starts before
        the habit's start date.
        """
        habit = await self.get_habit(habit_id)
        end = as_date(as_of) if as_of is not None else utctoday()
        start = max(end - timedelta(days=self._stats_window_days - 1), habit.start_date)

        rate = habit.get_completion_rate(start, end) if start <= end else 0.0

        completed = [entry.date for entry in habit.progress_logs if entry.is_completed and entry.date <= end]
        last = max(completed) if completed else habit.start_date

        return HabitSummary(
            habit_id=habit.id,
            name=habit.name,
            window_start=start,
            window_end=end,
            completion_rate=rate,
            current_streak=habit.get_streak(end),
            longest_streak=habit.get_longest_streak(end),
            next_due_date=habit.get_next_due_date(last),
        )
