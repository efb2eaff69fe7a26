from __future__ import annotations

import uuid
from datetime import datetime, timezone

from habit_tracker.domain.entities.habit import Habit
from habit_tracker.domain.entities.progress_log import ProgressLog
from habit_tracker.domain.enums import FrequencyUnit, HabitCategory
from habit_tracker.models.habit import HabitModel, ProgressLogModel


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def progress_log_to_model(log: ProgressLog, *, habit_id: uuid.UUID, position: int) -> ProgressLogModel:
    return ProgressLogModel(
        id=log.id,
        habit_id=habit_id,
        date=log.date,
        is_completed=log.is_completed,
        note=log.note,
        position=position,
        created_at=log.created_at,
        updated_at=log.updated_at,
    )


def model_to_progress_log(model: ProgressLogModel) -> ProgressLog:
    return ProgressLog.restore(
        id=model.id,
        date=model.date,
        is_completed=model.is_completed,
        note=model.note,
        created_at=_as_utc(model.created_at),
        updated_at=_as_utc(model.updated_at),
    )


def update_progress_log_model(model: ProgressLogModel, log: ProgressLog, *, position: int) -> None:
    model.is_completed = log.is_completed
    model.note = log.note
    model.position = position
    model.updated_at = log.updated_at


def habit_to_model(habit: Habit) -> HabitModel:
    return HabitModel(
        id=habit.id,
        name=habit.name,
        category=HabitCategory(habit.category).value,
        frequency=habit.frequency,
        frequency_unit=FrequencyUnit(habit.frequency_unit).value,
        start_date=habit.start_date,
        tags=list(habit.tags),
        created_at=habit.created_at,
        updated_at=habit.updated_at,
        progress_logs=[
            progress_log_to_model(log, habit_id=habit.id, position=position)
            for position, log in enumerate(habit.progress_logs)
        ],
    )


def update_habit_model(model: HabitModel, habit: Habit) -> None:
    model.name = habit.name
    model.category = HabitCategory(habit.category).value
    model.frequency = habit.frequency
    model.frequency_unit = FrequencyUnit(habit.frequency_unit).value
    model.start_date = habit.start_date
    model.tags = list(habit.tags)
    model.updated_at = habit.updated_at


def model_to_habit(model: HabitModel) -> Habit:
    return Habit.restore(
        id=model.id,
        name=model.name,
        category=HabitCategory(model.category),
        frequency=model.frequency,
        frequency_unit=FrequencyUnit(model.frequency_unit),
        start_date=model.start_date,
        tags=model.tags or [],
        progress_logs=[model_to_progress_log(row) for row in model.progress_logs],
        created_at=_as_utc(model.created_at),
        updated_at=_as_utc(model.updated_at),
    )
