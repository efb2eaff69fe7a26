from __future__ import annotations

import uuid
from datetime import date, datetime, timedelta
from typing import Iterable, Optional

from dateutil.relativedelta import relativedelta

from habit_tracker.domain.default_tags import DefaultTagsProvider
from habit_tracker.domain.entities.base import EntityBase, as_date, is_future, utctoday
from habit_tracker.domain.entities.progress_log import ProgressLog
from habit_tracker.domain.enums import FrequencyUnit, HabitCategory
from habit_tracker.domain.exceptions import (
    DuplicateProgressLogError,
    MissingArgumentError,
    ProgressLogNotFoundError,
    UnsupportedFrequencyUnitError,
    ValidationError,
)

# tags are stored joined on this separator
TAG_SEPARATOR = ","


def _is_blank(value: str | None) -> bool:
    return value is None or not str(value).strip()


def _check_name(name: str | None) -> str:
    if _is_blank(name):
        raise ValidationError("name cannot be null or white space")
    return name


def _check_frequency(frequency: int) -> int:
    if isinstance(frequency, bool) or not isinstance(frequency, int):
        raise ValidationError("The frequency must be an integer.")
    if frequency <= 0:
        raise ValidationError("The frequency must be greater than zero.")
    return frequency


def _check_start_date(start_date: date | datetime) -> date:
    if start_date is None:
        raise ValidationError("The start date is required.")
    if is_future(start_date):
        raise ValidationError("Start date cannot be in the future.")
    return as_date(start_date)


def _check_tag(tag: str | None) -> str:
    if _is_blank(tag):
        raise ValidationError("Tag cannot be null or empty.")
    if TAG_SEPARATOR in tag:
        raise ValidationError(f"Tag cannot contain '{TAG_SEPARATOR}'.")
    return tag


class Habit(EntityBase):
    """Aggregate root for a tracked habit and its progress history.

    The habit exclusively owns its progress logs; callers only ever see them
    through the read-only ``progress_logs`` tuple and change them through
    ``add_progress_log``, ``update_progress_log`` and ``remove_progress_log``.
    """

    def __init__(
        self,
        name: str,
        start_date: date | datetime,
        category: HabitCategory | None = HabitCategory.OTHER,
        frequency: int = 1,
        frequency_unit: FrequencyUnit = FrequencyUnit.DAILY,
    ) -> None:
        # validate everything before assigning anything
        name = _check_name(name)
        start = _check_start_date(start_date)
        frequency = _check_frequency(frequency)
        category = category if category is not None else HabitCategory.OTHER

        super().__init__()
        self._name = name
        self._start_date = start
        self._frequency = frequency
        self.category = category
        self.frequency_unit = frequency_unit
        self._tags: list[str] = DefaultTagsProvider.get_tags_for_category(category)
        self._progress_logs: list[ProgressLog] = []

    @classmethod
    def restore(
        cls,
        *,
        id: uuid.UUID | None,
        name: str,
        category: HabitCategory,
        frequency: int,
        frequency_unit: FrequencyUnit,
        start_date: date,
        tags: Iterable[str],
        progress_logs: Iterable[ProgressLog],
        created_at: datetime,
        updated_at: datetime,
    ) -> "Habit":
        """Rebuild a stored habit. Stored tags replace the category defaults."""
        habit = cls.__new__(cls)
        EntityBase.__init__(habit)
        habit._name = _check_name(name)
        habit._frequency = _check_frequency(frequency)
        habit._start_date = as_date(start_date)
        habit.category = category
        habit.frequency_unit = frequency_unit
        habit._tags = []
        for tag in tags:
            if not _is_blank(tag) and not habit.has_tag(tag):
                habit._tags.append(tag)
        habit._progress_logs = list(progress_logs)
        habit._restore_audit(id=id, created_at=created_at, updated_at=updated_at)
        return habit

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        self._name = _check_name(value)
        self.touch()

    @property
    def start_date(self) -> date:
        return self._start_date

    @start_date.setter
    def start_date(self, value: date | datetime) -> None:
        self._start_date = _check_start_date(value)
        self.touch()

    @property
    def frequency(self) -> int:
        """Number of frequency units between occurrences (2 + WEEKLY = every 2 weeks)."""
        return self._frequency

    @frequency.setter
    def frequency(self, value: int) -> None:
        self._frequency = _check_frequency(value)
        self.touch()

    @property
    def tags(self) -> tuple[str, ...]:
        return tuple(self._tags)

    @property
    def progress_logs(self) -> tuple[ProgressLog, ...]:
        return tuple(self._progress_logs)

    def _find_log(self, day: date) -> Optional[ProgressLog]:
        return next((log for log in self._progress_logs if log.date == day), None)

    def add_progress_log(self, progress_log: ProgressLog) -> None:
        if progress_log is None:
            raise MissingArgumentError("progress_log cannot be None")
        if progress_log.date < self._start_date:
            raise ValidationError("Progress log date cannot be before the habit's start date.")
        if progress_log.date > utctoday():
            raise ValidationError("Progress log date cannot be in the future.")
        if self._find_log(progress_log.date) is not None:
            raise DuplicateProgressLogError(f"A progress log already exists for date: {progress_log.date.isoformat()}")

        self._progress_logs.append(progress_log)
        self.touch()

    def remove_progress_log(self, day: date | datetime) -> None:
        day = as_date(day)
        log = self._find_log(day)
        if log is None:
            raise ProgressLogNotFoundError(f"No progress log found for date: {day.isoformat()}")
        self._progress_logs.remove(log)
        self.touch()

    def update_progress_log(self, progress_log: ProgressLog) -> None:
        if progress_log is None:
            raise MissingArgumentError("progress_log cannot be None")
        log = self._find_log(progress_log.date)
        if log is None:
            raise ProgressLogNotFoundError(f"No progress log found for date: {progress_log.date.isoformat()}")

        log.mark(progress_log.is_completed, progress_log.note)
        self.touch()

    def has_tag(self, tag: str) -> bool:
        needle = tag.casefold()
        return any(existing.casefold() == needle for existing in self._tags)

    def add_tag(self, tag: str) -> None:
        tag = _check_tag(tag)
        if not self.has_tag(tag):
            self._tags.append(tag)
            self.touch()

    def get_completion_rate(self, start_date: date | datetime, end_date: date | datetime) -> float:
        """Percentage (0-100) of calendar days in ``[start_date, end_date]`` with a completed log.

        Days without any log count as not completed.
        """
        start = as_date(start_date)
        end = as_date(end_date)
        if start > end:
            raise ValidationError("The start date cannot be later than the end date.")

        total_days = (end - start).days + 1
        in_range = [log for log in self._progress_logs if start <= log.date <= end]
        if total_days <= 0 or not in_range:
            return 0.0

        completed = sum(1 for log in in_range if log.is_completed)
        return completed / total_days * 100

    def _logs_until(self, as_of: date | datetime | None) -> list[ProgressLog]:
        cutoff = as_date(as_of) if as_of is not None else utctoday()
        return sorted(
            (log for log in self._progress_logs if log.date <= cutoff),
            key=lambda log: log.date,
            reverse=True,
        )

    def get_streak(self, as_of: date | datetime | None = None) -> int:
        """Consecutive completed days counted back from the latest log on or before ``as_of``.

        Counting stops at the first incomplete log or at the first gap of more
        than one calendar day.
        """
        streak = 0
        previous: date | None = None
        for log in self._logs_until(as_of):
            if not log.is_completed:
                break
            if previous is not None and (previous - log.date).days > 1:
                break
            streak += 1
            previous = log.date
        return streak

    def get_longest_streak(self, as_of: date | datetime | None = None) -> int:
        best = 0
        current = 0
        previous: date | None = None
        for log in self._logs_until(as_of):
            if not log.is_completed:
                current = 0
                previous = None
                continue
            if previous is not None and (previous - log.date).days == 1:
                current += 1
            else:
                current = 1
            best = max(best, current)
            previous = log.date
        return best

    def get_next_due_date(self, last_completed_date: date | datetime) -> date:
        last = as_date(last_completed_date)
        if last < self._start_date:
            raise ValidationError(
                f"The last completed date ({last:%Y-%m-%d}) cannot be earlier than "
                f"the start date ({self._start_date:%Y-%m-%d})."
            )

        if self.frequency_unit == FrequencyUnit.DAILY:
            return last + timedelta(days=self._frequency)
        if self.frequency_unit == FrequencyUnit.WEEKLY:
            return last + timedelta(days=self._frequency * 7)
        if self.frequency_unit == FrequencyUnit.MONTHLY:
            return last + relativedelta(months=self._frequency)
        raise UnsupportedFrequencyUnitError(f"Unsupported frequency unit: {self.frequency_unit!r}")

    @staticmethod
    def get_habits_by_category(habits: Iterable["Habit"], category: HabitCategory) -> list["Habit"]:
        return [habit for habit in habits if habit.category == category]

    @staticmethod
    def get_habits_by_tag(habits: Iterable["Habit"], tag: str) -> list["Habit"]:
        tag = _check_tag(tag)
        return [habit for habit in habits or [] if habit.has_tag(tag)]

    def __repr__(self) -> str:
        return (
            f"Habit(id={self.id}, name={self._name!r}, category={self.category}, "
            f"frequency={self._frequency} {self.frequency_unit})"
        )
