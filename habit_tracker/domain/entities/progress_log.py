from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import Optional

from habit_tracker.domain.entities.base import EntityBase, as_date, is_future
from habit_tracker.domain.exceptions import ValidationError


class ProgressLog(EntityBase):
    """One dated observation of whether a habit was performed."""

    def __init__(self, date: date | datetime, is_completed: bool = False, note: Optional[str] = None) -> None:
        if date is None:
            raise ValidationError("The date is required.")
        if is_future(date):
            raise ValidationError("The date cannot be in the future.")
        super().__init__()
        self._date = as_date(date)
        self.is_completed = bool(is_completed)
        self.note = note

    @classmethod
    def restore(
        cls,
        *,
        id: uuid.UUID | None,
        date: date,
        is_completed: bool,
        note: str | None,
        created_at: datetime,
        updated_at: datetime,
    ) -> "ProgressLog":
        log = cls.__new__(cls)
        EntityBase.__init__(log)
        log._date = as_date(date)
        log.is_completed = bool(is_completed)
        log.note = note
        log._restore_audit(id=id, created_at=created_at, updated_at=updated_at)
        return log

    @property
    def date(self) -> date:
        return self._date

    def mark(self, is_completed: bool, note: str | None) -> None:
        self.is_completed = bool(is_completed)
        self.note = note
        self.touch()

    def __repr__(self) -> str:
        return f"ProgressLog(date={self._date.isoformat()}, is_completed={self.is_completed}, note={self.note!r})"
