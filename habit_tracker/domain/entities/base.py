from __future__ import annotations

import uuid
from datetime import date, datetime, timezone

from habit_tracker.domain.exceptions import ValidationError


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def utctoday() -> date:
    return utcnow().date()


def as_date(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raise ValidationError(f"Expected a date, got {type(value).__name__}")


def is_future(value: date | datetime) -> bool:
    """True if ``value`` lies after the current instant (naive datetimes are UTC)."""
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value > utcnow()
    return as_date(value) > utctoday()


class EntityBase:
    """Identity and audit timestamps shared by habits and progress logs."""

    def __init__(self) -> None:
        now = utcnow()
        self.id: uuid.UUID | None = None
        self._created_at = now
        self._updated_at = now

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    @updated_at.setter
    def updated_at(self, value: datetime) -> None:
        if value < self._created_at:
            raise ValidationError("updated_at cannot be earlier than created_at.")
        self._updated_at = value

    def touch(self) -> None:
        self._updated_at = max(utcnow(), self._created_at)

    def _restore_audit(self, *, id: uuid.UUID | None, created_at: datetime, updated_at: datetime) -> None:
        if updated_at < created_at:
            raise ValidationError("updated_at cannot be earlier than created_at.")
        self.id = id
        self._created_at = created_at
        self._updated_at = updated_at
