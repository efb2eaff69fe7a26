from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone

import pytest

from habit_tracker.domain.entities.progress_log import ProgressLog
from habit_tracker.domain.exceptions import ValidationError


def test_defaults(today):
    log = ProgressLog(today)
    assert log.date == today
    assert log.is_completed is False
    assert log.note is None
    assert log.id is None


def test_datetime_is_normalized_to_date():
    now = datetime.now(timezone.utc)
    assert ProgressLog(now, True).date == now.date()


def test_future_date_is_rejected(today):
    with pytest.raises(ValidationError):
        ProgressLog(today + timedelta(days=1))


def test_missing_date_is_rejected():
    with pytest.raises(ValidationError):
        ProgressLog(None)


def test_date_is_read_only(today):
    log = ProgressLog(today)
    with pytest.raises(AttributeError):
        log.date = today - timedelta(days=1)


def test_mark_updates_status_and_note(today):
    log = ProgressLog(today)
    log.mark(True, "done")
    assert log.is_completed is True
    assert log.note == "done"
    assert log.updated_at >= log.created_at


def test_restore_keeps_stored_values(today):
    created = datetime(2024, 1, 2, 8, tzinfo=timezone.utc)
    updated = datetime(2024, 1, 3, 8, tzinfo=timezone.utc)
    log_id = uuid.uuid4()

    log = ProgressLog.restore(
        id=log_id,
        date=today,
        is_completed=True,
        note="kept",
        created_at=created,
        updated_at=updated,
    )

    assert log.id == log_id
    assert log.created_at == created
    assert log.updated_at == updated
    assert log.note == "kept"


def test_restore_rejects_inverted_audit(today):
    with pytest.raises(ValidationError):
        ProgressLog.restore(
            id=None,
            date=today,
            is_completed=False,
            note=None,
            created_at=datetime(2024, 1, 3, tzinfo=timezone.utc),
            updated_at=datetime(2024, 1, 2, tzinfo=timezone.utc),
        )
