from __future__ import annotations

import uuid
from datetime import timedelta

import pytest

from habit_tracker.application.services.habit_service import HabitService
from habit_tracker.domain.enums import FrequencyUnit, HabitCategory
from habit_tracker.domain.exceptions import (
    DuplicateProgressLogError,
    HabitNotFoundError,
    ProgressLogNotFoundError,
    ValidationError,
)


@pytest.mark.asyncio
async def test_create_and_get_habit(habit_service, today):
    habit = await habit_service.create_habit(
        "Meditate",
        today - timedelta(days=3),
        category=HabitCategory.SPIRITUALITY,
        frequency=1,
        frequency_unit=FrequencyUnit.DAILY,
        tags=["Morning"],
    )

    loaded = await habit_service.get_habit(habit.id)
    assert loaded.name == "Meditate"
    assert loaded.tags == ("Meditation", "Mindfulness", "Faith", "Morning")


@pytest.mark.asyncio
async def test_create_rejects_invalid_input(habit_service, today):
    with pytest.raises(ValidationError):
        await habit_service.create_habit("  ", today)
    assert await habit_service.list_habits() == []


@pytest.mark.asyncio
async def test_get_unknown_habit_raises(habit_service):
    with pytest.raises(HabitNotFoundError):
        await habit_service.get_habit(uuid.uuid4())


@pytest.mark.asyncio
async def test_log_update_and_remove_progress(habit_service, today):
    habit = await habit_service.create_habit("Read", today - timedelta(days=5))

    await habit_service.log_progress(habit.id, today, False, "busy")
    with pytest.raises(DuplicateProgressLogError):
        await habit_service.log_progress(habit.id, today, True)

    updated = await habit_service.update_progress(habit.id, today, True, "read at night")
    assert updated.is_completed is True

    loaded = await habit_service.get_habit(habit.id)
    assert [(log.date, log.is_completed, log.note) for log in loaded.progress_logs] == [
        (today, True, "read at night")
    ]

    await habit_service.remove_progress(habit.id, today)
    assert (await habit_service.get_habit(habit.id)).progress_logs == ()

    with pytest.raises(ProgressLogNotFoundError):
        await habit_service.remove_progress(habit.id, today)


@pytest.mark.asyncio
async def test_record_progress_adds_then_overwrites(habit_service, today):
    habit = await habit_service.create_habit("Read", today - timedelta(days=5))

    await habit_service.record_progress(habit.id, today, True, "first")
    await habit_service.record_progress(habit.id, today, False, "second")

    logs = (await habit_service.get_habit(habit.id)).progress_logs
    assert len(logs) == 1
    assert logs[0].is_completed is False
    assert logs[0].note == "second"


@pytest.mark.asyncio
async def test_log_progress_for_unknown_habit_raises(habit_service, today):
    with pytest.raises(HabitNotFoundError):
        await habit_service.log_progress(uuid.uuid4(), today, True)


@pytest.mark.asyncio
async def test_add_tag_and_find(habit_service, today):
    coding = await habit_service.create_habit("Code kata", today, category=HabitCategory.PRODUCTIVITY)
    await habit_service.create_habit("Journal", today, category=HabitCategory.PERSONAL_DEVELOPMENT)

    await habit_service.add_tag(coding.id, "Programming")

    found = await habit_service.find_by_tag("programming")
    assert [h.name for h in found] == ["Code kata"]

    productivity = await habit_service.find_by_category(HabitCategory.PRODUCTIVITY)
    assert [h.name for h in productivity] == ["Code kata"]

    with pytest.raises(ValidationError):
        await habit_service.find_by_tag(" ")


@pytest.mark.asyncio
async def test_delete_habit(habit_service, today):
    habit = await habit_service.create_habit("Read", today)
    await habit_service.delete_habit(habit.id)

    assert await habit_service.list_habits() == []
    with pytest.raises(HabitNotFoundError):
        await habit_service.delete_habit(habit.id)


@pytest.mark.asyncio
async def test_summarize(habit_service, today):
    habit = await habit_service.create_habit("Walk", today - timedelta(days=10))
    for offset in range(3):
        await habit_service.log_progress(habit.id, today - timedelta(days=offset), True)
    await habit_service.log_progress(habit.id, today - timedelta(days=3), False)
    await habit_service.log_progress(habit.id, today - timedelta(days=6), True)

    summary = await habit_service.summarize(habit.id, today)

    # window clamps to the start date: 11 days, 4 completed
    assert summary.window_start == today - timedelta(days=10)
    assert summary.window_end == today
    assert summary.completion_rate == pytest.approx(4 / 11 * 100)
    assert summary.current_streak == 3
    assert summary.longest_streak == 3
    assert summary.next_due_date == today + timedelta(days=1)


@pytest.mark.asyncio
async def test_summarize_without_logs_uses_start_date(habit_service, today):
    start = today - timedelta(days=40)
    habit = await habit_service.create_habit("Budget", start, frequency_unit=FrequencyUnit.WEEKLY)

    summary = await habit_service.summarize(habit.id)

    assert summary.window_start == today - timedelta(days=29)
    assert summary.completion_rate == 0.0
    assert summary.current_streak == 0
    assert summary.longest_streak == 0
    assert summary.next_due_date == start + timedelta(days=7)


@pytest.mark.asyncio
async def test_summarize_before_start_date(habit_service, today):
    habit = await habit_service.create_habit("Walk", today)

    summary = await habit_service.summarize(habit.id, today - timedelta(days=1))

    assert summary.completion_rate == 0.0
    assert summary.next_due_date == today + timedelta(days=1)


@pytest.mark.asyncio
@pytest.mark.parametrize("window", [0, -7])
async def test_non_positive_stats_window_is_rejected(habit_repository, window):
    with pytest.raises(ValidationError):
        HabitService(habit_repository, stats_window_days=window)


@pytest.mark.asyncio
async def test_explicit_stats_window_is_used(habit_repository, today):
    service = HabitService(habit_repository, stats_window_days=1)
    habit = await service.create_habit("Walk", today - timedelta(days=10))
    await service.log_progress(habit.id, today, True)

    summary = await service.summarize(habit.id, today)

    assert summary.window_start == today
    assert summary.completion_rate == 100.0
