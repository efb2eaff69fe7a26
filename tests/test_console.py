from __future__ import annotations

from datetime import timedelta

import pytest

from habit_tracker.console.application import Application
from habit_tracker.domain.enums import HabitCategory
from habit_tracker.infrastructure.di import create_habit_service


class ScriptedPrompt:
    """Answers prompts from a fixed script; an empty answer takes the default."""

    def __init__(self, *answers: str) -> None:
        self._answers = list(answers)
        self.asked: list[str] = []

    def __call__(self, text: str, default=None, **kwargs) -> str:
        self.asked.append(text)
        answer = self._answers.pop(0)
        if answer == "" and default is not None:
            return default
        return answer


async def _run(session_factory, *answers: str) -> list[str]:
    lines: list[str] = []
    await Application(session_factory, prompt=ScriptedPrompt(*answers), echo=lines.append).run()
    return lines


async def _create(session_factory, name: str, start, category=HabitCategory.OTHER):
    async with session_factory() as session:
        habit = await create_habit_service(session).create_habit(name, start, category=category)
        await session.commit()
    return habit


async def _load(session_factory, habit_id):
    async with session_factory() as session:
        return await create_habit_service(session).get_habit(habit_id)


async def test_view_empty_and_exit(session_factory):
    lines = await _run(session_factory, "1", "6")

    assert lines[0] == "Welcome to the Habit Tracker!"
    assert "No habits found." in lines
    assert lines[-1] == "Goodbye!"


async def test_invalid_choice_reprompts(session_factory):
    lines = await _run(session_factory, "9", "abc", "6")

    assert lines.count("Invalid choice. Please try again.") == 2
    assert lines[-1] == "Goodbye!"


async def test_add_habit_then_list(session_factory):
    lines = await _run(session_factory, "2", "Meditate", "spirituality", "2", "weekly", "1", "6")

    assert "Habit added successfully!" in lines
    assert "- Meditate (Category: Spirituality, Frequency: 2 Weekly)" in lines


async def test_add_habit_non_integer_frequency_falls_back_to_one(session_factory):
    lines = await _run(session_factory, "2", "Yoga", "Wellness", "often", "", "1", "6")

    assert "- Yoga (Category: Wellness, Frequency: 1 Daily)" in lines


async def test_add_habit_with_unknown_category_shows_error_and_continues(session_factory):
    lines = await _run(session_factory, "2", "Yoga", "Gardening", "1", "6")

    errors = [line for line in lines if line.startswith("Error:")]
    assert len(errors) == 1
    assert "Gardening" in errors[0]
    assert "No habits found." in lines
    assert lines[-1] == "Goodbye!"


async def test_log_progress_adds_then_updates(session_factory, today):
    habit = await _create(session_factory, "Read", today - timedelta(days=5))

    lines = await _run(session_factory, "3", "1", "", "y", "two chapters", "6")
    assert "Progress logged successfully!" in lines

    logs = (await _load(session_factory, habit.id)).progress_logs
    assert [(log.date, log.is_completed, log.note) for log in logs] == [(today, True, "two chapters")]

    await _run(session_factory, "3", "1", today.isoformat(), "n", "", "6")

    logs = (await _load(session_factory, habit.id)).progress_logs
    assert [(log.date, log.is_completed, log.note) for log in logs] == [(today, False, None)]


async def test_log_progress_rejects_bad_input(session_factory, today):
    habit = await _create(session_factory, "Read", today - timedelta(days=5))

    lines = await _run(
        session_factory,
        "3", "7",
        "3", "1", "yesterday",
        "3", "1", (today + timedelta(days=1)).isoformat(), "y", "",
        "6",
    )

    assert "Invalid habit selection." in lines
    assert "Invalid date format." in lines
    assert any(line.startswith("Error:") and "future" in line for line in lines)
    assert (await _load(session_factory, habit.id)).progress_logs == ()


async def test_log_progress_without_habits(session_factory):
    lines = await _run(session_factory, "3", "6")
    assert "No habits found." in lines


async def test_show_statistics(session_factory, today):
    await _create(session_factory, "Walk", today - timedelta(days=1))

    lines = await _run(
        session_factory,
        "3", "1", (today - timedelta(days=1)).isoformat(), "y", "",
        "3", "1", "", "y", "",
        "4", "1",
        "6",
    )

    assert "Statistics for Walk:" in lines
    assert any(line.strip().startswith("Completion rate") and line.endswith("100.0%") for line in lines)
    assert "  Current streak: 2 days" in lines
    assert "  Longest streak: 2 days" in lines
    assert f"  Next due date: {today + timedelta(days=1):%Y-%m-%d}" in lines


async def test_find_by_tag(session_factory, today):
    await _create(session_factory, "Stretch", today, HabitCategory.WELLNESS)
    await _create(session_factory, "Budget", today, HabitCategory.FINANCE)

    lines = await _run(session_factory, "5", "fitness", "5", "Nope", "5", "", "6")

    assert "- Stretch (Category: Wellness, Frequency: 1 Daily)" in lines
    assert not any(line.startswith("- Budget") for line in lines)
    assert "No habits found with tag 'Nope'." in lines
    assert "Error: Tag cannot be null or empty." in lines


async def test_unexpected_errors_propagate():
    def broken_factory():
        raise RuntimeError("database unavailable")

    with pytest.raises(RuntimeError, match="database unavailable"):
        await _run(broken_factory, "1")


async def test_log_progress_date_prompt_names_utc(session_factory, today):
    await _create(session_factory, "Read", today - timedelta(days=5))
    prompt = ScriptedPrompt("3", "1", "", "y", "", "6")

    await Application(session_factory, prompt=prompt, echo=lambda line: None).run()

    date_prompts = [text for text in prompt.asked if text.startswith("Enter date")]
    assert date_prompts == ["Enter date (YYYY-MM-DD, UTC)"]
