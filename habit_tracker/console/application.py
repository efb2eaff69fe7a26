from __future__ import annotations

from datetime import date
from typing import Awaitable, Callable

import click
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from habit_tracker.application.services.habit_service import HabitService
from habit_tracker.core.logging import log
from habit_tracker.domain.entities.base import utctoday
from habit_tracker.domain.entities.habit import Habit
from habit_tracker.domain.enums import FrequencyUnit, HabitCategory
from habit_tracker.domain.exceptions import HabitTrackerError
from habit_tracker.infrastructure.di import create_habit_service

MENU = """
1. View all habits
2. Add a new habit
3. Log progress for a habit
4. Show habit statistics
5. Find habits by tag
6. Exit"""

Action = Callable[[HabitService], Awaitable[None]]


def _describe(habit: Habit) -> str:
    return f"- {habit.name} (Category: {habit.category}, Frequency: {habit.frequency} {habit.frequency_unit})"


class Application:
    """Interactive menu over the habit service.

    ``prompt`` and ``echo`` default to click's; tests pass scripted stand-ins.
    Every action gets its own session and commits when it finishes cleanly.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        prompt: Callable[..., str] = click.prompt,
        echo: Callable[[str], None] = click.echo,
    ) -> None:
        self._session_factory = session_factory
        self._prompt = prompt
        self._echo = echo
        self._actions: dict[str, Action] = {
            "1": self._view_habits,
            "2": self._add_habit,
            "3": self._log_progress,
            "4": self._show_statistics,
            "5": self._find_by_tag,
        }

    async def run(self) -> None:
        self._echo("Welcome to the Habit Tracker!")
        while True:
            self._echo(MENU)
            choice = str(self._prompt("Choose an option")).strip()
            if choice == "6":
                self._echo("Goodbye!")
                return

            action = self._actions.get(choice)
            if action is None:
                self._echo("Invalid choice. Please try again.")
                continue
            await self._dispatch(action)

    async def _dispatch(self, action: Action) -> None:
        try:
            async with self._session_factory() as session:
                await action(create_habit_service(session))
                await session.commit()
        except HabitTrackerError as exc:
            log.warning("console_action_failed", action=action.__name__, error=str(exc))
            self._echo(f"Error: {exc}")
        except Exception:
            log.exception("console_action_crashed", action=action.__name__)
            raise

    async def _choose_habit(self, service: HabitService) -> Habit | None:
        habits = await service.list_habits()
        if not habits:
            self._echo("No habits found.")
            return None

        for number, habit in enumerate(habits, start=1):
            self._echo(f"{number}. {habit.name}")
        raw = str(self._prompt("Select a habit number")).strip()
        try:
            index = int(raw) - 1
        except ValueError:
            index = -1
        if not 0 <= index < len(habits):
            self._echo("Invalid habit selection.")
            return None
        return habits[index]

    async def _view_habits(self, service: HabitService) -> None:
        habits = await service.list_habits()
        if not habits:
            self._echo("No habits found.")
            return
        for habit in habits:
            self._echo(_describe(habit))

    async def _add_habit(self, service: HabitService) -> None:
        name = self._prompt("Enter habit name")
        category = HabitCategory.parse(
            self._prompt(f"Enter category ({', '.join(c.value for c in HabitCategory)})", default="Other")
        )
        try:
            frequency = int(str(self._prompt("Enter frequency (number)", default="1")).strip())
        except ValueError:
            frequency = 1
        unit = FrequencyUnit.parse(
            self._prompt(f"Enter frequency unit ({', '.join(u.value for u in FrequencyUnit)})", default="Daily")
        )

        await service.create_habit(name, utctoday(), category=category, frequency=frequency, frequency_unit=unit)
        self._echo("Habit added successfully!")

    async def _log_progress(self, service: HabitService) -> None:
        habit = await self._choose_habit(service)
        if habit is None:
            return

        raw_date = str(self._prompt("Enter date (YYYY-MM-DD, UTC)", default=utctoday().isoformat())).strip()
        try:
            day = date.fromisoformat(raw_date)
        except ValueError:
            self._echo("Invalid date format.")
            return
        completed = str(self._prompt("Completed? (y/n)", default="y")).strip().lower().startswith("y")
        note = str(self._prompt("Note (optional)", default="")).strip() or None

        await service.record_progress(habit.id, day, completed, note)
        self._echo("Progress logged successfully!")

    async def _show_statistics(self, service: HabitService) -> None:
        habit = await self._choose_habit(service)
        if habit is None:
            return

        summary = await service.summarize(habit.id)
        self._echo(f"Statistics for {summary.name}:")
        self._echo(
            f"  Completion rate ({summary.window_start:%Y-%m-%d} to {summary.window_end:%Y-%m-%d}): "
            f"{summary.completion_rate:.1f}%"
        )
        self._echo(f"  Current streak: {summary.current_streak} days")
        self._echo(f"  Longest streak: {summary.longest_streak} days")
        self._echo(f"  Next due date: {summary.next_due_date:%Y-%m-%d}")

    async def _find_by_tag(self, service: HabitService) -> None:
        tag = str(self._prompt("Enter tag", default="")).strip()
        habits = await service.find_by_tag(tag)
        if not habits:
            self._echo(f"No habits found with tag '{tag}'.")
            return
        for habit in habits:
            self._echo(_describe(habit))
