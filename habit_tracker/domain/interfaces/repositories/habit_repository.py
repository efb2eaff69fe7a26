from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from typing import Iterable, Optional

from habit_tracker.domain.entities.habit import Habit
from habit_tracker.domain.enums import HabitCategory


class HabitRepository(ABC):
    @abstractmethod
    async def add(self, habit: Habit) -> Habit:
        raise NotImplementedError

    @abstractmethod
    async def get(self, habit_id: uuid.UUID) -> Optional[Habit]:
        raise NotImplementedError

    @abstractmethod
    async def list_all(self) -> Iterable[Habit]:
        raise NotImplementedError

    @abstractmethod
    async def list_by_category(self, category: HabitCategory) -> Iterable[Habit]:
        raise NotImplementedError

    @abstractmethod
    async def save(self, habit: Habit) -> None:
        raise NotImplementedError

    @abstractmethod
    async def delete(self, habit_id: uuid.UUID) -> None:
        raise NotImplementedError
