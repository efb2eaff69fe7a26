from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from habit_tracker.domain.enums import HabitCategory

DEFAULT_TAGS: Mapping[HabitCategory, tuple[str, ...]] = MappingProxyType(
    {
        HabitCategory.WELLNESS: ("Exercise", "Fitness", "Mental Health"),
        HabitCategory.PRODUCTIVITY: ("Time Management", "Focus", "Deadlines"),
        HabitCategory.PERSONAL_DEVELOPMENT: ("Learning", "Growth", "SkillBuilding"),
        HabitCategory.HOBBIES: ("Recreation", "Relaxation", "Creativity"),
        HabitCategory.RELATIONSHIPS: ("Family", "Friends", "Connection"),
        HabitCategory.FINANCE: ("Budgeting", "Saving", "Investing"),
        HabitCategory.SPIRITUALITY: ("Meditation", "Mindfulness", "Faith"),
        HabitCategory.OTHER: ("Miscellaneous", "Uncategorized"),
    }
)


class DefaultTagsProvider:
    """Starter tags assigned to a habit from its category."""

    @staticmethod
    def get_tags_for_category(category: HabitCategory) -> list[str]:
        # fresh list per call; unknown values get no tags
        try:
            return list(DEFAULT_TAGS.get(category, ()))
        except TypeError:
            return []
