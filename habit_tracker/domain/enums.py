from __future__ import annotations

from enum import Enum

from habit_tracker.domain.exceptions import ValidationError


class _ParsableEnum(str, Enum):
    @classmethod
    def parse(cls, text: str | None):
        """Case-insensitive lookup by value or member name. Fails closed."""
        needle = (text or "").strip().casefold()
        if needle:
            for member in cls:
                if needle in (member.value.casefold(), member.name.casefold()):
                    return member
        choices = ", ".join(member.value for member in cls)
        raise ValidationError(f"Unknown {cls.__name__} '{text}'. Expected one of: {choices}")

    def __str__(self) -> str:
        return self.value


class HabitCategory(_ParsableEnum):
    WELLNESS = "Wellness"
    PRODUCTIVITY = "Productivity"
    PERSONAL_DEVELOPMENT = "PersonalDevelopment"
    HOBBIES = "Hobbies"
    RELATIONSHIPS = "Relationships"
    FINANCE = "Finance"
    SPIRITUALITY = "Spirituality"
    OTHER = "Other"


class FrequencyUnit(_ParsableEnum):
    DAILY = "Daily"
    WEEKLY = "Weekly"
    MONTHLY = "Monthly"
