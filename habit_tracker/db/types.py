from __future__ import annotations

from sqlalchemy.types import Text, TypeDecorator

from habit_tracker.domain.entities.habit import TAG_SEPARATOR


class StringList(TypeDecorator):
    """Stores a list of strings as a single comma-delimited text column."""

    impl = Text
    cache_ok = True

    separator = TAG_SEPARATOR

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return self.separator.join(value)

    def process_result_value(self, value, dialect):
        if not value:
            return []
        return [item for item in value.split(self.separator) if item]
