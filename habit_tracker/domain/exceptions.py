from __future__ import annotations


class HabitTrackerError(Exception):
    """Base class for errors raised by the habit tracker domain."""


class ValidationError(HabitTrackerError, ValueError):
    """Input rejected by a constructor, setter or query."""


class MissingArgumentError(HabitTrackerError, TypeError):
    """A required argument was None."""


class DuplicateProgressLogError(HabitTrackerError, ValueError):
    """A habit already owns a progress log for the given date."""


class ProgressLogNotFoundError(HabitTrackerError, LookupError):
    """No progress log exists for the given date."""


class HabitNotFoundError(HabitTrackerError, LookupError):
    """No habit exists for the given id."""


class UnsupportedFrequencyUnitError(HabitTrackerError, NotImplementedError):
    """The frequency unit is outside the supported set."""
