"""
Scheduler Errors.

Every error the engines raise derives from SchedulerError so callers can
catch the whole family with one clause. All of them are raised before a new
state value is built.
"""

from __future__ import annotations


class SchedulerError(ValueError):
    """Base class for invalid input rejected by the schedulers."""
    pass


class InvalidRecordError(SchedulerError):
    """Raised when a PerformanceRecord has out-of-range fields."""

    def __init__(self, field: str, value: object, reason: str):
        self.field = field
        self.value = value
        super().__init__(f"Invalid performance record: {field}={value!r} ({reason})")


class InvalidQualityRatingError(SchedulerError):
    """Raised when a review quality is not an integer in 0-5."""

    def __init__(self, quality: object):
        self.quality = quality
        super().__init__(f"Quality rating must be an integer 0-5, got {quality!r}")


class InvalidDifficultyError(SchedulerError):
    """Raised by strict state construction for a difficulty outside 1-5."""

    def __init__(self, difficulty: object, minimum: int = 1, maximum: int = 5):
        self.difficulty = difficulty
        super().__init__(f"Difficulty must be between {minimum} and {maximum}, got {difficulty!r}")


class SessionFinishedError(SchedulerError):
    """Raised when answering a review session that has no words left."""
    pass
