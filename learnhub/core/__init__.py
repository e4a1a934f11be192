"""
Core Module - Shared models and errors.

Components:
- models: PerformanceRecord, AdaptiveState, VocabularyProgress, StudyStats
- errors: SchedulerError and its subclasses
- timeutil: UTC normalization and half-up rounding

Design Principle:
learnhub.adaptive and learnhub.vocabulary import their value types from
here rather than defining their own.
"""

from learnhub.core.errors import (
    InvalidDifficultyError,
    InvalidQualityRatingError,
    InvalidRecordError,
    SchedulerError,
    SessionFinishedError,
)
from learnhub.core.models import (
    MAX_DIFFICULTY,
    MIN_DIFFICULTY,
    AdaptiveState,
    PerformanceRecord,
    StudyStats,
    VocabularyProgress,
    WordStatus,
)

__all__ = [
    # Models
    "AdaptiveState",
    "PerformanceRecord",
    "StudyStats",
    "VocabularyProgress",
    "WordStatus",
    "MIN_DIFFICULTY",
    "MAX_DIFFICULTY",
    # Errors
    "SchedulerError",
    "InvalidRecordError",
    "InvalidQualityRatingError",
    "InvalidDifficultyError",
    "SessionFinishedError",
]
