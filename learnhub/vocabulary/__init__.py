"""
Vocabulary Spaced Repetition Module.

Provides:
- SM2Scheduler: SM-2 variant for ease, interval and status updates
- Review queue selection (overdue first, then new words)
- Study statistics
- ReviewSession: batch walker for a single sitting
"""

from learnhub.vocabulary.review_queue import (
    DEFAULT_MAX_WORDS,
    compute_study_stats,
    select_due_words,
)
from learnhub.vocabulary.session import ReviewSession
from learnhub.vocabulary.sm2 import (
    SM2Config,
    SM2Scheduler,
    initialize_progress,
    interval_label,
    quality_from_response,
    record_review,
)

__all__ = [
    # SM-2
    "SM2Config",
    "SM2Scheduler",
    "initialize_progress",
    "record_review",
    "quality_from_response",
    "interval_label",
    # Queue
    "DEFAULT_MAX_WORDS",
    "select_due_words",
    "compute_study_stats",
    # Session
    "ReviewSession",
]
