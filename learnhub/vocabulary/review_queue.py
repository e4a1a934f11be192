"""
Review queue selection and study statistics.

Principles:
1. Due words always come first, most overdue first
2. Among equally overdue words, harder ones (lower ease) first
3. New words fill the remaining quota in their input order
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from loguru import logger

from learnhub.core.models import StudyStats, VocabularyProgress, WordStatus
from learnhub.core.timeutil import resolve_now, round_half_up

DEFAULT_MAX_WORDS = 20


def select_due_words(
    all_progress: Sequence[VocabularyProgress],
    max_words: int = DEFAULT_MAX_WORDS,
    now: datetime | None = None,
) -> list[VocabularyProgress]:
    """
    Pick the next study batch.

    Args:
        all_progress: Every progress record for the student
        max_words: Batch size limit
        now: Reference time (defaults to current UTC time)

    Returns:
        Up to max_words records, due words first
    """
    if max_words <= 0:
        return []

    now = resolve_now(now)

    # Earliest due date == most overdue
    due = sorted(
        (p for p in all_progress if p.is_due(now)),
        key=lambda p: (p.next_review_at, p.ease_factor),
    )

    if len(due) < max_words:
        selected = {id(p) for p in due}
        fill = [p for p in all_progress if p.status == WordStatus.NEW and id(p) not in selected]
        due.extend(fill[: max_words - len(due)])

    batch = due[:max_words]
    logger.debug(f"Selected {len(batch)} of {len(all_progress)} words (max {max_words})")
    return batch


def compute_study_stats(
    all_progress: Sequence[VocabularyProgress],
    now: datetime | None = None,
) -> StudyStats:
    """
    Summarize a vocabulary set.

    "Today" is the UTC calendar date of now. Accuracy is the share of
    correct reviews across words studied today, as a whole percentage.
    """
    now = resolve_now(now)
    today = now.date()

    by_status = {status: 0 for status in WordStatus}
    for progress in all_progress:
        by_status[progress.status] += 1

    studied_today = [
        p for p in all_progress if p.last_reviewed_at is not None and p.last_reviewed_at.date() == today
    ]
    reviewed = sum(p.times_reviewed for p in studied_today)
    correct = sum(p.times_correct for p in studied_today)
    accuracy = round_half_up(correct / reviewed * 100) if reviewed else 0

    return StudyStats(
        total_words=len(all_progress),
        new_words=by_status[WordStatus.NEW],
        learning_words=by_status[WordStatus.LEARNING],
        review_words=by_status[WordStatus.REVIEW],
        mastered_words=by_status[WordStatus.MASTERED],
        due_today=sum(1 for p in all_progress if p.is_due(now)),
        studied_today=len(studied_today),
        accuracy_today=accuracy,
    )
