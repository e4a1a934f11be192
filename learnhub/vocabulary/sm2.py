"""
SM-2 Spaced Repetition for Vocabulary.

Variant of SuperMemo 2 used for word reviews:
- Ease factor: EF' = EF + (0.1 - (5 - q) * (0.08 + (5 - q) * 0.02)), floor 1.3
- Interval: failed review -> 1 day; 1st review -> 1; 2nd -> 3;
  afterwards round(interval * EF')
- Status: mastered / review / learning from cumulative counts

SM-2 Quality Scale:
0 - Complete blackout, wrong response
1 - Incorrect, but upon seeing answer remembered
2 - Incorrect, but answer seemed easy to recall
3 - Correct, but with significant difficulty
4 - Correct, with some hesitation
5 - Correct, with perfect recall
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timedelta

from loguru import logger

from learnhub.core.errors import InvalidQualityRatingError
from learnhub.core.models import VocabularyProgress, WordStatus
from learnhub.core.timeutil import resolve_now, round_half_up

# =============================================================================
# SM-2 Algorithm
# =============================================================================


@dataclass
class SM2Config:
    """Configuration for the SM-2 variant."""

    initial_ease: float = 2.5
    minimum_ease: float = 1.3
    first_interval: int = 1  # Days after the first review
    second_interval: int = 3  # Days after the second review
    failed_interval: int = 1  # Days after any failed review
    pass_quality: int = 3  # Lowest quality counted as correct

    # Status thresholds
    mastery_min_reviews: int = 5
    mastery_accuracy: float = 0.9
    mastery_interval: int = 30
    review_min_reviews: int = 3


class SM2Scheduler:
    """
    Implements the SM-2 spaced repetition algorithm for vocabulary.

    Each word carries:
    - Ease factor (EF): how easy the word is (2.5 default, min 1.3)
    - Interval: days until the next review
    - Review counts: total, correct and incorrect
    """

    def __init__(self, config: SM2Config | None = None):
        """
        Initialize SM-2 scheduler.

        Args:
            config: Custom configuration (uses defaults if None)
        """
        self.config = config or SM2Config()

    def initialize_progress(
        self,
        word_id: str,
        student_id: str,
        now: datetime | None = None,
    ) -> VocabularyProgress:
        """Create the record for a word entering a student's curriculum, due immediately."""
        return VocabularyProgress(
            word_id=word_id,
            student_id=student_id,
            next_review_at=resolve_now(now),
            ease_factor=self.config.initial_ease,
            interval=0,
            status=WordStatus.NEW,
            last_reviewed_at=None,
        )

    def record_review(
        self,
        progress: VocabularyProgress,
        quality: int,
        now: datetime | None = None,
    ) -> VocabularyProgress:
        """
        Apply one review to a word.

        Args:
            progress: Current record for the word
            quality: Recall quality 0-5
            now: Review time (defaults to current UTC time)

        Returns:
            New VocabularyProgress with updated counts, ease, interval and status

        Raises:
            InvalidQualityRatingError: quality is not an integer in 0-5
        """
        if isinstance(quality, bool) or not isinstance(quality, int) or not 0 <= quality <= 5:
            raise InvalidQualityRatingError(quality)

        cfg = self.config
        now = resolve_now(now)
        passed = quality >= cfg.pass_quality

        times_reviewed = progress.times_reviewed + 1
        times_correct = progress.times_correct + (1 if passed else 0)
        times_incorrect = progress.times_incorrect + (0 if passed else 1)

        # EF' = EF + (0.1 - (5 - q) * (0.08 + (5 - q) * 0.02))
        ef_delta = 0.1 - (5 - quality) * (0.08 + (5 - quality) * 0.02)
        new_ef = max(cfg.minimum_ease, progress.ease_factor + ef_delta)

        if not passed:
            new_interval = cfg.failed_interval
        elif times_reviewed == 1:
            new_interval = cfg.first_interval
        elif times_reviewed == 2:
            new_interval = cfg.second_interval
        else:
            new_interval = round_half_up(progress.interval * new_ef)

        status = self._status_for(times_reviewed, times_correct, new_interval)
        if status != progress.status:
            logger.debug(f"Word {progress.word_id}: {progress.status.value} -> {status.value}")

        return replace(
            progress,
            times_reviewed=times_reviewed,
            times_correct=times_correct,
            times_incorrect=times_incorrect,
            ease_factor=new_ef,
            interval=new_interval,
            status=status,
            last_reviewed_at=now,
            next_review_at=now + timedelta(days=new_interval),
        )

    def _status_for(self, times_reviewed: int, times_correct: int, interval: int) -> WordStatus:
        """
        Derive status from cumulative counts.

        A failed review on a word in review or mastered keeps the status
        from the counts; only the interval resets.
        """
        cfg = self.config
        accuracy = times_correct / times_reviewed if times_reviewed else 0.0

        if (
            times_reviewed >= cfg.mastery_min_reviews and accuracy >= cfg.mastery_accuracy
        ) or interval >= cfg.mastery_interval:
            return WordStatus.MASTERED
        if times_reviewed >= cfg.review_min_reviews:
            return WordStatus.REVIEW
        return WordStatus.LEARNING


def quality_from_response(
    is_correct: bool,
    response_ms: int,
    expected_ms: int = 10000,
) -> int:
    """
    Convert an answer to an SM-2 quality.

    Args:
        is_correct: Whether the answer was correct
        response_ms: Time taken to respond
        expected_ms: Expected response time

    Returns:
        Quality 0-5
    """
    if not is_correct:
        # Incorrect responses: 0-2
        if response_ms < expected_ms * 0.5:
            return 2  # Quick wrong = almost knew it
        elif response_ms < expected_ms:
            return 1
        else:
            return 0

    # Correct responses: 3-5
    if response_ms < expected_ms * 0.5:
        return 5
    elif response_ms < expected_ms:
        return 4
    else:
        return 3


def interval_label(interval: int) -> str:
    """Short display label for a review interval in days."""
    if interval == 0:
        return "New"
    if interval == 1:
        return "1 day"
    if interval < 7:
        return f"{interval} days"
    if interval < 30:
        weeks = round_half_up(interval / 7)
        return f"{weeks} week{'s' if weeks > 1 else ''}"
    months = round_half_up(interval / 30)
    return f"{months} month{'s' if months > 1 else ''}"


# =============================================================================
# Module-level API
# =============================================================================

_default_scheduler = SM2Scheduler()


def initialize_progress(word_id: str, student_id: str, now: datetime | None = None) -> VocabularyProgress:
    return _default_scheduler.initialize_progress(word_id, student_id, now=now)


def record_review(progress: VocabularyProgress, quality: int, now: datetime | None = None) -> VocabularyProgress:
    return _default_scheduler.record_review(progress, quality, now=now)
