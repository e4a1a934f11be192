"""
Vocabulary Review Session.

Walks one batch from select_due_words, applying record_review to each
answer and keeping the running tallies shown at the end of a session.
The session owns its copy of the batch; the caller persists the records
returned by answer() or updated_progress().
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime

from loguru import logger

from learnhub.core.errors import SessionFinishedError
from learnhub.core.models import VocabularyProgress
from learnhub.core.timeutil import resolve_now, round_half_up
from learnhub.vocabulary.review_queue import DEFAULT_MAX_WORDS, select_due_words
from learnhub.vocabulary.sm2 import SM2Scheduler


@dataclass
class ReviewSession:
    """A vocabulary review session in progress."""

    words: list[VocabularyProgress] = field(default_factory=list)
    started_at: datetime | None = None
    current_index: int = 0
    correct_count: int = 0
    incorrect_count: int = 0
    scheduler: SM2Scheduler = field(default_factory=SM2Scheduler, repr=False)

    @classmethod
    def start(
        cls,
        all_progress: Sequence[VocabularyProgress],
        max_words: int = DEFAULT_MAX_WORDS,
        now: datetime | None = None,
        scheduler: SM2Scheduler | None = None,
    ) -> ReviewSession:
        """Select a batch and open a session over it."""
        now = resolve_now(now)
        words = select_due_words(all_progress, max_words=max_words, now=now)
        logger.info(f"Review session started with {len(words)} words")
        return cls(words=list(words), started_at=now, scheduler=scheduler or SM2Scheduler())

    @property
    def current(self) -> VocabularyProgress | None:
        """Word currently under review, or None when finished."""
        if self.is_finished:
            return None
        return self.words[self.current_index]

    @property
    def is_finished(self) -> bool:
        return self.current_index >= len(self.words)

    @property
    def remaining(self) -> int:
        return max(0, len(self.words) - self.current_index)

    @property
    def accuracy(self) -> int:
        """Percentage of correct answers so far (0 before any answer)."""
        answered = self.correct_count + self.incorrect_count
        if answered == 0:
            return 0
        return round_half_up(self.correct_count / answered * 100)

    def answer(self, quality: int, now: datetime | None = None) -> VocabularyProgress:
        """
        Grade the current word and advance.

        Args:
            quality: Recall quality 0-5
            now: Review time (defaults to current UTC time)

        Returns:
            Updated progress for the word just answered

        Raises:
            SessionFinishedError: no words left
            InvalidQualityRatingError: quality outside 0-5 (session unchanged)
        """
        word = self.current
        if word is None:
            raise SessionFinishedError("Review session has no words left")

        updated = self.scheduler.record_review(word, quality, now=now)
        self.words[self.current_index] = updated

        if quality >= self.scheduler.config.pass_quality:
            self.correct_count += 1
        else:
            self.incorrect_count += 1
        self.current_index += 1

        if self.is_finished:
            logger.info(
                f"Review session finished: {self.correct_count} correct, "
                f"{self.incorrect_count} incorrect ({self.accuracy}%)"
            )
        return updated

    def updated_progress(self) -> list[VocabularyProgress]:
        """Records answered so far, in session order."""
        return list(self.words[: self.current_index])
