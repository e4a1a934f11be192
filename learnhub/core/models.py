"""
Core Scheduler Models.

Immutable value types shared by the difficulty engine and the
spaced-repetition scheduler. Engines never mutate these; they return
new instances built with dataclasses.replace().

Serialization uses the camelCase field names of the stored student
documents so callers can round-trip what they already persist.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from learnhub.core.errors import InvalidRecordError
from learnhub.core.timeutil import ensure_utc, format_instant, parse_instant, utc_now

MIN_DIFFICULTY = 1
MAX_DIFFICULTY = 5


class WordStatus(str, Enum):
    """
    Learning stage of a vocabulary item.

    Progression is new -> learning -> review -> mastered, but a failed
    review does not move an item back down.
    """

    NEW = "new"
    LEARNING = "learning"
    REVIEW = "review"
    MASTERED = "mastered"

    @property
    def display_name(self) -> str:
        """Human-readable name."""
        return self.value.title()

    @property
    def color(self) -> str:
        """Rich color for CLI display."""
        return {
            WordStatus.NEW: "blue",
            WordStatus.LEARNING: "yellow",
            WordStatus.REVIEW: "cyan",
            WordStatus.MASTERED: "green",
        }[self]


# ============================================================================
# Difficulty Adaptation
# ============================================================================


@dataclass(frozen=True)
class PerformanceRecord:
    """One graded answer event."""

    timestamp: datetime
    content_id: str
    difficulty: int  # Difficulty the item was presented at (1-5)
    correct: bool
    response_time_ms: int = 0
    hints_used: int = 0

    def validate(
        self,
        min_difficulty: int = MIN_DIFFICULTY,
        max_difficulty: int = MAX_DIFFICULTY,
    ) -> None:
        """
        Check field ranges.

        Raises:
            InvalidRecordError: difficulty out of range or negative timing/hint counts
        """
        if isinstance(self.difficulty, bool) or not isinstance(self.difficulty, int):
            raise InvalidRecordError("difficulty", self.difficulty, "must be an integer")
        if not min_difficulty <= self.difficulty <= max_difficulty:
            raise InvalidRecordError(
                "difficulty",
                self.difficulty,
                f"must be between {min_difficulty} and {max_difficulty}",
            )
        for field_name in ("response_time_ms", "hints_used"):
            value = getattr(self, field_name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidRecordError(field_name, value, "must be an integer")
            if value < 0:
                raise InvalidRecordError(field_name, value, "must be non-negative")

    def to_dict(self) -> dict[str, Any]:
        """Convert to the stored document shape."""
        return {
            "timestamp": format_instant(self.timestamp),
            "contentId": self.content_id,
            "difficulty": self.difficulty,
            "correct": self.correct,
            "responseTimeMs": self.response_time_ms,
            "hintsUsed": self.hints_used,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PerformanceRecord:
        """
        Create a record from a stored document.

        Older documents name the content field ``storyId``; both are accepted.
        A missing timestamp defaults to the current time.
        """
        content_id = data.get("contentId", data.get("storyId", ""))
        return cls(
            timestamp=parse_instant(data.get("timestamp")) or utc_now(),
            content_id=str(content_id),
            difficulty=data["difficulty"],
            correct=bool(data["correct"]),
            response_time_ms=data.get("responseTimeMs", 0),
            hints_used=data.get("hintsUsed", 0),
        )


@dataclass(frozen=True)
class AdaptiveState:
    """
    Per-student difficulty adaptation state.

    current_difficulty is authoritative and only changes when the caller
    commits a level change; recommended_difficulty, show_hint and
    encouragement are derived by the engine on every answer.
    """

    current_difficulty: int
    consecutive_correct: int = 0
    consecutive_incorrect: int = 0
    recent_performance: tuple[PerformanceRecord, ...] = field(default_factory=tuple)
    recommended_difficulty: int | None = None
    show_hint: bool = False
    encouragement: str | None = None

    def __post_init__(self):
        """Default the recommendation to the current level."""
        if self.recommended_difficulty is None:
            object.__setattr__(self, "recommended_difficulty", self.current_difficulty)
        if not isinstance(self.recent_performance, tuple):
            object.__setattr__(self, "recent_performance", tuple(self.recent_performance))

    @property
    def window_length(self) -> int:
        return len(self.recent_performance)

    @property
    def correct_count(self) -> int:
        return sum(1 for record in self.recent_performance if record.correct)

    @property
    def success_rate(self) -> float | None:
        """Fraction of correct answers in the window, None when empty."""
        if not self.recent_performance:
            return None
        return self.correct_count / self.window_length

    def to_dict(self) -> dict[str, Any]:
        """Convert to the stored document shape."""
        return {
            "currentDifficulty": self.current_difficulty,
            "consecutiveCorrect": self.consecutive_correct,
            "consecutiveIncorrect": self.consecutive_incorrect,
            "recentPerformance": [record.to_dict() for record in self.recent_performance],
            "recommendedDifficulty": self.recommended_difficulty,
            "showHint": self.show_hint,
            "encouragement": self.encouragement,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AdaptiveState:
        """Create a state from a stored document."""
        return cls(
            current_difficulty=data["currentDifficulty"],
            consecutive_correct=data.get("consecutiveCorrect", 0),
            consecutive_incorrect=data.get("consecutiveIncorrect", 0),
            recent_performance=tuple(
                PerformanceRecord.from_dict(item) for item in data.get("recentPerformance", [])
            ),
            recommended_difficulty=data.get("recommendedDifficulty"),
            show_hint=data.get("showHint", False),
            encouragement=data.get("encouragement"),
        )


# ============================================================================
# Spaced Repetition
# ============================================================================


@dataclass(frozen=True)
class VocabularyProgress:
    """
    Spaced-repetition record for one (student, word) pair.

    Invariant: times_correct + times_incorrect == times_reviewed,
    ease_factor >= 1.3.
    """

    word_id: str
    student_id: str
    next_review_at: datetime
    times_reviewed: int = 0
    times_correct: int = 0
    times_incorrect: int = 0
    ease_factor: float = 2.5
    interval: int = 0  # Days until next review
    status: WordStatus = WordStatus.NEW
    last_reviewed_at: datetime | None = None

    def __post_init__(self):
        object.__setattr__(self, "next_review_at", ensure_utc(self.next_review_at))
        if self.last_reviewed_at is not None:
            object.__setattr__(self, "last_reviewed_at", ensure_utc(self.last_reviewed_at))
        if not isinstance(self.status, WordStatus):
            object.__setattr__(self, "status", WordStatus(self.status))

    @property
    def accuracy(self) -> float:
        """Lifetime fraction of correct reviews (0.0 if never reviewed)."""
        if self.times_reviewed == 0:
            return 0.0
        return self.times_correct / self.times_reviewed

    def is_due(self, now: datetime) -> bool:
        """Check if the word is due relative to now."""
        return self.next_review_at <= ensure_utc(now)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the stored document shape."""
        return {
            "wordId": self.word_id,
            "studentId": self.student_id,
            "timesReviewed": self.times_reviewed,
            "timesCorrect": self.times_correct,
            "timesIncorrect": self.times_incorrect,
            "lastReviewedAt": format_instant(self.last_reviewed_at),
            "nextReviewAt": format_instant(self.next_review_at),
            "easeFactor": self.ease_factor,
            "interval": self.interval,
            "status": self.status.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> VocabularyProgress:
        """
        Create a progress record from a stored document.

        Raises:
            ValueError: nextReviewAt is missing, null or empty
        """
        next_review_at = parse_instant(data.get("nextReviewAt"))
        if next_review_at is None:
            raise ValueError(f"Word {data.get('wordId')!r}: nextReviewAt is required")
        return cls(
            word_id=str(data["wordId"]),
            student_id=str(data.get("studentId", "")),
            next_review_at=next_review_at,
            times_reviewed=data.get("timesReviewed", 0),
            times_correct=data.get("timesCorrect", 0),
            times_incorrect=data.get("timesIncorrect", 0),
            ease_factor=float(data.get("easeFactor", 2.5)),
            interval=data.get("interval", 0),
            status=WordStatus(data.get("status", WordStatus.NEW.value)),
            last_reviewed_at=parse_instant(data.get("lastReviewedAt")),
        )


@dataclass(frozen=True)
class StudyStats:
    """Status counts and today's activity over a vocabulary set."""

    total_words: int = 0
    new_words: int = 0
    learning_words: int = 0
    review_words: int = 0
    mastered_words: int = 0
    due_today: int = 0
    studied_today: int = 0
    accuracy_today: int = 0  # Percentage 0-100

    def to_dict(self) -> dict[str, int]:
        """Convert to dictionary."""
        return {
            "totalWords": self.total_words,
            "newWords": self.new_words,
            "learningWords": self.learning_words,
            "reviewWords": self.review_words,
            "masteredWords": self.mastered_words,
            "dueToday": self.due_today,
            "studiedToday": self.studied_today,
            "accuracyToday": self.accuracy_today,
        }
