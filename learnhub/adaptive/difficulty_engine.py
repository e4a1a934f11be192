"""
Difficulty Adaptation Engine.

Turns a stream of graded answers into a recommended content difficulty,
a hint flag and an encouragement message.

Signals:
- Streak rule: 3 correct (incorrect) in a row recommends one level up (down)
- Rate rule: over a window of at least 5 answers, >85% correct pushes up,
  <50% correct pushes down
- Hint: 2 misses in a row, or <40% correct over at least 3 answers

The engine only recommends. The caller decides when to commit a level
change (see commit_level_up / commit_level_down) and persists the state.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable, NamedTuple

from loguru import logger

from learnhub.core.errors import InvalidDifficultyError
from learnhub.core.models import MAX_DIFFICULTY, MIN_DIFFICULTY, AdaptiveState, PerformanceRecord

# =============================================================================
# Configuration
# =============================================================================


@dataclass
class AdaptiveConfig:
    """Thresholds for difficulty adaptation."""

    min_difficulty: int = MIN_DIFFICULTY
    max_difficulty: int = MAX_DIFFICULTY
    window_size: int = 10  # Most recent answers kept
    streak_threshold: int = 3  # Answers in a row that trigger a recommendation

    # Rate rule
    rate_window_min: int = 5
    rate_up_threshold: float = 0.85
    rate_down_threshold: float = 0.5

    # Hints
    hint_streak: int = 2
    hint_rate_threshold: float = 0.4
    hint_window_min: int = 3

    # Level change gates
    level_up_rate: float = 0.8
    level_down_rate: float = 0.4
    level_down_window_min: int = 5


# =============================================================================
# Encouragement
# =============================================================================


class AnswerSignals(NamedTuple):
    """Inputs the encouragement rules are evaluated against."""

    consecutive_correct: int
    consecutive_incorrect: int
    success_rate: float | None


STREAK_CELEBRATION = "🔥 Amazing streak! You're on fire!"
MILD_PRAISE = "⭐ Great job! Keep it up!"
TRY_EASIER = "💪 Don't give up! Try an easier item to build confidence."
GENTLE_TIP = "💡 Tip: Take your time and read carefully."
READY_FOR_CHALLENGE = "🚀 You're ready for a challenge! Try a harder item."

# Evaluated top to bottom, first match wins.
ENCOURAGEMENT_RULES: tuple[tuple[Callable[[AnswerSignals], bool], str], ...] = (
    (lambda s: s.consecutive_correct >= 5, STREAK_CELEBRATION),
    (lambda s: s.consecutive_correct >= 3, MILD_PRAISE),
    (lambda s: s.consecutive_incorrect >= 3, TRY_EASIER),
    (lambda s: s.consecutive_incorrect >= 2, GENTLE_TIP),
    (lambda s: s.success_rate is not None and s.success_rate > 0.9, READY_FOR_CHALLENGE),
)


def select_encouragement(
    signals: AnswerSignals,
    rules: tuple[tuple[Callable[[AnswerSignals], bool], str], ...] = ENCOURAGEMENT_RULES,
) -> str | None:
    """Return the message of the first matching rule, or None."""
    for predicate, message in rules:
        if predicate(signals):
            return message
    return None


# =============================================================================
# Engine
# =============================================================================


class DifficultyEngine:
    """
    Pure difficulty adaptation over immutable AdaptiveState values.

    Every method returns a new state (or a bool) and leaves its input
    untouched, so results depend only on the arguments.
    """

    def __init__(self, config: AdaptiveConfig | None = None):
        """
        Initialize the engine.

        Args:
            config: Custom thresholds (uses defaults if None)
        """
        self.config = config or AdaptiveConfig()

    def clamp(self, difficulty: int) -> int:
        """Clamp a difficulty into the configured bounds."""
        return max(self.config.min_difficulty, min(self.config.max_difficulty, difficulty))

    def create_initial_state(self, starting_difficulty: int, strict: bool = False) -> AdaptiveState:
        """
        Create a fresh state at the student's stored level.

        Out-of-range levels are clamped. With strict=True they are rejected.

        Raises:
            InvalidDifficultyError: strict mode and level outside bounds
        """
        level = self.clamp(starting_difficulty)
        if level != starting_difficulty:
            if strict:
                raise InvalidDifficultyError(
                    starting_difficulty, self.config.min_difficulty, self.config.max_difficulty
                )
            logger.warning(f"Starting difficulty {starting_difficulty} out of range, clamped to {level}")

        return AdaptiveState(current_difficulty=level, recommended_difficulty=level)

    def record_answer(self, state: AdaptiveState, record: PerformanceRecord) -> AdaptiveState:
        """
        Fold one graded answer into the state.

        Args:
            state: State before the answer
            record: The graded answer

        Returns:
            New AdaptiveState with updated window, streaks and recommendations

        Raises:
            InvalidRecordError: record fails validation (state is not touched)
        """
        cfg = self.config
        record.validate(cfg.min_difficulty, cfg.max_difficulty)

        window = (state.recent_performance + (record,))[-cfg.window_size:]

        if record.correct:
            consecutive_correct = state.consecutive_correct + 1
            consecutive_incorrect = 0
        else:
            consecutive_correct = 0
            consecutive_incorrect = state.consecutive_incorrect + 1

        current = state.current_difficulty
        recommended = current

        # Streak rule
        if consecutive_correct >= cfg.streak_threshold:
            recommended = min(cfg.max_difficulty, current + 1)
        elif consecutive_incorrect >= cfg.streak_threshold:
            recommended = max(cfg.min_difficulty, current - 1)

        # Rate rule over the whole window, folded into the streak result with min/max
        success_rate = sum(1 for r in window if r.correct) / len(window) if window else None
        if success_rate is not None and len(window) >= cfg.rate_window_min:
            if success_rate > cfg.rate_up_threshold:
                recommended = min(cfg.max_difficulty, max(recommended, current + 1))
            elif success_rate < cfg.rate_down_threshold:
                recommended = max(cfg.min_difficulty, min(recommended, current - 1))

        recommended = self.clamp(recommended)

        show_hint = consecutive_incorrect >= cfg.hint_streak or (
            success_rate is not None
            and success_rate < cfg.hint_rate_threshold
            and len(window) >= cfg.hint_window_min
        )

        encouragement = select_encouragement(
            AnswerSignals(consecutive_correct, consecutive_incorrect, success_rate)
        )

        if recommended != state.recommended_difficulty:
            logger.debug(
                f"Recommended difficulty {state.recommended_difficulty} -> {recommended} "
                f"(streak +{consecutive_correct}/-{consecutive_incorrect}, window {len(window)})"
            )

        return replace(
            state,
            consecutive_correct=consecutive_correct,
            consecutive_incorrect=consecutive_incorrect,
            recent_performance=window,
            recommended_difficulty=recommended,
            show_hint=show_hint,
            encouragement=encouragement,
        )

    def should_level_up(self, state: AdaptiveState) -> bool:
        """Full window, >=80% correct and currently on a streak."""
        cfg = self.config
        if state.current_difficulty >= cfg.max_difficulty:
            return False
        if state.window_length != cfg.window_size:
            return False
        return (
            state.success_rate >= cfg.level_up_rate
            and state.consecutive_correct >= cfg.streak_threshold
        )

    def should_level_down(self, state: AdaptiveState) -> bool:
        """At least 5 answers with under 40% correct."""
        cfg = self.config
        if state.current_difficulty <= cfg.min_difficulty:
            return False
        if state.window_length < cfg.level_down_window_min:
            return False
        return state.success_rate < cfg.level_down_rate

    def commit_level_up(self, state: AdaptiveState) -> AdaptiveState:
        """
        Apply an accepted level-up.

        Moves current_difficulty to the recommendation and consumes the
        correct streak. The performance window carries over.
        """
        level = self.clamp(state.recommended_difficulty)
        logger.info(f"Level up committed: {state.current_difficulty} -> {level}")
        return replace(
            state,
            current_difficulty=level,
            recommended_difficulty=level,
            consecutive_correct=0,
        )

    def commit_level_down(self, state: AdaptiveState) -> AdaptiveState:
        """
        Apply an accepted level-down.

        Moves current_difficulty to the recommendation and consumes the
        incorrect streak. The performance window carries over.
        """
        level = self.clamp(state.recommended_difficulty)
        logger.info(f"Level down committed: {state.current_difficulty} -> {level}")
        return replace(
            state,
            current_difficulty=level,
            recommended_difficulty=level,
            consecutive_incorrect=0,
        )

    def sync_student_level(self, state: AdaptiveState, level: int) -> AdaptiveState:
        """Align the state with a student level changed outside the session."""
        level = self.clamp(level)
        if level == state.current_difficulty:
            return state
        return replace(state, current_difficulty=level, recommended_difficulty=level)


# =============================================================================
# Module-level API
# =============================================================================

_default_engine = DifficultyEngine()


def create_initial_state(starting_difficulty: int, strict: bool = False) -> AdaptiveState:
    return _default_engine.create_initial_state(starting_difficulty, strict=strict)


def record_answer(state: AdaptiveState, record: PerformanceRecord) -> AdaptiveState:
    return _default_engine.record_answer(state, record)


def should_level_up(state: AdaptiveState) -> bool:
    return _default_engine.should_level_up(state)


def should_level_down(state: AdaptiveState) -> bool:
    return _default_engine.should_level_down(state)


def commit_level_up(state: AdaptiveState) -> AdaptiveState:
    return _default_engine.commit_level_up(state)


def commit_level_down(state: AdaptiveState) -> AdaptiveState:
    return _default_engine.commit_level_down(state)


def sync_student_level(state: AdaptiveState, level: int) -> AdaptiveState:
    return _default_engine.sync_student_level(state, level)
