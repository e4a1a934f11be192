"""
Unit tests for the difficulty adaptation engine.

Tests:
- Window maintenance and streak counters
- Streak and rate rules for the recommended difficulty
- Hint flag and encouragement precedence
- Level-change gates and commit helpers
"""

from datetime import timedelta

import pytest

from learnhub.adaptive import (
    ENCOURAGEMENT_RULES,
    AdaptiveConfig,
    AnswerSignals,
    DifficultyEngine,
    commit_level_down,
    commit_level_up,
    create_initial_state,
    record_answer,
    select_encouragement,
    should_level_down,
    should_level_up,
    sync_student_level,
)
from learnhub.adaptive.difficulty_engine import (
    GENTLE_TIP,
    MILD_PRAISE,
    READY_FOR_CHALLENGE,
    STREAK_CELEBRATION,
    TRY_EASIER,
)
from learnhub.core import AdaptiveState, InvalidDifficultyError, InvalidRecordError


def replay(state, make_record, outcomes):
    """Apply a sequence of True/False answers."""
    for correct in outcomes:
        state = record_answer(state, make_record(correct=correct))
    return state


class TestInitialState:
    def test_fresh_state(self):
        state = create_initial_state(3)

        assert state.current_difficulty == 3
        assert state.recommended_difficulty == 3
        assert state.consecutive_correct == 0
        assert state.consecutive_incorrect == 0
        assert state.recent_performance == ()
        assert state.show_hint is False
        assert state.encouragement is None

    @pytest.mark.parametrize("level,expected", [(0, 1), (-4, 1), (6, 5), (42, 5)])
    def test_out_of_range_level_is_clamped(self, level, expected):
        state = create_initial_state(level)
        assert state.current_difficulty == expected
        assert state.recommended_difficulty == expected

    def test_strict_mode_rejects_out_of_range_level(self):
        with pytest.raises(InvalidDifficultyError):
            create_initial_state(7, strict=True)

    def test_strict_mode_accepts_valid_level(self):
        assert create_initial_state(5, strict=True).current_difficulty == 5


class TestWindowAndStreaks:
    def test_three_correct_from_level_three(self, make_record):
        """Three correct answers in a row recommend the next level."""
        state = replay(create_initial_state(3), make_record, [True, True, True])

        assert state.consecutive_correct == 3
        assert state.consecutive_incorrect == 0
        assert state.recommended_difficulty == 4
        assert state.current_difficulty == 3
        assert state.encouragement == MILD_PRAISE

    def test_window_keeps_last_ten_in_order(self, make_record, now):
        state = create_initial_state(3)
        for i in range(12):
            record = make_record(correct=i % 2 == 0, content_id=f"item-{i}", timestamp=now + timedelta(seconds=i))
            state = record_answer(state, record)

        assert state.window_length == 10
        assert [r.content_id for r in state.recent_performance] == [f"item-{i}" for i in range(2, 12)]

    def test_window_never_exceeds_cap(self, make_record):
        state = create_initial_state(2)
        for i in range(25):
            state = record_answer(state, make_record(correct=i % 3 != 0, difficulty=2))
            assert state.window_length <= 10

    def test_streak_counters_are_mutually_exclusive(self, make_record):
        state = create_initial_state(3)
        for correct in [True, True, False, True, False, False, False, True]:
            state = record_answer(state, make_record(correct=correct))
            assert (state.consecutive_correct > 0) == (state.consecutive_incorrect == 0)
            assert (state.consecutive_incorrect > 0) == (state.consecutive_correct == 0)

    def test_input_state_is_not_mutated(self, make_record):
        state = create_initial_state(3)
        new_state = record_answer(state, make_record(correct=True))

        assert state.recent_performance == ()
        assert state.consecutive_correct == 0
        assert new_state is not state

    def test_current_difficulty_never_changed_by_engine(self, make_record):
        state = replay(create_initial_state(3), make_record, [True] * 10)
        assert state.current_difficulty == 3
        assert state.recommended_difficulty == 4


class TestRecommendation:
    def test_three_incorrect_recommends_easier(self, make_record):
        state = replay(create_initial_state(3), make_record, [False, False, False])

        assert state.recommended_difficulty == 2
        assert state.show_hint is True
        assert state.encouragement == TRY_EASIER

    def test_upper_bound_holds(self, make_record):
        state = replay(create_initial_state(5), make_record, [True] * 6)
        assert state.recommended_difficulty == 5

    def test_lower_bound_holds(self, make_record):
        state = replay(create_initial_state(1), make_record, [False] * 6)
        assert state.recommended_difficulty == 1

    def test_high_rate_pushes_up_without_streak(self, make_record):
        # 9/10 correct, current streak only 1
        state = replay(create_initial_state(3), make_record, [True] * 8 + [False, True])

        assert state.consecutive_correct == 1
        assert state.recommended_difficulty == 4
        assert state.encouragement is None  # 0.9 is not > 0.9

    def test_low_rate_pushes_down_without_streak(self, make_record):
        # 2/5 correct, current streak only 1 incorrect
        state = replay(create_initial_state(3), make_record, [True, False, False, True, False])

        assert state.consecutive_incorrect == 1
        assert state.recommended_difficulty == 2
        assert state.show_hint is False  # 0.4 is not < 0.4

    def test_rate_rule_needs_five_answers(self, make_record):
        # 1/4 correct is poor but the window is too short for the rate rule
        state = replay(create_initial_state(3), make_record, [False, False, True, False])
        assert state.recommended_difficulty == 3

    def test_low_window_rate_wins_over_correct_streak(self, make_record):
        """Documented behavior: min() with current-1 overrides a fresh correct streak."""
        state = replay(create_initial_state(3), make_record, [False] * 4 + [True] * 3)

        assert state.consecutive_correct == 3
        assert state.success_rate == pytest.approx(3 / 7)
        assert state.recommended_difficulty == 2

    @pytest.mark.parametrize("start", [1, 2, 3, 4, 5])
    def test_recommendation_stays_in_bounds(self, make_record, start):
        state = create_initial_state(start)
        for i in range(20):
            state = record_answer(state, make_record(correct=(i // 4) % 2 == 0, difficulty=start))
            assert 1 <= state.recommended_difficulty <= 5


class TestHints:
    def test_two_misses_show_hint(self, make_record):
        state = replay(create_initial_state(3), make_record, [True, False, False])

        assert state.show_hint is True
        assert state.encouragement == GENTLE_TIP

    def test_low_rate_over_three_shows_hint(self, make_record):
        state = replay(create_initial_state(3), make_record, [False, False, True])

        assert state.consecutive_incorrect == 0
        assert state.show_hint is True
        assert state.encouragement is None

    def test_single_miss_no_hint(self, make_record):
        state = replay(create_initial_state(3), make_record, [True, True, False])
        assert state.show_hint is False


class TestEncouragement:
    def test_first_correct_answer_is_ready_for_challenge(self, make_record):
        state = record_answer(create_initial_state(3), make_record(correct=True))
        assert state.encouragement == READY_FOR_CHALLENGE

    def test_five_in_a_row_celebrates(self, make_record):
        state = replay(create_initial_state(2), make_record, [True] * 5)
        assert state.encouragement == STREAK_CELEBRATION

    def test_rule_order(self):
        assert [message for _, message in ENCOURAGEMENT_RULES] == [
            STREAK_CELEBRATION,
            MILD_PRAISE,
            TRY_EASIER,
            GENTLE_TIP,
            READY_FOR_CHALLENGE,
        ]

    def test_first_match_wins(self):
        assert select_encouragement(AnswerSignals(6, 0, 1.0)) == STREAK_CELEBRATION
        assert select_encouragement(AnswerSignals(0, 3, 0.95)) == TRY_EASIER
        assert select_encouragement(AnswerSignals(0, 0, 0.95)) == READY_FOR_CHALLENGE

    def test_no_match_is_none(self):
        assert select_encouragement(AnswerSignals(1, 0, 0.6)) is None
        assert select_encouragement(AnswerSignals(0, 0, None)) is None


class TestInvalidRecords:
    @pytest.mark.parametrize(
        "overrides",
        [
            {"difficulty": 0},
            {"difficulty": 6},
            {"difficulty": True},
            {"response_time_ms": -1},
            {"hints_used": -2},
            {"response_time_ms": None},
            {"response_time_ms": "slow"},
            {"hints_used": "2"},
            {"hints_used": 1.5},
        ],
    )
    def test_invalid_record_rejected(self, make_record, overrides):
        state = replay(create_initial_state(3), make_record, [True, True])

        with pytest.raises(InvalidRecordError):
            record_answer(state, make_record(**overrides))

        assert state.window_length == 2
        assert state.consecutive_correct == 2


class TestLevelGates:
    def test_level_up_after_full_window_on_streak(self, make_record):
        state = replay(create_initial_state(3), make_record, [True] * 10)
        assert should_level_up(state) is True

    def test_level_up_needs_full_window(self, make_record):
        state = replay(create_initial_state(3), make_record, [True] * 9)
        assert should_level_up(state) is False

    def test_level_up_at_eighty_percent(self, make_record):
        state = replay(create_initial_state(3), make_record, [False, False] + [True] * 8)
        assert should_level_up(state) is True

    def test_no_level_up_below_eighty_percent(self, make_record):
        state = replay(create_initial_state(3), make_record, [False] * 3 + [True] * 7)
        assert should_level_up(state) is False

    def test_no_level_up_without_streak(self, make_record):
        state = replay(create_initial_state(3), make_record, [True] * 8 + [False, True])
        assert should_level_up(state) is False

    def test_no_level_up_at_max(self, make_record):
        state = replay(create_initial_state(5), make_record, [True] * 10)
        assert should_level_up(state) is False

    def test_level_down_on_low_rate(self, make_record):
        state = replay(create_initial_state(3), make_record, [False] * 5)
        assert should_level_down(state) is True

    def test_level_down_needs_five_answers(self, make_record):
        state = replay(create_initial_state(3), make_record, [False] * 4)
        assert should_level_down(state) is False

    def test_no_level_down_at_forty_percent(self, make_record):
        state = replay(create_initial_state(3), make_record, [True, True, False, False, False])
        assert should_level_down(state) is False

    def test_no_level_down_at_min(self, make_record):
        state = replay(create_initial_state(1), make_record, [False] * 6)
        assert should_level_down(state) is False

    def test_gates_on_empty_state(self):
        state = create_initial_state(3)
        assert should_level_up(state) is False
        assert should_level_down(state) is False


class TestCommit:
    def test_commit_level_up(self, make_record):
        state = replay(create_initial_state(3), make_record, [True] * 10)
        committed = commit_level_up(state)

        assert committed.current_difficulty == 4
        assert committed.recommended_difficulty == 4
        assert committed.consecutive_correct == 0
        assert committed.recent_performance == state.recent_performance
        assert should_level_up(committed) is False

    def test_commit_level_down(self, make_record):
        state = replay(create_initial_state(3), make_record, [False] * 5)
        committed = commit_level_down(state)

        assert committed.current_difficulty == 2
        assert committed.consecutive_incorrect == 0
        assert committed.window_length == 5

    def test_answers_after_commit_use_new_level(self, make_record):
        state = commit_level_up(replay(create_initial_state(3), make_record, [True] * 10))
        state = record_answer(state, make_record(correct=True, difficulty=4))

        assert state.consecutive_correct == 1
        # Window is still 100% correct, so the rate rule keeps pushing up
        assert state.recommended_difficulty == 5

    def test_sync_student_level(self, make_record):
        state = replay(create_initial_state(3), make_record, [True, True])
        synced = sync_student_level(state, 4)

        assert synced.current_difficulty == 4
        assert synced.recommended_difficulty == 4
        assert synced.consecutive_correct == 2
        assert synced.window_length == 2

    def test_sync_same_level_is_noop(self):
        state = create_initial_state(3)
        assert sync_student_level(state, 3) is state


class TestCustomConfig:
    def test_smaller_window(self, make_record):
        engine = DifficultyEngine(AdaptiveConfig(window_size=4))
        state = engine.create_initial_state(3)
        for _ in range(6):
            state = engine.record_answer(state, make_record(correct=True))

        assert state.window_length == 4

    def test_state_defaults_recommendation_to_current(self):
        assert AdaptiveState(current_difficulty=2).recommended_difficulty == 2
