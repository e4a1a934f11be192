"""
Unit tests for content ranking, difficulty labels and hints.
"""

import pytest

from learnhub.adaptive import HINTS, QuestionType, create_initial_state, difficulty_label, get_hint, rank_content
from learnhub.core import AdaptiveState


class TestRankContent:
    def test_recommended_first_then_by_distance(self):
        state = AdaptiveState(current_difficulty=3)
        items = [("a", 1), ("b", 3), ("c", 4), ("d", 2), ("e", 3), ("f", 5)]

        ranked = rank_content(items, state)

        assert [c.content_id for c in ranked] == ["b", "e", "c", "d", "a", "f"]
        assert [c.content_id for c in ranked if c.recommended] == ["b", "e"]

    def test_uses_recommended_not_current(self):
        state = AdaptiveState(current_difficulty=3, recommended_difficulty=4)
        ranked = rank_content([("easy", 3), ("hard", 4)], state)

        assert ranked[0].content_id == "hard"
        assert ranked[0].recommended is True

    def test_accepts_mappings(self):
        state = create_initial_state(2)
        ranked = rank_content([{"id": "s1", "difficulty": 5}, {"contentId": "s2", "difficulty": 2}], state)

        assert [c.content_id for c in ranked] == ["s2", "s1"]
        assert ranked[0].label == "Easy"

    def test_empty(self):
        assert rank_content([], create_initial_state(3)) == []


class TestDifficultyLabel:
    @pytest.mark.parametrize(
        "level,label",
        [(1, "Beginner"), (2, "Easy"), (3, "Medium"), (4, "Hard"), (5, "Expert"), (0, "Unknown"), (9, "Unknown")],
    )
    def test_labels(self, level, label):
        assert difficulty_label(level) == label


class TestHints:
    def test_first_hint(self):
        assert get_hint("vocabulary") == HINTS[QuestionType.VOCABULARY][0]

    def test_attempts_cycle(self):
        hints = HINTS[QuestionType.TRANSLATION]
        assert [get_hint(QuestionType.TRANSLATION, i) for i in range(4)] == [*hints, hints[0]]

    def test_deterministic(self):
        assert get_hint("comprehension", 5) == get_hint("comprehension", 5)

    def test_unknown_type(self):
        with pytest.raises(ValueError):
            get_hint("grammar")
