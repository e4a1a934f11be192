"""
Adaptive Difficulty Module.

Provides:
- DifficultyEngine: streak/rate based difficulty recommendation
- Level-change gates and commit helpers for the session layer
- Content ranking by closeness to the recommended level
- Deterministic hint catalog
"""

from learnhub.adaptive.content_ranker import (
    DIFFICULTY_LABELS,
    RankedContent,
    difficulty_label,
    rank_content,
)
from learnhub.adaptive.difficulty_engine import (
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
from learnhub.adaptive.hints import HINTS, QuestionType, get_hint

__all__ = [
    # Engine
    "AdaptiveConfig",
    "AnswerSignals",
    "DifficultyEngine",
    "ENCOURAGEMENT_RULES",
    "select_encouragement",
    "create_initial_state",
    "record_answer",
    "should_level_up",
    "should_level_down",
    "commit_level_up",
    "commit_level_down",
    "sync_student_level",
    # Content
    "DIFFICULTY_LABELS",
    "RankedContent",
    "difficulty_label",
    "rank_content",
    # Hints
    "HINTS",
    "QuestionType",
    "get_hint",
]
