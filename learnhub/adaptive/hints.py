"""
Hint catalog for questions shown while show_hint is set.

Hints rotate by attempt number instead of being drawn at random, so a
given (question type, attempt) always yields the same text.
"""

from __future__ import annotations

from enum import Enum


class QuestionType(str, Enum):
    COMPREHENSION = "comprehension"
    VOCABULARY = "vocabulary"
    TRANSLATION = "translation"


HINTS: dict[QuestionType, tuple[str, ...]] = {
    QuestionType.COMPREHENSION: (
        "💡 Read the text again carefully. The answer is usually in it!",
        "💡 Think about the main idea.",
        "💡 What happened first, in the middle, and last?",
    ),
    QuestionType.VOCABULARY: (
        "💡 Look at how the word is used in the sentence.",
        "💡 Think about similar words you know.",
        "💡 The word might be related to a word you know in your own language.",
    ),
    QuestionType.TRANSLATION: (
        "💡 Break the sentence into smaller parts.",
        "💡 Look for words you already know.",
        "💡 Try to understand the main idea first.",
    ),
}


def get_hint(question_type: QuestionType | str, attempt: int = 0) -> str:
    """
    Get a hint for a question.

    Args:
        question_type: comprehension, vocabulary or translation
        attempt: Zero-based attempt number; cycles through the hints

    Returns:
        Hint text

    Raises:
        ValueError: unknown question type
    """
    hints = HINTS[QuestionType(question_type)]
    return hints[attempt % len(hints)]
