"""
Content ranking against the recommended difficulty.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from learnhub.core.models import AdaptiveState

DIFFICULTY_LABELS = {
    1: "Beginner",
    2: "Easy",
    3: "Medium",
    4: "Hard",
    5: "Expert",
}


def difficulty_label(difficulty: int) -> str:
    """Human-readable name for a difficulty level."""
    return DIFFICULTY_LABELS.get(difficulty, "Unknown")


@dataclass(frozen=True)
class RankedContent:
    """A content item annotated for the current recommendation."""

    content_id: str
    difficulty: int
    recommended: bool

    @property
    def label(self) -> str:
        return difficulty_label(self.difficulty)


def _unpack(item: Mapping[str, Any] | tuple[str, int]) -> tuple[str, int]:
    if isinstance(item, Mapping):
        content_id = item.get("contentId", item.get("content_id", item.get("id")))
        return str(content_id), int(item["difficulty"])
    content_id, difficulty = item
    return str(content_id), int(difficulty)


def rank_content(
    items: Iterable[Mapping[str, Any] | tuple[str, int]],
    state: AdaptiveState,
) -> list[RankedContent]:
    """
    Order content by closeness to the recommended difficulty.

    Items at exactly the recommended level come first and are flagged
    recommended; the rest follow by absolute distance. Items at the same
    distance keep their input order.

    Args:
        items: (content_id, difficulty) pairs or mappings with an id and difficulty
        state: State carrying recommended_difficulty

    Returns:
        Ranked content list
    """
    target = state.recommended_difficulty
    ranked = [
        RankedContent(content_id=content_id, difficulty=difficulty, recommended=difficulty == target)
        for content_id, difficulty in map(_unpack, items)
    ]
    return sorted(ranked, key=lambda c: abs(c.difficulty - target))
