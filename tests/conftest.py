"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
"""
import sys
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from learnhub.core import PerformanceRecord, VocabularyProgress, WordStatus  # noqa: E402


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "smoke: Smoke tests for CLI commands")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "smoke" in str(item.fspath):
            item.add_marker(pytest.mark.smoke)


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def now():
    """Fixed reference time for deterministic scheduling."""
    return datetime(2024, 3, 15, 12, 0, tzinfo=UTC)


@pytest.fixture
def make_record(now):
    """Factory for performance records."""

    def _make(correct: bool = True, difficulty: int = 3, **overrides) -> PerformanceRecord:
        fields = {
            "timestamp": now,
            "content_id": "story-001",
            "difficulty": difficulty,
            "correct": correct,
            "response_time_ms": 4000,
            "hints_used": 0,
        }
        fields.update(overrides)
        return PerformanceRecord(**fields)

    return _make


@pytest.fixture
def make_progress(now):
    """Factory for vocabulary progress records due relative to `now`."""

    def _make(
        word_id: str,
        days_overdue: float = 0,
        status: WordStatus = WordStatus.REVIEW,
        ease_factor: float = 2.5,
        **overrides,
    ) -> VocabularyProgress:
        fields = {
            "word_id": word_id,
            "student_id": "student-1",
            "next_review_at": now - timedelta(days=days_overdue),
            "ease_factor": ease_factor,
            "status": status,
        }
        fields.update(overrides)
        return VocabularyProgress(**fields)

    return _make
