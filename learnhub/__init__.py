"""
learnhub-scheduler: learning-progress scheduling for language practice.

Two pure engines over immutable state values:
- learnhub.adaptive: next content difficulty, hints and encouragement
- learnhub.vocabulary: SM-2 word reviews and study batch selection
"""

__version__ = "1.0.0"
