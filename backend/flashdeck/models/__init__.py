"""
Pydantic models for the study engine.

Usage:
    from flashdeck.models import Card, Deck, SessionStats
"""

from flashdeck.models.learning import (
    Card,
    CardCreate,
    CardUpdate,
    Deck,
    DeckCreate,
    DeckStats,
    DeckUpdate,
    Lesson,
    LessonContent,
    OverallStats,
    SessionComplete,
    SessionContinue,
    SessionDealt,
    SessionEmpty,
    SessionOutcome,
    SessionResult,
    SessionStats,
    StreakData,
    StudyData,
    StudyHistoryEntry,
    StudySession,
    VocabularyTerm,
)

__all__ = [
    "Card",
    "CardCreate",
    "CardUpdate",
    "Deck",
    "DeckCreate",
    "DeckStats",
    "DeckUpdate",
    "Lesson",
    "LessonContent",
    "OverallStats",
    "SessionComplete",
    "SessionContinue",
    "SessionDealt",
    "SessionEmpty",
    "SessionOutcome",
    "SessionResult",
    "SessionStats",
    "StreakData",
    "StudyData",
    "StudyHistoryEntry",
    "StudySession",
    "VocabularyTerm",
]
