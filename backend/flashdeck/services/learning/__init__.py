"""
Learning System Services

Services for the flashcard spaced repetition engine.

Modules:
- review_policy: SM-2 style interval and ease scheduling
- due_queue: Due-set selection and priority ordering
- session_budget: Session size recommendation
- session_service: Study session state machine
- deck_store: Deck, card and history store with durable mirroring
- streak_tracking: Study streak analytics
- mastery_service: Mastery levels and deck analytics
- card_generator: Deck generation from lessons

Usage:
    from flashdeck.services.learning import (
        DeckStore,
        StudySessionManager,
        study_streak,
    )
"""

from flashdeck.services.learning.review_policy import (
    ReviewPolicy,
    ReviewState,
    next_review_state,
)
from flashdeck.services.learning.due_queue import by_priority, due_cards
from flashdeck.services.learning.session_budget import (
    recent_accuracy,
    recommended_count,
)
from flashdeck.services.learning.deck_store import DeckStore
from flashdeck.services.learning.streak_tracking import study_streak
from flashdeck.services.learning.mastery_service import (
    MasteryLevel,
    deck_stats,
    get_mastery_level,
    overall_stats,
    recommended_deck,
    struggling_cards,
)
from flashdeck.services.learning.card_generator import (
    can_create_deck_from_lesson,
    create_deck_from_lesson,
    deck_for_lesson,
)
from flashdeck.services.learning.session_service import (
    StudySessionManager,
    calculate_session_stats,
)

__all__ = [
    # Scheduling
    "ReviewPolicy",
    "ReviewState",
    "next_review_state",
    "by_priority",
    "due_cards",
    "recent_accuracy",
    "recommended_count",
    # Store
    "DeckStore",
    # Sessions
    "StudySessionManager",
    "calculate_session_stats",
    # Analytics
    "study_streak",
    "MasteryLevel",
    "get_mastery_level",
    "deck_stats",
    "overall_stats",
    "struggling_cards",
    "recommended_deck",
    # Lessons
    "create_deck_from_lesson",
    "can_create_deck_from_lesson",
    "deck_for_lesson",
]
