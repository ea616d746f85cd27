"""
Learning System Models (Pydantic)

Records and inputs for the flashcard study engine:
- Decks and cards, including per-card review metadata
- Study sessions, per-card results and session statistics
- Study history entries and streak summaries
- Tagged outcomes returned by session transitions
- Lesson payloads that decks can be generated from

ARCHITECTURE NOTE:
    Inputs use StrictRequest (extra="forbid") to reject unknown fields.
    Records use StrictResponse so blobs written by older versions still load.

    Data flows: Caller → Input model → DeckStore → Record → StudyData blob
"""

from __future__ import annotations

from datetime import date
from typing import Literal, Optional, Union

from pydantic import AwareDatetime, ConfigDict, Field, model_validator

from flashdeck.constants import INITIAL_EASE, MAX_EASE, MIN_EASE
from flashdeck.enums.learning import (
    ConfidenceTier,
    DeckCategory,
    SessionOutcomeKind,
)
from flashdeck.models.base import StrictRequest, StrictResponse


# ===========================================
# Deck Models
# ===========================================


class DeckCreate(StrictRequest):
    """Request to create a deck."""

    name: str = Field(..., min_length=1, description="Deck title")
    description: str = ""
    category: DeckCategory = DeckCategory.CUSTOM
    lesson_id: Optional[str] = Field(None, description="Source lesson, if generated")
    color: Optional[str] = None


class DeckUpdate(StrictRequest):
    """Partial deck update. Only fields explicitly set are applied."""

    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    category: Optional[DeckCategory] = None
    color: Optional[str] = None


class Deck(StrictResponse):
    """
    A named collection of cards.

    card_count is denormalized and maintained by the DeckStore on every card
    add and delete; it always equals the number of live cards in the deck.
    """

    id: str
    name: str
    description: str = ""
    category: DeckCategory = DeckCategory.CUSTOM
    lesson_id: Optional[str] = None
    color: Optional[str] = None
    created_at: AwareDatetime
    updated_at: AwareDatetime
    card_count: int = Field(0, ge=0)


# ===========================================
# Card Models
# ===========================================


class CardCreate(StrictRequest):
    """Content for a new card. Review metadata is initialized by the store."""

    front: str = Field(..., description="Front side (question/prompt)")
    back: str = Field(..., description="Back side (answer)")
    card_type: Optional[str] = Field(
        None, description="Optional tag, e.g. vocabulary or concept"
    )


class CardUpdate(StrictRequest):
    """
    Content-only card update.

    Review metadata (streak, ease, dates, counters) is deliberately absent;
    only the review policy changes it, through DeckStore.apply_review().
    """

    front: Optional[str] = None
    back: Optional[str] = None
    card_type: Optional[str] = None


class Card(StrictResponse):
    """
    A flashcard with its review metadata.

    A card with next_review_date=None has never been reviewed and is always due.
    """

    id: str
    deck_id: str
    front: str
    back: str
    card_type: Optional[str] = None
    created_at: AwareDatetime

    # Review metadata
    correct_streak: int = Field(0, ge=0, description="Consecutive correct answers")
    ease_factor: float = Field(INITIAL_EASE, ge=MIN_EASE, le=MAX_EASE)
    next_review_date: Optional[AwareDatetime] = None
    total_reviews: int = Field(0, ge=0)
    correct_reviews: int = Field(0, ge=0)

    # Informational only, never read by the scheduler
    last_review_date: Optional[AwareDatetime] = None
    last_confidence: Optional[ConfidenceTier] = None

    @model_validator(mode="after")
    def _correct_within_total(self) -> Card:
        if self.correct_reviews > self.total_reviews:
            raise ValueError(
                f"correct_reviews ({self.correct_reviews}) exceeds "
                f"total_reviews ({self.total_reviews})"
            )
        return self

    @property
    def is_new(self) -> bool:
        """Check if this card has never been reviewed."""
        return self.next_review_date is None


# ===========================================
# Session Models
# ===========================================


class SessionResult(StrictResponse):
    """One answered card within a session."""

    card_id: str
    was_correct: bool
    confidence: ConfidenceTier
    timestamp: AwareDatetime


class StudySession(StrictResponse):
    """
    The single active study session of a learner.

    card_ids is fixed at start. current_index always equals len(results); the
    session is complete exactly when every dealt card has a result.
    """

    id: str
    deck_id: str
    started_at: AwareDatetime
    card_ids: list[str] = Field(..., min_length=1)
    current_index: int = 0
    results: list[SessionResult] = Field(default_factory=list)

    @model_validator(mode="after")
    def _cursor_in_lockstep(self) -> StudySession:
        if self.current_index != len(self.results):
            raise ValueError(
                f"current_index ({self.current_index}) out of step with "
                f"{len(self.results)} results"
            )
        if len(self.results) > len(self.card_ids):
            raise ValueError("more results than dealt cards")
        return self

    @property
    def is_complete(self) -> bool:
        return len(self.results) == len(self.card_ids)

    @property
    def remaining(self) -> int:
        return len(self.card_ids) - len(self.results)


class SessionStats(StrictResponse):
    """
    Summary statistics for a finished session.

    is_perfect means "earned the accuracy bonus" (accuracy >= the bonus
    threshold, 80 by default), not literally 100%. bonus_awarded is the
    clearer alias.
    """

    total: int = Field(ge=0)
    correct: int = Field(ge=0)
    incorrect: int = Field(ge=0)
    accuracy: int = Field(ge=0, le=100, description="Rounded percentage")
    xp_earned: int = Field(ge=0)
    is_perfect: bool

    @property
    def bonus_awarded(self) -> bool:
        return self.is_perfect


class StudyHistoryEntry(StrictResponse):
    """Immutable record written once per ended session."""

    model_config = ConfigDict(frozen=True)

    session_id: str
    deck_id: str
    date: AwareDatetime
    cards_reviewed: int = Field(ge=0)
    accuracy: int = Field(ge=0, le=100)
    xp_earned: int = Field(ge=0)


# ===========================================
# Session Outcomes
# ===========================================


class SessionDealt(StrictResponse):
    """start() picked an ordered set of cards to present."""

    kind: Literal[SessionOutcomeKind.DEALT] = SessionOutcomeKind.DEALT
    session_id: str
    deck_id: str
    cards: list[Card]


class SessionEmpty(StrictResponse):
    """start() found nothing to review. A normal outcome, not an error."""

    kind: Literal[SessionOutcomeKind.EMPTY] = SessionOutcomeKind.EMPTY
    deck_id: Optional[str] = None


class SessionContinue(StrictResponse):
    """An answer was recorded and more cards remain."""

    kind: Literal[SessionOutcomeKind.CONTINUE] = SessionOutcomeKind.CONTINUE
    answered: int
    remaining: int


class SessionComplete(StrictResponse):
    """The session ended. Stats are for the host to forward (XP, activity)."""

    kind: Literal[SessionOutcomeKind.COMPLETE] = SessionOutcomeKind.COMPLETE
    stats: SessionStats
    history_entry: StudyHistoryEntry


SessionOutcome = Union[SessionDealt, SessionEmpty, SessionContinue, SessionComplete]


# ===========================================
# Analytics Models
# ===========================================


class StreakData(StrictResponse):
    """
    Study streak information.

    Tracks consecutive calendar days with at least one ended session.
    """

    current: int = 0  # Days
    longest: int = 0
    last_study_date: Optional[date] = None
    streak_start: Optional[date] = None
    is_active_today: bool = False
    days_this_week: int = 0
    days_this_month: int = 0
    # Milestones
    milestones_reached: list[int] = Field(default_factory=list)  # e.g., [3, 7]
    next_milestone: Optional[int] = None


class DeckStats(StrictResponse):
    """Per-deck overview for the deck shelf."""

    deck_id: str
    total_cards: int
    due_cards: int
    mastery_distribution: dict[str, int] = Field(
        default_factory=dict, description="Mastery label -> card count"
    )
    average_ease_factor: float


class OverallStats(StrictResponse):
    """Totals across every deck of a learner."""

    total_cards: int
    due_cards: int
    mastered_cards: int
    total_reviews: int
    correct_reviews: int
    overall_accuracy: int
    deck_count: int


# ===========================================
# Persistence
# ===========================================


class StudyData(StrictResponse):
    """Everything the DeckStore mirrors to durable storage."""

    decks: list[Deck] = Field(default_factory=list)
    cards: list[Card] = Field(default_factory=list)
    study_history: list[StudyHistoryEntry] = Field(default_factory=list)


# ===========================================
# Lesson Models
# ===========================================


class VocabularyTerm(StrictResponse):
    term: str
    definition: str


class LessonContent(StrictResponse):
    vocabulary: list[VocabularyTerm] = Field(default_factory=list)
    key_points: list[str] = Field(default_factory=list)


class Lesson(StrictResponse):
    """
    Lesson payload as delivered by the lesson API.

    Only the fields needed for card generation are modelled; the rest of the
    lesson document is ignored.
    """

    id: str
    title: str
    content: Optional[LessonContent] = None

    @property
    def has_card_material(self) -> bool:
        return bool(
            self.content and (self.content.vocabulary or self.content.key_points)
        )
