"""
Learning System Enums

Defines enums for learner self-assessment, deck categories and the
study session state machine.
"""

from enum import Enum


class ConfidenceTier(str, Enum):
    """
    Three-level self-report a learner gives after flipping a card.

    The tier is stored on the card and in session results for display.
    Interval math only sees the binary correctness the host derives from it
    (see counts_as_correct).
    """

    STILL_LEARNING = "learning"  # "I need more practice"
    ALMOST = "almost"  # "I'm getting there!"
    GOT_IT = "got_it"  # "I know this one!"

    @property
    def counts_as_correct(self) -> bool:
        """Whether a host should report this tier as a correct answer."""
        return self is not ConfidenceTier.STILL_LEARNING


class DeckCategory(str, Enum):
    """Deck category tags shown on the deck shelf."""

    LESSON = "lesson"  # Generated from a lesson
    VOCABULARY = "vocabulary"
    MATH = "math"
    SCIENCE = "science"
    CUSTOM = "custom"  # Learner-made cards


class SessionState(str, Enum):
    """
    Study session lifecycle.

    State transitions:
    - IDLE → ACTIVE (start dealt at least one card)
    - ACTIVE → COMPLETE (last card answered, or early exit via end())
    - COMPLETE → ACTIVE (a new session is started)
    """

    IDLE = "idle"
    ACTIVE = "active"
    COMPLETE = "complete"


class SessionOutcomeKind(str, Enum):
    """Tag carried by every value returned from a session transition."""

    DEALT = "dealt"  # start() picked cards
    EMPTY = "empty"  # start() found nothing to study
    CONTINUE = "continue"  # answer recorded, more cards remain
    COMPLETE = "complete"  # session finished, stats attached
