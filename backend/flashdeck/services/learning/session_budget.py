"""
Session Size Budget

Decides how many cards to deal in one study session. A struggling learner
gets a short session so they are not overwhelmed; a confident learner can
push through more material.

Tiers (thresholds and caps come from settings):
    recent accuracy < 60       → at most 5 cards
    60 <= recent accuracy < 80 → at most 10 cards
    recent accuracy >= 80      → at most 15 cards

The session never holds more cards than are actually due.

Usage:
    from flashdeck.services.learning.session_budget import (
        recent_accuracy,
        recommended_count,
    )

    count = recommended_count(due, recent_accuracy(store.study_history))
"""

import logging
from typing import Optional, Sequence

from flashdeck.config.settings import settings
from flashdeck.models.learning import Card, StudyHistoryEntry
from flashdeck.utils.math_utils import round_half_up

logger = logging.getLogger(__name__)


def session_cap(accuracy_percent: float) -> int:
    """
    Maximum session size for a recent accuracy.

    Args:
        accuracy_percent: Recent accuracy, 0-100.

    Returns:
        Card cap for the learner's performance tier.
    """
    if accuracy_percent < settings.SESSION_STRUGGLING_ACCURACY:
        return settings.SESSION_CAP_STRUGGLING
    if accuracy_percent < settings.SESSION_CONFIDENT_ACCURACY:
        return settings.SESSION_CAP_STEADY
    return settings.SESSION_CAP_CONFIDENT


def recommended_count(
    due: Sequence[Card],
    recent_accuracy_percent: Optional[float] = None,
) -> int:
    """
    Recommend how many due cards to include in a session.

    Args:
        due: The due set for the deck.
        recent_accuracy_percent: Recent accuracy, 0-100. Defaults to
            settings.SESSION_DEFAULT_ACCURACY (optimistic, so a brand-new
            learner is not under-served).

    Returns:
        min(len(due), cap); 0 when nothing is due.
    """
    if not due:
        return 0

    if recent_accuracy_percent is None:
        recent_accuracy_percent = settings.SESSION_DEFAULT_ACCURACY

    cap = session_cap(recent_accuracy_percent)
    count = min(len(due), cap)

    logger.debug(
        f"Recommended {count} cards: {len(due)} due, "
        f"accuracy={recent_accuracy_percent}, cap={cap}"
    )
    return count


def recent_accuracy(
    history: Sequence[StudyHistoryEntry],
    window: Optional[int] = None,
) -> int:
    """
    Mean accuracy of the most recent sessions.

    Args:
        history: Study history in the order sessions ended.
        window: Number of trailing sessions to average
            (defaults to settings.SESSION_RECENT_WINDOW).

    Returns:
        Half-up rounded mean accuracy, or settings.SESSION_DEFAULT_ACCURACY
        when there is no history or the window is empty.
    """
    if window is None:
        window = settings.SESSION_RECENT_WINDOW
    recent = list(history)[-window:] if window > 0 else []

    if not recent:
        return settings.SESSION_DEFAULT_ACCURACY

    return round_half_up(sum(entry.accuracy for entry in recent) / len(recent))
