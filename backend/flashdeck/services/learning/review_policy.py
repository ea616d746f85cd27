"""
Card Review Policy

A simplified SM-2 style scheduler tuned for young learners. Given a card's
review metadata and whether the last answer was correct, it computes when the
card should come back and how its ease factor changes.

Key Concepts:
- Correct streak: consecutive correct answers since the last miss
- Ease factor (1.3-3.0): per-card multiplier on review intervals
- Step table: base interval in days for streaks 1..6+ (1, 3, 7, 14, 30, 60)

Law:
    correct   → streak + 1, interval = round(step[min(streak, 6)] * ease / 2.5),
                ease + 0.1 (capped at 3.0)
    incorrect → streak 0, due immediately, ease - 0.2 (floored at 1.3)

The confidence tier a learner reports is not an input here; only binary
correctness affects scheduling.

Usage:
    from flashdeck.services.learning.review_policy import next_review_state

    state = next_review_state(card, was_correct=True)
    card_updates = state.as_card_fields()
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from flashdeck.constants import (
    EASE_STEP_DOWN,
    EASE_STEP_UP,
    INITIAL_EASE,
    INTERVAL_STEPS,
    MAX_EASE,
    MAX_INTERVAL_STEP,
    MIN_EASE,
)
from flashdeck.models.learning import Card
from flashdeck.utils.date_utils import utc_now
from flashdeck.utils.math_utils import round_half_up

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReviewState:
    """
    Scheduling fields produced by one review.

    The caller merges these into the stored card; interval_days is
    informational (0 for a miss).
    """

    next_review_date: datetime
    correct_streak: int
    ease_factor: float
    interval_days: int

    def as_card_fields(self) -> dict:
        """Fields to merge into a Card record."""
        return {
            "next_review_date": self.next_review_date,
            "correct_streak": self.correct_streak,
            "ease_factor": self.ease_factor,
        }


def clamp_ease(ease: float) -> float:
    """Clamp an ease factor to [MIN_EASE, MAX_EASE], rounded to 2 places."""
    return round(min(MAX_EASE, max(MIN_EASE, ease)), 2)


def base_interval_days(correct_streak: int) -> int:
    """
    Base interval for a correct streak from the step table.

    Streaks beyond the last step use the last step (60 days).

    Args:
        correct_streak: Streak after the current answer (>= 1).
    """
    if correct_streak < 1:
        raise ValueError(f"correct_streak must be >= 1, got {correct_streak}")
    return INTERVAL_STEPS[min(correct_streak, MAX_INTERVAL_STEP)]


def scaled_interval_days(correct_streak: int, ease_factor: float) -> int:
    """Step-table interval scaled by ease relative to the initial ease."""
    return round_half_up(
        base_interval_days(correct_streak) * ease_factor / INITIAL_EASE
    )


class ReviewPolicy:
    """
    Stateless review scheduler.

    Deterministic given the card's metadata, the outcome and the review time.
    """

    def review(
        self,
        card: Card,
        was_correct: bool,
        review_time: Optional[datetime] = None,
    ) -> ReviewState:
        """
        Compute the next review state for a card.

        Args:
            card: Card being answered (only review metadata is read).
            was_correct: Whether the learner recalled the card.
            review_time: Instant of the answer (defaults to now). Read once.

        Returns:
            ReviewState to merge into the card.
        """
        now = review_time or utc_now()

        if not was_correct:
            return ReviewState(
                next_review_date=now,
                correct_streak=0,
                ease_factor=clamp_ease(card.ease_factor - EASE_STEP_DOWN),
                interval_days=0,
            )

        streak = card.correct_streak + 1
        # Interval is scaled by the ease the card had before this answer
        days = scaled_interval_days(streak, card.ease_factor)

        logger.debug(
            f"Card {card.id}: streak {streak}, ease {card.ease_factor:.2f}, "
            f"next review in {days} days"
        )

        return ReviewState(
            next_review_date=now + timedelta(days=days),
            correct_streak=streak,
            ease_factor=clamp_ease(card.ease_factor + EASE_STEP_UP),
            interval_days=days,
        )


_default_policy = ReviewPolicy()


def next_review_state(
    card: Card,
    was_correct: bool,
    now: Optional[datetime] = None,
) -> ReviewState:
    """Compute the next review state with the default policy."""
    return _default_policy.review(card, was_correct, review_time=now)
