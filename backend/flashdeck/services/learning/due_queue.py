"""
Due Queue

Selects the cards that are eligible for review and orders them so the most
urgent material comes first in a session.

Due rule (calendar-day granularity in settings.STUDY_TIMEZONE):
- never reviewed (next_review_date is None) → always due
- next review falls on today or any earlier day → due
- next review falls on a later day → not due

Priority (stable; equal keys keep their input order):
1. Overdue cards (scheduled before today) come first, most overdue first
2. Everything else (due today or new) follows, lowest correct streak first.
   New cards count as "due today, not overdue".

Usage:
    from flashdeck.services.learning.due_queue import by_priority, due_cards

    queue = by_priority(due_cards(deck_cards))
"""

from datetime import date, datetime
from typing import Iterable, Optional

from flashdeck.models.learning import Card
from flashdeck.utils.date_utils import study_date, utc_now


def is_due(card: Card, today: date) -> bool:
    """Whether a card is eligible for review on the given study day."""
    if card.next_review_date is None:
        return True
    return study_date(card.next_review_date) <= today


def is_overdue(card: Card, today: date) -> bool:
    """Whether a card was scheduled for a day before today."""
    if card.next_review_date is None:
        return False
    return study_date(card.next_review_date) < today


def due_cards(cards: Iterable[Card], now: Optional[datetime] = None) -> list[Card]:
    """
    Filter cards down to those due for review now.

    Args:
        cards: Any collection of cards (order preserved).
        now: Reference instant (defaults to now).

    Returns:
        Due cards in input order.
    """
    today = study_date(now or utc_now())
    return [card for card in cards if is_due(card, today)]


def by_priority(cards: Iterable[Card], now: Optional[datetime] = None) -> list[Card]:
    """
    Order a due set so the most urgent cards are reviewed first.

    Args:
        cards: Due cards.
        now: Reference instant (defaults to now).

    Returns:
        New list; the input is not modified.
    """
    today = study_date(now or utc_now())

    def priority_key(card: Card) -> tuple:
        if is_overdue(card, today):
            return (0, card.next_review_date.timestamp())
        return (1, card.correct_streak)

    return sorted(cards, key=priority_key)
