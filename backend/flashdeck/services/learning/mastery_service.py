"""
Mastery Service

Read-only analytics over a learner's decks and cards.

Mastery levels are derived from a card's correct_reviews count:

    | Level | Label     | Min correct |
    |-------|-----------|-------------|
    | 0     | New       | 0           |
    | 1     | Learning  | 1           |
    | 2     | Familiar  | 3           |
    | 3     | Confident | 5           |
    | 4     | Mastered  | 7           |

Usage:
    from flashdeck.services.learning.mastery_service import (
        deck_stats,
        overall_stats,
        recommended_deck,
    )

    stats = deck_stats(store, deck.id)
    print(stats.mastery_distribution)  # {"New": 3, "Learning": 2}
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from flashdeck.config.settings import settings
from flashdeck.constants import INITIAL_EASE
from flashdeck.models.learning import Card, Deck, DeckStats, OverallStats
from flashdeck.services.learning.deck_store import DeckStore
from flashdeck.services.learning.due_queue import due_cards
from flashdeck.utils.date_utils import utc_now
from flashdeck.utils.math_utils import percent


@dataclass(frozen=True)
class MasteryLevel:
    level: int
    label: str
    color: str
    min_correct: int


MASTERY_LEVELS = (
    MasteryLevel(0, "New", "gray", 0),
    MasteryLevel(1, "Learning", "orange", 1),
    MasteryLevel(2, "Familiar", "yellow", 3),
    MasteryLevel(3, "Confident", "blue", 5),
    MasteryLevel(4, "Mastered", "green", 7),
)

MASTERED = MASTERY_LEVELS[-1]


def get_mastery_level(correct_reviews: int) -> MasteryLevel:
    """Highest mastery level whose threshold the count reaches."""
    for level in reversed(MASTERY_LEVELS):
        if correct_reviews >= level.min_correct:
            return level
    return MASTERY_LEVELS[0]


def deck_stats(
    store: DeckStore,
    deck_id: str,
    now: Optional[datetime] = None,
) -> DeckStats:
    """
    Overview of one deck.

    Args:
        store: Learner's store.
        deck_id: Deck to summarize (DeckNotFoundError if unknown).
        now: Reference instant for the due count.

    Returns:
        DeckStats. An empty deck reports the initial ease as its average.
    """
    cards = store.cards_for_deck(deck_id)

    distribution: dict[str, int] = {}
    for card in cards:
        label = get_mastery_level(card.correct_reviews).label
        distribution[label] = distribution.get(label, 0) + 1

    average_ease = (
        sum(card.ease_factor for card in cards) / len(cards) if cards else INITIAL_EASE
    )

    return DeckStats(
        deck_id=deck_id,
        total_cards=len(cards),
        due_cards=len(due_cards(cards, now)),
        mastery_distribution=distribution,
        average_ease_factor=average_ease,
    )


def overall_stats(store: DeckStore, now: Optional[datetime] = None) -> OverallStats:
    """Totals across all of a learner's decks."""
    cards = store.all_cards()

    total_reviews = sum(card.total_reviews for card in cards)
    correct_reviews = sum(card.correct_reviews for card in cards)
    mastered = [
        card
        for card in cards
        if get_mastery_level(card.correct_reviews).level >= MASTERED.level
    ]

    return OverallStats(
        total_cards=len(cards),
        due_cards=len(due_cards(cards, now)),
        mastered_cards=len(mastered),
        total_reviews=total_reviews,
        correct_reviews=correct_reviews,
        overall_accuracy=percent(correct_reviews, total_reviews),
        deck_count=len(store.list_decks()),
    )


def is_struggling(card: Card) -> bool:
    """
    Whether a card needs extra attention.

    Either its ease has sunk below the threshold, or it has been reviewed
    often yet is still answered wrong more than it is answered right.
    """
    if card.ease_factor < settings.STRUGGLING_EASE_THRESHOLD:
        return True
    if card.total_reviews > settings.STRUGGLING_MIN_REVIEWS:
        ratio = card.correct_reviews / card.total_reviews
        return ratio < settings.STRUGGLING_ACCURACY_RATIO
    return False


def struggling_cards(store: DeckStore, deck_id: Optional[str] = None) -> list[Card]:
    """Struggling cards of one deck, or of every deck when deck_id is None."""
    cards = store.cards_for_deck(deck_id) if deck_id else store.all_cards()
    return [card for card in cards if is_struggling(card)]


def recommended_deck(
    store: DeckStore,
    now: Optional[datetime] = None,
) -> Optional[Deck]:
    """
    Pick the deck a learner should study next.

    The deck with the most due cards wins. When nothing is due anywhere, the
    deck with the most cards is suggested instead. Ties go to the deck
    created first.

    Returns:
        The deck, or None when the learner has no decks.
    """
    decks = store.list_decks()
    if not decks:
        return None

    now = now or utc_now()
    due_counts = {
        deck.id: len(due_cards(store.cards_for_deck(deck.id), now)) for deck in decks
    }

    if any(due_counts.values()):
        return max(decks, key=lambda deck: due_counts[deck.id])

    return max(decks, key=lambda deck: deck.card_count)
