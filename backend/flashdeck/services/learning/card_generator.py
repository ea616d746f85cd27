"""
Card Generator Service

Builds a flashcard deck from a lesson. Generation is deterministic and
template based; the same lesson always yields the same cards.

Card Types Generated:
- Vocabulary cards: 'What does "X" mean?' → definition
- Concept cards: "Key Point N: ..." → the key point

Usage:
    from flashdeck.services.learning.card_generator import (
        can_create_deck_from_lesson,
        create_deck_from_lesson,
    )

    if can_create_deck_from_lesson(store, lesson):
        deck = create_deck_from_lesson(store, lesson)
"""

import logging
from typing import Optional

from flashdeck.constants import LESSON_DECK_COLOR
from flashdeck.enums.learning import DeckCategory
from flashdeck.models.learning import CardCreate, Deck, DeckCreate, Lesson
from flashdeck.services.learning.deck_store import DeckStore

logger = logging.getLogger(__name__)

VOCABULARY_CARD_TYPE = "vocabulary"
CONCEPT_CARD_TYPE = "concept"


def lesson_cards(lesson: Lesson) -> list[CardCreate]:
    """
    Card content for a lesson, vocabulary first, then key points in order.

    Args:
        lesson: Lesson payload.

    Returns:
        Card content; empty when the lesson has no vocabulary or key points.
    """
    if lesson.content is None:
        return []

    cards = [
        CardCreate(
            front=f'What does "{vocab.term}" mean?',
            back=vocab.definition,
            card_type=VOCABULARY_CARD_TYPE,
        )
        for vocab in lesson.content.vocabulary
    ]

    cards.extend(
        CardCreate(
            front=f"Key Point {index}: Fill in the blank or explain this concept:",
            back=point,
            card_type=CONCEPT_CARD_TYPE,
        )
        for index, point in enumerate(lesson.content.key_points, start=1)
    )

    return cards


def create_deck_from_lesson(store: DeckStore, lesson: Lesson) -> Deck:
    """
    Create a lesson deck and fill it with generated cards.

    The deck is created even when the lesson yields no cards.

    Args:
        store: Learner's store.
        lesson: Lesson to generate from.

    Returns:
        The deck, with card_count reflecting the generated cards.
    """
    deck = store.create_deck(
        DeckCreate(
            name=f"{lesson.title} Flashcards",
            description=f"Flashcards generated from: {lesson.title}",
            category=DeckCategory.LESSON,
            lesson_id=lesson.id,
            color=LESSON_DECK_COLOR,
        )
    )

    cards = lesson_cards(lesson)
    if cards:
        store.add_cards(cards, deck.id)

    logger.info(
        f"Generated deck {deck.id} from lesson {lesson.id} with {len(cards)} cards"
    )
    return store.get_deck(deck.id)


def deck_for_lesson(store: DeckStore, lesson_id: str) -> Optional[Deck]:
    """The deck generated from a lesson, if any."""
    return next(
        (deck for deck in store.list_decks() if deck.lesson_id == lesson_id), None
    )


def can_create_deck_from_lesson(store: DeckStore, lesson: Optional[Lesson]) -> bool:
    """Whether a lesson has card material and no deck generated from it yet."""
    if lesson is None:
        return False
    return lesson.has_card_material and deck_for_lesson(store, lesson.id) is None
