"""
Unit tests for lesson deck generation.
"""

import pytest

from flashdeck.enums.learning import DeckCategory
from flashdeck.models.learning import Lesson
from flashdeck.services.learning.card_generator import (
    can_create_deck_from_lesson,
    create_deck_from_lesson,
    deck_for_lesson,
    lesson_cards,
)


@pytest.fixture
def lesson() -> Lesson:
    return Lesson.model_validate(
        {
            "id": "lesson-7",
            "title": "Photosynthesis",
            "subject": "science",
            "content": {
                "vocabulary": [
                    {"term": "Chlorophyll", "definition": "Green pigment in plants"},
                    {"term": "Glucose", "definition": "A simple sugar"},
                ],
                "key_points": ["Plants make food from sunlight"],
                "summary": "Ignored by card generation",
            },
        }
    )


class TestLessonCards:
    """Tests for card content generated from a lesson."""

    def test_vocabulary_then_key_points(self, lesson):
        cards = lesson_cards(lesson)

        assert [(c.front, c.back, c.card_type) for c in cards] == [
            ('What does "Chlorophyll" mean?', "Green pigment in plants", "vocabulary"),
            ('What does "Glucose" mean?', "A simple sugar", "vocabulary"),
            (
                "Key Point 1: Fill in the blank or explain this concept:",
                "Plants make food from sunlight",
                "concept",
            ),
        ]

    def test_lesson_without_content(self):
        assert lesson_cards(Lesson(id="l1", title="Empty")) == []


class TestCreateDeckFromLesson:
    """Tests for create_deck_from_lesson()."""

    def test_creates_lesson_deck(self, store, lesson):
        deck = create_deck_from_lesson(store, lesson)

        assert deck.name == "Photosynthesis Flashcards"
        assert deck.description == "Flashcards generated from: Photosynthesis"
        assert deck.category == DeckCategory.LESSON
        assert deck.lesson_id == "lesson-7"
        assert deck.color == "blue"
        assert deck.card_count == 3
        assert len(store.cards_for_deck(deck.id)) == 3

    def test_deck_created_even_without_cards(self, store):
        deck = create_deck_from_lesson(store, Lesson(id="l1", title="Empty"))

        assert deck.card_count == 0
        assert store.list_decks() == [deck]


class TestLessonLookup:
    """Tests for deck_for_lesson() and can_create_deck_from_lesson()."""

    def test_can_create_for_new_lesson(self, store, lesson):
        assert can_create_deck_from_lesson(store, lesson) is True

    def test_cannot_create_twice(self, store, lesson):
        deck = create_deck_from_lesson(store, lesson)

        assert can_create_deck_from_lesson(store, lesson) is False
        assert deck_for_lesson(store, lesson.id) == deck

    def test_cannot_create_without_material(self, store):
        lesson = Lesson.model_validate(
            {"id": "l2", "title": "Bare", "content": {"vocabulary": [], "key_points": []}}
        )

        assert can_create_deck_from_lesson(store, lesson) is False

    def test_cannot_create_without_lesson(self, store):
        assert can_create_deck_from_lesson(store, None) is False

    def test_no_deck_for_unknown_lesson(self, store):
        assert deck_for_lesson(store, "nope") is None
