"""
Unit tests for due-set selection and priority ordering.
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock, patch
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import pytest

from flashdeck.services.learning.due_queue import by_priority, due_cards


@pytest.fixture
def new_york():
    try:
        return ZoneInfo("America/New_York")
    except ZoneInfoNotFoundError:
        pytest.skip("tz database not available")


class TestDueCards:
    """Tests for the due-set selector."""

    def test_new_card_is_due(self, make_card, now):
        card = make_card(next_review_date=None)

        assert due_cards([card], now) == [card]

    def test_card_due_tomorrow_is_not_due(self, make_card, now):
        card = make_card(next_review_date=now + timedelta(days=1))

        assert due_cards([card], now) == []

    def test_card_due_at_start_of_today_is_due(self, make_card, now):
        midnight = datetime(2024, 3, 3, 0, 0, tzinfo=timezone.utc)
        card = make_card(next_review_date=midnight)

        assert due_cards([card], now) == [card]

    def test_card_due_later_today_is_due(self, make_card, now):
        """Day granularity: 12:01am, noon and 11:59pm today are all due."""
        card = make_card(
            next_review_date=datetime(2024, 3, 3, 23, 59, tzinfo=timezone.utc)
        )

        assert due_cards([card], now) == [card]

    def test_overdue_card_is_due(self, make_card, now):
        card = make_card(next_review_date=now - timedelta(days=10))

        assert due_cards([card], now) == [card]

    def test_failed_card_is_due_immediately(self, make_card, now):
        card = make_card(next_review_date=now)

        assert due_cards([card], now) == [card]

    def test_preserves_input_order(self, make_card, now):
        cards = [make_card() for _ in range(5)]
        later = make_card(next_review_date=now + timedelta(days=3))

        result = due_cards([cards[0], later, *cards[1:]], now)

        assert result == cards

    def test_day_boundary_uses_study_timezone(self, make_card, now, new_york):
        """
        02:00 UTC on March 4 is still March 3 in New York.

        now (15:00 UTC) is 10:00 in New York, also March 3.
        """
        card = make_card(
            next_review_date=datetime(2024, 3, 4, 2, 0, tzinfo=timezone.utc)
        )
        assert due_cards([card], now) == []

        mock_settings = MagicMock()
        mock_settings.STUDY_TIMEZONE = "America/New_York"
        with patch("flashdeck.utils.date_utils.settings", mock_settings):
            assert due_cards([card], now) == [card]


class TestByPriority:
    """Tests for the priority sorter."""

    def test_overdue_first_then_by_streak(self, make_card, now):
        a = make_card(front="A", next_review_date=now - timedelta(days=3))
        b = make_card(front="B", next_review_date=now - timedelta(days=1))
        c = make_card(front="C", correct_streak=0)
        d = make_card(front="D", correct_streak=2, next_review_date=now - timedelta(hours=1))

        result = by_priority([c, d, b, a], now)

        assert [card.front for card in result] == ["A", "B", "C", "D"]

    def test_due_today_is_not_overdue(self, make_card, now):
        """A card due earlier today sorts with new cards, by streak."""
        due_today = make_card(
            front="today",
            correct_streak=0,
            next_review_date=datetime(2024, 3, 3, 0, 1, tzinfo=timezone.utc),
        )
        overdue = make_card(
            front="yesterday",
            correct_streak=5,
            next_review_date=now - timedelta(days=1),
        )
        fresh = make_card(front="new", correct_streak=0)

        result = by_priority([fresh, due_today, overdue], now)

        assert [card.front for card in result] == ["yesterday", "new", "today"]

    def test_equal_keys_keep_input_order(self, make_card, now):
        cards = [make_card(front=str(i)) for i in range(6)]

        result = by_priority(cards, now)

        assert result == cards

    def test_does_not_modify_input(self, make_card, now):
        cards = [
            make_card(correct_streak=3, next_review_date=now),
            make_card(next_review_date=now - timedelta(days=2)),
        ]
        original = list(cards)

        by_priority(cards, now)

        assert cards == original

    def test_empty(self, now):
        assert by_priority([], now) == []
