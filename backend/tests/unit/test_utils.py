"""
Unit tests for date and math helpers.
"""

from datetime import date, datetime, timezone
from unittest.mock import MagicMock, patch
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import pytest

from flashdeck.utils.date_utils import study_date, utc_now
from flashdeck.utils.math_utils import percent, round_half_up


class TestRoundHalfUp:
    """Tests for round_half_up()."""

    @pytest.mark.parametrize(
        "value,expected",
        [(12.5, 13), (2.5, 3), (0.5, 1), (12.4999, 12), (0.0, 0), (99.5, 100)],
    )
    def test_rounds_halves_up(self, value, expected):
        assert round_half_up(value) == expected


class TestPercent:
    """Tests for percent()."""

    @pytest.mark.parametrize(
        "part,whole,expected",
        [(9, 10, 90), (1, 3, 33), (2, 3, 67), (1, 8, 13), (0, 5, 0), (0, 0, 0)],
    )
    def test_percent(self, part, whole, expected):
        assert percent(part, whole) == expected


class TestStudyDate:
    """Tests for calendar-day conversion."""

    def test_utc_day(self):
        moment = datetime(2024, 3, 3, 23, 30, tzinfo=timezone.utc)

        assert study_date(moment) == date(2024, 3, 3)

    def test_study_timezone_shifts_day(self):
        try:
            ZoneInfo("Asia/Tokyo")
        except ZoneInfoNotFoundError:
            pytest.skip("tz database not available")
        moment = datetime(2024, 3, 3, 23, 30, tzinfo=timezone.utc)
        mock_settings = MagicMock()
        mock_settings.STUDY_TIMEZONE = "Asia/Tokyo"

        with patch("flashdeck.utils.date_utils.settings", mock_settings):
            assert study_date(moment) == date(2024, 3, 4)

    def test_utc_now_is_aware(self):
        assert utc_now().tzinfo is not None
