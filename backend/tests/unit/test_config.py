"""
Unit Tests for Configuration Management

Tests the Settings class and YAML configuration loading.
These tests verify:
- Default value handling
- Environment variable loading
- YAML configuration parsing
"""

import os
from unittest.mock import patch

import pytest

from flashdeck.config import Settings, get_settings, load_yaml_config, settings


class TestSettings:
    """Test suite for the Settings Pydantic model."""

    def test_default_values(self) -> None:
        """Settings should have sensible defaults when env vars are not set."""
        with patch.dict(os.environ, {}, clear=True):
            test_settings = Settings(_env_file=None)

            assert test_settings.APP_NAME == "Flashdeck"
            assert test_settings.DEBUG is False
            assert test_settings.REDIS_URL == "redis://localhost:6379/0"
            assert test_settings.STUDY_TIMEZONE == "UTC"

    def test_session_and_xp_defaults(self) -> None:
        """Session sizing and XP defaults match the learner-facing rules."""
        with patch.dict(os.environ, {}, clear=True):
            test_settings = Settings(_env_file=None)

            assert test_settings.SESSION_DEFAULT_ACCURACY == 80
            assert (
                test_settings.SESSION_CAP_STRUGGLING,
                test_settings.SESSION_CAP_STEADY,
                test_settings.SESSION_CAP_CONFIDENT,
            ) == (5, 10, 15)
            assert test_settings.SESSION_RECENT_WINDOW == 10
            assert test_settings.XP_PER_CARD == 2
            assert test_settings.XP_BONUS == 25
            assert test_settings.XP_BONUS_ACCURACY == 80
            assert test_settings.STREAK_MILESTONES == [3, 7, 14, 30, 100]

    def test_env_variable_override(self) -> None:
        """Environment variables should override default values."""
        env_overrides = {
            "APP_NAME": "Custom App",
            "DEBUG": "true",
            "REDIS_URL": "redis://custom-redis:6380/5",
            "STUDY_TIMEZONE": "Europe/Berlin",
            "SESSION_CAP_CONFIDENT": "20",
            "STREAK_MILESTONES": "[5, 10]",
        }

        with patch.dict(os.environ, env_overrides, clear=True):
            test_settings = Settings(_env_file=None)

            assert test_settings.APP_NAME == "Custom App"
            assert test_settings.DEBUG is True
            assert test_settings.REDIS_URL == "redis://custom-redis:6380/5"
            assert test_settings.STUDY_TIMEZONE == "Europe/Berlin"
            assert test_settings.SESSION_CAP_CONFIDENT == 20
            assert test_settings.STREAK_MILESTONES == [5, 10]

    def test_get_settings_is_cached(self) -> None:
        """get_settings should return the same instance."""
        assert get_settings() is get_settings()
        assert isinstance(settings, Settings)

    def test_shared_settings_use_test_environment(self) -> None:
        """The module singleton is built after the test env overrides apply."""
        assert settings.STUDY_TIMEZONE == "UTC"
        assert settings.DEBUG is True
        assert settings.REDIS_URL == os.environ["REDIS_URL"]


class TestYamlConfig:
    """Test suite for YAML configuration loading."""

    def test_load_yaml_config_returns_dict(self) -> None:
        config = load_yaml_config()

        assert isinstance(config, dict)

    def test_store_section(self) -> None:
        """config/default.yaml should define the storage layout."""
        config = load_yaml_config()

        assert config["store"]["key_prefix"] == "flashdeck"
        assert config["store"]["max_connections"] == 10

    @pytest.mark.parametrize("section", ["app", "store"])
    def test_expected_sections_present(self, section) -> None:
        assert section in load_yaml_config()
