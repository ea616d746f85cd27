"""
Shared Test Fixtures and Configuration

This module provides pytest fixtures used across the unit tests.
"""

import os
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Callable, Generator, Optional
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from dotenv import load_dotenv

# Add the backend directory to the path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

# Load .env file from project root BEFORE any fixtures run
_project_root = Path(__file__).parent.parent.parent
_env_file = _project_root / ".env"
if _env_file.exists():
    load_dotenv(_env_file)

# Test overrides must be in place before flashdeck builds its settings singleton
_original_env = os.environ.copy()
os.environ.update(
    {
        "REDIS_URL": os.environ.get("REDIS_URL", "redis://localhost:6379/1"),
        "STUDY_TIMEZONE": "UTC",
        "DEBUG": "true",
    }
)

from flashdeck.models.learning import (  # noqa: E402
    Card,
    Deck,
    StudyData,
    StudyHistoryEntry,
)
from flashdeck.services.learning.deck_store import DeckStore  # noqa: E402


# ============================================================================
# Environment Configuration
# ============================================================================


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment() -> Generator[None, None, None]:
    """
    Restore the environment after the test session.

    The overrides themselves are applied at import time, above, so the
    settings singleton is built with predictable configuration instead of
    values from .env files.
    """
    yield

    # Keep pytest's own bookkeeping variable; pytest pops it after this teardown.
    current_test = os.environ.get("PYTEST_CURRENT_TEST")
    os.environ.clear()
    os.environ.update(_original_env)
    if current_test is not None:
        os.environ["PYTEST_CURRENT_TEST"] = current_test


# ============================================================================
# Time
# ============================================================================


class FrozenClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: Any) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def now() -> datetime:
    """Fixed reference instant: 2024-03-03 15:00 UTC (a Sunday afternoon)."""
    return datetime(2024, 3, 3, 15, 0, tzinfo=timezone.utc)


@pytest.fixture
def clock(now: datetime) -> FrozenClock:
    return FrozenClock(now)


# ============================================================================
# Record Factories
# ============================================================================


@pytest.fixture
def make_card(now: datetime) -> Callable[..., Card]:
    """
    Factory for Card records.

    Defaults describe a brand-new card in deck "deck-1"; any field can be
    overridden.
    """

    def _make(**overrides: Any) -> Card:
        fields = {
            "id": str(uuid4()),
            "deck_id": "deck-1",
            "front": "What is 2 + 2?",
            "back": "4",
            "created_at": now - timedelta(days=30),
        }
        fields.update(overrides)
        return Card(**fields)

    return _make


@pytest.fixture
def make_deck(now: datetime) -> Callable[..., Deck]:
    """Factory for Deck records."""

    def _make(**overrides: Any) -> Deck:
        fields = {
            "id": str(uuid4()),
            "name": "Animals",
            "created_at": now - timedelta(days=30),
            "updated_at": now - timedelta(days=30),
        }
        fields.update(overrides)
        return Deck(**fields)

    return _make


@pytest.fixture
def make_history_entry() -> Callable[..., StudyHistoryEntry]:
    """Factory for StudyHistoryEntry records."""

    def _make(date: datetime, accuracy: int = 80, **overrides: Any) -> StudyHistoryEntry:
        fields = {
            "session_id": str(uuid4()),
            "deck_id": "deck-1",
            "date": date,
            "cards_reviewed": 10,
            "accuracy": accuracy,
            "xp_earned": 20,
        }
        fields.update(overrides)
        return StudyHistoryEntry(**fields)

    return _make


# ============================================================================
# Store Fixtures
# ============================================================================


@pytest.fixture
def store() -> DeckStore:
    """Memory-only store for a test learner."""
    return DeckStore("learner-test")


@pytest.fixture
def make_store() -> Callable[..., DeckStore]:
    """Factory for a store preloaded with records."""

    def _make(
        decks: Optional[list[Deck]] = None,
        cards: Optional[list[Card]] = None,
        history: Optional[list[StudyHistoryEntry]] = None,
        storage: Any = None,
    ) -> DeckStore:
        data = StudyData(
            decks=decks or [],
            cards=cards or [],
            study_history=history or [],
        )
        return DeckStore("learner-test", storage=storage, data=data)

    return _make


# ============================================================================
# Mock Fixtures
# ============================================================================


@pytest.fixture
def mock_redis() -> MagicMock:
    """
    Create a mock Redis client for unit testing.

    This allows testing Redis-dependent code without a real Redis server.
    """
    mock = MagicMock()
    mock.get = AsyncMock(return_value=None)
    mock.set = AsyncMock(return_value=True)
    mock.delete = AsyncMock(return_value=1)
    return mock


@pytest.fixture
def mock_storage() -> MagicMock:
    """Mock LearnerDataStore with async load/save."""
    mock = MagicMock()
    mock.load = AsyncMock(return_value=None)
    mock.save = AsyncMock(return_value=None)
    return mock
