"""
Study Engine Exceptions

Provides a small, consistent exception hierarchy for the study engine.

Categories:
- SessionStateError: programmer errors against the session state machine
  (answering while idle, answering out of order). Fail fast, never retried.
- NotFoundError: store operations that reference unknown decks or cards.
- StorageError: durable persistence failures. Raised by storage adapters and
  swallowed (and logged) at the DeckStore boundary, so a storage hiccup never
  blocks a learner's session.

Usage:
    from flashdeck.errors import SessionStateError

    raise SessionStateError(
        "No active study session",
        details={"state": "idle"},
    )
"""

from typing import Optional


class ServiceError(Exception):
    """
    Base exception for study engine errors.

    Provides consistent error handling with:
    - Error code for categorization
    - Optional details for debugging

    Example:
        raise ServiceError("Something went wrong", error_code="engine_error")
    """

    error_code: str = "service_error"

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[dict] = None,
    ):
        super().__init__(message)
        self.message = message
        if error_code:
            self.error_code = error_code
        self.details = details


class SessionStateError(ServiceError):
    """
    Session state machine invariant violation.

    Raised when a transition is requested in a state that does not allow it,
    or when an answer does not match the card at the session cursor.
    """

    error_code = "session_state_error"


class NotFoundError(ServiceError):
    """Referenced record does not exist."""

    error_code = "not_found"


class DeckNotFoundError(NotFoundError):
    """Deck id is not in the store."""

    error_code = "deck_not_found"

    def __init__(self, deck_id: str):
        super().__init__(f"Deck {deck_id} not found", details={"deck_id": deck_id})
        self.deck_id = deck_id


class CardNotFoundError(NotFoundError):
    """Card id is not in the store."""

    error_code = "card_not_found"

    def __init__(self, card_id: str):
        super().__init__(f"Card {card_id} not found", details={"card_id": card_id})
        self.card_id = card_id


class StorageError(ServiceError):
    """
    Durable storage error.

    Raised when reading or writing the learner's study data blob fails.
    """

    error_code = "storage_error"
