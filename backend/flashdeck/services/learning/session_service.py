"""
Study Session Service

Runs one learner's study sessions as an explicit state machine:

    IDLE ──start()──▶ ACTIVE ──last answer / end()──▶ COMPLETE
                        ▲                                 │
                        └────────────start()──────────────┘

A session deals the most urgent due cards of a deck (see due_queue), sized
to the learner's recent accuracy (see session_budget). Each answer runs the
review policy and is merged into the stored card immediately; the session
completes automatically when the last dealt card is answered, or early via
end(). Completion computes summary statistics and appends a study history
entry.

Every transition returns a tagged outcome (SessionDealt, SessionEmpty,
SessionContinue, SessionComplete). Misuse, such as answering while idle or
out of order, raises SessionStateError.

Usage:
    from flashdeck.services.learning.session_service import StudySessionManager

    manager = StudySessionManager(store)

    outcome = manager.start(deck.id)
    if outcome.kind == SessionOutcomeKind.DEALT:
        for card in outcome.cards:
            result = manager.record_answer(card.id, True, ConfidenceTier.GOT_IT)

    # result.kind == SessionOutcomeKind.COMPLETE; result.stats.xp_earned
"""

import logging
from datetime import datetime
from typing import Callable, Optional, Sequence, Union
from uuid import uuid4

from flashdeck.config.settings import settings
from flashdeck.enums.learning import ConfidenceTier, SessionState
from flashdeck.errors import SessionStateError
from flashdeck.models.learning import (
    Card,
    SessionComplete,
    SessionContinue,
    SessionDealt,
    SessionEmpty,
    SessionResult,
    SessionStats,
    StreakData,
    StudyHistoryEntry,
    StudySession,
)
from flashdeck.services.learning.deck_store import DeckStore
from flashdeck.services.learning.due_queue import by_priority, due_cards
from flashdeck.services.learning.mastery_service import recommended_deck
from flashdeck.services.learning.review_policy import ReviewPolicy
from flashdeck.services.learning.session_budget import (
    recent_accuracy,
    recommended_count,
)
from flashdeck.services.learning.streak_tracking import study_streak
from flashdeck.utils.date_utils import utc_now
from flashdeck.utils.math_utils import percent

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def calculate_session_stats(results: Sequence[SessionResult]) -> SessionStats:
    """
    Summary statistics for a session's results.

    XP is settings.XP_PER_CARD per answered card, plus settings.XP_BONUS when
    accuracy reaches settings.XP_BONUS_ACCURACY.

    Args:
        results: Answers recorded in the session (may be empty).

    Returns:
        SessionStats; all zeros for an empty session.
    """
    total = len(results)
    correct = sum(1 for result in results if result.was_correct)
    accuracy = percent(correct, total)
    bonus = total > 0 and accuracy >= settings.XP_BONUS_ACCURACY

    xp_earned = total * settings.XP_PER_CARD
    if bonus:
        xp_earned += settings.XP_BONUS

    return SessionStats(
        total=total,
        correct=correct,
        incorrect=total - correct,
        accuracy=accuracy,
        xp_earned=xp_earned,
        is_perfect=bonus,
    )


class StudySessionManager:
    """
    Session state machine for one learner.

    Holds at most one active session. Bound to the learner's DeckStore,
    through which all card and history mutations flow.
    """

    def __init__(
        self,
        store: DeckStore,
        clock: Optional[Clock] = None,
        policy: Optional[ReviewPolicy] = None,
    ):
        """
        Initialize the session manager.

        Args:
            store: The learner's deck store
            clock: Returns the current aware datetime; read once per operation
            policy: Review scheduler (defaults to ReviewPolicy())
        """
        self.store = store
        self._clock = clock or utc_now
        self._policy = policy or ReviewPolicy()
        self._state = SessionState.IDLE
        self._session: Optional[StudySession] = None

    # =========================================================================
    # State
    # =========================================================================

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def session(self) -> Optional[StudySession]:
        """The active session, or the last finished one."""
        return self._session

    @property
    def current_card(self) -> Optional[Card]:
        """
        Card at the cursor of the active session.

        Raises CardNotFoundError if that card was deleted after the session
        was dealt.
        """
        if self._state != SessionState.ACTIVE:
            return None
        return self.store.get_card(self._session.card_ids[self._session.current_index])

    # =========================================================================
    # Queries
    # =========================================================================

    def due_cards(self, deck_id: str) -> list[Card]:
        """Cards of a deck due for review now, in priority order."""
        now = self._clock()
        return by_priority(due_cards(self.store.cards_for_deck(deck_id), now), now)

    def recent_accuracy(self) -> int:
        return recent_accuracy(self.store.study_history)

    def recommended_count(self, deck_id: str) -> int:
        """Session size start() would deal for a deck."""
        return recommended_count(self.due_cards(deck_id), self.recent_accuracy())

    def study_streak(self) -> StreakData:
        return study_streak(self.store.study_history, now=self._clock())

    # =========================================================================
    # Transitions
    # =========================================================================

    def start(
        self,
        deck_id: str,
        requested_count: Optional[int] = None,
    ) -> Union[SessionDealt, SessionEmpty]:
        """
        Start a session on a deck.

        Args:
            deck_id: Deck to study (DeckNotFoundError if unknown).
            requested_count: Explicit session size. Defaults to the size
                recommended for the learner's recent accuracy.

        Returns:
            SessionDealt with the ordered cards to present, or SessionEmpty
            when nothing is due (the state is left unchanged).

        Raises:
            SessionStateError: A session is already active.
            ValueError: requested_count is less than 1.
        """
        return self._start(deck_id, requested_count, self._clock())

    def start_quick_study(self) -> Union[SessionDealt, SessionEmpty]:
        """
        Start a session on the recommended deck with the recommended size.

        Returns:
            SessionEmpty with no deck_id when the learner has no decks.
        """
        now = self._clock()
        deck = recommended_deck(self.store, now)
        if deck is None:
            logger.info("Quick study requested with no decks")
            return SessionEmpty(deck_id=None)
        return self._start(deck.id, None, now)

    def record_answer(
        self,
        card_id: str,
        was_correct: bool,
        confidence: ConfidenceTier,
    ) -> Union[SessionContinue, SessionComplete]:
        """
        Record the answer for the card at the cursor.

        The review policy result is merged into the stored card before the
        session advances. Answering the last dealt card completes the session.

        Args:
            card_id: Must be the card at the cursor.
            was_correct: Whether the learner recalled the card.
            confidence: Self-reported confidence tier (stored, not scheduled on).

        Returns:
            SessionContinue while cards remain, SessionComplete after the last.

        Raises:
            SessionStateError: No session is active, or card_id is not the
                card at the cursor.
            CardNotFoundError: The card was deleted from the store after the
                session was dealt. The session is left unchanged and can
                only be finished with end().
        """
        session = self._require_active()

        expected = session.card_ids[session.current_index]
        if card_id != expected:
            raise SessionStateError(
                f"Answer for card {card_id} but the current card is {expected}",
                details={
                    "card_id": card_id,
                    "expected_card_id": expected,
                    "current_index": session.current_index,
                },
            )

        now = self._clock()

        card = self.store.get_card(card_id)
        review = self._policy.review(card, was_correct, review_time=now)
        self.store.apply_review(card_id, review, was_correct, confidence, now)

        result = SessionResult(
            card_id=card_id,
            was_correct=was_correct,
            confidence=confidence,
            timestamp=now,
        )
        session = StudySession(
            id=session.id,
            deck_id=session.deck_id,
            started_at=session.started_at,
            card_ids=session.card_ids,
            current_index=session.current_index + 1,
            results=[*session.results, result],
        )
        self._session = session

        if session.is_complete:
            return self._complete(now)

        return SessionContinue(answered=len(session.results), remaining=session.remaining)

    def end(self) -> Optional[SessionComplete]:
        """
        End the active session early with the results so far.

        Returns:
            SessionComplete, or None when no session is active.
        """
        if self._state != SessionState.ACTIVE:
            logger.debug(f"end() called in state {self._state.value}; nothing to end")
            return None

        logger.info(
            f"Ending session {self._session.id} early after "
            f"{len(self._session.results)}/{len(self._session.card_ids)} cards"
        )
        return self._complete(self._clock())

    # =========================================================================
    # Helper Methods
    # =========================================================================

    def _start(
        self,
        deck_id: str,
        requested_count: Optional[int],
        now: datetime,
    ) -> Union[SessionDealt, SessionEmpty]:
        if self._state == SessionState.ACTIVE:
            raise SessionStateError(
                f"Session {self._session.id} is still active",
                details={"session_id": self._session.id, "deck_id": deck_id},
            )
        if requested_count is not None and requested_count < 1:
            raise ValueError(f"requested_count must be >= 1, got {requested_count}")

        queue = by_priority(due_cards(self.store.cards_for_deck(deck_id), now), now)

        if requested_count is None:
            count = recommended_count(queue, self.recent_accuracy())
        else:
            count = requested_count
        dealt = queue[:count]

        if not dealt:
            logger.info(f"Nothing to study in deck {deck_id}")
            return SessionEmpty(deck_id=deck_id)

        self._session = StudySession(
            id=str(uuid4()),
            deck_id=deck_id,
            started_at=now,
            card_ids=[card.id for card in dealt],
        )
        self._state = SessionState.ACTIVE

        logger.info(
            f"Started session {self._session.id} on deck {deck_id}: "
            f"{len(dealt)} of {len(queue)} due cards"
        )
        return SessionDealt(session_id=self._session.id, deck_id=deck_id, cards=dealt)

    def _require_active(self) -> StudySession:
        if self._state != SessionState.ACTIVE:
            raise SessionStateError(
                f"No active study session (state: {self._state.value})",
                details={"state": self._state.value},
            )
        return self._session

    def _complete(self, now: datetime) -> SessionComplete:
        session = self._session
        stats = calculate_session_stats(session.results)

        entry = StudyHistoryEntry(
            session_id=session.id,
            deck_id=session.deck_id,
            date=now,
            cards_reviewed=stats.total,
            accuracy=stats.accuracy,
            xp_earned=stats.xp_earned,
        )
        self.store.append_history(entry)
        self._state = SessionState.COMPLETE

        logger.info(
            f"Completed session {session.id}: {stats.correct}/{stats.total} correct, "
            f"accuracy={stats.accuracy}%, xp={stats.xp_earned}"
        )
        return SessionComplete(stats=stats, history_entry=entry)
