"""
Deck and Card Store

The owning aggregate for one learner's decks, cards and study history. The
in-memory model is the source of truth for the life of the process; every
mutation is mirrored to durable storage afterwards without blocking the
caller.

Responsibilities:
- Deck CRUD, with delete cascading to the deck's cards
- Card CRUD, keeping each deck's card_count equal to its live cards
- Applying review policy results (the only path that changes review metadata)
- Appending study history entries
- Fire-and-forget mirroring to a LearnerDataStore, and loading it back

Durable writes coalesce: a mutation marks the model dirty and at most one
writer task runs on the event loop, re-snapshotting until nothing is dirty.
Storage failures are logged and swallowed; the learner is never blocked by
a storage hiccup.

Usage:
    from flashdeck.db.redis import LearnerDataStore
    from flashdeck.services.learning.deck_store import DeckStore

    store = await DeckStore.load("learner-123", LearnerDataStore())
    deck = store.create_deck(DeckCreate(name="Animals"))
    store.add_cards([CardCreate(front="Cat", back="Gato")], deck.id)
    await store.flush()  # optional: wait for the durable write
"""

from __future__ import annotations

import asyncio
import logging
from collections import Counter
from datetime import datetime
from typing import Any, Iterable, Optional
from uuid import uuid4

from pydantic import ValidationError

from flashdeck.enums.learning import ConfidenceTier
from flashdeck.errors import CardNotFoundError, DeckNotFoundError, StorageError
from flashdeck.db.redis import LearnerDataStore
from flashdeck.models.learning import (
    Card,
    CardCreate,
    CardUpdate,
    Deck,
    DeckCreate,
    DeckUpdate,
    StudyData,
    StudyHistoryEntry,
)
from flashdeck.services.learning.review_policy import ReviewState
from flashdeck.utils.date_utils import utc_now

logger = logging.getLogger(__name__)


class DeckStore:
    """
    In-memory store of one learner's study data.

    Not safe for concurrent mutation; all calls are expected from a single
    event loop thread.
    """

    def __init__(
        self,
        learner_id: str,
        storage: Optional[LearnerDataStore] = None,
        data: Optional[StudyData] = None,
    ):
        """
        Initialize the store.

        Args:
            learner_id: Identity the durable blob is keyed by.
            storage: Durable mirror. None keeps the store memory-only.
            data: Initial contents (empty when omitted).
        """
        self.learner_id = learner_id
        self._storage = storage
        data = data or StudyData()

        # Dicts keep insertion order, which is creation order
        self._cards: dict[str, Card] = {card.id: card for card in data.cards}
        self._history: list[StudyHistoryEntry] = list(data.study_history)

        # Stored card counts may be stale; the live cards are authoritative
        counts = Counter(card.deck_id for card in self._cards.values())
        self._decks: dict[str, Deck] = {
            deck.id: deck.model_copy(update={"card_count": counts.get(deck.id, 0)})
            for deck in data.decks
        }

        self._dirty = False
        self._writer: Optional[asyncio.Task] = None

    @classmethod
    async def load(
        cls,
        learner_id: str,
        storage: Optional[LearnerDataStore],
    ) -> DeckStore:
        """
        Restore a learner's store from durable storage.

        Missing, unreadable or invalid data yields an empty store; the
        problem is logged and not raised.

        Args:
            learner_id: Identity the blob is keyed by.
            storage: Durable storage to read from (None → empty store).

        Returns:
            A store mirroring to the same storage.
        """
        data = StudyData()

        if storage is not None:
            try:
                raw = await storage.load(learner_id)
                if raw is not None:
                    data = StudyData.model_validate(raw)
            except (StorageError, ValidationError) as e:
                logger.warning(
                    f"Could not load study data for learner {learner_id}, "
                    f"starting empty: {e}"
                )
                data = StudyData()

        store = cls(learner_id, storage=storage, data=data)
        logger.info(
            f"Loaded study data for learner {learner_id}: {len(store._decks)} decks, "
            f"{len(store._cards)} cards, {len(store._history)} sessions"
        )
        return store

    # =========================================================================
    # Queries
    # =========================================================================

    def get_deck(self, deck_id: str) -> Deck:
        """Get a deck by ID. Raises DeckNotFoundError."""
        deck = self._decks.get(deck_id)
        if deck is None:
            raise DeckNotFoundError(deck_id)
        return deck

    def get_card(self, card_id: str) -> Card:
        """Get a card by ID. Raises CardNotFoundError."""
        card = self._cards.get(card_id)
        if card is None:
            raise CardNotFoundError(card_id)
        return card

    def list_decks(self) -> list[Deck]:
        """All decks in creation order."""
        return list(self._decks.values())

    def all_cards(self) -> list[Card]:
        """All cards in creation order."""
        return list(self._cards.values())

    def cards_for_deck(self, deck_id: str) -> list[Card]:
        """Cards of one deck in creation order."""
        self.get_deck(deck_id)
        return [card for card in self._cards.values() if card.deck_id == deck_id]

    @property
    def study_history(self) -> list[StudyHistoryEntry]:
        """Ended sessions, oldest first. A copy; entries are immutable."""
        return list(self._history)

    def export(self) -> StudyData:
        """Snapshot of everything the store persists."""
        return StudyData(
            decks=self.list_decks(),
            cards=self.all_cards(),
            study_history=self.study_history,
        )

    # =========================================================================
    # Deck Mutations
    # =========================================================================

    def create_deck(self, deck_data: DeckCreate) -> Deck:
        """
        Create an empty deck.

        Args:
            deck_data: Deck fields.

        Returns:
            The created deck with id, timestamps and card_count=0.
        """
        now = utc_now()
        deck = Deck(
            id=str(uuid4()),
            created_at=now,
            updated_at=now,
            card_count=0,
            **deck_data.model_dump(),
        )
        self._decks[deck.id] = deck

        logger.info(f"Created deck {deck.id} ({deck.name!r})")
        self._mirror()
        return deck

    def update_deck(self, deck_id: str, updates: DeckUpdate) -> Deck:
        """
        Apply a partial update to a deck.

        Only fields explicitly set on updates are changed; updated_at is
        refreshed.
        """
        deck = self.get_deck(deck_id)
        changes = updates.model_dump(exclude_unset=True)
        updated = self._replace_deck(deck, updated_at=utc_now(), **changes)

        logger.debug(f"Updated deck {deck_id}: {sorted(changes)}")
        self._mirror()
        return updated

    def delete_deck(self, deck_id: str) -> None:
        """Delete a deck and all of its cards."""
        self.get_deck(deck_id)
        del self._decks[deck_id]

        removed = [cid for cid, card in self._cards.items() if card.deck_id == deck_id]
        for card_id in removed:
            del self._cards[card_id]

        logger.info(f"Deleted deck {deck_id} and {len(removed)} cards")
        self._mirror()

    # =========================================================================
    # Card Mutations
    # =========================================================================

    def add_cards(self, cards: Iterable[CardCreate], deck_id: str) -> list[Card]:
        """
        Add cards to a deck.

        New cards start with streak 0, ease 2.5 and no review date, so they
        are due immediately.

        Args:
            cards: Card content.
            deck_id: Owning deck.

        Returns:
            The created cards.
        """
        deck = self.get_deck(deck_id)
        now = utc_now()

        new_cards = [
            Card(id=str(uuid4()), deck_id=deck_id, created_at=now, **c.model_dump())
            for c in cards
        ]
        for card in new_cards:
            self._cards[card.id] = card

        if new_cards:
            self._replace_deck(
                deck,
                card_count=deck.card_count + len(new_cards),
                updated_at=now,
            )
            logger.info(f"Added {len(new_cards)} cards to deck {deck_id}")
            self._mirror()

        return new_cards

    def update_card(self, card_id: str, updates: CardUpdate) -> Card:
        """Apply a content-only update to a card."""
        card = self.get_card(card_id)
        updated = self._replace_card(card, **updates.model_dump(exclude_unset=True))
        self._mirror()
        return updated

    def delete_card(self, card_id: str) -> None:
        """Delete a card and decrement its deck's card_count (floored at 0)."""
        card = self.get_card(card_id)
        del self._cards[card_id]

        deck = self._decks.get(card.deck_id)
        if deck is not None:
            self._replace_deck(
                deck,
                card_count=max(0, deck.card_count - 1),
                updated_at=utc_now(),
            )

        logger.debug(f"Deleted card {card_id} from deck {card.deck_id}")
        self._mirror()

    def apply_review(
        self,
        card_id: str,
        review: ReviewState,
        was_correct: bool,
        confidence: ConfidenceTier,
        reviewed_at: datetime,
    ) -> Card:
        """
        Merge a review policy result into a card.

        Args:
            card_id: Reviewed card.
            review: Output of the review policy for this answer.
            was_correct: Outcome, for the review counters.
            confidence: Tier the learner reported (stored for display).
            reviewed_at: Instant of the answer.

        Returns:
            The updated card.
        """
        card = self.get_card(card_id)
        updated = self._replace_card(
            card,
            **review.as_card_fields(),
            total_reviews=card.total_reviews + 1,
            correct_reviews=card.correct_reviews + (1 if was_correct else 0),
            last_review_date=reviewed_at,
            last_confidence=confidence,
        )
        self._mirror()
        return updated

    # =========================================================================
    # History
    # =========================================================================

    def append_history(self, entry: StudyHistoryEntry) -> None:
        """Append an ended session to the study history."""
        self._history.append(entry)
        self._mirror()

    # =========================================================================
    # Durable Mirroring
    # =========================================================================

    async def flush(self) -> None:
        """
        Wait until every mutation so far has been written.

        Also writes mutations made while no event loop was running. The
        drain runs as the tracked writer, so mutations made while flushing
        join it instead of starting a second, racing writer.
        """
        if self._storage is None:
            return

        while True:
            if self._writer is not None and not self._writer.done():
                await self._writer
            elif self._dirty:
                self._writer = asyncio.get_running_loop().create_task(self._drain())
            else:
                return

    def _mirror(self) -> None:
        """Schedule a durable write without blocking the caller."""
        if self._storage is None:
            return

        self._dirty = True
        if self._writer is not None and not self._writer.done():
            return  # running writer will pick up the new state

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug(
                f"No running event loop; study data for learner {self.learner_id} "
                "will be written on the next flush"
            )
            return

        self._writer = loop.create_task(self._drain())

    async def _drain(self) -> None:
        while self._dirty:
            self._dirty = False
            payload = self._serialize()
            try:
                await self._storage.save(self.learner_id, payload)
            except Exception as e:
                logger.error(
                    f"Failed to persist study data for learner {self.learner_id}: {e}"
                )

    def _serialize(self) -> dict[str, Any]:
        return self.export().model_dump(mode="json")

    # =========================================================================
    # Helper Methods
    # =========================================================================

    def _replace_deck(self, deck: Deck, **changes: Any) -> Deck:
        updated = Deck.model_validate({**deck.model_dump(), **changes})
        self._decks[deck.id] = updated
        return updated

    def _replace_card(self, card: Card, **changes: Any) -> Card:
        updated = Card.model_validate({**card.model_dump(), **changes})
        self._cards[card.id] = updated
        return updated
