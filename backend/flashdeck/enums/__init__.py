"""
Centralized enum definitions for the study engine.

Usage:
    from flashdeck.enums import ConfidenceTier, SessionState
"""

from flashdeck.enums.learning import (
    ConfidenceTier,
    DeckCategory,
    SessionOutcomeKind,
    SessionState,
)

__all__ = [
    "ConfidenceTier",
    "DeckCategory",
    "SessionOutcomeKind",
    "SessionState",
]
