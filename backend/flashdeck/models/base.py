"""
Strict Base Models for Engine Inputs and Records

This module provides base classes with strict validation settings so that
callers (the UI layer, lesson importers) cannot slip unknown or misspelled
fields into the engine.

Usage:
    # For caller-supplied input (strictest validation)
    class DeckCreate(StrictRequest):
        name: str

    # For stored records (tolerates extra fields from older blobs)
    class Deck(StrictResponse):
        id: str
        name: str

Architecture:
    Caller input → StrictRequest (extra="forbid") → DeckStore
    Stored blob  → StrictResponse (extra="ignore") → DeckStore
"""

from pydantic import BaseModel, ConfigDict


class StrictRequest(BaseModel):
    """
    Base model for caller-supplied input with strict validation.

    Features:
        - extra="forbid": Unknown fields raise ValidationError
        - validate_default=True: Validates default values
        - str_strip_whitespace=True: Trims whitespace from strings
        - from_attributes=True: Allows conversion from plain objects

    Example:
        >>> class CardCreate(StrictRequest):
        ...     front: str
        ...     back: str
        >>>
        >>> CardCreate(front="2+2", back="4")  # OK
        >>> CardCreate(front="2+2", answer="4")  # Raises ValidationError
    """

    model_config = ConfigDict(
        extra="forbid",  # Reject unknown fields
        validate_default=True,  # Validate defaults
        str_strip_whitespace=True,  # Clean string inputs
        from_attributes=True,
    )


class StrictResponse(BaseModel):
    """
    Base model for engine records.

    More lenient than StrictRequest: blobs written by older versions may carry
    fields this version no longer knows about. Assignments are re-validated so
    in-place mutation cannot break a record's invariants.

    Features:
        - extra="ignore": Silently ignores extra fields
        - validate_default=True: Validates default values
        - validate_assignment=True: Re-validates on attribute assignment
        - from_attributes=True: Allows conversion from plain objects
    """

    model_config = ConfigDict(
        extra="ignore",  # Allow extra fields from stored blobs
        validate_default=True,
        validate_assignment=True,
        from_attributes=True,
    )
