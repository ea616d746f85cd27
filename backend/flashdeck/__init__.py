"""
Flashdeck - spaced repetition study engine for a children's learning app.

Packages:
- config: Settings (pydantic-settings) and YAML defaults
- enums: Confidence tiers, deck categories, session states
- models: Pydantic records for decks, cards, sessions and history
- db: Durable storage adapter (Redis)
- services.learning: Review policy, due queue, sessions, streaks, analytics
"""

__version__ = "0.1.0"
