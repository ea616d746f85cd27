"""Centralized constants for the study engine.

The review law below is fixed product behaviour, not deployment
configuration.
"""

# ---------- Ease factor ----------
INITIAL_EASE = 2.5
MIN_EASE = 1.3
MAX_EASE = 3.0
EASE_STEP_UP = 0.1  # after a correct answer
EASE_STEP_DOWN = 0.2  # after an incorrect answer

# ---------- Review intervals ----------
# Base interval in days, keyed by correct streak (capped at the last key)
INTERVAL_STEPS = {
    1: 1,
    2: 3,
    3: 7,
    4: 14,
    5: 30,
    6: 60,
}
MAX_INTERVAL_STEP = max(INTERVAL_STEPS)

# ---------- Lesson decks ----------
LESSON_DECK_COLOR = "blue"
