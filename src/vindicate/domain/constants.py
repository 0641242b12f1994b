"""Centralized constants for the vindicate scheduler.

All magic numbers and configuration defaults live here so every layer
imports from a single source of truth.
"""

# ---------- Ease factor ----------
INITIAL_EASE = 2.5
MIN_EASE = 1.3
AGAIN_EASE_PENALTY = 0.2
HARD_EASE_PENALTY = 0.15
EASY_EASE_BONUS = 0.15

# ---------- Interval growth ----------
HARD_INTERVAL_MULTIPLIER = 1.2
MAX_INTERVAL_DAYS = 36500  # keeps due dates inside datetime range

# ---------- Default flashcard settings ----------
DEFAULT_AGAIN_MINUTES = 10
DEFAULT_GOOD_DAYS = 1
DEFAULT_EASY_DAYS = 4
DEFAULT_NEW_CARDS_PER_DAY = 20

# ---------- Catalog ----------
ALL_CATEGORIES = "All"

# ---------- Storage namespaces ----------
PROGRESS_NAMESPACE = "flashcardProgress"
SETTINGS_NAMESPACE = "flashcardSettings"
RATINGS_NAMESPACE = "presentationRatings"
