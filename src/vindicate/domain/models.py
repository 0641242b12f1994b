"""
Domain models for flashcard scheduling.

These are pure data structures with no I/O or external dependencies.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class DirectionMode(str, Enum):
    """Which side of a fact pair is shown on the card front."""

    PRESENTATION = "presentation"  # front = presentation, back = differentials
    DIFFERENTIAL = "differential"  # front = differential, back = presentations

    @property
    def id_prefix(self) -> str:
        return "p" if self is DirectionMode.PRESENTATION else "d"


class Grade(str, Enum):
    """Learner's self-reported recall outcome."""

    AGAIN = "again"
    HARD = "hard"
    GOOD = "good"
    EASY = "easy"


@dataclass(frozen=True)
class FactPair:
    """
    A raw presentation <-> differentials pair as supplied by a deck source.

    Attributes:
        front: The clinical presentation.
        back: Differential diagnoses listed for the presentation.
        category: Body system / category tag used for filtering.
    """

    front: str
    back: tuple[str, ...]
    category: str


@dataclass(frozen=True)
class Card:
    """
    One schedulable flashcard.

    The id is derived from the direction mode and the front term, so the
    same logical fact keeps its id across catalog rebuilds.
    """

    id: str
    front: str
    back: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class CardProgress:
    """
    Scheduling state for a card that has been graded at least once.

    Attributes:
        review_due_at: When the card is next due (timezone-aware UTC).
        interval_days: Days until next review; 0 means not yet graduated.
        ease_factor: Interval growth multiplier, never below MIN_EASE.
    """

    review_due_at: datetime
    interval_days: float
    ease_factor: float

    def is_due(self, now: datetime) -> bool:
        return self.review_due_at <= now

    @property
    def graduated(self) -> bool:
        return self.interval_days > 0
