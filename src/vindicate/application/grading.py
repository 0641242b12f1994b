"""
Grading engine: computes the next scheduling state for a graded card.

next_progress is a pure computation with no I/O. GradingEngine adds the
single commit through the progress store.
"""

import logging
from datetime import datetime, timedelta

from vindicate.application.progress_store import ProgressStore
from vindicate.application.settings import FlashcardSettings
from vindicate.domain.constants import (
    AGAIN_EASE_PENALTY,
    EASY_EASE_BONUS,
    HARD_EASE_PENALTY,
    HARD_INTERVAL_MULTIPLIER,
    INITIAL_EASE,
    MAX_INTERVAL_DAYS,
    MIN_EASE,
)
from vindicate.domain.models import CardProgress, Grade

logger = logging.getLogger(__name__)


def next_progress(
    current: CardProgress | None,
    grade: Grade,
    settings: FlashcardSettings,
    now: datetime,
) -> CardProgress:
    """
    Apply a grade to a card's scheduling state.

    A card without progress starts from interval 0 and INITIAL_EASE.

    Again resets the interval to 0 and reschedules after again_minutes.
    Hard, Good and Easy adjust the ease, then either graduate the card
    (interval 0 -> good_days, or easy_days on Easy) or grow the interval
    by the new ease (times 1.2 on Hard). Intervals are capped at MAX_INTERVAL_DAYS.
    """
    interval = current.interval_days if current else 0.0
    ease = current.ease_factor if current else INITIAL_EASE

    if grade is Grade.AGAIN:
        return CardProgress(
            review_due_at=now + timedelta(minutes=min(settings.again_minutes, MAX_INTERVAL_DAYS * 24 * 60)),
            interval_days=0.0,
            ease_factor=max(MIN_EASE, ease - AGAIN_EASE_PENALTY),
        )

    if grade is Grade.HARD:
        ease = max(MIN_EASE, ease - HARD_EASE_PENALTY)
    elif grade is Grade.EASY:
        ease = ease + EASY_EASE_BONUS

    if interval == 0:
        # Hard graduates like Good.
        new_interval = float(settings.easy_days if grade is Grade.EASY else settings.good_days)
    else:
        multiplier = HARD_INTERVAL_MULTIPLIER if grade is Grade.HARD else 1.0
        new_interval = interval * ease * multiplier
    new_interval = min(MAX_INTERVAL_DAYS, new_interval)

    return CardProgress(
        review_due_at=now + timedelta(days=new_interval),
        interval_days=new_interval,
        ease_factor=ease,
    )


class GradingEngine:
    """Grades cards and persists the result."""

    def __init__(self, store: ProgressStore):
        self._store = store

    def grade(
        self,
        card_id: str,
        grade: Grade,
        settings: FlashcardSettings,
        now: datetime,
    ) -> CardProgress:
        current = self._store.get(card_id)
        updated = next_progress(current, grade, settings, now)
        self._store.commit(card_id, updated)
        logger.info(
            f"Graded {card_id!r} {grade.value}: interval {updated.interval_days:.2f}d, "
            f"ease {updated.ease_factor:.2f}"
        )
        return updated
