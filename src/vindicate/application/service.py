"""
Flashcard Service: Application layer orchestrator.

Coordinates the deck source, progress store and settings store behind the
four operations a UI driver needs: build a catalog, build a queue, grade a
card, and shuffle everything.
"""

import logging
import random
from collections.abc import Callable, Sequence
from datetime import datetime, timezone

from vindicate.application.catalog import build_catalog, list_categories
from vindicate.application.grading import GradingEngine
from vindicate.application.progress_store import ProgressStore
from vindicate.application.queue_builder import (
    QueueBuildResult,
    Shuffle,
    build_review_queue,
    shuffle_all,
)
from vindicate.application.settings import FlashcardSettings, SettingsStore
from vindicate.domain.constants import ALL_CATEGORIES
from vindicate.domain.models import Card, CardProgress, DirectionMode, Grade
from vindicate.domain.ports import DeckSource

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class FlashcardService:
    """
    Application service for scheduled flashcard review.

    Follows Dependency Inversion: depends on the DeckSource and
    PersistencePort abstractions (through the stores), not concrete adapters.
    """

    def __init__(
        self,
        deck_source: DeckSource,
        progress_store: ProgressStore,
        settings_store: SettingsStore,
        shuffle: Shuffle | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        """
        Args:
            deck_source: Supplies the raw fact pairs.
            progress_store: Per-card scheduling state.
            settings_store: Persisted scheduling settings.
            shuffle: In-place shuffle; defaults to random.shuffle.
            clock: Returns the current UTC instant; defaults to utc_now.
        """
        self.deck_source = deck_source
        self.progress = progress_store
        self.settings_store = settings_store
        self._shuffle = shuffle or random.shuffle
        self._clock = clock or utc_now
        self._engine = GradingEngine(progress_store)

    def now(self) -> datetime:
        return self._clock()

    def settings(self) -> FlashcardSettings:
        return self.settings_store.load()

    def save_settings(self, settings: FlashcardSettings) -> None:
        self.settings_store.save(settings)
        logger.info(f"Saved flashcard settings: {settings.model_dump(by_alias=True)}")

    def categories(self) -> list[str]:
        return [ALL_CATEGORIES, *list_categories(self.deck_source.list_pairs())]

    def build_catalog(
        self,
        mode: DirectionMode = DirectionMode.PRESENTATION,
        category: str | None = ALL_CATEGORIES,
    ) -> list[Card]:
        return build_catalog(self.deck_source.list_pairs(), mode, category)

    def plan_queue(
        self,
        catalog: Sequence[Card],
        settings: FlashcardSettings | None = None,
        now: datetime | None = None,
    ) -> QueueBuildResult:
        """Build the session queue and keep the partition diagnostics."""
        return build_review_queue(
            catalog,
            self.progress.load_all(),
            settings or self.settings(),
            now or self.now(),
            shuffle=self._shuffle,
        )

    def build_queue(
        self,
        catalog: Sequence[Card],
        settings: FlashcardSettings | None = None,
        now: datetime | None = None,
    ) -> list[Card]:
        return self.plan_queue(catalog, settings, now).queue

    def grade(
        self,
        card_id: str,
        grade: Grade,
        settings: FlashcardSettings | None = None,
        now: datetime | None = None,
    ) -> CardProgress:
        """Grade a card and commit its new scheduling state."""
        return self._engine.grade(card_id, grade, settings or self.settings(), now or self.now())

    def shuffle_all(self, catalog: Sequence[Card]) -> list[Card]:
        return shuffle_all(catalog, shuffle=self._shuffle)
