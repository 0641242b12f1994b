"""
Queue builder for scheduled review sessions.

Builds the session queue by:
1. Partitioning the catalog into due cards and new cards
2. Capping new cards at the daily limit
3. Shuffling the combined set
"""

import logging
import random
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from vindicate.application.settings import FlashcardSettings
from vindicate.domain.models import Card, CardProgress

logger = logging.getLogger(__name__)

# In-place shuffle, e.g. random.shuffle or random.Random(seed).shuffle
Shuffle = Callable[[list[Any]], None]


@dataclass
class QueueBuildResult:
    """Result of queue building operation."""

    queue: list[Card]  # Session order, due and new interleaved
    due_count: int  # Due cards included (never capped)
    new_available: int  # New cards in the catalog
    new_accepted: int  # New cards admitted under the daily cap
    scheduled_later: list[str] = field(default_factory=list)  # Graded, not yet due

    @property
    def is_empty(self) -> bool:
        return not self.queue


def build_review_queue(
    catalog: Sequence[Card],
    progress: Mapping[str, CardProgress],
    settings: FlashcardSettings,
    now: datetime,
    shuffle: Shuffle = random.shuffle,
) -> QueueBuildResult:
    """
    Build the ordered review queue for one session.

    Args:
        catalog: Cards for the current direction mode and category.
        progress: Stored progress keyed by card id.
        settings: Scheduling settings; only new_cards_per_day is consulted.
        now: The single instant used for every due comparison in this build.
        shuffle: In-place shuffle used for both shuffling steps.

    Returns:
        QueueBuildResult with the session queue and partition counts.
    """
    due_cards: list[Card] = []
    new_cards: list[Card] = []
    scheduled_later: list[str] = []
    seen: set[str] = set()

    for card in catalog:
        if card.id in seen:
            continue
        seen.add(card.id)

        card_progress = progress.get(card.id)
        if card_progress is None:
            new_cards.append(card)
        elif card_progress.is_due(now):
            due_cards.append(card)
        else:
            scheduled_later.append(card.id)

    cap = max(0, settings.new_cards_per_day)
    shuffle(new_cards)
    accepted_new = new_cards[:cap]

    queue = due_cards + accepted_new
    shuffle(queue)

    logger.debug(
        f"Queue built: {len(due_cards)} due, {len(accepted_new)}/{len(new_cards)} new, "
        f"{len(scheduled_later)} scheduled later"
    )

    return QueueBuildResult(
        queue=queue,
        due_count=len(due_cards),
        new_available=len(new_cards),
        new_accepted=len(accepted_new),
        scheduled_later=scheduled_later,
    )


def shuffle_all(catalog: Sequence[Card], shuffle: Shuffle = random.shuffle) -> list[Card]:
    """Return every catalog card in random order, ignoring the schedule."""
    cards = list(catalog)
    shuffle(cards)
    return cards
