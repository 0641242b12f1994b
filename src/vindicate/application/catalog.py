"""
Catalog builder: turns raw fact pairs into addressable flashcards.

Pure and idempotent. Identical input always yields cards with identical
ids and identical back sets.
"""

import logging
from collections.abc import Iterable

from vindicate.domain.constants import ALL_CATEGORIES
from vindicate.domain.models import Card, DirectionMode, FactPair

logger = logging.getLogger(__name__)


def card_id(mode: DirectionMode, front: str) -> str:
    """Deterministic card id for a front term in the given direction."""
    return f"{mode.id_prefix}-{front}"


def filter_pairs(pairs: Iterable[FactPair], category: str | None = None) -> list[FactPair]:
    """Keep only pairs tagged with category. "All" or None keeps everything."""
    if category is None or category == ALL_CATEGORIES:
        return list(pairs)
    return [p for p in pairs if p.category == category]


def list_categories(pairs: Iterable[FactPair]) -> list[str]:
    """Distinct categories in first-seen order."""
    return list(dict.fromkeys(p.category for p in pairs))


def build_catalog(
    pairs: Iterable[FactPair],
    mode: DirectionMode = DirectionMode.PRESENTATION,
    category: str | None = ALL_CATEGORIES,
) -> list[Card]:
    """
    Build the deduplicated card catalog for a direction mode and category.

    Args:
        pairs: Raw presentation <-> differentials pairs.
        mode: PRESENTATION puts the presentation on the front;
            DIFFERENTIAL inverts the pairs so each differential's back lists
            every presentation that mentions it.
        category: Category filter, "All" (or None) for no filtering.

    Returns:
        Cards in first-seen order of their front term.
    """
    filtered = filter_pairs(pairs, category)

    # front -> ordered, duplicate-free back terms
    backs: dict[str, dict[str, None]] = {}

    if mode is DirectionMode.PRESENTATION:
        for pair in filtered:
            merged = backs.setdefault(pair.front, {})
            for term in pair.back:
                merged[term] = None
    else:
        for pair in filtered:
            for differential in pair.back:
                backs.setdefault(differential, {})[pair.front] = None

    catalog = [
        Card(id=card_id(mode, front), front=front, back=tuple(back))
        for front, back in backs.items()
    ]
    logger.debug(
        f"Built catalog: {len(catalog)} cards (mode={mode.value}, category={category})"
    )
    return catalog
