"""Persistence for per-presentation difficulty ratings."""

import logging

from pydantic import TypeAdapter, ValidationError

from vindicate.application.keys import ratings_key
from vindicate.domain.ports import PersistencePort
from vindicate.domain.ratings import (
    Demographic,
    Difficulty,
    RatedItem,
    RatingsBook,
    VindicateCategory,
)

logger = logging.getLogger(__name__)

_RAW = TypeAdapter(dict[str, dict[str, dict[str, str]]])


class RatingsStore:
    """Typed view over the ratings blob of a single learner."""

    def __init__(self, port: PersistencePort, user: str | None = None):
        self._port = port
        self.key = ratings_key(user)

    def load(self) -> RatingsBook:
        try:
            raw = self._port.load(self.key)
            if raw is None:
                return RatingsBook()
            nested = _RAW.validate_json(raw)
        except (ValidationError, UnicodeDecodeError) as e:
            logger.warning(f"Discarding unreadable ratings under {self.key!r}: {e}")
            return RatingsBook()

        book = RatingsBook()
        for demographic, by_item in nested.items():
            for presentation, by_category in by_item.items():
                for category, difficulty in by_category.items():
                    try:
                        book.record(
                            Demographic(demographic),
                            presentation,
                            VindicateCategory(category),
                            Difficulty(difficulty),
                        )
                    except ValueError:
                        logger.warning(
                            f"Skipping rating with unknown value: "
                            f"{demographic}/{presentation}/{category}={difficulty}"
                        )
        return book

    def save(self, book: RatingsBook) -> None:
        nested = {
            demographic.value: {
                presentation: {c.value: d.value for c, d in by_category.items()}
                for presentation, by_category in by_item.items()
            }
            for demographic, by_item in book.entries.items()
        }
        self._port.save(self.key, _RAW.dump_json(nested).decode("utf-8"))

    def record(
        self,
        demographic: Demographic,
        presentation: str,
        category: VindicateCategory,
        difficulty: Difficulty,
    ) -> RatingsBook:
        book = self.load()
        book.record(demographic, presentation, category, difficulty)
        self.save(book)
        return book

    def rated_items(self, difficulty: Difficulty | None = None) -> list[RatedItem]:
        """Flattened ratings, optionally restricted to one difficulty, by presentation name."""
        items = self.load().items()
        if difficulty is not None:
            items = [i for i in items if i.difficulty is difficulty]
        return sorted(items, key=lambda i: i.presentation)
