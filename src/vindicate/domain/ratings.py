"""
Typed model for per-presentation difficulty ratings.

Ratings are stored three levels deep:
population (demographic) -> item (presentation) -> category -> difficulty.
"""

from dataclasses import dataclass, field
from enum import Enum


class Demographic(str, Enum):
    NEONATE = "Neonate"
    PEDIATRICS = "Pediatrics"
    ADULT = "Adult"
    GERIATRICS = "Geriatrics"
    OBSTETRICS = "Obstetrics"


class VindicateCategory(str, Enum):
    VASCULAR = "Vascular"
    INFECTIOUS = "Infectious"
    NEOPLASTIC = "Neoplastic"
    DEGENERATIVE = "Degenerative"
    IATROGENIC = "Iatrogenic/Intoxication"
    CONGENERIC = "Congeneric"
    AUTOIMMUNE = "Autoimmune"
    TRAUMATIC = "Traumatic"
    ENDOCRINE = "Endocrine"


class Difficulty(str, Enum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


@dataclass(frozen=True)
class RatedItem:
    """A single flattened rating entry."""

    demographic: Demographic
    presentation: str
    category: VindicateCategory
    difficulty: Difficulty


@dataclass
class RatingsBook:
    """
    All ratings recorded by one learner.

    Latest rating wins: recording the same (demographic, presentation,
    category) again overwrites the earlier difficulty.
    """

    entries: dict[Demographic, dict[str, dict[VindicateCategory, Difficulty]]] = field(
        default_factory=dict
    )

    def record(
        self,
        demographic: Demographic,
        presentation: str,
        category: VindicateCategory,
        difficulty: Difficulty,
    ) -> None:
        by_item = self.entries.setdefault(demographic, {})
        by_item.setdefault(presentation, {})[category] = difficulty

    def get(
        self, demographic: Demographic, presentation: str, category: VindicateCategory
    ) -> Difficulty | None:
        return self.entries.get(demographic, {}).get(presentation, {}).get(category)

    def items(self) -> list[RatedItem]:
        return [
            RatedItem(demographic, presentation, category, difficulty)
            for demographic, by_item in self.entries.items()
            for presentation, by_category in by_item.items()
            for category, difficulty in by_category.items()
        ]

    def __len__(self) -> int:
        return sum(
            len(by_category)
            for by_item in self.entries.values()
            for by_category in by_item.values()
        )
