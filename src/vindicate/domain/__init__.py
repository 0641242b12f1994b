# Domain Package
from .errors import (
    CardNotAtHeadError,
    DeckSourceError,
    GradingRequestError,
    UnknownCardError,
    VindicateError,
)
from .models import Card, CardProgress, DirectionMode, FactPair, Grade
from .ports import DeckSource, PersistencePort

__all__ = [
    "Card",
    "CardProgress",
    "DirectionMode",
    "FactPair",
    "Grade",
    "DeckSource",
    "PersistencePort",
    "VindicateError",
    "DeckSourceError",
    "GradingRequestError",
    "UnknownCardError",
    "CardNotAtHeadError",
]
