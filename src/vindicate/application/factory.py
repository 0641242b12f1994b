"""
Service Factory
Centralizes the logic for wiring adapters into the flashcard service.
"""

import logging
import random

from vindicate.application.config import AppConfig
from vindicate.application.progress_store import ProgressStore
from vindicate.application.ratings_store import RatingsStore
from vindicate.application.service import FlashcardService
from vindicate.application.settings import SettingsStore
from vindicate.domain.ports import DeckSource, PersistencePort
from vindicate.infrastructure.adapters.deck_source import YamlDeckSource, bundled_deck
from vindicate.infrastructure.adapters.kv_store import JsonFileStore, MemoryStore

logger = logging.getLogger(__name__)


def get_store(config: AppConfig) -> PersistencePort:
    """
    Returns the PersistencePort implementation selected by config.
    """
    if config.storage == "memory":
        return MemoryStore()
    return JsonFileStore(config.data_dir)


def get_deck_source(config: AppConfig) -> DeckSource:
    """
    Returns the configured deck, or the bundled sample deck when none is set.
    """
    if config.deck_path:
        return YamlDeckSource(config.deck_path)

    logger.debug("No deck_path configured, using bundled deck")
    return bundled_deck()


def get_flashcard_service(
    config: AppConfig, store: PersistencePort | None = None
) -> FlashcardService:
    store = store or get_store(config)
    shuffle = random.Random(config.seed).shuffle if config.seed is not None else None
    return FlashcardService(
        deck_source=get_deck_source(config),
        progress_store=ProgressStore(store, config.user),
        settings_store=SettingsStore(store, config.user),
        shuffle=shuffle,
    )


def get_ratings_store(config: AppConfig, store: PersistencePort | None = None) -> RatingsStore:
    return RatingsStore(store or get_store(config), config.user)
