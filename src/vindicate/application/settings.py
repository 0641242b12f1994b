"""Flashcard settings model and its persistence."""

import logging

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from vindicate.application.keys import settings_key
from vindicate.domain.constants import (
    DEFAULT_AGAIN_MINUTES,
    DEFAULT_EASY_DAYS,
    DEFAULT_GOOD_DAYS,
    DEFAULT_NEW_CARDS_PER_DAY,
)
from vindicate.domain.ports import PersistencePort

logger = logging.getLogger(__name__)


class FlashcardSettings(BaseModel):
    """
    Learner-tunable scheduling settings.

    Serialized with camelCase aliases (againMinutes, goodDays, easyDays,
    newCardsPerDay). Negative values are clamped to 0.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    again_minutes: int = Field(default=DEFAULT_AGAIN_MINUTES, alias="againMinutes")
    good_days: int = Field(default=DEFAULT_GOOD_DAYS, alias="goodDays")
    easy_days: int = Field(default=DEFAULT_EASY_DAYS, alias="easyDays")
    new_cards_per_day: int = Field(default=DEFAULT_NEW_CARDS_PER_DAY, alias="newCardsPerDay")

    @field_validator("again_minutes", "good_days", "easy_days", "new_cards_per_day")
    @classmethod
    def clamp_non_negative(cls, v: int) -> int:
        return max(0, v)


class SettingsStore:
    """Typed access to the persisted settings blob."""

    def __init__(self, port: PersistencePort, user: str | None = None):
        self._port = port
        self.key = settings_key(user)

    def load(self) -> FlashcardSettings:
        """Return stored settings, or defaults when absent or unreadable."""
        try:
            raw = self._port.load(self.key)
            if raw is None:
                return FlashcardSettings()
            return FlashcardSettings.model_validate_json(raw)
        except (ValidationError, UnicodeDecodeError) as e:
            logger.warning(f"Discarding unreadable settings under {self.key!r}: {e}")
            return FlashcardSettings()

    def save(self, settings: FlashcardSettings) -> None:
        self._port.save(self.key, settings.model_dump_json(by_alias=True))
