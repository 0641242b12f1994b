"""Tests for flashcard settings and their store."""

import json

import pytest
from pydantic import ValidationError

from vindicate.application.settings import FlashcardSettings, SettingsStore
from vindicate.infrastructure.adapters.kv_store import JsonFileStore, MemoryStore


def test_defaults():
    s = FlashcardSettings()
    assert (s.again_minutes, s.good_days, s.easy_days, s.new_cards_per_day) == (10, 1, 4, 20)


def test_negative_values_clamped_to_zero():
    s = FlashcardSettings(new_cards_per_day=-5, again_minutes=-1)
    assert s.new_cards_per_day == 0
    assert s.again_minutes == 0


def test_accepts_camel_case_aliases():
    s = FlashcardSettings.model_validate({"againMinutes": 5, "newCardsPerDay": 3})
    assert s.again_minutes == 5
    assert s.new_cards_per_day == 3
    assert s.good_days == 1


def test_settings_are_immutable():
    s = FlashcardSettings()
    with pytest.raises(ValidationError):
        s.good_days = 3


class TestSettingsStore:
    def test_absent_returns_defaults(self):
        assert SettingsStore(MemoryStore()).load() == FlashcardSettings()

    def test_save_and_load(self):
        port = MemoryStore()
        store = SettingsStore(port)
        store.save(FlashcardSettings(again_minutes=15, good_days=2, easy_days=6, new_cards_per_day=5))

        assert json.loads(port.data["flashcardSettings"]) == {
            "againMinutes": 15,
            "goodDays": 2,
            "easyDays": 6,
            "newCardsPerDay": 5,
        }
        assert store.load().easy_days == 6

    def test_malformed_returns_defaults(self):
        store = SettingsStore(MemoryStore({"flashcardSettings": "{oops"}))
        assert store.load() == FlashcardSettings()

    def test_undecodable_file_returns_defaults(self, tmp_path):
        (tmp_path / "flashcardSettings.json").write_bytes(b"\xff\xfe")
        assert SettingsStore(JsonFileStore(tmp_path)).load() == FlashcardSettings()

    def test_stored_negative_cap_is_clamped(self):
        raw = json.dumps({"againMinutes": 10, "goodDays": 1, "easyDays": 4, "newCardsPerDay": -2})
        store = SettingsStore(MemoryStore({"flashcardSettings": raw}))

        assert store.load().new_cards_per_day == 0
