from datetime import datetime, timezone

import pytest

from vindicate.application.progress_store import ProgressStore
from vindicate.application.service import FlashcardService
from vindicate.application.settings import SettingsStore
from vindicate.domain.models import FactPair
from vindicate.infrastructure.adapters.deck_source import StaticDeckSource
from vindicate.infrastructure.adapters.kv_store import MemoryStore

NOW = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)


def _keep_order(cards):
    """Shuffle stand-in that leaves the list untouched."""


@pytest.fixture
def keep_order():
    return _keep_order


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def pairs():
    return [
        FactPair(
            "Chest pain",
            ("Myocardial infarction", "Aortic dissection", "Pulmonary embolism"),
            "Cardiovascular",
        ),
        FactPair("Dyspnea", ("Pulmonary embolism", "Pneumonia", "Heart failure"), "Respiratory"),
        FactPair("Syncope", ("Arrhythmia", "Pulmonary embolism"), "Cardiovascular"),
    ]


@pytest.fixture
def memory_store():
    return MemoryStore()


@pytest.fixture
def service(pairs, memory_store):
    """Service over an in-memory store with a fixed clock and order-preserving shuffle."""
    return FlashcardService(
        deck_source=StaticDeckSource(pairs),
        progress_store=ProgressStore(memory_store),
        settings_store=SettingsStore(memory_store),
        shuffle=_keep_order,
        clock=lambda: NOW,
    )


@pytest.fixture
def mock_home(tmp_path, monkeypatch):
    """Mocks Path.home() to point to a temp dir."""
    home = tmp_path / "home"
    home.mkdir()

    # Mocking HOME to a temp directory to isolate config/data
    monkeypatch.setenv("HOME", str(home))
    for var in ("VINDICATE_USER", "VINDICATE_DECK_PATH", "VINDICATE_STORAGE", "VINDICATE_SEED"):
        monkeypatch.delenv(var, raising=False)
    return home
