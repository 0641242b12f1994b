import json

from vindicate.application.ratings_store import RatingsStore
from vindicate.domain.ratings import Demographic, Difficulty, VindicateCategory
from vindicate.infrastructure.adapters.kv_store import MemoryStore


def test_record_persists_three_level_structure():
    port = MemoryStore()
    store = RatingsStore(port, user="sam@example.com")

    store.record(Demographic.ADULT, "Chest pain", VindicateCategory.VASCULAR, Difficulty.HARD)
    store.record(Demographic.ADULT, "Chest pain", VindicateCategory.INFECTIOUS, Difficulty.EASY)

    blob = json.loads(port.data["presentationRatings-sam@example.com"])
    assert blob == {"Adult": {"Chest pain": {"Vascular": "Hard", "Infectious": "Easy"}}}


def test_latest_rating_wins():
    store = RatingsStore(MemoryStore())
    store.record(Demographic.GERIATRICS, "Syncope", VindicateCategory.VASCULAR, Difficulty.HARD)
    store.record(Demographic.GERIATRICS, "Syncope", VindicateCategory.VASCULAR, Difficulty.MEDIUM)

    book = store.load()
    assert len(book) == 1
    assert book.get(Demographic.GERIATRICS, "Syncope", VindicateCategory.VASCULAR) is Difficulty.MEDIUM


def test_rated_items_filtered_and_sorted():
    store = RatingsStore(MemoryStore())
    store.record(Demographic.ADULT, "Syncope", VindicateCategory.VASCULAR, Difficulty.HARD)
    store.record(Demographic.PEDIATRICS, "Abdominal pain", VindicateCategory.INFECTIOUS, Difficulty.HARD)
    store.record(Demographic.ADULT, "Headache", VindicateCategory.NEOPLASTIC, Difficulty.EASY)

    hard = store.rated_items(Difficulty.HARD)

    assert [i.presentation for i in hard] == ["Abdominal pain", "Syncope"]
    assert len(store.rated_items()) == 3


def test_unknown_values_are_skipped():
    raw = json.dumps(
        {
            "Adult": {"Fever": {"Infectious": "Hard", "Mystery": "Hard"}},
            "Martian": {"Fever": {"Infectious": "Easy"}},
        }
    )
    store = RatingsStore(MemoryStore({"presentationRatings": raw}))

    items = store.rated_items()
    assert len(items) == 1
    assert items[0].category is VindicateCategory.INFECTIOUS


def test_malformed_blob_loads_empty():
    store = RatingsStore(MemoryStore({"presentationRatings": '{"Adult": 3}'}))
    assert len(store.load()) == 0
