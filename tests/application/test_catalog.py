"""Tests for the catalog builder."""

from vindicate.application.catalog import build_catalog, card_id, list_categories
from vindicate.domain.models import DirectionMode, FactPair


class TestPresentationMode:
    def test_one_card_per_presentation(self, pairs):
        catalog = build_catalog(pairs, DirectionMode.PRESENTATION)

        assert [c.id for c in catalog] == ["p-Chest pain", "p-Dyspnea", "p-Syncope"]
        assert catalog[0].back == (
            "Myocardial infarction",
            "Aortic dissection",
            "Pulmonary embolism",
        )

    def test_repeated_presentation_merges_backs(self):
        pairs = [
            FactPair("Fever", ("Sepsis", "Pneumonia"), "Infectious"),
            FactPair("Fever", ("Pneumonia", "Endocarditis"), "Cardiovascular"),
        ]
        catalog = build_catalog(pairs)

        assert len(catalog) == 1
        assert catalog[0].back == ("Sepsis", "Pneumonia", "Endocarditis")

    def test_category_filter(self, pairs):
        catalog = build_catalog(pairs, DirectionMode.PRESENTATION, "Cardiovascular")
        assert [c.front for c in catalog] == ["Chest pain", "Syncope"]

    def test_all_and_none_disable_filter(self, pairs):
        assert len(build_catalog(pairs, category="All")) == 3
        assert len(build_catalog(pairs, category=None)) == 3


class TestDifferentialMode:
    def test_inverts_pairs(self, pairs):
        catalog = build_catalog(pairs, DirectionMode.DIFFERENTIAL)
        by_front = {c.front: c for c in catalog}

        pe = by_front["Pulmonary embolism"]
        assert pe.id == "d-Pulmonary embolism"
        assert set(pe.back) == {"Chest pain", "Dyspnea", "Syncope"}
        assert by_front["Pneumonia"].back == ("Dyspnea",)

    def test_inverted_backs_have_no_duplicates(self):
        pairs = [
            FactPair("Cough", ("Asthma",), "Respiratory"),
            FactPair("Cough", ("Asthma", "GERD"), "Gastrointestinal"),
        ]
        catalog = build_catalog(pairs, DirectionMode.DIFFERENTIAL)
        asthma = next(c for c in catalog if c.front == "Asthma")

        assert asthma.back == ("Cough",)

    def test_filter_applies_before_inversion(self, pairs):
        catalog = build_catalog(pairs, DirectionMode.DIFFERENTIAL, "Respiratory")
        pe = next(c for c in catalog if c.front == "Pulmonary embolism")

        assert pe.back == ("Dyspnea",)
        assert "Arrhythmia" not in {c.front for c in catalog}


def test_rebuild_is_idempotent(pairs):
    for mode in DirectionMode:
        first = build_catalog(pairs, mode)
        second = build_catalog(list(reversed(pairs)), mode)

        assert {c.id: set(c.back) for c in first} == {c.id: set(c.back) for c in second}


def test_empty_input_yields_empty_catalog(pairs):
    assert build_catalog([]) == []
    assert build_catalog(pairs, DirectionMode.DIFFERENTIAL, "Dermatology") == []


def test_card_id_is_mode_prefixed():
    assert card_id(DirectionMode.PRESENTATION, "Headache") == "p-Headache"
    assert card_id(DirectionMode.DIFFERENTIAL, "Migraine") == "d-Migraine"


def test_list_categories_first_seen_order(pairs):
    assert list_categories(pairs) == ["Cardiovascular", "Respiratory"]
