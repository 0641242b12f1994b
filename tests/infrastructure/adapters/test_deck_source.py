import pytest

from vindicate.domain.errors import DeckSourceError
from vindicate.domain.models import FactPair
from vindicate.infrastructure.adapters.deck_source import (
    StaticDeckSource,
    YamlDeckSource,
    bundled_deck,
    parse_pairs,
)

DECK = """
pairs:
  - presentation: Chest pain
    system: Cardiovascular
    differentials:
      - Myocardial infarction
      - Aortic dissection
  - presentation: Cough
    differentials: [Asthma]
"""


def test_yaml_deck_source(tmp_path):
    path = tmp_path / "deck.yaml"
    path.write_text(DECK, encoding="utf-8")

    pairs = YamlDeckSource(path).list_pairs()

    assert pairs == [
        FactPair("Chest pain", ("Myocardial infarction", "Aortic dissection"), "Cardiovascular"),
        FactPair("Cough", ("Asthma",), "Uncategorized"),
    ]


def test_missing_file_raises(tmp_path):
    with pytest.raises(DeckSourceError, match="Cannot read deck"):
        YamlDeckSource(tmp_path / "nope.yaml").list_pairs()


def test_invalid_yaml_raises(tmp_path):
    path = tmp_path / "deck.yaml"
    path.write_text("pairs: [unclosed", encoding="utf-8")

    with pytest.raises(DeckSourceError, match="Invalid YAML"):
        YamlDeckSource(path).list_pairs()


@pytest.mark.parametrize(
    "data",
    [
        None,
        {"cards": []},
        {"pairs": ["Chest pain"]},
        {"pairs": [{"differentials": ["MI"]}]},
        {"pairs": [{"presentation": "Fever", "differentials": "Sepsis"}]},
    ],
)
def test_bad_shapes_raise(data):
    with pytest.raises(DeckSourceError):
        parse_pairs(data)


def test_static_source_returns_copy():
    pairs = [FactPair("A", ("B",), "C")]
    source = StaticDeckSource(pairs)

    listed = source.list_pairs()
    listed.clear()

    assert source.list_pairs() == pairs


def test_bundled_deck_loads():
    pairs = bundled_deck().list_pairs()

    assert len(pairs) == 10
    assert all(p.back for p in pairs)
    assert "Cardiovascular" in {p.category for p in pairs}
