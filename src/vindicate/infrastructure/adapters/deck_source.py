"""
Deck sources: Infrastructure adapters for the DeckSource port.

YAML deck layout:

    pairs:
      - presentation: Chest pain
        system: Cardiovascular
        differentials:
          - Myocardial infarction
          - Aortic dissection
"""

import logging
from importlib import resources
from pathlib import Path
from typing import Any

import yaml

from vindicate.domain.errors import DeckSourceError
from vindicate.domain.models import FactPair
from vindicate.domain.ports import DeckSource

logger = logging.getLogger(__name__)


class StaticDeckSource(DeckSource):
    """Serves a fixed list of pairs."""

    def __init__(self, pairs: list[FactPair]):
        self._pairs = list(pairs)

    def list_pairs(self) -> list[FactPair]:
        return list(self._pairs)


def parse_pairs(data: Any, origin: str = "<deck>") -> list[FactPair]:
    """
    Convert loaded YAML into FactPairs.

    Raises DeckSourceError when the document does not have the expected shape.
    """
    if not isinstance(data, dict) or not isinstance(data.get("pairs"), list):
        raise DeckSourceError(f"{origin}: expected a top-level 'pairs' list")

    pairs: list[FactPair] = []
    for i, entry in enumerate(data["pairs"]):
        if not isinstance(entry, dict):
            raise DeckSourceError(f"{origin}: pair #{i + 1} is not a mapping")

        presentation = entry.get("presentation")
        differentials = entry.get("differentials") or []
        if not presentation or not isinstance(differentials, list):
            raise DeckSourceError(
                f"{origin}: pair #{i + 1} needs 'presentation' and a 'differentials' list"
            )

        pairs.append(
            FactPair(
                front=str(presentation).strip(),
                back=tuple(str(d).strip() for d in differentials if d),
                category=str(entry.get("system", "Uncategorized")).strip(),
            )
        )
    return pairs


class YamlDeckSource(DeckSource):
    """
    Reads pairs from a YAML file.

    The file is re-read on every call so edits show up on the next catalog build.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def list_pairs(self) -> list[FactPair]:
        try:
            content = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise DeckSourceError(f"Cannot read deck {self.path}: {e}") from e

        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise DeckSourceError(f"Invalid YAML in deck {self.path}: {e}") from e

        pairs = parse_pairs(data, origin=str(self.path))
        logger.debug(f"Loaded {len(pairs)} pairs from {self.path}")
        return pairs


def bundled_deck() -> StaticDeckSource:
    """The sample deck shipped with the package."""
    text = resources.files("vindicate.data").joinpath("deck.yaml").read_text(encoding="utf-8")
    return StaticDeckSource(parse_pairs(yaml.safe_load(text), origin="bundled deck.yaml"))
