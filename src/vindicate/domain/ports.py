"""
Ports (interfaces) for the scheduling core.

These define the contract that infrastructure adapters must implement.
Application services depend on these abstractions, not concrete implementations.
"""

from abc import ABC, abstractmethod

from .models import FactPair


class DeckSource(ABC):
    """
    Port supplying the raw presentation <-> differential pairs.

    Implementations:
        - YamlDeckSource: Reads pairs from a YAML deck file.
        - StaticDeckSource: Serves an in-memory list of pairs.
    """

    @abstractmethod
    def list_pairs(self) -> list[FactPair]:
        """
        Return a snapshot of every fact pair in the deck.

        The core treats the result as immutable for the duration of a build.
        """
        pass


class PersistencePort(ABC):
    """
    Port for durable string key/value storage.

    The core owns serialization; the port only owns durability.

    Implementations:
        - JsonFileStore: One JSON file per key inside a data directory.
        - MemoryStore: Process-local dict, for tests and throwaway sessions.
    """

    @abstractmethod
    def load(self, key: str) -> str | None:
        """Return the stored value for key, or None if nothing is stored."""
        pass

    @abstractmethod
    def save(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        pass
