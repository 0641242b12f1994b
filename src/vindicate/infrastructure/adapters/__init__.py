# Infrastructure Adapters Package
from .deck_source import StaticDeckSource, YamlDeckSource, bundled_deck
from .kv_store import JsonFileStore, MemoryStore

__all__ = ["JsonFileStore", "MemoryStore", "StaticDeckSource", "YamlDeckSource", "bundled_deck"]
