"""
Key/value stores: Infrastructure adapters for the PersistencePort.
"""

import logging
import os
import tempfile
from pathlib import Path
from urllib.parse import quote

from vindicate.domain.ports import PersistencePort

logger = logging.getLogger(__name__)


class MemoryStore(PersistencePort):
    """Keeps values in a dict for the lifetime of the process."""

    def __init__(self, initial: dict[str, str] | None = None):
        self.data: dict[str, str] = dict(initial or {})

    def load(self, key: str) -> str | None:
        return self.data.get(key)

    def save(self, key: str, value: str) -> None:
        self.data[key] = value


class JsonFileStore(PersistencePort):
    """
    Stores each key as <root>/<key>.json.

    Keys are percent-encoded so identifiers such as e-mail addresses map to
    safe file names. Writes go through a temp file and os.replace so a
    crash never leaves a half-written blob behind.
    """

    def __init__(self, root: Path):
        self.root = Path(root)

    def path_for(self, key: str) -> Path:
        return self.root / f"{quote(key, safe='@-_.')}.json"

    def load(self, key: str) -> str | None:
        path = self.path_for(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def save(self, key: str, value: str) -> None:
        self.root.mkdir(parents=True, exist_ok=True)
        path = self.path_for(key)

        fd, tmp = tempfile.mkstemp(dir=self.root, prefix=".tmp-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp, path)
        except OSError:
            Path(tmp).unlink(missing_ok=True)
            raise
        logger.debug(f"Wrote {path}")
