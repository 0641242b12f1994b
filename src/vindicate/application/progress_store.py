"""
Progress store: typed view over the persisted card progress blob.

The whole mapping is read and written as a single JSON document. Two
sessions committing concurrently can overwrite each other's updates;
the persistence port offers no transaction to prevent that.
"""

import logging
from collections.abc import Iterable
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from vindicate.application.keys import progress_key
from vindicate.domain.constants import MIN_EASE
from vindicate.domain.models import CardProgress
from vindicate.domain.ports import PersistencePort

logger = logging.getLogger(__name__)

# Last millisecond representable by datetime
MAX_EPOCH_MS = 253_402_300_799_999


class ProgressRecord(BaseModel):
    """Wire shape of a single progress entry."""

    model_config = ConfigDict(populate_by_name=True, allow_inf_nan=False)

    review_date: float = Field(alias="reviewDate", ge=0, le=MAX_EPOCH_MS)  # epoch millis
    interval_days: float = Field(alias="intervalDays", ge=0)
    ease_factor: float = Field(alias="easeFactor")

    @classmethod
    def from_progress(cls, progress: CardProgress) -> "ProgressRecord":
        return cls(
            review_date=to_epoch_ms(progress.review_due_at),
            interval_days=progress.interval_days,
            ease_factor=progress.ease_factor,
        )

    def to_progress(self) -> CardProgress:
        return CardProgress(
            review_due_at=from_epoch_ms(self.review_date),
            interval_days=self.interval_days,
            ease_factor=max(MIN_EASE, self.ease_factor),
        )


_BLOB = TypeAdapter(dict[str, ProgressRecord])


def to_epoch_ms(dt: datetime) -> int:
    return round(dt.timestamp() * 1000)


def from_epoch_ms(ms: float) -> datetime:
    return datetime.fromtimestamp(ms / 1000, tz=timezone.utc)


class ProgressStore:
    """Per-card scheduling state backed by a PersistencePort."""

    def __init__(self, port: PersistencePort, user: str | None = None):
        self._port = port
        self.key = progress_key(user)

    def load_all(self) -> dict[str, CardProgress]:
        """
        Load every stored entry.

        Absent or malformed data yields an empty mapping; the next commit
        then starts a fresh blob.
        """
        try:
            raw = self._port.load(self.key)
        except UnicodeDecodeError as e:
            logger.warning(f"Discarding undecodable progress under {self.key!r}: {e}")
            return {}
        if raw is None:
            return {}
        try:
            records = _BLOB.validate_json(raw)
            return {cid: rec.to_progress() for cid, rec in records.items()}
        except (ValidationError, ValueError, OverflowError, OSError) as e:
            # OSError: fromtimestamp rejects values the platform cannot represent
            logger.warning(f"Discarding unreadable progress under {self.key!r}: {e}")
            return {}

    def get(self, card_id: str) -> CardProgress | None:
        return self.load_all().get(card_id)

    def commit(self, card_id: str, progress: CardProgress) -> None:
        """Merge one update into the stored mapping and write it back whole."""
        current = self.load_all()
        current[card_id] = progress
        self._write(current)

    def purge(self, keep_ids: Iterable[str]) -> int:
        """
        Drop entries for cards that are not in keep_ids.

        Returns the number of entries removed.
        """
        keep = set(keep_ids)
        current = self.load_all()
        kept = {cid: p for cid, p in current.items() if cid in keep}
        removed = len(current) - len(kept)
        if removed:
            self._write(kept)
            logger.info(f"Purged {removed} orphaned progress entries")
        return removed

    def _write(self, mapping: dict[str, CardProgress]) -> None:
        records = {cid: ProgressRecord.from_progress(p) for cid, p in mapping.items()}
        self._port.save(self.key, _BLOB.dump_json(records, by_alias=True).decode("utf-8"))
