"""Helpers shared by CLI command modules."""

from datetime import datetime
from typing import Any

from vindicate.application.config import AppConfig, resolve_config
from vindicate.domain.models import CardProgress


def _resolve_with_overrides(**overrides: Any) -> AppConfig:
    """Resolve config, applying only the CLI options the user actually set."""
    return resolve_config({k: v for k, v in overrides.items() if v is not None})


def describe_due(progress: CardProgress, now: datetime) -> str:
    """Human-readable delay until the card is due again."""
    seconds = (progress.review_due_at - now).total_seconds()
    if seconds < 3600:
        return f"{max(0, round(seconds / 60))} min"
    if seconds < 86400:
        return f"{seconds / 3600:.1f} h"
    return f"{seconds / 86400:.1f} days"
