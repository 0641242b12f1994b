"""Persistence key namespacing."""

from vindicate.domain.constants import (
    PROGRESS_NAMESPACE,
    RATINGS_NAMESPACE,
    SETTINGS_NAMESPACE,
)


def storage_key(namespace: str, identifier: str | None = None) -> str:
    """
    Build the persistence key for a namespace, optionally scoped to an identifier.

    storage_key("presentationRatings", "a@b.c") -> "presentationRatings-a@b.c"
    storage_key("flashcardProgress") -> "flashcardProgress"
    """
    if not namespace:
        raise ValueError("namespace must be a non-empty string")
    if not identifier:
        return namespace
    return f"{namespace}-{identifier}"


def progress_key(user: str | None = None) -> str:
    return storage_key(PROGRESS_NAMESPACE, user)


def settings_key(user: str | None = None) -> str:
    return storage_key(SETTINGS_NAMESPACE, user)


def ratings_key(user: str | None = None) -> str:
    return storage_key(RATINGS_NAMESPACE, user)
