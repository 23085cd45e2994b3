"""Process-wide storage selection.

The backend is chosen once, on first use, from ``DATABASE_URL``: PostgreSQL
(or any async SQLAlchemy URL) when set, the in-memory store otherwise.
"""

from __future__ import annotations

import logging

from app.application.interfaces import StorageInterface
from app.config.settings import settings

logger = logging.getLogger(__name__)

_storage: StorageInterface | None = None


def create_storage() -> StorageInterface:
    """Build the storage backend described by the current settings."""

    if settings.database.enabled:
        from app.database import create_engine
        from app.infrastructure.persistence import SQLAlchemyStorage

        storage = SQLAlchemyStorage(create_engine())
    else:
        from app.infrastructure.persistence import InMemoryStorage

        storage = InMemoryStorage()

    logger.info("Using storage backend: %s", storage.backend_name)
    return storage


def get_storage() -> StorageInterface:
    """Return the lazily-instantiated storage singleton."""

    global _storage
    if _storage is None:
        _storage = create_storage()
    return _storage


__all__ = ["create_storage", "get_storage"]
