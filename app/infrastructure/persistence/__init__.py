"""Storage backends for documents and songs."""

from .memory import InMemoryStorage
from .repositories_sqlalchemy import SQLAlchemyStorage

__all__ = ["InMemoryStorage", "SQLAlchemyStorage"]
