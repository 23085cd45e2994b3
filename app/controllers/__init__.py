"""FastAPI routers acting as controllers in the MVC architecture."""

from . import documents, songs, suno

__all__ = ["documents", "songs", "suno"]
