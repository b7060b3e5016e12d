"""Database models."""
from api.models.db.user import User, Session
from api.models.db.catalog import CatalogEntry
from api.models.db.history import SeenItem
from api.models.db.practice_session import PracticeSession

__all__ = [
    "User",
    "Session",
    "CatalogEntry",
    "SeenItem",
    "PracticeSession",
]
