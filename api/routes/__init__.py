"""API route modules."""
from api.routes import auth, catalog, content, sessions

__all__ = ["auth", "catalog", "content", "sessions"]
