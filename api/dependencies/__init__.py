"""FastAPI dependencies."""
from api.dependencies.auth import get_current_user, get_optional_user
from api.dependencies.content import get_content_context

__all__ = ["get_content_context", "get_current_user", "get_optional_user"]
