"""Content service dependencies for FastAPI."""
from fastapi import Request

from api.context import ContentContext


def get_content_context(request: Request) -> ContentContext:
    """Return the content services built at application startup."""
    return request.app.state.content
