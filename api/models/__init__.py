"""Pydantic models."""
from api.models.auth import (
    MessageResponse,
    TokenResponse,
    UserLogin,
    UserRegister,
    UserResponse,
)
from api.models.content import (
    BatchResponse,
    CatalogAddRequest,
    CatalogEntryResponse,
    CatalogItemCreate,
    CatalogItemResponse,
    SessionCreate,
    SessionRecordResponse,
    SessionResponse,
)

__all__ = [
    "BatchResponse",
    "CatalogAddRequest",
    "CatalogEntryResponse",
    "CatalogItemCreate",
    "CatalogItemResponse",
    "MessageResponse",
    "SessionCreate",
    "SessionRecordResponse",
    "SessionResponse",
    "TokenResponse",
    "UserLogin",
    "UserRegister",
    "UserResponse",
]
