"""Content selection and session Pydantic models."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CatalogItemResponse(BaseModel):
    """A practice item as served to the test screen."""

    id: str
    path: str | None = None
    text: str | None = None
    description: str = ""


class BatchResponse(BaseModel):
    """Items for a multi-item test, unseen ones first."""

    testType: str
    requested: int
    items: list[CatalogItemResponse]


class SessionCreate(BaseModel):
    """A completed test attempt. ``responses`` is parallel to ``itemIds``."""

    testType: str = Field(..., min_length=1)
    itemIds: list[str]
    responses: list[str]
    score: int | None = None
    total: int | None = None
    aiFeedback: str | None = None


class SessionRecordResponse(BaseModel):
    """What happened to a submitted session."""

    saved: bool
    historyUpdated: bool
    sessionId: str | None = None
    message: str


class SessionResponse(BaseModel):
    """A stored session log entry."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    test_type: str
    timestamp: datetime
    responses: list[str]
    item_ids: list[str]
    score: int | None = None
    total: int | None = None
    ai_feedback: str | None = None


class CatalogItemCreate(BaseModel):
    """A new catalog item. Either ``path`` or ``text`` is required."""

    path: str | None = None
    text: str | None = None
    description: str | None = None


class CatalogAddRequest(BaseModel):
    """Batch of catalog items to add."""

    items: list[CatalogItemCreate] = Field(..., min_length=1)


class CatalogEntryResponse(BaseModel):
    """A dynamic catalog row as seen by administrators."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    test_type: str
    path: str | None = None
    text: str | None = None
    description: str | None = None
    original_link: str | None = None
    active: bool
    created_at: datetime
