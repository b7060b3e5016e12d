"""Content selection endpoints."""
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from api.config import DEFAULT_BATCH_SIZE, MAX_BATCH_SIZE
from api.context import ContentContext
from api.dependencies import get_content_context, get_optional_user
from api.models import BatchResponse, CatalogItemResponse
from api.models.db.user import User
from api.utils import normalize_test_type
from serialization import item_to_payload

router = APIRouter(prefix="/api/content", tags=["content"])


@router.get("/{test_type}/next", response_model=CatalogItemResponse)
def next_item(
    test_type: str,
    content: Annotated[ContentContext, Depends(get_content_context)],
    current_user: Annotated[User | None, Depends(get_optional_user)],
) -> dict[str, object]:
    """Pick one unseen item for a single-item test (TAT, PPDT)."""
    test_type = normalize_test_type(test_type)
    user_id = current_user.id if current_user else None
    item = content.selector.pick_one(test_type, user_id)
    return item_to_payload(item)


@router.get("/{test_type}/batch", response_model=BatchResponse)
def batch_items(
    test_type: str,
    content: Annotated[ContentContext, Depends(get_content_context)],
    current_user: Annotated[User | None, Depends(get_optional_user)],
    count: Annotated[int, Query(ge=1, le=MAX_BATCH_SIZE)] = DEFAULT_BATCH_SIZE,
) -> dict[str, object]:
    """Pick a batch of items for a multi-item test (WAT, SRT, OIR)."""
    test_type = normalize_test_type(test_type)
    user_id = current_user.id if current_user else None
    items = content.selector.pick_batch(test_type, count, user_id)
    return {
        "testType": test_type,
        "requested": count,
        "items": [item_to_payload(item) for item in items],
    }
