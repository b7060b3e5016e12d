"""Catalog administration endpoints."""
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session as DbSession

from api.context import ContentContext
from api.database import get_db
from api.dependencies import get_content_context, get_current_user
from api.models import CatalogAddRequest, CatalogEntryResponse
from api.models.db.catalog import CatalogEntry
from api.models.db.user import User
from api.services import catalog_admin_service
from api.utils import normalize_test_type, validate_id

router = APIRouter(prefix="/api/catalog", tags=["catalog"])


@router.get("/{test_type}", response_model=list[CatalogEntryResponse])
def list_catalog(
    test_type: str,
    current_user: Annotated[User, Depends(get_current_user)],
    content: Annotated[ContentContext, Depends(get_content_context)],
    db: Annotated[DbSession, Depends(get_db)],
) -> list[CatalogEntry]:
    """List active items in the dynamic catalog."""
    test_type = normalize_test_type(test_type)
    return catalog_admin_service.list_entries(db, content.store.app_id, test_type)


@router.post("/{test_type}", response_model=list[CatalogEntryResponse])
def add_catalog_items(
    test_type: str,
    payload: CatalogAddRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    content: Annotated[ContentContext, Depends(get_content_context)],
    db: Annotated[DbSession, Depends(get_db)],
) -> list[CatalogEntry]:
    """Add one or more items to the dynamic catalog."""
    test_type = normalize_test_type(test_type)
    return catalog_admin_service.add_entries(
        db,
        content.store.app_id,
        test_type,
        [item.model_dump() for item in payload.items],
        created_by=current_user.id,
    )


@router.delete("/{test_type}/{item_id}")
def deactivate_catalog_item(
    test_type: str,
    item_id: str,
    current_user: Annotated[User, Depends(get_current_user)],
    content: Annotated[ContentContext, Depends(get_content_context)],
    db: Annotated[DbSession, Depends(get_db)],
) -> dict[str, str]:
    """Remove an item from rotation."""
    test_type = normalize_test_type(test_type)
    item_id = validate_id("itemId", item_id)
    if not catalog_admin_service.deactivate_entry(
        db, content.store.app_id, test_type, item_id
    ):
        raise HTTPException(status_code=404, detail="Item not found")
    return {"status": "deactivated"}
