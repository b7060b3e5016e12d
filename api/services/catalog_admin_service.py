"""Service layer for managing the dynamic catalog store."""
from typing import Any

from fastapi import HTTPException
from sqlalchemy import func, select
from sqlalchemy.orm import Session as DBSession

from api.models.db.catalog import CatalogEntry
from serialization import convert_drive_link


def list_entries(
    db: DBSession,
    app_id: str,
    test_type: str,
    include_inactive: bool = False,
) -> list[CatalogEntry]:
    """List catalog rows for a test type in insertion order."""
    query = select(CatalogEntry).where(
        CatalogEntry.app_id == app_id,
        CatalogEntry.test_type == test_type,
    )
    if not include_inactive:
        query = query.where(CatalogEntry.active == True)  # noqa: E712

    query = query.order_by(CatalogEntry.position, CatalogEntry.created_at)
    return list(db.execute(query).scalars().all())


def get_entry(
    db: DBSession, app_id: str, test_type: str, item_id: str
) -> CatalogEntry | None:
    """Get a single catalog row."""
    entry = db.get(CatalogEntry, item_id)
    if entry is None or entry.app_id != app_id or entry.test_type != test_type:
        return None
    return entry


def add_entries(
    db: DBSession,
    app_id: str,
    test_type: str,
    items: list[dict[str, Any]],
    created_by: int | None = None,
) -> list[CatalogEntry]:
    """
    Add a batch of items to the catalog in a single transaction.

    Image links are normalised (Google Drive share links become direct image
    URLs) and the raw link is kept for reference. Every item needs either an
    image path or a text payload.
    """
    if not items:
        raise HTTPException(status_code=400, detail="No items provided")

    last_position = db.execute(
        select(func.max(CatalogEntry.position)).where(
            CatalogEntry.app_id == app_id,
            CatalogEntry.test_type == test_type,
        )
    ).scalar()
    next_position = (last_position or 0) + 1

    cleaned = []
    for offset, item in enumerate(items):
        raw_link = (item.get("path") or "").strip() or None
        text = (item.get("text") or "").strip() or None
        if raw_link is None and text is None:
            raise HTTPException(
                status_code=400,
                detail=f"Item {offset + 1} needs a path or text",
            )
        cleaned.append((raw_link, text, (item.get("description") or "").strip() or None))

    entries = []
    for offset, (raw_link, text, description) in enumerate(cleaned):
        path = convert_drive_link(raw_link)
        entry = CatalogEntry(
            app_id=app_id,
            test_type=test_type,
            path=path,
            text=text,
            description=description,
            original_link=raw_link if raw_link != path else None,
            created_by=created_by,
            position=next_position + offset,
        )
        db.add(entry)
        entries.append(entry)

    db.commit()
    for entry in entries:
        db.refresh(entry)
    return entries


def deactivate_entry(
    db: DBSession, app_id: str, test_type: str, item_id: str
) -> bool:
    """Hide an item from selection. Rows are kept so seen histories stay valid."""
    entry = get_entry(db, app_id, test_type, item_id)
    if entry is None:
        return False

    entry.active = False
    db.commit()
    return True
