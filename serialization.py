from __future__ import annotations

import re
from typing import Any, Iterable

from models import CatalogItem


DRIVE_IMAGE_URL = "https://lh3.googleusercontent.com/d/{file_id}"

_DRIVE_PATH_ID = re.compile(r"/d/([a-zA-Z0-9_-]+)")
_DRIVE_QUERY_ID = re.compile(r"id=([a-zA-Z0-9_-]+)")


def _clean_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def item_from_payload(payload: dict[str, Any]) -> CatalogItem | None:
    """Build a CatalogItem from a stored dict. Items without an id are dropped."""
    if not isinstance(payload, dict):
        return None
    item_id = _clean_str(payload.get("id"))
    if item_id is None:
        return None
    return CatalogItem(
        id=item_id,
        path=_clean_str(payload.get("path")),
        text=_clean_str(payload.get("text")),
        description=_clean_str(payload.get("description")) or "",
    )


def items_from_payload(payload: Iterable[Any]) -> list[CatalogItem]:
    items: list[CatalogItem] = []
    for entry in payload:
        item = item_from_payload(entry)
        if item is not None:
            items.append(item)
    return items


def item_to_payload(item: CatalogItem) -> dict[str, Any]:
    return {
        "id": item.id,
        "path": item.path,
        "text": item.text,
        "description": item.description,
    }


def resolve_item_path(path: str | None, base_url: str) -> str | None:
    """Join a relative image path onto the storage base URL."""
    if not path:
        return path
    if path.startswith("http://") or path.startswith("https://"):
        return path
    if not base_url:
        return path
    clean_base = base_url[:-1] if base_url.endswith("/") else base_url
    clean_path = path[1:] if path.startswith("/") else path
    return f"{clean_base}/{clean_path}"


def convert_drive_link(url: str | None) -> str | None:
    """Turn a Google Drive share link into a direct image URL."""
    if not url:
        return None
    file_id = None
    match = _DRIVE_PATH_ID.search(url)
    if match:
        file_id = match.group(1)
    match = _DRIVE_QUERY_ID.search(url)
    if match:
        file_id = match.group(1)
    if file_id:
        return DRIVE_IMAGE_URL.format(file_id=file_id)
    return url
