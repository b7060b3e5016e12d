import pytest
from fastapi import HTTPException

from api.services import catalog_admin_service
from models import CatalogItem
from serialization import (
    convert_drive_link,
    item_from_payload,
    item_to_payload,
    resolve_item_path,
)


def test_add_entries_converts_drive_links(session_factory) -> None:
    db = session_factory()
    try:
        entries = catalog_admin_service.add_entries(
            db,
            "test-app",
            "ppdt",
            [
                {
                    "path": "https://drive.google.com/file/d/AbC_123-x/view?usp=sharing",
                    "description": "Crowd near a bus",
                },
                {"path": "https://cdn.example.com/p2.jpg"},
            ],
            created_by=7,
        )
        assert entries[0].path == "https://lh3.googleusercontent.com/d/AbC_123-x"
        assert entries[0].original_link.startswith("https://drive.google.com/")
        assert entries[0].description == "Crowd near a bus"
        assert entries[0].created_by == 7
        assert entries[1].path == "https://cdn.example.com/p2.jpg"
        assert entries[1].original_link is None
        assert all(entry.active for entry in entries)
    finally:
        db.close()


def test_add_entries_keeps_insertion_order(session_factory) -> None:
    db = session_factory()
    try:
        catalog_admin_service.add_entries(db, "test-app", "wat", [{"text": "Courage"}, {"text": "Team"}])
        catalog_admin_service.add_entries(db, "test-app", "wat", [{"text": "Duty"}])
        texts = [e.text for e in catalog_admin_service.list_entries(db, "test-app", "wat")]
        assert texts == ["Courage", "Team", "Duty"]
    finally:
        db.close()


def test_add_entries_requires_payload(session_factory) -> None:
    db = session_factory()
    try:
        with pytest.raises(HTTPException):
            catalog_admin_service.add_entries(db, "test-app", "wat", [])
        with pytest.raises(HTTPException) as exc_info:
            catalog_admin_service.add_entries(
                db, "test-app", "wat", [{"text": "ok"}, {"description": "nothing else"}]
            )
        assert "Item 2" in exc_info.value.detail
        assert catalog_admin_service.list_entries(db, "test-app", "wat") == []
    finally:
        db.close()


def test_deactivate_entry(session_factory) -> None:
    db = session_factory()
    try:
        (entry,) = catalog_admin_service.add_entries(db, "test-app", "srt", [{"text": "He..."}])
        assert not catalog_admin_service.deactivate_entry(db, "test-app", "tat", entry.id)
        assert not catalog_admin_service.deactivate_entry(db, "other-app", "srt", entry.id)
        assert catalog_admin_service.deactivate_entry(db, "test-app", "srt", entry.id)
        assert catalog_admin_service.list_entries(db, "test-app", "srt") == []
        hidden = catalog_admin_service.list_entries(db, "test-app", "srt", include_inactive=True)
        assert [e.id for e in hidden] == [entry.id]
    finally:
        db.close()


def test_resolve_item_path() -> None:
    assert resolve_item_path("https://a.com/x.jpg", "https://cdn") == "https://a.com/x.jpg"
    assert resolve_item_path("http://a.com/x.jpg", "") == "http://a.com/x.jpg"
    assert resolve_item_path("images/x.jpg", "") == "images/x.jpg"
    assert resolve_item_path("/images/x.jpg", "https://cdn/") == "https://cdn/images/x.jpg"
    assert resolve_item_path("images/x.jpg", "https://cdn") == "https://cdn/images/x.jpg"
    assert resolve_item_path(None, "https://cdn") is None


def test_convert_drive_link() -> None:
    assert convert_drive_link("https://drive.google.com/open?id=XYZ") == (
        "https://lh3.googleusercontent.com/d/XYZ"
    )
    assert convert_drive_link("https://example.com/a.png") == "https://example.com/a.png"
    assert convert_drive_link("") is None


def test_item_payload_helpers() -> None:
    assert item_from_payload({"text": "no id"}) is None
    assert item_from_payload("not a dict") is None

    item = item_from_payload({"id": 12, "path": " a.jpg ", "description": None})
    assert item == CatalogItem(id="12", path="a.jpg", text=None, description="")
    assert item_to_payload(item) == {
        "id": "12",
        "path": "a.jpg",
        "text": None,
        "description": "",
    }
