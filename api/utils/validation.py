"""Validation utilities."""
import re
from pathlib import Path

from fastapi import HTTPException

_TEST_TYPE_PATTERN = re.compile(r"^[a-z0-9][a-z0-9_-]{0,31}$")


def validate_id(name: str, value: str) -> str:
    """Validate ID string (no path traversal)."""
    if not isinstance(value, str):
        raise HTTPException(status_code=400, detail=f"{name} is required")
    cleaned = value.strip()
    if not cleaned:
        raise HTTPException(status_code=400, detail=f"{name} is required")
    if Path(cleaned).name != cleaned or "/" in cleaned or "\\" in cleaned:
        raise HTTPException(status_code=400, detail=f"Invalid {name}")
    return cleaned


def normalize_test_type(value: str) -> str:
    """Lower-case a test type name ("WAT" -> "wat") and reject anything unsafe."""
    cleaned = validate_id("testType", value).lower()
    if not _TEST_TYPE_PATTERN.match(cleaned):
        raise HTTPException(status_code=400, detail="Invalid testType")
    return cleaned
