"""Utility modules."""
from api.utils.validation import normalize_test_type, validate_id

__all__ = [
    "normalize_test_type",
    "validate_id",
]
