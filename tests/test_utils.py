import logging

import pytest
from fastapi import HTTPException

from api.utils import validation
from core import logging_setup


def test_validate_id() -> None:
    assert validation.validate_id("test", " abc ") == "abc"
    with pytest.raises(HTTPException):
        validation.validate_id("test", "")
    with pytest.raises(HTTPException):
        validation.validate_id("test", "../bad")
    with pytest.raises(HTTPException):
        validation.validate_id("test", None)


def test_normalize_test_type() -> None:
    assert validation.normalize_test_type("WAT") == "wat"
    assert validation.normalize_test_type(" ppdt ") == "ppdt"
    for bad in ("", "../tat", "t a t", "x" * 40):
        with pytest.raises(HTTPException):
            validation.normalize_test_type(bad)


def test_setup_console_logging_does_not_duplicate_handlers(monkeypatch: pytest.MonkeyPatch) -> None:
    root = logging.getLogger()
    before = list(root.handlers)
    previous_level = root.level
    monkeypatch.setenv("LOG_LEVEL", "warning")
    try:
        logging_setup.setup_console_logging()
        count = len(root.handlers)
        logging_setup.setup_console_logging()
        assert len(root.handlers) == count
        assert root.level == logging.WARNING
    finally:
        for handler in list(root.handlers):
            if handler not in before:
                root.removeHandler(handler)
        root.setLevel(previous_level)


def test_level_from_env_ignores_unknown_names(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "chatty")
    assert logging_setup._level_from_env(logging.INFO) == logging.INFO
