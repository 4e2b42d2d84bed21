"""Tests for logging configuration."""
from __future__ import annotations

import json
import logging

import pytest

from core.config import Settings
from core.logging_config import JSONFormatter, configure_logging, setup_logging


@pytest.fixture(autouse=True)
def restore_logging():
    yield
    setup_logging(level="INFO")


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="domain.currency",
        level=logging.WARNING,
        pathname=__file__,
        lineno=42,
        msg="Currency %s lapsed",
        args=("ASEL",),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_fields():
    payload = json.loads(JSONFormatter().format(_record(extra_data={"logbook_id": 7})))

    assert payload["level"] == "WARNING"
    assert payload["logger"] == "domain.currency"
    assert payload["message"] == "Currency ASEL lapsed"
    assert payload["extra"] == {"logbook_id": 7}
    assert payload["timestamp"].endswith("+00:00")


def test_json_formatter_without_extra():
    payload = json.loads(JSONFormatter().format(_record()))

    assert "extra" not in payload
    assert "exception" not in payload


def test_configure_logging_from_settings():
    configure_logging(Settings(LOG_LEVEL="warning", LOG_FORMAT="json"))

    root = logging.getLogger()
    assert root.level == logging.WARNING
    assert isinstance(root.handlers[0].formatter, JSONFormatter)
    assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING


def test_configure_logging_level_override():
    configure_logging(Settings(LOG_LEVEL="INFO", LOG_FORMAT="text"), level="DEBUG")

    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert not isinstance(root.handlers[0].formatter, JSONFormatter)
