"""Structured Logging — JSON formatter extras and idempotent setup."""

import json
import logging

from shoplist.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "shoplist.test", logging.INFO, __file__, 1, "hello %s", ("world",), None,
    )
    record.__dict__.update(extra)
    return record


def test_json_formatter_base_fields():
    log = json.loads(JSONFormatter().format(_record()))
    assert log["level"] == "INFO"
    assert log["logger"] == "shoplist.test"
    assert log["message"] == "hello world"
    assert "command" not in log


def test_json_formatter_surfaces_command_extras():
    log = json.loads(JSONFormatter().format(_record(
        command="shoppingList/get", outcome="failed", uu_identity="uu5:1",
    )))
    assert log["command"] == "shoppingList/get"
    assert log["outcome"] == "failed"
    assert log["uu_identity"] == "uu5:1"


def test_setup_logging_does_not_stack_handlers():
    root = logging.getLogger()
    level = root.level
    try:
        first = setup_logging("DEBUG", "text")
        second = setup_logging("INFO", "json")
        assert first not in root.handlers
        assert second in root.handlers
        assert isinstance(second.formatter, JSONFormatter)
        assert root.level == logging.INFO
    finally:
        root.removeHandler(second)
        root.setLevel(level)
