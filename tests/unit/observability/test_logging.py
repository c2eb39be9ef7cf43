"""
Session Cache — Structured Logging Tests
"""

import json
import logging
import sys

from session_cache.observability.logging import JSONFormatter, setup_logging


def _record(**extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="session_cache.cache.backends.session",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg="Flushed session cache namespace '%s'",
        args=("test",),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    def test_format(self) -> None:
        payload = json.loads(JSONFormatter().format(_record()))

        assert payload["level"] == "INFO"
        assert payload["logger"] == "session_cache.cache.backends.session"
        assert payload["message"] == "Flushed session cache namespace 'test'"
        assert payload["line"] == 10
        assert payload["timestamp"].endswith("Z")

    def test_extra_fields(self) -> None:
        payload = json.loads(JSONFormatter().format(_record(namespace="test", removed=2)))

        assert payload["namespace"] == "test"
        assert payload["removed"] == 2
        assert "args" not in payload

    def test_exception(self) -> None:
        try:
            raise OSError("session storage unavailable")
        except OSError:
            record = _record()
            record.exc_info = sys.exc_info()

        payload = json.loads(JSONFormatter().format(record))
        assert "session storage unavailable" in payload["exception"]


class TestSetupLogging:
    def test_setup_logging(self) -> None:
        logger = setup_logging("DEBUG", logger_name="session_cache.test_setup")
        setup_logging("DEBUG", logger_name="session_cache.test_setup")

        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, JSONFormatter)
