"""Unit tests for docvault.engine.logging — JSON formatter and init_logging."""

import json
import logging

from docvault.engine.config import LoggingConfig
from docvault.engine.logging import (
    LOG_FILENAME,
    JsonLogFormatter,
    init_logging,
    shutdown_logging,
)


class TestJsonLogFormatter:

    def _record(self, msg="hello", **extra):
        record = logging.LogRecord(
            name="docvault.test",
            level=logging.INFO,
            pathname=__file__,
            lineno=1,
            msg=msg,
            args=(),
            exc_info=None,
        )
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    def test_basic_fields(self):
        parsed = json.loads(JsonLogFormatter().format(self._record()))
        assert parsed["level"] == "INFO"
        assert parsed["logger"] == "docvault.test"
        assert parsed["message"] == "hello"
        assert "ts" in parsed

    def test_extra_fields_included(self):
        parsed = json.loads(JsonLogFormatter().format(self._record(document_id="doc1")))
        assert parsed["document_id"] == "doc1"

    def test_single_line(self):
        assert "\n" not in JsonLogFormatter().format(self._record())


class TestInitLogging:

    def test_writes_json_file(self, tmp_path):
        init_logging(LoggingConfig(level="INFO", format="json", directory=str(tmp_path)))
        logging.getLogger("docvault.security.admin").info("User created")
        shutdown_logging()

        lines = (tmp_path / LOG_FILENAME).read_text(encoding="utf-8").strip().splitlines()
        parsed = json.loads(lines[-1])
        assert parsed["message"] == "User created"
        assert parsed["logger"] == "docvault.security.admin"

    def test_level_applied(self, tmp_path):
        root = init_logging(LoggingConfig(level="WARNING", directory=str(tmp_path)))
        assert root.level == logging.WARNING
        logging.getLogger("docvault.x").info("hidden")
        shutdown_logging()
        assert "hidden" not in (tmp_path / LOG_FILENAME).read_text(encoding="utf-8")

    def test_reinit_replaces_handler(self):
        root = logging.getLogger("docvault")
        before = len(root.handlers)
        init_logging(LoggingConfig(format="text"))
        init_logging(LoggingConfig(format="text"))
        assert len(root.handlers) == before + 1
        shutdown_logging()
        assert len(root.handlers) == before

    def test_shutdown_without_init_is_noop(self):
        shutdown_logging()
