"""Tests for logging configuration."""

from __future__ import annotations

import io
import json
import logging
import sys

import pytest

from routecore.logs import JsonFormatter, Stopwatch, configure_logging


@pytest.fixture(autouse=True)
def _restore_routecore_logger():
    logger = logging.getLogger("routecore")
    handlers, level = list(logger.handlers), logger.level
    yield
    logger.handlers = handlers
    logger.setLevel(level)


class TestConfigureLogging:
    def test_text_output(self) -> None:
        stream = io.StringIO()
        configure_logging("info", "text", stream=stream)
        logging.getLogger("routecore.discovery.routes").info("Registering %s for %s", "/echo", "GET")
        logging.getLogger("routecore.discovery.routes").debug("hidden")
        output = stream.getvalue()
        assert "[INFO] routecore.discovery.routes: Registering /echo for GET" in output
        assert "hidden" not in output

    def test_json_output(self) -> None:
        stream = io.StringIO()
        configure_logging("debug", "json", stream=stream)
        logging.getLogger("routecore.access").warning("GET /x 404", extra={"status": 404})
        entry = json.loads(stream.getvalue().strip())
        assert entry["level"] == "warning"
        assert entry["logger"] == "routecore.access"
        assert entry["message"] == "GET /x 404"
        assert entry["extra"] == {"status": 404}

    def test_reconfigure_replaces_handler(self) -> None:
        first, second = io.StringIO(), io.StringIO()
        configure_logging("info", stream=first)
        configure_logging("info", stream=second)
        logging.getLogger("routecore").info("once")
        assert first.getvalue() == ""
        assert second.getvalue().count("once") == 1

    def test_level_aliases(self) -> None:
        assert configure_logging("warn").level == logging.WARNING
        assert configure_logging("trace").level == logging.DEBUG
        assert configure_logging("bogus").level == logging.INFO


class TestJsonFormatter:
    def test_exception_included(self) -> None:
        try:
            raise RuntimeError("bad")
        except RuntimeError:
            record = logging.getLogger("routecore").makeRecord(
                "routecore", logging.ERROR, __file__, 1, "failed", None, exc_info=sys.exc_info()
            )
        entry = json.loads(JsonFormatter().format(record))
        assert "RuntimeError: bad" in entry["exc_info"]


class TestStopwatch:
    def test_non_negative(self) -> None:
        assert Stopwatch().duration() >= 0
