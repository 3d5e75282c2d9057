"""Tests for structured logging."""

from __future__ import annotations

import json
import logging

from reactor_calc.utils.logging import (
    LOGGER_NAME,
    JSONFormatter,
    RequestTracer,
    current_request_id,
    setup_logging,
)


def _record(msg: str = "hello", args: tuple = ()) -> logging.LogRecord:
    return logging.LogRecord(
        name="test",
        level=logging.INFO,
        pathname="",
        lineno=0,
        msg=msg,
        args=args,
        exc_info=None,
    )


class TestJSONFormatter:
    def test_format_basic(self):
        data = json.loads(JSONFormatter().format(_record()))
        assert data["level"] == "INFO"
        assert data["message"] == "hello"
        assert data["logger"] == "test"
        assert "timestamp" in data
        assert "request_id" not in data

    def test_format_with_args(self):
        data = json.loads(JSONFormatter().format(_record("value=%d", (42,))))
        assert data["message"] == "value=42"

    def test_format_inside_tracer(self):
        with RequestTracer(request_id="req-1", reactor="cstr", mode="size"):
            data = json.loads(JSONFormatter().format(_record()))
        assert data["request_id"] == "req-1"
        assert data["context"] == {"reactor": "cstr", "mode": "size"}

    def test_format_exception(self):
        try:
            raise ValueError("boom")
        except ValueError:
            import sys

            record = _record()
            record.exc_info = sys.exc_info()
        data = json.loads(JSONFormatter().format(record))
        assert "boom" in data["exception"]


class TestRequestTracer:
    def test_generates_id(self):
        with RequestTracer() as tracer:
            assert current_request_id() == tracer.request_id
            assert len(tracer.request_id) == 12
        assert current_request_id() is None

    def test_nested_restores_outer(self):
        with RequestTracer(request_id="outer"):
            with RequestTracer(request_id="inner"):
                assert current_request_id() == "inner"
            assert current_request_id() == "outer"

    def test_filter_tags_records(self):
        from reactor_calc.utils.logging import _RequestIDFilter

        record = _record()
        with RequestTracer(request_id="req-2"):
            assert _RequestIDFilter().filter(record)
        assert record.request_id == "req-2"

    def test_filter_outside_tracer(self):
        from reactor_calc.utils.logging import _RequestIDFilter

        record = _record()
        assert _RequestIDFilter().filter(record)
        assert not hasattr(record, "request_id")


class TestSetupLogging:
    def test_text_format(self):
        setup_logging(level="DEBUG")
        logger = logging.getLogger(LOGGER_NAME)
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert not isinstance(logger.handlers[0].formatter, JSONFormatter)

    def test_json_format_and_file(self, tmp_path):
        log_file = tmp_path / "calc.log"
        setup_logging(level="INFO", log_format="json", log_file=str(log_file))
        logger = logging.getLogger(LOGGER_NAME)
        assert len(logger.handlers) == 2
        assert all(isinstance(h.formatter, JSONFormatter) for h in logger.handlers)
        logging.getLogger("reactor_calc.engine").info("written")
        for handler in logger.handlers:
            handler.flush()
        assert json.loads(log_file.read_text().splitlines()[-1])["message"] == "written"
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)

    def test_module_levels(self):
        setup_logging(module_levels={"reactor_calc.reactors": "WARNING"})
        assert logging.getLogger("reactor_calc.reactors").level == logging.WARNING
        logging.getLogger("reactor_calc.reactors").setLevel(logging.NOTSET)
