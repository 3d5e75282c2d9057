"""Structured logging for ReactorCalc."""

from __future__ import annotations

import json
import logging
import sys
import uuid
from contextvars import ContextVar
from typing import Any

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)
_request_context: ContextVar[dict[str, Any] | None] = ContextVar("request_context", default=None)

LOGGER_NAME = "reactor_calc"


class JSONFormatter(logging.Formatter):
    """Format log records as single-line JSON objects.

    Records emitted inside a :class:`RequestTracer` carry the request id and
    the calculation context (reactor type, mode, unit system).
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        req_id = _request_id.get()
        if req_id is not None:
            log_entry["request_id"] = req_id

        context = _request_context.get()
        if context:
            log_entry["context"] = context

        if record.exc_info and record.exc_info[1] is not None:
            log_entry["exception"] = self.formatException(record.exc_info)

        for key in ("request_id", "extra"):
            if hasattr(record, key) and key not in log_entry:
                log_entry[key] = getattr(record, key)

        return json.dumps(log_entry, default=str)


class RequestTracer:
    """Context manager that tags every log record of one calculation.

    Usage::

        with RequestTracer(reactor="cstr", mode="size") as tracer:
            logger.info("Sizing reactor")  # includes request_id and context
        # request_id cleared after exit
    """

    def __init__(self, request_id: str | None = None, **context: Any):
        self.request_id = request_id or uuid.uuid4().hex[:12]
        self.context = context
        self._id_token = None
        self._context_token = None

    def __enter__(self) -> RequestTracer:
        self._id_token = _request_id.set(self.request_id)
        self._context_token = _request_context.set(dict(self.context) or None)
        return self

    def __exit__(self, *exc: Any) -> None:
        if self._context_token is not None:
            _request_context.reset(self._context_token)
        if self._id_token is not None:
            _request_id.reset(self._id_token)


def current_request_id() -> str | None:
    """Return the request id of the active tracer, if any."""
    return _request_id.get()


class _RequestIDFilter(logging.Filter):
    """Injects request_id from context var into log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        req_id = current_request_id()
        if req_id is not None:
            record.request_id = req_id  # type: ignore[attr-defined]
        return True


def setup_logging(
    level: str = "INFO",
    log_format: str = "text",
    log_file: str | None = None,
    module_levels: dict[str, str] | None = None,
) -> None:
    """Configure ReactorCalc logging.

    Args:
        level: Root log level (e.g. 'DEBUG', 'INFO', 'WARNING').
        log_format: 'text' for human-readable or 'json' for structured output.
        log_file: Optional file path to write logs to.
        module_levels: Per-module log levels (e.g. {'reactor_calc.reactors': 'DEBUG'}).
    """
    root_logger = logging.getLogger(LOGGER_NAME)
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    root_logger.handlers.clear()

    if log_format == "json":
        formatter: logging.Formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(
            "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(formatter)
    console.addFilter(_RequestIDFilter())
    root_logger.addHandler(console)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        file_handler.addFilter(_RequestIDFilter())
        root_logger.addHandler(file_handler)

    if module_levels:
        for module, mod_level in module_levels.items():
            logging.getLogger(module).setLevel(getattr(logging, mod_level.upper(), logging.INFO))

    root_logger.debug(f"Logging configured: level={level}, format={log_format}")


__all__ = ["JSONFormatter", "RequestTracer", "current_request_id", "setup_logging"]
