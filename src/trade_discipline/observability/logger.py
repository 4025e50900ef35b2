"""Structured logging with session_id support.

Uses structlog for structured logging with JSON output.  Library modules
keep using ``logging.getLogger(__name__)``; the stdlib bridge configured
here renders their records too.  Every entry carries the ``session_id`` of
the front end that owns the ledger, so interleaved sessions can be told
apart.
"""

from __future__ import annotations

import logging
import sys
import uuid
from contextvars import ContextVar
from typing import Any

import structlog

_session_id: ContextVar[str] = ContextVar("session_id", default="")


def get_session_id() -> str:
    """Get current session ID from context."""
    sid = _session_id.get()
    if not sid:
        sid = str(uuid.uuid4())
        _session_id.set(sid)
    return sid


def set_session_id(session_id: str) -> None:
    """Set session ID in context."""
    _session_id.set(session_id)


def _add_session_id(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Structlog processor: add session_id to every log entry."""
    event_dict["session_id"] = get_session_id()
    return event_dict


def _shared_processors() -> list[Any]:
    """Processors applied to structlog and stdlib records alike."""
    return [
        structlog.contextvars.merge_contextvars,
        _add_session_id,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


_handler: logging.Handler | None = None


def setup_logging(
    level: str = "INFO",
    format: str = "json",
) -> None:
    """Configure structured logging for the application.

    Safe to call more than once; the previous handler is replaced.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR).
        format: "json" for production, "console" for development.
    """
    global _handler

    log_level = getattr(logging, level.upper(), logging.INFO)
    shared = _shared_processors()

    if format == "json":
        renderer: Any = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )

    root = logging.getLogger()
    if _handler is not None:
        root.removeHandler(_handler)
    root.addHandler(handler)
    root.setLevel(log_level)
    _handler = handler


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger for a module."""
    return structlog.get_logger(name)
