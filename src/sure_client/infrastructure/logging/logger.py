# Copyright (c)
# SPDX-License-Identifier: MIT
"""Structured JSON logging utilities.

An idempotent root configurator plus a per-module logger factory. Every log
line is a single JSON object written to stderr, so CLI output on stdout stays
machine readable.

Features:
    * Stable keys: ``ts``, ``level``, ``logger``, ``message``.
    * ``request_id`` enrichment from the record, the current context, or the
      ``REQUEST_ID`` environment variable (in that order).
    * ``extra={"extra": {...}}`` dictionaries are merged into the payload.

Typical usage:
    configure_root_logging()
    log = get_json_logger(__name__)
    log.info("sure.request", extra={"extra": {"endpoint": "/api/v1/accounts"}})
"""

from __future__ import annotations

import json
import logging
import os
import uuid
from contextvars import ContextVar
from datetime import UTC, datetime
from typing import Any

__all__ = [
    "configure_root_logging",
    "ensure_request_id",
    "get_json_logger",
    "get_request_id",
    "set_request_context",
]

_REQUEST_ID_ENV_KEY = "REQUEST_ID"

_REQUEST_ID_CTX: ContextVar[str | None] = ContextVar("sure_request_id", default=None)


def set_request_context(*, request_id: str | None = None) -> None:
    """Bind a correlation id to the current context.

    Passing ``None`` leaves any existing value untouched.
    """
    if request_id is not None:
        _REQUEST_ID_CTX.set(request_id)


def get_request_id() -> str | None:
    """Return the current request id from contextvars, if any."""
    return _REQUEST_ID_CTX.get(None)


def ensure_request_id() -> str:
    """Return the bound request id, generating and binding one if absent."""
    rid = _REQUEST_ID_CTX.get(None)
    if rid is None:
        rid = uuid.uuid4().hex
        _REQUEST_ID_CTX.set(rid)
    return rid


class _JsonFormatter(logging.Formatter):
    """JSON log formatter emitting stable keys and optional extras."""

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record as a JSON object.

        Args:
            record: Logging record.

        Returns:
            JSON-encoded log line.
        """
        payload: dict[str, Any] = {
            "ts": datetime.now(tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        rid: str | None = (
            getattr(record, "request_id", None)
            or _REQUEST_ID_CTX.get(None)
            or os.getenv(_REQUEST_ID_ENV_KEY)
        )
        if rid:
            payload["request_id"] = rid

        if record.exc_info:
            exc_type, exc_value, _ = record.exc_info
            if exc_type is not None:
                payload["exc_type"] = exc_type.__name__
            if exc_value is not None:
                payload["exc_message"] = str(exc_value)

        extra = getattr(record, "extra", None)
        if isinstance(extra, dict):
            payload.update(extra)

        # Decimals, dates and enums in extras render via str().
        return json.dumps(payload, separators=(",", ":"), ensure_ascii=False, default=str)


def configure_root_logging(level: str | int | None = None) -> None:
    """Initialize the root logger with a JSON stream handler (idempotent).

    Args:
        level: Logging level or level name. If ``None``, use env ``LOG_LEVEL``
            or ``WARNING``.
    """
    root = logging.getLogger()

    env_level = os.getenv("LOG_LEVEL")
    resolved: int | str = (
        level if level is not None else (env_level.upper() if env_level else "WARNING")
    )
    root.setLevel(resolved)

    if root.handlers:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(_JsonFormatter())
    root.addHandler(handler)


def get_json_logger(name: str) -> logging.Logger:
    """Return a module-specific logger backed by the JSON root handler.

    This does *not* configure the root logger; call
    :func:`configure_root_logging` once at startup.
    """
    logger = logging.getLogger(name)
    logger.propagate = True
    return logger
