# Copyright (c)
# SPDX-License-Identifier: MIT
"""Base Domain Exceptions.

Summary:
    Canonical base class for every error raised by the Sure client, so callers
    can catch one type at the boundary and still branch on a stable ``code``.

Layer:
    domain/exceptions
"""

from __future__ import annotations

from typing import Any


class DomainError(Exception):
    """Base class for all domain/client exceptions.

    Attributes:
        code:
            Stable error code suitable for logs, metrics, and CLI exit output.
        message:
            Human-readable error message.
        details:
            Optional machine-readable diagnostic payload.
    """

    code: str = "DOMAIN_ERROR"

    def __init__(self, message: str = "", *, details: dict[str, Any] | None = None) -> None:
        """Initialize a DomainError instance.

        Args:
            message:
                Human-readable error message, safe to show to end users.
            details:
                Optional structured diagnostic payload for logs.

        """
        super().__init__(message)
        self.message = message
        self.details: dict[str, Any] = details or {}

    def __str__(self) -> str:
        """Return the human-readable message for this error."""
        return self.message
