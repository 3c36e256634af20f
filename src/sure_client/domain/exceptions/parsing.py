# Copyright (c)
# SPDX-License-Identifier: MIT
"""Parsing Domain Exceptions.

Synopsis:
    The single error kind raised by the lenient wire-format parsers (money
    amounts, civil dates, instants, durations).

Design:
    * Inherits from :class:`DomainError` for a consistent ``code``.
    * Also inherits from :class:`ValueError` so pydantic validators surface it
      as a field validation error of the enclosing record.

Layer:
    domain/exceptions
"""

from __future__ import annotations

from typing import Any

from sure_client.domain.exceptions.base import DomainError


class ParseFailure(DomainError, ValueError):
    """A raw wire value could not be converted into its domain type.

    Attributes:
        raw: The offending value exactly as received.
        reason: Short human-readable explanation (e.g. ``"empty numeric string"``).
    """

    code = "PARSE_FAILURE"

    def __init__(self, raw: Any, reason: str) -> None:
        """Initialize the failure with the offending value and a reason.

        Args:
            raw: Value that failed to parse.
            reason: Why it failed.
        """
        super().__init__(f"{reason}: {raw!r}", details={"raw": repr(raw), "reason": reason})
        self.raw = raw
        self.reason = reason
