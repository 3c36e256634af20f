# Copyright (c)
# SPDX-License-Identifier: MIT
"""Sure API Domain Exceptions.

Synopsis:
    Closed set of errors raised by the Sure transport client. Non-2xx
    responses are mapped to one variant per meaningful status; transport,
    encoding, and decoding problems have their own client-side variants.

Design:
    * Inherit from :class:`DomainError` for consistent ``code`` and ``details``.
    * httpx types never cross this boundary; the client translates them.

Layer:
    domain/exceptions
"""

from __future__ import annotations

from typing import Any

from sure_client.domain.exceptions.base import DomainError


class SureApiError(DomainError):
    """The Sure API answered with a non-success status.

    Attributes:
        status: HTTP status code returned by the API.
    """

    code = "SURE_API_ERROR"
    label = "API error"

    def __init__(
        self,
        message: str = "",
        *,
        status: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize an API error.

        Args:
            message: Error message extracted from the response body.
            status: HTTP status code.
            details: Optional structured payload (e.g. the ``details`` field).
        """
        super().__init__(message, details=details)
        self.status = status

    def __str__(self) -> str:
        """Render ``"<label>: <message>"``."""
        return f"{self.label}: {self.message}"


class BadRequest(SureApiError):
    """400 Bad Request."""

    code = "BAD_REQUEST"
    label = "Bad request"

    def __str__(self) -> str:
        """Bad requests also report the status they were raised for."""
        return f"{self.label}: {self.message} (status: {self.status})"


class Unauthorized(SureApiError):
    """401 Unauthorized: missing, invalid, or expired credentials."""

    code = "UNAUTHORIZED"
    label = "Unauthorized"


class Forbidden(SureApiError):
    """403 Forbidden: credentials lack the required scope or feature."""

    code = "FORBIDDEN"
    label = "Forbidden"


class NotFound(SureApiError):
    """404 Not Found."""

    code = "NOT_FOUND"
    label = "Not found"


class UnprocessableEntity(SureApiError):
    """422 Unprocessable Entity: server-side validation rejected the payload."""

    code = "VALIDATION_ERROR"
    label = "Validation error"


class RateLimited(SureApiError):
    """429 Too Many Requests."""

    code = "RATE_LIMITED"
    label = "Rate limited"


class InternalServerError(SureApiError):
    """500 Internal Server Error."""

    code = "INTERNAL_SERVER_ERROR"
    label = "Internal server error"


class UnexpectedStatus(SureApiError):
    """Any other non-success status."""

    code = "UNEXPECTED_STATUS"

    def __str__(self) -> str:
        return f"API error {self.status}: {self.message}"


class InvalidParameter(DomainError):
    """A request parameter failed client-side validation; nothing was sent."""

    code = "INVALID_PARAMETER"

    def __str__(self) -> str:
        return f"Invalid parameter: {self.message}"


class TransportFailure(DomainError):
    """Network-level failure (connect error, timeout, protocol error)."""

    code = "NETWORK_ERROR"

    def __str__(self) -> str:
        return f"Network error: {self.message}"


class ResponseDecodeError(DomainError):
    """A success response body could not be decoded into the expected model.

    Attributes:
        source: The raw response text that failed to decode.
    """

    code = "JSON_DESERIALIZATION_ERROR"

    def __init__(self, message: str, *, source: str) -> None:
        """Initialize the decode error.

        Args:
            message: Description of the decode failure.
            source: Raw response text.
        """
        super().__init__(message, details={"source": source})
        self.source = source

    def __str__(self) -> str:
        return f"JSON deserialization error: {self.message}. Source: {self.source}"


_STATUS_ERRORS: dict[int, type[SureApiError]] = {
    400: BadRequest,
    401: Unauthorized,
    403: Forbidden,
    404: NotFound,
    422: UnprocessableEntity,
    429: RateLimited,
    500: InternalServerError,
}


def error_for_status(
    status: int,
    message: str,
    *,
    details: dict[str, Any] | None = None,
) -> SureApiError:
    """Build the error variant that corresponds to an HTTP status.

    Args:
        status: Non-success HTTP status code.
        message: Message extracted from the response body.
        details: Optional structured payload.

    Returns:
        The matching :class:`SureApiError` subclass instance; statuses without
        a dedicated variant map to :class:`UnexpectedStatus`.
    """
    cls = _STATUS_ERRORS.get(status, UnexpectedStatus)
    return cls(message, status=status, details=details)
