# Copyright (c)
# SPDX-License-Identifier: MIT
"""Calendar and duration wire-format adapters.

Purpose:
    Bridge the API's wire representations of dates, instants, and durations
    to :mod:`datetime` domain values. Each adapter is a pair of pure
    functions usable as a per-field (de)serialization hook.

Wire formats:
    * Calendar date: ``YYYY-MM-DD`` (strict, exactly ten characters).
    * Instant: RFC 3339 / ISO-8601 timestamp with an offset, or a bare
      ``YYYY-MM-DD`` interpreted as midnight UTC. Always emitted in UTC with a
      ``+00:00`` offset.
    * Duration: signed 64-bit integer count of seconds. Negative counts are
      rejected rather than wrapped.

Layer:
    domain/services
"""

from __future__ import annotations

import re
from datetime import UTC, date, datetime, time, timedelta
from typing import Any, Final

from sure_client.domain.exceptions.parsing import ParseFailure

__all__ = [
    "deserialize_date",
    "deserialize_duration",
    "deserialize_instant",
    "deserialize_optional_date",
    "deserialize_optional_instant",
    "serialize_date",
    "serialize_duration",
    "serialize_instant",
    "serialize_optional_date",
    "serialize_optional_instant",
]

_DATE_RE: Final[re.Pattern[str]] = re.compile(r"\d{4}-\d{2}-\d{2}")
_I64_MIN: Final[int] = -(2**63)
_I64_MAX: Final[int] = 2**63 - 1


# --------------------------------------------------------------------------- #
# Calendar date                                                               #
# --------------------------------------------------------------------------- #


def serialize_date(value: date) -> str:
    """Format a civil date as ``YYYY-MM-DD``."""
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def deserialize_date(value: Any) -> date:
    """Parse a strict ``YYYY-MM-DD`` string into a civil date.

    Args:
        value: Raw wire value.

    Returns:
        The parsed date.

    Raises:
        ParseFailure: If the value is not a string of exactly that shape or
            names a day that does not exist.
    """
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not _DATE_RE.fullmatch(value):
        raise ParseFailure(value, "expected a YYYY-MM-DD date")
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise ParseFailure(value, "unparseable date") from exc


def serialize_optional_date(value: date | None) -> str | None:
    """Format an optional civil date; ``None`` stays ``None``."""
    return None if value is None else serialize_date(value)


def deserialize_optional_date(value: Any) -> date | None:
    """Parse an optional date.

    ``None`` means "no date present". A present but malformed value still
    raises :class:`ParseFailure`.
    """
    if value is None:
        return None
    return deserialize_date(value)


# --------------------------------------------------------------------------- #
# Instant                                                                     #
# --------------------------------------------------------------------------- #


def serialize_instant(value: datetime) -> str:
    """Format an instant as RFC 3339 in UTC.

    Naive datetimes are taken to already be in UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).isoformat()


def deserialize_instant(value: Any) -> datetime:
    """Parse an instant from a full timestamp or, failing that, a bare date.

    Args:
        value: Raw wire value.

    Returns:
        A timezone-aware datetime normalized to UTC.

    Raises:
        ParseFailure: If the value is neither an offset-qualified ISO-8601
            timestamp nor a ``YYYY-MM-DD`` date.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            raise ParseFailure(value, "timestamp has no UTC offset")
        return value.astimezone(UTC)
    if not isinstance(value, str):
        raise ParseFailure(value, "expected an ISO-8601 timestamp string")

    if not _DATE_RE.fullmatch(value):
        try:
            # RFC 3339 allows lowercase "t" and "z".
            parsed = datetime.fromisoformat(value.upper())
        except ValueError as exc:
            raise ParseFailure(value, "unparseable timestamp") from exc
        if parsed.tzinfo is None:
            raise ParseFailure(value, "timestamp has no UTC offset")
        return parsed.astimezone(UTC)

    return datetime.combine(deserialize_date(value), time.min, tzinfo=UTC)


def serialize_optional_instant(value: datetime | None) -> str | None:
    """Format an optional instant; ``None`` stays ``None``."""
    return None if value is None else serialize_instant(value)


def deserialize_optional_instant(value: Any) -> datetime | None:
    """Parse an optional instant; ``None`` means "not present"."""
    if value is None:
        return None
    return deserialize_instant(value)


# --------------------------------------------------------------------------- #
# Duration                                                                    #
# --------------------------------------------------------------------------- #


def serialize_duration(value: timedelta) -> int:
    """Emit the whole number of seconds in a duration (fractions truncated)."""
    return value.days * 86_400 + value.seconds


def deserialize_duration(value: Any) -> timedelta:
    """Build a duration from a signed 64-bit integer count of seconds.

    Args:
        value: Raw wire value.

    Returns:
        The non-negative duration.

    Raises:
        ParseFailure: If the value is not an integer, lies outside the signed
            64-bit range, is negative, or exceeds what ``timedelta`` can hold.
    """
    if isinstance(value, timedelta):
        seconds = serialize_duration(value)
    elif isinstance(value, int) and not isinstance(value, bool):
        seconds = value
    else:
        raise ParseFailure(value, "expected an integer number of seconds")

    if not _I64_MIN <= seconds <= _I64_MAX:
        raise ParseFailure(value, "seconds outside the signed 64-bit range")
    if seconds < 0:
        raise ParseFailure(value, "negative duration")
    try:
        return timedelta(seconds=seconds)
    except OverflowError as exc:
        raise ParseFailure(value, "duration too large") from exc
