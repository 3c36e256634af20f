from __future__ import annotations

from datetime import UTC, date, datetime, timedelta, timezone

import pytest

from sure_client.domain.exceptions.parsing import ParseFailure
from sure_client.domain.services.calendar_adapters import (
    deserialize_date,
    deserialize_duration,
    deserialize_instant,
    deserialize_optional_date,
    deserialize_optional_instant,
    serialize_date,
    serialize_duration,
    serialize_instant,
    serialize_optional_date,
    serialize_optional_instant,
)

# ---------------------------------------------------------------------------
# Calendar date
# ---------------------------------------------------------------------------


def test_date_serializes_zero_padded() -> None:
    assert serialize_date(date(2024, 1, 5)) == "2024-01-05"
    assert serialize_date(date(1, 1, 1)) == "0001-01-01"


@pytest.mark.parametrize("text", ["2024-01-15", "2024-02-29", "1999-12-31", "0001-01-01"])
def test_date_round_trips(text: str) -> None:
    assert serialize_date(deserialize_date(text)) == text


@pytest.mark.parametrize(
    "bad",
    [
        "2024-1-15",
        "2024/01/15",
        "20240115",
        "2024-01-15T00:00:00Z",
        " 2024-01-15",
        "2023-02-29",
        "2024-13-01",
        "",
        20240115,
        None,
    ],
)
def test_date_rejects_other_shapes(bad: object) -> None:
    with pytest.raises(ParseFailure):
        deserialize_date(bad)


def test_date_accepts_date_objects_but_not_datetimes() -> None:
    assert deserialize_date(date(2024, 1, 15)) == date(2024, 1, 15)
    with pytest.raises(ParseFailure):
        deserialize_date(datetime(2024, 1, 15, tzinfo=UTC))


def test_optional_date() -> None:
    assert deserialize_optional_date(None) is None
    assert deserialize_optional_date("2024-01-15") == date(2024, 1, 15)
    assert serialize_optional_date(None) is None
    assert serialize_optional_date(date(2024, 1, 15)) == "2024-01-15"
    with pytest.raises(ParseFailure):
        deserialize_optional_date("15/01/2024")


# ---------------------------------------------------------------------------
# Instant
# ---------------------------------------------------------------------------


def test_instant_bare_date_equals_midnight_utc() -> None:
    assert deserialize_instant("2024-01-15") == deserialize_instant("2024-01-15T00:00:00Z")
    assert deserialize_instant("2024-01-15") == datetime(2024, 1, 15, tzinfo=UTC)


def test_instant_normalizes_offsets_to_utc() -> None:
    parsed = deserialize_instant("2024-01-15T10:30:00+02:00")
    assert parsed == datetime(2024, 1, 15, 8, 30, tzinfo=UTC)
    assert parsed.utcoffset() == timedelta(0)


@pytest.mark.parametrize(
    "text", ["2024-01-15t10:30:00z", "2024-01-15T10:30:00z", "2024-01-15t10:30:00Z"]
)
def test_instant_accepts_lowercase_rfc3339_markers(text: str) -> None:
    assert deserialize_instant(text) == datetime(2024, 1, 15, 10, 30, tzinfo=UTC)


def test_instant_keeps_fractional_seconds() -> None:
    parsed = deserialize_instant("2024-01-15T10:30:00.123456Z")
    assert parsed.microsecond == 123456


@pytest.mark.parametrize(
    "bad", ["2024-01-15T10:30:00", "yesterday", "2024-02-30", "", 1705312800, None]
)
def test_instant_rejects_unparseable_or_offsetless(bad: object) -> None:
    with pytest.raises(ParseFailure):
        deserialize_instant(bad)


def test_instant_serializes_in_utc() -> None:
    value = datetime(2024, 1, 15, 10, 30, tzinfo=timezone(timedelta(hours=2)))
    assert serialize_instant(value) == "2024-01-15T08:30:00+00:00"
    assert serialize_instant(datetime(2024, 1, 15)) == "2024-01-15T00:00:00+00:00"


def test_instant_round_trips() -> None:
    value = datetime(2024, 6, 1, 12, 0, 5, tzinfo=UTC)
    assert deserialize_instant(serialize_instant(value)) == value


def test_instant_rejects_naive_datetime_objects() -> None:
    with pytest.raises(ParseFailure):
        deserialize_instant(datetime(2024, 1, 15))


def test_optional_instant() -> None:
    assert deserialize_optional_instant(None) is None
    assert serialize_optional_instant(None) is None
    assert deserialize_optional_instant("2024-01-15") == datetime(2024, 1, 15, tzinfo=UTC)


# ---------------------------------------------------------------------------
# Duration
# ---------------------------------------------------------------------------


def test_duration_from_seconds() -> None:
    assert deserialize_duration(3600) == timedelta(hours=1)
    assert deserialize_duration(0) == timedelta(0)


def test_duration_serializes_whole_seconds() -> None:
    assert serialize_duration(timedelta(hours=2)) == 7200
    assert serialize_duration(timedelta(seconds=90, microseconds=999_999)) == 90


def test_duration_round_trips() -> None:
    assert serialize_duration(deserialize_duration(1_700_000_000)) == 1_700_000_000


@pytest.mark.parametrize("bad", [-1, -(2**63)])
def test_negative_durations_are_rejected(bad: int) -> None:
    with pytest.raises(ParseFailure) as exc_info:
        deserialize_duration(bad)
    assert exc_info.value.reason == "negative duration"


@pytest.mark.parametrize("bad", [2**63, -(2**63) - 1])
def test_durations_outside_i64_are_rejected(bad: int) -> None:
    with pytest.raises(ParseFailure):
        deserialize_duration(bad)


def test_durations_beyond_timedelta_range_are_rejected() -> None:
    with pytest.raises(ParseFailure):
        deserialize_duration(2**63 - 1)


@pytest.mark.parametrize("bad", [True, 1.5, "3600", None])
def test_duration_requires_an_integer(bad: object) -> None:
    with pytest.raises(ParseFailure):
        deserialize_duration(bad)
