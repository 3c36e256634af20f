# Copyright (c)
# SPDX-License-Identifier: MIT
"""Base DTOs and wire-type hooks (Application Layer).

Purpose:
    Canonical pydantic bases for Sure request and response payloads, plus the
    annotated field types that route money, dates, instants, and durations
    through the domain parsing services.

Field types:
    * :data:`FlexibleDecimal` – lenient money text → ``Decimal``; emitted as a
      string in JSON mode.
    * :data:`WireDate` / :data:`OptionalWireDate` – strict ``YYYY-MM-DD``.
    * :data:`WireInstant` / :data:`OptionalWireInstant` – offset-qualified
      timestamp with bare-date fallback, normalized to UTC.
    * :data:`WireDuration` – integer seconds ↔ ``timedelta``.

Layer: application/schemas/dto
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Annotated, Any

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    PlainSerializer,
    PlainValidator,
)

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
from sure_client.domain.services.numeric_normalizer import normalize, plain_text

__all__ = [
    "BaseDTO",
    "DeleteResponse",
    "ErrorResponse",
    "FlexibleDecimal",
    "OptionalWireDate",
    "OptionalWireInstant",
    "Paginated",
    "Pagination",
    "ResponseDTO",
    "WireDate",
    "WireDuration",
    "WireInstant",
]


def _normalize_money(value: Any) -> Decimal:
    # Decimals built in Python pass straight through.
    if isinstance(value, Decimal):
        return value
    return normalize(value)


FlexibleDecimal = Annotated[
    Decimal,
    BeforeValidator(_normalize_money),
    PlainSerializer(plain_text, return_type=str, when_used="json"),
]

WireDate = Annotated[
    date,
    PlainValidator(deserialize_date),
    PlainSerializer(serialize_date, return_type=str),
]

OptionalWireDate = Annotated[
    date | None,
    PlainValidator(deserialize_optional_date),
    PlainSerializer(serialize_optional_date, return_type=str | None),
]

WireInstant = Annotated[
    datetime,
    PlainValidator(deserialize_instant),
    PlainSerializer(serialize_instant, return_type=str),
]

OptionalWireInstant = Annotated[
    datetime | None,
    PlainValidator(deserialize_optional_instant),
    PlainSerializer(serialize_optional_instant, return_type=str | None),
]

WireDuration = Annotated[
    timedelta,
    PlainValidator(deserialize_duration),
    PlainSerializer(serialize_duration, return_type=int),
]


class BaseDTO(BaseModel):
    """Base class for outbound request payloads.

    Notes:
        - Strict fields (``extra='forbid'``) so typos fail before a request is sent.
    """

    model_config = ConfigDict(
        extra="forbid",
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    def to_wire(self) -> dict[str, Any]:
        """Dump to a JSON-compatible dict, omitting unset optional fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ResponseDTO(BaseModel):
    """Base class for decoded API responses.

    Unknown fields are ignored so additive server changes do not break decoding.
    """

    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
        frozen=True,
    )


class Pagination(ResponseDTO):
    page: int
    per_page: int
    total_count: int
    total_pages: int


class Paginated(ResponseDTO):
    """Base for list responses: a resource list plus pagination metadata."""

    pagination: Pagination


class DeleteResponse(ResponseDTO):
    message: str


class ErrorResponse(ResponseDTO):
    """Structured failure body returned by the API."""

    error: str
    message: str | None = None
    details: Any = Field(default=None)

    def best_message(self) -> str:
        return self.message or self.error
