# Copyright (c)
# SPDX-License-Identifier: MIT
"""API usage DTOs (Application Layer).

Purpose:
    Wire models for ``GET /api/v1/usage``. The payload takes one of two
    shapes depending on how the caller authenticated:

    * API key: key metadata plus rate-limit counters.
    * OAuth: a notice that usage is not tracked for OAuth tokens.

Design:
    The variant is chosen by an explicit discriminator (presence of the
    ``api_key`` member) rather than by trying each shape in turn, so a
    malformed API-key payload reports its own validation errors instead of
    falling through to the OAuth shape.

Layer: application/schemas/dto
"""

from __future__ import annotations

from typing import Annotated, Any, Final

from pydantic import Discriminator, Tag, TypeAdapter

from sure_client.application.schemas.dto.base import (
    OptionalWireInstant,
    ResponseDTO,
    WireInstant,
)
from sure_client.domain.enums.sure import AuthenticationMethod, RateLimitTier

__all__ = [
    "ApiKeyInfo",
    "RateLimitInfo",
    "UsageApiKeyResponse",
    "UsageOAuthResponse",
    "UsageResponse",
    "usage_response_adapter",
]

_API_KEY_TAG: Final[str] = "api_key"
_OAUTH_TAG: Final[str] = "oauth"


class ApiKeyInfo(ResponseDTO):
    name: str
    scopes: list[str] = []
    last_used_at: OptionalWireInstant = None
    created_at: WireInstant


class RateLimitInfo(ResponseDTO):
    """Rate-limit window for the calling key.

    Attributes:
        limit: Requests allowed per window; ``None`` when unlimited.
        remaining: Requests left; ``None`` when unlimited.
    """

    tier: RateLimitTier
    limit: int | None = None
    current_count: int
    remaining: int | None = None
    reset_in_seconds: int
    reset_at: WireInstant


class UsageApiKeyResponse(ResponseDTO):
    api_key: ApiKeyInfo
    rate_limit: RateLimitInfo


class UsageOAuthResponse(ResponseDTO):
    authentication_method: AuthenticationMethod
    message: str


def _usage_kind(value: Any) -> str:
    if isinstance(value, dict):
        return _API_KEY_TAG if _API_KEY_TAG in value else _OAUTH_TAG
    return _API_KEY_TAG if isinstance(value, UsageApiKeyResponse) else _OAUTH_TAG


UsageResponse = Annotated[
    Annotated[UsageApiKeyResponse, Tag(_API_KEY_TAG)]
    | Annotated[UsageOAuthResponse, Tag(_OAUTH_TAG)],
    Discriminator(_usage_kind),
]

usage_response_adapter: TypeAdapter[UsageApiKeyResponse | UsageOAuthResponse] = TypeAdapter(
    UsageResponse
)
