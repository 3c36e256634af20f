# Copyright (c)
# SPDX-License-Identifier: MIT
"""Credential Value Object (Domain Layer).

Purpose:
    Represent the credential a client presents to the Sure API. Two schemes
    are supported:

    * Bearer token (OAuth access token), sent as ``Authorization: Bearer <t>``.
    * API key, sent as ``X-Api-Key: <key>``.

Design:
    - Immutable pydantic model; the secret is a :class:`pydantic.SecretStr` so
      it never shows up in ``repr`` or logs.

Layer:
    domain/value_objects
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, SecretStr, field_validator

if TYPE_CHECKING:
    from sure_client.infrastructure.external_apis.sure.settings import SureSettings

__all__ = ["Auth", "AuthScheme"]


class AuthScheme(str, Enum):
    """Credential scheme; values match the ``SURE_AUTH_MODE`` setting."""

    BEARER = "bearer"
    API_KEY = "api_key"


class Auth(BaseModel):
    """Credential presented on every request.

    Attributes:
        scheme: How the secret is transmitted.
        secret: Token or API key.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    scheme: AuthScheme
    secret: SecretStr

    @field_validator("secret")
    @classmethod
    def _non_empty(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value().strip():
            raise ValueError("credential must not be empty")
        return v

    @classmethod
    def bearer(cls, token: str) -> Auth:
        return cls(scheme=AuthScheme.BEARER, secret=SecretStr(token))

    @classmethod
    def api_key(cls, key: str) -> Auth:
        return cls(scheme=AuthScheme.API_KEY, secret=SecretStr(key))

    @classmethod
    def from_settings(cls, settings: SureSettings) -> Auth | None:
        """Build the credential configured in settings, or ``None`` if no token is set."""
        if settings.token is None:
            return None
        return cls(scheme=AuthScheme(settings.auth_mode), secret=settings.token)

    def headers(self) -> dict[str, str]:
        """Return the header(s) that carry this credential."""
        value = self.secret.get_secret_value()
        if self.scheme is AuthScheme.BEARER:
            return {"Authorization": f"Bearer {value}"}
        return {"X-Api-Key": value}
