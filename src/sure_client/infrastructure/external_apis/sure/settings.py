# Copyright (c)
# SPDX-License-Identifier: MIT
"""Pydantic settings for the Sure transport client."""

from __future__ import annotations

from typing import Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SureSettings(BaseSettings):
    """Configuration for the Sure API client.

    Environment variables (with ``model_config.env_prefix``):

    * ``SURE_BASE_URL``
    * ``SURE_TOKEN``
    * ``SURE_AUTH_MODE`` (``api_key`` or ``bearer``)
    * ``SURE_TIMEOUT_S``
    """

    base_url: str = Field(
        "http://localhost:3000",
        description="Base URL of the Sure instance (without the /api/v1 prefix).",
    )
    token: SecretStr | None = Field(
        None,
        description="API key or OAuth access token.",
    )
    auth_mode: Literal["api_key", "bearer"] = Field(
        "api_key",
        description="How the token is sent: X-Api-Key header or Authorization: Bearer.",
    )
    timeout_s: float = Field(
        8.0,
        description="Per-request timeout in seconds for the transport client.",
    )

    model_config: SettingsConfigDict = SettingsConfigDict(
        env_prefix="SURE_",
        extra="ignore",
    )

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")
