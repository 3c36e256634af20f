# Copyright (c)
# SPDX-License-Identifier: MIT
"""Authentication DTOs (Application Layer).

Purpose:
    Wire models for ``/api/v1/auth/{signup,login,refresh}``. Token lifetimes
    (``expires_in``) and issue times (``created_at``) arrive as integer
    seconds and decode to :class:`datetime.timedelta`.

Layer: application/schemas/dto
"""

from __future__ import annotations

from uuid import UUID

from pydantic import SecretStr, field_serializer

from sure_client.application.schemas.dto.base import BaseDTO, ResponseDTO, WireDuration
from sure_client.domain.enums.sure import TokenType

__all__ = [
    "AuthLoginResponse",
    "AuthSignupResponse",
    "AuthTokenResponse",
    "AuthUser",
    "DeviceInfo",
    "LoginRequest",
    "RefreshDeviceInfo",
    "RefreshTokenRequest",
    "SignupRequest",
    "SignupUserData",
]


class AuthTokenResponse(ResponseDTO):
    """Issued token pair.

    Attributes:
        expires_in: Access-token lifetime.
        created_at: Issue time as seconds since the Unix epoch.
    """

    access_token: str
    refresh_token: str
    token_type: TokenType
    expires_in: WireDuration
    created_at: WireDuration


class AuthUser(ResponseDTO):
    id: UUID
    email: str
    first_name: str
    last_name: str


class AuthSignupResponse(AuthTokenResponse):
    user: AuthUser


class AuthLoginResponse(AuthTokenResponse):
    user: AuthUser


class DeviceInfo(BaseDTO):
    """Client device registered alongside the issued tokens."""

    device_id: str
    device_name: str
    device_type: str
    os_version: str
    app_version: str


class RefreshDeviceInfo(BaseDTO):
    device_id: str


class _CredentialDTO(BaseDTO):
    """Request payload carrying a password; the secret is revealed only on dump."""

    password: SecretStr

    @field_serializer("password", when_used="json")
    def _reveal(self, v: SecretStr) -> str:
        return v.get_secret_value()


class SignupUserData(_CredentialDTO):
    email: str
    first_name: str
    last_name: str


class SignupRequest(BaseDTO):
    user: SignupUserData
    invite_code: str | None = None
    device: DeviceInfo


class LoginRequest(_CredentialDTO):
    email: str
    otp_code: str | None = None
    device: DeviceInfo


class RefreshTokenRequest(BaseDTO):
    refresh_token: str
    device: RefreshDeviceInfo
