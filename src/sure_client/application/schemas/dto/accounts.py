# Copyright (c)
# SPDX-License-Identifier: MIT
"""Account DTOs (Application Layer).

Purpose:
    Wire models for ``/api/v1/accounts``. Balances arrive as display-formatted
    strings (``"$1,234.56"``) and are normalized to ``Decimal``.

Layer: application/schemas/dto
"""

from __future__ import annotations

from decimal import Decimal
from uuid import UUID

from pydantic import Field

from sure_client.application.schemas.dto.base import (
    BaseDTO,
    FlexibleDecimal,
    Paginated,
    ResponseDTO,
    WireInstant,
)
from sure_client.domain.enums.sure import AccountKind
from sure_client.types import JsonObject

__all__ = [
    "Account",
    "AccountDetail",
    "AccountPage",
    "CreateAccountData",
    "UpdateAccountData",
]


class Account(ResponseDTO):
    """Account as it appears in list responses."""

    id: UUID
    name: str
    balance: FlexibleDecimal = Decimal(0)
    currency: str
    classification: str
    kind: AccountKind = Field(alias="account_type")


class AccountDetail(Account):
    """Full account record returned by get/create/update."""

    subtype: str | None = None
    institution_name: str | None = None
    institution_domain: str | None = None
    notes: str | None = None
    is_active: bool
    created_at: WireInstant
    updated_at: WireInstant


class AccountPage(Paginated):
    accounts: list[Account]


class CreateAccountData(BaseDTO):
    """Payload for ``POST /api/v1/accounts`` (sent wrapped as ``{"account": ...}``).

    Attributes:
        name: Display name.
        kind: Account kind (``account_type`` on the wire).
        balance: Opening balance.
        accountable_attributes: Kind-specific attributes, passed through as-is.
    """

    name: str
    kind: AccountKind = Field(alias="account_type")
    balance: FlexibleDecimal | None = None
    currency: str | None = None
    subtype: str | None = None
    institution_name: str | None = None
    institution_domain: str | None = None
    notes: str | None = None
    accountable_attributes: JsonObject | None = None


class UpdateAccountData(BaseDTO):
    """Partial update for ``PATCH /api/v1/accounts/{id}``; unset fields are omitted."""

    name: str | None = None
    balance: FlexibleDecimal | None = None
    subtype: str | None = None
    institution_name: str | None = None
    institution_domain: str | None = None
    notes: str | None = None
    accountable_attributes: JsonObject | None = None
