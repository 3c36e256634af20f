# Copyright (c)
# SPDX-License-Identifier: MIT
"""Transaction DTOs (Application Layer).

Purpose:
    Wire models for ``/api/v1/transactions``: the transaction record with its
    embedded account, category, merchant, tags and transfer summaries, plus
    the create/update payloads.

Notes:
    - ``Transaction.date`` decodes through the instant adapter, so both a bare
      ``YYYY-MM-DD`` and a full timestamp are accepted. Outbound dates are
      strict civil dates.

Layer: application/schemas/dto
"""

from __future__ import annotations

from decimal import Decimal
from uuid import UUID

from sure_client.application.schemas.dto.base import (
    BaseDTO,
    FlexibleDecimal,
    OptionalWireDate,
    Paginated,
    ResponseDTO,
    WireDate,
    WireInstant,
)
from sure_client.domain.enums.sure import TransactionNature

__all__ = [
    "CreateTransactionData",
    "Transaction",
    "TransactionAccount",
    "TransactionCategory",
    "TransactionMerchant",
    "TransactionPage",
    "TransactionTag",
    "Transfer",
    "UpdateTransactionData",
]


class TransactionAccount(ResponseDTO):
    """Account summary embedded in a transaction."""

    id: UUID
    name: str
    balance: FlexibleDecimal | None = None
    currency: str | None = None
    classification: str | None = None
    account_type: str


class TransactionCategory(ResponseDTO):
    id: UUID
    name: str
    classification: str
    color: str
    icon: str


class TransactionMerchant(ResponseDTO):
    id: UUID
    name: str


class TransactionTag(ResponseDTO):
    id: UUID
    name: str
    color: str


class Transfer(ResponseDTO):
    """Counterpart of a transfer between two of the user's accounts."""

    id: UUID
    amount: FlexibleDecimal = Decimal(0)
    currency: str
    other_account: TransactionAccount | None = None


class Transaction(ResponseDTO):
    id: UUID
    date: WireInstant
    amount: FlexibleDecimal = Decimal(0)
    currency: str
    name: str
    notes: str | None = None
    classification: str
    account: TransactionAccount
    category: TransactionCategory | None = None
    merchant: TransactionMerchant | None = None
    tags: list[TransactionTag] = []
    transfer: Transfer | None = None
    created_at: WireInstant
    updated_at: WireInstant


class TransactionPage(Paginated):
    transactions: list[Transaction]


class CreateTransactionData(BaseDTO):
    """Payload for ``POST /api/v1/transactions``.

    Attributes:
        account_id: Account the transaction books against.
        date: Booking date (``YYYY-MM-DD``).
        amount: Unsigned amount; the sign is derived from ``nature``.
        nature: Income or expense.
        tag_ids: Tags to attach.
    """

    account_id: UUID
    date: WireDate
    amount: FlexibleDecimal
    name: str
    notes: str | None = None
    currency: str | None = None
    category_id: UUID | None = None
    merchant_id: UUID | None = None
    nature: TransactionNature | None = None
    tag_ids: list[UUID] | None = None


class UpdateTransactionData(BaseDTO):
    """Partial update for ``PATCH /api/v1/transactions/{id}``."""

    date: OptionalWireDate = None
    amount: FlexibleDecimal | None = None
    name: str | None = None
    notes: str | None = None
    currency: str | None = None
    category_id: UUID | None = None
    merchant_id: UUID | None = None
    nature: TransactionNature | None = None
    tag_ids: list[UUID] | None = None
