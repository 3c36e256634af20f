# Copyright (c)
# SPDX-License-Identifier: MIT
"""Merchant DTOs (Application Layer).

Layer: application/schemas/dto
"""

from __future__ import annotations

from uuid import UUID

from sure_client.application.schemas.dto.base import BaseDTO, Paginated, ResponseDTO, WireInstant

__all__ = ["CreateMerchantData", "MerchantDetail", "MerchantPage", "UpdateMerchantData"]


class MerchantDetail(ResponseDTO):
    id: UUID
    name: str
    color: str | None = None
    created_at: WireInstant
    updated_at: WireInstant


class MerchantPage(Paginated):
    merchants: list[MerchantDetail]


class CreateMerchantData(BaseDTO):
    name: str
    color: str | None = None


class UpdateMerchantData(BaseDTO):
    name: str | None = None
    color: str | None = None
