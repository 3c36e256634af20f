# Copyright (c)
# SPDX-License-Identifier: MIT
"""Category DTOs (Application Layer).

Layer: application/schemas/dto
"""

from __future__ import annotations

from uuid import UUID

from sure_client.application.schemas.dto.base import BaseDTO, Paginated, ResponseDTO, WireInstant
from sure_client.domain.enums.sure import Classification

__all__ = [
    "CategoryDetail",
    "CategoryPage",
    "CategoryParent",
    "CreateCategoryData",
    "UpdateCategoryData",
]


class CategoryParent(ResponseDTO):
    id: UUID
    name: str


class CategoryDetail(ResponseDTO):
    """Category with hierarchy information.

    Attributes:
        parent: Parent category, absent for root categories.
        subcategories_count: Number of direct children.
    """

    id: UUID
    name: str
    classification: Classification
    color: str
    icon: str
    parent: CategoryParent | None = None
    subcategories_count: int = 0
    created_at: WireInstant
    updated_at: WireInstant


class CategoryPage(Paginated):
    categories: list[CategoryDetail]


class CreateCategoryData(BaseDTO):
    """Payload for ``POST /api/v1/categories``."""

    name: str
    classification: Classification
    color: str
    lucide_icon: str | None = None
    parent_id: UUID | None = None


class UpdateCategoryData(BaseDTO):
    name: str | None = None
    classification: Classification | None = None
    color: str | None = None
    lucide_icon: str | None = None
    parent_id: UUID | None = None
