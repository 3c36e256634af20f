# Copyright (c)
# SPDX-License-Identifier: MIT
"""Sync DTOs (Application Layer).

Layer: application/schemas/dto
"""

from __future__ import annotations

from uuid import UUID

from sure_client.application.schemas.dto.base import (
    OptionalWireDate,
    OptionalWireInstant,
    ResponseDTO,
)
from sure_client.domain.enums.sure import SyncStatus

__all__ = ["SyncResponse"]


class SyncResponse(ResponseDTO):
    """Acknowledgement of a queued family-wide sync.

    Attributes:
        window_start_date: First day covered by the sync window, if bounded.
        window_end_date: Last day covered by the sync window, if bounded.
    """

    id: UUID
    status: SyncStatus
    syncable_type: str
    syncable_id: UUID
    syncing_at: OptionalWireInstant = None
    completed_at: OptionalWireInstant = None
    window_start_date: OptionalWireDate = None
    window_end_date: OptionalWireDate = None
    message: str
