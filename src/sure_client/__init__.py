# Copyright (c)
# SPDX-License-Identifier: MIT
"""Typed async client for the Sure personal finance API.

Typical usage:
    async with SureClient(SureSettings()) as client:
        page = await client.get_accounts(per_page=50)
"""

from __future__ import annotations

from sure_client.domain.exceptions.parsing import ParseFailure
from sure_client.domain.exceptions.sure_api import (
    InvalidParameter,
    ResponseDecodeError,
    SureApiError,
    TransportFailure,
)
from sure_client.domain.services.numeric_normalizer import format_amount, normalize
from sure_client.domain.value_objects.auth import Auth
from sure_client.infrastructure.external_apis.sure.client import SureClient
from sure_client.infrastructure.external_apis.sure.settings import SureSettings

__all__ = [
    "Auth",
    "InvalidParameter",
    "ParseFailure",
    "ResponseDecodeError",
    "SureApiError",
    "SureClient",
    "SureSettings",
    "TransportFailure",
    "format_amount",
    "normalize",
]
