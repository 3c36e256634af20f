# Copyright (c)
# SPDX-License-Identifier: MIT
"""Sure wire models."""

from __future__ import annotations

from sure_client.application.schemas.dto.accounts import (
    Account,
    AccountDetail,
    AccountPage,
    CreateAccountData,
    UpdateAccountData,
)
from sure_client.application.schemas.dto.auth import (
    AuthLoginResponse,
    AuthSignupResponse,
    AuthTokenResponse,
    AuthUser,
    DeviceInfo,
    RefreshDeviceInfo,
    SignupUserData,
)
from sure_client.application.schemas.dto.base import (
    DeleteResponse,
    ErrorResponse,
    FlexibleDecimal,
    OptionalWireDate,
    OptionalWireInstant,
    Pagination,
    WireDate,
    WireDuration,
    WireInstant,
)
from sure_client.application.schemas.dto.categories import (
    CategoryDetail,
    CategoryPage,
    CreateCategoryData,
    UpdateCategoryData,
)
from sure_client.application.schemas.dto.chats import (
    ChatDetail,
    ChatPage,
    ChatSummary,
    Message,
    MessageResponse,
    RetryResponse,
    ToolCall,
)
from sure_client.application.schemas.dto.merchants import (
    CreateMerchantData,
    MerchantDetail,
    MerchantPage,
    UpdateMerchantData,
)
from sure_client.application.schemas.dto.sync import SyncResponse
from sure_client.application.schemas.dto.transactions import (
    CreateTransactionData,
    Transaction,
    TransactionPage,
    UpdateTransactionData,
)
from sure_client.application.schemas.dto.usage import (
    UsageApiKeyResponse,
    UsageOAuthResponse,
    UsageResponse,
)

__all__ = [
    "Account",
    "AccountDetail",
    "AccountPage",
    "AuthLoginResponse",
    "AuthSignupResponse",
    "AuthTokenResponse",
    "AuthUser",
    "CategoryDetail",
    "CategoryPage",
    "ChatDetail",
    "ChatPage",
    "ChatSummary",
    "CreateAccountData",
    "CreateCategoryData",
    "CreateMerchantData",
    "CreateTransactionData",
    "DeleteResponse",
    "DeviceInfo",
    "ErrorResponse",
    "FlexibleDecimal",
    "MerchantDetail",
    "MerchantPage",
    "Message",
    "MessageResponse",
    "OptionalWireDate",
    "OptionalWireInstant",
    "Pagination",
    "RefreshDeviceInfo",
    "RetryResponse",
    "SignupUserData",
    "SyncResponse",
    "ToolCall",
    "Transaction",
    "TransactionPage",
    "UpdateAccountData",
    "UpdateCategoryData",
    "UpdateMerchantData",
    "UpdateTransactionData",
    "UsageApiKeyResponse",
    "UsageOAuthResponse",
    "UsageResponse",
    "WireDate",
    "WireDuration",
    "WireInstant",
]
