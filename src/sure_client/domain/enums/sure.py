# Copyright (c)
# SPDX-License-Identifier: MIT
"""
Sure API enumerations.

Purpose:
    Closed vocabularies used by Sure resources (account kinds, transaction
    natures, category classifications, chat roles, sync states, rate-limit
    tiers).

Layer:
    domain

Notes:
    - Members carry the canonical wire value. Where the API also emits an
      alternate spelling (``"credit_card"`` for ``"CreditCard"``, ``"inflow"``
      for ``"income"``), ``_missing_`` maps it back to the canonical member.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class AccountKind(str, Enum):
    """Kind of account, sent as ``account_type`` on the wire."""

    DEPOSITORY = "Depository"
    CREDIT_CARD = "CreditCard"
    INVESTMENT = "Investment"
    PROPERTY = "Property"
    LOAN = "Loan"
    OTHER_ASSET = "OtherAsset"
    OTHER_LIABILITY = "OtherLiability"

    @classmethod
    def _missing_(cls, value: Any) -> AccountKind | None:
        """Accept the snake_case aliases (``"credit_card"``, ``"other_asset"``)."""
        if isinstance(value, str):
            compact = value.replace("_", "").lower()
            for member in cls:
                if member.value.lower() == compact:
                    return member
        return None


class TransactionNature(str, Enum):
    """Nature of a transaction; determines the sign the server applies."""

    INCOME = "income"
    EXPENSE = "expense"

    @classmethod
    def _missing_(cls, value: Any) -> TransactionNature | None:
        return {"inflow": cls.INCOME, "outflow": cls.EXPENSE}.get(value)


class TransactionType(str, Enum):
    """Transaction list filter (``type`` query parameter)."""

    INCOME = "income"
    EXPENSE = "expense"


class Classification(str, Enum):
    """Category classification."""

    INCOME = "income"
    EXPENSE = "expense"


class MessageType(str, Enum):
    USER_MESSAGE = "user_message"
    ASSISTANT_MESSAGE = "assistant_message"


class MessageRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


class AiResponseStatus(str, Enum):
    """Progress of the assistant reply to a posted chat message."""

    PENDING = "pending"
    COMPLETE = "complete"
    FAILED = "failed"


class SyncStatus(str, Enum):
    PENDING = "pending"
    SYNCING = "syncing"
    COMPLETED = "completed"
    FAILED = "failed"


class RateLimitTier(str, Enum):
    """API-key rate-limit tier; unrecognized tiers decode as ``UNKNOWN``."""

    STANDARD = "standard"
    PREMIUM = "premium"
    ENTERPRISE = "enterprise"
    NOOP = "noop"
    UNKNOWN = "unknown"

    @classmethod
    def _missing_(cls, value: Any) -> RateLimitTier:
        return cls.UNKNOWN


class AuthenticationMethod(str, Enum):
    OAUTH = "oauth"


class TokenType(str, Enum):
    BEARER = "Bearer"
