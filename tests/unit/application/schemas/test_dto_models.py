from __future__ import annotations

import json
from datetime import UTC, date, datetime, timedelta
from decimal import Decimal
from uuid import UUID

import pytest
from pydantic import SecretStr, ValidationError

from sure_client.application.schemas.dto.accounts import (
    AccountDetail,
    AccountPage,
    CreateAccountData,
    UpdateAccountData,
)
from sure_client.application.schemas.dto.auth import (
    AuthLoginResponse,
    DeviceInfo,
    LoginRequest,
)
from sure_client.application.schemas.dto.categories import CategoryDetail
from sure_client.application.schemas.dto.chats import ChatDetail, MessageResponse
from sure_client.application.schemas.dto.sync import SyncResponse
from sure_client.application.schemas.dto.transactions import (
    CreateTransactionData,
    Transaction,
    UpdateTransactionData,
)
from sure_client.application.schemas.dto.usage import (
    UsageApiKeyResponse,
    UsageOAuthResponse,
    usage_response_adapter,
)
from sure_client.domain.enums.sure import (
    AccountKind,
    AiResponseStatus,
    MessageType,
    RateLimitTier,
    SyncStatus,
    TransactionNature,
)

ACCOUNT_ID = "5b0f4a4e-3c1f-4a5e-9f7e-2a1c9d7b8e01"
TX_ID = "0e6a1a6c-7d0f-4f4e-8a63-3f1f1f7b9c02"
CHAT_ID = "9a5d3c1e-2b4f-4e6a-8c0d-1f2e3a4b5c03"


def _account_payload(**overrides: object) -> dict[str, object]:
    payload: dict[str, object] = {
        "id": ACCOUNT_ID,
        "name": "Checking",
        "balance": "$1,234.56",
        "currency": "USD",
        "classification": "asset",
        "account_type": "depository",
        "is_active": True,
        "created_at": "2024-01-15T10:00:00Z",
        "updated_at": "2024-01-16T10:00:00+01:00",
    }
    payload.update(overrides)
    return payload


def _transaction_payload(**overrides: object) -> dict[str, object]:
    payload: dict[str, object] = {
        "id": TX_ID,
        "date": "2024-01-15",
        "amount": "($45.20)",
        "currency": "USD",
        "name": "Groceries",
        "classification": "expense",
        "account": {"id": ACCOUNT_ID, "name": "Checking", "account_type": "Depository"},
        "tags": [{"id": ACCOUNT_ID, "name": "food", "color": "#00ff00"}],
        "created_at": "2024-01-15T10:00:00Z",
        "updated_at": "2024-01-15T10:00:00Z",
    }
    payload.update(overrides)
    return payload


def test_account_detail_normalizes_balance_and_aliases_kind() -> None:
    account = AccountDetail.model_validate(_account_payload())
    assert account.id == UUID(ACCOUNT_ID)
    assert account.balance == Decimal("1234.56")
    assert account.kind is AccountKind.DEPOSITORY
    assert account.updated_at == datetime(2024, 1, 16, 9, 0, tzinfo=UTC)


def test_null_balance_is_zero() -> None:
    account = AccountDetail.model_validate(_account_payload(balance=None))
    assert account.balance == Decimal(0)


def test_numeric_balance_tokens_are_accepted() -> None:
    assert AccountDetail.model_validate(_account_payload(balance=12)).balance == Decimal(12)
    assert AccountDetail.model_validate(_account_payload(balance=1.5)).balance == Decimal("1.5")


def test_unparseable_balance_fails_the_whole_record() -> None:
    with pytest.raises(ValidationError) as exc_info:
        AccountDetail.model_validate(_account_payload(balance="n/a"))
    assert "no digits" in str(exc_info.value)


def test_unknown_response_fields_are_ignored() -> None:
    account = AccountDetail.model_validate(_account_payload(brand_new_field=1))
    assert account.name == "Checking"


def test_account_page_envelope() -> None:
    page = AccountPage.model_validate(
        {
            "accounts": [_account_payload()],
            "pagination": {"page": 1, "per_page": 25, "total_count": 1, "total_pages": 1},
        }
    )
    assert len(page.accounts) == 1
    assert page.pagination.total_count == 1


def test_account_json_dump_uses_wire_names_and_strings() -> None:
    account = AccountDetail.model_validate(_account_payload())
    dumped = json.loads(account.model_dump_json(by_alias=True))
    assert dumped["account_type"] == "Depository"
    assert dumped["balance"] == "1234.56"
    assert dumped["created_at"] == "2024-01-15T10:00:00+00:00"


def test_transaction_decodes_amount_and_bare_date() -> None:
    tx = Transaction.model_validate(_transaction_payload())
    assert tx.amount == Decimal("-45.20")
    assert tx.date == datetime(2024, 1, 15, tzinfo=UTC)
    assert tx.account.balance is None
    assert tx.category is None
    assert tx.tags[0].name == "food"


def test_transaction_accepts_full_timestamp_date() -> None:
    tx = Transaction.model_validate(_transaction_payload(date="2024-01-15T00:00:00Z"))
    assert tx.date == datetime(2024, 1, 15, tzinfo=UTC)


def test_transaction_rejects_malformed_date() -> None:
    with pytest.raises(ValidationError):
        Transaction.model_validate(_transaction_payload(date="15/01/2024"))


def test_transfer_amount_is_normalized() -> None:
    tx = Transaction.model_validate(
        _transaction_payload(
            transfer={"id": TX_ID, "amount": "1.000,00", "currency": "EUR"},
        )
    )
    assert tx.transfer is not None
    assert tx.transfer.amount == Decimal("1000.00")


def test_create_transaction_wire_shape() -> None:
    data = CreateTransactionData(
        account_id=UUID(ACCOUNT_ID),
        date=date(2024, 1, 15),
        amount=Decimal("45.20"),
        name="Groceries",
        nature=TransactionNature.EXPENSE,
    )
    assert data.to_wire() == {
        "account_id": ACCOUNT_ID,
        "date": "2024-01-15",
        "amount": "45.20",
        "name": "Groceries",
        "nature": "expense",
    }


def test_create_transaction_accepts_loose_amount_text() -> None:
    data = CreateTransactionData(
        account_id=ACCOUNT_ID,  # type: ignore[arg-type]
        date="2024-01-15",  # type: ignore[arg-type]
        amount="$1,000.50",  # type: ignore[arg-type]
        name="Rent",
    )
    assert data.amount == Decimal("1000.50")
    assert data.date == date(2024, 1, 15)


def test_create_transaction_rejects_non_iso_date() -> None:
    with pytest.raises(ValidationError):
        CreateTransactionData(
            account_id=ACCOUNT_ID,  # type: ignore[arg-type]
            date="01/15/2024",  # type: ignore[arg-type]
            amount=Decimal(1),
            name="Rent",
        )


def test_update_payloads_omit_unset_fields() -> None:
    assert UpdateTransactionData(name="Coffee").to_wire() == {"name": "Coffee"}
    assert UpdateTransactionData(date=date(2024, 2, 1)).to_wire() == {"date": "2024-02-01"}
    assert UpdateAccountData().to_wire() == {}


def test_request_payloads_forbid_unknown_fields() -> None:
    with pytest.raises(ValidationError):
        UpdateAccountData(nickname="x")  # type: ignore[call-arg]


def test_create_account_wire_shape() -> None:
    data = CreateAccountData(
        name="Visa",
        kind=AccountKind.CREDIT_CARD,
        balance=Decimal("-250.00"),
        accountable_attributes={"apr": 19.99},
    )
    assert data.to_wire() == {
        "name": "Visa",
        "account_type": "CreditCard",
        "balance": "-250.00",
        "accountable_attributes": {"apr": 19.99},
    }


def test_category_detail() -> None:
    category = CategoryDetail.model_validate(
        {
            "id": ACCOUNT_ID,
            "name": "Food",
            "classification": "expense",
            "color": "#ff0000",
            "icon": "utensils",
            "parent": {"id": TX_ID, "name": "Living"},
            "subcategories_count": 2,
            "created_at": "2024-01-01T00:00:00Z",
            "updated_at": "2024-01-01T00:00:00Z",
        }
    )
    assert category.parent is not None
    assert category.parent.name == "Living"


def test_chat_detail_and_message_response() -> None:
    message = {
        "id": TX_ID,
        "type": "user_message",
        "role": "user",
        "content": "How much did I spend?",
        "created_at": "2024-01-01T00:00:00Z",
        "updated_at": "2024-01-01T00:00:00Z",
    }
    chat = ChatDetail.model_validate(
        {
            "id": CHAT_ID,
            "title": "Budget",
            "created_at": "2024-01-01T00:00:00Z",
            "updated_at": "2024-01-01T00:00:00Z",
            "messages": [message],
        }
    )
    assert chat.messages[0].message_type is MessageType.USER_MESSAGE
    assert chat.pagination is None

    response = MessageResponse.model_validate(
        {**message, "chat_id": CHAT_ID, "ai_response_status": "pending"}
    )
    assert response.ai_response_status is AiResponseStatus.PENDING


def test_auth_response_durations() -> None:
    response = AuthLoginResponse.model_validate(
        {
            "access_token": "a",
            "refresh_token": "r",
            "token_type": "Bearer",
            "expires_in": 7200,
            "created_at": 1_700_000_000,
            "user": {
                "id": ACCOUNT_ID,
                "email": "a@example.com",
                "first_name": "A",
                "last_name": "B",
            },
        }
    )
    assert response.expires_in == timedelta(hours=2)
    dumped = json.loads(response.model_dump_json())
    assert dumped["expires_in"] == 7200
    assert dumped["created_at"] == 1_700_000_000


def test_auth_response_rejects_negative_lifetime() -> None:
    with pytest.raises(ValidationError):
        AuthLoginResponse.model_validate(
            {
                "access_token": "a",
                "refresh_token": "r",
                "token_type": "Bearer",
                "expires_in": -1,
                "created_at": 0,
                "user": {"id": ACCOUNT_ID, "email": "e", "first_name": "f", "last_name": "l"},
            }
        )


def test_login_request_reveals_password_only_on_the_wire() -> None:
    device = DeviceInfo(
        device_id="d1", device_name="n", device_type="cli", os_version="os", app_version="1"
    )
    request = LoginRequest(email="a@example.com", password=SecretStr("hunter2"), device=device)
    assert "hunter2" not in repr(request)
    assert request.to_wire()["password"] == "hunter2"


def test_sync_response_optional_dates() -> None:
    sync = SyncResponse.model_validate(
        {
            "id": ACCOUNT_ID,
            "status": "pending",
            "syncable_type": "Family",
            "syncable_id": TX_ID,
            "window_start_date": "2024-01-01",
            "window_end_date": None,
            "message": "Sync queued",
        }
    )
    assert sync.status is SyncStatus.PENDING
    assert sync.window_start_date == date(2024, 1, 1)
    assert sync.window_end_date is None
    assert sync.syncing_at is None


def test_usage_api_key_variant() -> None:
    usage = usage_response_adapter.validate_python(
        {
            "api_key": {
                "name": "cli",
                "scopes": ["read"],
                "created_at": "2024-01-01T00:00:00Z",
            },
            "rate_limit": {
                "tier": "platinum",
                "limit": 100,
                "current_count": 3,
                "remaining": 97,
                "reset_in_seconds": 1800,
                "reset_at": "2024-01-01T01:00:00Z",
            },
        }
    )
    assert isinstance(usage, UsageApiKeyResponse)
    assert usage.rate_limit.tier is RateLimitTier.UNKNOWN


def test_usage_oauth_variant() -> None:
    usage = usage_response_adapter.validate_python(
        {"authentication_method": "oauth", "message": "Usage is not tracked for OAuth"}
    )
    assert isinstance(usage, UsageOAuthResponse)


def test_malformed_api_key_usage_does_not_fall_back_to_oauth() -> None:
    with pytest.raises(ValidationError) as exc_info:
        usage_response_adapter.validate_python(
            {"api_key": {"name": "cli"}, "message": "x", "authentication_method": "oauth"}
        )
    assert "api_key" in str(exc_info.value)


def test_tiny_amounts_are_sent_without_exponent() -> None:
    data = UpdateTransactionData(amount=Decimal("1E-7"))
    assert data.to_wire() == {"amount": "0.0000001"}
    from_float = UpdateTransactionData(amount=1e-7)  # type: ignore[arg-type]
    assert from_float.to_wire() == {"amount": "0.0000001"}
