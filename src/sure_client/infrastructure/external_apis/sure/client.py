# Copyright (c)
# SPDX-License-Identifier: MIT
"""Sure transport client: typed, instrumented, async.

This transport is framework-agnostic and provides:

* Async HTTP (httpx) with a per-request timeout.
* API-key (``X-Api-Key``) or bearer (``Authorization``) credentials.
* Request-id propagation (``X-Request-ID``) from the logging context.
* Typed decoding of every response through the pydantic wire models; money,
  dates and durations are parsed by the domain parsing services.
* Deterministic mapping of non-2xx statuses to the closed set of
  :mod:`sure_client.domain.exceptions.sure_api` errors.
* Prometheus metrics and one structured debug log line per request.

There is no retry, caching or pagination walking: each method
issues exactly one HTTP request.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Sequence
from datetime import date
from decimal import Decimal
from types import TracebackType
from typing import Any, Final, Self, TypeVar
from uuid import UUID

import httpx
from pydantic import ValidationError
from typing_extensions import TypeAliasType

from sure_client.application.schemas.dto.accounts import (
    AccountDetail,
    AccountPage,
    CreateAccountData,
    UpdateAccountData,
)
from sure_client.application.schemas.dto.auth import (
    AuthLoginResponse,
    AuthSignupResponse,
    AuthTokenResponse,
    DeviceInfo,
    LoginRequest,
    RefreshDeviceInfo,
    RefreshTokenRequest,
    SignupRequest,
    SignupUserData,
)
from sure_client.application.schemas.dto.base import DeleteResponse, ErrorResponse
from sure_client.application.schemas.dto.categories import (
    CategoryDetail,
    CategoryPage,
    CreateCategoryData,
    UpdateCategoryData,
)
from sure_client.application.schemas.dto.chats import (
    ChatDetail,
    ChatPage,
    CreateChatData,
    CreateMessageData,
    MessageResponse,
    RetryResponse,
    UpdateChatData,
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
    usage_response_adapter,
)
from sure_client.domain.enums.sure import Classification, TransactionType
from sure_client.domain.exceptions.sure_api import (
    InvalidParameter,
    ResponseDecodeError,
    SureApiError,
    TransportFailure,
    error_for_status,
)
from sure_client.domain.services.calendar_adapters import serialize_date
from sure_client.domain.services.numeric_normalizer import plain_text
from sure_client.domain.value_objects.auth import Auth
from sure_client.infrastructure.external_apis.sure.settings import SureSettings
from sure_client.infrastructure.logging.logger import get_json_logger, get_request_id
from sure_client.infrastructure.observability.metrics_sure import (
    observe_sure_request,
    record_http_status,
)

__all__ = ["MAX_PER_PAGE", "SureClient"]

T = TypeVar("T")

ResourceId = TypeAliasType("ResourceId", UUID | str)
QueryParams = TypeAliasType("QueryParams", list[tuple[str, str]])

MAX_PER_PAGE: Final[int] = 100
_DEFAULT_PAGE: Final[int] = 1
_DEFAULT_PER_PAGE: Final[int] = 25
_API_PREFIX: Final[str] = "/api/v1"

_DEFAULT_HEADERS: Final[dict[str, str]] = {
    "Accept": "application/json",
    "User-Agent": "sure-client/0.1",
}

log = get_json_logger(__name__)


def _page_params(page: int, per_page: int) -> QueryParams:
    """Validate paging arguments and render them as query pairs.

    Raises:
        InvalidParameter: If ``per_page`` exceeds :data:`MAX_PER_PAGE` or
            either value is not positive.
    """
    if per_page > MAX_PER_PAGE:
        raise InvalidParameter(f"per_page cannot exceed {MAX_PER_PAGE}")
    if per_page < 1 or page < 1:
        raise InvalidParameter("page and per_page must be positive")
    return [("page", str(page)), ("per_page", str(per_page))]


def _extend_ids(params: QueryParams, key: str, ids: Sequence[ResourceId] | None) -> None:
    # Array filters repeat the bracketed key once per value.
    for item in ids or ():
        params.append((f"{key}[]", str(item)))


def _error_message(response: httpx.Response) -> tuple[str, dict[str, Any] | None]:
    """Extract a human-readable message from a failure body.

    Preference order: the structured ``{"error", "message", "details"}`` body
    (``message`` over ``error``), then any string ``message``/``error`` member
    of a JSON object, then the raw text, then the status reason phrase.
    """
    text = response.text
    try:
        payload = json.loads(text) if text else None
    except ValueError:
        payload = None

    if isinstance(payload, dict):
        try:
            structured = ErrorResponse.model_validate(payload)
        except ValidationError:
            structured = None
        if structured is not None:
            details = {"details": structured.details} if structured.details is not None else None
            return structured.best_message(), details
        for key in ("message", "error"):
            value = payload.get(key)
            if isinstance(value, str):
                return value, None

    return text or response.reason_phrase, None


class SureClient:
    """Async transport client for the Sure REST API."""

    def __init__(
        self,
        settings: SureSettings | None = None,
        *,
        auth: Auth | None = None,
        http: httpx.AsyncClient | None = None,
        timeout_s: float | None = None,
    ) -> None:
        """Initialize the transport client.

        Args:
            settings: Client settings; loaded from ``SURE_*`` environment
                variables when omitted.
            auth: Credential override. Defaults to the credential described by
                ``settings`` (none when no token is configured, which is only
                useful for the signup/login endpoints).
            http: Optional shared ``httpx.AsyncClient``. If omitted, a client is
                created and owned by this instance.
            timeout_s: Per-request timeout override in seconds.
        """
        self._settings = settings or SureSettings()
        self._base_url = self._settings.base_url.rstrip("/")
        self._auth = auth if auth is not None else Auth.from_settings(self._settings)
        self._timeout = float(timeout_s if timeout_s is not None else self._settings.timeout_s)

        self._owns_client = http is None
        self._client = http or httpx.AsyncClient(
            timeout=self._timeout,
            headers=_DEFAULT_HEADERS.copy(),
        )

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance owns it."""
        if self._owns_client and not self._client.is_closed:
            await self._client.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    # ---------------------------- Accounts ------------------------------- #

    async def get_accounts(
        self, *, page: int = _DEFAULT_PAGE, per_page: int = _DEFAULT_PER_PAGE
    ) -> AccountPage:
        """List accounts, one page at a time."""
        return await self._request(
            "GET",
            "/accounts",
            op="accounts.list",
            params=_page_params(page, per_page),
            decode=AccountPage.model_validate_json,
        )

    async def get_account(self, account_id: ResourceId) -> AccountDetail:
        return await self._request(
            "GET",
            f"/accounts/{account_id}",
            op="accounts.get",
            decode=AccountDetail.model_validate_json,
        )

    async def create_account(self, data: CreateAccountData) -> AccountDetail:
        return await self._request(
            "POST",
            "/accounts",
            op="accounts.create",
            body={"account": data.to_wire()},
            decode=AccountDetail.model_validate_json,
        )

    async def update_account(self, account_id: ResourceId, data: UpdateAccountData) -> AccountDetail:
        return await self._request(
            "PATCH",
            f"/accounts/{account_id}",
            op="accounts.update",
            body={"account": data.to_wire()},
            decode=AccountDetail.model_validate_json,
        )

    async def delete_account(self, account_id: ResourceId) -> DeleteResponse:
        return await self._request(
            "DELETE",
            f"/accounts/{account_id}",
            op="accounts.delete",
            decode=DeleteResponse.model_validate_json,
        )

    # -------------------------- Transactions ----------------------------- #

    async def get_transactions(
        self,
        *,
        page: int = _DEFAULT_PAGE,
        per_page: int = _DEFAULT_PER_PAGE,
        account_id: ResourceId | None = None,
        account_ids: Sequence[ResourceId] | None = None,
        category_id: ResourceId | None = None,
        category_ids: Sequence[ResourceId] | None = None,
        merchant_id: ResourceId | None = None,
        merchant_ids: Sequence[ResourceId] | None = None,
        tag_ids: Sequence[ResourceId] | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
        min_amount: Decimal | None = None,
        max_amount: Decimal | None = None,
        transaction_type: TransactionType | None = None,
        search: str | None = None,
    ) -> TransactionPage:
        """List transactions matching the given filters.

        Args:
            page: 1-based page index.
            per_page: Page size, at most :data:`MAX_PER_PAGE`.
            account_id: Restrict to one account.
            account_ids: Restrict to any of several accounts.
            category_id: Restrict to one category.
            category_ids: Restrict to any of several categories.
            merchant_id: Restrict to one merchant.
            merchant_ids: Restrict to any of several merchants.
            tag_ids: Restrict to transactions carrying any of these tags.
            start_date: Inclusive lower date bound.
            end_date: Inclusive upper date bound.
            min_amount: Lower amount bound.
            max_amount: Upper amount bound.
            transaction_type: Income or expense only.
            search: Free-text match on name, notes and merchant.

        Returns:
            One page of transactions with pagination metadata.

        Raises:
            InvalidParameter: If ``per_page`` exceeds the server maximum.
        """
        params = _page_params(page, per_page)
        if account_id is not None:
            params.append(("account_id", str(account_id)))
        _extend_ids(params, "account_ids", account_ids)
        if category_id is not None:
            params.append(("category_id", str(category_id)))
        _extend_ids(params, "category_ids", category_ids)
        if merchant_id is not None:
            params.append(("merchant_id", str(merchant_id)))
        _extend_ids(params, "merchant_ids", merchant_ids)
        _extend_ids(params, "tag_ids", tag_ids)
        if start_date is not None:
            params.append(("start_date", serialize_date(start_date)))
        if end_date is not None:
            params.append(("end_date", serialize_date(end_date)))
        if min_amount is not None:
            params.append(("min_amount", plain_text(min_amount)))
        if max_amount is not None:
            params.append(("max_amount", plain_text(max_amount)))
        if transaction_type is not None:
            params.append(("type", TransactionType(transaction_type).value))
        if search is not None:
            params.append(("search", search))

        return await self._request(
            "GET",
            "/transactions",
            op="transactions.list",
            params=params,
            decode=TransactionPage.model_validate_json,
        )

    async def get_transaction(self, transaction_id: ResourceId) -> Transaction:
        return await self._request(
            "GET",
            f"/transactions/{transaction_id}",
            op="transactions.get",
            decode=Transaction.model_validate_json,
        )

    async def create_transaction(self, data: CreateTransactionData) -> Transaction:
        return await self._request(
            "POST",
            "/transactions",
            op="transactions.create",
            body={"transaction": data.to_wire()},
            decode=Transaction.model_validate_json,
        )

    async def update_transaction(
        self, transaction_id: ResourceId, data: UpdateTransactionData
    ) -> Transaction:
        return await self._request(
            "PATCH",
            f"/transactions/{transaction_id}",
            op="transactions.update",
            body={"transaction": data.to_wire()},
            decode=Transaction.model_validate_json,
        )

    async def delete_transaction(self, transaction_id: ResourceId) -> DeleteResponse:
        return await self._request(
            "DELETE",
            f"/transactions/{transaction_id}",
            op="transactions.delete",
            decode=DeleteResponse.model_validate_json,
        )

    # --------------------------- Categories ------------------------------ #

    async def get_categories(
        self,
        *,
        page: int = _DEFAULT_PAGE,
        per_page: int = _DEFAULT_PER_PAGE,
        roots_only: bool = False,
        classification: Classification | None = None,
        parent_id: ResourceId | None = None,
    ) -> CategoryPage:
        """List categories; ``roots_only`` is always sent."""
        params = _page_params(page, per_page)
        params.append(("roots_only", "true" if roots_only else "false"))
        if classification is not None:
            params.append(("classification", Classification(classification).value))
        if parent_id is not None:
            params.append(("parent_id", str(parent_id)))
        return await self._request(
            "GET",
            "/categories",
            op="categories.list",
            params=params,
            decode=CategoryPage.model_validate_json,
        )

    async def get_category(self, category_id: ResourceId) -> CategoryDetail:
        return await self._request(
            "GET",
            f"/categories/{category_id}",
            op="categories.get",
            decode=CategoryDetail.model_validate_json,
        )

    async def create_category(self, data: CreateCategoryData) -> CategoryDetail:
        return await self._request(
            "POST",
            "/categories",
            op="categories.create",
            body={"category": data.to_wire()},
            decode=CategoryDetail.model_validate_json,
        )

    async def update_category(
        self, category_id: ResourceId, data: UpdateCategoryData
    ) -> CategoryDetail:
        return await self._request(
            "PATCH",
            f"/categories/{category_id}",
            op="categories.update",
            body={"category": data.to_wire()},
            decode=CategoryDetail.model_validate_json,
        )

    async def delete_category(self, category_id: ResourceId) -> DeleteResponse:
        return await self._request(
            "DELETE",
            f"/categories/{category_id}",
            op="categories.delete",
            decode=DeleteResponse.model_validate_json,
        )

    # ---------------------------- Merchants ------------------------------ #

    async def get_merchants(
        self, *, page: int = _DEFAULT_PAGE, per_page: int = _DEFAULT_PER_PAGE
    ) -> MerchantPage:
        return await self._request(
            "GET",
            "/merchants",
            op="merchants.list",
            params=_page_params(page, per_page),
            decode=MerchantPage.model_validate_json,
        )

    async def get_merchant(self, merchant_id: ResourceId) -> MerchantDetail:
        return await self._request(
            "GET",
            f"/merchants/{merchant_id}",
            op="merchants.get",
            decode=MerchantDetail.model_validate_json,
        )

    async def create_merchant(self, data: CreateMerchantData) -> MerchantDetail:
        return await self._request(
            "POST",
            "/merchants",
            op="merchants.create",
            body={"merchant": data.to_wire()},
            decode=MerchantDetail.model_validate_json,
        )

    async def update_merchant(
        self, merchant_id: ResourceId, data: UpdateMerchantData
    ) -> MerchantDetail:
        return await self._request(
            "PATCH",
            f"/merchants/{merchant_id}",
            op="merchants.update",
            body={"merchant": data.to_wire()},
            decode=MerchantDetail.model_validate_json,
        )

    async def delete_merchant(self, merchant_id: ResourceId) -> DeleteResponse:
        return await self._request(
            "DELETE",
            f"/merchants/{merchant_id}",
            op="merchants.delete",
            decode=DeleteResponse.model_validate_json,
        )

    # ------------------------------ Chats -------------------------------- #

    async def get_chats(
        self, *, page: int = _DEFAULT_PAGE, per_page: int = _DEFAULT_PER_PAGE
    ) -> ChatPage:
        return await self._request(
            "GET",
            "/chats",
            op="chats.list",
            params=_page_params(page, per_page),
            decode=ChatPage.model_validate_json,
        )

    async def get_chat(self, chat_id: ResourceId) -> ChatDetail:
        return await self._request(
            "GET",
            f"/chats/{chat_id}",
            op="chats.get",
            decode=ChatDetail.model_validate_json,
        )

    async def create_chat(
        self, title: str, *, message: str | None = None, model: str | None = None
    ) -> ChatDetail:
        """Start a chat, optionally seeding it with a first user message."""
        data = CreateChatData(title=title, message=message, model=model)
        return await self._request(
            "POST",
            "/chats",
            op="chats.create",
            body=data.to_wire(),
            decode=ChatDetail.model_validate_json,
        )

    async def update_chat(self, chat_id: ResourceId, title: str) -> ChatDetail:
        return await self._request(
            "PATCH",
            f"/chats/{chat_id}",
            op="chats.update",
            body=UpdateChatData(title=title).to_wire(),
            decode=ChatDetail.model_validate_json,
        )

    async def delete_chat(self, chat_id: ResourceId) -> None:
        """Delete a chat and its messages. Any response body is ignored."""
        await self._request(
            "DELETE",
            f"/chats/{chat_id}",
            op="chats.delete",
            decode=None,
        )

    async def create_message(
        self, chat_id: ResourceId, content: str, *, model: str | None = None
    ) -> MessageResponse:
        """Post a user message; the assistant reply is produced asynchronously."""
        return await self._request(
            "POST",
            f"/chats/{chat_id}/messages",
            op="chats.create_message",
            body=CreateMessageData(content=content, model=model).to_wire(),
            decode=MessageResponse.model_validate_json,
        )

    async def retry_message(self, chat_id: ResourceId) -> RetryResponse:
        """Ask the assistant to regenerate its last reply."""
        return await self._request(
            "POST",
            f"/chats/{chat_id}/messages/retry",
            op="chats.retry_message",
            decode=RetryResponse.model_validate_json,
        )

    # ------------------------------- Auth -------------------------------- #

    async def signup(
        self,
        user: SignupUserData,
        device: DeviceInfo,
        *,
        invite_code: str | None = None,
    ) -> AuthSignupResponse:
        request = SignupRequest(user=user, device=device, invite_code=invite_code)
        return await self._request(
            "POST",
            "/auth/signup",
            op="auth.signup",
            body=request.to_wire(),
            decode=AuthSignupResponse.model_validate_json,
        )

    async def login(
        self,
        email: str,
        password: str,
        device: DeviceInfo,
        *,
        otp_code: str | None = None,
    ) -> AuthLoginResponse:
        """Exchange credentials (and an optional one-time code) for tokens."""
        request = LoginRequest(email=email, password=password, device=device, otp_code=otp_code)
        return await self._request(
            "POST",
            "/auth/login",
            op="auth.login",
            body=request.to_wire(),
            decode=AuthLoginResponse.model_validate_json,
        )

    async def refresh_token(
        self, refresh_token: str, device: RefreshDeviceInfo
    ) -> AuthTokenResponse:
        request = RefreshTokenRequest(refresh_token=refresh_token, device=device)
        return await self._request(
            "POST",
            "/auth/refresh",
            op="auth.refresh",
            body=request.to_wire(),
            decode=AuthTokenResponse.model_validate_json,
        )

    # --------------------------- Sync & usage ---------------------------- #

    async def trigger_sync(self) -> SyncResponse:
        """Queue a sync of every connected account in the family."""
        return await self._request(
            "POST",
            "/sync",
            op="sync.trigger",
            decode=SyncResponse.model_validate_json,
        )

    async def get_usage(self) -> UsageApiKeyResponse | UsageOAuthResponse:
        """Return API-key usage and rate limits, or the OAuth notice."""
        return await self._request(
            "GET",
            "/usage",
            op="usage.get",
            decode=usage_response_adapter.validate_json,
        )

    # --------------------------- Internal helpers ------------------------ #

    def _headers(self, *, has_body: bool) -> dict[str, str]:
        # Sent per request so an injected client cannot override them.
        headers: dict[str, str] = dict(_DEFAULT_HEADERS)
        if self._auth is not None:
            headers.update(self._auth.headers())
        if has_body:
            headers["Content-Type"] = "application/json"
        request_id = get_request_id()
        if request_id:
            headers["X-Request-ID"] = request_id
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        *,
        op: str,
        decode: Callable[[str], T] | None,
        params: QueryParams | None = None,
        body: dict[str, Any] | None = None,
    ) -> T:
        """Send one request and decode the response.

        Args:
            method: HTTP method.
            path: Path below ``/api/v1``.
            op: Logical operation name used for metrics and logs.
            decode: Parser for the success body, or ``None`` to ignore it.
            params: Query pairs; repeated keys are preserved in order.
            body: JSON body; ``Content-Type`` is sent only when present.

        Raises:
            SureApiError: For non-2xx responses (concrete subclass per status).
            TransportFailure: For connection errors and timeouts.
            ResponseDecodeError: If a success body does not match the model.
        """
        url = f"{self._base_url}{_API_PREFIX}{path}"
        content = json.dumps(body).encode() if body is not None else None

        with observe_sure_request(method=method, endpoint=op):
            try:
                response = await self._client.request(
                    method,
                    url,
                    params=params,
                    content=content,
                    headers=self._headers(has_body=content is not None),
                    timeout=self._timeout,
                )
            except httpx.RequestError as exc:
                raise TransportFailure(
                    str(exc) or type(exc).__name__, details={"op": op}
                ) from exc

            record_http_status(op, response.status_code)
            log.debug(
                "sure.request",
                extra={
                    "extra": {
                        "method": method,
                        "op": op,
                        "path": path,
                        "status": response.status_code,
                    }
                },
            )

            if not response.is_success:
                raise self._api_error(response, op=op)

            if decode is None:
                return None  # type: ignore[return-value]
            text = response.text
            try:
                return decode(text)
            except ValidationError as exc:
                raise ResponseDecodeError(str(exc), source=text) from exc

    @staticmethod
    def _api_error(response: httpx.Response, *, op: str) -> SureApiError:
        message, details = _error_message(response)
        error = error_for_status(response.status_code, message, details=details)
        log.warning(
            "sure.api_error",
            extra={
                "extra": {
                    "op": op,
                    "status": response.status_code,
                    "code": error.code,
                    "error": message,
                }
            },
        )
        return error
