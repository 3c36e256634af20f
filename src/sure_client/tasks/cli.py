# Copyright (c)
# SPDX-License-Identifier: MIT
"""Sure CLI: command-line access to every client operation.

Commands:
    accounts      list | get | create | update | delete
    transactions  list | get | create | update | delete
    categories    list | get | create | update | delete
    merchants     list | get | create | update | delete
    chats         list | get | create | update | delete | message | retry
    auth          signup | login | refresh
    sync          Trigger a sync of all connected accounts.
    usage         Show API-key usage and rate limits.

Environment:
    SURE_BASE_URL   Base URL of the Sure instance (default http://localhost:3000).
    SURE_TOKEN      API key or OAuth access token.
    SURE_AUTH_MODE  ``api_key`` (default) or ``bearer``.
    LOG_LEVEL       JSON log level on stderr (default WARNING).

Results are printed to stdout as JSON. Errors are printed to stderr and the
command exits with status 1.
"""

from __future__ import annotations

import asyncio
import platform
from collections.abc import Awaitable, Callable
from datetime import date
from decimal import Decimal
from typing import Any
from uuid import UUID

import typer
from pydantic import BaseModel, SecretStr, ValidationError

from sure_client.application.schemas.dto.accounts import (
    AccountPage,
    CreateAccountData,
    UpdateAccountData,
)
from sure_client.application.schemas.dto.auth import DeviceInfo, RefreshDeviceInfo, SignupUserData
from sure_client.application.schemas.dto.categories import CreateCategoryData, UpdateCategoryData
from sure_client.application.schemas.dto.merchants import CreateMerchantData, UpdateMerchantData
from sure_client.application.schemas.dto.transactions import (
    CreateTransactionData,
    TransactionPage,
    UpdateTransactionData,
)
from sure_client.domain.enums.sure import (
    AccountKind,
    Classification,
    TransactionNature,
    TransactionType,
)
from sure_client.domain.exceptions.base import DomainError
from sure_client.domain.exceptions.parsing import ParseFailure
from sure_client.domain.services.calendar_adapters import deserialize_date
from sure_client.domain.services.numeric_normalizer import format_amount, normalize
from sure_client.infrastructure.external_apis.sure.client import SureClient
from sure_client.infrastructure.external_apis.sure.settings import SureSettings
from sure_client.infrastructure.logging.logger import (
    configure_root_logging,
    ensure_request_id,
    get_json_logger,
)

log = get_json_logger(__name__)

app = typer.Typer(add_completion=False, no_args_is_help=True)
accounts_app = typer.Typer(no_args_is_help=True, help="Manage accounts.")
transactions_app = typer.Typer(no_args_is_help=True, help="Manage transactions.")
categories_app = typer.Typer(no_args_is_help=True, help="Manage categories.")
merchants_app = typer.Typer(no_args_is_help=True, help="Manage merchants.")
chats_app = typer.Typer(no_args_is_help=True, help="Talk to the AI assistant.")
auth_app = typer.Typer(no_args_is_help=True, help="Obtain and refresh OAuth tokens.")
app.add_typer(accounts_app, name="accounts")
app.add_typer(transactions_app, name="transactions")
app.add_typer(categories_app, name="categories")
app.add_typer(merchants_app, name="merchants")
app.add_typer(chats_app, name="chats")
app.add_typer(auth_app, name="auth")

_APP_VERSION = "0.1.0"


# --------------------------------------------------------------------------- #
# Parsing and plumbing helpers                                                #
# --------------------------------------------------------------------------- #


def _parse_amount(value: str) -> Decimal:
    """Accept loosely formatted money (``"$1,234.56"``, ``"(12,50)"``)."""
    try:
        return normalize(value)
    except ParseFailure as exc:
        raise typer.BadParameter(str(exc)) from exc


def _parse_date(value: str) -> date:
    try:
        return deserialize_date(value)
    except ParseFailure as exc:
        raise typer.BadParameter(str(exc)) from exc


def _emit(result: Any) -> None:
    if isinstance(result, BaseModel):
        typer.echo(result.model_dump_json(indent=2, by_alias=True))
    elif result is not None:
        typer.echo(result)


def _run(ctx: typer.Context, call: Callable[[SureClient], Awaitable[Any]]) -> Any:
    """Run one client call to completion, mapping failures to exit status 1."""
    settings: SureSettings = ctx.obj

    async def _go() -> Any:
        async with SureClient(settings) as client:
            return await call(client)

    try:
        return asyncio.run(_go())
    except DomainError as exc:
        log.error(
            "cli.failed",
            extra={"extra": {"command": ctx.command_path, "code": exc.code}},
        )
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    except ValidationError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc


def _device(device_id: str, device_name: str) -> DeviceInfo:
    return DeviceInfo(
        device_id=device_id,
        device_name=device_name,
        device_type="cli",
        os_version=platform.platform(),
        app_version=_APP_VERSION,
    )


@app.callback()
def main(
    ctx: typer.Context,
    token: str | None = typer.Option(  # noqa: B008
        None, "--token", envvar="SURE_TOKEN", help="API key or OAuth access token."
    ),
    base_url: str | None = typer.Option(  # noqa: B008
        None, "--base-url", envvar="SURE_BASE_URL", help="Base URL of the Sure instance."
    ),
    auth_mode: str | None = typer.Option(  # noqa: B008
        None, "--auth-mode", envvar="SURE_AUTH_MODE", help="api_key or bearer."
    ),
) -> None:
    """Command-line client for the Sure personal finance API."""
    configure_root_logging()
    ensure_request_id()
    overrides: dict[str, Any] = {}
    if token is not None:
        overrides["token"] = SecretStr(token)
    if base_url is not None:
        overrides["base_url"] = base_url
    if auth_mode is not None:
        overrides["auth_mode"] = auth_mode
    try:
        ctx.obj = SureSettings(**overrides)
    except ValidationError as exc:
        typer.echo(f"Error: invalid configuration: {exc}", err=True)
        raise typer.Exit(code=1) from exc


# --------------------------------------------------------------------------- #
# Accounts                                                                    #
# --------------------------------------------------------------------------- #


@accounts_app.command("list")
def accounts_list(
    ctx: typer.Context,
    page: int = typer.Option(1, min=1),  # noqa: B008
    per_page: int = typer.Option(25, min=1),  # noqa: B008
    text: bool = typer.Option(False, "--text", help="One line per account."),  # noqa: B008
) -> None:
    result: AccountPage = _run(ctx, lambda c: c.get_accounts(page=page, per_page=per_page))
    if not text:
        _emit(result)
        return
    for account in result.accounts:
        typer.echo(
            f"{account.id}  {account.name}  {account.kind.value}  "
            f"{format_amount(account.balance)} {account.currency}"
        )
    p = result.pagination
    typer.echo(f"page {p.page}/{p.total_pages} ({p.total_count} accounts)")


@accounts_app.command("get")
def accounts_get(ctx: typer.Context, account_id: UUID) -> None:
    _emit(_run(ctx, lambda c: c.get_account(account_id)))


@accounts_app.command("create")
def accounts_create(
    ctx: typer.Context,
    name: str = typer.Option(...),  # noqa: B008
    kind: AccountKind = typer.Option(..., "--kind", help="Account type."),  # noqa: B008
    balance: Decimal | None = typer.Option(None, parser=_parse_amount),  # noqa: B008
    currency: str | None = typer.Option(None),  # noqa: B008
    subtype: str | None = typer.Option(None),  # noqa: B008
    institution_name: str | None = typer.Option(None),  # noqa: B008
    institution_domain: str | None = typer.Option(None),  # noqa: B008
    notes: str | None = typer.Option(None),  # noqa: B008
) -> None:
    data = CreateAccountData(
        name=name,
        kind=kind,
        balance=balance,
        currency=currency,
        subtype=subtype,
        institution_name=institution_name,
        institution_domain=institution_domain,
        notes=notes,
    )
    _emit(_run(ctx, lambda c: c.create_account(data)))


@accounts_app.command("update")
def accounts_update(
    ctx: typer.Context,
    account_id: UUID,
    name: str | None = typer.Option(None),  # noqa: B008
    balance: Decimal | None = typer.Option(None, parser=_parse_amount),  # noqa: B008
    subtype: str | None = typer.Option(None),  # noqa: B008
    institution_name: str | None = typer.Option(None),  # noqa: B008
    institution_domain: str | None = typer.Option(None),  # noqa: B008
    notes: str | None = typer.Option(None),  # noqa: B008
) -> None:
    data = UpdateAccountData(
        name=name,
        balance=balance,
        subtype=subtype,
        institution_name=institution_name,
        institution_domain=institution_domain,
        notes=notes,
    )
    _emit(_run(ctx, lambda c: c.update_account(account_id, data)))


@accounts_app.command("delete")
def accounts_delete(ctx: typer.Context, account_id: UUID) -> None:
    _emit(_run(ctx, lambda c: c.delete_account(account_id)))


# --------------------------------------------------------------------------- #
# Transactions                                                                #
# --------------------------------------------------------------------------- #


@transactions_app.command("list")
def transactions_list(
    ctx: typer.Context,
    page: int = typer.Option(1, min=1),  # noqa: B008
    per_page: int = typer.Option(25, min=1),  # noqa: B008
    account_id: UUID | None = typer.Option(None),  # noqa: B008
    account_ids: list[UUID] | None = typer.Option(None, "--account-ids"),  # noqa: B008
    category_id: UUID | None = typer.Option(None),  # noqa: B008
    category_ids: list[UUID] | None = typer.Option(None, "--category-ids"),  # noqa: B008
    merchant_id: UUID | None = typer.Option(None),  # noqa: B008
    merchant_ids: list[UUID] | None = typer.Option(None, "--merchant-ids"),  # noqa: B008
    tag_ids: list[UUID] | None = typer.Option(None, "--tag-ids"),  # noqa: B008
    start_date: date | None = typer.Option(None, parser=_parse_date),  # noqa: B008
    end_date: date | None = typer.Option(None, parser=_parse_date),  # noqa: B008
    min_amount: Decimal | None = typer.Option(None, parser=_parse_amount),  # noqa: B008
    max_amount: Decimal | None = typer.Option(None, parser=_parse_amount),  # noqa: B008
    transaction_type: TransactionType | None = typer.Option(None, "--type"),  # noqa: B008
    search: str | None = typer.Option(None),  # noqa: B008
    text: bool = typer.Option(False, "--text", help="One line per transaction."),  # noqa: B008
) -> None:
    """List transactions; repeat ``--account-ids`` etc. to filter on several ids."""
    result: TransactionPage = _run(
        ctx,
        lambda c: c.get_transactions(
            page=page,
            per_page=per_page,
            account_id=account_id,
            account_ids=account_ids,
            category_id=category_id,
            category_ids=category_ids,
            merchant_id=merchant_id,
            merchant_ids=merchant_ids,
            tag_ids=tag_ids,
            start_date=start_date,
            end_date=end_date,
            min_amount=min_amount,
            max_amount=max_amount,
            transaction_type=transaction_type,
            search=search,
        ),
    )
    if not text:
        _emit(result)
        return
    for tx in result.transactions:
        typer.echo(
            f"{tx.date.date().isoformat()}  {tx.name}  "
            f"{format_amount(tx.amount)} {tx.currency}  [{tx.account.name}]"
        )
    p = result.pagination
    typer.echo(f"page {p.page}/{p.total_pages} ({p.total_count} transactions)")


@transactions_app.command("get")
def transactions_get(ctx: typer.Context, transaction_id: UUID) -> None:
    _emit(_run(ctx, lambda c: c.get_transaction(transaction_id)))


@transactions_app.command("create")
def transactions_create(
    ctx: typer.Context,
    account_id: UUID = typer.Option(...),  # noqa: B008
    on: date = typer.Option(..., "--date", parser=_parse_date),  # noqa: B008
    amount: Decimal = typer.Option(..., parser=_parse_amount),  # noqa: B008
    name: str = typer.Option(...),  # noqa: B008
    notes: str | None = typer.Option(None),  # noqa: B008
    currency: str | None = typer.Option(None),  # noqa: B008
    category_id: UUID | None = typer.Option(None),  # noqa: B008
    merchant_id: UUID | None = typer.Option(None),  # noqa: B008
    nature: TransactionNature | None = typer.Option(None),  # noqa: B008
    tag_ids: list[UUID] | None = typer.Option(None, "--tag-ids"),  # noqa: B008
) -> None:
    data = CreateTransactionData(
        account_id=account_id,
        date=on,
        amount=amount,
        name=name,
        notes=notes,
        currency=currency,
        category_id=category_id,
        merchant_id=merchant_id,
        nature=nature,
        tag_ids=tag_ids or None,
    )
    _emit(_run(ctx, lambda c: c.create_transaction(data)))


@transactions_app.command("update")
def transactions_update(
    ctx: typer.Context,
    transaction_id: UUID,
    on: date | None = typer.Option(None, "--date", parser=_parse_date),  # noqa: B008
    amount: Decimal | None = typer.Option(None, parser=_parse_amount),  # noqa: B008
    name: str | None = typer.Option(None),  # noqa: B008
    notes: str | None = typer.Option(None),  # noqa: B008
    currency: str | None = typer.Option(None),  # noqa: B008
    category_id: UUID | None = typer.Option(None),  # noqa: B008
    merchant_id: UUID | None = typer.Option(None),  # noqa: B008
    nature: TransactionNature | None = typer.Option(None),  # noqa: B008
    tag_ids: list[UUID] | None = typer.Option(None, "--tag-ids"),  # noqa: B008
) -> None:
    data = UpdateTransactionData(
        date=on,
        amount=amount,
        name=name,
        notes=notes,
        currency=currency,
        category_id=category_id,
        merchant_id=merchant_id,
        nature=nature,
        tag_ids=tag_ids or None,
    )
    _emit(_run(ctx, lambda c: c.update_transaction(transaction_id, data)))


@transactions_app.command("delete")
def transactions_delete(ctx: typer.Context, transaction_id: UUID) -> None:
    _emit(_run(ctx, lambda c: c.delete_transaction(transaction_id)))


# --------------------------------------------------------------------------- #
# Categories                                                                  #
# --------------------------------------------------------------------------- #


@categories_app.command("list")
def categories_list(
    ctx: typer.Context,
    page: int = typer.Option(1, min=1),  # noqa: B008
    per_page: int = typer.Option(25, min=1),  # noqa: B008
    roots_only: bool = typer.Option(False, "--roots-only"),  # noqa: B008
    classification: Classification | None = typer.Option(None),  # noqa: B008
    parent_id: UUID | None = typer.Option(None),  # noqa: B008
) -> None:
    _emit(
        _run(
            ctx,
            lambda c: c.get_categories(
                page=page,
                per_page=per_page,
                roots_only=roots_only,
                classification=classification,
                parent_id=parent_id,
            ),
        )
    )


@categories_app.command("get")
def categories_get(ctx: typer.Context, category_id: UUID) -> None:
    _emit(_run(ctx, lambda c: c.get_category(category_id)))


@categories_app.command("create")
def categories_create(
    ctx: typer.Context,
    name: str = typer.Option(...),  # noqa: B008
    classification: Classification = typer.Option(...),  # noqa: B008
    color: str = typer.Option(..., help="Hex color, e.g. #4F46E5."),  # noqa: B008
    icon: str | None = typer.Option(None, help="Lucide icon name."),  # noqa: B008
    parent_id: UUID | None = typer.Option(None),  # noqa: B008
) -> None:
    data = CreateCategoryData(
        name=name,
        classification=classification,
        color=color,
        lucide_icon=icon,
        parent_id=parent_id,
    )
    _emit(_run(ctx, lambda c: c.create_category(data)))


@categories_app.command("update")
def categories_update(
    ctx: typer.Context,
    category_id: UUID,
    name: str | None = typer.Option(None),  # noqa: B008
    classification: Classification | None = typer.Option(None),  # noqa: B008
    color: str | None = typer.Option(None),  # noqa: B008
    icon: str | None = typer.Option(None),  # noqa: B008
    parent_id: UUID | None = typer.Option(None),  # noqa: B008
) -> None:
    data = UpdateCategoryData(
        name=name,
        classification=classification,
        color=color,
        lucide_icon=icon,
        parent_id=parent_id,
    )
    _emit(_run(ctx, lambda c: c.update_category(category_id, data)))


@categories_app.command("delete")
def categories_delete(ctx: typer.Context, category_id: UUID) -> None:
    _emit(_run(ctx, lambda c: c.delete_category(category_id)))


# --------------------------------------------------------------------------- #
# Merchants                                                                   #
# --------------------------------------------------------------------------- #


@merchants_app.command("list")
def merchants_list(
    ctx: typer.Context,
    page: int = typer.Option(1, min=1),  # noqa: B008
    per_page: int = typer.Option(25, min=1),  # noqa: B008
) -> None:
    _emit(_run(ctx, lambda c: c.get_merchants(page=page, per_page=per_page)))


@merchants_app.command("get")
def merchants_get(ctx: typer.Context, merchant_id: UUID) -> None:
    _emit(_run(ctx, lambda c: c.get_merchant(merchant_id)))


@merchants_app.command("create")
def merchants_create(
    ctx: typer.Context,
    name: str = typer.Option(...),  # noqa: B008
    color: str | None = typer.Option(None),  # noqa: B008
) -> None:
    data = CreateMerchantData(name=name, color=color)
    _emit(_run(ctx, lambda c: c.create_merchant(data)))


@merchants_app.command("update")
def merchants_update(
    ctx: typer.Context,
    merchant_id: UUID,
    name: str | None = typer.Option(None),  # noqa: B008
    color: str | None = typer.Option(None),  # noqa: B008
) -> None:
    data = UpdateMerchantData(name=name, color=color)
    _emit(_run(ctx, lambda c: c.update_merchant(merchant_id, data)))


@merchants_app.command("delete")
def merchants_delete(ctx: typer.Context, merchant_id: UUID) -> None:
    _emit(_run(ctx, lambda c: c.delete_merchant(merchant_id)))


# --------------------------------------------------------------------------- #
# Chats                                                                       #
# --------------------------------------------------------------------------- #


@chats_app.command("list")
def chats_list(
    ctx: typer.Context,
    page: int = typer.Option(1, min=1),  # noqa: B008
    per_page: int = typer.Option(25, min=1),  # noqa: B008
) -> None:
    _emit(_run(ctx, lambda c: c.get_chats(page=page, per_page=per_page)))


@chats_app.command("get")
def chats_get(ctx: typer.Context, chat_id: UUID) -> None:
    _emit(_run(ctx, lambda c: c.get_chat(chat_id)))


@chats_app.command("create")
def chats_create(
    ctx: typer.Context,
    title: str = typer.Option(...),  # noqa: B008
    message: str | None = typer.Option(None, help="First user message."),  # noqa: B008
    model: str | None = typer.Option(None),  # noqa: B008
) -> None:
    _emit(_run(ctx, lambda c: c.create_chat(title, message=message, model=model)))


@chats_app.command("update")
def chats_update(
    ctx: typer.Context,
    chat_id: UUID,
    title: str = typer.Option(...),  # noqa: B008
) -> None:
    _emit(_run(ctx, lambda c: c.update_chat(chat_id, title)))


@chats_app.command("delete")
def chats_delete(ctx: typer.Context, chat_id: UUID) -> None:
    _run(ctx, lambda c: c.delete_chat(chat_id))
    typer.echo(f"Chat {chat_id} deleted")


@chats_app.command("message")
def chats_message(
    ctx: typer.Context,
    chat_id: UUID,
    content: str = typer.Option(...),  # noqa: B008
    model: str | None = typer.Option(None),  # noqa: B008
) -> None:
    _emit(_run(ctx, lambda c: c.create_message(chat_id, content, model=model)))


@chats_app.command("retry")
def chats_retry(ctx: typer.Context, chat_id: UUID) -> None:
    _emit(_run(ctx, lambda c: c.retry_message(chat_id)))


# --------------------------------------------------------------------------- #
# Auth                                                                        #
# --------------------------------------------------------------------------- #


@auth_app.command("signup")
def auth_signup(
    ctx: typer.Context,
    email: str = typer.Option(...),  # noqa: B008
    password: str = typer.Option(..., prompt=True, hide_input=True),  # noqa: B008
    first_name: str = typer.Option(...),  # noqa: B008
    last_name: str = typer.Option(...),  # noqa: B008
    invite_code: str | None = typer.Option(None),  # noqa: B008
    device_id: str = typer.Option("sure-cli"),  # noqa: B008
    device_name: str = typer.Option("Sure CLI"),  # noqa: B008
) -> None:
    user = SignupUserData(
        email=email,
        password=SecretStr(password),
        first_name=first_name,
        last_name=last_name,
    )
    device = _device(device_id, device_name)
    _emit(_run(ctx, lambda c: c.signup(user, device, invite_code=invite_code)))


@auth_app.command("login")
def auth_login(
    ctx: typer.Context,
    email: str = typer.Option(...),  # noqa: B008
    password: str = typer.Option(..., prompt=True, hide_input=True),  # noqa: B008
    otp_code: str | None = typer.Option(None, "--otp", help="One-time code, if MFA is on."),  # noqa: B008
    device_id: str = typer.Option("sure-cli"),  # noqa: B008
    device_name: str = typer.Option("Sure CLI"),  # noqa: B008
) -> None:
    device = _device(device_id, device_name)
    _emit(_run(ctx, lambda c: c.login(email, password, device, otp_code=otp_code)))


@auth_app.command("refresh")
def auth_refresh(
    ctx: typer.Context,
    refresh_token: str = typer.Option(...),  # noqa: B008
    device_id: str = typer.Option("sure-cli"),  # noqa: B008
) -> None:
    device = RefreshDeviceInfo(device_id=device_id)
    _emit(_run(ctx, lambda c: c.refresh_token(refresh_token, device)))


# --------------------------------------------------------------------------- #
# Sync & usage                                                                #
# --------------------------------------------------------------------------- #


@app.command("sync")
def sync(ctx: typer.Context) -> None:
    """Trigger a sync of all connected accounts."""
    _emit(_run(ctx, lambda c: c.trigger_sync()))


@app.command("usage")
def usage(ctx: typer.Context) -> None:
    """Show API-key usage and rate limits."""
    _emit(_run(ctx, lambda c: c.get_usage()))


if __name__ == "__main__":  # pragma: no cover
    app()
