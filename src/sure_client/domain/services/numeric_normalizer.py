# Copyright (c)
# SPDX-License-Identifier: MIT
"""Numeric-text normalizer for monetary amounts.

Purpose:
    Convert loosely formatted amounts received from the API (or typed by a
    user on the command line) into exact :class:`decimal.Decimal` values.

Accepted token shapes:
    * ``int``: converted directly.
    * ``float``: converted through its shortest round-trip text; NaN and
      infinities are rejected.
    * ``None``: zero.
    * ``str``: currency symbols, whitespace, thousands separators, accounting
      parentheses, and either ``.`` or ``,`` as the decimal separator, e.g.
      ``"$1,234.56"``, ``"(123.45)"``, ``"1.234,56"``, ``"€ 5 000,50"``.

Separator disambiguation:
    * Both ``.`` and ``,`` present: whichever occurs last is the decimal
      separator; every occurrence of the other one is a thousands separator.
    * Only one of them present: it is a decimal separator only when it occurs
      exactly once *and* sits within the last three characters of the cleaned
      text. ``"1,000"`` is therefore one thousand, ``"1,50"`` is 1.50.

Layer:
    domain/services
"""

from __future__ import annotations

import math
from decimal import Decimal, InvalidOperation
from typing import Final

from sure_client.domain.exceptions.parsing import ParseFailure
from sure_client.types import JsonValue

__all__ = ["format_amount", "normalize", "plain_text"]

_SEPARATORS: Final[frozenset[str]] = frozenset(".,")
_ZERO: Final[Decimal] = Decimal(0)
_CENTS: Final[Decimal] = Decimal("0.01")


def normalize(token: JsonValue) -> Decimal:
    """Normalize a raw numeric token into an exact decimal.

    Args:
        token: JSON scalar as received on the wire (string, number, or null).

    Returns:
        The exact decimal value. ``None`` yields ``Decimal(0)``.

    Raises:
        ParseFailure: If the token is not a supported shape or its text holds
            no parseable number.
    """
    if token is None:
        return _ZERO
    # bool is an int subclass but never a monetary amount.
    if isinstance(token, bool):
        raise ParseFailure(token, "boolean is not a numeric amount")
    if isinstance(token, int):
        return Decimal(token)
    if isinstance(token, float):
        return _from_float(token)
    if isinstance(token, str):
        return _from_text(token)
    raise ParseFailure(token, f"unsupported numeric token type {type(token).__name__}")


def plain_text(value: Decimal) -> str:
    """Render a decimal positionally, never in exponent notation.

    ``str(Decimal("1E-7"))`` is ``"1E-7"``, which the string path would read
    as seventeen; ``plain_text`` gives ``"0.0000001"``.
    """
    return format(value, "f")


def format_amount(value: Decimal, *, currency_symbol: str = "$") -> str:
    """Render a decimal as a human-readable amount.

    Examples:
        >>> format_amount(Decimal("1234567.891"))
        '$1,234,567.89'
        >>> format_amount(Decimal("-5"), currency_symbol="€")
        '-€5.00'
    """
    amount = value.quantize(_CENTS)
    if amount < 0:
        return f"-{currency_symbol}{abs(amount):,.2f}"
    return f"{currency_symbol}{amount:,.2f}"


def _from_float(value: float) -> Decimal:
    """Convert a float through its shortest round-trip representation."""
    if not math.isfinite(value):
        raise ParseFailure(value, "non-finite number has no decimal representation")
    # repr() may use exponent notation ("1e+20"). Rebuilding from the "f"
    # rendering clears positive exponents only; str() of tiny values is still
    # "1E-7", so wire output goes through plain_text().
    return Decimal(format(Decimal(repr(value)), "f"))


def _from_text(raw: str) -> Decimal:
    """Run the separator-disambiguation algorithm over a string token."""
    text = raw.strip()
    if not text:
        raise ParseFailure(raw, "empty numeric string")

    negative = False
    if text.startswith("(") and text.endswith(")"):
        negative = True
        text = text[1:-1]
    elif text.startswith("-"):
        negative = True

    cleaned = "".join(ch for ch in text if ch.isascii() and (ch.isdigit() or ch in _SEPARATORS))
    if not any(ch.isdigit() for ch in cleaned):
        raise ParseFailure(raw, "no digits in numeric string")

    decimal_sep = _decimal_separator(cleaned)
    if decimal_sep is None:
        body = _digits(cleaned)
    else:
        split_at = cleaned.rfind(decimal_sep)
        body = f"{_digits(cleaned[:split_at])}.{_digits(cleaned[split_at + 1 :])}"

    if body.startswith("."):
        body = f"0{body}"
    if negative:
        body = f"-{body}"

    try:
        return Decimal(body)
    except InvalidOperation as exc:
        raise ParseFailure(raw, "unparseable numeric string") from exc


def _decimal_separator(cleaned: str) -> str | None:
    """Return the character acting as decimal separator, if any.

    Args:
        cleaned: Text holding only ASCII digits, ``.`` and ``,``.

    Returns:
        ``"."``, ``","``, or ``None`` when every separator groups thousands.
    """
    last_dot = cleaned.rfind(".")
    last_comma = cleaned.rfind(",")

    if last_dot >= 0 and last_comma >= 0:
        return "." if last_dot > last_comma else ","
    if last_comma >= 0:
        return "," if _is_single_trailing(cleaned, ",", last_comma) else None
    if last_dot >= 0:
        return "." if _is_single_trailing(cleaned, ".", last_dot) else None
    return None


def _is_single_trailing(cleaned: str, sep: str, index: int) -> bool:
    """True when ``sep`` occurs once and within the final three characters."""
    return cleaned.count(sep) == 1 and len(cleaned) - index <= 3


def _digits(text: str) -> str:
    return "".join(ch for ch in text if ch.isdigit())
