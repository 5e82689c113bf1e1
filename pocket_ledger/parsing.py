"""Pure validators for raw text typed at a prompt.

Each ``validate_*`` helper returns a :class:`FieldValidation` instead of
raising, so an outer I/O loop can decide whether to re-prompt. The matching
``parse_*`` helpers raise :class:`~pocket_ledger.errors.ParseError` and are
what the filter engine uses internally.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any

from .errors import ParseError
from .models import AMOUNT_MAX_DIGITS, quantize_amount

DATE_FORMAT = "%Y-%m-%d"


@dataclass(frozen=True, slots=True)
class FieldValidation:
    ok: bool
    value: Any = None
    reason: str | None = None


def is_blank(raw: str | None) -> bool:
    return raw is None or not raw.strip()


def parse_date(raw: str, *, field: str = "date") -> dt.date:
    """Parse an ISO calendar date (``YYYY-MM-DD``)."""

    s = (raw or "").strip()
    try:
        return dt.datetime.strptime(s, DATE_FORMAT).date()
    except ValueError as exc:
        raise ParseError(field, raw, f"Invalid date {raw!r}; expected YYYY-MM-DD") from exc


def parse_amount(raw: str, *, field: str = "amount") -> Decimal:
    """Parse a decimal amount, tolerating a leading ``$`` and thousands commas.

    Amounts whose cent-rounded form needs more than :data:`AMOUNT_MAX_DIGITS`
    digits are rejected, so every accepted value can be stored.
    """

    s = (raw or "").strip()
    negative = s.startswith("-")
    if negative or s.startswith("+"):
        s = s[1:].lstrip()
    if s.startswith("$"):
        s = s[1:].lstrip()
    s = s.replace(",", "")
    try:
        value = Decimal(s)
    except InvalidOperation as exc:
        raise ParseError(field, raw, f"Invalid amount {raw!r}; enter a number") from exc
    if not value.is_finite():
        raise ParseError(field, raw, f"Invalid amount {raw!r}; enter a number")
    try:
        cents = quantize_amount(value)
    except InvalidOperation as exc:
        raise ParseError(field, raw, f"Amount {raw!r} is too large") from exc
    if len(cents.as_tuple().digits) > AMOUNT_MAX_DIGITS:
        raise ParseError(field, raw, f"Amount {raw!r} is too large")
    return -value if negative else value


def validate_date(raw: str | None, *, allow_blank: bool = True) -> FieldValidation:
    if is_blank(raw):
        if allow_blank:
            return FieldValidation(True, None)
        return FieldValidation(False, None, "A date is required")
    try:
        return FieldValidation(True, parse_date(raw or ""))
    except ParseError as e:
        return FieldValidation(False, None, e.reason)


def validate_amount(
    raw: str | None, *, allow_blank: bool = True, positive: bool = False
) -> FieldValidation:
    if is_blank(raw):
        if allow_blank:
            return FieldValidation(True, None)
        return FieldValidation(False, None, "An amount is required")
    try:
        value = parse_amount(raw or "")
    except ParseError as e:
        return FieldValidation(False, None, e.reason)
    if positive and value <= 0:
        return FieldValidation(False, None, "Please enter a positive amount!")
    return FieldValidation(True, value)


__all__ = [
    "DATE_FORMAT",
    "FieldValidation",
    "is_blank",
    "parse_date",
    "parse_amount",
    "validate_date",
    "validate_amount",
]
