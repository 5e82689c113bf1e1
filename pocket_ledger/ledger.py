"""Ledger views over a working set.

The working set is always a plain list owned by the caller and rebuilt with
:func:`load_working_set` whenever a view is entered.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Protocol

from .errors import StorageUnavailable
from .logging_setup import get_logger
from .models import Transaction, Transactions

_logger = get_logger("pocket_ledger.ledger")


class RecordSource(Protocol):
    def load(self) -> list[Transaction]: ...


class LedgerView(StrEnum):
    ALL = "all"
    DEPOSITS = "deposits"
    PAYMENTS = "payments"


def load_working_set(store: RecordSource) -> list[Transaction]:
    """Full reload; an unavailable store yields an empty working set."""

    try:
        return store.load()
    except StorageUnavailable as e:
        _logger.warning("%s; continuing with an empty ledger", e)
        return []


def newest_first(records: Transactions) -> list[Transaction]:
    # Stable: same-day records keep file order.
    return sorted(records, key=lambda r: r.date, reverse=True)


def deposits(records: Transactions) -> list[Transaction]:
    return [r for r in records if r.is_deposit]


def payments(records: Transactions) -> list[Transaction]:
    """Outstanding obligations and settled payments (amount <= 0)."""

    return [r for r in records if not r.is_deposit]


def select_view(records: Transactions, view: LedgerView | str) -> list[Transaction]:
    view = LedgerView(view)
    if view is LedgerView.DEPOSITS:
        return deposits(records)
    if view is LedgerView.PAYMENTS:
        return payments(records)
    return list(records)


__all__ = [
    "RecordSource",
    "LedgerView",
    "load_working_set",
    "newest_first",
    "deposits",
    "payments",
    "select_view",
]
