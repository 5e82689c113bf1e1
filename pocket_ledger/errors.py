"""Exception types raised by the ledger core.

None of these are fatal to the interactive application: parse and payment
errors drive a re-prompt, and a missing ledger file degrades to an empty
working set. "Not found" results are returned as ``None`` rather than raised.
"""

from __future__ import annotations

from decimal import Decimal


class LedgerError(Exception):
    """Base class for ledger errors."""


class ParseError(LedgerError, ValueError):
    """A raw date or amount input could not be parsed."""

    def __init__(self, field: str, raw: str, reason: str | None = None) -> None:
        self.field = field
        self.raw = raw
        self.reason = reason or f"invalid {field}: {raw!r}"
        super().__init__(self.reason)


class StorageUnavailable(LedgerError):
    """The backing ledger file is missing or cannot be read."""

    def __init__(self, path: str, reason: str | None = None) -> None:
        self.path = path
        super().__init__(reason or f"ledger file unavailable: {path}")


class PaymentValidationError(LedgerError, ValueError):
    """A proposed payment was rejected against the amount owed."""

    def __init__(self, total_owed: Decimal, payment: Decimal, reason: str) -> None:
        self.total_owed = total_owed
        self.payment = payment
        super().__init__(reason)


__all__ = [
    "LedgerError",
    "ParseError",
    "StorageUnavailable",
    "PaymentValidationError",
]
