"""Balance reconciliation: amount owed to a vendor and payment validation.

An obligation is a record with a negative amount. Paying against it appends a
new record whose amount is the remaining balance ``payment - total_owed``:
negative while something is still owed, exactly zero once settled (tagged
``paid`` instead of ``payment``).

Payments are rounded to cents before they are checked. Besides overpayments,
zero and negative payments are rejected too: a payment must reduce the
balance, never grow it.
"""

from __future__ import annotations

import datetime as dt
from decimal import Decimal

from .errors import PaymentValidationError
from .logging_setup import get_logger
from .models import (
    ActivityTag,
    Transaction,
    Transactions,
    new_transaction,
    quantize_amount,
)

_logger = get_logger("pocket_ledger.reconcile")

ZERO = Decimal("0")


def outstanding_obligations(records: Transactions) -> list[Transaction]:
    return [r for r in records if r.is_obligation]


def _matching(
    obligations: Transactions, vendor_name: str, description_fragment: str
) -> list[Transaction]:
    vendor_key = vendor_name.strip().casefold()
    fragment = description_fragment.strip().casefold()
    return [
        r
        for r in obligations
        if r.vendor.strip().casefold() == vendor_key and fragment in r.description.casefold()
    ]


def total_owed(
    obligations: Transactions, vendor_name: str, description_fragment: str
) -> Decimal:
    """Sum ``abs(amount)`` over matching obligations; ``0`` when none match.

    The vendor must match exactly (case-insensitive); the description only has
    to contain ``description_fragment`` (case-insensitive).
    """

    return sum(
        (abs(r.amount) for r in _matching(obligations, vendor_name, description_fragment)),
        ZERO,
    )


def lookup_owed(
    obligations: Transactions, vendor_name: str, description_fragment: str
) -> Decimal | None:
    """Like :func:`total_owed` but ``None`` when no obligation matches."""

    matches = _matching(obligations, vendor_name, description_fragment)
    if not matches:
        return None
    return sum((abs(r.amount) for r in matches), ZERO)


def validate_payment(owed: Decimal, payment: Decimal) -> Decimal:
    """Return the remaining balance ``payment - owed`` (always ``<= 0``).

    Both amounts are rounded to cents first, so a sub-cent payment that rounds
    to the full balance settles it with exactly ``0.00``.

    Raises
    ------
    PaymentValidationError
        When ``payment`` is not positive or exceeds ``owed``.
    """

    owed = quantize_amount(owed)
    payment = quantize_amount(payment)
    if payment <= 0:
        raise PaymentValidationError(owed, payment, "Please enter a positive payment!")
    if payment > owed:
        raise PaymentValidationError(
            owed,
            payment,
            "You have exceeded total payment amount! Please try again",
        )
    return payment - owed


def settle_payment(
    owed: Decimal,
    payment: Decimal,
    vendor: str,
    description: str,
    *,
    now: dt.datetime | None = None,
) -> Transaction:
    """Validate ``payment`` and build the record to append.

    No record is built when validation fails.
    """

    try:
        remaining = validate_payment(owed, payment)
    except PaymentValidationError:
        _logger.info("Rejected payment of %s against %s owed to %s", payment, owed, vendor)
        raise
    tag = ActivityTag.PAID if remaining == 0 else ActivityTag.PAYMENT
    return new_transaction(description, vendor, remaining, tag, now=now)


__all__ = [
    "outstanding_obligations",
    "total_owed",
    "lookup_owed",
    "validate_payment",
    "settle_payment",
]
