"""Data models and type aliases for ``pocket_ledger``.

A :class:`Transaction` is the single record type of the ledger. Records are
immutable: a payment against an obligation is a *new* record, never an edit of
the original one. The sign of ``amount`` is the only classifier used by the
core (positive = deposit, negative = outstanding obligation, zero = settled).
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

CENT = Decimal("0.01")
# Thirteen integer digits plus cents; larger values cannot be rounded to cents.
AMOUNT_MAX_DIGITS = 15
TIME_FORMAT = "%H:%M:%S"


class ActivityTag(StrEnum):
    """Trailing word appended to a stored description."""

    DEPOSIT = "deposit"
    PAYMENT = "payment"
    PAID = "paid"


@dataclass(frozen=True, slots=True)
class Transaction:
    """One ledger row.

    Attributes
    ----------
    date:
        Calendar date of the entry (no time zone).
    time:
        Wall-clock time of entry as ``HH:MM:SS``.
    description:
        Free text; by convention ends with an :class:`ActivityTag` word.
    vendor:
        Counterparty name. Matching is case-insensitive.
    amount:
        Signed amount. Positive money received, negative money owed, zero
        for a settled payment.
    """

    date: dt.date
    time: str
    description: str
    vendor: str
    amount: Decimal

    @property
    def is_deposit(self) -> bool:
        return self.amount > 0

    @property
    def is_obligation(self) -> bool:
        return self.amount < 0

    @property
    def is_settled(self) -> bool:
        return self.amount == 0


type Transactions = Iterable[Transaction]
"""Any iterable of records; functions materialize it once when needed."""

type WorkingSet = Sequence[Transaction]
"""The caller-owned in-memory collection rebuilt on each full reload."""


def quantize_amount(value: Decimal) -> Decimal:
    """Round to exactly two decimals (half-up)."""

    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def tagged_description(description: str, tag: ActivityTag | str) -> str:
    return f"{description.strip()} {ActivityTag(tag).value}".strip()


def new_transaction(
    description: str,
    vendor: str,
    amount: Decimal,
    tag: ActivityTag | str,
    *,
    now: dt.datetime | None = None,
) -> Transaction:
    """Build a record stamped with ``now`` (local time, second precision)."""

    stamp = (now or dt.datetime.now()).replace(microsecond=0)
    return Transaction(
        date=stamp.date(),
        time=stamp.strftime(TIME_FORMAT),
        description=tagged_description(description, tag),
        vendor=vendor.strip(),
        amount=quantize_amount(Decimal(amount)),
    )


class StoredRow(BaseModel):
    """Validated view of the five fields of one stored ledger line."""

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True, frozen=True)

    date: dt.date
    # Older files carry ``HH:MM`` when the seconds were zero.
    time: str = Field(pattern=r"^\d{2}:\d{2}(:\d{2})?$")
    description: str
    vendor: str
    amount: Decimal = Field(
        allow_inf_nan=False, max_digits=AMOUNT_MAX_DIGITS, decimal_places=2
    )

    @classmethod
    def from_fields(cls, fields: Sequence[str]) -> StoredRow:
        date_raw, time_raw, description, vendor, amount_raw = fields
        return cls(
            date=date_raw.strip(),
            time=time_raw,
            description=description,
            vendor=vendor,
            amount=amount_raw.strip(),
        )

    def to_transaction(self) -> Transaction:
        return Transaction(
            date=self.date,
            time=self.time,
            description=self.description,
            vendor=self.vendor,
            amount=self.amount,
        )


__all__ = [
    "AMOUNT_MAX_DIGITS",
    "ActivityTag",
    "Transaction",
    "Transactions",
    "WorkingSet",
    "StoredRow",
    "quantize_amount",
    "tagged_description",
    "new_transaction",
]
