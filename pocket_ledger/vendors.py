"""Vendor index: records bucketed by normalized vendor name."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Mapping

from .models import Transaction, Transactions

type VendorIndex = Mapping[str, list[Transaction]]


def normalize_vendor(name: str) -> str:
    """Bucket key for a vendor: trimmed and upper-cased."""

    return name.strip().upper()


def group_by_vendor(records: Transactions) -> dict[str, list[Transaction]]:
    """Map each normalized vendor to its records, in input order.

    Every input record lands in exactly one bucket.
    """

    buckets: defaultdict[str, list[Transaction]] = defaultdict(list)
    for record in records:
        buckets[normalize_vendor(record.vendor)].append(record)
    return dict(buckets)


def find_vendor(index: VendorIndex, query: str) -> list[Transaction] | None:
    """Return the bucket for ``query`` or ``None`` when no such vendor exists."""

    bucket = index.get(normalize_vendor(query))
    if bucket is None:
        return None
    return list(bucket)


def vendor_names(index: VendorIndex) -> list[str]:
    return sorted(index)


__all__ = [
    "VendorIndex",
    "normalize_vendor",
    "group_by_vendor",
    "find_vendor",
    "vendor_names",
]
