"""Public interface for the ``pocket_ledger`` package.

This module exposes the ledger core (reports, custom search, vendor index,
balance reconciliation, record store) and its models as the stable import
surface. There is no runtime logic here, only symbol re-exports.
"""

from .errors import LedgerError, ParseError, PaymentValidationError, StorageUnavailable
from .filters import (
    ReportPeriod,
    SearchField,
    apply_criterion,
    custom_search,
    month_to_date,
    period_bounds,
    previous_month,
    previous_year,
    report,
    year_to_date,
)
from .ledger import LedgerView, deposits, load_working_set, newest_first, payments
from .models import ActivityTag, Transaction, Transactions, new_transaction
from .reconcile import (
    lookup_owed,
    outstanding_obligations,
    settle_payment,
    total_owed,
    validate_payment,
)
from .store import RecordStore
from .vendors import find_vendor, group_by_vendor

__all__ = [
    # Reports / search
    "ReportPeriod",
    "SearchField",
    "period_bounds",
    "report",
    "month_to_date",
    "previous_month",
    "year_to_date",
    "previous_year",
    "apply_criterion",
    "custom_search",
    # Vendors
    "group_by_vendor",
    "find_vendor",
    # Reconciliation
    "outstanding_obligations",
    "total_owed",
    "lookup_owed",
    "validate_payment",
    "settle_payment",
    # Ledger / storage
    "LedgerView",
    "RecordStore",
    "load_working_set",
    "newest_first",
    "deposits",
    "payments",
    # Models / types
    "ActivityTag",
    "Transaction",
    "Transactions",
    "new_transaction",
    # Errors
    "LedgerError",
    "ParseError",
    "StorageUnavailable",
    "PaymentValidationError",
]
