"""Date-range reports and the incremental custom search.

All functions are pure: they take the caller's working set and return a new
list, preserving input order. ``today`` is injectable everywhere so reports
can be computed for any reference date.

Date ranges are closed intervals (``start <= d <= end``); a record dated on
either endpoint is always included.

Custom search
-------------
``custom_search`` folds a set of ``(SearchField, raw_text)`` criteria over the
records in a fixed order (start date, end date, description, vendor, amount).
Each step filters the output of the previous one, which yields AND semantics
across the non-empty fields. Blank input for a field passes every record
through.
"""

from __future__ import annotations

import calendar
import datetime as dt
from collections.abc import Iterable, Mapping
from decimal import Decimal
from enum import Enum, StrEnum

from .models import CENT, Transaction, Transactions
from .parsing import (
    FieldValidation,
    is_blank,
    parse_amount,
    parse_date,
    validate_amount,
    validate_date,
)


class ReportPeriod(StrEnum):
    MONTH_TO_DATE = "month-to-date"
    PREVIOUS_MONTH = "previous-month"
    YEAR_TO_DATE = "year-to-date"
    PREVIOUS_YEAR = "previous-year"


class SearchField(Enum):
    """Custom-search fields in the order they are applied."""

    START_DATE = "start date"
    END_DATE = "end date"
    DESCRIPTION = "description"
    VENDOR = "vendor"
    AMOUNT = "amount"


SEARCH_ORDER: tuple[SearchField, ...] = tuple(SearchField)

# Amounts closer than one cent are the same amount.
AMOUNT_TOLERANCE = CENT


# ----------------------------------------------------------------------------
# Period bounds
# ----------------------------------------------------------------------------


def _today(today: dt.date | None) -> dt.date:
    return today if today is not None else dt.date.today()


def first_day_of_month(d: dt.date) -> dt.date:
    return d.replace(day=1)


def last_day_of_month(d: dt.date) -> dt.date:
    return d.replace(day=calendar.monthrange(d.year, d.month)[1])


def period_bounds(
    period: ReportPeriod | str, *, today: dt.date | None = None
) -> tuple[dt.date, dt.date]:
    """Return the inclusive ``(start, end)`` pair for ``period``."""

    ref = _today(today)
    period = ReportPeriod(period)
    if period is ReportPeriod.MONTH_TO_DATE:
        return first_day_of_month(ref), ref
    if period is ReportPeriod.PREVIOUS_MONTH:
        # Day 1 of this month minus one day lands in the previous month,
        # including December of the prior year when ``ref`` is in January.
        prev = first_day_of_month(ref) - dt.timedelta(days=1)
        return first_day_of_month(prev), last_day_of_month(prev)
    if period is ReportPeriod.YEAR_TO_DATE:
        return dt.date(ref.year, 1, 1), ref
    return dt.date(ref.year - 1, 1, 1), dt.date(ref.year - 1, 12, 31)


def within(records: Transactions, start: dt.date, end: dt.date) -> list[Transaction]:
    """Records dated in ``[start, end]`` inclusive."""

    return [r for r in records if start <= r.date <= end]


def report(
    records: Transactions, period: ReportPeriod | str, *, today: dt.date | None = None
) -> list[Transaction]:
    start, end = period_bounds(period, today=today)
    return within(records, start, end)


def month_to_date(records: Transactions, *, today: dt.date | None = None) -> list[Transaction]:
    return report(records, ReportPeriod.MONTH_TO_DATE, today=today)


def previous_month(records: Transactions, *, today: dt.date | None = None) -> list[Transaction]:
    return report(records, ReportPeriod.PREVIOUS_MONTH, today=today)


def year_to_date(records: Transactions, *, today: dt.date | None = None) -> list[Transaction]:
    return report(records, ReportPeriod.YEAR_TO_DATE, today=today)


def previous_year(records: Transactions, *, today: dt.date | None = None) -> list[Transaction]:
    return report(records, ReportPeriod.PREVIOUS_YEAR, today=today)


# ----------------------------------------------------------------------------
# Custom search
# ----------------------------------------------------------------------------


def _contains(haystack: str, needle: str) -> bool:
    return needle.casefold() in haystack.casefold()


def validate_criterion(field: SearchField, raw: str | None) -> FieldValidation:
    """Check one raw input without filtering anything.

    Text fields always validate; blank input is valid for every field.
    """

    if field in (SearchField.START_DATE, SearchField.END_DATE):
        return validate_date(raw)
    if field is SearchField.AMOUNT:
        return validate_amount(raw)
    return FieldValidation(True, None if is_blank(raw) else (raw or "").strip())


def apply_criterion(
    records: Transactions, field: SearchField, raw: str | None
) -> list[Transaction]:
    """Filter ``records`` by a single field.

    Raises
    ------
    ParseError
        When a date or amount field holds non-blank text that does not parse.
    """

    items = list(records)
    if is_blank(raw):
        return items
    text = (raw or "").strip()

    if field is SearchField.START_DATE:
        start = parse_date(text, field=field.value)
        return [r for r in items if r.date >= start]
    if field is SearchField.END_DATE:
        end = parse_date(text, field=field.value)
        return [r for r in items if r.date <= end]
    if field is SearchField.DESCRIPTION:
        return [r for r in items if _contains(r.description, text)]
    if field is SearchField.VENDOR:
        return [r for r in items if _contains(r.vendor, text)]

    target: Decimal = parse_amount(text, field=field.value)
    return [r for r in items if abs(r.amount - target) < AMOUNT_TOLERANCE]


def custom_search(
    records: Transactions,
    criteria: Mapping[SearchField, str | None] | Iterable[tuple[SearchField, str | None]],
) -> list[Transaction]:
    """Apply every criterion in :data:`SEARCH_ORDER`, each over the previous result.

    ``criteria`` may omit fields; an omitted field behaves like blank input.
    When the same field is given more than once, the last value wins.
    """

    by_field = dict(criteria.items() if isinstance(criteria, Mapping) else criteria)
    result = list(records)
    for field in SEARCH_ORDER:
        result = apply_criterion(result, field, by_field.get(field))
    return result


__all__ = [
    "ReportPeriod",
    "SearchField",
    "SEARCH_ORDER",
    "AMOUNT_TOLERANCE",
    "first_day_of_month",
    "last_day_of_month",
    "period_bounds",
    "within",
    "report",
    "month_to_date",
    "previous_month",
    "year_to_date",
    "previous_year",
    "validate_criterion",
    "apply_criterion",
    "custom_search",
]
