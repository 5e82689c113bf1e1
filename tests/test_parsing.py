from __future__ import annotations

import datetime as dt
from decimal import Decimal

import pytest

from pocket_ledger.errors import ParseError
from pocket_ledger.models import ActivityTag, new_transaction
from pocket_ledger.parsing import parse_amount, parse_date, validate_amount, validate_date


def test_parse_date_accepts_iso_only():
    assert parse_date(" 2024-02-29 ") == dt.date(2024, 2, 29)
    with pytest.raises(ParseError):
        parse_date("2023-02-29")
    with pytest.raises(ParseError):
        parse_date("02/03/2024")


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("12", Decimal("12")),
        ("12.345", Decimal("12.345")),
        ("$1,234.50", Decimal("1234.50")),
        ("-$5", Decimal("-5")),
        ("+7.1", Decimal("7.1")),
    ],
)
def test_parse_amount(raw, expected):
    assert parse_amount(raw) == expected


@pytest.mark.parametrize("raw", ["", "abc", "1.2.3", "NaN", "Infinity"])
def test_parse_amount_rejects_non_numbers(raw):
    with pytest.raises(ParseError):
        parse_amount(raw)


def test_validate_helpers_return_reasons():
    assert validate_date("").ok
    assert not validate_date("", allow_blank=False).ok
    assert validate_date("2024-01-01").value == dt.date(2024, 1, 1)

    check = validate_amount("-3", positive=True)
    assert not check.ok
    assert check.reason == "Please enter a positive amount!"
    assert validate_amount("3", positive=True, allow_blank=False).value == Decimal("3")
    assert validate_amount("x").reason is not None


def test_new_transaction_tags_and_rounds():
    now = dt.datetime(2024, 5, 6, 7, 8, 9, 999)
    rec = new_transaction(" rent ", " Landlord ", Decimal("10.005"), ActivityTag.DEPOSIT, now=now)
    assert rec.description == "rent deposit"
    assert rec.vendor == "Landlord"
    assert rec.amount == Decimal("10.01")
    assert (rec.date, rec.time) == (dt.date(2024, 5, 6), "07:08:09")
    assert rec.is_deposit and not rec.is_obligation


@pytest.mark.parametrize("raw", ["1e30", "12345678901234", "-99999999999999.5"])
def test_parse_amount_rejects_amounts_too_large_to_store(raw):
    with pytest.raises(ParseError, match="too large"):
        parse_amount(raw)


def test_parse_amount_accepts_largest_storable_amount():
    assert parse_amount("9,999,999,999,999.99") == Decimal("9999999999999.99")
    assert not validate_amount("1e30", positive=True).ok
