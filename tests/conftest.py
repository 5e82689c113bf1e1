"""Pytest configuration for test isolation.

The application resolves its ledger file from ``POCKET_LEDGER_FILE`` and falls
back to ``./data/transactions.csv`` under the working directory. Tests must
never touch a real ledger, so an autouse fixture points the variable at a
per-test temporary file.
"""

from __future__ import annotations

import datetime as dt
import os
from decimal import Decimal
from pathlib import Path

import pytest

from pocket_ledger.models import Transaction


@pytest.fixture(autouse=True)
def ledger_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Force a per-test ledger path so tests don't share on-disk state."""

    path = tmp_path / "data" / "transactions.csv"
    monkeypatch.setenv("POCKET_LEDGER_FILE", os.fspath(path))
    monkeypatch.delenv("POCKET_LEDGER_LOG_LEVEL", raising=False)
    return path


def _make_tx(
    date: str,
    vendor: str,
    amount: str,
    description: str = "item",
    time: str = "10:00:00",
) -> Transaction:
    return Transaction(
        date=dt.date.fromisoformat(date),
        time=time,
        description=description,
        vendor=vendor,
        amount=Decimal(amount),
    )


@pytest.fixture
def make_tx():
    """Factory for records from plain strings."""

    return _make_tx


@pytest.fixture
def sample_records(make_tx) -> list[Transaction]:
    return [
        make_tx("2024-03-15", "Acme", "-50.00", "invoice payment"),
        make_tx("2024-03-01", "Globex", "1200.00", "salary deposit"),
        make_tx("2024-02-29", "acme", "-20.00", "widgets payment"),
        make_tx("2024-02-01", "Initech", "0.00", "license paid"),
        make_tx("2024-01-01", "Globex", "300.00", "bonus deposit"),
        make_tx("2023-12-31", "Acme", "-10.00", "invoice payment"),
        make_tx("2023-06-15", "Hooli", "45.50", "refund deposit"),
    ]
