"""Scripted end-to-end sessions through the interactive menu.

Input comes from a list of answers and output is captured through an injected
``print_fn``, so every test drives the real state machine over a real ledger
file in a temporary directory.
"""

from __future__ import annotations

import datetime as dt
from decimal import Decimal

import pytest

from pocket_ledger.menu import LedgerApp, MenuState
from pocket_ledger.store import RecordStore
from pocket_ledger.term_ui import Console, format_row

TODAY = dt.date(2024, 3, 15)
NOW = dt.datetime(2024, 3, 15, 9, 30, 0)


class Session:
    def __init__(self, store: RecordStore, answers: list[str], **kwargs) -> None:
        self.answers = list(answers)
        self.prompts: list[str] = []
        self.out: list[str] = []
        self.app = LedgerApp(
            store,
            console=Console(print_fn=self.out.append),
            input_fn=self._input,
            today=lambda: TODAY,
            clock=lambda: NOW,
            **kwargs,
        )

    def _input(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.answers:
            raise EOFError
        return self.answers.pop(0)

    def run(self) -> list[str]:
        self.app.run()
        return self.out


@pytest.fixture
def store(ledger_file) -> RecordStore:
    return RecordStore(ledger_file)


@pytest.fixture
def seeded(store, sample_records) -> RecordStore:
    for record in sample_records:
        store.append(record)
    return store


def _rows(out: list[str], records) -> list[int]:
    return [out.index(format_row(r)) for r in records]


def test_deposit_reprompts_until_positive_amount(store):
    out = Session(store, ["D", "", "Globex", "salary", "abc", "-5", "1,200", "X"]).run()

    assert "Deposit name cannot be empty" in out
    assert "Please enter a positive amount!" in out
    assert any(m.startswith("Invalid amount 'abc'") for m in out)
    assert "Congrats! Your request is completed" in out
    assert out[-1] == "Leaving the app..."

    (rec,) = store.load()
    assert (rec.vendor, rec.description) == ("Globex", "salary deposit")
    assert rec.amount == Decimal("1200.00")
    assert (rec.date, rec.time) == (TODAY, "09:30:00")


def test_payment_against_obligation(store, make_tx):
    store.append(make_tx("2024-03-01", "Acme", "-50.00", "invoice payment"))
    session = Session(store, ["P", "Umbrella", "x", "acme", "invoice", "60", "20", "X"])
    out = session.run()

    assert "Here are all payments you need to make" in out
    assert "Vendor name not found! Please try again" in out
    assert "Total amount owed for acme: 50.00" in out
    assert "You have exceeded total payment amount! Please try again" in out
    assert "Remaining amount: -30.00" in out

    records = store.load()
    assert len(records) == 2
    assert (records[-1].vendor, records[-1].description, records[-1].amount) == (
        "acme",
        "invoice payment",
        Decimal("-30.00"),
    )


def test_full_payment_is_recorded_as_paid(store, make_tx):
    store.append(make_tx("2024-03-01", "Acme", "-50.00", "invoice payment"))
    out = Session(store, ["P", "Acme", "invoice", "50", "X"]).run()

    assert "Remaining amount: 0.00" in out
    assert store.load()[-1].description == "invoice paid"


def test_payment_without_obligations(store, make_tx):
    store.append(make_tx("2024-03-01", "Globex", "100", "salary deposit"))
    out = Session(store, ["P", "X"]).run()
    assert "You have no outstanding payments" in out
    assert len(store.load()) == 1


def test_payment_cancel_with_empty_vendor(store, make_tx):
    store.append(make_tx("2024-03-01", "Acme", "-50.00", "invoice payment"))
    Session(store, ["P", "", "X"]).run()
    assert len(store.load()) == 1


def test_ledger_views_newest_first(seeded, sample_records):
    out = Session(seeded, ["L", "D", "L", "P", "X"]).run()

    deposits = [r for r in sample_records if r.amount > 0]
    payments = [r for r in sample_records if r.amount <= 0]
    dep_rows = _rows(out, deposits)
    assert dep_rows == sorted(dep_rows)
    pay_rows = _rows(out, payments)
    assert pay_rows == sorted(pay_rows)


def test_ledger_on_missing_file_shows_no_results(store):
    out = Session(store, ["L", "A", "X"]).run()
    assert "No results were found" in out


def test_invalid_choices_and_home(seeded):
    out = Session(seeded, ["Q", "L", "Z", "H", "X"]).run()
    assert "Wrong input. Please select a letter corresponding to the provided services" in out
    assert "Invalid options! Please try again" in out
    assert "Going back home..." in out


def test_period_reports(seeded, sample_records):
    out = Session(seeded, ["L", "R", "1", "2", "9", "0", "X"]).run()

    mtd = [r for r in sample_records if r.date >= dt.date(2024, 3, 1)]
    prev = [r for r in sample_records if dt.date(2024, 2, 1) <= r.date <= dt.date(2024, 2, 29)]
    assert len(mtd) == 2 and len(prev) == 2
    assert max(_rows(out, mtd)) < min(_rows(out, prev))
    assert "Incorrect options. Please try again!" in out


def test_vendor_search(seeded, sample_records):
    out = Session(seeded, ["L", "R", "5", "umbrella", "ACME", "5", "back", "0", "X"]).run()

    assert "Vendor name not found! Please try again" in out
    acme = [r for r in sample_records if r.vendor.upper() == "ACME"]
    assert len(_rows(out, acme)) == 3


def test_vendor_search_uses_injected_prompt(seeded):
    seen: list[list[str]] = []

    def vendor_prompt(names):
        seen.append(list(names))
        return "home"

    Session(seeded, ["L", "R", "5", "X"], vendor_prompt=vendor_prompt).run()
    assert seen == [["ACME", "GLOBEX", "HOOLI", "INITECH"]]


def test_custom_search_with_reprompt(seeded, sample_records):
    answers = ["L", "R", "6", "2024-13-01", "2024-01-01", "", "", "acme", "", "0", "X"]
    out = Session(seeded, answers).run()

    assert any(m.endswith("Try again.") for m in out)
    assert "Here are your custom search results" in out
    expected = [r for r in sample_records if r.vendor.upper() == "ACME" and r.date.year == 2024]
    assert len(_rows(out, expected)) == 2
    assert format_row(sample_records[5]) not in out


def test_custom_search_without_results(seeded):
    out = Session(seeded, ["L", "R", "6", "", "", "", "zzz", "", "0", "X"]).run()
    assert "No search results were found!" in out


def test_custom_search_home_returns_to_main_menu(seeded):
    session = Session(seeded, ["L", "R", "6", "home", "X"])
    session.run()
    assert session.answers == []
    assert session.prompts[-1] == "> "


def test_end_of_input_leaves_cleanly(store):
    out = Session(store, []).run()
    assert out[-1] == "Leaving the app..."


def test_handlers_return_next_state(seeded):
    session = Session(seeded, ["R"])
    assert session.app.ledger() is MenuState.REPORT_MENU
    assert len(session.app.working_set) == 7


def test_deposit_too_large_to_store_is_reprompted(store):
    out = Session(store, ["D", "Acme", "windfall", "1e30", "5", "X"]).run()

    assert "Amount '1e30' is too large" in out
    (rec,) = store.load()
    assert rec.amount == Decimal("5.00")


def test_ledger_skips_unstorable_row_and_keeps_running(store, ledger_file):
    ledger_file.parent.mkdir(parents=True)
    ledger_file.write_text(
        "2024-01-05|09:12:44|x deposit|Acme|1e30\n2024-01-06|09:12:44|y deposit|Acme|2.50\n",
        encoding="utf-8",
    )
    out = Session(store, ["L", "A", "L", "A", "X"]).run()

    assert sum(m.startswith("Acme") and "2.50" in m for m in out) == 2
    assert out[-1] == "Leaving the app..."


def test_sub_cent_payment_settles_balance(store, make_tx):
    store.append(make_tx("2024-03-01", "Acme", "-50.00", "invoice payment"))
    out = Session(store, ["P", "Acme", "invoice", "49.999", "X"]).run()

    assert "Remaining amount: 0.00" in out
    assert store.load()[-1].description == "invoice paid"
