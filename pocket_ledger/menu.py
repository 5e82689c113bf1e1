"""Interactive menu for the ledger.

The menu is a small state machine:

- ``MAIN_MENU`` (initial): ``L`` -> ``LEDGER``, ``X`` -> ``EXIT`` (terminal).
- ``LEDGER``: ``A``/``D``/``P`` render a view then go home, ``R`` ->
  ``REPORT_MENU``, ``H`` -> ``MAIN_MENU``.
- ``REPORT_MENU``: ``1``-``4`` render a period report and stay, ``5`` ->
  ``VENDOR_SEARCH``, ``6`` -> ``CUSTOM_SEARCH``, ``0`` -> ``MAIN_MENU``.
- ``VENDOR_SEARCH`` / ``CUSTOM_SEARCH``: render results, then ``REPORT_MENU``.

Deposit (``D``) and payment (``P``) entry run as one-shot flows from the main
menu and return to it. Every handler returns the next state; ``home`` typed at
a search prompt jumps back to the main menu and ``back`` to the report menu.

All terminal I/O goes through the injected ``input_fn`` and
:class:`~pocket_ledger.term_ui.Console`, so whole sessions can be scripted.
"""

from __future__ import annotations

import builtins
import datetime as dt
from collections.abc import Callable, Sequence
from decimal import Decimal
from enum import Enum, auto
from typing import Protocol

from .errors import PaymentValidationError
from .filters import (
    SEARCH_ORDER,
    ReportPeriod,
    SearchField,
    apply_criterion,
    report,
    validate_criterion,
)
from .ledger import LedgerView, load_working_set, newest_first, select_view
from .logging_setup import get_logger
from .models import ActivityTag, Transaction, new_transaction
from .parsing import validate_amount
from .reconcile import lookup_owed, outstanding_obligations, settle_payment
from .term_ui import Console, format_amount, render_table
from .vendors import find_vendor, group_by_vendor, vendor_names

_logger = get_logger("pocket_ledger.menu")


class RecordStoreLike(Protocol):
    def load(self) -> list[Transaction]: ...

    def append(self, record: Transaction) -> None: ...


class MenuState(Enum):
    MAIN_MENU = auto()
    LEDGER = auto()
    REPORT_MENU = auto()
    VENDOR_SEARCH = auto()
    CUSTOM_SEARCH = auto()
    EXIT = auto()


MAIN_OPTIONS = ("D) Add Deposit", "P) Make Payment(Debit)", "L) Ledger", "X) Exit")
LEDGER_OPTIONS = ("A) All", "D) Deposits", "P) Payments", "R) Reports", "H) Home")
REPORT_OPTIONS = (
    "1) Month To Date",
    "2) Previous Month",
    "3) Year To Date",
    "4) Previous Year",
    "5) Search by Vendor",
    "6) Custom search",
    "0) Back",
)

_REPORT_CHOICES: dict[str, ReportPeriod] = {
    "1": ReportPeriod.MONTH_TO_DATE,
    "2": ReportPeriod.PREVIOUS_MONTH,
    "3": ReportPeriod.YEAR_TO_DATE,
    "4": ReportPeriod.PREVIOUS_YEAR,
}

_LEDGER_CHOICES: dict[str, LedgerView] = {
    "A": LedgerView.ALL,
    "D": LedgerView.DEPOSITS,
    "P": LedgerView.PAYMENTS,
}

_SEARCH_PROMPTS: dict[SearchField, str] = {
    SearchField.START_DATE: "Please enter start date (YYYY-MM-DD) or leave empty: ",
    SearchField.END_DATE: "Please enter end date (YYYY-MM-DD) or leave empty: ",
    SearchField.DESCRIPTION: "Please enter description or leave empty: ",
    SearchField.VENDOR: "Please enter vendor name or leave empty: ",
    SearchField.AMOUNT: "Please enter amount or leave empty: ",
}

HOME = "home"
BACK = "back"


class LedgerApp:
    """Menu-driven ledger session over a record store.

    Parameters
    ----------
    store:
        Anything with ``load()`` and ``append(record)``; usually a
        :class:`~pocket_ledger.store.RecordStore`.
    console:
        Output sink. Defaults to a styled :class:`Console`.
    input_fn:
        Reads one line of input given a prompt. Defaults to ``builtins.input``.
    vendor_prompt:
        Asks for a vendor name given the known vendor names. Defaults to
        ``input_fn``; the CLI passes the completion-enabled prompt.
    today / clock:
        Reference date for reports and timestamp for new records.
    """

    def __init__(
        self,
        store: RecordStoreLike,
        *,
        console: Console | None = None,
        input_fn: Callable[[str], str] = builtins.input,
        vendor_prompt: Callable[[Sequence[str]], str] | None = None,
        today: Callable[[], dt.date] = dt.date.today,
        clock: Callable[[], dt.datetime] = dt.datetime.now,
    ) -> None:
        self.store = store
        self.console = console or Console()
        self._input_fn = input_fn
        self._vendor_prompt = vendor_prompt
        self._today = today
        self._clock = clock
        self.working_set: list[Transaction] = []
        self._handlers: dict[MenuState, Callable[[], MenuState]] = {
            MenuState.MAIN_MENU: self.main_menu,
            MenuState.LEDGER: self.ledger,
            MenuState.REPORT_MENU: self.report_menu,
            MenuState.VENDOR_SEARCH: self.vendor_search,
            MenuState.CUSTOM_SEARCH: self.custom_search,
        }

    # ------------------------------------------------------------------
    # Loop
    # ------------------------------------------------------------------

    def run(self, state: MenuState = MenuState.MAIN_MENU) -> None:
        self.console.plain("")
        self.console.plain("==== Welcome to Financial Transaction ====")
        self.console.plain("")
        try:
            while state is not MenuState.EXIT:
                state = self._handlers[state]()
        except (EOFError, KeyboardInterrupt):
            self.console.plain("")
        self.console.plain("Leaving the app...")

    def _ask(self, prompt: str) -> str:
        return self._input_fn(prompt).strip()

    def _ask_vendor(self, vendors: Sequence[str]) -> str:
        if self._vendor_prompt is None:
            return self._ask("Please enter vendor name you would like to search: ")
        return self._vendor_prompt(vendors).strip()

    def _options(self, options: Sequence[str]) -> None:
        for line in options:
            self.console.info(line)

    def _show(self, records: Sequence[Transaction], empty: str = "No results were found") -> None:
        if not records:
            self.console.warning(empty)
            return
        self.console.plain("")
        self.console.lines(render_table(records))

    def _reload(self) -> list[Transaction]:
        self.working_set = newest_first(load_working_set(self.store))
        return self.working_set

    def _append(self, record: Transaction) -> bool:
        try:
            self.store.append(record)
        except OSError as e:
            _logger.error("Append failed: %s", e)
            self.console.deny(f"Could not save the transaction: {e}")
            return False
        self.console.success("Congrats! Your request is completed")
        return True

    # ------------------------------------------------------------------
    # States
    # ------------------------------------------------------------------

    def main_menu(self) -> MenuState:
        self.console.plain("Please select the services provided: ")
        self._options(MAIN_OPTIONS)
        choice = self._ask("> ").upper()
        if choice == "D":
            self.deposit()
        elif choice == "P":
            self.payment()
        elif choice == "L":
            return MenuState.LEDGER
        elif choice == "X":
            return MenuState.EXIT
        else:
            self.console.deny(
                "Wrong input. Please select a letter corresponding to the provided services"
            )
        return MenuState.MAIN_MENU

    def ledger(self) -> MenuState:
        records = self._reload()
        while True:
            self.console.plain("Please choose the services provided: ")
            self._options(LEDGER_OPTIONS)
            choice = self._ask("> ").upper()
            if choice in _LEDGER_CHOICES:
                self._show(select_view(records, _LEDGER_CHOICES[choice]))
                return MenuState.MAIN_MENU
            if choice == "R":
                return MenuState.REPORT_MENU
            if choice in ("H", HOME.upper()):
                self.console.info("Going back home...")
                return MenuState.MAIN_MENU
            self.console.deny("Invalid options! Please try again")

    def report_menu(self) -> MenuState:
        self.console.plain("Please select the provided services: ")
        self._options(REPORT_OPTIONS)
        choice = self._ask("> ").upper()
        if choice in _REPORT_CHOICES:
            period = _REPORT_CHOICES[choice]
            self._show(report(self.working_set, period, today=self._today()))
            return MenuState.REPORT_MENU
        if choice == "5":
            return MenuState.VENDOR_SEARCH
        if choice == "6":
            return MenuState.CUSTOM_SEARCH
        if choice in ("0", "H", HOME.upper()):
            return MenuState.MAIN_MENU
        self.console.deny("Incorrect options. Please try again!")
        return MenuState.REPORT_MENU

    def vendor_search(self) -> MenuState:
        index = group_by_vendor(self.working_set)
        if not index:
            self.console.warning("No vendors recorded yet")
            return MenuState.REPORT_MENU
        names = vendor_names(index)
        while True:
            query = self._ask_vendor(names)
            if query.lower() == BACK:
                return MenuState.REPORT_MENU
            if query.lower() == HOME:
                return MenuState.MAIN_MENU
            found = find_vendor(index, query)
            if found is None:
                self.console.warning("Vendor name not found! Please try again")
                continue
            self._show(found)
            return MenuState.REPORT_MENU

    def custom_search(self) -> MenuState:
        self.console.plain("Please enter the fields for filtering ('back' or 'home' to leave)")
        result = list(self.working_set)
        for field in SEARCH_ORDER:
            while True:
                raw = self._ask(_SEARCH_PROMPTS[field])
                if raw.lower() == BACK:
                    return MenuState.REPORT_MENU
                if raw.lower() == HOME:
                    return MenuState.MAIN_MENU
                check = validate_criterion(field, raw)
                if not check.ok:
                    self.console.warning(f"{check.reason}. Try again.")
                    continue
                result = apply_criterion(result, field, raw)
                break

        if not result:
            self.console.info("No search results were found!")
        else:
            self.console.info("Here are your custom search results")
            self._show(result)
        return MenuState.REPORT_MENU

    # ------------------------------------------------------------------
    # Entry flows
    # ------------------------------------------------------------------

    def deposit(self) -> Transaction | None:
        """Collect and append one deposit; ``None`` when cancelled or not saved."""

        vendor = ""
        while not vendor:
            vendor = self._ask("Please enter deposit name: ")
            if vendor.lower() == HOME:
                return None
            if not vendor:
                self.console.warning("Deposit name cannot be empty")
        description = self._ask("Please describe the purpose of this deposit: ")

        while True:
            check = validate_amount(
                self._ask("Please enter deposit amount: "), allow_blank=False, positive=True
            )
            if check.ok:
                break
            self.console.deny(check.reason or "Wrong format. Please enter in numbers")

        record = new_transaction(
            description, vendor, check.value, ActivityTag.DEPOSIT, now=self._clock()
        )
        return record if self._append(record) else None

    def payment(self) -> Transaction | None:
        """Pay against outstanding obligations; ``None`` when cancelled or not saved."""

        obligations = outstanding_obligations(self._reload())
        if not obligations:
            self.console.info("You have no outstanding payments")
            return None
        self.console.info("Here are all payments you need to make")
        self._show(obligations)

        while True:
            vendor = self._ask("Please enter the vendor name owed (empty to cancel): ")
            if not vendor or vendor.lower() == HOME:
                return None
            description = self._ask("Please enter description of product owed: ")
            owed = lookup_owed(obligations, vendor, description)
            if owed is None:
                self.console.warning("Vendor name not found! Please try again")
                continue
            self.console.info(f"Total amount owed for {vendor}: {format_amount(owed)}")
            record = self._collect_payment(owed, vendor, description)
            if record is None:
                return None
            break

        self.console.info(f"Remaining amount: {format_amount(record.amount)}")
        return record if self._append(record) else None

    def _collect_payment(
        self, owed: Decimal, vendor: str, description: str
    ) -> Transaction | None:
        while True:
            raw = self._ask("Please enter your payment: ")
            if raw.lower() == HOME:
                return None
            check = validate_amount(raw, allow_blank=False)
            if not check.ok:
                self.console.deny(check.reason or "Please enter a number")
                continue
            try:
                return settle_payment(owed, check.value, vendor, description, now=self._clock())
            except PaymentValidationError as e:
                self.console.warning(str(e))


__all__ = ["LedgerApp", "MenuState", "RecordStoreLike"]
