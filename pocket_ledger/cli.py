"""CLI for the ``pocket_ledger`` package.

Running ``pocket-ledger`` without a subcommand starts the interactive menu.
The non-interactive subcommands print the same reports for scripting:

- ``report <period> [--today YYYY-MM-DD]``
- ``search [--start] [--end] [--description] [--vendor] [--amount]``
- ``owed <vendor> [<description>]``
- ``vendors``

Environment variables (notably ``POCKET_LEDGER_FILE``) are loaded from a local
``.env`` using ``python-dotenv`` before anything else runs. Business logic
lives in the core modules; this module only parses arguments and prints.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from typer.models import OptionInfo

from .errors import ParseError
from .filters import ReportPeriod, SearchField, custom_search, report
from .ledger import load_working_set, newest_first
from .logging_setup import configure_logging, get_logger
from .menu import LedgerApp
from .models import Transaction
from .parsing import parse_date
from .reconcile import lookup_owed, outstanding_obligations
from .settings import get_ledger_path
from .store import RecordStore
from .term_ui import format_amount, prompt_vendor, render_table
from .vendors import group_by_vendor, vendor_names

_logger = get_logger("pocket_ledger.cli")


@dataclass(slots=True)
class _GlobalOptions:
    ledger_file: Path | None = None


# Module-level option objects (no calls in parameter defaults).
LEDGER_FILE_OPTION: OptionInfo = typer.Option(
    None,
    "--ledger-file",
    help="Ledger file to use (falls back to POCKET_LEDGER_FILE, then ./data/transactions.csv).",
    dir_okay=False,
    file_okay=True,
    exists=False,  # a missing file is an empty ledger
)
LOG_LEVEL_OPTION: OptionInfo = typer.Option(
    None, "--log-level", help="Log level (falls back to POCKET_LEDGER_LOG_LEVEL, then WARNING)."
)


app = typer.Typer(
    add_completion=False,
    help="Personal finance ledger: record deposits and payments, run reports.",
)


def _store(ctx: typer.Context) -> RecordStore:
    opts = ctx.obj if isinstance(ctx.obj, _GlobalOptions) else _GlobalOptions()
    return RecordStore(get_ledger_path(opts.ledger_file))


def _echo_records(records: list[Transaction], *, empty: str = "No results were found") -> None:
    if not records:
        typer.echo(empty)
        return
    for line in render_table(records):
        typer.echo(line)


def _fail(message: str) -> None:
    print(f"Error: {message}", file=sys.stderr)
    raise typer.Exit(1)


def run_menu(store: RecordStore) -> None:
    """Start the interactive session with vendor-name completion enabled."""

    _logger.debug("Starting interactive menu on %s", store.path)
    LedgerApp(store, vendor_prompt=prompt_vendor).run()


@app.callback(invoke_without_command=True)
def _root(
    ctx: typer.Context,
    *,
    ledger_file: Annotated[Path | None, LEDGER_FILE_OPTION] = None,
    log_level: Annotated[str | None, LOG_LEVEL_OPTION] = None,
) -> None:
    """Root command.

    Loads ``.env`` from the current working directory (without overriding any
    already-set environment variables), configures logging, and starts the
    interactive menu when no subcommand is invoked.
    """

    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    configure_logging(log_level)
    ctx.obj = _GlobalOptions(ledger_file=ledger_file)

    if ctx.invoked_subcommand is None:
        run_menu(_store(ctx))


@app.command("menu")
def menu_cmd(ctx: typer.Context) -> None:
    """Start the interactive menu."""

    run_menu(_store(ctx))


@app.command("report")
def report_cmd(
    ctx: typer.Context,
    period: Annotated[ReportPeriod, typer.Argument(help="Reporting period.")],
    *,
    today: Annotated[
        str | None, typer.Option("--today", help="Reference date YYYY-MM-DD (default: today).")
    ] = None,
) -> None:
    """Print a date-range report, newest first."""

    try:
        ref = parse_date(today, field="today") if today else None
    except ParseError as e:
        _fail(e.reason)
        return
    records = newest_first(load_working_set(_store(ctx)))
    _echo_records(report(records, period, today=ref))


@app.command("search")
def search_cmd(
    ctx: typer.Context,
    *,
    start: Annotated[str | None, typer.Option(help="Earliest date, YYYY-MM-DD.")] = None,
    end: Annotated[str | None, typer.Option(help="Latest date, YYYY-MM-DD.")] = None,
    description: Annotated[str | None, typer.Option(help="Description substring.")] = None,
    vendor: Annotated[str | None, typer.Option(help="Vendor substring.")] = None,
    amount: Annotated[str | None, typer.Option(help="Exact amount (within one cent).")] = None,
) -> None:
    """Filter the ledger by any combination of fields (all must match)."""

    criteria = {
        SearchField.START_DATE: start,
        SearchField.END_DATE: end,
        SearchField.DESCRIPTION: description,
        SearchField.VENDOR: vendor,
        SearchField.AMOUNT: amount,
    }
    records = newest_first(load_working_set(_store(ctx)))
    try:
        found = custom_search(records, criteria)
    except ParseError as e:
        _fail(e.reason)
        return
    _echo_records(found, empty="No search results were found!")


@app.command("owed")
def owed_cmd(
    ctx: typer.Context,
    vendor: Annotated[str, typer.Argument(help="Vendor name (case-insensitive).")],
    description: Annotated[
        str, typer.Argument(help="Description fragment of the obligation.")
    ] = "",
) -> None:
    """Print the total still owed to a vendor."""

    obligations = outstanding_obligations(load_working_set(_store(ctx)))
    owed = lookup_owed(obligations, vendor, description)
    if owed is None:
        _fail(f"Vendor name not found: {vendor}")
        return
    typer.echo(f"Total amount owed for {vendor}: {format_amount(owed)}")


@app.command("vendors")
def vendors_cmd(ctx: typer.Context) -> None:
    """List known vendors with their record counts."""

    index = group_by_vendor(load_working_set(_store(ctx)))
    if not index:
        typer.echo("No vendors recorded yet")
        return
    for name in vendor_names(index):
        typer.echo(f"{name}\t{len(index[name])}")


if __name__ == "__main__":  # pragma: no cover
    # Running as a module: `python -m pocket_ledger.cli`
    app()
