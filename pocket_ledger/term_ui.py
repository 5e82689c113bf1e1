"""Tiny terminal UI helpers (prompt_toolkit-based).

Styled console messages, the fixed four-column ledger table, and the vendor
prompt with completion. Kept apart from the menu flow so they are easy to test
in isolation.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from decimal import Decimal

from prompt_toolkit import PromptSession, print_formatted_text
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.formatted_text import FormattedText
from prompt_toolkit.output import Output
from prompt_toolkit.styles import Style

from .models import Transaction, quantize_amount

# ----------------------------------------------------------------------------
# Styled console output
# ----------------------------------------------------------------------------

STYLE = Style.from_dict(
    {
        "success": "ansigreen",
        "warning": "ansiyellow",
        "deny": "ansired",
        "info": "ansiblue",
    }
)


class Console:
    """Colored message sink.

    When ``print_fn`` is given every message is passed to it as plain text
    (tests capture output this way); otherwise messages are rendered with
    ``print_formatted_text`` using :data:`STYLE`.
    """

    def __init__(
        self,
        print_fn: Callable[..., None] | None = None,
        *,
        output: Output | None = None,
    ) -> None:
        self._print_fn = print_fn
        self._output = output

    def _emit(self, style_class: str, message: str) -> None:
        if self._print_fn is not None:
            self._print_fn(message)
            return
        text = FormattedText([(f"class:{style_class}", message)]) if style_class else message
        print_formatted_text(text, style=STYLE, output=self._output)

    def plain(self, message: str = "") -> None:
        self._emit("", message)

    def success(self, message: str) -> None:
        self._emit("success", message)

    def warning(self, message: str) -> None:
        self._emit("warning", message)

    def deny(self, message: str) -> None:
        self._emit("deny", message)

    def info(self, message: str) -> None:
        self._emit("info", message)

    def lines(self, rows: Iterable[str]) -> None:
        for row in rows:
            self.plain(row)


# ----------------------------------------------------------------------------
# Ledger table
# ----------------------------------------------------------------------------

_ROW_FMT = "{:<20} {:<30} {:<12} {:<15}"
RULE = "-" * 80


def format_amount(amount: Decimal) -> str:
    return f"{quantize_amount(amount):.2f}"


def _clip(text: str, width: int) -> str:
    return text if len(text) <= width else text[: width - 1] + "…"


def table_header() -> list[str]:
    return [_ROW_FMT.format("Vendor", "Description", "Amount", "Date"), RULE]


def format_row(record: Transaction) -> str:
    return _ROW_FMT.format(
        _clip(record.vendor, 20),
        _clip(record.description, 30),
        format_amount(record.amount),
        record.date.isoformat(),
    )


def render_table(records: Iterable[Transaction]) -> list[str]:
    """Header, rule, and one line per record."""

    return table_header() + [format_row(r) for r in records]


# ----------------------------------------------------------------------------
# Vendor prompt
# ----------------------------------------------------------------------------


def vendor_completer(vendors: Sequence[str] | Iterable[str]) -> WordCompleter:
    # ``sentence=True`` so multi-word vendor names complete as a whole.
    return WordCompleter(list(vendors), ignore_case=True, match_middle=True, sentence=True)


def prompt_vendor(
    vendors: Sequence[str] | Iterable[str],
    *,
    message: str = "Vendor name (Tab to complete • 'back' or 'home' to leave): ",
    session: PromptSession | None = None,
) -> str:
    """Prompt for a vendor name with case-insensitive completion."""

    if session is None:
        sess: PromptSession = PromptSession()
    else:
        sess = PromptSession(
            input=getattr(session, "input", None),
            output=getattr(session, "output", None),
        )
    return sess.prompt(message, completer=vendor_completer(vendors), complete_while_typing=True)


__all__ = [
    "STYLE",
    "Console",
    "RULE",
    "format_amount",
    "table_header",
    "format_row",
    "render_table",
    "vendor_completer",
    "prompt_vendor",
]
