"""Record store over a flat pipe-delimited file.

File layout (UTF-8, one record per line)::

    date|time|description|vendor|amount
    2024-01-05|09:12:44|invoice payment|Acme|-50.00

- ``date`` is ISO ``YYYY-MM-DD``; ``amount`` has exactly two decimals.
- ``description`` already ends with the activity tag word.
- The header line is optional on read and written when a new file is created.

Reads are full scans; writes are single-line appends flushed and fsynced
before :meth:`RecordStore.append` returns. There is no locking against other
writers.
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import ValidationError

from .errors import StorageUnavailable
from .logging_setup import get_logger
from .models import StoredRow, Transaction, quantize_amount

DELIMITER = "|"
HEADER = DELIMITER.join(("date", "time", "description", "vendor", "amount"))
FIELD_COUNT = 5

_logger = get_logger("pocket_ledger.store")


def _clean_field(value: str) -> str:
    # The delimiter and newlines would corrupt the line layout.
    return " ".join(value.replace(DELIMITER, "/").split())


def format_line(record: Transaction) -> str:
    """Serialize ``record`` without a trailing newline."""

    return DELIMITER.join(
        (
            record.date.isoformat(),
            record.time,
            _clean_field(record.description),
            _clean_field(record.vendor),
            f"{quantize_amount(record.amount):.2f}",
        )
    )


def is_header(line: str) -> bool:
    return line.strip().lower().startswith("date" + DELIMITER)


def parse_line(line: str) -> Transaction | None:
    """Parse one stored line; ``None`` for blank, header, or malformed lines."""

    text = line.strip()
    if not text or is_header(text):
        return None
    fields = text.split(DELIMITER)
    if len(fields) != FIELD_COUNT:
        _logger.warning(
            "Skipping line with %d fields (expected %d): %r", len(fields), FIELD_COUNT, text
        )
        return None
    try:
        return StoredRow.from_fields(fields).to_transaction()
    except ValidationError as e:
        _logger.warning("Skipping malformed line %r: %s", text, e.errors(include_url=False))
        return None


class RecordStore:
    """Append-only ledger file."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)

    def __repr__(self) -> str:  # pragma: no cover - trivial repr
        return f"RecordStore(path={str(self.path)!r})"

    def load(self) -> list[Transaction]:
        """Read every record in file order.

        Raises
        ------
        StorageUnavailable
            When the file does not exist or cannot be read for any other
            reason (a path component that is not a directory, an I/O error).
        """

        try:
            with self.path.open(encoding="utf-8", newline="") as f:
                records = [r for r in (parse_line(line) for line in f) if r is not None]
        except FileNotFoundError as e:
            raise StorageUnavailable(str(self.path), f"File not found: {self.path}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise StorageUnavailable(str(self.path), f"Cannot read {self.path}: {e}") from e
        _logger.debug("Loaded %d records from %s", len(records), self.path)
        return records

    def append(self, record: Transaction) -> None:
        """Append ``record`` as one line and make it durable before returning."""

        line = format_line(record)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        prefix = ""
        if not self.path.exists() or self.path.stat().st_size == 0:
            prefix = HEADER + "\n"
        elif not self._ends_with_newline():
            prefix = "\n"

        with self.path.open("a", encoding="utf-8", newline="") as f:
            f.write(f"{prefix}{line}\n")
            f.flush()
            os.fsync(f.fileno())
        _logger.info("Appended %s record for %s (%s)", record.date, record.vendor, record.amount)

    def _ends_with_newline(self) -> bool:
        with self.path.open("rb") as f:
            f.seek(-1, os.SEEK_END)
            return f.read(1) == b"\n"


__all__ = [
    "DELIMITER",
    "HEADER",
    "FIELD_COUNT",
    "format_line",
    "parse_line",
    "is_header",
    "RecordStore",
]
