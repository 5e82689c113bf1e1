"""Runtime settings for ``pocket_ledger``.

The only setting is where the ledger file lives:

- Default: ``./data/transactions.csv`` under the current working directory.
- Override: ``POCKET_LEDGER_FILE`` environment variable (absolute or relative),
  typically set in a local ``.env`` that the CLI loads at startup.
"""

from __future__ import annotations

import os
from pathlib import Path

LEDGER_FILE_ENV = "POCKET_LEDGER_FILE"
DEFAULT_LEDGER_FILE = Path("data") / "transactions.csv"


def get_ledger_path(override: str | os.PathLike[str] | None = None) -> Path:
    """Resolve the ledger file path (explicit override > env var > default)."""

    if override is not None and str(override).strip():
        return Path(override).expanduser().resolve()
    env_val = os.getenv(LEDGER_FILE_ENV)
    if env_val and env_val.strip():
        return Path(env_val.strip()).expanduser().resolve()
    return (Path.cwd() / DEFAULT_LEDGER_FILE).resolve()


__all__ = ["LEDGER_FILE_ENV", "DEFAULT_LEDGER_FILE", "get_ledger_path"]
