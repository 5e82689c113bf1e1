"""Logging configuration for the ``pocket_ledger`` package.

Library modules call ``get_logger("pocket_ledger.<module>")`` and never attach
handlers. The CLI calls :func:`configure_logging` once per invocation, which
installs (or replaces) a single console handler on the package root logger.

Log lines share the terminal with the interactive menu, so the default format
is short and carries no timestamp, and the default level is WARNING. The
level comes from the explicit argument, then ``POCKET_LEDGER_LOG_LEVEL``.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

_PKG_LOGGER_NAME = "pocket_ledger"
_HANDLER_NAME = "pocket_ledger.console"

LOG_LEVEL_ENV = "POCKET_LEDGER_LOG_LEVEL"
DEFAULT_LEVEL = logging.WARNING
DEFAULT_FORMAT = "%(levelname)s [%(name)s] %(message)s"


class _StderrHandler(logging.StreamHandler):
    """Writes to whatever ``sys.stderr`` is when a record is emitted."""

    @property
    def stream(self) -> IO[str]:  # type: ignore[override]
        return sys.stderr

    @stream.setter
    def stream(self, value: IO[str]) -> None:
        pass


def _parse_level(value: int | str | None) -> int | None:
    if isinstance(value, int):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip().upper()
    if text.isdigit():
        return int(text)
    return logging.getLevelNamesMapping().get(text)


def resolve_level(level: int | str | None = None) -> int:
    """Explicit level, else ``POCKET_LEDGER_LOG_LEVEL``, else WARNING.

    Unrecognized names fall through to the next source.
    """

    for candidate in (level, os.getenv(LOG_LEVEL_ENV)):
        parsed = _parse_level(candidate)
        if parsed is not None:
            return parsed
    return DEFAULT_LEVEL


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] | None = None,
) -> logging.Handler:
    """Install the package console handler and return it.

    Calling this again replaces the previous console handler, so a later
    ``--log-level`` takes effect without duplicating output.

    Parameters
    ----------
    level:
        Logging level as ``int`` or level name (e.g. ``"INFO"``).
    fmt:
        Format string; defaults to :data:`DEFAULT_FORMAT`.
    stream:
        Fixed output stream. When omitted, records go to the current
        ``sys.stderr`` at emit time.
    """

    logger = logging.getLogger(_PKG_LOGGER_NAME)
    for h in list(logger.handlers):
        if isinstance(h, logging.NullHandler) or h.get_name() == _HANDLER_NAME:
            logger.removeHandler(h)

    resolved = resolve_level(level)
    handler: logging.Handler = (
        logging.StreamHandler(stream) if stream is not None else _StderrHandler()
    )
    handler.set_name(_HANDLER_NAME)
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter(fmt or DEFAULT_FORMAT))

    logger.setLevel(resolved)
    logger.addHandler(handler)
    # Avoid double emission via the root logger.
    logger.propagate = False
    return handler


def get_logger(name: str) -> logging.Logger:
    """Return a logger, keeping the package silent until configured."""

    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    if not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)


__all__ = [
    "LOG_LEVEL_ENV",
    "DEFAULT_LEVEL",
    "DEFAULT_FORMAT",
    "resolve_level",
    "configure_logging",
    "get_logger",
]
