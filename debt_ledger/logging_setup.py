"""Logging for ``debt_ledger``.

Everything the tool reports besides its final ``Output written to ...`` line
goes through the ``debt_ledger`` logger tree: one WARNING per skipped ledger
line from ``debt_ledger.aggregate``, an INFO summary of each aggregation pass,
and an INFO line from ``debt_ledger.writer`` naming the file written.

- ``configure_logging(level)`` is called once by the CLI with the value of
  ``--log-level`` and attaches a single ``StreamHandler`` (stderr by default)
  to the ``debt_ledger`` logger. There is no environment-variable override.
- ``get_logger(name)`` is what the library modules use. When the package is
  imported as a library and nothing is configured, the ``debt_ledger`` logger
  carries only a ``NullHandler`` and records propagate to whatever the host
  application set up on the root logger.
"""

from __future__ import annotations

import logging
import sys
from typing import IO

_PKG_LOGGER_NAME = "debt_ledger"
_CONFIGURED = False
_DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _parse_level(level: int | str | None) -> int:
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        # Numeric strings or standard level names (INFO/DEBUG/etc.).
        level = level.strip().upper()
        if level.isdigit():
            return int(level)
        numeric = getattr(logging, level, None)
        if isinstance(numeric, int):
            return numeric
        raise ValueError(f"Unknown log level: {level!r}")
    return logging.INFO


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] | None = None,
) -> None:
    """Attach the ``debt_ledger`` stream handler; later calls are no-ops.

    Parameters
    ----------
    level:
        ``--log-level`` value: an ``int``, a numeric string or a level name
        such as ``"WARNING"`` (case-insensitive). ``None`` means INFO, which
        shows the per-run summaries; ``WARNING`` keeps only skipped-line
        reports. Unknown names raise ``ValueError`` so the CLI can reject the
        option before anything runs.
    fmt:
        Optional logging format string. Defaults to
        ``_DEFAULT_FORMAT``.
    stream:
        The output stream for the single ``StreamHandler`` (defaults to the
        current ``sys.stderr``).
    """

    global _CONFIGURED
    if _CONFIGURED:
        return

    numeric_level = _parse_level(level)
    logger = logging.getLogger(_PKG_LOGGER_NAME)

    # Remove any existing NullHandlers to avoid swallowing logs after config.
    for h in list(logger.handlers):
        if isinstance(h, logging.NullHandler):
            logger.removeHandler(h)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(numeric_level)
    handler.setFormatter(
        logging.Formatter(fmt or _DEFAULT_FORMAT)
    )

    logger.setLevel(numeric_level)
    logger.addHandler(handler)
    # Avoid double emission via the root logger.
    logger.propagate = False

    _CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Return ``logging.getLogger(name)`` for a ``debt_ledger.*`` module.

    Until :func:`configure_logging` runs, a ``NullHandler`` is attached to the
    ``debt_ledger`` logger so skipped-line warnings are never printed by
    Python's last-resort handler when the package is used as a library.
    """

    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    if not _CONFIGURED and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)
