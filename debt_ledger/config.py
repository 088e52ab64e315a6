"""Ledger format constants and destination-resolution policy.

The tool reads no environment variables or config files; everything a run
needs is either fixed here or supplied on the command line.
"""

from __future__ import annotations

from decimal import Decimal
from os import PathLike
from pathlib import Path

# Field separator for both the input ledger and the output totals.
DELIMITER = ","

ENCODING = "utf-8"

DEFAULT_OUTPUT_NAME = "output.csv"

# Totals are written with exactly two decimal places.
AMOUNT_QUANTUM = Decimal("0.01")


def resolve_destination(
    positional: str | PathLike[str] | None,
    option: str | PathLike[str] | None = None,
    *,
    default: str | PathLike[str] = DEFAULT_OUTPUT_NAME,
) -> Path:
    """Pick the destination path for a run.

    An explicit positional destination wins over the ``-o/--output`` value,
    which wins over ``default``. Empty strings count as "not supplied".
    """

    for candidate in (positional, option):
        if candidate is not None and str(candidate) != "":
            return Path(candidate)
    return Path(default)


__all__ = [
    "AMOUNT_QUANTUM",
    "DEFAULT_OUTPUT_NAME",
    "DELIMITER",
    "ENCODING",
    "resolve_destination",
]
