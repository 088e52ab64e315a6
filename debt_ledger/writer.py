"""Serialize a debt table to ``payer,payee,total`` lines.

Atomicity: the destination is written to a uniquely named temporary file in
the same directory and then ``os.replace``-d into place, so a failed write
never leaves a truncated file under the destination name and never touches
other files next to it.
"""

from __future__ import annotations

import contextlib
import math
import os
import tempfile
from collections.abc import Iterator, Mapping
from decimal import ROUND_HALF_UP, Context, Decimal
from os import PathLike
from pathlib import Path

from .config import AMOUNT_QUANTUM, DELIMITER, ENCODING
from .errors import DestinationUnwritable, UnexpectedIO
from .logging_setup import get_logger

_logger = get_logger("debt_ledger.writer")

# Wide enough for every finite double at two decimal places.
_QUANTIZE_CONTEXT = Context(prec=400)


def format_amount(amount: float) -> str:
    """Render ``amount`` with exactly two decimal places.

    Rounds half away from zero on the exact binary value of the float, the
    same result JavaScript's ``toFixed(2)`` gives. ``10.005`` is stored as
    ``10.00499999999999900...`` and renders as ``"10.00"``; the exactly
    representable ties ``0.125`` and ``-0.125`` render as ``"0.13"`` and
    ``"-0.13"``. A total that rounds to negative zero renders as ``"0.00"``.
    Raises ``ValueError`` for ``nan`` and infinities.
    """

    if not math.isfinite(amount):
        raise ValueError(f"cannot format non-finite amount: {amount!r}")
    quantized = Decimal(amount).quantize(
        AMOUNT_QUANTUM, rounding=ROUND_HALF_UP, context=_QUANTIZE_CONTEXT
    )
    if quantized.is_zero():
        quantized = abs(quantized)
    return f"{quantized:f}"


def serialize_table(table: Mapping[str, float]) -> Iterator[str]:
    """Yield one newline-terminated output line per entry, in table order."""

    for key, amount in table.items():
        yield f"{key}{DELIMITER}{format_amount(amount)}\n"


def _target_mode(dest: Path) -> int:
    # Temp files are created 0600; give the result the mode a plain open() would.
    try:
        return dest.stat().st_mode & 0o777
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def _write_atomic(dest: Path, lines: Iterator[str]) -> None:
    f = tempfile.NamedTemporaryFile(
        "w",
        encoding=ENCODING,
        newline="",
        dir=dest.parent,
        prefix=f".{dest.name}.",
        suffix=".tmp",
        delete=False,
    )
    tmp = Path(f.name)
    try:
        with f:
            f.writelines(lines)
        os.chmod(tmp, _target_mode(dest))
        os.replace(tmp, dest)
    except BaseException:
        with contextlib.suppress(OSError):
            tmp.unlink()
        raise


def write_table(path: str | PathLike[str], table: Mapping[str, float]) -> Path:
    """Write ``table`` to ``path``, replacing any existing file.

    Returns the destination path. Raises
    :class:`~debt_ledger.errors.DestinationUnwritable` when the parent
    directory is missing, permission is denied, or the destination is a
    directory; any other ``OSError`` becomes
    :class:`~debt_ledger.errors.UnexpectedIO`.
    """

    dest = Path(path)

    try:
        if dest.is_dir():
            raise IsADirectoryError(21, "Is a directory", os.fspath(dest))
        _write_atomic(dest, serialize_table(table))
    except OSError as e:
        if isinstance(e, FileNotFoundError):
            raise DestinationUnwritable(dest, "Directory does not exist") from e
        if isinstance(e, PermissionError):
            raise DestinationUnwritable(dest, "Permission denied") from e
        if isinstance(e, IsADirectoryError):
            raise DestinationUnwritable(dest, "Is a directory") from e
        raise UnexpectedIO(dest, f"Write failed ({e.strerror or e})") from e

    _logger.info("Wrote %d debts to %s", len(table), dest)
    return dest


__all__ = ["format_amount", "serialize_table", "write_table"]
