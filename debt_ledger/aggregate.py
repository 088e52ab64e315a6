"""Aggregate a ledger of ``payer,payee,amount`` lines into a debt table.

Lines are read lazily from the source and folded into a mapping of
``"payer,payee"`` to the running total of every valid line for that ordered
pair. Lines that fail validation are logged, recorded on the result and
skipped; they never abort the pass.

Line handling
-------------
- Only ``\\n`` terminates a line. A ``\\r`` immediately before it is dropped
  so CRLF ledgers produce clean keys.
- Each line is split on every comma and only the first three tokens are
  inspected; anything after the third token is ignored.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator
from os import PathLike
from pathlib import Path

from pydantic import ValidationError

from .config import DELIMITER, ENCODING
from .errors import SourceNotFound, SourceUnreadable, UnexpectedIO
from .logging_setup import get_logger
from .models import AggregationResult, DebtTable, InvalidLine, TransactionRecord

_logger = get_logger("debt_ledger.aggregate")


def iter_lines(path: str | PathLike[str]) -> Iterator[str]:
    """Yield the lines of ``path`` one at a time without their terminators.

    The file is opened on the first ``next()`` and closed once the generator
    is exhausted or closed. I/O errors surface as the builtin ``OSError``
    subclasses; :func:`aggregate_file` maps them to ledger errors.
    """

    with open(path, encoding=ENCODING, newline="\n") as f:
        for raw in f:
            line = raw[:-1] if raw.endswith("\n") else raw
            if line.endswith("\r"):
                line = line[:-1]
            yield line


def _describe(exc: ValueError) -> str:
    if isinstance(exc, ValidationError):
        parts = []
        for err in exc.errors():
            field = ".".join(str(p) for p in err.get("loc", ()))
            msg = str(err.get("msg", "")).removeprefix("Value error, ")
            parts.append(f"{field}: {msg}" if field else msg)
        return "; ".join(parts)
    return str(exc)


def parse_line(line: str) -> TransactionRecord:
    """Parse one ledger line into a :class:`TransactionRecord`.

    Raises ``ValueError`` (including pydantic's ``ValidationError``) when the
    line has fewer than three fields, an empty name, or an amount that is not
    a finite number.
    """

    fields = line.split(DELIMITER)
    if len(fields) < 3:
        raise ValueError(f"expected 3 fields, found {len(fields)}")
    payer, payee, amount = fields[:3]
    return TransactionRecord(payer=payer, payee=payee, amount=amount)


def aggregate_lines(lines: Iterable[str]) -> AggregationResult:
    """Fold ``lines`` into a debt table.

    Valid lines add their amount to ``table[key]`` in encounter order.
    Invalid lines are logged at WARNING and returned in
    :attr:`AggregationResult.skipped`. A line whose amount would push its
    running total past the float range is skipped the same way and leaves the
    total unchanged.
    """

    table: DebtTable = {}
    skipped: list[InvalidLine] = []
    lines_read = 0

    for lines_read, line in enumerate(lines, start=1):
        try:
            record = parse_line(line)
            key = record.key
            total = table.get(key, 0.0) + record.amount
            if not math.isfinite(total):
                raise ValueError(f"running total for {key!r} overflows")
        except ValueError as e:
            invalid = InvalidLine(line_number=lines_read, content=line, reason=_describe(e))
            _logger.warning(
                "Skipping invalid line %d (%s): %r",
                invalid.line_number,
                invalid.reason,
                invalid.content,
            )
            skipped.append(invalid)
            continue

        table[key] = total

    return AggregationResult(table=table, skipped=tuple(skipped), lines_read=lines_read)


def aggregate_file(path: str | PathLike[str]) -> AggregationResult:
    """Read the ledger at ``path`` and aggregate it.

    An existing empty file yields an empty table. A missing file raises
    :class:`~debt_ledger.errors.SourceNotFound`; one that cannot be opened or
    decoded raises :class:`~debt_ledger.errors.SourceUnreadable`; any other
    ``OSError`` raises :class:`~debt_ledger.errors.UnexpectedIO`.
    """

    source = Path(path)
    lines = iter_lines(source)
    try:
        result = aggregate_lines(lines)
    except FileNotFoundError as e:
        raise SourceNotFound(source) from e
    except PermissionError as e:
        raise SourceUnreadable(source, "Permission denied") from e
    except IsADirectoryError as e:
        raise SourceUnreadable(source, "Is a directory") from e
    except UnicodeDecodeError as e:
        raise SourceUnreadable(source, f"Not valid {ENCODING} text ({e.reason})") from e
    except OSError as e:
        raise UnexpectedIO(source, f"Read failed ({e.strerror or e})") from e
    finally:
        lines.close()

    _logger.info(
        "Aggregated %s: %d lines read, %d skipped, %d debts",
        source,
        result.lines_read,
        len(result.skipped),
        len(result.table),
    )
    return result


__all__ = ["aggregate_file", "aggregate_lines", "iter_lines", "parse_line"]
