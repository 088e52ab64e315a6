"""Run a ledger through aggregation and serialization.

The driver owns no logic beyond sequencing: it resolves the destination once,
aggregates the source, and hands the resulting table to the writer. The first
:class:`~debt_ledger.errors.LedgerError` propagates unchanged and the writer
is never invoked after a failed aggregation, so no output file is produced.
"""

from __future__ import annotations

from os import PathLike
from pathlib import Path

from .aggregate import aggregate_file
from .config import DEFAULT_OUTPUT_NAME, resolve_destination
from .logging_setup import get_logger
from .models import RunReport
from .writer import write_table

_logger = get_logger("debt_ledger.pipeline")


def run(
    source: str | PathLike[str],
    destination: str | PathLike[str] | None = None,
    *,
    default_destination: str | PathLike[str] = DEFAULT_OUTPUT_NAME,
) -> RunReport:
    """Aggregate ``source`` and write the totals to ``destination``.

    Parameters
    ----------
    source:
        Path to the ``payer,payee,amount`` ledger.
    destination:
        Where to write the totals. When ``None``, ``default_destination`` is
        used.
    default_destination:
        Fallback destination name (``output.csv``).

    Returns
    -------
    RunReport
        Source and destination paths, the number of rows written and the
        lines that were skipped as invalid.
    """

    src = Path(source)
    dest = resolve_destination(destination, default=default_destination)
    _logger.debug("Running ledger %s -> %s", src, dest)

    result = aggregate_file(src)
    written = write_table(dest, result.table)

    return RunReport(
        source=src,
        destination=written,
        rows_written=len(result.table),
        skipped=result.skipped,
    )


__all__ = ["run"]
