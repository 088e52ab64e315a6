"""Public interface for the ``debt_ledger`` package.

Re-exports the pipeline entry point, the per-stage operations and the public
models/errors as the stable import surface. There is no runtime logic here.
"""

from .aggregate import aggregate_file, aggregate_lines, iter_lines, parse_line
from .config import DEFAULT_OUTPUT_NAME, resolve_destination
from .errors import (
    DestinationUnwritable,
    LedgerError,
    SourceNotFound,
    SourceUnreadable,
    UnexpectedIO,
)
from .models import (
    AggregationResult,
    DebtTable,
    InvalidLine,
    RunReport,
    TransactionRecord,
    debt_key,
)
from .pipeline import run
from .writer import format_amount, serialize_table, write_table

__all__ = [
    # Pipeline
    "run",
    "resolve_destination",
    "DEFAULT_OUTPUT_NAME",
    # Stages
    "aggregate_file",
    "aggregate_lines",
    "iter_lines",
    "parse_line",
    "format_amount",
    "serialize_table",
    "write_table",
    # Models / types
    "AggregationResult",
    "DebtTable",
    "InvalidLine",
    "RunReport",
    "TransactionRecord",
    "debt_key",
    # Errors
    "LedgerError",
    "SourceNotFound",
    "SourceUnreadable",
    "DestinationUnwritable",
    "UnexpectedIO",
]
