"""Fatal error taxonomy for a ledger run.

Every fatal failure is a :class:`LedgerError` carrying the offending ``path``
and a short ``reason``; the underlying ``OSError`` (when there is one) is kept
as ``__cause__``. Malformed input lines are not errors: they are recorded as
:class:`~debt_ledger.models.InvalidLine` diagnostics and skipped.
"""

from __future__ import annotations

from os import PathLike, fspath


class LedgerError(Exception):
    """Base class for failures that terminate a run."""

    def __init__(self, path: str | PathLike[str], reason: str) -> None:
        self.path = fspath(path)
        self.reason = reason
        super().__init__(f"{reason}: {self.path}")


class SourceNotFound(LedgerError):
    """The source ledger does not exist."""

    def __init__(self, path: str | PathLike[str], reason: str = "File not found") -> None:
        super().__init__(path, reason)


class SourceUnreadable(LedgerError):
    """The source exists but cannot be opened or decoded."""


class DestinationUnwritable(LedgerError):
    """The destination cannot be created or written."""


class UnexpectedIO(LedgerError):
    """Any other I/O failure while reading the source or writing the destination."""


__all__ = [
    "DestinationUnwritable",
    "LedgerError",
    "SourceNotFound",
    "SourceUnreadable",
    "UnexpectedIO",
]
