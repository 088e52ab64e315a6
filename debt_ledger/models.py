"""Data models and type aliases for ``debt_ledger``.

A run turns raw ledger lines into :class:`TransactionRecord` objects, folds
them into a :data:`DebtTable`, and reports what it did through
:class:`AggregationResult` and :class:`RunReport`.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from pathlib import Path
from typing import TypeAlias

from pydantic import BaseModel, ConfigDict, field_validator

from .config import DELIMITER

# Plain ASCII decimal, optionally signed, with an optional exponent.
_AMOUNT_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)

# ---------------------------------------------------------------------------
# Debt table
# ---------------------------------------------------------------------------

DebtTable: TypeAlias = dict[str, float]
"""Mapping of debt key (``"payer,payee"``) to the accumulated amount.

Iteration order is first-insertion order and is the order totals are written.
"""


def debt_key(payer: str, payee: str) -> str:
    """Return the canonical key for the ordered pair ``(payer, payee)``.

    ``debt_key("A", "B")`` and ``debt_key("B", "A")`` are different keys; no
    netting happens anywhere in the pipeline.
    """

    return f"{payer}{DELIMITER}{payee}"


# ---------------------------------------------------------------------------
# Input records
# ---------------------------------------------------------------------------


class TransactionRecord(BaseModel):
    """One validated ledger line: ``payer`` owes ``payee`` ``amount``.

    Names are kept exactly as they appear in the line (no trimming). The
    amount must be a plain ASCII decimal such as ``20``, ``-3.5`` or
    ``1e3`` (surrounding whitespace allowed) whose value is finite; digit
    separators, non-ASCII digits, hex and ``nan``/``inf`` are rejected.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    payer: str
    payee: str
    amount: float

    @field_validator("payer", "payee")
    @classmethod
    def _name_non_empty(cls, v: str) -> str:
        if v == "":
            raise ValueError("name must be non-empty")
        return v

    @field_validator("amount", mode="before")
    @classmethod
    def _amount_finite(cls, v: object) -> float:
        if isinstance(v, str):
            token = v.strip()
            if token == "":
                raise ValueError("amount is empty")
            if not _AMOUNT_RE.fullmatch(token):
                raise ValueError(f"amount is not a number: {v!r}")
            v = float(token)
        if isinstance(v, bool) or not isinstance(v, int | float):
            raise ValueError("amount must be a number")
        fv = float(v)
        if not math.isfinite(fv):
            raise ValueError(f"amount is not finite: {fv!r}")
        return fv

    @property
    def key(self) -> str:
        return debt_key(self.payer, self.payee)


# ---------------------------------------------------------------------------
# Diagnostics and results
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class InvalidLine:
    """A ledger line that was skipped.

    ``line_number`` is 1-based; ``content`` is the line without its
    terminator; ``reason`` says which check failed.
    """

    line_number: int
    content: str
    reason: str


@dataclass(frozen=True, slots=True)
class AggregationResult:
    """Outcome of one aggregation pass."""

    table: DebtTable
    skipped: tuple[InvalidLine, ...] = ()
    lines_read: int = 0


@dataclass(frozen=True, slots=True)
class RunReport:
    """What a successful pipeline run produced."""

    source: Path
    destination: Path
    rows_written: int
    skipped: tuple[InvalidLine, ...] = ()
