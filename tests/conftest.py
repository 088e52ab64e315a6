"""Pytest configuration for test isolation.

The CLI configures the ``debt_ledger`` package logger once per process (one
``StreamHandler``, ``propagate=False``). When CLI tests and library tests run
in the same session, that configuration would leak into later tests and hide
records from ``caplog``. An autouse fixture restores the logger state around
every test.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from debt_ledger import logging_setup


@pytest.fixture(autouse=True)
def _isolate_package_logger(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    logger = logging.getLogger("debt_ledger")
    saved_handlers = list(logger.handlers)
    saved_level = logger.level
    saved_propagate = logger.propagate
    monkeypatch.setattr(logging_setup, "_CONFIGURED", False)
    yield
    logger.handlers[:] = saved_handlers
    logger.setLevel(saved_level)
    logger.propagate = saved_propagate


@pytest.fixture
def write_ledger(tmp_path: Path) -> Callable[..., Path]:
    """Write raw ledger text (bytes-exact, no newline translation) to ``tmp_path``."""

    def _write(text: str, name: str = "ledger.csv") -> Path:
        path = tmp_path / name
        path.write_bytes(text.encode("utf-8"))
        return path

    return _write
