"""CLI for the ``debt_ledger`` package.

Exposes a Typer-based console interface that reads a ``payer,payee,amount``
ledger and writes the summed debts per ordered pair. Business logic lives in
:mod:`debt_ledger.pipeline` and the modules it sequences; this module only
parses arguments, configures logging and maps failures to exit codes.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from .config import DEFAULT_OUTPUT_NAME, resolve_destination
from .errors import LedgerError
from .logging_setup import configure_logging

app = typer.Typer(add_completion=False)

_EPILOG = (
    "Examples:\n\n"
    "  $ debt-ledger path/to/your/file.csv\n\n"
    "  $ debt-ledger path/to/your/file.csv customOutput.csv"
)


@app.command(no_args_is_help=True, epilog=_EPILOG)
def calculate_debts_cmd(
    csv_file_path: Annotated[
        Path,
        typer.Argument(
            help="Ledger of payer,payee,amount lines (no header).",
            exists=False,  # the pipeline reports missing/unreadable sources itself
        ),
    ],
    output_file_name: Annotated[
        str | None,
        typer.Argument(help="Destination file; takes precedence over --output."),
    ] = None,
    output: Annotated[
        str | None,
        typer.Option("--output", "-o", help="Output file", metavar="FILE"),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(help="Logging level for diagnostics on stderr (DEBUG, INFO, WARNING...)."),
    ] = "INFO",
) -> None:
    """Sum what each payer owes each payee and write the totals."""

    try:
        configure_logging(log_level)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--log-level") from e

    # Deferred import to keep --help fast
    from .pipeline import run

    destination = resolve_destination(output_file_name, output, default=DEFAULT_OUTPUT_NAME)
    try:
        report = run(csv_file_path, destination)
    except LedgerError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e

    if report.skipped:
        typer.echo(f"Skipped {len(report.skipped)} invalid line(s).", err=True)
    typer.echo(f"Output written to {report.destination}")


def main() -> None:
    """Console-script entry point."""

    app()


if __name__ == "__main__":  # pragma: no cover - exercised via console script
    main()
