"""
Command line entry point.

    finplan project transactions.csv --start 2024-01-01 --end 2024-12-31 --balance '$1,000.00'

Loads transaction definitions, runs the projection through an
``ExecutionContext`` and prints the ledger as CSV (or writes it to ``--output``).
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Optional

import typer

from core.config import ProjectionConfig, window_from_strings
from core.errors import ProjectionError
from core.logging_setup import configure_logging
from core.utils import parse_dollar_amount
from data_prep.loader import load_transactions_csv
from data_prep.validators import validate_transactions
from engine.guard import ExecutionContext
from engine.progress import LoggingSink
from reports.export import results_to_csv, write_results_csv
from reports.stats import summarize_stats

app = typer.Typer(add_completion=False, help="Forecast an account balance from recurring transactions.")


@app.callback()
def _root() -> None:
    """Forecast an account balance from recurring transactions."""


@app.command("project")
def cmd_project(
    transactions_csv: Annotated[Path, typer.Argument(exists=True, dir_okay=False, help="Transaction definitions CSV.")],
    start: Annotated[str, typer.Option(help="Window start, YYYY-MM-DD (default: today).")] = "",
    end: Annotated[str, typer.Option(help="Window end, YYYY-MM-DD (default: a year from today).")] = "",
    balance: Annotated[str, typer.Option(help="Starting balance, e.g. '$1,000.00' or '-50'.")] = "0",
    output: Annotated[Optional[Path], typer.Option(help="Write the CSV here instead of stdout.")] = None,
    stats: Annotated[bool, typer.Option("--stats", help="Print yearly/monthly/daily statistics.")] = False,
    log_level: Annotated[Optional[str], typer.Option(help="Logging level (default: FINPLAN_LOG_LEVEL or INFO).")] = None,
) -> None:
    """Project the balance day by day over the window."""
    configure_logging(log_level)

    try:
        transactions = load_transactions_csv(str(transactions_csv))
    except ValueError as exc:
        typer.echo(f"error: cannot load {transactions_csv}: {exc}", err=True)
        raise typer.Exit(code=2)
    report = validate_transactions(transactions)
    if not report.is_valid:
        typer.echo(report.summary(), err=True)
        raise typer.Exit(code=2)
    if report.warnings:
        typer.echo(report.summary(), err=True)

    try:
        window = window_from_strings(start, end)
    except ProjectionError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=1)

    starting_balance = parse_dollar_amount(balance, assume_positive=True)

    with ExecutionContext(config=ProjectionConfig.from_env()) as ctx:
        future = ctx.submit(transactions, window, starting_balance, sink=LoggingSink())
        try:
            rows = future.result()
        except ProjectionError as exc:
            typer.echo(f"error: results generation failed: {exc}", err=True)
            raise typer.Exit(code=1)

    if output is not None:
        write_results_csv(rows, output)
    else:
        typer.echo(results_to_csv(rows), nl=False)

    if stats:
        try:
            typer.echo(summarize_stats(rows).to_text(), err=output is None)
        except ProjectionError as exc:
            typer.echo(f"error getting stats: {exc}", err=True)
            raise typer.Exit(code=1)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
