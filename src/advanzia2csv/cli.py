from pathlib import Path
from typing import List

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .converter import convert
from .errors import NoTransactionsFoundError, OutputWriteError
from .logging_setup import LOG_LEVELS, configure_logging
from .models import Transaction

app = typer.Typer(help="Convert Advanzia credit card statement PDFs to CSV.")
console = Console()
err_console = Console(stderr=True)


def _print_preview(transactions: List[Transaction], limit: int = 20) -> None:
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Date", width=12)
    table.add_column("Description", width=50)
    table.add_column("Amount", justify="right")

    for txn in transactions[:limit]:
        table.add_row(txn.date, txn.description[:48], f"{txn.amount:,.2f}")

    console.print(table)
    if len(transactions) > limit:
        console.print(f"... {len(transactions) - limit} more")


def _validate_log_level(value: str) -> str:
    if value.lower() not in LOG_LEVELS:
        raise typer.BadParameter(f"must be one of: {', '.join(LOG_LEVELS)}")
    return value.lower()


@app.command()
def main(
    input: Path = typer.Argument(..., help="Path to PDF file or folder that contains PDF files"),
    output: Path = typer.Argument(..., help="Path to output CSV file"),
    swap_sign: bool = typer.Option(False, "--swap-sign", help="Swap sign of the amount"),
    log_level: str = typer.Option(
        "info", "--log-level", "-l", callback=_validate_log_level, help="Log level: error, warn, info, debug, trace"
    ),
    preview: bool = typer.Option(False, help="Print a table of the first converted transactions"),
) -> None:
    """Extract transactions from statement PDFs and write them as CSV."""
    configure_logging(log_level)

    if not input.exists():
        err_console.print(f"[red]File not found: {escape(str(input))}[/red]", soft_wrap=True)
        raise typer.Exit(code=1)

    try:
        transactions = convert(input, output, swap_sign=swap_sign)
    except (NoTransactionsFoundError, OutputWriteError) as e:
        err_console.print(f"[red]{escape(str(e))}[/red]", soft_wrap=True)
        raise typer.Exit(code=1)

    typer.echo(f"Wrote {len(transactions)} transactions to {output}")
    if preview:
        _print_preview(transactions)


def run() -> None:
    app()


if __name__ == "__main__":
    run()
