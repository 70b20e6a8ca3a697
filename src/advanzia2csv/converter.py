from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Union

import pandas as pd

from .errors import NoTransactionsFoundError, OutputWriteError, StatementLoadError
from .logging_setup import get_logger
from .models import Transaction
from .parser import extract_transactions

logger = get_logger(__name__)

PDF_SUFFIX = ".pdf"
CSV_COLUMNS = ["date", "description", "amount"]


def discover_pdfs(pdf_or_folder: Union[str, Path]) -> List[Path]:
    """Return the statement PDFs to convert.

    A folder is searched recursively and the result is sorted so repeated runs
    write rows in the same order. A file path is returned as is.
    """
    root = Path(pdf_or_folder)
    if not root.is_dir():
        return [root]
    return sorted(
        p for p in root.rglob("*") if p.is_file() and p.suffix.lower() == PDF_SUFFIX
    )


def collect_transactions(paths: Iterable[Path]) -> List[Transaction]:
    transactions: List[Transaction] = []
    for pdf_path in paths:
        try:
            transactions.extend(extract_transactions(pdf_path))
        except StatementLoadError as e:
            logger.warning("%s", e)
    return transactions


def _to_df(transactions: List[Transaction]) -> pd.DataFrame:
    if not transactions:
        return pd.DataFrame(columns=CSV_COLUMNS)
    return pd.DataFrame([t.as_row() for t in transactions], columns=CSV_COLUMNS)


def transactions_to_csv(transactions: List[Transaction]) -> str:
    return _to_df(transactions).to_csv(index=False)


def write_csv(transactions: List[Transaction], csv_path: Union[str, Path]) -> None:
    try:
        _to_df(transactions).to_csv(csv_path, index=False)
    except OSError as e:
        raise OutputWriteError(csv_path, e) from e


def convert(
    pdf_or_folder: Union[str, Path],
    csv_path: Union[str, Path],
    swap_sign: bool = False,
) -> List[Transaction]:
    """Convert one statement PDF, or every PDF under a folder, into a CSV file.

    Returns the transactions that were written. Raises
    ``NoTransactionsFoundError`` when nothing could be extracted and
    ``OutputWriteError`` when the CSV cannot be written.
    """
    transactions = collect_transactions(discover_pdfs(pdf_or_folder))

    if swap_sign:
        transactions = [t.swapped() for t in transactions]

    if not transactions:
        raise NoTransactionsFoundError(pdf_or_folder)

    write_csv(transactions, csv_path)
    logger.info("%d transactions saved to %s", len(transactions), csv_path)
    return transactions
