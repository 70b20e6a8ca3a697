import re
from pathlib import Path
from typing import Iterable, List, Optional, Union

import pdfplumber

from .errors import StatementLoadError
from .logging_setup import TRACE, get_logger
from .models import Transaction

logger = get_logger(__name__)

DATE_REGEX = re.compile(r"\d{2}\.\d{2}\.\d{4}")
# Statement amounts and exchange rates, e.g. "18,30" or "KURS 11,1111".
NUMBER_REGEX = re.compile(r"\d+,\d+")

# Opening and closing balance lines bracket the transaction table on every page.
STARTING_TEXT = "ALTER SALDO"
ENDING_TEXT = "NEUER SALDO"


def window_page(text: str, start: str = STARTING_TEXT, end: str = ENDING_TEXT) -> str:
    """Cut a page down to the text between the balance markers.

    A missing start marker keeps the page from the beginning, a missing end
    marker keeps it to the end.
    """
    start_pos = text.find(start)
    if start_pos == -1:
        start_pos = 0
    end_pos = text.find(end)
    if end_pos == -1:
        end_pos = len(text)
    return text[start_pos:end_pos]


def split_fragments(text: str, pattern: re.Pattern = DATE_REGEX) -> List[str]:
    """Split ``text`` on date markers, keeping each marker at the head of its fragment.

    Anything before the first marker is dropped.
    """
    starts = [m.start() for m in pattern.finditer(text)]
    if not starts:
        return []
    bounds = starts[1:] + [len(text)]
    return [text[s:e] for s, e in zip(starts, bounds) if e > s]


def _parse_amount(text: str) -> float:
    match = NUMBER_REGEX.search(text)
    if not match:
        return 0.0
    try:
        return float(match.group(0).replace(",", "."))
    except ValueError:
        return 0.0


def parse_fragment(fragment: str) -> Optional[Transaction]:
    """Parse one date-anchored fragment into a transaction.

    The first line is the date. The last money-number in the rest is the
    amount; earlier ones (exchange rates, foreign amounts) stay in the
    description. Returns ``None`` when any field comes out empty or the amount
    is zero, so a real 0,00 booking is dropped along with parse failures.
    """
    part = fragment.strip()
    if not part:
        return None

    date, sep, rest = part.partition("\n")
    if not sep or not DATE_REGEX.search(date):
        logger.log(TRACE, "Failed to process part: %r", part)
        return None

    numbers = list(NUMBER_REGEX.finditer(rest))
    if numbers:
        pos = numbers[-1].start()
        description, amount_text = rest[:pos].strip(), rest[pos:].strip()
    else:
        description, amount_text = "", ""

    amount = _parse_amount(amount_text)
    description = description.replace("\n", ", ").strip()
    date = date.strip()

    if not date or not description or amount == 0.0:
        logger.log(TRACE, "Failed to process part: %r", rest)
        return None

    txn = Transaction(date=date, description=description, amount=amount)
    logger.debug("Found transaction: %s", txn)
    return txn


def transactions_from_text(text: str) -> List[Transaction]:
    transactions: List[Transaction] = []
    for part in split_fragments(text):
        txn = parse_fragment(part)
        if txn is not None:
            transactions.append(txn)
    return transactions


def transactions_from_pages(pages: Iterable) -> List[Transaction]:
    """Extract transactions from pdfplumber-like pages, in page order.

    A page whose text cannot be extracted is logged and skipped.
    """
    transactions: List[Transaction] = []
    for page_num, page in enumerate(pages, start=1):
        try:
            text = page.extract_text() or ""
        except Exception as e:
            logger.error("Failed to extract text from page %d: %s", page_num, e)
            continue
        transactions.extend(transactions_from_text(window_page(text)))
    return transactions


def extract_transactions(pdf_path: Union[str, Path]) -> List[Transaction]:
    """Parse all transactions from one statement PDF.

    Raises ``StatementLoadError`` when the file cannot be opened as a PDF.
    """
    try:
        pdf = pdfplumber.open(pdf_path)
    except Exception as e:
        raise StatementLoadError(pdf_path, e) from e

    with pdf:
        try:
            pages = pdf.pages
        except Exception as e:
            raise StatementLoadError(pdf_path, e) from e
        logger.info("Loading transactions from %s", pdf_path)
        return transactions_from_pages(pages)
