"""Shared fixtures.

Real statement PDFs are personal data, so batch tests run against a fake
``pdfplumber.open`` that serves page texts keyed by file name.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Union

import pytest

import advanzia2csv.logging_setup as logging_setup
import advanzia2csv.parser as parser_mod

STATEMENT_PAGE = """ADVANZIA BANK S.A.
Kartennummer 5555 **** **** 1234
ALTER SALDO 0,00
some prefix26.01.2021
IKEA BORLANGE - SEK 111,00 (KURS 11,1111)
BORLANGE
18,30
27.02.2022
FABRIQUE - SEK 1111,00 (KURS 11,1111)
STOCKHOLM
19,23
27.11.2023
Inc. - SEK 111,11 (KURS 11,1111)
UPPLANDS VAS
14,62 some ending
NEUER SALDO 52,15
Zahlbar bis 15.12.2023
"""

SECOND_PAGE = """ALTER SALDO 52,15
03.12.2023
AMAZON EU SARL
LUXEMBOURG
42,00
NEUER SALDO 94,15
"""

PageSpec = Union[str, Exception]


class FakePage:
    def __init__(self, spec: PageSpec) -> None:
        self._spec = spec

    def extract_text(self):
        if isinstance(self._spec, Exception):
            raise self._spec
        return self._spec


class FakePDF:
    def __init__(self, pages: List[PageSpec]) -> None:
        self.pages = [FakePage(p) for p in pages]
        self.closed = False

    def __enter__(self) -> "FakePDF":
        return self

    def __exit__(self, *exc) -> None:
        self.closed = True


class FakeDocuments(Dict[str, List[PageSpec]]):
    """File name -> page specs, plus every ``FakePDF`` handed out."""

    def __init__(self) -> None:
        super().__init__()
        self.opened: List[FakePDF] = []


@pytest.fixture(autouse=True)
def _reset_logging():
    """Undo ``configure_logging`` so caplog sees package records in every test."""
    yield
    logger = logging.getLogger("advanzia2csv")
    for h in list(logger.handlers):
        logger.removeHandler(h)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
    logging_setup._CONFIGURED = False


@pytest.fixture
def fake_pdfs(monkeypatch: pytest.MonkeyPatch) -> FakeDocuments:
    """Documents served by the patched ``pdfplumber.open``.

    Names missing from the map fail to open like a corrupt file would.
    """
    documents = FakeDocuments()

    def _open(path):
        name = Path(path).name
        if name not in documents:
            raise ValueError(f"No /Root object! - Is this really a PDF? ({name})")
        pdf = FakePDF(documents[name])
        documents.opened.append(pdf)
        return pdf

    monkeypatch.setattr(parser_mod.pdfplumber, "open", _open)
    return documents
