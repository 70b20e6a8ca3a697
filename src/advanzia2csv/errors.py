"""Exceptions raised by the statement converter.

Only ``NoTransactionsFoundError`` and ``OutputWriteError`` end a conversion.
``StatementLoadError`` is raised per document and the batch recovers from it.
"""

from pathlib import Path
from typing import Union

PathLike = Union[str, Path]


class Advanzia2CsvError(Exception):
    """Base class for all converter errors."""


class StatementLoadError(Advanzia2CsvError):
    def __init__(self, path: PathLike, reason: object) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Failed to load PDF file {self.path}: {reason}")


class NoTransactionsFoundError(Advanzia2CsvError):
    def __init__(self, path: PathLike) -> None:
        self.path = Path(path)
        super().__init__(f"No transactions found in {self.path}")


class OutputWriteError(Advanzia2CsvError):
    def __init__(self, path: PathLike, reason: object) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Failed to write {self.path}: {reason}")
