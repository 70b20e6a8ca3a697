from dataclasses import dataclass, replace
from typing import Dict, Union


@dataclass
class Transaction:
    date: str  # DD.MM.YYYY, verbatim from the statement
    description: str
    amount: float  # positive = charge as printed on the statement

    def swapped(self) -> "Transaction":
        return replace(self, amount=-self.amount)

    def as_row(self) -> Dict[str, Union[str, float]]:
        return {
            "date": self.date,
            "description": self.description,
            "amount": self.amount,
        }
