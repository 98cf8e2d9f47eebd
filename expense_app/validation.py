import math
import re
from dataclasses import dataclass


class InvalidExpenseInput(ValueError):
    """Raised when the add-expense form cannot be submitted."""

    def __init__(self, heading: str, message: str):
        super().__init__(message)
        self.heading = heading
        self.message = message


# Plain decimal notation only; rejects "1_000", "nan", "inf" and trailing junk
AMOUNT_PATTERN = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


@dataclass(frozen=True)
class ExpenseInput:
    title: str
    amount: float
    category: str


def validate_expense_form(title: str, amount: str, category: str) -> ExpenseInput:
    """Trim the form fields and check title and amount before they reach the store."""
    title = (title or "").strip()
    amount_text = (amount or "").strip()
    if not title or not amount_text:
        raise InvalidExpenseInput("Missing data", "Please enter both title and amount")
    value = float(amount_text) if AMOUNT_PATTERN.fullmatch(amount_text) else math.nan
    if not math.isfinite(value) or value <= 0:
        raise InvalidExpenseInput("Invalid amount", "Please enter a valid positive number")
    return ExpenseInput(title=title, amount=value, category=(category or "").strip())
