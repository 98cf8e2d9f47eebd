from datetime import datetime, timezone
from typing import Iterable

import pandas as pd

from .repository import Expense

UNCATEGORIZED = "Uncategorized"


def all_time_total(expenses: Iterable[Expense]) -> float:
    return float(sum(e.amount for e in expenses))


def category_totals(expenses: Iterable[Expense], year: int, month: int) -> pd.Series:
    """Spending per category for one UTC calendar month, largest first."""
    df = pd.DataFrame(
        [(e.category, e.amount, e.date) for e in expenses],
        columns=["category", "amount", "date"],
    )
    if df.empty:
        return pd.Series(dtype="float64")
    # Unparseable stamps become NaT and never match a month
    stamps = pd.to_datetime(df["date"], utc=True, format="ISO8601", errors="coerce")
    df = df[(stamps.dt.year == year) & (stamps.dt.month == month)]
    if df.empty:
        return pd.Series(dtype="float64")
    labels = df["category"].str.strip().replace("", UNCATEGORIZED)
    totals = df.groupby(labels)["amount"].sum()
    return totals.sort_values(ascending=False)


def format_amount(value: float, symbol: str) -> str:
    return f"{symbol} {value:.2f}"


def format_expense_date(stamp: str) -> str:
    """Render a stored UTC timestamp as a local calendar date."""
    try:
        moment = datetime.fromisoformat(stamp.replace("Z", "+00:00"))
    except ValueError:
        return stamp
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone().strftime("%d/%m/%Y")
