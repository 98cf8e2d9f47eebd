from datetime import datetime, timezone

from expense_app.repository import Expense
from expense_app.summary import (
    UNCATEGORIZED,
    all_time_total,
    category_totals,
    format_amount,
    format_expense_date,
)


def _expense(expense_id, amount, date, category=""):
    return Expense(expense_id, f"item {expense_id}", amount, date, category)


EXPENSES = [
    _expense(1, 10.0, "2026-10-02T08:00:00.000Z", "Food"),
    _expense(2, 25.5, "2026-10-10T08:00:00.000Z", "Travel"),
    _expense(3, 4.5, "2026-10-11T08:00:00.000Z", "Food"),
    _expense(4, 7.0, "2026-10-12T08:00:00.000Z", ""),
    _expense(5, 99.0, "2026-09-30T23:59:59.999Z", "Food"),
]


class TestTotals:
    def test_all_time_total(self):
        assert all_time_total(EXPENSES) == 146.0

    def test_all_time_total_empty(self):
        assert all_time_total([]) == 0.0

    def test_category_totals_for_month(self):
        totals = category_totals(EXPENSES, 2026, 10)
        assert list(totals.index) == ["Travel", "Food", UNCATEGORIZED]
        assert totals["Food"] == 14.5
        assert totals[UNCATEGORIZED] == 7.0

    def test_category_totals_other_month(self):
        totals = category_totals(EXPENSES, 2026, 9)
        assert totals.to_dict() == {"Food": 99.0}

    def test_category_totals_skips_unparseable_dates(self):
        expenses = EXPENSES + [_expense(6, 50.0, "not a date", "Food")]
        totals = category_totals(expenses, 2026, 10)
        assert totals["Food"] == 14.5

    def test_category_totals_empty(self):
        assert category_totals([], 2026, 10).empty
        assert category_totals(EXPENSES, 2025, 1).empty


class TestFormatting:
    def test_format_amount(self):
        assert format_amount(3.5, "₹") == "₹ 3.50"
        assert format_amount(0, "$") == "$ 0.00"

    def test_format_expense_date_is_local_date(self):
        stamp = "2026-10-17T12:00:00.000Z"
        expected = datetime(2026, 10, 17, 12, tzinfo=timezone.utc).astimezone().strftime("%d/%m/%Y")
        assert format_expense_date(stamp) == expected

    def test_format_expense_date_keeps_unparseable_text(self):
        assert format_expense_date("yesterday") == "yesterday"
