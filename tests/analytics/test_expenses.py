from __future__ import annotations

import math

import pytest

from cashflow.analytics.expenses import expense_summary


@pytest.fixture()
def seeded(add_expense):
    add_expense(50, "2024-01-03", category="Hosting", vendor="AWS", is_recurring=True)
    add_expense(150, "2024-01-18", category="Payroll", vendor=None)
    add_expense(30, "2024-02-02", category="Hosting", vendor="AWS", is_recurring=True)
    add_expense(20, "2024-02-09", category="Travel", vendor="Rail Co")


def test_summary_includes_recurring_subset(store, full_range, seeded):
    result = expense_summary(store, full_range, "category", period="last_90_days")

    assert result.total_expenses == 250.0
    assert result.total_transactions == 4
    assert result.average_transaction_amount == 62.5
    assert result.recurring_expenses.total == 80.0
    assert result.recurring_expenses.count == 2
    assert result.recurring_expenses.percentage == 32.0


def test_grouped_by_category(store, full_range, seeded):
    result = expense_summary(store, full_range, "category")

    assert [(b.key, b.total_amount, b.transaction_count) for b in result.grouped_data] == [
        ("Hosting", 80.0, 2),
        ("Payroll", 150.0, 1),
        ("Travel", 20.0, 1),
    ]
    assert math.isclose(sum(b.percentage for b in result.grouped_data), 100.0)


def test_vendor_grouping_skips_missing_vendor(store, full_range, seeded):
    result = expense_summary(store, full_range, "vendor")

    assert [(b.key, b.total_amount) for b in result.grouped_data] == [
        ("AWS", 80.0),
        ("Rail Co", 20.0),
    ]


def test_grouped_by_month(store, full_range, seeded):
    result = expense_summary(store, full_range, "month")

    assert [(b.key, b.total_amount, b.transaction_count) for b in result.grouped_data] == [
        ("2024-01", 200.0, 2),
        ("2024-02", 50.0, 2),
    ]


def test_no_expenses_means_zero_recurring_share(store, full_range):
    result = expense_summary(store, full_range)

    assert result.total_expenses == 0
    assert result.recurring_expenses.total == 0
    assert result.recurring_expenses.percentage == 0
    assert result.grouped_data == []


def test_unknown_grouping_is_rejected(store, full_range):
    with pytest.raises(ValueError):
        expense_summary(store, full_range, "plan")
