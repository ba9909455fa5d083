from __future__ import annotations

import math

import pytest

from cashflow.analytics.dates import resolve_date_range
from cashflow.analytics.revenue import list_plans, revenue_summary


@pytest.fixture()
def seeded(add_revenue):
    add_revenue(100, "2024-01-05", plan_id="pro", category="subscription")
    add_revenue(200, "2024-01-20", plan_id="pro", category="subscription")
    add_revenue(30, "2024-02-03", plan_id="basic", category=None)
    add_revenue(70, "2024-02-14", plan_id="basic", category="addon")


def test_list_plans_reports_per_plan_statistics(store, full_range, seeded):
    result = list_plans(store, full_range, period="last_90_days")

    assert result.total_plans == 2
    by_plan = {plan.plan_id: plan for plan in result.plans}
    assert by_plan["pro"].total_revenue == 300.0
    assert by_plan["pro"].transaction_count == 2
    assert by_plan["pro"].average_transaction_amount == 150.0
    assert by_plan["basic"].average_transaction_amount == 50.0
    assert result.period == "last_90_days"


def test_plans_without_revenue_in_range_are_absent(store, add_revenue):
    add_revenue(10, "2023-03-01", plan_id="legacy")
    add_revenue(10, "2024-03-01", plan_id="pro")

    result = list_plans(store, resolve_date_range("2024"))

    assert [plan.plan_id for plan in result.plans] == ["pro"]


def test_summary_grouped_by_plan(store, full_range, seeded):
    result = revenue_summary(store, full_range, "plan")

    assert result.total_revenue == 400.0
    assert result.total_transactions == 4
    assert result.average_transaction_amount == 100.0
    assert [(b.key, b.total_amount, b.transaction_count) for b in result.grouped_data] == [
        ("basic", 100.0, 2),
        ("pro", 300.0, 2),
    ]
    assert [b.percentage for b in result.grouped_data] == [25.0, 75.0]


def test_summary_grouped_by_month(store, full_range, seeded):
    result = revenue_summary(store, full_range, "month")

    assert [(b.key, b.total_amount) for b in result.grouped_data] == [
        ("2024-01", 300.0),
        ("2024-02", 100.0),
    ]


def test_category_grouping_skips_uncategorised_revenue(store, full_range, seeded):
    result = revenue_summary(store, full_range, "category")

    keys = [b.key for b in result.grouped_data]
    assert keys == ["addon", "subscription"]
    assert sum(b.total_amount for b in result.grouped_data) == 370.0


@pytest.mark.parametrize("group_by", ["plan", "month"])
def test_group_totals_add_up_to_overall_total(store, full_range, seeded, group_by):
    result = revenue_summary(store, full_range, group_by)

    assert math.isclose(sum(b.total_amount for b in result.grouped_data), result.total_revenue)


def test_empty_range_yields_zeroes(store, full_range):
    result = revenue_summary(store, full_range, "plan")

    assert result.total_revenue == 0
    assert result.total_transactions == 0
    assert result.average_transaction_amount == 0
    assert result.grouped_data == []


def test_unknown_grouping_is_rejected(store, full_range):
    with pytest.raises(ValueError):
        revenue_summary(store, full_range, "vendor")


def test_repeated_calls_are_identical(store, full_range, seeded):
    first = revenue_summary(store, full_range, "month").model_dump()
    second = revenue_summary(store, full_range, "month").model_dump()

    assert first == second
