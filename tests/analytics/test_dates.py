from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from cashflow.analytics.dates import (
    SUPPORTED_PERIODS,
    ParseError,
    describe_period,
    resolve_date_range,
    shift_months,
)

NOW = datetime(2024, 6, 15, 12, 30, 0)


@pytest.mark.parametrize("period", [*SUPPORTED_PERIODS, None, "", "bogus", "2023"])
def test_every_period_yields_ordered_range(period):
    rng = resolve_date_range(period, now=NOW)

    assert rng.start_date <= rng.end_date


def test_four_digit_year_covers_whole_year():
    rng = resolve_date_range("2023", now=NOW)

    assert rng.start_date == datetime(2023, 1, 1, 0, 0, 0)
    assert rng.end_date == datetime(2023, 12, 31, 23, 59, 59, 999000)


def test_yesterday_is_one_day_minus_one_millisecond():
    rng = resolve_date_range("yesterday", now=NOW)

    assert rng.start_date == datetime(2024, 6, 14)
    assert rng.end_date - rng.start_date == timedelta(hours=24) - timedelta(milliseconds=1)


@pytest.mark.parametrize(
    ("period", "expected_start"),
    [
        ("last_30_days", NOW - timedelta(days=30)),
        ("last_90_days", NOW - timedelta(days=90)),
        ("last_week", NOW - timedelta(days=7)),
        ("last_month", datetime(2024, 5, 15, 12, 30)),
        ("last_quarter", datetime(2024, 3, 15, 12, 30)),
        ("last_6_months", datetime(2023, 12, 15, 12, 30)),
        ("last_year", datetime(2023, 6, 15, 12, 30)),
    ],
)
def test_rolling_periods_end_now(period, expected_start):
    rng = resolve_date_range(period, now=NOW)

    assert rng.start_date == expected_start
    assert rng.end_date == NOW


def test_current_month_spans_full_calendar_month():
    rng = resolve_date_range("current_month", now=datetime(2024, 2, 10, 8, 0))

    assert rng.start_date == datetime(2024, 2, 1)
    assert rng.end_date == datetime(2024, 2, 29, 23, 59, 59, 999000)


def test_current_year_spans_full_calendar_year():
    rng = resolve_date_range("current_year", now=NOW)

    assert rng.start_date == datetime(2024, 1, 1)
    assert rng.end_date == datetime(2024, 12, 31, 23, 59, 59, 999000)


def test_unrecognised_period_falls_back_to_thirty_days():
    rng = resolve_date_range("fortnight", now=NOW)

    assert rng.start_date == NOW - timedelta(days=30)
    assert rng.end_date == NOW


def test_explicit_dates_are_used_verbatim():
    rng = resolve_date_range("last_year", "2024-01-01", "2024-03-31", now=NOW)

    assert rng.start_date == datetime(2024, 1, 1)
    assert rng.end_date == datetime(2024, 3, 31)


def test_start_date_only_runs_until_now():
    rng = resolve_date_range(None, start_date="2024-05-01", now=NOW)

    assert rng.start_date == datetime(2024, 5, 1)
    assert rng.end_date == NOW


def test_end_date_only_starts_thirty_days_earlier():
    rng = resolve_date_range(None, end_date="2024-03-31", now=NOW)

    assert rng.start_date == datetime(2024, 3, 1)
    assert rng.end_date == datetime(2024, 3, 31)


@pytest.mark.parametrize("bad", ["yesterday-ish", "2024-13-01", "31/01/2024"])
def test_unparseable_dates_raise_parse_error(bad):
    with pytest.raises(ParseError):
        resolve_date_range(start_date=bad, end_date="2024-12-31", now=NOW)


def test_inverted_range_is_rejected():
    with pytest.raises(ParseError):
        resolve_date_range(start_date="2024-05-01", end_date="2024-04-01", now=NOW)


def test_year_outside_calendar_is_rejected():
    with pytest.raises(ParseError):
        resolve_date_range("0000", now=NOW)


def test_end_date_too_early_for_default_window_is_rejected():
    with pytest.raises(ParseError):
        resolve_date_range(end_date="0001-01-05", now=NOW)


def test_earliest_year_still_resolves():
    rng = resolve_date_range("0001", now=NOW)

    assert rng.start_date == datetime(1, 1, 1)


def test_start_date_in_future_is_rejected():
    with pytest.raises(ParseError):
        resolve_date_range(start_date="2030-01-01", now=NOW)


def test_shift_months_clamps_to_month_end():
    assert shift_months(datetime(2024, 8, 31, 9, 0), -6) == datetime(2024, 2, 29, 9, 0)
    assert shift_months(datetime(2024, 1, 31), -1) == datetime(2023, 12, 31)


def test_describe_period_marks_custom_ranges():
    assert describe_period("last_90_days") == "last_90_days"
    assert describe_period("last_90_days", start_date="2024-01-01") == "custom"
    assert describe_period(None, end_date="2024-01-01") == "custom"
