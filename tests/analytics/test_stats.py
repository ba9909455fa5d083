from __future__ import annotations

import math
from decimal import Decimal

from cashflow.analytics.stats import SampleStats, compute_stats, safe_ratio, to_decimal


def test_empty_sample_is_all_zero():
    assert compute_stats([]) == SampleStats(mean=Decimal("0"), std_dev=Decimal("0"))


def test_single_value_has_no_spread():
    stats = compute_stats([5])

    assert stats.mean == 5
    assert stats.std_dev == 0


def test_population_standard_deviation():
    stats = compute_stats([1, 2, 3, 4, 5])

    assert stats.mean == 3
    assert math.isclose(float(stats.std_dev), math.sqrt(2))


def test_decimal_sums_do_not_drift():
    stats = compute_stats([Decimal("0.1")] * 10)

    assert stats.mean == Decimal("0.1")
    assert stats.std_dev == 0


def test_float_inputs_use_their_shortest_repr():
    assert to_decimal(0.1) == Decimal("0.1")
    assert to_decimal(None) == 0


def test_safe_ratio_guards_zero_denominator():
    assert safe_ratio(Decimal("10"), Decimal("0")) == 0
    assert safe_ratio(Decimal("10"), Decimal("4")) == Decimal("2.5")
