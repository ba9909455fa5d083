"""Mean and population standard deviation over monetary samples."""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

ZERO = Decimal("0")


def to_decimal(value: Decimal | float | int | str | None) -> Decimal:
    """Coerce store or caller values to ``Decimal`` without binary drift."""

    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(repr(value))
    return Decimal(value)


def as_float(value: Decimal | float | int | None) -> float:
    if value is None:
        return 0.0
    return float(value)


def safe_ratio(numerator: Decimal, denominator: Decimal) -> Decimal:
    """``numerator / denominator`` or 0 when the denominator is 0."""

    if denominator == 0:
        return ZERO
    return numerator / denominator


@dataclass(frozen=True)
class SampleStats:
    mean: Decimal = ZERO
    std_dev: Decimal = ZERO


def compute_stats(sample: Iterable[Decimal | float | int]) -> SampleStats:
    """Population statistics (variance divides by N); empty input yields zeros."""

    values = [to_decimal(v) for v in sample]
    if not values:
        return SampleStats()
    count = Decimal(len(values))
    mean = sum(values, ZERO) / count
    variance = sum(((v - mean) ** 2 for v in values), ZERO) / count
    return SampleStats(mean=mean, std_dev=variance.sqrt())
