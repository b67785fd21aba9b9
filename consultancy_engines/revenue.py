"""
Module: consultancy_engines.revenue
Responsibility:
    Spread a lump invoice value evenly across consecutive calendar months
    (revenue recognition) and roll recognised amounts up by month.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import consultancy_kernel.

Invariants enforced:
    - One entry per month, for exactly ``months_to_spread`` successive
      calendar months starting at the month of the start date.
    - Every entry carries the same amount, ``round2(total / months)``.
      No remainder correction is applied to the final month, so the sum
      of entries may drift from the invoice total by up to
      ``months_to_spread * 0.005``.  ``rounding_drift`` reports it.
    - Purity: no clock access, no I/O.

Failure modes:
    - InvalidArgumentError when ``months_to_spread < 1``.

Usage:
    from consultancy_engines.revenue import RevenueAllocator
    from consultancy_kernel.domain.values import Money, Period

    lines = RevenueAllocator().spread(
        total_value=Money.of("1200.00"),
        start=Period(2026, 1),
        months_to_spread=12,
    )  # 12 x 100.00, 2026-01 .. 2026-12
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from consultancy_engines.tracer import traced_engine
from consultancy_kernel.domain.values import Money, Period
from consultancy_kernel.exceptions import InvalidArgumentError
from consultancy_kernel.logging_config import get_logger

logger = get_logger("engines.revenue")


@dataclass(frozen=True)
class RevenueLine:
    """Revenue recognised in one month."""

    period: Period
    amount: Money


class RevenueAllocator:
    """
    Spread invoice values across months.

    Contract:
        Pure functions with deterministic rounding.
        No I/O, no record-store access.
    Non-goals:
        - Does not correct rounding drift; the drift is part of the
          recognised figures the dashboard reports.
    """

    @traced_engine("revenue_spread", "1.0", fingerprint_fields=("total_value", "start", "months_to_spread"))
    def spread(
        self,
        total_value: Money,
        start: Period | date,
        months_to_spread: int,
    ) -> tuple[RevenueLine, ...]:
        """
        Spread ``total_value`` evenly over ``months_to_spread`` months.

        Args:
            total_value: Invoice value to recognise
            start: Month (or any date within it) of the first entry
            months_to_spread: Number of consecutive months, at least 1

        Returns:
            Tuple of RevenueLine ordered by period

        Raises:
            InvalidArgumentError: If months_to_spread < 1
        """
        if isinstance(months_to_spread, bool) or not isinstance(months_to_spread, int):
            raise InvalidArgumentError(
                "months_to_spread", months_to_spread, "must be an integer",
            )
        if months_to_spread < 1:
            logger.error("revenue_spread_invalid_months", extra={
                "months_to_spread": months_to_spread,
            })
            raise InvalidArgumentError(
                "months_to_spread", months_to_spread, "must be at least 1",
            )

        first = Period.of(start)
        per_month = (total_value / months_to_spread).round()

        lines = tuple(
            RevenueLine(period=first.plus_months(i), amount=per_month)
            for i in range(months_to_spread)
        )

        logger.info("revenue_spread_completed", extra={
            "total_value": str(total_value.amount),
            "start_period": str(first),
            "months_to_spread": months_to_spread,
            "per_month": str(per_month.amount),
        })
        return lines


def recognised_by_period(lines: Iterable[RevenueLine]) -> dict[Period, Money]:
    """
    Total recognised revenue per month across any number of spreads.

    Sums at full precision and rounds once per month; result is ordered
    by period.
    """
    totals: dict[Period, Decimal] = {}
    for line in lines:
        totals[line.period] = totals.get(line.period, Decimal("0")) + line.amount.amount
    return {period: Money.of(totals[period]).round() for period in sorted(totals)}


def rounding_drift(total_value: Money, lines: Iterable[RevenueLine]) -> Money:
    """Difference between the recognised entries and the invoice total (entries - total)."""
    return Money.total(line.amount for line in lines) - total_value
