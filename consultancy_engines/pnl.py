"""
Module: consultancy_engines.pnl
Responsibility:
    Assemble the monthly profit and loss view: client revenue plus the
    managed-service fee, team / software / travel costs, the month's
    central overhead, the profit pool and the partner share.  Roll months
    up into quarters and year-to-date.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    Calls consultancy_engines.profit; otherwise only consultancy_kernel.

Invariants enforced:
    - The overhead of a month is the one in force on its first day
      (time-ranged series, default 4200).
    - Profit figures come from ProfitPoolCalculator, so the pool is never
      negative in any month.
    - Roll-ups add the already-rounded monthly figures; a quarter's pool is
      the sum of its monthly pools, not the pool of its summed profit.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from decimal import Decimal

from consultancy_engines.fees import FeeBreakdown
from consultancy_engines.profit import (
    CENTRAL_OVERHEAD,
    PARTNER_SHARE_PERCENT,
    ProfitPoolCalculator,
    overhead_for,
)
from consultancy_kernel.domain.intervals import IntervalSeries
from consultancy_kernel.domain.records import OverheadConfig
from consultancy_kernel.domain.values import Money, Period
from consultancy_kernel.logging_config import get_logger

logger = get_logger("engines.pnl")


@dataclass(frozen=True)
class RevenueSection:
    by_client: dict[str, Money]
    fee_fixed: Money
    fee_surveys: Money
    fee_meetings: Money
    total: Money


@dataclass(frozen=True)
class CostSection:
    hr: Money
    software: Money
    travel: Money
    total: Money


@dataclass(frozen=True)
class MonthlyPL:
    period: Period
    revenue: RevenueSection
    costs: CostSection
    gross_profit: Money
    central_overhead: Money
    profit_pool: Money
    partner_share: Money


@dataclass(frozen=True)
class PLTotals:
    """Sum of several months (quarter, year to date)."""

    periods: tuple[Period, ...]
    revenue: Money
    costs: Money
    gross_profit: Money
    central_overhead: Money
    profit_pool: Money
    partner_share: Money
    by_client: dict[str, Money] = field(default_factory=dict)


def build_monthly_pl(
    period: Period,
    revenue_by_client: Mapping[str, Money],
    fees: FeeBreakdown | None = None,
    hr_cost: Money = Money.zero(),
    software_cost: Money = Money.zero(),
    travel_cost: Money = Money.zero(),
    overhead_configs: IntervalSeries[OverheadConfig] | None = None,
    share_percent: Decimal = PARTNER_SHARE_PERCENT,
    default_overhead: Money = CENTRAL_OVERHEAD,
    calculator: ProfitPoolCalculator | None = None,
) -> MonthlyPL:
    """
    Build the P&L for one month.

    Args:
        period: Month being reported
        revenue_by_client: Recognised client revenue for the month
        fees: Managed-service fee breakdown for the month, if any
        hr_cost: Team cost for the month
        software_cost: Allocated software cost for the month
        travel_cost: Travel cost for the month
        overhead_configs: Time-ranged central overhead series
        share_percent: Partner share of the pool, in percent
        default_overhead: Overhead used when no series entry covers the month

    Returns:
        MonthlyPL with every figure rounded to 2 places
    """
    calculator = calculator or ProfitPoolCalculator()
    fee_fixed = fees.fixed if fees is not None else Money.zero()
    fee_surveys = fees.surveys if fees is not None else Money.zero()
    fee_meetings = fees.meetings if fees is not None else Money.zero()

    client_total = Money.total(revenue_by_client.values())
    total_revenue = client_total + fee_fixed + fee_surveys + fee_meetings
    total_costs = hr_cost + software_cost + travel_cost

    overhead = (
        overhead_for(period, overhead_configs, default_overhead)
        if overhead_configs is not None
        else default_overhead
    )
    profit = calculator.compute(
        total_revenue=total_revenue,
        total_costs=total_costs,
        overhead=overhead,
        share_percent=share_percent,
    )

    pl = MonthlyPL(
        period=period,
        revenue=RevenueSection(
            by_client={name: amount.round() for name, amount in revenue_by_client.items()},
            fee_fixed=fee_fixed.round(),
            fee_surveys=fee_surveys.round(),
            fee_meetings=fee_meetings.round(),
            total=total_revenue.round(),
        ),
        costs=CostSection(
            hr=hr_cost.round(),
            software=software_cost.round(),
            travel=travel_cost.round(),
            total=total_costs.round(),
        ),
        gross_profit=profit.gross_profit,
        central_overhead=overhead.round(),
        profit_pool=profit.profit_pool,
        partner_share=profit.share,
    )

    logger.info("monthly_pl_built", extra={
        "period": str(period),
        "revenue": str(pl.revenue.total.amount),
        "costs": str(pl.costs.total.amount),
        "overhead": str(pl.central_overhead.amount),
        "profit_pool": str(pl.profit_pool.amount),
    })
    return pl


def sum_pl(months: Iterable[MonthlyPL]) -> PLTotals:
    """Add monthly P&Ls together, ordered by period."""
    ordered = sorted(months, key=lambda pl: pl.period)
    by_client: dict[str, Money] = {}
    for pl in ordered:
        for name, amount in pl.revenue.by_client.items():
            by_client[name] = by_client.get(name, Money.zero()) + amount

    return PLTotals(
        periods=tuple(pl.period for pl in ordered),
        revenue=Money.total(pl.revenue.total for pl in ordered),
        costs=Money.total(pl.costs.total for pl in ordered),
        gross_profit=Money.total(pl.gross_profit for pl in ordered),
        central_overhead=Money.total(pl.central_overhead for pl in ordered),
        profit_pool=Money.total(pl.profit_pool for pl in ordered),
        partner_share=Money.total(pl.partner_share for pl in ordered),
        by_client=by_client,
    )


def quarter_of(period: Period) -> int:
    """Calendar quarter (1-4) of a month."""
    return (period.month - 1) // 3 + 1


def quarterly_totals(months: Iterable[MonthlyPL]) -> dict[tuple[int, int], PLTotals]:
    """Group monthly P&Ls into (year, quarter) totals."""
    grouped: dict[tuple[int, int], list[MonthlyPL]] = {}
    for pl in months:
        grouped.setdefault((pl.period.year, quarter_of(pl.period)), []).append(pl)
    return {key: sum_pl(grouped[key]) for key in sorted(grouped)}


def year_to_date(months: Iterable[MonthlyPL], through: Period) -> PLTotals:
    """Totals from January of ``through``'s year up to and including ``through``."""
    return sum_pl(
        pl for pl in months
        if pl.period.year == through.year and pl.period <= through
    )
