"""
Module: consultancy_engines.profit
Responsibility:
    Turn aggregate revenue and cost totals into gross profit, the
    distributable profit pool and the partner's fixed-percentage share.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import consultancy_kernel.  Called directly by the monthly
    P&L builder and by the scenario aggregator.

Invariants enforced:
    - gross_profit = revenue - costs, may be negative.
    - profit_pool = max(0, gross_profit - overhead); a negative pool is
      never distributed.
    - share = profit_pool * share_percent / 100, computed from the
      unrounded pool.
    - Each of the three outputs is rounded exactly once, at return.

Failure modes:
    - ValueError on a negative share percentage.

Usage:
    from consultancy_engines.profit import ProfitPoolCalculator
    from consultancy_kernel.domain.values import Money

    result = ProfitPoolCalculator().compute(
        total_revenue=Money.of("50000"),
        total_costs=Money.of("30000"),
    )
    result.share  # Money("1896.00")
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from consultancy_engines.tracer import traced_engine
from consultancy_kernel.domain.intervals import IntervalSeries
from consultancy_kernel.domain.records import OverheadConfig
from consultancy_kernel.domain.values import Money, Period, to_decimal
from consultancy_kernel.logging_config import get_logger

logger = get_logger("engines.profit")

# Used when no overhead or share configuration is supplied.
CENTRAL_OVERHEAD = Money.of("4200")  # monthly
PARTNER_SHARE_PERCENT = Decimal("12")


@dataclass(frozen=True)
class ProfitPoolResult:
    """Profit figures for one reporting window."""

    gross_profit: Money
    profit_pool: Money
    share: Money

    @property
    def is_pool_empty(self) -> bool:
        return self.profit_pool.is_zero


class ProfitPoolCalculator:
    """
    Pure calculator for the profit pool and partner share.

    Contract:
        No I/O, fully deterministic.  Overhead and share percentage are
        passed in; ``compute_for_period`` resolves the month's overhead
        from a time-ranged series.
    Non-goals:
        - Does not decide what counts as revenue or cost; callers aggregate.
    """

    @traced_engine(
        "profit_pool", "1.0",
        fingerprint_fields=("total_revenue", "total_costs", "overhead", "share_percent"),
    )
    def compute(
        self,
        total_revenue: Money,
        total_costs: Money,
        overhead: Money = CENTRAL_OVERHEAD,
        share_percent: Decimal | int | str = PARTNER_SHARE_PERCENT,
    ) -> ProfitPoolResult:
        """
        Calculate gross profit, profit pool and partner share.

        Args:
            total_revenue: Revenue for the window
            total_costs: Costs for the window
            overhead: Central overhead for the same window
            share_percent: Partner share of the pool, in percent

        Returns:
            ProfitPoolResult with each figure rounded to 2 places

        Raises:
            ValueError: If share_percent is negative
        """
        share_percent = to_decimal(share_percent)
        if share_percent < Decimal("0"):
            raise ValueError(f"share_percent cannot be negative: {share_percent}")

        gross_profit = total_revenue - total_costs
        pool = gross_profit - overhead
        if pool.is_negative:
            logger.debug("profit_pool_floored", extra={
                "gross_profit": str(gross_profit.amount),
                "overhead": str(overhead.amount),
            })
            pool = Money.zero()
        share = pool * share_percent / Decimal("100")

        result = ProfitPoolResult(
            gross_profit=gross_profit.round(),
            profit_pool=pool.round(),
            share=share.round(),
        )

        logger.info("profit_pool_calculated", extra={
            "total_revenue": str(total_revenue.amount),
            "total_costs": str(total_costs.amount),
            "overhead": str(overhead.amount),
            "share_percent": str(share_percent),
            "gross_profit": str(result.gross_profit.amount),
            "profit_pool": str(result.profit_pool.amount),
            "share": str(result.share.amount),
        })
        return result

    def compute_for_period(
        self,
        total_revenue: Money,
        total_costs: Money,
        period: Period,
        overhead_configs: IntervalSeries[OverheadConfig],
        share_percent: Decimal | int | str = PARTNER_SHARE_PERCENT,
        default_overhead: Money = CENTRAL_OVERHEAD,
    ) -> ProfitPoolResult:
        """Calculate for one month, using the overhead in force on its first day."""
        overhead = overhead_for(period, overhead_configs, default_overhead)
        return self.compute(
            total_revenue=total_revenue,
            total_costs=total_costs,
            overhead=overhead,
            share_percent=share_percent,
        )


def overhead_for(
    period: Period,
    overhead_configs: IntervalSeries[OverheadConfig],
    default_overhead: Money = CENTRAL_OVERHEAD,
) -> Money:
    """Monthly central overhead in force on the first day of ``period``."""
    return overhead_configs.value_for(period.first_day, "monthly_amount", default_overhead)
