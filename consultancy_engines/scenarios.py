"""
Module: consultancy_engines.scenarios
Responsibility:
    Project the year three ways (pessimistic / realistic / optimistic):
    total the revenue and cost plan lines per column, then run each
    column through the profit pool calculation.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    Calls consultancy_engines.profit; may otherwise only import
    consultancy_kernel.

Invariants enforced:
    - The three columns are computed independently of each other.
    - Overhead is a fixed annual figure, ``monthly_overhead * 12``, not
      the time-ranged overhead series used by the monthly P&L.  Callers
      that want both views to agree pass the configured monthly figure.
    - Inactive plan lines are ignored.
    - Totals are summed at full precision and rounded once at return.

Failure modes:
    - None for valid records.

Usage:
    from consultancy_engines.scenarios import ScenarioAggregator

    summary = ScenarioAggregator().aggregate(scenarios)
    summary.profit_pool.realistic  # Money
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from consultancy_engines.profit import (
    CENTRAL_OVERHEAD,
    PARTNER_SHARE_PERCENT,
    ProfitPoolCalculator,
    ProfitPoolResult,
)
from consultancy_engines.tracer import traced_engine
from consultancy_kernel.domain.records import Scenario, ScenarioCategory
from consultancy_kernel.domain.values import Money
from consultancy_kernel.logging_config import get_logger

logger = get_logger("engines.scenarios")

MONTHS_PER_YEAR = 12


class ScenarioColumn(str, Enum):
    PESSIMISTIC = "pessimistic"
    REALISTIC = "realistic"
    OPTIMISTIC = "optimistic"


@dataclass(frozen=True)
class ScenarioTriple:
    """One figure per scenario column."""

    pessimistic: Money
    realistic: Money
    optimistic: Money

    def get(self, column: ScenarioColumn) -> Money:
        return getattr(self, column.value)


@dataclass(frozen=True)
class ScenarioSummary:
    """Revenue, costs and profit figures for all three columns."""

    revenue: ScenarioTriple
    costs: ScenarioTriple
    gross_profit: ScenarioTriple
    profit_pool: ScenarioTriple
    share: ScenarioTriple
    annual_overhead: Money


class ScenarioAggregator:
    """
    Three parallel year projections.

    Contract:
        Pure, deterministic.  Profit figures come from ProfitPoolCalculator
        with an annual overhead and the partner share percentage.
    """

    def __init__(self, calculator: ProfitPoolCalculator | None = None):
        self._calculator = calculator or ProfitPoolCalculator()

    @traced_engine("scenarios", "1.0", fingerprint_fields=("scenarios", "monthly_overhead", "share_percent"))
    def aggregate(
        self,
        scenarios: Iterable[Scenario],
        monthly_overhead: Money = CENTRAL_OVERHEAD,
        share_percent: Decimal = PARTNER_SHARE_PERCENT,
    ) -> ScenarioSummary:
        """
        Total plan lines per category and project profit per column.

        Args:
            scenarios: Plan lines tagged revenue or cost
            monthly_overhead: Central overhead per month (annualised x12)
            share_percent: Partner share of the pool, in percent

        Returns:
            ScenarioSummary with revenue/cost totals and profit triples
        """
        active = [s for s in scenarios if s.is_active]
        revenue = _column_totals(s for s in active if s.category == ScenarioCategory.REVENUE)
        costs = _column_totals(s for s in active if s.category == ScenarioCategory.COST)
        annual_overhead = monthly_overhead * MONTHS_PER_YEAR

        results: dict[ScenarioColumn, ProfitPoolResult] = {}
        for column in ScenarioColumn:
            results[column] = self._calculator.compute(
                total_revenue=revenue[column],
                total_costs=costs[column],
                overhead=annual_overhead,
                share_percent=share_percent,
            )

        summary = ScenarioSummary(
            revenue=_triple({c: m.round() for c, m in revenue.items()}),
            costs=_triple({c: m.round() for c, m in costs.items()}),
            gross_profit=_triple({c: r.gross_profit for c, r in results.items()}),
            profit_pool=_triple({c: r.profit_pool for c, r in results.items()}),
            share=_triple({c: r.share for c, r in results.items()}),
            annual_overhead=annual_overhead.round(),
        )

        logger.info("scenario_aggregation_completed", extra={
            "scenario_count": len(active),
            "annual_overhead": str(summary.annual_overhead.amount),
            "realistic_revenue": str(summary.revenue.realistic.amount),
            "realistic_costs": str(summary.costs.realistic.amount),
            "realistic_pool": str(summary.profit_pool.realistic.amount),
        })
        return summary


def _column_totals(scenarios: Iterable[Scenario]) -> dict[ScenarioColumn, Money]:
    totals = {column: Money.zero() for column in ScenarioColumn}
    for scenario in scenarios:
        for column in ScenarioColumn:
            totals[column] = totals[column] + getattr(scenario, column.value)
    return totals


def _triple(values: dict[ScenarioColumn, Money]) -> ScenarioTriple:
    return ScenarioTriple(
        pessimistic=values[ScenarioColumn.PESSIMISTIC],
        realistic=values[ScenarioColumn.REALISTIC],
        optimistic=values[ScenarioColumn.OPTIMISTIC],
    )
