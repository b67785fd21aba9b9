"""
Module: consultancy_engines
Responsibility:
    Package entrypoint that re-exports all public symbols from the pure
    calculation engine sub-modules.  This is the canonical import surface
    for the dashboard's display layer.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import consultancy_kernel (and sibling engine modules).
    MUST NOT import consultancy_config; configuration values are passed in.

Invariants enforced:
    - Purity: engines NEVER call ``datetime.now()`` or ``date.today()``.
      Dates and periods are passed in as explicit parameters.
    - Decimal-only arithmetic: all monetary amounts use ``Money``.
    - Determinism: identical snapshots always produce identical outputs.

Failure modes:
    - InvalidArgumentError from the revenue allocator.
    - ValueError / TypeError from value objects on malformed input.

Usage:
    from consultancy_engines.revenue import RevenueAllocator
    from consultancy_engines.fees import ActivityFeeCalculator
    from consultancy_engines.profit import ProfitPoolCalculator
    from consultancy_engines.scenarios import ScenarioAggregator
    from consultancy_engines.scorecard import ScorecardEngine
"""

from consultancy_kernel.logging_config import get_logger

logger = get_logger("engines")

from consultancy_engines.costs import (
    DEFAULT_BONUS_PERCENTAGE,
    HRSummary,
    SoftwareMonth,
    hr_cost_with_bonus,
    monthly_hr_costs,
    monthly_software_costs,
)
from consultancy_engines.fees import (
    DEFAULT_FEE_CONFIG,
    ActivityFeeCalculator,
    FeeBreakdown,
)
from consultancy_engines.formatting import format_currency, format_percent
from consultancy_engines.pnl import (
    CostSection,
    MonthlyPL,
    PLTotals,
    RevenueSection,
    build_monthly_pl,
    quarter_of,
    quarterly_totals,
    sum_pl,
    year_to_date,
)
from consultancy_engines.profit import (
    CENTRAL_OVERHEAD,
    PARTNER_SHARE_PERCENT,
    ProfitPoolCalculator,
    ProfitPoolResult,
    overhead_for,
)
from consultancy_engines.revenue import (
    RevenueAllocator,
    RevenueLine,
    recognised_by_period,
    rounding_drift,
)
from consultancy_engines.scenarios import (
    ScenarioAggregator,
    ScenarioColumn,
    ScenarioSummary,
    ScenarioTriple,
)
from consultancy_engines.scorecard import (
    CategoryScore,
    MetricScore,
    RagStatus,
    ScorecardEngine,
    ScorecardResult,
    achievement,
    category_score,
    classify,
    overall_score,
)
from consultancy_engines.tracer import traced_engine

__all__ = [
    # Costs
    "DEFAULT_BONUS_PERCENTAGE",
    "HRSummary",
    "SoftwareMonth",
    "hr_cost_with_bonus",
    "monthly_hr_costs",
    "monthly_software_costs",
    # Fees
    "DEFAULT_FEE_CONFIG",
    "ActivityFeeCalculator",
    "FeeBreakdown",
    # Formatting
    "format_currency",
    "format_percent",
    # P&L
    "CostSection",
    "MonthlyPL",
    "PLTotals",
    "RevenueSection",
    "build_monthly_pl",
    "quarter_of",
    "quarterly_totals",
    "sum_pl",
    "year_to_date",
    # Profit pool
    "CENTRAL_OVERHEAD",
    "PARTNER_SHARE_PERCENT",
    "ProfitPoolCalculator",
    "ProfitPoolResult",
    "overhead_for",
    # Revenue
    "RevenueAllocator",
    "RevenueLine",
    "recognised_by_period",
    "rounding_drift",
    # Scenarios
    "ScenarioAggregator",
    "ScenarioColumn",
    "ScenarioSummary",
    "ScenarioTriple",
    # Scorecard
    "CategoryScore",
    "MetricScore",
    "RagStatus",
    "ScorecardEngine",
    "ScorecardResult",
    "achievement",
    "category_score",
    "classify",
    "overall_score",
    # Tracing
    "traced_engine",
]
