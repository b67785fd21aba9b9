"""
Records -- read-only snapshots handed over by the record store.

Responsibility:
    Typed, frozen shapes for the rows the engines consume: fee and overhead
    configuration, monthly activity counts, scorecard definitions and
    actuals, planning scenarios, team and software costs.

Architecture position:
    Kernel > Domain -- pure data, zero I/O.
    The record store (an external collaborator) owns these entities;
    engines only read snapshots and never mutate them.

Invariants enforced:
    - Monetary fields are Money; ratios, weights and scores are Decimal.
    - Activity counts are non-negative integers.
    - Scorecard category weights are non-negative.
    - Metric polarity is an explicit attribute set when the metric is
      defined, never inferred from its name.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum

from consultancy_kernel.domain.values import Money, Period, to_decimal


def _as_money(record: object, *names: str) -> None:
    for name in names:
        value = getattr(record, name)
        if value is not None and not isinstance(value, Money):
            object.__setattr__(record, name, Money.of(value))


def _as_decimal(record: object, *names: str) -> None:
    for name in names:
        value = getattr(record, name)
        if value is not None and not isinstance(value, Decimal):
            object.__setattr__(record, name, to_decimal(value))


# ---------------------------------------------------------------------------
# Time-ranged configuration
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FeeConfig:
    """Fixed and per-activity billing rates for the managed service."""

    effective_from: date
    fixed_monthly_fee: Money
    survey_fee: Money
    meeting_fee: Money
    effective_to: date | None = None  # None = open-ended

    def __post_init__(self) -> None:
        _as_money(self, "fixed_monthly_fee", "survey_fee", "meeting_fee")


@dataclass(frozen=True)
class OverheadConfig:
    """Monthly central overhead charged before the profit pool is formed."""

    effective_from: date
    monthly_amount: Money
    effective_to: date | None = None
    notes: str | None = None

    def __post_init__(self) -> None:
        _as_money(self, "monthly_amount")


# ---------------------------------------------------------------------------
# Activity
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ActivityCount:
    """
    Billable activity counted for one month.

    Surveys are tallied by where they originated; executive-level meetings
    are counted separately.
    """

    period: Period
    surveys_from_interviews: int = 0
    surveys_from_roundtables: int = 0
    surveys_from_executive: int = 0
    executive_meetings_completed: int = 0

    def __post_init__(self) -> None:
        for name in (
            "surveys_from_interviews",
            "surveys_from_roundtables",
            "surveys_from_executive",
            "executive_meetings_completed",
        ):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise TypeError(f"{name} must be an int, got {type(value).__name__}")
            if value < 0:
                raise ValueError(f"{name} cannot be negative: {value}")


# ---------------------------------------------------------------------------
# Scorecard
# ---------------------------------------------------------------------------


class MetricPolarity(str, Enum):
    """Whether higher or lower raw values indicate better performance."""

    HIGHER_IS_BETTER = "higher_is_better"
    LOWER_IS_BETTER = "lower_is_better"  # e.g. escalations


@dataclass(frozen=True)
class ScorecardCategory:
    """A weighted group of scorecard metrics. Weights need not sum to 1."""

    category_id: str
    name: str
    weight: Decimal
    sort_order: int = 0
    is_active: bool = True

    def __post_init__(self) -> None:
        _as_decimal(self, "weight")
        if self.weight < Decimal("0"):
            raise ValueError("Weight cannot be negative")


@dataclass(frozen=True)
class ScorecardMetric:
    """A measurable target belonging to exactly one category."""

    metric_id: str
    category_id: str
    name: str
    target_value: Decimal | None = None
    polarity: MetricPolarity = MetricPolarity.HIGHER_IS_BETTER
    sort_order: int = 0
    is_active: bool = True
    description: str | None = None

    def __post_init__(self) -> None:
        _as_decimal(self, "target_value")
        if not isinstance(self.polarity, MetricPolarity):
            object.__setattr__(self, "polarity", MetricPolarity(self.polarity))


@dataclass(frozen=True)
class ScorecardActual:
    """
    The recorded value of one metric for one reporting period.

    ``actual_value`` None means "not recorded yet", which is distinct from
    a recorded zero.
    """

    metric_id: str
    period_start: date
    period_end: date
    actual_value: Decimal | None = None

    def __post_init__(self) -> None:
        _as_decimal(self, "actual_value")


# ---------------------------------------------------------------------------
# Scenarios
# ---------------------------------------------------------------------------


class ScenarioCategory(str, Enum):
    REVENUE = "revenue"
    COST = "cost"


@dataclass(frozen=True)
class Scenario:
    """Pessimistic / realistic / optimistic estimates for one plan line."""

    scenario_id: str
    category: ScenarioCategory
    item_name: str
    pessimistic: Money
    realistic: Money
    optimistic: Money
    year: int | None = None
    sort_order: int = 0
    is_active: bool = True

    def __post_init__(self) -> None:
        if not isinstance(self.category, ScenarioCategory):
            object.__setattr__(self, "category", ScenarioCategory(self.category))
        _as_money(self, "pessimistic", "realistic", "optimistic")


# ---------------------------------------------------------------------------
# Costs
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TeamMember:
    member_id: str
    name: str
    default_monthly_cost: Money
    is_active: bool = True

    def __post_init__(self) -> None:
        _as_money(self, "default_monthly_cost")


@dataclass(frozen=True)
class HRCost:
    """Monthly cost of one team member; ``actual_cost`` None means use the default."""

    member_id: str
    period: Period
    actual_cost: Money | None = None
    bonus: Money = Money.zero()

    def __post_init__(self) -> None:
        _as_money(self, "actual_cost", "bonus")


@dataclass(frozen=True)
class SoftwareItem:
    """A subscription whose cost is partly charged to the practice."""

    item_id: str
    name: str
    default_monthly_cost: Money
    allocation_percent: Decimal = Decimal("100")
    category: str = "Software etc"
    is_active: bool = True

    def __post_init__(self) -> None:
        _as_money(self, "default_monthly_cost")
        _as_decimal(self, "allocation_percent")


@dataclass(frozen=True)
class SoftwareCost:
    """A reconciled month for one item; None fields fall back to the item defaults."""

    item_id: str
    period: Period
    actual_cost: Money | None = None
    allocation_percent: Decimal | None = None

    def __post_init__(self) -> None:
        _as_money(self, "actual_cost")
        _as_decimal(self, "allocation_percent")
