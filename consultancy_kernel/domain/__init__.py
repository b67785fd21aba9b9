"""
Pure domain layer.

This module contains value objects, snapshot records and interval lookup
with NO dependencies on:
- The record store
- Time/clock
- I/O

All domain objects are immutable and deterministic.
"""

from consultancy_kernel.domain.intervals import IntervalSeries, TimeRanged, contains, lookup
from consultancy_kernel.domain.records import (
    ActivityCount,
    FeeConfig,
    HRCost,
    MetricPolarity,
    OverheadConfig,
    Scenario,
    ScenarioCategory,
    ScorecardActual,
    ScorecardCategory,
    ScorecardMetric,
    SoftwareCost,
    SoftwareItem,
    TeamMember,
)
from consultancy_kernel.domain.values import Money, Period, round2, to_decimal

__all__ = [
    # Value Objects
    "Money",
    "Period",
    "round2",
    "to_decimal",
    # Intervals
    "IntervalSeries",
    "TimeRanged",
    "contains",
    "lookup",
    # Snapshot records
    "ActivityCount",
    "FeeConfig",
    "HRCost",
    "MetricPolarity",
    "OverheadConfig",
    "Scenario",
    "ScenarioCategory",
    "ScorecardActual",
    "ScorecardCategory",
    "ScorecardMetric",
    "SoftwareCost",
    "SoftwareItem",
    "TeamMember",
]
