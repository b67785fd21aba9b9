"""
DashboardConfig schema.

The typed form of a dashboard configuration document.  YAML files are
parsed into these frozen types by the loader; engines receive the values
(overhead series, fee series, share percentage) as explicit arguments and
never read configuration themselves.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from consultancy_kernel.domain.intervals import IntervalSeries
from consultancy_kernel.domain.records import FeeConfig, OverheadConfig
from consultancy_kernel.domain.values import Money


@dataclass(frozen=True)
class DashboardConfig:
    """Validated configuration for one dashboard deployment."""

    name: str
    version: int
    currency_symbol: str
    share_percent: Decimal
    default_overhead: Money  # monthly, used when no overhead record covers a month
    scenario_monthly_overhead: Money  # annualised x12 by the scenario projection
    bonus_percentage: Decimal
    fee_configs: IntervalSeries[FeeConfig]
    overhead_configs: IntervalSeries[OverheadConfig]
    checksum: str
