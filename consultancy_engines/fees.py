"""
Module: consultancy_engines.fees
Responsibility:
    Convert a month's activity counts into the managed-service fee billed
    for that month: a fixed monthly fee plus per-survey and per-meeting
    fees.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import consultancy_kernel.

Invariants enforced:
    - Surveys from interviews and roundtables are billed at the survey fee.
    - Surveys from executive-level contacts are billed at the MEETING fee,
      together with completed executive meetings.
    - Each bucket is rounded once; the total is rounded once over the
      rounded buckets.
    - Purity: no clock access, no I/O.

Failure modes:
    - None for valid records; counts are validated by ActivityCount.

Usage:
    from consultancy_engines.fees import ActivityFeeCalculator, DEFAULT_FEE_CONFIG

    breakdown = ActivityFeeCalculator().compute(counts, DEFAULT_FEE_CONFIG)
    breakdown.total  # Money
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from consultancy_engines.tracer import traced_engine
from consultancy_kernel.domain.intervals import IntervalSeries
from consultancy_kernel.domain.records import ActivityCount, FeeConfig
from consultancy_kernel.domain.values import Money, round2
from consultancy_kernel.logging_config import get_logger

logger = get_logger("engines.fees")


DEFAULT_FEE_CONFIG = FeeConfig(
    effective_from=date(2026, 1, 1),
    effective_to=None,
    fixed_monthly_fee=Money.of("4236"),
    survey_fee=Money.of("1000"),
    meeting_fee=Money.of("700"),
)


@dataclass(frozen=True)
class FeeBreakdown:
    """Fee billed for one month, split by bucket."""

    fixed: Money
    surveys: Money
    meetings: Money
    total: Money
    survey_count: int = 0
    meeting_count: int = 0

    @property
    def variable(self) -> Money:
        """Activity-driven part of the fee."""
        return self.surveys + self.meetings


class ActivityFeeCalculator:
    """
    Pure calculator for activity-based service fees.

    Contract:
        No I/O, fully deterministic. The fee configuration is passed in.
    Guarantees:
        - ``survey_count = interviews + roundtables``
        - ``meeting_count = executive meetings + surveys from executives``
        - ``total = round2(fixed + surveys + meetings)``
    """

    @traced_engine("activity_fees", "1.0", fingerprint_fields=("counts", "config"))
    def compute(self, counts: ActivityCount, config: FeeConfig) -> FeeBreakdown:
        """
        Calculate the month's fee from activity counts.

        Args:
            counts: Activity counted for the month
            config: Fee rates in force for the month

        Returns:
            FeeBreakdown with fixed, surveys, meetings and total
        """
        survey_count = counts.surveys_from_interviews + counts.surveys_from_roundtables
        meeting_count = counts.executive_meetings_completed + counts.surveys_from_executive

        surveys = round2(config.survey_fee.amount * Decimal(survey_count))
        meetings = round2(config.meeting_fee.amount * Decimal(meeting_count))
        fixed = round2(config.fixed_monthly_fee.amount)
        total = round2(fixed + surveys + meetings)

        logger.info("activity_fees_calculated", extra={
            "period": str(counts.period),
            "survey_count": survey_count,
            "meeting_count": meeting_count,
            "fixed": str(fixed),
            "surveys": str(surveys),
            "meetings": str(meetings),
            "total": str(total),
        })

        return FeeBreakdown(
            fixed=Money.of(fixed),
            surveys=Money.of(surveys),
            meetings=Money.of(meetings),
            total=Money.of(total),
            survey_count=survey_count,
            meeting_count=meeting_count,
        )

    def compute_for_period(
        self,
        counts: ActivityCount,
        fee_configs: IntervalSeries[FeeConfig],
        default_config: FeeConfig = DEFAULT_FEE_CONFIG,
    ) -> FeeBreakdown:
        """Calculate using the fee configuration in force on the first day of the counts' month."""
        config = fee_configs.lookup(counts.period.first_day, default_config)
        if config is default_config:
            logger.debug("fee_config_default_used", extra={
                "period": str(counts.period),
            })
        return self.compute(counts, config)
