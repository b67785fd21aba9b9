"""
Tests for the activity fee calculator.

Covers:
- Fixed + survey + meeting buckets
- Executive-sourced surveys billed at the meeting fee
- Fee configuration resolved by month
"""

from datetime import date

from consultancy_engines.fees import DEFAULT_FEE_CONFIG, ActivityFeeCalculator
from consultancy_kernel.domain.intervals import IntervalSeries
from consultancy_kernel.domain.records import ActivityCount, FeeConfig
from consultancy_kernel.domain.values import Money, Period


class TestActivityFees:
    """Tests for ActivityFeeCalculator.compute."""

    def setup_method(self):
        self.calculator = ActivityFeeCalculator()

    def test_standard_month(self, fee_config):
        """2 interview + 3 roundtable surveys, 1 executive survey, 1 meeting."""
        counts = ActivityCount(
            period=Period(2026, 1),
            surveys_from_interviews=2,
            surveys_from_roundtables=3,
            surveys_from_executive=1,
            executive_meetings_completed=1,
        )
        fees = self.calculator.compute(counts, fee_config)

        assert fees.fixed == Money.of("4236.00")
        assert fees.surveys == Money.of("5000.00")
        assert fees.meetings == Money.of("1400.00")
        assert fees.total == Money.of("10636.00")
        assert fees.survey_count == 5
        assert fees.meeting_count == 2
        assert fees.variable == Money.of("6400.00")

    def test_executive_surveys_use_meeting_fee(self, fee_config):
        counts = ActivityCount(period=Period(2026, 1), surveys_from_executive=3)
        fees = self.calculator.compute(counts, fee_config)

        assert fees.surveys == Money.zero()
        assert fees.meetings == Money.of("2100.00")

    def test_no_activity_is_fixed_fee_only(self, fee_config):
        fees = self.calculator.compute(ActivityCount(period=Period(2026, 1)), fee_config)
        assert fees.total == Money.of("4236.00")
        assert fees.variable == Money.zero()

    def test_fractional_rates_round_per_bucket(self):
        config = FeeConfig(
            effective_from=date(2026, 1, 1),
            fixed_monthly_fee=Money.of("0.004"),
            survey_fee=Money.of("0.005"),
            meeting_fee=Money.of("0.005"),
        )
        counts = ActivityCount(period=Period(2026, 1), surveys_from_interviews=1, executive_meetings_completed=1)
        fees = self.calculator.compute(counts, config)

        assert fees.fixed == Money.of("0.00")
        assert fees.surveys == Money.of("0.01")
        assert fees.meetings == Money.of("0.01")
        assert fees.total == Money.of("0.02")

    def test_default_config_rates(self):
        assert DEFAULT_FEE_CONFIG.fixed_monthly_fee == Money.of("4236")
        assert DEFAULT_FEE_CONFIG.survey_fee == Money.of("1000")
        assert DEFAULT_FEE_CONFIG.meeting_fee == Money.of("700")

    def test_logs_breakdown(self, captured_logs, fee_config):
        self.calculator.compute(ActivityCount(period=Period(2026, 2), surveys_from_interviews=1), fee_config)
        records = [r for r in captured_logs() if r["message"] == "activity_fees_calculated"]
        assert records[0]["period"] == "2026-02"
        assert records[0]["total"] == "5236.00"


class TestFeesForPeriod:

    def setup_method(self):
        self.calculator = ActivityFeeCalculator()
        self.series = IntervalSeries([
            FeeConfig(
                effective_from=date(2026, 1, 1),
                effective_to=date(2026, 6, 30),
                fixed_monthly_fee=Money.of("4236"),
                survey_fee=Money.of("1000"),
                meeting_fee=Money.of("700"),
            ),
            FeeConfig(
                effective_from=date(2026, 7, 1),
                fixed_monthly_fee=Money.of("4500"),
                survey_fee=Money.of("1100"),
                meeting_fee=Money.of("750"),
            ),
        ], name="fee")

    def test_rates_follow_the_month(self):
        counts = ActivityCount(period=Period(2026, 7), surveys_from_interviews=1)
        fees = self.calculator.compute_for_period(counts, self.series)
        assert fees.total == Money.of("5600.00")

    def test_month_before_series_uses_default(self):
        counts = ActivityCount(period=Period(2025, 12), surveys_from_interviews=1)
        fees = self.calculator.compute_for_period(counts, self.series)
        assert fees.total == Money.of("5236.00")
