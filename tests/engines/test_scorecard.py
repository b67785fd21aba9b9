"""
Tests for the scorecard engine.

Covers:
- RAG classification thresholds
- Achievement for higher- and lower-is-better metrics
- Category averaging over recorded metrics only
- Weighted overall score (including its trailing x100 factor)
- Missing data resolving to zero / none
"""

from datetime import date
from decimal import Decimal

import pytest

from consultancy_engines.scorecard import (
    RagStatus,
    ScorecardEngine,
    achievement,
    classify,
)
from consultancy_kernel.domain.records import MetricPolarity, ScorecardActual


class TestClassify:

    @pytest.mark.parametrize(
        ("percent", "expected"),
        [
            ("100", RagStatus.GREEN),
            ("150", RagStatus.GREEN),
            ("99.99", RagStatus.AMBER),
            ("90", RagStatus.AMBER),
            ("85", RagStatus.AMBER),
            ("84.99", RagStatus.RED),
            ("50", RagStatus.RED),
            ("0", RagStatus.RED),
        ],
    )
    def test_thresholds(self, percent, expected):
        assert classify(Decimal(percent), has_actual=True) is expected

    def test_no_actual_is_none_regardless_of_value(self):
        assert classify(Decimal("120"), has_actual=False) is RagStatus.NONE
        assert classify(Decimal("0"), has_actual=False) is RagStatus.NONE

    def test_recorded_zero_is_red_not_none(self):
        """A recorded 0% is a real (bad) result, not missing data."""
        assert classify(Decimal("0"), has_actual=True) is RagStatus.RED


class TestAchievement:

    def test_higher_is_better_ratio(self, make_metric):
        metric = make_metric("nps", target="40")
        assert achievement(metric, Decimal("30")) == Decimal("75")
        assert achievement(metric, Decimal("50")) == Decimal("125")

    def test_missing_actual_is_zero(self, make_metric):
        assert achievement(make_metric("nps"), None) == Decimal("0")

    @pytest.mark.parametrize("target", [None, "0", "-5"])
    def test_non_positive_or_missing_target_is_zero(self, make_metric, target):
        assert achievement(make_metric("nps", target=target), Decimal("10")) == Decimal("0")

    @pytest.mark.parametrize(
        ("actual", "expected"),
        [("0", "100"), ("1", "75"), ("2", "50"), ("3", "25"), ("4", "0"), ("10", "0")],
    )
    def test_escalations_penalised_per_unit(self, make_metric, actual, expected):
        metric = make_metric("escalations", target=None, polarity=MetricPolarity.LOWER_IS_BETTER)
        assert achievement(metric, Decimal(actual)) == Decimal(expected)

    def test_escalations_ignore_target(self, make_metric):
        metric = make_metric("escalations", target="5", polarity=MetricPolarity.LOWER_IS_BETTER)
        assert achievement(metric, Decimal("2")) == Decimal("50")


class TestScorecardEngine:

    def setup_method(self):
        self.engine = ScorecardEngine()

    def test_metric_status_examples(self, make_metric, make_actual):
        """100% green, 90% amber, 50% red; 0 escalations green, 2 red."""
        metric = make_metric("m", target="10")
        esc = make_metric("esc", target=None, polarity=MetricPolarity.LOWER_IS_BETTER)

        assert self.engine.score_metric(metric, make_actual("m", "10")).status is RagStatus.GREEN
        assert self.engine.score_metric(metric, make_actual("m", "9")).status is RagStatus.AMBER
        assert self.engine.score_metric(metric, make_actual("m", "5")).status is RagStatus.RED
        zero = self.engine.score_metric(esc, make_actual("esc", "0"))
        assert zero.achievement_percent == Decimal("100")
        assert zero.status is RagStatus.GREEN
        two = self.engine.score_metric(esc, make_actual("esc", "2"))
        assert two.achievement_percent == Decimal("50")
        assert two.status is RagStatus.RED

    def test_unrecorded_metric_status_none(self, make_metric, make_actual):
        score = self.engine.score_metric(make_metric("m"), make_actual("m", None))
        assert score.status is RagStatus.NONE
        assert not score.has_actual
        assert self.engine.score_metric(make_metric("m"), None).status is RagStatus.NONE

    def test_category_score_caps_and_ignores_unrecorded(self, make_category, make_metric, make_actual):
        """Metrics at 150% (capped to 100), 50% and one unrecorded -> (100 + 50) / 2."""
        result = self.engine.evaluate(
            categories=[make_category("delivery", weight="1")],
            metrics=[make_metric("a"), make_metric("b"), make_metric("c")],
            actuals=[make_actual("a", "15"), make_actual("b", "5")],
        )
        category = result.categories[0]

        assert category.category_score == Decimal("75")
        assert category.weighted_score == Decimal("75")
        assert [m.status for m in category.metrics] == [RagStatus.GREEN, RagStatus.RED, RagStatus.NONE]

    def test_overall_applies_trailing_hundred_factor(self, make_category, make_metric, make_actual):
        """Two categories weighted 1 scoring 100 and 50: (150 / 2) * 100."""
        result = self.engine.evaluate(
            categories=[make_category("delivery"), make_category("growth")],
            metrics=[make_metric("a", "delivery"), make_metric("b", "growth")],
            actuals=[make_actual("a", "10"), make_actual("b", "5")],
        )

        assert result.total_weight == Decimal("2")
        assert result.overall_score == Decimal("7500")
        assert result.overall_status is RagStatus.GREEN

    def test_fractional_weights(self, make_category, make_metric, make_actual):
        """Weights 0.25 and 0.75 with scores 100 and 60: (25 + 45) / 1 * 100."""
        result = self.engine.evaluate(
            categories=[make_category("delivery", "0.25"), make_category("growth", "0.75")],
            metrics=[make_metric("a", "delivery"), make_metric("b", "growth")],
            actuals=[make_actual("a", "10"), make_actual("b", "6")],
        )
        assert result.overall_score == Decimal("7000")

    def test_categories_without_actuals_carry_no_weight(self, make_category, make_metric, make_actual):
        result = self.engine.evaluate(
            categories=[make_category("delivery", "1"), make_category("growth", "3")],
            metrics=[make_metric("a", "delivery"), make_metric("b", "growth")],
            actuals=[make_actual("a", "10")],
        )
        assert result.total_weight == Decimal("1")
        assert result.categories[1].category_score == Decimal("0")
        assert not result.categories[1].has_actuals

    def test_partially_recorded_category_keeps_full_weight(self, make_category, make_metric, make_actual):
        """Delivery has one of two metrics recorded: (100 * 1 + 50 * 3) / 4 * 100."""
        result = self.engine.evaluate(
            categories=[make_category("delivery", "1"), make_category("growth", "3")],
            metrics=[
                make_metric("a", "delivery"),
                make_metric("b", "delivery"),
                make_metric("c", "growth"),
            ],
            actuals=[make_actual("a", "10"), make_actual("c", "5")],
        )
        delivery, growth = result.categories

        assert delivery.has_actuals
        assert delivery.category_score == Decimal("100")
        assert growth.category_score == Decimal("50")
        assert result.total_weight == Decimal("4")
        assert result.overall_score == Decimal("6250")

    def test_no_actuals_anywhere(self, make_category, make_metric):
        result = self.engine.evaluate(
            categories=[make_category("delivery")],
            metrics=[make_metric("a")],
            actuals=[],
        )
        assert result.overall_score == Decimal("0")
        assert result.total_weight == Decimal("0")
        assert result.overall_status is RagStatus.NONE
        assert not result.has_any_actual

    def test_zero_weight_categories_score_zero(self, make_category, make_metric, make_actual):
        result = self.engine.evaluate(
            categories=[make_category("delivery", "0")],
            metrics=[make_metric("a")],
            actuals=[make_actual("a", "10")],
        )
        assert result.overall_score == Decimal("0")
        assert result.overall_status is RagStatus.RED

    def test_inactive_records_and_sort_order(self, make_category, make_metric, make_actual):
        result = self.engine.evaluate(
            categories=[
                make_category("second", sort_order=2),
                make_category("first", sort_order=1),
                make_category("hidden", is_active=False),
            ],
            metrics=[
                make_metric("b", "first", sort_order=2),
                make_metric("a", "first", sort_order=1),
                make_metric("off", "first", is_active=False),
            ],
            actuals=[make_actual("a", "10")],
        )
        assert [c.category.category_id for c in result.categories] == ["first", "second"]
        assert [m.metric.metric_id for m in result.categories[0].metrics] == ["a", "b"]

    def test_period_window_filters_actuals(self, make_category, make_metric):
        in_window = ScorecardActual("a", date(2026, 4, 1), date(2026, 6, 30), Decimal("10"))
        earlier = ScorecardActual("a", date(2026, 1, 1), date(2026, 3, 31), Decimal("5"))
        result = self.engine.evaluate(
            categories=[make_category("delivery")],
            metrics=[make_metric("a")],
            actuals=[earlier, in_window],
            period_start=date(2026, 4, 1),
            period_end=date(2026, 6, 30),
        )
        assert result.categories[0].metrics[0].actual_value == Decimal("10")

    def test_duplicate_actual_first_wins(self, captured_logs, make_category, make_metric, make_actual):
        result = self.engine.evaluate(
            categories=[make_category("delivery")],
            metrics=[make_metric("a")],
            actuals=[make_actual("a", "10"), make_actual("a", "1")],
        )
        assert result.categories[0].metrics[0].actual_value == Decimal("10")
        warnings = [r for r in captured_logs() if r["message"] == "scorecard_duplicate_actual"]
        assert warnings[0]["metric_id"] == "a"

    def test_deterministic(self, make_category, make_metric, make_actual):
        kwargs = dict(
            categories=[make_category("delivery")],
            metrics=[make_metric("a"), make_metric("b")],
            actuals=[make_actual("a", "7"), make_actual("b", "9")],
        )
        assert self.engine.evaluate(**kwargs) == self.engine.evaluate(**kwargs)
