"""
Module: consultancy_engines.scorecard
Responsibility:
    Score the quarterly scorecard: classify each metric's performance
    against target (RAG status), average metrics into category scores,
    and combine weighted categories into one overall score.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import consultancy_kernel.

Invariants enforced:
    - RAG thresholds: >= 100 green, >= 85 amber, otherwise red; a metric
      without a recorded actual is always ``none`` whatever its number.
    - Lower-is-better metrics score 100 at zero and lose 25 points per
      unit, floored at 0.  Higher-is-better metrics score actual / target
      * 100, or 0 when the target is missing or not positive.
    - Category score is the mean of min(achievement, 100) over metrics
      WITH an actual; 0 when none has one.
    - Overall score = (sum of weighted category scores / total weight of
      categories with any actual) * 100, or 0 when that weight is 0.
      The trailing ``* 100`` is applied on top of category scores that
      are already percentages; historical reported scores depend on it.
    - Missing data is a steady state, not an error: every gap resolves
      to 0 / ``none``.
    - Purity: no clock access, no I/O.

Failure modes:
    - None for valid records.

Usage:
    from consultancy_engines.scorecard import ScorecardEngine

    result = ScorecardEngine().evaluate(categories, metrics, actuals)
    result.overall_score, result.overall_status
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum

from consultancy_engines.tracer import traced_engine
from consultancy_kernel.domain.records import (
    MetricPolarity,
    ScorecardActual,
    ScorecardCategory,
    ScorecardMetric,
)
from consultancy_kernel.logging_config import get_logger

logger = get_logger("engines.scorecard")

GREEN_THRESHOLD = Decimal("100")
AMBER_THRESHOLD = Decimal("85")
FULL_SCORE = Decimal("100")
PENALTY_PER_UNIT = Decimal("25")  # lower-is-better metrics
_ZERO = Decimal("0")


class RagStatus(str, Enum):
    """Red / amber / green classification; none when nothing is recorded."""

    GREEN = "green"
    AMBER = "amber"
    RED = "red"
    NONE = "none"


def classify(achievement_percent: Decimal, has_actual: bool) -> RagStatus:
    """RAG status for an achievement percentage."""
    if not has_actual:
        return RagStatus.NONE
    if achievement_percent >= GREEN_THRESHOLD:
        return RagStatus.GREEN
    if achievement_percent >= AMBER_THRESHOLD:
        return RagStatus.AMBER
    return RagStatus.RED


def achievement(metric: ScorecardMetric, actual_value: Decimal | None) -> Decimal:
    """
    Achievement of one metric, in percent (uncapped).

    Postconditions:
        - 0 when no actual is recorded (a placeholder, never classified).
        - Never negative for lower-is-better metrics.
    """
    if actual_value is None:
        return _ZERO

    if metric.polarity == MetricPolarity.LOWER_IS_BETTER:
        if actual_value == _ZERO:
            return FULL_SCORE
        return max(_ZERO, FULL_SCORE - actual_value * PENALTY_PER_UNIT)

    target = metric.target_value
    if target is None or target <= _ZERO:
        return _ZERO
    return actual_value / target * FULL_SCORE


@dataclass(frozen=True)
class MetricScore:
    metric: ScorecardMetric
    actual_value: Decimal | None
    achievement_percent: Decimal
    status: RagStatus

    @property
    def has_actual(self) -> bool:
        return self.actual_value is not None


@dataclass(frozen=True)
class CategoryScore:
    """
    Score of one category.

    ``category_score`` is on a 0-100 scale; ``weighted_score`` is that
    times the category weight.
    """

    category: ScorecardCategory
    metrics: tuple[MetricScore, ...]
    category_score: Decimal
    weighted_score: Decimal

    @property
    def has_actuals(self) -> bool:
        return any(m.has_actual for m in self.metrics)


@dataclass(frozen=True)
class ScorecardResult:
    categories: tuple[CategoryScore, ...]
    overall_score: Decimal
    overall_status: RagStatus
    total_weight: Decimal

    @property
    def has_any_actual(self) -> bool:
        return any(c.has_actuals for c in self.categories)


def category_score(metric_scores: Iterable[MetricScore]) -> Decimal:
    """Mean of capped achievement over metrics with an actual; 0 if none."""
    recorded = [m for m in metric_scores if m.has_actual]
    if not recorded:
        return _ZERO
    capped = sum((min(m.achievement_percent, FULL_SCORE) for m in recorded), _ZERO)
    return capped / Decimal(len(recorded))


def overall_score(category_scores: Sequence[CategoryScore]) -> tuple[Decimal, Decimal]:
    """
    Overall score and the total weight it was computed over.

    Only categories with at least one recorded actual contribute weight.
    """
    active = [c for c in category_scores if c.has_actuals]
    total_weight = sum((c.category.weight for c in active), _ZERO)
    if total_weight == _ZERO:
        return _ZERO, total_weight
    weighted_sum = sum((c.weighted_score for c in active), _ZERO)
    return weighted_sum / total_weight * FULL_SCORE, total_weight


class ScorecardEngine:
    """
    Stateless scorecard evaluator over an explicit snapshot.

    Contract:
        The caller supplies categories, metrics and actuals; the engine
        keeps no state between calls.
    Guarantees:
        - Inactive categories and metrics are left out.
        - Categories and metrics are returned in ``sort_order``.
        - At most one actual per metric is used; if the snapshot holds
          several, the first is used and a warning is logged.
    Non-goals:
        - Does not fetch or persist actuals.
    """

    @traced_engine(
        "scorecard", "1.0",
        fingerprint_fields=("categories", "metrics", "actuals", "period_start", "period_end"),
    )
    def evaluate(
        self,
        categories: Iterable[ScorecardCategory],
        metrics: Iterable[ScorecardMetric],
        actuals: Iterable[ScorecardActual],
        period_start: date | None = None,
        period_end: date | None = None,
    ) -> ScorecardResult:
        """
        Score every active category and the scorecard as a whole.

        Args:
            categories: Scorecard categories with weights
            metrics: Metric definitions, each bound to one category
            actuals: Recorded actuals for the reporting window
            period_start: If given, ignore actuals starting before it
            period_end: If given, ignore actuals ending after it

        Returns:
            ScorecardResult with per-category scores and the overall score
        """
        actual_by_metric = self._index_actuals(actuals, period_start, period_end)

        active_metrics = sorted(
            (m for m in metrics if m.is_active),
            key=lambda m: m.sort_order,
        )
        category_scores: list[CategoryScore] = []
        for category in sorted((c for c in categories if c.is_active), key=lambda c: c.sort_order):
            metric_scores = tuple(
                self.score_metric(metric, actual_by_metric.get(metric.metric_id))
                for metric in active_metrics
                if metric.category_id == category.category_id
            )
            score = category_score(metric_scores)
            category_scores.append(CategoryScore(
                category=category,
                metrics=metric_scores,
                category_score=score,
                weighted_score=score * category.weight,
            ))

        overall, total_weight = overall_score(category_scores)
        has_any_actual = any(c.has_actuals for c in category_scores)
        result = ScorecardResult(
            categories=tuple(category_scores),
            overall_score=overall,
            overall_status=classify(overall, has_any_actual),
            total_weight=total_weight,
        )

        logger.info("scorecard_evaluated", extra={
            "category_count": len(category_scores),
            "metric_count": sum(len(c.metrics) for c in category_scores),
            "recorded_count": sum(1 for c in category_scores for m in c.metrics if m.has_actual),
            "total_weight": str(total_weight),
            "overall_score": str(overall),
            "overall_status": result.overall_status.value,
        })
        return result

    def score_metric(self, metric: ScorecardMetric, actual: ScorecardActual | None) -> MetricScore:
        """Achievement and RAG status of one metric."""
        actual_value = actual.actual_value if actual is not None else None
        percent = achievement(metric, actual_value)
        return MetricScore(
            metric=metric,
            actual_value=actual_value,
            achievement_percent=percent,
            status=classify(percent, actual_value is not None),
        )

    def _index_actuals(
        self,
        actuals: Iterable[ScorecardActual],
        period_start: date | None,
        period_end: date | None,
    ) -> dict[str, ScorecardActual]:
        indexed: dict[str, ScorecardActual] = {}
        for actual in actuals:
            if period_start is not None and actual.period_start < period_start:
                continue
            if period_end is not None and actual.period_end > period_end:
                continue
            if actual.metric_id in indexed:
                logger.warning("scorecard_duplicate_actual", extra={
                    "metric_id": actual.metric_id,
                    "period_start": str(actual.period_start),
                    "period_end": str(actual.period_end),
                })
                continue
            indexed[actual.metric_id] = actual
        return indexed
