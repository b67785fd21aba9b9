"""
Pytest fixtures for the consultancy metrics test suite.

Provides:
- Structured logging configured once per session
- A ``captured_logs`` fixture returning emitted log records as dicts
- Small builders for the record snapshots the engines consume
"""

import json
import logging
from datetime import date
from decimal import Decimal
from io import StringIO

import pytest

from consultancy_kernel.domain import (
    FeeConfig,
    MetricPolarity,
    ScorecardActual,
    ScorecardCategory,
    ScorecardMetric,
)
from consultancy_kernel.domain.values import Money
from consultancy_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)

# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture consultancy logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs):
            ProfitPoolCalculator().compute(...)
            logs = captured_logs()
            assert any(r["message"] == "profit_pool_calculated" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("consultancy")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# =============================================================================
# Record builders
# =============================================================================


@pytest.fixture
def fee_config() -> FeeConfig:
    return FeeConfig(
        effective_from=date(2026, 1, 1),
        fixed_monthly_fee=Money.of("4236"),
        survey_fee=Money.of("1000"),
        meeting_fee=Money.of("700"),
    )


@pytest.fixture
def quarter_window() -> tuple[date, date]:
    return date(2026, 1, 1), date(2026, 3, 31)


@pytest.fixture
def make_metric():
    """Factory for ScorecardMetric with sensible defaults."""

    def _make(
        metric_id: str,
        category_id: str = "delivery",
        target: str | None = "10",
        polarity: MetricPolarity = MetricPolarity.HIGHER_IS_BETTER,
        **kwargs,
    ) -> ScorecardMetric:
        return ScorecardMetric(
            metric_id=metric_id,
            category_id=category_id,
            name=metric_id.replace("_", " ").title(),
            target_value=Decimal(target) if target is not None else None,
            polarity=polarity,
            **kwargs,
        )

    return _make


@pytest.fixture
def make_actual(quarter_window):
    """Factory for ScorecardActual inside the Q1 2026 window."""
    start, end = quarter_window

    def _make(metric_id: str, value: str | None) -> ScorecardActual:
        return ScorecardActual(
            metric_id=metric_id,
            period_start=start,
            period_end=end,
            actual_value=Decimal(value) if value is not None else None,
        )

    return _make


@pytest.fixture
def make_category():
    def _make(category_id: str, weight: str = "1", **kwargs) -> ScorecardCategory:
        return ScorecardCategory(
            category_id=category_id,
            name=category_id.title(),
            weight=Decimal(weight),
            **kwargs,
        )

    return _make
