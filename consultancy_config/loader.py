"""
Configuration Loader (``consultancy_config.loader``).

Responsibility
--------------
Loads a YAML configuration document and parses it into the typed
``consultancy_config.schema.DashboardConfig``.  The public runtime entry
point is ``consultancy_config.get_active_config()``.

Invariants enforced
-------------------
* Every parsed object is a frozen dataclass.
* Fee and overhead series are built as ``IntervalSeries``, so overlapping
  records are rejected here, when configuration is written or loaded,
  and never at lookup time.
* Money and percentages are parsed through ``str`` into Decimal; YAML
  floats never reach arithmetic.
* ``compute_checksum`` produces a deterministic SHA-256 hash for
  configuration identity and change detection.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Missing required keys  -> ``ConfigurationError``.
* Invalid date format  -> ``ValueError`` from ``date.fromisoformat``.
* Overlapping or inverted intervals  -> ``IntervalOverlapError`` /
  ``InvalidIntervalError``.
"""

from __future__ import annotations

import hashlib
import json
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Any

import yaml

from consultancy_config.schema import DashboardConfig
from consultancy_kernel.domain.intervals import IntervalSeries
from consultancy_kernel.domain.records import FeeConfig, OverheadConfig
from consultancy_kernel.domain.values import Money, to_decimal
from consultancy_kernel.exceptions import ConfigurationError


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path) as f:
        return yaml.safe_load(f) or {}


def parse_date(value: Any) -> date:
    """
    Parse a date from YAML (string or date object).

    Raises:
        ValueError: if ``value`` is not a valid date representation.
    """
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return date.fromisoformat(value)
    raise ValueError(f"Cannot parse date from {value!r}")


def parse_optional_date(value: Any) -> date | None:
    return parse_date(value) if value else None


def _require(data: dict[str, Any], key: str, source: str) -> Any:
    if key not in data or data[key] is None:
        raise ConfigurationError(source, f"missing required key '{key}'")
    return data[key]


def parse_fee_config(data: dict[str, Any]) -> FeeConfig:
    """Parse a ``FeeConfig`` from a dict."""
    return FeeConfig(
        effective_from=parse_date(_require(data, "effective_from", "fee_configs")),
        effective_to=parse_optional_date(data.get("effective_to")),
        fixed_monthly_fee=Money.of(to_decimal(_require(data, "fixed_monthly_fee", "fee_configs"))),
        survey_fee=Money.of(to_decimal(_require(data, "survey_fee", "fee_configs"))),
        meeting_fee=Money.of(to_decimal(_require(data, "meeting_fee", "fee_configs"))),
    )


def parse_overhead_config(data: dict[str, Any]) -> OverheadConfig:
    """Parse an ``OverheadConfig`` from a dict."""
    return OverheadConfig(
        effective_from=parse_date(_require(data, "effective_from", "overhead_configs")),
        effective_to=parse_optional_date(data.get("effective_to")),
        monthly_amount=Money.of(to_decimal(_require(data, "monthly_amount", "overhead_configs"))),
        notes=data.get("notes"),
    )


def parse_dashboard_config(data: dict[str, Any]) -> DashboardConfig:
    """
    Parse a complete ``DashboardConfig`` from a YAML document.

    Preconditions:
        - ``data`` contains ``name``; every other key has a default.
    Postconditions:
        - Returns a frozen ``DashboardConfig`` whose series are validated.
    Raises:
        ConfigurationError: if required keys are missing.
        IntervalOverlapError: if two records of one series overlap.
    """
    defaults = data.get("defaults", {}) or {}
    share_percent = to_decimal(defaults.get("share_percent", "12"))
    if share_percent < Decimal("0") or share_percent > Decimal("100"):
        raise ConfigurationError("defaults", f"share_percent out of range: {share_percent}")

    return DashboardConfig(
        name=_require(data, "name", "root"),
        version=int(data.get("version", 1)),
        currency_symbol=defaults.get("currency_symbol", "£"),
        share_percent=share_percent,
        default_overhead=Money.of(to_decimal(defaults.get("monthly_overhead", "4200"))),
        scenario_monthly_overhead=Money.of(
            to_decimal(defaults.get("scenario_monthly_overhead", defaults.get("monthly_overhead", "4200")))
        ),
        bonus_percentage=to_decimal(defaults.get("bonus_percentage", "10")),
        fee_configs=IntervalSeries(
            (parse_fee_config(f) for f in data.get("fee_configs", []) or []),
            name="fee",
        ),
        overhead_configs=IntervalSeries(
            (parse_overhead_config(o) for o in data.get("overhead_configs", []) or []),
            name="overhead",
        ),
        checksum=compute_checksum(data),
    )


def load_dashboard_config(path: Path) -> DashboardConfig:
    """Load and parse a configuration file."""
    return parse_dashboard_config(load_yaml_file(path))


def compute_checksum(data: dict[str, Any]) -> str:
    """
    Compute SHA-256 checksum of canonical JSON serialization.

    Postconditions:
        - Identical ``data`` always produces identical checksums.
    """
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()
