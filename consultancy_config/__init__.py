"""
consultancy_config -- single public entrypoint for dashboard configuration.

Responsibility:
    Provides the way to obtain configuration at runtime through
    ``get_active_config()``.  Engines never read configuration files; the
    caller passes the resolved values (fee series, overhead series, share
    percentage) into them.

Architecture position:
    Configuration -- YAML-driven, validated at load time.
    Sits above ``consultancy_kernel``.  Neither the kernel nor the engines
    import from ``consultancy_config``.

Invariants enforced:
    - Time-ranged series are validated for overlap when loaded.
    - Deterministic loading: the same document always produces the same
      checksum.

Failure modes:
    - ``FileNotFoundError`` -- configuration file does not exist.
    - ``ConfigurationError`` -- required keys missing or out of range.
    - ``IntervalOverlapError`` -- overlapping fee or overhead records.

Audit relevance:
    Every successful ``get_active_config()`` call emits a
    ``CONSULTANCY_CONFIG_TRACE`` log entry with name, version, checksum
    and series sizes.
"""

from __future__ import annotations

import logging
from pathlib import Path

from consultancy_config.loader import load_dashboard_config
from consultancy_config.schema import DashboardConfig

_logger = logging.getLogger("consultancy.config")

DEFAULT_CONFIG_PATH = Path(__file__).parent / "sets" / "default.yaml"


def get_active_config(path: Path | str | None = None) -> DashboardConfig:
    """
    Load the active dashboard configuration.

    Args:
        path: Configuration file to load. Defaults to the packaged
            ``consultancy_config/sets/default.yaml``.

    Returns:
        DashboardConfig with validated fee and overhead series.
    """
    config_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    config = load_dashboard_config(config_path)

    _logger.info(
        "CONSULTANCY_CONFIG_TRACE",
        extra={
            "trace_type": "CONSULTANCY_CONFIG_TRACE",
            "config_name": config.name,
            "config_version": config.version,
            "checksum": config.checksum,
            "fee_config_count": len(config.fee_configs),
            "overhead_config_count": len(config.overhead_configs),
            "source": str(config_path),
        },
    )
    return config


__all__ = ["DashboardConfig", "DEFAULT_CONFIG_PATH", "get_active_config"]
