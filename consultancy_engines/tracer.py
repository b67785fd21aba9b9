"""
consultancy_engines.tracer -- @traced_engine, emitting CONSULTANCY_ENGINE_TRACE.

Responsibility:
    Wrap a pure engine call so that every invocation leaves one structured
    log record behind: which engine and version ran, a fingerprint of the
    snapshot it was given, and how long it took.  Two calls with the same
    fingerprint must have produced the same figures, which is how a
    dashboard number is tied back to its inputs.

Architecture position:
    Engines -- infrastructure support for the pure calculation layer.
    Emits a log record only; no other side effects.

Invariants enforced:
    - The fingerprint depends only on the values of the named arguments,
      never on whether they were passed positionally or by keyword.
    - Snapshot records (frozen dataclasses), Money, periods and dates are
      canonicalized field by field; mappings are key-sorted; sequences
      keep their order.
    - The wrapped function's return value is passed through untouched.

Failure modes:
    - A named field that was not supplied is recorded as "null".
    - If the arguments do not bind to the signature, the call itself is
      still made so that it raises its own TypeError.
    - One-shot iterators among the named arguments are read into tuples
      before the call; the engine receives those tuples.

Usage:
    from consultancy_engines.tracer import traced_engine

    @traced_engine("profit_pool", "1.0", fingerprint_fields=("total_revenue",))
    def calculate_profit_pool(total_revenue, total_costs):
        ...
"""

from __future__ import annotations

import dataclasses
import functools
import hashlib
import inspect
import logging
import time
from collections.abc import Callable, Iterable, Iterator, Mapping
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any

_logger = logging.getLogger("consultancy.engines.tracer")

FINGERPRINT_LENGTH = 16


def _canonicalize(value: Any) -> str:
    """Stable text form of an engine argument."""
    if value is None:
        return "null"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, (bool, int, Decimal, str)):
        return str(value)
    if isinstance(value, date):
        return value.isoformat()
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        inner = ",".join(
            f"{f.name}={_canonicalize(getattr(value, f.name))}"
            for f in dataclasses.fields(value)
        )
        return f"{type(value).__name__}({inner})"
    if isinstance(value, Mapping):
        items = sorted(value.items(), key=lambda kv: str(kv[0]))
        return "{" + ",".join(f"{k}:{_canonicalize(v)}" for k, v in items) + "}"
    if isinstance(value, (set, frozenset)):
        return "{" + ",".join(sorted(_canonicalize(v) for v in value)) + "}"
    if isinstance(value, (list, tuple)):
        return "[" + ",".join(_canonicalize(v) for v in value) + "]"
    # Reusable collections such as IntervalSeries; one-shot iterators are
    # materialized by the decorator before they get here.
    if isinstance(value, Iterable) and not isinstance(value, Iterator):
        return "[" + ",".join(_canonicalize(v) for v in value) + "]"
    return str(value)


def compute_input_fingerprint(
    fingerprint_fields: tuple[str, ...],
    arguments: dict[str, Any],
) -> str:
    """SHA-256 of the named arguments, truncated to 16 hex characters."""
    canonical = "|".join(
        f"{field}={_canonicalize(arguments.get(field))}" for field in fingerprint_fields
    )
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()[:FINGERPRINT_LENGTH]


def traced_engine(
    engine_name: str,
    engine_version: str,
    fingerprint_fields: tuple[str, ...] = (),
) -> Callable:
    """
    Decorator that emits CONSULTANCY_ENGINE_TRACE after each engine call.

    Args:
        engine_name: Engine identifier (e.g., "scorecard").
        engine_version: Engine version (e.g., "1.0").
        fingerprint_fields: Parameter names, positional or keyword, whose
            values make up the input fingerprint.
    """

    def decorator(func: Callable) -> Callable:
        signature = inspect.signature(func)

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            fp = ""
            if fingerprint_fields:
                try:
                    bound = signature.bind(*args, **kwargs)
                except TypeError:
                    bound = None
                if bound is not None:
                    # Iterators can be read once: hand the engine the same
                    # materialized items that were fingerprinted.
                    for name in fingerprint_fields:
                        value = bound.arguments.get(name)
                        if isinstance(value, Iterator):
                            bound.arguments[name] = tuple(value)
                    args, kwargs = bound.args, bound.kwargs
                    bound.apply_defaults()
                    arguments = dict(bound.arguments)
                else:
                    arguments = dict(kwargs)
                fp = compute_input_fingerprint(fingerprint_fields, arguments)

            t0 = time.monotonic()
            result = func(*args, **kwargs)
            duration_ms = round((time.monotonic() - t0) * 1000, 2)

            _logger.info(
                "CONSULTANCY_ENGINE_TRACE",
                extra={
                    "trace_type": "CONSULTANCY_ENGINE_TRACE",
                    "engine_name": engine_name,
                    "engine_version": engine_version,
                    "input_fingerprint": fp,
                    "duration_ms": duration_ms,
                    "function": func.__qualname__,
                },
            )
            return result

        return wrapper

    return decorator
