"""
Intervals -- time-ranged configuration lookup.

Responsibility:
    Resolve which record of a time-ranged configuration series (fee rates,
    central overhead) is in force on a given date, and hold such series in
    a sorted structure whose "no two intervals overlap" invariant is
    validated when the series is built.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.

Invariants enforced:
    - Within one IntervalSeries no two records overlap (checked at
      construction, i.e. at write time, never re-checked at read time).
    - effective_to, when set, is on or after effective_from.
    - Lookup is inclusive at both ends; an open-ended record
      (effective_to is None) contains every date from effective_from on.

Failure modes:
    - InvalidIntervalError when a record ends before it starts.
    - IntervalOverlapError when two records of one series overlap.
    - ``lookup`` over an unvalidated iterable with overlapping records
      returns the first match in iteration order; no tie-breaking.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from datetime import date
from typing import Any, Generic, Protocol, TypeVar

from consultancy_kernel.exceptions import IntervalOverlapError, InvalidIntervalError
from consultancy_kernel.logging_config import get_logger

logger = get_logger("domain.intervals")


class TimeRanged(Protocol):
    """Anything with an effective-from date and an optional effective-to date."""

    effective_from: date
    effective_to: date | None


T = TypeVar("T", bound=TimeRanged)
D = TypeVar("D")


def contains(config: TimeRanged, query_date: date) -> bool:
    """True if ``query_date`` falls inside the record's interval (inclusive)."""
    if config.effective_from > query_date:
        return False
    return config.effective_to is None or config.effective_to >= query_date


def lookup(configs: Iterable[T], query_date: date, default: D) -> T | D:
    """
    Return the config whose interval contains ``query_date``.

    Preconditions:
        - No two configs contain the same date. Overlap is a caller error;
          the first match in iteration order is returned.
    Postconditions:
        - Returns ``default`` when no interval contains the date.
    """
    for config in configs:
        if contains(config, query_date):
            return config
    return default


class IntervalSeries(Generic[T]):
    """
    Sorted, validated series of time-ranged records.

    Contract:
        Built once from a snapshot of records; immutable afterwards.
    Guarantees:
        - Records are ordered by effective_from.
        - No two records overlap (IntervalOverlapError otherwise).
        - ``lookup`` is a linear scan, adequate for the short series
          (a handful of rate changes per year) this holds.
    """

    def __init__(self, records: Iterable[T], name: str = "config"):
        self._name = name
        ordered = sorted(records, key=lambda r: r.effective_from)
        for record in ordered:
            if record.effective_to is not None and record.effective_to < record.effective_from:
                raise InvalidIntervalError(
                    effective_from=str(record.effective_from),
                    effective_to=str(record.effective_to),
                )

        # Sorted by start, so only neighbours can overlap:
        # [s1, e1] and [s2, e2] overlap iff s2 <= e1 (with s1 <= s2).
        for previous, current in zip(ordered, ordered[1:]):
            if previous.effective_to is None or current.effective_from <= previous.effective_to:
                ends = [e for e in (previous.effective_to, current.effective_to) if e is not None]
                overlap_end = min(ends) if ends else None
                logger.error("interval_overlap_detected", extra={
                    "series": name,
                    "previous_from": str(previous.effective_from),
                    "current_from": str(current.effective_from),
                })
                raise IntervalOverlapError(
                    series=name,
                    overlap_start=str(current.effective_from),
                    overlap_end=str(overlap_end) if overlap_end is not None else "open",
                )

        self._records: tuple[T, ...] = tuple(ordered)

    @property
    def name(self) -> str:
        return self._name

    @property
    def records(self) -> tuple[T, ...]:
        return self._records

    def lookup(self, query_date: date, default: D = None) -> T | D:
        """Record in force on ``query_date``, else ``default``."""
        return lookup(self._records, query_date, default)

    def value_for(self, query_date: date, field: str, default: Any) -> Any:
        """Named field of the record in force on ``query_date``, else ``default``."""
        record = self.lookup(query_date)
        if record is None:
            return default
        return getattr(record, field)

    def __iter__(self) -> Iterator[T]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        return f"IntervalSeries({self._name!r}, {len(self._records)} records)"
