"""
Module: consultancy_engines.costs
Responsibility:
    Monthly cost roll-ups feeding the P&L: team (HR) costs with bonuses,
    and software subscriptions charged at an allocation percentage with
    budget-versus-reconciled views.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import consultancy_kernel.

Invariants enforced:
    - A recorded actual cost overrides the default monthly cost; a missing
      one (None) falls back to the default.  The same holds for the
      software allocation percentage.
    - Software budget always uses defaults.  A month is reconciled as soon
      as any software cost record exists for it; reconciled months report
      actual = total of effective allocated costs, unreconciled months
      report actual = 0 and total = budget.
    - Sums keep full precision; figures are rounded once at return.

Failure modes:
    - None for valid records.  HR cost records for unknown team members
      are skipped with a warning.  Software cost records for unknown or
      inactive items are warned about but still mark their month as
      reconciled.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from decimal import Decimal

from consultancy_engines.tracer import traced_engine
from consultancy_kernel.domain.records import HRCost, SoftwareCost, SoftwareItem, TeamMember
from consultancy_kernel.domain.values import Money, Period, to_decimal
from consultancy_kernel.logging_config import get_logger

logger = get_logger("engines.costs")

DEFAULT_BONUS_PERCENTAGE = Decimal("10")
_HUNDRED = Decimal("100")


def hr_cost_with_bonus(
    base_cost: Money,
    bonus_percentage: Decimal | int | str = DEFAULT_BONUS_PERCENTAGE,
) -> Money:
    """Base HR cost uplifted by a bonus percentage."""
    pct = to_decimal(bonus_percentage)
    return (base_cost * (Decimal("1") + pct / _HUNDRED)).round()


@dataclass(frozen=True)
class HRSummary:
    period: Period
    base_cost: Money
    bonus: Money
    total: Money
    by_member: dict[str, tuple[Money, Money]] = field(default_factory=dict)  # name -> (base, bonus)


@dataclass(frozen=True)
class SoftwareMonth:
    period: Period
    budget: Money
    actual: Money
    total: Money
    is_reconciled: bool
    by_item: dict[str, Money] = field(default_factory=dict)
    by_category: dict[str, Money] = field(default_factory=dict)


@traced_engine("hr_costs", "1.0", fingerprint_fields=("members", "costs"))
def monthly_hr_costs(
    members: Iterable[TeamMember],
    costs: Iterable[HRCost],
) -> dict[Period, HRSummary]:
    """
    Team cost per month.

    Returns:
        Mapping of period to HRSummary, ordered by period
    """
    members_by_id = {m.member_id: m for m in members}
    base: dict[Period, Decimal] = {}
    bonus: dict[Period, Decimal] = {}
    by_member: dict[Period, dict[str, list[Decimal]]] = {}

    for cost in costs:
        member = members_by_id.get(cost.member_id)
        if member is None:
            logger.warning("hr_cost_unknown_member", extra={
                "member_id": cost.member_id,
                "period": str(cost.period),
            })
            continue
        base_cost = (
            cost.actual_cost.amount
            if cost.actual_cost is not None
            else member.default_monthly_cost.amount
        )
        base[cost.period] = base.get(cost.period, Decimal("0")) + base_cost
        bonus[cost.period] = bonus.get(cost.period, Decimal("0")) + cost.bonus.amount
        entry = by_member.setdefault(cost.period, {}).setdefault(member.name, [Decimal("0"), Decimal("0")])
        entry[0] += base_cost
        entry[1] += cost.bonus.amount

    summaries: dict[Period, HRSummary] = {}
    for period in sorted(base):
        summaries[period] = HRSummary(
            period=period,
            base_cost=Money.of(base[period]).round(),
            bonus=Money.of(bonus[period]).round(),
            total=Money.of(base[period] + bonus[period]).round(),
            by_member={
                name: (Money.of(b).round(), Money.of(x).round())
                for name, (b, x) in by_member[period].items()
            },
        )

    logger.info("hr_costs_calculated", extra={
        "period_count": len(summaries),
        "member_count": len(members_by_id),
    })
    return summaries


@traced_engine("software_costs", "1.0", fingerprint_fields=("items", "costs", "year"))
def monthly_software_costs(
    items: Iterable[SoftwareItem],
    costs: Iterable[SoftwareCost],
    year: int,
) -> dict[Period, SoftwareMonth]:
    """
    Software cost for each month of ``year``.

    Args:
        items: Software subscriptions (inactive ones are ignored)
        costs: Reconciled per-month overrides
        year: Calendar year to report

    Returns:
        Mapping of the 12 periods of ``year`` to SoftwareMonth
    """
    active_items = [i for i in items if i.is_active]
    active_ids = {i.item_id for i in active_items}

    overrides: dict[tuple[str, Period], SoftwareCost] = {}
    reconciled: set[Period] = set()
    for cost in costs:
        if cost.period.year != year:
            continue
        if cost.item_id not in active_ids:
            logger.warning("software_cost_unknown_item", extra={
                "item_id": cost.item_id,
                "period": str(cost.period),
            })
        overrides[(cost.item_id, cost.period)] = cost
        reconciled.add(cost.period)

    months: dict[Period, SoftwareMonth] = {}
    for month in range(1, 13):
        period = Period(year, month)
        is_reconciled = period in reconciled
        budget = Decimal("0")
        actual = Decimal("0")
        by_item: dict[str, Decimal] = {}
        by_category: dict[str, Decimal] = {}

        for item in active_items:
            allocated_default = item.default_monthly_cost.amount * item.allocation_percent / _HUNDRED
            budget += allocated_default

            if is_reconciled:
                override = overrides.get((item.item_id, period))
                effective_cost = item.default_monthly_cost.amount
                effective_pct = item.allocation_percent
                if override is not None and override.actual_cost is not None:
                    effective_cost = override.actual_cost.amount
                if override is not None and override.allocation_percent is not None:
                    effective_pct = override.allocation_percent
                allocated = effective_cost * effective_pct / _HUNDRED
                actual += allocated
            else:
                allocated = allocated_default

            by_item[item.name] = by_item.get(item.name, Decimal("0")) + allocated
            by_category[item.category] = by_category.get(item.category, Decimal("0")) + allocated

        months[period] = SoftwareMonth(
            period=period,
            budget=Money.of(budget).round(),
            actual=Money.of(actual).round(),
            total=Money.of(actual if is_reconciled else budget).round(),
            is_reconciled=is_reconciled,
            by_item={k: Money.of(v).round() for k, v in by_item.items()},
            by_category={k: Money.of(v).round() for k, v in by_category.items()},
        )

    logger.info("software_costs_calculated", extra={
        "year": year,
        "item_count": len(active_items),
        "reconciled_months": len(reconciled),
    })
    return months
