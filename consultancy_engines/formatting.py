"""Display formatting for currency amounts and percentages."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from consultancy_kernel.domain.values import Money, to_decimal

DEFAULT_CURRENCY_SYMBOL = "£"


def format_currency(
    amount: Money | Decimal | int | str,
    precision: int = 2,
    symbol: str = DEFAULT_CURRENCY_SYMBOL,
) -> str:
    """
    Render an amount with symbol and thousands separators.

    ``precision`` is 2 (pence) or 0 (whole pounds, for large figures).
    Rounds half-up before formatting, e.g. ``-£1,234.50``.
    """
    if precision not in (0, 2):
        raise ValueError(f"precision must be 0 or 2, got {precision}")
    value = amount.amount if isinstance(amount, Money) else to_decimal(amount)
    quantum = Decimal("1") if precision == 0 else Decimal("0.01")
    rounded = value.quantize(quantum, rounding=ROUND_HALF_UP)
    sign = "-" if rounded < 0 else ""
    return f"{sign}{symbol}{abs(rounded):,.{precision}f}"


def format_percent(value: Decimal | int | str, decimals: int = 0) -> str:
    """Render a percentage that is already on a 0-100 scale, e.g. ``87%``."""
    quantum = Decimal(1).scaleb(-decimals)
    rounded = to_decimal(value).quantize(quantum, rounding=ROUND_HALF_UP)
    return f"{rounded:.{decimals}f}%"
