"""
Values -- Immutable, self-validating domain value objects.

Responsibility:
    Provides the foundational value types for every metric computation:
    Money (single-currency amount with fixed 2-place precision) and Period
    (a calendar month). These replace primitive types (Decimal, str, date)
    wherever financial data appears in engine logic.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.
    Imported by every other domain and engine module.

Invariants enforced:
    - All monetary amounts are Decimal, never float.
    - One rounding rule: round-half-up to 2 decimal places (``round2``).
      Money never auto-rounds; engines call ``round2`` exactly once at the
      point of return so intermediate sums keep full precision.
    - Periods are always valid calendar months and totally ordered.

Failure modes:
    - ValueError on construction with invalid amounts or months
    - TypeError when Money operations are mixed with unsupported types
"""

from __future__ import annotations

import calendar
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

MONEY_DECIMAL_PLACES = 2
_TWO_PLACES = Decimal("0.01")


def to_decimal(value: Decimal | int | str | float) -> Decimal:
    """Convert a scalar to Decimal via its string form (no binary float noise)."""
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError) as e:
        raise ValueError(f"Invalid numeric value: {value!r}") from e


def round2(value: Decimal | int | str) -> Decimal:
    """
    Round to 2 decimal places using round-half-up.

    Summing already-rounded parts and rounding the sum can legitimately
    differ by up to ``0.01 * count``.
    """
    return to_decimal(value).quantize(_TWO_PLACES, rounding=ROUND_HALF_UP)


@dataclass(frozen=True, slots=True)
class Money:
    """
    Monetary amount value object.

    Contract:
        Wraps a Decimal amount in the dashboard's single reporting currency.
        This is the canonical representation of monetary values throughout
        the engines.

    Guarantees:
        - Immutable and hashable (frozen dataclass with slots)
        - amount is always a Decimal (never float)
        - Arithmetic keeps full precision; rounding only via ``round()``

    Non-goals:
        - Does NOT carry or convert currencies (single-currency dashboard)
        - Does NOT auto-round -- callers must explicitly call .round()
    """

    amount: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            if isinstance(self.amount, bool):
                raise TypeError("amount must be numeric, got bool")
            object.__setattr__(self, "amount", to_decimal(self.amount))
        if not self.amount.is_finite():
            raise ValueError(f"Invalid amount: {self.amount}")

    @classmethod
    def of(cls, amount: Decimal | str | int) -> Money:
        """
        Factory method for creating Money.

        Raises:
            ValueError: If amount cannot be converted to Decimal.
        """
        return cls(amount=to_decimal(amount))

    @classmethod
    def zero(cls) -> Money:
        """Create a zero amount."""
        return cls(amount=Decimal("0"))

    @classmethod
    def total(cls, amounts: Iterable[Money]) -> Money:
        """Sum Money values at full precision (empty -> zero)."""
        result = Decimal("0")
        for money in amounts:
            result += money.amount
        return cls(amount=result)

    @property
    def is_zero(self) -> bool:
        """Check if amount is zero."""
        return self.amount == Decimal("0")

    @property
    def is_positive(self) -> bool:
        """Check if amount is positive."""
        return self.amount > Decimal("0")

    @property
    def is_negative(self) -> bool:
        """Check if amount is negative."""
        return self.amount < Decimal("0")

    def round(self) -> Money:
        """Return a new Money rounded half-up to 2 decimal places."""
        return Money(amount=round2(self.amount))

    def __add__(self, other: Money) -> Money:
        if not isinstance(other, Money):
            return NotImplemented
        return Money(amount=self.amount + other.amount)

    def __sub__(self, other: Money) -> Money:
        if not isinstance(other, Money):
            return NotImplemented
        return Money(amount=self.amount - other.amount)

    def __neg__(self) -> Money:
        return Money(amount=-self.amount)

    def __abs__(self) -> Money:
        return Money(amount=abs(self.amount))

    def __mul__(self, factor: Decimal | int | str) -> Money:
        """Multiply by a scalar."""
        if isinstance(factor, (int, str)) and not isinstance(factor, bool):
            factor = Decimal(str(factor))
        if not isinstance(factor, Decimal):
            return NotImplemented
        return Money(amount=self.amount * factor)

    def __rmul__(self, factor: Decimal | int | str) -> Money:
        return self.__mul__(factor)

    def __truediv__(self, divisor: Decimal | int | str) -> Money:
        """Divide by a scalar."""
        if isinstance(divisor, (int, str)) and not isinstance(divisor, bool):
            divisor = Decimal(str(divisor))
        if not isinstance(divisor, Decimal):
            return NotImplemented
        return Money(amount=self.amount / divisor)

    def __lt__(self, other: Money) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.amount < other.amount

    def __le__(self, other: Money) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.amount <= other.amount

    def __gt__(self, other: Money) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.amount > other.amount

    def __ge__(self, other: Money) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.amount >= other.amount

    def __str__(self) -> str:
        return str(self.amount)

    def __repr__(self) -> str:
        return f"Money({self.amount!r})"


@dataclass(frozen=True, slots=True, order=True)
class Period:
    """
    A calendar month.

    Contract:
        Used both as the allocation unit of revenue spreading and as the
        query key of monthly roll-ups. Ordered chronologically.

    Guarantees:
        - Immutable, hashable, totally ordered by (year, month)
        - 1 <= month <= 12
    """

    year: int
    month: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise ValueError(f"Month must be between 1 and 12, got {self.month}")
        if self.year < 1:
            raise ValueError(f"Invalid year: {self.year}")

    @classmethod
    def of(cls, value: date | Period) -> Period:
        """The period containing a date (periods are returned unchanged)."""
        if isinstance(value, Period):
            return value
        return cls(year=value.year, month=value.month)

    @classmethod
    def parse(cls, value: str) -> Period:
        """Parse ``YYYY-MM`` or an ISO date ``YYYY-MM-DD``."""
        parts = value.strip().split("-")
        if len(parts) not in (2, 3):
            raise ValueError(f"Cannot parse period from {value!r}")
        try:
            return cls(year=int(parts[0]), month=int(parts[1]))
        except ValueError as e:
            raise ValueError(f"Cannot parse period from {value!r}") from e

    @property
    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def last_day(self) -> date:
        return date(self.year, self.month, calendar.monthrange(self.year, self.month)[1])

    def plus_months(self, months: int) -> Period:
        """Shift by a (possibly negative) number of calendar months."""
        index = self.year * 12 + (self.month - 1) + months
        return Period(year=index // 12, month=index % 12 + 1)

    def contains(self, value: date) -> bool:
        return value.year == self.year and value.month == self.month

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"

