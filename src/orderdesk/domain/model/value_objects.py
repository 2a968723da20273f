"""Money and CustomerInfo: immutable, validated on construction.

Both compare by value.  An instance that exists is a valid one, so
callers never re-check amounts, currencies or email addresses.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from orderdesk.domain.exceptions import (
    IncompatibleCurrency,
    InvalidAmount,
    InvalidCurrency,
    InvalidEmail,
    InvalidMultiplier,
    InvalidName,
    NegativeResult,
    ValidationError,
)

DEFAULT_CURRENCY = "EUR"

_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


@dataclass(frozen=True)
class Money:
    """A non-negative Decimal amount in one currency.

    Arithmetic between different currencies raises ``IncompatibleCurrency``;
    there is no implicit conversion.
    """

    amount: Decimal
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise InvalidAmount(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if not self.amount.is_finite():
            raise InvalidAmount(f"Money amount must be a finite number, got {self.amount}")
        if self.amount < Decimal("0"):
            raise InvalidAmount(
                f"Money amount cannot be negative, got {self.amount}"
            )
        if not isinstance(self.currency, str) or not self.currency.strip():
            raise InvalidCurrency("Currency cannot be empty")

    # --- Arithmetic -----------------------------------------------------------

    def add(self, other: Money) -> Money:
        self._assert_same_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def subtract(self, other: Money) -> Money:
        self._assert_same_currency(other)
        result = self.amount - other.amount
        if result < Decimal("0"):
            raise NegativeResult("Money subtraction would result in a negative amount")
        return Money(result, self.currency)

    def multiply(self, factor: int | Decimal) -> Money:
        if isinstance(factor, bool) or not isinstance(factor, (int, Decimal)):
            raise InvalidMultiplier(
                f"Can only multiply Money by int or Decimal, got {type(factor).__name__}"
            )
        if isinstance(factor, Decimal) and not factor.is_finite():
            raise InvalidMultiplier(f"Multiplier must be a finite number, got {factor}")
        if factor < 0:
            raise InvalidMultiplier(f"Multiplier cannot be negative, got {factor}")
        return Money(self.amount * factor, self.currency)

    def equals(self, other: Money) -> bool:
        return self == other

    def is_zero(self) -> bool:
        return self.amount == 0

    __add__ = add
    __sub__ = subtract
    __mul__ = multiply

    def __lt__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount < other.amount

    def __le__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount <= other.amount

    def __gt__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount > other.amount

    def __ge__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount >= other.amount

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        return f"{self.amount:.2f} {self.currency}"

    # --- Internal helpers -----------------------------------------------------

    def _assert_same_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise IncompatibleCurrency(
                f"Cannot combine {self.currency} with {other.currency}"
            )

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def of(amount: str | float | int | Decimal, currency: str = DEFAULT_CURRENCY) -> Money:
        """Parse *amount* through ``str`` so floats keep their printed value."""
        try:
            value = Decimal(str(amount).strip())
        except (InvalidOperation, ValueError) as exc:
            raise InvalidAmount(f"Invalid money amount: {amount!r}") from exc
        return Money(value, currency.strip().upper() if currency else currency)

    @staticmethod
    def zero(currency: str = DEFAULT_CURRENCY) -> Money:
        return Money(Decimal("0"), currency)


@dataclass(frozen=True)
class CustomerInfo:
    """Who the order is for: company name, tax/VAT number and contact email."""

    name: str
    tax_number: str
    email: str

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise InvalidName("Customer name cannot be empty")
        if not self.tax_number or not self.tax_number.strip():
            raise ValidationError("Customer tax number cannot be empty")
        if not self.email or not _EMAIL_PATTERN.match(self.email.strip()):
            raise InvalidEmail(f"Invalid email format: {self.email!r}")
        # Frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, "name", self.name.strip())
        object.__setattr__(self, "tax_number", self.tax_number.strip())
        object.__setattr__(self, "email", self.email.strip())
