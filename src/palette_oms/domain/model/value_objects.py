"""Value Objects for palette pricing and order lines.

Both are frozen dataclasses: they validate once on construction and are
compared by value afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from palette_oms.domain.exceptions import ValidationError

CENT = Decimal("0.01")


@dataclass(frozen=True)
class Money:
    """A catalog price.

    Stored rounded to the cent, matching the NUMERIC(10, 2) price column.
    Palette prices are informational; nothing in the order flow totals them.
    """

    amount: Decimal
    currency: str = "EUR"

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(f"Price must be a Decimal, got {type(self.amount).__name__}")
        if not self.amount.is_finite() or self.amount < 0:
            raise ValidationError(f"Price cannot be negative, got {self.amount}")
        if len(self.currency) != 3 or not self.currency.isalpha():
            raise ValidationError(f"Unknown currency code '{self.currency}'")
        object.__setattr__(self, "amount", self.amount.quantize(CENT, rounding=ROUND_HALF_UP))
        object.__setattr__(self, "currency", self.currency.upper())

    def __str__(self) -> str:
        return f"{self.amount} {self.currency}"

    @staticmethod
    def of(amount: str | float | int | Decimal, currency: str = "EUR") -> Money:
        """Parse user or database input into a price."""
        try:
            value = Decimal(str(amount).strip().replace(",", "."))
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid price: {amount!r}") from exc
        return Money(value, currency)


@dataclass(frozen=True)
class Quantity:
    """Number of palettes on one order line (a strictly positive int)."""

    value: int

    def __post_init__(self) -> None:
        # bool is an int subclass; True must not sneak in as 1
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValidationError(f"Quantity must be a whole number, got {self.value!r}")
        if self.value < 1:
            raise ValidationError(f"Quantity must be positive, got {self.value}")

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)
