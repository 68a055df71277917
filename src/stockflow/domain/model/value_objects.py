"""Money, the one value object the order engine needs.

Prices and order totals are immutable and compared by value. A negative
amount can never be constructed.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from stockflow.domain.exceptions import ValidationError


@dataclass(frozen=True)
class Money:
    """Non-negative monetary amount.

    Backed by Decimal so ``price * quantity`` is exact; no currency or
    rounding policy is attached.
    """

    amount: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if self.amount < 0:
            raise ValidationError(f"Money amount cannot be negative, got {self.amount}")

    def __mul__(self, quantity: int) -> Money:
        """Total for *quantity* units at this unit price."""
        if not isinstance(quantity, int):
            raise TypeError(f"Money can only be multiplied by a unit count, got {quantity!r}")
        return Money(self.amount * quantity)

    def __str__(self) -> str:
        return f"{self.amount:.2f}"
