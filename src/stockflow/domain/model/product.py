"""Product aggregate.

Products live independently of orders. Their stock is the only field the
order lifecycle mutates; every stock write goes through ``reserve`` or
``release`` so ``stock`` can never drop below zero.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from stockflow.domain.exceptions import InvalidOperationError, ValidationError
from stockflow.domain.model.value_objects import Money
from stockflow.domain.validation import validate_product_fields


@dataclass
class Product:
    """A product in the catalog.

    ``version`` is owned by the persistence layer: it is the value the row
    had when this object was read, and stock writes are compare-and-write
    against it.
    """

    id: int | None
    name: str
    description: str
    price: Money
    stock: int
    version: int = 0

    @staticmethod
    def create(
        name: str,
        description: str | None,
        price: Decimal | None,
        stock: int | None,
    ) -> Product:
        validate_product_fields(name, price, stock)
        return Product(
            id=None,
            name=name.strip(),
            description=(description or "").strip(),
            price=Money(price),  # type: ignore[arg-type]
            stock=stock,  # type: ignore[arg-type]
        )

    def has_stock_for(self, quantity: int) -> bool:
        return self.stock >= quantity

    def reserve(self, quantity: int) -> None:
        """Take *quantity* units out of stock.

        A negative quantity gives units back (used when an order shrinks).
        """
        if quantity > self.stock:
            raise InvalidOperationError(
                f"Insufficient stock for product id {self.id}"
            )
        self.stock -= quantity

    def release(self, quantity: int) -> None:
        """Return *quantity* previously reserved units to stock."""
        if quantity < 0:
            raise ValidationError("Release quantity cannot be negative")
        self.stock += quantity
