"""Order aggregate — the core of the domain.

An Order reserves stock on its Product for as long as it is PENDING (or
COMPLETED). The state transitions below keep the reservation and the
product's stock in step; persisting both sides atomically is the job of
the application layer's unit of work.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from stockflow.domain.exceptions import InvalidOperationError
from stockflow.domain.model.product import Product
from stockflow.domain.model.user import User
from stockflow.domain.model.value_objects import Money
from stockflow.domain.validation import validate_quantity


class OrderStatus(Enum):
    PENDING = "PENDING"
    CANCELED = "CANCELED"
    # Set only by fulfillment outside this package; terminal.
    COMPLETED = "COMPLETED"


@dataclass
class Order:
    """Aggregate root for a single-product order.

    Use the ``Order.place()`` factory for new orders — it enforces all
    business rules.  The ``__init__`` is intentionally simple so the
    repository can reconstitute persisted orders without re-validating.

    ``user`` and ``product`` are resolved from their ids on every read,
    so they show the current rows rather than a copy taken at creation.
    ``total_amount`` on the other hand is stored, and only changes when
    the order itself is written.
    """

    id: int | None
    order_date: datetime
    user: User
    product: Product
    quantity: int
    status: OrderStatus
    total_amount: Money

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def place(
        user: User,
        product: Product,
        quantity: int,
        order_date: datetime,
    ) -> Order:
        """Create a PENDING order and reserve its stock on *product*."""
        validate_quantity(quantity)
        if not product.has_stock_for(quantity):
            raise InvalidOperationError(
                f"Insufficient stock for product id {product.id}"
            )

        product.reserve(quantity)
        return Order(
            id=None,
            order_date=order_date,
            user=user,
            product=product,
            quantity=quantity,
            status=OrderStatus.PENDING,
            total_amount=product.price * quantity,
        )

    # --- State transitions ----------------------------------------------------

    def cancel(self) -> None:
        """Transition PENDING -> CANCELED and return the reservation.

        Quantity and total are kept as the historical record.
        """
        if self.status != OrderStatus.PENDING:
            raise InvalidOperationError("Only pending orders can be canceled.")
        self.status = OrderStatus.CANCELED
        self.product.release(self.quantity)

    def change_quantity(self, new_quantity: int) -> None:
        """Re-balance the reservation to *new_quantity* units."""
        if self.status != OrderStatus.PENDING:
            raise InvalidOperationError("Only pending orders can be updated.")
        validate_quantity(new_quantity)

        difference = new_quantity - self.quantity
        if difference > 0 and not self.product.has_stock_for(difference):
            raise InvalidOperationError("Insufficient stock to increase quantity.")

        # a negative difference gives stock back
        self.product.reserve(difference)
        self.quantity = new_quantity
        self.total_amount = self.product.price * new_quantity
