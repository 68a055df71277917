"""Application service: Order Total use case (query).

Returns the total stored on the order at its last write. It is not
recomputed from the product's current price.
"""

from __future__ import annotations

from decimal import Decimal

from stockflow.application.atomic import UnitOfWorkFactory
from stockflow.domain.exceptions import EntityNotFoundError


class OrderTotalHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(self, order_id: int) -> Decimal:
        with self._uow_factory() as uow:
            order = uow.orders.get_by_id(order_id)
            if order is None:
                raise EntityNotFoundError(f"Order not found with id {order_id}")
            return order.total_amount.amount
