"""Application service: Update Order Quantity use case.

Moves a PENDING order to a new quantity and re-balances its product's
stock by the difference. Growing an order needs the extra units to be
in stock; shrinking it gives units back.
"""

from __future__ import annotations

import structlog

from stockflow.application.atomic import (
    DEFAULT_MAX_ATTEMPTS,
    UnitOfWorkFactory,
    run_atomically,
)
from stockflow.application.dto import OrderDTO, order_to_dto
from stockflow.domain.exceptions import EntityNotFoundError, InvalidOperationError
from stockflow.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class UpdateOrderQuantityHandler:

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ) -> None:
        self._uow_factory = uow_factory
        self._max_attempts = max_attempts

    def handle(self, order_id: int, new_quantity: int) -> OrderDTO:
        log = logger.bind(order_id=order_id, new_quantity=new_quantity)

        def work(uow: UnitOfWork) -> OrderDTO:
            order = uow.orders.get_by_id(order_id)
            if order is None:
                raise EntityNotFoundError(f"Order not found with id {order_id}")

            order.change_quantity(new_quantity)
            # written even when the quantity is unchanged so the product
            # version orders this operation against concurrent ones
            uow.products.update(order.product)
            uow.orders.update(order)
            return order_to_dto(order)

        try:
            dto = run_atomically(
                self._uow_factory,
                work,
                operation="update_order_quantity",
                max_attempts=self._max_attempts,
            )
        except InvalidOperationError as exc:
            log.warning("order.update_rejected", reason=str(exc))
            raise

        log.info(
            "order.quantity_updated",
            total_amount=str(dto.total_amount),
            stock=dto.product.stock,
        )
        return dto
