"""Application service: Cancel Order use case.

Only PENDING orders can be canceled. The order's full quantity goes
back to its product's stock in the same unit of work that flips the
status, so a reservation is returned exactly once.
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


class CancelOrderHandler:

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ) -> None:
        self._uow_factory = uow_factory
        self._max_attempts = max_attempts

    def handle(self, order_id: int) -> OrderDTO:
        log = logger.bind(order_id=order_id)

        def work(uow: UnitOfWork) -> OrderDTO:
            order = uow.orders.get_by_id(order_id)
            if order is None:
                raise EntityNotFoundError(f"Order not found with id {order_id}")

            order.cancel()
            uow.products.update(order.product)
            uow.orders.update(order)
            return order_to_dto(order)

        try:
            dto = run_atomically(
                self._uow_factory,
                work,
                operation="cancel_order",
                max_attempts=self._max_attempts,
            )
        except InvalidOperationError as exc:
            log.warning("order.cancel_rejected", reason=str(exc))
            raise

        log.info("order.canceled", restored=dto.quantity, stock=dto.product.stock)
        return dto
