"""Application service: Create Order use case.

Orchestrates the flow between repositories and the domain model.
User and product are resolved first so an unknown id is reported
before any business rule; the stock deduction and the new order are
then written in the same unit of work.
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable

import structlog

from stockflow.application.atomic import (
    DEFAULT_MAX_ATTEMPTS,
    UnitOfWorkFactory,
    run_atomically,
)
from stockflow.application.dto import OrderDTO, order_to_dto
from stockflow.domain.exceptions import EntityNotFoundError, InvalidOperationError
from stockflow.domain.model.order import Order
from stockflow.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class CreateOrderHandler:

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        clock: Callable[[], datetime] = datetime.now,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ) -> None:
        self._uow_factory = uow_factory
        self._clock = clock
        self._max_attempts = max_attempts

    def handle(self, user_id: int, product_id: int, quantity: int) -> OrderDTO:
        """Place a PENDING order and reserve its stock.

        Steps:
        1. Resolve user and product (fail with not-found if absent).
        2. Let the Order aggregate validate quantity and stock.
        3. Compare-and-write the product, insert the order, commit.
        """
        log = logger.bind(user_id=user_id, product_id=product_id, quantity=quantity)

        def work(uow: UnitOfWork) -> OrderDTO:
            user = uow.users.get_by_id(user_id)
            if user is None:
                raise EntityNotFoundError(f"User not found with id {user_id}")

            product = uow.products.get_by_id(product_id)
            if product is None:
                raise EntityNotFoundError(f"Product not found with id {product_id}")

            order = Order.place(user, product, quantity, order_date=self._clock())
            uow.products.update(product)
            uow.orders.add(order)
            return order_to_dto(order)

        try:
            dto = run_atomically(
                self._uow_factory,
                work,
                operation="create_order",
                max_attempts=self._max_attempts,
            )
        except InvalidOperationError as exc:
            log.warning("order.create_rejected", reason=str(exc))
            raise

        log.info(
            "order.created",
            order_id=dto.id,
            total_amount=str(dto.total_amount),
            stock_left=dto.product.stock,
        )
        return dto
