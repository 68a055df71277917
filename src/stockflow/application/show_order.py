"""Application service: Show Order use case (query)."""

from __future__ import annotations

from stockflow.application.atomic import UnitOfWorkFactory
from stockflow.application.dto import OrderDTO, order_to_dto
from stockflow.domain.exceptions import EntityNotFoundError


class ShowOrderHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(self, order_id: int) -> OrderDTO:
        with self._uow_factory() as uow:
            order = uow.orders.get_by_id(order_id)
            if order is None:
                raise EntityNotFoundError(f"Order not found with id {order_id}")
            return order_to_dto(order)
