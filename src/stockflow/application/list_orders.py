"""Application services: order listing queries.

All listings are ordered by order ID.
"""

from __future__ import annotations

from datetime import datetime

from stockflow.application.atomic import UnitOfWorkFactory
from stockflow.application.dto import OrderDTO, order_to_dto
from stockflow.domain.exceptions import EntityNotFoundError


class ListAllOrdersHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(self) -> list[OrderDTO]:
        with self._uow_factory() as uow:
            return [order_to_dto(o) for o in uow.orders.list_all()]


class ListOrdersByUserHandler:
    """Orders owned by one user.

    An unknown user is an error even though it would simply yield no
    orders, so callers can tell "no such user" from "no orders yet".
    """

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(self, user_id: int) -> list[OrderDTO]:
        with self._uow_factory() as uow:
            if uow.users.get_by_id(user_id) is None:
                raise EntityNotFoundError(f"User not found with id {user_id}")
            return [order_to_dto(o) for o in uow.orders.list_by_user(user_id)]


class ListOrdersByDateRangeHandler:
    """Orders placed between two instants, both ends included."""

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(self, start: datetime, end: datetime) -> list[OrderDTO]:
        if start > end:
            return []
        with self._uow_factory() as uow:
            return [
                order_to_dto(o) for o in uow.orders.list_by_date_range(start, end)
            ]
