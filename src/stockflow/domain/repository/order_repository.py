"""Abstract repository for Order aggregate (the order store)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from stockflow.domain.model.order import Order


class OrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Order]:
        """Return every order ordered by ID."""

    @abstractmethod
    def list_by_user(self, user_id: int) -> list[Order]:
        """Return the orders owned by a user, ordered by ID."""

    @abstractmethod
    def list_by_date_range(self, start: datetime, end: datetime) -> list[Order]:
        """Return orders with ``start <= order_date <= end``, ordered by ID."""

    @abstractmethod
    def add(self, order: Order) -> None:
        """Insert a new order and assign its ID."""

    @abstractmethod
    def update(self, order: Order) -> None:
        """Persist the order's status, quantity and total."""
