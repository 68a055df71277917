"""Abstract unit of work — one transaction around the three stores.

Every write operation of the order lifecycle runs inside exactly one
unit of work. Leaving the ``with`` block without calling ``commit()``
discards everything written through the repositories.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from types import TracebackType

from stockflow.domain.repository.order_repository import OrderRepository
from stockflow.domain.repository.product_repository import ProductRepository
from stockflow.domain.repository.user_repository import UserRepository


class UnitOfWork(ABC):

    users: UserRepository
    products: ProductRepository
    orders: OrderRepository

    def __enter__(self) -> UnitOfWork:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        # no-op if commit() already ran
        self.rollback()

    @abstractmethod
    def commit(self) -> None:
        """Make every write of this unit visible at once."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard every uncommitted write of this unit."""
