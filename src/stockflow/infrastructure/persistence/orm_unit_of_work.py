"""ORM binding: repositories and unit of work on a SQLAlchemy Session.

The repositories operate directly on the mapped rows and translate them
to domain aggregates on the way out. Product stock writes rely on the
mapper's version counter; a version mismatch surfaces as
ConcurrencyConflictError.
"""

from __future__ import annotations

from datetime import datetime
from types import TracebackType

from sqlalchemy import select
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.orm.attributes import flag_modified
from sqlalchemy.orm.exc import StaleDataError

from stockflow.domain.exceptions import ConcurrencyConflictError, EntityNotFoundError
from stockflow.domain.model.order import Order, OrderStatus
from stockflow.domain.model.product import Product
from stockflow.domain.model.user import User
from stockflow.domain.model.value_objects import Money
from stockflow.domain.repository.order_repository import OrderRepository
from stockflow.domain.repository.product_repository import ProductRepository
from stockflow.domain.repository.unit_of_work import UnitOfWork
from stockflow.domain.repository.user_repository import UserRepository
from stockflow.infrastructure.persistence.orm_models import OrderRow, ProductRow, UserRow


def _flush(session: Session) -> None:
    try:
        session.flush()
    except StaleDataError as exc:
        raise ConcurrencyConflictError(str(exc)) from exc


class SqlAlchemyUserRepository(UserRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_id(self, user_id: int) -> User | None:
        row = self._session.get(UserRow, user_id)
        return None if row is None else _user_to_domain(row)

    def list_all(self) -> list[User]:
        rows = self._session.scalars(select(UserRow).order_by(UserRow.id))
        return [_user_to_domain(row) for row in rows]

    def add(self, user: User) -> None:
        row = UserRow(username=user.username, email=user.email)
        self._session.add(row)
        _flush(self._session)
        user.id = row.id


class SqlAlchemyProductRepository(ProductRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_id(self, product_id: int) -> Product | None:
        row = self._session.get(ProductRow, product_id)
        return None if row is None else _product_to_domain(row)

    def list_all(self) -> list[Product]:
        rows = self._session.scalars(select(ProductRow).order_by(ProductRow.id))
        return [_product_to_domain(row) for row in rows]

    def add(self, product: Product) -> None:
        row = ProductRow(
            name=product.name,
            description=product.description,
            price=product.price.amount,
            stock=product.stock,
        )
        self._session.add(row)
        _flush(self._session)
        product.id = row.id
        product.version = row.version

    def update(self, product: Product) -> None:
        row = self._session.get(ProductRow, product.id)
        if row is None:
            raise EntityNotFoundError(f"Product not found with id {product.id}")
        if row.version != product.version:
            raise ConcurrencyConflictError(
                f"Product id {product.id} changed since it was read"
            )

        row.name = product.name
        row.description = product.description
        row.price = product.price.amount
        row.stock = product.stock
        # force the versioned UPDATE even when nothing changed
        flag_modified(row, "stock")
        _flush(self._session)
        product.version = row.version


class SqlAlchemyOrderRepository(OrderRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_id(self, order_id: int) -> Order | None:
        row = self._session.get(OrderRow, order_id)
        return None if row is None else _order_to_domain(row)

    def list_all(self) -> list[Order]:
        return self._list(select(OrderRow))

    def list_by_user(self, user_id: int) -> list[Order]:
        return self._list(select(OrderRow).where(OrderRow.user_id == user_id))

    def list_by_date_range(self, start: datetime, end: datetime) -> list[Order]:
        return self._list(
            select(OrderRow).where(OrderRow.order_date.between(start, end))
        )

    def add(self, order: Order) -> None:
        row = OrderRow(
            order_date=order.order_date,
            user_id=order.user.id,
            product_id=order.product.id,
            quantity=order.quantity,
            status=order.status.value,
            total_amount=order.total_amount.amount,
        )
        self._session.add(row)
        _flush(self._session)
        order.id = row.id

    def update(self, order: Order) -> None:
        row = self._session.get(OrderRow, order.id)
        if row is None:
            raise EntityNotFoundError(f"Order not found with id {order.id}")
        row.quantity = order.quantity
        row.status = order.status.value
        row.total_amount = order.total_amount.amount
        _flush(self._session)

    def _list(self, stmt) -> list[Order]:
        rows = self._session.scalars(stmt.order_by(OrderRow.id))
        return [_order_to_domain(row) for row in rows]


class SqlAlchemyUnitOfWork(UnitOfWork):

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def __enter__(self) -> SqlAlchemyUnitOfWork:
        self._session = self._session_factory()
        self.users = SqlAlchemyUserRepository(self._session)
        self.products = SqlAlchemyProductRepository(self._session)
        self.orders = SqlAlchemyOrderRepository(self._session)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        try:
            super().__exit__(exc_type, exc, tb)
        finally:
            self._session.close()

    def commit(self) -> None:
        try:
            self._session.commit()
        except StaleDataError as exc:
            raise ConcurrencyConflictError(str(exc)) from exc

    def rollback(self) -> None:
        self._session.rollback()


# --- Row -> domain ------------------------------------------------------------


def _user_to_domain(row: UserRow) -> User:
    return User(id=row.id, username=row.username, email=row.email)


def _product_to_domain(row: ProductRow) -> Product:
    return Product(
        id=row.id,
        name=row.name,
        description=row.description,
        price=Money(row.price),
        stock=row.stock,
        version=row.version,
    )


def _order_to_domain(row: OrderRow) -> Order:
    return Order(
        id=row.id,
        order_date=row.order_date,
        user=_user_to_domain(row.user),
        product=_product_to_domain(row.product),
        quantity=row.quantity,
        status=OrderStatus(row.status),
        total_amount=Money(row.total_amount),
    )
