"""SQL binding: hand-written statements over a SQLAlchemy Connection.

Repositories read and write flat records (see ``records``) with explicit
``text()`` statements and translate them to and from the domain model.
Product writes are compare-and-write on the ``version`` column.
"""

from __future__ import annotations

from datetime import datetime
from types import TracebackType

from sqlalchemy import DateTime, bindparam, text
from sqlalchemy.engine import Connection, Engine

from stockflow.domain.exceptions import ConcurrencyConflictError, EntityNotFoundError
from stockflow.domain.model.order import Order
from stockflow.domain.model.product import Product
from stockflow.domain.model.user import User
from stockflow.domain.repository.order_repository import OrderRepository
from stockflow.domain.repository.product_repository import ProductRepository
from stockflow.domain.repository.unit_of_work import UnitOfWork
from stockflow.domain.repository.user_repository import UserRepository
from stockflow.infrastructure.persistence.orm_models import MONEY
from stockflow.infrastructure.persistence.records import (
    OrderRecord,
    ProductRecord,
    UserRecord,
)

# Version a freshly inserted product starts at (same as the ORM counter).
INITIAL_VERSION = 1

# --- Users --------------------------------------------------------------------

SELECT_USER = text("SELECT id, username, email FROM users WHERE id = :id")
SELECT_USERS = text("SELECT id, username, email FROM users ORDER BY id")
INSERT_USER = text(
    "INSERT INTO users (username, email) VALUES (:username, :email) RETURNING id"
)

# --- Products -----------------------------------------------------------------

_PRODUCT_COLUMNS = "id, name, description, price, stock, version"

SELECT_PRODUCT = text(
    f"SELECT {_PRODUCT_COLUMNS} FROM products WHERE id = :id"
).columns(price=MONEY)
SELECT_PRODUCTS = text(
    f"SELECT {_PRODUCT_COLUMNS} FROM products ORDER BY id"
).columns(price=MONEY)
PRODUCT_EXISTS = text("SELECT 1 FROM products WHERE id = :id")
INSERT_PRODUCT = text(
    "INSERT INTO products (name, description, price, stock, version) "
    "VALUES (:name, :description, :price, :stock, :version) RETURNING id"
).bindparams(bindparam("price", type_=MONEY))
UPDATE_PRODUCT = text(
    "UPDATE products "
    "SET name = :name, description = :description, price = :price, "
    "stock = :stock, version = version + 1 "
    "WHERE id = :id AND version = :version"
).bindparams(bindparam("price", type_=MONEY))

# --- Orders -------------------------------------------------------------------

_ORDER_SELECT = """
    SELECT o.id, o.order_date, o.user_id, u.username, u.email AS user_email,
           o.product_id, p.name AS product_name,
           p.description AS product_description, p.price AS product_price,
           p.stock AS product_stock, p.version AS product_version,
           o.quantity, o.status, o.total_amount
    FROM orders o
    JOIN users u ON u.id = o.user_id
    JOIN products p ON p.id = o.product_id
"""


def _order_query(where: str = "", *params):
    stmt = text(f"{_ORDER_SELECT} {where} ORDER BY o.id")
    if params:
        stmt = stmt.bindparams(*params)
    return stmt.columns(
        order_date=DateTime(), product_price=MONEY, total_amount=MONEY
    )


SELECT_ORDER = _order_query("WHERE o.id = :id")
SELECT_ORDERS = _order_query()
SELECT_ORDERS_BY_USER = _order_query("WHERE o.user_id = :user_id")
SELECT_ORDERS_BY_DATE = _order_query(
    "WHERE o.order_date BETWEEN :start_date AND :end_date",
    bindparam("start_date", type_=DateTime()),
    bindparam("end_date", type_=DateTime()),
)
INSERT_ORDER = text(
    "INSERT INTO orders "
    "(order_date, user_id, product_id, quantity, status, total_amount) "
    "VALUES (:order_date, :user_id, :product_id, :quantity, :status, :total_amount) "
    "RETURNING id"
).bindparams(
    bindparam("order_date", type_=DateTime()),
    bindparam("total_amount", type_=MONEY),
)
UPDATE_ORDER = text(
    "UPDATE orders "
    "SET quantity = :quantity, status = :status, total_amount = :total_amount "
    "WHERE id = :id"
).bindparams(bindparam("total_amount", type_=MONEY))


class SqlUserRepository(UserRepository):

    def __init__(self, connection: Connection) -> None:
        self._conn = connection

    def get_by_id(self, user_id: int) -> User | None:
        row = self._conn.execute(SELECT_USER, {"id": user_id}).first()
        return None if row is None else UserRecord.from_row(row).to_domain()

    def list_all(self) -> list[User]:
        rows = self._conn.execute(SELECT_USERS)
        return [UserRecord.from_row(row).to_domain() for row in rows]

    def add(self, user: User) -> None:
        record = UserRecord.from_domain(user)
        user.id = self._conn.execute(
            INSERT_USER, {"username": record.username, "email": record.email}
        ).scalar_one()


class SqlProductRepository(ProductRepository):

    def __init__(self, connection: Connection) -> None:
        self._conn = connection

    def get_by_id(self, product_id: int) -> Product | None:
        row = self._conn.execute(SELECT_PRODUCT, {"id": product_id}).first()
        return None if row is None else ProductRecord.from_row(row).to_domain()

    def list_all(self) -> list[Product]:
        rows = self._conn.execute(SELECT_PRODUCTS)
        return [ProductRecord.from_row(row).to_domain() for row in rows]

    def add(self, product: Product) -> None:
        record = ProductRecord.from_domain(product)
        product.id = self._conn.execute(
            INSERT_PRODUCT,
            {
                "name": record.name,
                "description": record.description,
                "price": record.price,
                "stock": record.stock,
                "version": INITIAL_VERSION,
            },
        ).scalar_one()
        product.version = INITIAL_VERSION

    def update(self, product: Product) -> None:
        record = ProductRecord.from_domain(product)
        result = self._conn.execute(
            UPDATE_PRODUCT,
            {
                "id": record.id,
                "name": record.name,
                "description": record.description,
                "price": record.price,
                "stock": record.stock,
                "version": record.version,
            },
        )
        if result.rowcount == 0:
            if self._conn.execute(PRODUCT_EXISTS, {"id": record.id}).first() is None:
                raise EntityNotFoundError(f"Product not found with id {record.id}")
            raise ConcurrencyConflictError(
                f"Product id {record.id} changed since it was read"
            )
        product.version = record.version + 1


class SqlOrderRepository(OrderRepository):

    def __init__(self, connection: Connection) -> None:
        self._conn = connection

    def get_by_id(self, order_id: int) -> Order | None:
        row = self._conn.execute(SELECT_ORDER, {"id": order_id}).first()
        return None if row is None else OrderRecord.from_row(row).to_domain()

    def list_all(self) -> list[Order]:
        return self._fetch(self._conn.execute(SELECT_ORDERS))

    def list_by_user(self, user_id: int) -> list[Order]:
        return self._fetch(self._conn.execute(SELECT_ORDERS_BY_USER, {"user_id": user_id}))

    def list_by_date_range(self, start: datetime, end: datetime) -> list[Order]:
        return self._fetch(
            self._conn.execute(
                SELECT_ORDERS_BY_DATE, {"start_date": start, "end_date": end}
            )
        )

    def add(self, order: Order) -> None:
        record = OrderRecord.from_domain(order)
        order.id = self._conn.execute(
            INSERT_ORDER,
            {
                "order_date": record.order_date,
                "user_id": record.user_id,
                "product_id": record.product_id,
                "quantity": record.quantity,
                "status": record.status,
                "total_amount": record.total_amount,
            },
        ).scalar_one()

    def update(self, order: Order) -> None:
        record = OrderRecord.from_domain(order)
        result = self._conn.execute(
            UPDATE_ORDER,
            {
                "id": record.id,
                "quantity": record.quantity,
                "status": record.status,
                "total_amount": record.total_amount,
            },
        )
        if result.rowcount == 0:
            raise EntityNotFoundError(f"Order not found with id {record.id}")

    @staticmethod
    def _fetch(rows) -> list[Order]:
        return [OrderRecord.from_row(row).to_domain() for row in rows]


class SqlUnitOfWork(UnitOfWork):

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def __enter__(self) -> SqlUnitOfWork:
        self._connection = self._engine.connect()
        self._transaction = self._connection.begin()
        self.users = SqlUserRepository(self._connection)
        self.products = SqlProductRepository(self._connection)
        self.orders = SqlOrderRepository(self._connection)
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
            self._connection.close()

    def commit(self) -> None:
        self._transaction.commit()

    def rollback(self) -> None:
        if self._transaction.is_active:
            self._transaction.rollback()
