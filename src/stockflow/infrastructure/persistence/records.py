"""Flat records exchanged with the hand-written SQL statements.

Each record mirrors one result row. ``OrderRecord`` is denormalized: the
owning user's and the product's columns are joined in, so a single query
materializes a complete order.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any

from stockflow.domain.model.order import Order, OrderStatus
from stockflow.domain.model.product import Product
from stockflow.domain.model.user import User
from stockflow.domain.model.value_objects import Money


@dataclass
class UserRecord:

    id: int | None
    username: str
    email: str

    @staticmethod
    def from_row(row: Any) -> UserRecord:
        return UserRecord(id=row.id, username=row.username, email=row.email)

    @staticmethod
    def from_domain(user: User) -> UserRecord:
        return UserRecord(id=user.id, username=user.username, email=user.email)

    def to_domain(self) -> User:
        return User(id=self.id, username=self.username, email=self.email)


@dataclass
class ProductRecord:

    id: int | None
    name: str
    description: str
    price: Decimal
    stock: int
    version: int

    @staticmethod
    def from_row(row: Any) -> ProductRecord:
        return ProductRecord(
            id=row.id,
            name=row.name,
            description=row.description,
            price=row.price,
            stock=row.stock,
            version=row.version,
        )

    @staticmethod
    def from_domain(product: Product) -> ProductRecord:
        return ProductRecord(
            id=product.id,
            name=product.name,
            description=product.description,
            price=product.price.amount,
            stock=product.stock,
            version=product.version,
        )

    def to_domain(self) -> Product:
        return Product(
            id=self.id,
            name=self.name,
            description=self.description,
            price=Money(self.price),
            stock=self.stock,
            version=self.version,
        )


@dataclass
class OrderRecord:

    id: int | None
    order_date: datetime
    user_id: int
    username: str
    user_email: str
    product_id: int
    product_name: str
    product_description: str
    product_price: Decimal
    product_stock: int
    product_version: int
    quantity: int
    status: str
    total_amount: Decimal

    @staticmethod
    def from_row(row: Any) -> OrderRecord:
        return OrderRecord(
            id=row.id,
            order_date=row.order_date,
            user_id=row.user_id,
            username=row.username,
            user_email=row.user_email,
            product_id=row.product_id,
            product_name=row.product_name,
            product_description=row.product_description,
            product_price=row.product_price,
            product_stock=row.product_stock,
            product_version=row.product_version,
            quantity=row.quantity,
            status=row.status,
            total_amount=row.total_amount,
        )

    @staticmethod
    def from_domain(order: Order) -> OrderRecord:
        return OrderRecord(
            id=order.id,
            order_date=order.order_date,
            user_id=order.user.id,  # type: ignore[arg-type]
            username=order.user.username,
            user_email=order.user.email,
            product_id=order.product.id,  # type: ignore[arg-type]
            product_name=order.product.name,
            product_description=order.product.description,
            product_price=order.product.price.amount,
            product_stock=order.product.stock,
            product_version=order.product.version,
            quantity=order.quantity,
            status=order.status.value,
            total_amount=order.total_amount.amount,
        )

    def to_domain(self) -> Order:
        return Order(
            id=self.id,
            order_date=self.order_date,
            user=User(id=self.user_id, username=self.username, email=self.user_email),
            product=Product(
                id=self.product_id,
                name=self.product_name,
                description=self.product_description,
                price=Money(self.product_price),
                stock=self.product_stock,
                version=self.product_version,
            ),
            quantity=self.quantity,
            status=OrderStatus(self.status),
            total_amount=Money(self.total_amount),
        )
