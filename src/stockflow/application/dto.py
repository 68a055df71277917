"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from stockflow.domain.model.order import Order
from stockflow.domain.model.product import Product
from stockflow.domain.model.user import User


@dataclass(frozen=True)
class UserDTO:

    id: int
    username: str
    email: str


@dataclass(frozen=True)
class ProductDTO:
    """Output: a product as it was when the operation finished."""

    id: int
    name: str
    description: str
    price: Decimal
    stock: int


@dataclass(frozen=True)
class OrderDTO:
    """Output: a fully materialized order with its user and product."""

    id: int
    order_date: datetime
    user: UserDTO
    product: ProductDTO
    quantity: int
    status: str
    total_amount: Decimal


# --- Mapping ------------------------------------------------------------------


def user_to_dto(user: User) -> UserDTO:
    return UserDTO(id=user.id, username=user.username, email=user.email)  # type: ignore[arg-type]


def product_to_dto(product: Product) -> ProductDTO:
    return ProductDTO(
        id=product.id,  # type: ignore[arg-type]
        name=product.name,
        description=product.description,
        price=product.price.amount,
        stock=product.stock,
    )


def order_to_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        order_date=order.order_date,
        user=user_to_dto(order.user),
        product=product_to_dto(order.product),
        quantity=order.quantity,
        status=order.status.value,
        total_amount=order.total_amount.amount,
    )
