"""Integration tests for the UpdateOrderQuantity use case."""

from decimal import Decimal

import pytest

from stockflow.application.cancel_order import CancelOrderHandler
from stockflow.application.create_order import CreateOrderHandler
from stockflow.application.update_order_quantity import UpdateOrderQuantityHandler
from stockflow.domain.exceptions import EntityNotFoundError, InvalidOperationError, ValidationError
from tests.fakes import FakeDatabase, fake_uow_factory, money


def _setup(quantity: int = 5, stock: int = 50):
    db = FakeDatabase()
    user = db.add_user()
    product = db.add_product(stock=stock)
    uow_factory = fake_uow_factory(db)
    order = CreateOrderHandler(uow_factory).handle(user.id, product.id, quantity)
    return db, uow_factory, UpdateOrderQuantityHandler(uow_factory), order


class TestUpdateQuantity:

    def test_increase(self):
        db, _, handler, order = _setup(quantity=5)

        dto = handler.handle(order.id, 10)

        assert dto.quantity == 10
        assert dto.total_amount == Decimal("1000.0")
        assert db.stock_of(1) == 40

    def test_decrease(self):
        db, _, handler, order = _setup(quantity=10)

        dto = handler.handle(order.id, 4)

        assert dto.quantity == 4
        assert dto.total_amount == Decimal("400.0")
        assert db.stock_of(1) == 46

    def test_same_quantity_still_writes_product(self):
        db, _, handler, order = _setup(quantity=5)
        version_before = db.products[1].version

        handler.handle(order.id, 5)

        assert db.stock_of(1) == 45
        assert db.products[1].version == version_before + 1

    def test_total_uses_current_price(self):
        db, _, handler, order = _setup(quantity=2)
        db.products[1].price = money("80.00")

        dto = handler.handle(order.id, 3)

        assert dto.total_amount == Decimal("240.00")

    def test_increase_beyond_stock_rejected(self):
        db, _, handler, order = _setup(quantity=5, stock=10)

        with pytest.raises(InvalidOperationError, match="Insufficient stock to increase quantity."):
            handler.handle(order.id, 11)

        assert db.stock_of(1) == 5
        assert db.orders[order.id].quantity == 5

    def test_canceled_order_rejected(self):
        db, uow_factory, handler, order = _setup(quantity=5)
        CancelOrderHandler(uow_factory).handle(order.id)

        with pytest.raises(InvalidOperationError, match="Only pending orders can be updated."):
            handler.handle(order.id, 3)
        assert db.stock_of(1) == 50

    def test_zero_quantity_rejected(self):
        db, _, handler, order = _setup(quantity=5)
        with pytest.raises(ValidationError, match="Quantity must be positive"):
            handler.handle(order.id, 0)
        assert db.stock_of(1) == 45

    def test_unknown_order(self):
        _, _, handler, _ = _setup()
        with pytest.raises(EntityNotFoundError, match="Order not found with id 999"):
            handler.handle(999, 3)
