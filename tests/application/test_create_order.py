"""Integration tests for the CreateOrder use case."""

from datetime import datetime
from decimal import Decimal

import pytest

from stockflow.application.create_order import CreateOrderHandler
from stockflow.domain.exceptions import EntityNotFoundError, InvalidOperationError, ValidationError
from tests.fakes import FakeDatabase, fake_uow_factory

PLACED_AT = datetime(2024, 3, 1, 9, 30)


def _setup(stock: int = 50):
    db = FakeDatabase()
    user = db.add_user()
    product = db.add_product(stock=stock)
    handler = CreateOrderHandler(fake_uow_factory(db), clock=lambda: PLACED_AT)
    return db, handler, user, product


class TestCreateOrderHappyPath:

    def test_creates_pending_order(self):
        db, handler, user, product = _setup()

        dto = handler.handle(user.id, product.id, 5)

        assert dto.id == 1
        assert dto.status == "PENDING"
        assert dto.quantity == 5
        assert dto.total_amount == Decimal("500.0")
        assert dto.order_date == PLACED_AT
        assert dto.user.username == "test_user"
        assert dto.product.stock == 45

    def test_stock_deducted_and_order_stored(self):
        db, handler, user, product = _setup()

        handler.handle(user.id, product.id, 5)

        assert db.stock_of(product.id) == 45
        assert len(db.orders) == 1
        assert db.commits == 1

    def test_product_version_advances(self):
        db, handler, user, product = _setup()
        handler.handle(user.id, product.id, 5)
        assert db.products[product.id].version == 2

    def test_order_for_entire_stock(self):
        db, handler, user, product = _setup(stock=5)
        handler.handle(user.id, product.id, 5)
        assert db.stock_of(product.id) == 0


class TestCreateOrderRejections:

    def test_insufficient_stock(self):
        db, handler, user, product = _setup(stock=50)

        with pytest.raises(InvalidOperationError, match="Insufficient stock for product id 1"):
            handler.handle(user.id, product.id, 60)

        assert db.stock_of(product.id) == 50
        assert db.orders == {}

    def test_unknown_user(self):
        db, handler, _, product = _setup()

        with pytest.raises(EntityNotFoundError, match="User not found with id 999"):
            handler.handle(999, product.id, 1)
        assert db.orders == {}

    def test_unknown_product(self):
        db, handler, user, _ = _setup()

        with pytest.raises(EntityNotFoundError, match="Product not found with id 999"):
            handler.handle(user.id, 999, 1)

    def test_unknown_user_reported_before_unknown_product(self):
        _, handler, _, _ = _setup()
        with pytest.raises(EntityNotFoundError, match="User not found"):
            handler.handle(999, 999, 1)

    def test_not_found_reported_before_bad_quantity(self):
        _, handler, user, _ = _setup()
        with pytest.raises(EntityNotFoundError, match="Product not found"):
            handler.handle(user.id, 999, 0)

    def test_zero_quantity(self):
        db, handler, user, product = _setup()

        with pytest.raises(ValidationError, match="Quantity must be positive"):
            handler.handle(user.id, product.id, 0)
        assert db.stock_of(product.id) == 50
        assert db.commits == 0


class TestCreateOrderClock:

    def test_default_clock_stamps_now(self):
        db = FakeDatabase()
        user = db.add_user()
        product = db.add_product()
        before = datetime.now()

        dto = CreateOrderHandler(fake_uow_factory(db)).handle(user.id, product.id, 1)

        assert before <= dto.order_date <= datetime.now()
