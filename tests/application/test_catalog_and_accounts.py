"""Tests for product and user management use cases."""

from decimal import Decimal

import pytest

from stockflow.application.add_product import AddProductHandler
from stockflow.application.register_user import RegisterUserHandler
from stockflow.application.show_product import ListProductsHandler, ShowProductHandler
from stockflow.application.show_user import ListUsersHandler, ShowUserHandler
from stockflow.domain.exceptions import EntityNotFoundError, ValidationError
from tests.fakes import FakeDatabase, fake_uow_factory


def _setup():
    db = FakeDatabase()
    return db, fake_uow_factory(db)


class TestAddProduct:

    def test_add(self):
        db, uow_factory = _setup()

        dto = AddProductHandler(uow_factory).handle(
            name="Laptop", price="999.99", stock=10, description="15 inch"
        )

        assert dto.id == 1
        assert dto.price == Decimal("999.99")
        assert dto.stock == 10
        assert db.products[1].version == 1

    def test_ids_are_sequential(self):
        _, uow_factory = _setup()
        handler = AddProductHandler(uow_factory)
        handler.handle(name="A", price="1", stock=1)
        dto = handler.handle(name="B", price="2", stock=2)
        assert dto.id == 2

    def test_invalid_price_string(self):
        db, uow_factory = _setup()
        with pytest.raises(ValidationError, match="Invalid product price"):
            AddProductHandler(uow_factory).handle(name="Laptop", price="cheap", stock=1)
        assert db.products == {}

    def test_infinite_price(self):
        _, uow_factory = _setup()
        with pytest.raises(ValidationError, match="Invalid product price"):
            AddProductHandler(uow_factory).handle(name="Laptop", price="Infinity", stock=1)

    def test_sub_cent_price_rejected(self):
        db, uow_factory = _setup()
        with pytest.raises(ValidationError, match="more than 2 decimal places"):
            AddProductHandler(uow_factory).handle(name="Pencil", price="0.125", stock=8)
        assert db.products == {}

    def test_negative_price(self):
        _, uow_factory = _setup()
        with pytest.raises(ValidationError, match="price cannot be negative"):
            AddProductHandler(uow_factory).handle(name="Laptop", price="-1", stock=1)

    def test_negative_stock(self):
        _, uow_factory = _setup()
        with pytest.raises(ValidationError, match="stock cannot be negative"):
            AddProductHandler(uow_factory).handle(name="Laptop", price="1", stock=-1)


class TestProductQueries:

    def test_show_and_list(self):
        db, uow_factory = _setup()
        db.add_product("Laptop")
        db.add_product("Mouse")

        assert ShowProductHandler(uow_factory).handle(2).name == "Mouse"
        assert [p.name for p in ListProductsHandler(uow_factory).handle()] == [
            "Laptop",
            "Mouse",
        ]

    def test_unknown_product(self):
        _, uow_factory = _setup()
        with pytest.raises(EntityNotFoundError, match="Product not found with id 7"):
            ShowProductHandler(uow_factory).handle(7)


class TestRegisterUser:

    def test_register(self):
        db, uow_factory = _setup()
        dto = RegisterUserHandler(uow_factory).handle("alice", "alice@example.com")
        assert dto.id == 1
        assert db.users[1].email == "alice@example.com"

    def test_invalid_email(self):
        db, uow_factory = _setup()
        with pytest.raises(ValidationError, match="Invalid email format."):
            RegisterUserHandler(uow_factory).handle("alice", "nope")
        assert db.users == {}

    def test_blank_username(self):
        _, uow_factory = _setup()
        with pytest.raises(ValidationError, match="Username is required."):
            RegisterUserHandler(uow_factory).handle("  ", "alice@example.com")


class TestUserQueries:

    def test_show_and_list(self):
        db, uow_factory = _setup()
        db.add_user("alice", "alice@example.com")
        db.add_user("bob", "bob@example.com")

        assert ShowUserHandler(uow_factory).handle(1).username == "alice"
        assert [u.username for u in ListUsersHandler(uow_factory).handle()] == [
            "alice",
            "bob",
        ]

    def test_unknown_user(self):
        _, uow_factory = _setup()
        with pytest.raises(EntityNotFoundError, match="User not found with id 3"):
            ShowUserHandler(uow_factory).handle(3)
