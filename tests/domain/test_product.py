"""Unit tests for the Product aggregate and its stock rules."""

from decimal import Decimal

import pytest

from stockflow.domain.exceptions import InvalidOperationError, ValidationError
from stockflow.domain.model.product import Product
from tests.fakes import money


def _product(stock: int = 10) -> Product:
    return Product(
        id=1, name="Laptop", description="", price=money("999.99"), stock=stock
    )


class TestProductCreation:

    def test_happy_path(self):
        product = Product.create("  Laptop ", " A laptop ", Decimal("999.99"), 10)
        assert product.id is None  # assigned by repository
        assert product.name == "Laptop"
        assert product.description == "A laptop"
        assert product.price == money("999.99")
        assert product.stock == 10

    def test_missing_description_becomes_empty(self):
        product = Product.create("Laptop", None, Decimal("1"), 0)
        assert product.description == ""

    def test_invalid_fields_rejected(self):
        with pytest.raises(ValidationError, match="Product name is required."):
            Product.create("", "", Decimal("1"), 1)
        with pytest.raises(ValidationError, match="price cannot be negative"):
            Product.create("Laptop", "", Decimal("-1"), 1)
        with pytest.raises(ValidationError, match="stock cannot be negative"):
            Product.create("Laptop", "", Decimal("1"), -5)


class TestStock:

    def test_has_stock_for(self):
        product = _product(stock=5)
        assert product.has_stock_for(5)
        assert not product.has_stock_for(6)

    def test_reserve_deducts(self):
        product = _product(stock=10)
        product.reserve(4)
        assert product.stock == 6

    def test_reserve_everything(self):
        product = _product(stock=3)
        product.reserve(3)
        assert product.stock == 0

    def test_reserve_more_than_stock_rejected(self):
        product = _product(stock=3)
        with pytest.raises(InvalidOperationError, match="Insufficient stock for product id 1"):
            product.reserve(4)
        assert product.stock == 3

    def test_negative_reserve_gives_back(self):
        product = _product(stock=3)
        product.reserve(-2)
        assert product.stock == 5

    def test_release_adds(self):
        product = _product(stock=0)
        product.release(7)
        assert product.stock == 7

    def test_negative_release_rejected(self):
        product = _product()
        with pytest.raises(ValidationError, match="cannot be negative"):
            product.release(-1)
