"""Application service: Add Product use case."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

import structlog

from stockflow.application.atomic import UnitOfWorkFactory
from stockflow.application.dto import ProductDTO, product_to_dto
from stockflow.domain.exceptions import ValidationError
from stockflow.domain.model.product import Product

logger = structlog.get_logger(__name__)


class AddProductHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(
        self,
        name: str,
        price: str | Decimal | None,
        stock: int | None,
        description: str | None = "",
    ) -> ProductDTO:
        """Add a new product to the catalog."""
        product = Product.create(
            name=name,
            description=description,
            price=_parse_price(price),
            stock=stock,
        )

        with self._uow_factory() as uow:
            uow.products.add(product)
            uow.commit()

        logger.info(
            "product.added",
            product_id=product.id,
            name=product.name,
            stock=product.stock,
        )
        return product_to_dto(product)


def _parse_price(price: str | Decimal | None) -> Decimal | None:
    if price is None:
        return None
    try:
        value = Decimal(str(price))
    except InvalidOperation as exc:
        raise ValidationError(f"Invalid product price: {price!r}") from exc
    if not value.is_finite():
        raise ValidationError(f"Invalid product price: {price!r}")
    return value
