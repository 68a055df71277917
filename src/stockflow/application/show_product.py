"""Application services: catalog queries."""

from __future__ import annotations

from stockflow.application.atomic import UnitOfWorkFactory
from stockflow.application.dto import ProductDTO, product_to_dto
from stockflow.domain.exceptions import EntityNotFoundError


class ShowProductHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(self, product_id: int) -> ProductDTO:
        with self._uow_factory() as uow:
            product = uow.products.get_by_id(product_id)
            if product is None:
                raise EntityNotFoundError(f"Product not found with id {product_id}")
            return product_to_dto(product)


class ListProductsHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(self) -> list[ProductDTO]:
        with self._uow_factory() as uow:
            return [product_to_dto(p) for p in uow.products.list_all()]
