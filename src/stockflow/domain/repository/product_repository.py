"""Abstract repository for Product aggregate (the catalog store).

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (SQLAlchemy ORM, hand-written
SQL, in-memory) live in the infrastructure layer and tests.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from stockflow.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: int) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog ordered by ID."""

    @abstractmethod
    def add(self, product: Product) -> None:
        """Insert a new product and assign its ID."""

    @abstractmethod
    def update(self, product: Product) -> None:
        """Compare-and-write the product's mutable fields.

        The write only applies if the stored version still equals
        ``product.version``; on success ``product.version`` is advanced.
        Raises ConcurrencyConflictError otherwise.
        """
