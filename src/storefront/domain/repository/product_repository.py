"""Abstract Catalog Store.

Besides plain reads and writes, the store owns the only sanctioned way
to take stock: ``try_decrement_stock`` checks availability and removes
the units in one step, under whatever isolation the implementation has.
Callers must never read ``stock_quantity``, subtract, and ``save()``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new or updated product."""

    @abstractmethod
    def try_decrement_stock(self, product_id: str, amount: int) -> Product:
        """Atomically remove *amount* units if at least that many remain.

        Returns the product as it is after the decrement.  Raises
        EntityNotFoundError or InsufficientStockError, leaving stock
        untouched in both cases.
        """

    @abstractmethod
    def increment_stock(self, product_id: str, amount: int) -> Product:
        """Atomically put *amount* units back into stock."""
