"""JSON-file-backed Catalog Store."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path

from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository
from storefront.infrastructure.persistence.json_file import JsonFile


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        return self._load().get(product_id)

    def list_all(self) -> list[Product]:
        return list(self._load().values())

    def save(self, product: Product) -> None:
        with self._file.locked():
            products = self._load()
            products[product.id] = product
            self._persist(products)

    def try_decrement_stock(self, product_id: str, amount: int) -> Product:
        with self._file.locked():
            products = self._load()
            product = products.get(product_id)
            if product is None:
                raise EntityNotFoundError("Product", product_id)
            product.decrement_stock(amount)
            self._persist(products)
            return product

    def increment_stock(self, product_id: str, amount: int) -> Product:
        with self._file.locked():
            products = self._load()
            product = products.get(product_id)
            if product is None:
                raise EntityNotFoundError("Product", product_id)
            product.increment_stock(amount)
            self._persist(products)
            return product

    # --- Serialization --------------------------------------------------------

    def _load(self) -> dict[str, Product]:
        return {raw["id"]: self._to_domain(raw) for raw in self._file.load()}

    def _persist(self, products: dict[str, Product]) -> None:
        self._file.persist([self._to_raw(p) for p in products.values()])

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "description": product.description,
            "price": str(product.price.amount),
            "currency": product.price.currency,
            "stock_quantity": product.stock_quantity,
            "created_at": product.created_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            id=raw["id"],
            name=raw["name"],
            description=raw.get("description", ""),
            price=Money(Decimal(raw["price"]), raw.get("currency", "BRL")),
            stock_quantity=raw["stock_quantity"],
            created_at=datetime.fromisoformat(raw["created_at"]),
        )
