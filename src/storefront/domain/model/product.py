"""Product aggregate.

Products live independently of orders.  Two things mutate them: catalog
updates (price, stock level) and the order transaction's stock
primitives.  Orders only ever hold a price *snapshot*, never a live
reference to ``Product.price``.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal

from storefront.domain.exceptions import InsufficientStockError, InvalidRequestError
from storefront.domain.model.value_objects import Money

NAME_MIN_LENGTH = 3
NAME_MAX_LENGTH = 255
DESCRIPTION_MAX_LENGTH = 1000
MAX_PRICE = Decimal("999999.99")


@dataclass
class Product:
    """A sellable item in the catalog.

    Invariant: ``stock_quantity`` is never negative.
    """

    id: str
    name: str
    price: Money
    stock_quantity: int
    description: str = ""
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def create(
        name: str,
        price: Money,
        stock_quantity: int,
        description: str = "",
    ) -> Product:
        """Create a new catalog entry, enforcing the catalog rules."""
        name = (name or "").strip()
        if not name:
            raise InvalidRequestError("Product name is required", field="name")
        if not NAME_MIN_LENGTH <= len(name) <= NAME_MAX_LENGTH:
            raise InvalidRequestError(
                f"Product name must be between {NAME_MIN_LENGTH} and "
                f"{NAME_MAX_LENGTH} characters",
                field="name",
            )
        description = description or ""
        if len(description) > DESCRIPTION_MAX_LENGTH:
            raise InvalidRequestError(
                f"Description must be at most {DESCRIPTION_MAX_LENGTH} characters",
                field="description",
            )
        _check_price(price)
        _check_stock(stock_quantity)
        return Product(
            id=str(uuid.uuid4()),
            name=name,
            price=price,
            stock_quantity=stock_quantity,
            description=description,
        )

    def update_price(self, new_price: Money) -> None:
        """Change the list price.  Existing orders keep their snapshot."""
        _check_price(new_price)
        self.price = new_price

    def set_stock(self, quantity: int) -> None:
        _check_stock(quantity)
        self.stock_quantity = quantity

    def has_stock(self, quantity: int) -> bool:
        return self.stock_quantity >= quantity

    def decrement_stock(self, quantity: int) -> None:
        """Remove *quantity* units.

        Not safe on its own under concurrency: stores call it while
        holding their per-product lock.
        """
        if quantity <= 0:
            raise InvalidRequestError("Decrement quantity must be positive", field="quantity")
        if not self.has_stock(quantity):
            raise InsufficientStockError(self.id, self.stock_quantity, quantity)
        self.stock_quantity -= quantity

    def increment_stock(self, quantity: int) -> None:
        if quantity <= 0:
            raise InvalidRequestError("Increment quantity must be positive", field="quantity")
        self.stock_quantity += quantity


def _check_price(price: Money) -> None:
    if not price.is_positive:
        raise InvalidRequestError("Product price must be greater than zero", field="price")
    if price.amount > MAX_PRICE:
        raise InvalidRequestError(f"Product price must be at most {MAX_PRICE}", field="price")


def _check_stock(quantity: int) -> None:
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise InvalidRequestError("Stock quantity must be an integer", field="stock_quantity")
    if quantity < 0:
        raise InvalidRequestError("Stock quantity cannot be negative", field="stock_quantity")
