"""Application service: Update Product use case.

Only the fields the order transaction depends on can change: price and
stock level.  A new price never reaches existing orders, which keep
the snapshot taken when they were created.
"""

from __future__ import annotations

import structlog

from storefront.application.dto import ProductDTO, product_to_dto
from storefront.domain.exceptions import EntityNotFoundError, InvalidRequestError
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class UpdateProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        product_id: str,
        price: str | None = None,
        stock_quantity: int | None = None,
    ) -> ProductDTO:
        if price is None and stock_quantity is None:
            raise InvalidRequestError("Nothing to update: give a price or a stock quantity")

        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError("Product", product_id)

        if price is not None:
            product.update_price(Money.of(price, field="price"))
        if stock_quantity is not None:
            product.set_stock(stock_quantity)

        self._product_repo.save(product)
        logger.info(
            "Product updated",
            product_id=product.id,
            price=str(product.price),
            stock_quantity=product.stock_quantity,
        )
        return product_to_dto(product)
