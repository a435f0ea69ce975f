"""Request validation and line pricing shared by create and revise.

Validation here is shape-only and touches no store, so a malformed
request fails before anything is read or reserved.
"""

from __future__ import annotations

from storefront.application.dto import OrderItemSpec
from storefront.domain.exceptions import EntityNotFoundError, InvalidRequestError
from storefront.domain.model.order import OrderLineItem
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Quantity
from storefront.domain.repository.product_repository import ProductRepository


def validate_customer_id(customer_id: str | None) -> str:
    if customer_id is None or not str(customer_id).strip():
        raise InvalidRequestError("Customer id is required", field="customer_id")
    return str(customer_id).strip()


def validate_item_specs(item_specs: list[OrderItemSpec] | None) -> list[tuple[str, Quantity]]:
    """Return ``(product_id, Quantity)`` pairs in input order."""
    if not item_specs:
        raise InvalidRequestError("Order must contain at least one item", field="items")

    lines: list[tuple[str, Quantity]] = []
    for index, spec in enumerate(item_specs):
        product_id = "" if spec.product_id is None else str(spec.product_id).strip()
        if not product_id:
            raise InvalidRequestError(
                "Product id is required", field=f"items[{index}].product_id"
            )
        try:
            quantity = Quantity(spec.quantity)
        except InvalidRequestError as exc:
            raise InvalidRequestError(
                f"{exc} (item {index + 1})", field=f"items[{index}].quantity"
            ) from exc
        lines.append((product_id, quantity))
    return lines


def load_product(products: ProductRepository, product_id: str) -> Product:
    product = products.get_by_id(product_id)
    if product is None:
        raise EntityNotFoundError("Product", product_id)
    return product


def price_line(product: Product, quantity: Quantity) -> OrderLineItem:
    """Build a line item with the product's *current* price as snapshot."""
    return OrderLineItem(
        product_id=product.id,
        quantity=quantity,
        unit_price=product.price,
    )
