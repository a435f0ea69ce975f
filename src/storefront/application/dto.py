"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from storefront.domain.model.order import Order
from storefront.domain.model.product import Product


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: what the customer asked for (product id + quantity)."""

    product_id: str
    quantity: int


@dataclass(frozen=True)
class OrderLineItemDTO:
    id: str
    product_id: str
    quantity: int
    unit_price: Decimal
    line_total: Decimal


@dataclass(frozen=True)
class OrderDTO:
    id: str
    customer_id: str
    status: str
    items: list[OrderLineItemDTO]
    total: Decimal
    currency: str
    created_at: str


@dataclass(frozen=True)
class ProductDTO:
    id: str
    name: str
    description: str
    price: Decimal
    currency: str
    stock_quantity: int
    created_at: str


def order_to_dto(order: Order) -> OrderDTO:
    total = order.total
    return OrderDTO(
        id=order.id,
        customer_id=order.customer_id,
        status=order.status.value,
        items=[
            OrderLineItemDTO(
                id=item.id,
                product_id=item.product_id,
                quantity=item.quantity.value,
                unit_price=item.unit_price.amount,
                line_total=item.line_total.amount,
            )
            for item in order.items
        ],
        total=total.amount,
        currency=total.currency,
        created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
    )


def product_to_dto(product: Product) -> ProductDTO:
    return ProductDTO(
        id=product.id,
        name=product.name,
        description=product.description,
        price=product.price.amount,
        currency=product.price.currency,
        stock_quantity=product.stock_quantity,
        created_at=product.created_at.strftime("%Y-%m-%d %H:%M UTC"),
    )
