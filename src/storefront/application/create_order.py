"""Application service: Create Order use case.

The order transaction.  For every requested line, in input order:

1. Load the product (EntityNotFoundError if absent).
2. Fail fast with InsufficientStockError if the loaded stock is short.
3. Reserve the units through the store's atomic conditional decrement,
   which re-checks availability under the store's lock.
4. Snapshot the unit price into a line item.

Then the Order aggregate is built and added, and the unit of work
commits.  Any failure before the commit rolls back every reservation
made in this call.  The OrderCreated notification goes out only after
the commit and can never fail the call.
"""

from __future__ import annotations

from typing import Callable

import structlog

from storefront.application.dto import OrderItemSpec
from storefront.application.order_lines import (
    load_product,
    price_line,
    validate_customer_id,
    validate_item_specs,
)
from storefront.domain.events import NotificationSink, OrderCreated
from storefront.domain.exceptions import InsufficientStockError
from storefront.domain.model.order import Order, OrderLineItem
from storefront.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class CreateOrderHandler:

    def __init__(
        self,
        uow_factory: Callable[[], UnitOfWork],
        notification_sink: NotificationSink,
    ) -> None:
        self._uow_factory = uow_factory
        self._notification_sink = notification_sink

    def handle(self, customer_id: str, item_specs: list[OrderItemSpec]) -> str:
        """Create an order and return its id."""
        customer_id = validate_customer_id(customer_id)
        lines = validate_item_specs(item_specs)

        with self._uow_factory() as uow:
            line_items: list[OrderLineItem] = []

            for product_id, quantity in lines:
                product = load_product(uow.products, product_id)
                if not product.has_stock(quantity.value):
                    raise InsufficientStockError(
                        product.id, product.stock_quantity, quantity.value
                    )
                reserved = uow.reserve_stock(product.id, quantity.value)
                line_items.append(price_line(reserved, quantity))

            order = Order.create(customer_id=customer_id, items=line_items)
            uow.orders.add(order)
            uow.commit()

        logger.info(
            "Order created",
            order_id=order.id,
            customer_id=order.customer_id,
            total=str(order.total),
            lines=len(order.items),
        )
        self._publish(OrderCreated.from_order(order))
        return order.id

    def _publish(self, event: OrderCreated) -> None:
        try:
            self._notification_sink.notify(event)
        except Exception:
            logger.warning(
                "Order notification failed",
                order_id=event.order_id,
                exc_info=True,
            )
