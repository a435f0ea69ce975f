"""Application service: Revise Order use case.

Changes an order's status and, optionally, replaces its whole set of
line items.  Replacement lines are re-priced at the *current* catalog
price.  Stock follows the change: for every product the difference
between the new and the old quantity is reserved (more units) or
released (fewer units), so revising never lets stock drift from the
orders that hold it.
"""

from __future__ import annotations

from typing import Callable

import structlog

from storefront.application.dto import OrderDTO, OrderItemSpec, order_to_dto
from storefront.application.order_lines import (
    load_product,
    price_line,
    validate_item_specs,
)
from storefront.domain.model.order import Order, OrderLineItem, OrderStatus
from storefront.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class ReviseOrderHandler:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def handle(
        self,
        order_id: str,
        status: str,
        item_specs: list[OrderItemSpec] | None = None,
    ) -> OrderDTO | None:
        """Revise an order.

        Returns None when the order does not exist so the caller decides
        whether that is an error.  A missing or empty *item_specs* only
        changes the status.
        """
        new_status = OrderStatus.parse(status)
        lines = validate_item_specs(item_specs) if item_specs else []

        with self._uow_factory() as uow:
            order = uow.orders.get_by_id(order_id)
            if order is None:
                return None

            if lines:
                new_items = [
                    price_line(load_product(uow.products, product_id), quantity)
                    for product_id, quantity in lines
                ]
                previous = list(order.items)
                self._adjust_stock(uow, order, new_items)
                order.replace_items(new_items)
                uow.replace_line_items(order.id, order.items, previous)

            order.change_status(new_status)
            uow.orders.save(order)
            uow.commit()

        logger.info(
            "Order revised",
            order_id=order.id,
            status=order.status.value,
            total=str(order.total),
            items_replaced=bool(lines),
        )
        return order_to_dto(order)

    @staticmethod
    def _adjust_stock(uow: UnitOfWork, order: Order, new_items: list[OrderLineItem]) -> None:
        before = order.quantities_by_product()
        after: dict[str, int] = {}
        for item in new_items:
            after[item.product_id] = after.get(item.product_id, 0) + item.quantity.value

        # Reserve first so a shortage aborts before anything is released.
        for product_id, quantity in after.items():
            delta = quantity - before.get(product_id, 0)
            if delta > 0:
                uow.reserve_stock(product_id, delta)
        for product_id, quantity in before.items():
            delta = quantity - after.get(product_id, 0)
            if delta > 0:
                uow.release_stock(product_id, delta)
