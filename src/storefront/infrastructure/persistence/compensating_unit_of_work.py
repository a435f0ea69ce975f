"""Unit of work for stores without multi-record transactions.

Stock reservations and line-item rewrites hit the stores immediately
and are journalled together with the write that undoes them.
``rollback()`` walks the journal backwards.  Releases are the opposite:
they are only queued, and applied on ``commit()``, so a rolled-back
call never hands out stock it did not own.
"""

from __future__ import annotations

from typing import Any, Callable

import structlog

from storefront.domain.model.order import OrderLineItem
from storefront.domain.model.product import Product
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class _Compensation:

    def __init__(self, undo: Callable[[], Any], done: str, failed: str, **fields: Any) -> None:
        self.undo = undo
        self.done = done
        self.failed = failed
        self.fields = fields


class CompensatingUnitOfWork(UnitOfWork):

    def __init__(self, products: ProductRepository, orders: OrderRepository) -> None:
        self.products = products
        self.orders = orders
        self._journal: list[_Compensation] = []
        self._releases: list[tuple[str, int]] = []

    def reserve_stock(self, product_id: str, quantity: int) -> Product:
        product = self.products.try_decrement_stock(product_id, quantity)
        self._journal.append(_Compensation(
            lambda: self.products.increment_stock(product_id, quantity),
            "Stock reservation rolled back",
            "Stock compensation failed",
            product_id=product_id,
            quantity=quantity,
        ))
        return product

    def replace_line_items(
        self,
        order_id: str,
        items: list[OrderLineItem],
        previous: list[OrderLineItem],
    ) -> None:
        self.orders.replace_line_items(order_id, items)
        restore = list(previous)
        self._journal.append(_Compensation(
            lambda: self.orders.replace_line_items(order_id, restore),
            "Order line items restored",
            "Order line item compensation failed",
            order_id=order_id,
        ))

    def release_stock(self, product_id: str, quantity: int) -> None:
        self._releases.append((product_id, quantity))

    def commit(self) -> None:
        # Past this point nothing is undone; a failed release only leaks units.
        self._journal.clear()
        releases, self._releases = self._releases, []
        for product_id, quantity in releases:
            try:
                self.products.increment_stock(product_id, quantity)
            except Exception:
                logger.error(
                    "Stock release failed",
                    product_id=product_id,
                    quantity=quantity,
                    exc_info=True,
                )

    def rollback(self) -> None:
        self._releases.clear()
        failure: Exception | None = None
        while self._journal:
            step = self._journal.pop()
            try:
                step.undo()
            except Exception as exc:
                logger.error(step.failed, exc_info=True, **step.fields)
                failure = failure or exc
            else:
                logger.info(step.done, **step.fields)
        if failure is not None:
            raise failure
