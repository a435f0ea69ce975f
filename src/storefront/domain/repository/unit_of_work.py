"""Abstract unit of work: the commit boundary of the order transaction.

Everything an order call changes (stock reservations, the order row,
its line items) either lands together on ``commit()`` or is undone by
``rollback()``.  Whether that is a native transaction or compensation
is up to the implementation.

Usage::

    with uow_factory() as uow:
        uow.reserve_stock(product_id, 3)
        uow.orders.add(order)
        uow.commit()

Leaving the block without ``commit()`` rolls back.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from types import TracebackType

from storefront.domain.model.order import OrderLineItem
from storefront.domain.model.product import Product
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository


class UnitOfWork(ABC):

    products: ProductRepository
    orders: OrderRepository

    def __enter__(self) -> UnitOfWork:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        # No-op when commit() already ran.
        self.rollback()

    @abstractmethod
    def reserve_stock(self, product_id: str, quantity: int) -> Product:
        """Take *quantity* units via the store's atomic decrement."""

    @abstractmethod
    def replace_line_items(
        self,
        order_id: str,
        items: list[OrderLineItem],
        previous: list[OrderLineItem],
    ) -> None:
        """Write *items* as the order's lines; *previous* comes back on rollback."""

    @abstractmethod
    def release_stock(self, product_id: str, quantity: int) -> None:
        """Give *quantity* units back once the unit of work commits."""

    @abstractmethod
    def commit(self) -> None:
        """Make every change of this unit of work durable."""

    @abstractmethod
    def rollback(self) -> None:
        """Undo every uncommitted change of this unit of work."""
