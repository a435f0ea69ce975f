"""Abstract Order Store."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.order import Order, OrderLineItem


class OrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: str) -> Order | None:
        """Return an order with its line items, or None if not found."""

    @abstractmethod
    def list_by_customer(self, customer_id: str) -> list[Order]:
        """Return the customer's orders; empty when there are none."""

    @abstractmethod
    def list_all(self) -> list[Order]:
        """Return every order."""

    @abstractmethod
    def add(self, order: Order) -> None:
        """Insert a new order together with its line items."""

    @abstractmethod
    def replace_line_items(self, order_id: str, items: list[OrderLineItem]) -> None:
        """Drop the order's current line items and store *items* instead."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist changes to an existing order."""
