"""Order aggregate.

The Order owns its line items.  ``total`` is derived from the items on
every read, so it can never drift from the sum of the line totals.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from storefront.domain.exceptions import InvalidRequestError, InvalidStateError
from storefront.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    CREATED = "CREATED"
    PROCESSING = "PROCESSING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"

    @classmethod
    def parse(cls, label: str | None) -> OrderStatus:
        """Normalize a free-form status label.

        Labels are trimmed and case-folded; the legacy Portuguese labels
        map onto the same members.
        """
        if label is None or not str(label).strip():
            raise InvalidRequestError("Status is required", field="status")
        key = str(label).strip().upper()
        key = _LEGACY_LABELS.get(key, key)
        try:
            return cls(key)
        except ValueError:
            allowed = ", ".join(member.value for member in cls)
            raise InvalidRequestError(
                f"Unknown order status '{label}' (expected one of: {allowed})",
                field="status",
            ) from None


_LEGACY_LABELS = {
    "CRIADO": "CREATED",
    "PROCESSANDO": "PROCESSING",
    "ENVIADO": "SHIPPED",
    "ENTREGUE": "DELIVERED",
    "CANCELADO": "CANCELLED",
    "CANCELED": "CANCELLED",
}


@dataclass
class OrderLineItem:
    """One product/quantity entry with the unit price locked at order time."""

    product_id: str
    quantity: Quantity
    unit_price: Money
    order_id: str | None = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass
class Order:
    """Aggregate root for customer orders.

    Use ``Order.create()`` for new orders.  The plain constructor exists
    so repositories can rebuild persisted orders without re-validating.
    """

    id: str
    customer_id: str
    items: list[OrderLineItem]
    status: OrderStatus = OrderStatus.CREATED
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def create(customer_id: str, items: list[OrderLineItem]) -> Order:
        customer_id = (customer_id or "").strip()
        if not customer_id:
            raise InvalidRequestError("Customer id is required", field="customer_id")
        if not items:
            raise InvalidRequestError("Order must contain at least one item", field="items")

        order = Order(id=str(uuid.uuid4()), customer_id=customer_id, items=[])
        order._attach(items)
        order._assert_positive_total()
        return order

    @property
    def total(self) -> Money:
        result = Money.zero(self.items[0].unit_price.currency) if self.items else Money.zero()
        for item in self.items:
            result = result + item.line_total
        return result

    def replace_items(self, items: list[OrderLineItem]) -> None:
        """Swap the whole line-item collection for *items*."""
        if not items:
            raise InvalidRequestError("Order must contain at least one item", field="items")
        previous = self.items
        self.items = []
        self._attach(items)
        try:
            self._assert_positive_total()
        except InvalidStateError:
            self.items = previous
            raise

    def change_status(self, status: OrderStatus) -> None:
        self.status = status

    def quantities_by_product(self) -> dict[str, int]:
        """Units per product, summed over duplicate lines."""
        totals: dict[str, int] = {}
        for item in self.items:
            totals[item.product_id] = totals.get(item.product_id, 0) + item.quantity.value
        return totals

    def _attach(self, items: list[OrderLineItem]) -> None:
        for item in items:
            item.order_id = self.id
            self.items.append(item)

    def _assert_positive_total(self) -> None:
        if not self.total.is_positive:
            raise InvalidStateError(f"Order total must be greater than zero, got {self.total}")
