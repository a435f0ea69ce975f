"""Outbound domain events and the sink they are handed to.

Events are published *after* the unit of work commits and are not part
of it: delivery is best effort, with no ordering or exactly-once promise.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

from storefront.domain.model.order import Order
from storefront.domain.model.value_objects import Money


@dataclass(frozen=True)
class OrderCreated:
    order_id: str
    customer_id: str
    total: Money
    created_at: datetime

    @staticmethod
    def from_order(order: Order) -> OrderCreated:
        return OrderCreated(
            order_id=order.id,
            customer_id=order.customer_id,
            total=order.total,
            created_at=order.created_at,
        )


class NotificationSink(ABC):

    @abstractmethod
    def notify(self, event: OrderCreated) -> None:
        """Deliver *event*.  May raise; callers isolate the failure."""
