"""Notification sink that publishes events to the structured log.

Stands in for a message broker: downstream consumers tail the log.
"""

from __future__ import annotations

import structlog

from storefront.domain.events import NotificationSink, OrderCreated

logger = structlog.get_logger(__name__)


class LogNotificationSink(NotificationSink):

    def notify(self, event: OrderCreated) -> None:
        logger.info(
            "Event published",
            event_type="OrderCreated",
            order_id=event.order_id,
            customer_id=event.customer_id,
            total=str(event.total.amount),
            currency=event.total.currency,
            created_at=event.created_at.isoformat(),
        )
