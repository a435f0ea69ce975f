"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from typing import Callable

from storefront.application.create_order import CreateOrderHandler
from storefront.application.revise_order import ReviseOrderHandler
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.infrastructure.config import Settings
from storefront.infrastructure.notifications.log_notification_sink import (
    LogNotificationSink,
)
from storefront.infrastructure.persistence.compensating_unit_of_work import (
    CompensatingUnitOfWork,
)
from storefront.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from storefront.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)


def product_repository(settings: Settings) -> JsonProductRepository:
    return JsonProductRepository(settings.products_file)


def order_repository(settings: Settings) -> JsonOrderRepository:
    return JsonOrderRepository(settings.orders_file)


def unit_of_work_factory(settings: Settings) -> Callable[[], UnitOfWork]:
    products = product_repository(settings)
    orders = order_repository(settings)
    return lambda: CompensatingUnitOfWork(products, orders)


def create_order_handler(settings: Settings) -> CreateOrderHandler:
    return CreateOrderHandler(
        uow_factory=unit_of_work_factory(settings),
        notification_sink=LogNotificationSink(),
    )


def revise_order_handler(settings: Settings) -> ReviseOrderHandler:
    return ReviseOrderHandler(uow_factory=unit_of_work_factory(settings))
