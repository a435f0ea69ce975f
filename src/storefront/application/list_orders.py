"""Application service: List Orders use case (query)."""

from __future__ import annotations

from storefront.application.dto import OrderDTO, order_to_dto
from storefront.domain.repository.order_repository import OrderRepository


class ListOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, customer_id: str | None = None) -> list[OrderDTO]:
        """All orders, or only *customer_id*'s when given (possibly none)."""
        if customer_id is None:
            orders = self._order_repo.list_all()
        else:
            orders = self._order_repo.list_by_customer(customer_id.strip())
        return [order_to_dto(order) for order in orders]
