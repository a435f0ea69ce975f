"""JSON-file-backed Order Store."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path

from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.order import Order, OrderLineItem, OrderStatus
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.order_repository import OrderRepository
from storefront.infrastructure.persistence.json_file import JsonFile


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: str) -> Order | None:
        for raw in self._file.load():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def list_by_customer(self, customer_id: str) -> list[Order]:
        return [
            self._to_domain(raw)
            for raw in self._file.load()
            if raw["customer_id"] == customer_id
        ]

    def list_all(self) -> list[Order]:
        return [self._to_domain(raw) for raw in self._file.load()]

    def add(self, order: Order) -> None:
        with self._file.locked():
            records = self._file.load()
            if any(raw["id"] == order.id for raw in records):
                raise ValueError(f"Order '{order.id}' already exists")
            records.append(self._to_raw(order))
            self._file.persist(records)

    def replace_line_items(self, order_id: str, items: list[OrderLineItem]) -> None:
        with self._file.locked():
            records = self._file.load()
            raw = self._find(records, order_id)
            raw["items"] = [self._item_to_raw(order_id, item) for item in items]
            self._file.persist(records)

    def save(self, order: Order) -> None:
        with self._file.locked():
            records = self._file.load()
            raw = self._find(records, order.id)
            raw.update(self._to_raw(order))
            self._file.persist(records)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _find(records: list[dict], order_id: str) -> dict:
        for raw in records:
            if raw["id"] == order_id:
                return raw
        raise EntityNotFoundError("Order", order_id)

    @classmethod
    def _to_raw(cls, order: Order) -> dict:
        return {
            "id": order.id,
            "customer_id": order.customer_id,
            "status": order.status.value,
            "total": str(order.total.amount),
            "created_at": order.created_at.isoformat(),
            "items": [cls._item_to_raw(order.id, item) for item in order.items],
        }

    @staticmethod
    def _item_to_raw(order_id: str, item: OrderLineItem) -> dict:
        return {
            "id": item.id,
            "order_id": order_id,
            "product_id": item.product_id,
            "quantity": item.quantity.value,
            "unit_price": str(item.unit_price.amount),
            "currency": item.unit_price.currency,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        items = [
            OrderLineItem(
                id=i["id"],
                order_id=raw["id"],
                product_id=i["product_id"],
                quantity=Quantity(i["quantity"]),
                unit_price=Money(Decimal(i["unit_price"]), i.get("currency", "BRL")),
            )
            for i in raw["items"]
        ]
        return Order(
            id=raw["id"],
            customer_id=raw["customer_id"],
            items=items,
            status=OrderStatus(raw["status"]),
            created_at=datetime.fromisoformat(raw["created_at"]),
        )
