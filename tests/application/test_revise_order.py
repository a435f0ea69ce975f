"""Integration tests for the ReviseOrder use case."""

from decimal import Decimal

import pytest

from storefront.application.create_order import CreateOrderHandler
from storefront.application.dto import OrderItemSpec
from storefront.application.revise_order import ReviseOrderHandler
from storefront.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    InvalidRequestError,
)
from storefront.domain.model.order import OrderStatus
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from tests.fakes import (
    FakeOrderRepository,
    FakeProductRepository,
    RecordingNotificationSink,
    uow_factory,
)


def _setup():
    product_repo = FakeProductRepository([
        Product(id="P", name="Widget", price=Money.of("100.00"), stock_quantity=10),
        Product(id="Q", name="Gadget", price=Money.of("20.00"), stock_quantity=5),
    ])
    order_repo = FakeOrderRepository()
    factory = uow_factory(product_repo, order_repo)
    create = CreateOrderHandler(factory, RecordingNotificationSink())
    revise = ReviseOrderHandler(factory)
    order_id = create.handle("customer-1", [OrderItemSpec("P", 3)])
    return revise, order_id, product_repo, order_repo


def _stock(product_repo, pid):
    return product_repo.get_by_id(pid).stock_quantity


class TestReviseStatus:

    def test_status_only(self):
        revise, order_id, product_repo, order_repo = _setup()

        dto = revise.handle(order_id, "processing")

        assert dto.status == "PROCESSING"
        assert order_repo.get_by_id(order_id).status == OrderStatus.PROCESSING
        assert dto.total == Decimal("300.00")
        assert _stock(product_repo, "P") == 7

    def test_empty_item_list_is_status_only(self):
        revise, order_id, product_repo, order_repo = _setup()

        dto = revise.handle(order_id, "ENVIADO", [])

        assert dto.status == "SHIPPED"
        assert len(order_repo.get_by_id(order_id).items) == 1
        assert _stock(product_repo, "P") == 7

    def test_unknown_order_returns_none(self):
        revise, _, _, _ = _setup()
        assert revise.handle("no-such-order", "SHIPPED") is None

    def test_unknown_status_rejected(self):
        revise, order_id, _, order_repo = _setup()
        with pytest.raises(InvalidRequestError):
            revise.handle(order_id, "LOST")
        assert order_repo.get_by_id(order_id).status == OrderStatus.CREATED


class TestReviseItems:

    def test_replaces_items_and_recomputes_total(self):
        revise, order_id, _, order_repo = _setup()

        dto = revise.handle(order_id, "PROCESSING", [OrderItemSpec("Q", 2)])

        assert dto.total == Decimal("40.00")
        order = order_repo.get_by_id(order_id)
        assert [i.product_id for i in order.items] == ["Q"]
        assert order.total == Money.of("40.00")

    def test_reprices_at_current_price(self):
        revise, order_id, product_repo, order_repo = _setup()
        product = product_repo.get_by_id("P")
        product.update_price(Money.of("80.00"))
        product_repo.save(product)

        revise.handle(order_id, "CREATED", [OrderItemSpec("P", 3)])

        assert order_repo.get_by_id(order_id).items[0].unit_price == Money.of("80.00")

    def test_stock_follows_quantity_changes(self):
        revise, order_id, product_repo, _ = _setup()

        revise.handle(order_id, "CREATED", [OrderItemSpec("P", 5), OrderItemSpec("Q", 1)])
        assert _stock(product_repo, "P") == 5
        assert _stock(product_repo, "Q") == 4

        revise.handle(order_id, "CREATED", [OrderItemSpec("Q", 2)])
        assert _stock(product_repo, "P") == 10
        assert _stock(product_repo, "Q") == 3

    def test_shortage_rolls_back_everything(self):
        revise, order_id, product_repo, order_repo = _setup()

        with pytest.raises(InsufficientStockError) as exc_info:
            revise.handle(order_id, "PROCESSING", [OrderItemSpec("Q", 1), OrderItemSpec("P", 11)])

        assert exc_info.value.product_id == "P"
        assert exc_info.value.requested == 8
        assert _stock(product_repo, "P") == 7
        assert _stock(product_repo, "Q") == 5
        order = order_repo.get_by_id(order_id)
        assert order.status == OrderStatus.CREATED
        assert [i.product_id for i in order.items] == ["P"]

    def test_unknown_product_rejected(self):
        revise, order_id, product_repo, order_repo = _setup()

        with pytest.raises(EntityNotFoundError):
            revise.handle(order_id, "PROCESSING", [OrderItemSpec("missing", 1)])

        assert _stock(product_repo, "P") == 7
        assert order_repo.get_by_id(order_id).status == OrderStatus.CREATED

    def test_bad_quantity_rejected(self):
        revise, order_id, _, _ = _setup()
        with pytest.raises(InvalidRequestError) as exc_info:
            revise.handle(order_id, "PROCESSING", [OrderItemSpec("P", -2)])
        assert exc_info.value.field == "items[0].quantity"
