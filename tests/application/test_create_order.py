"""Integration tests for the CreateOrder use case.

Uses in-memory fake stores, no file I/O.
"""

from decimal import Decimal

import pytest
from structlog.testing import capture_logs

from storefront.application.create_order import CreateOrderHandler
from storefront.application.dto import OrderItemSpec
from storefront.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    InvalidRequestError,
)
from storefront.domain.model.order import OrderStatus
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from tests.fakes import (
    FailingNotificationSink,
    FakeOrderRepository,
    FakeProductRepository,
    RecordingNotificationSink,
    uow_factory,
)


def _product(pid: str, price: str, stock: int) -> Product:
    return Product(id=pid, name=f"Product {pid}", price=Money.of(price), stock_quantity=stock)


def _setup(products=None, order_repo=None, sink=None):
    if products is None:
        products = [
            _product("P", "100.00", 10),
            _product("Q", "25.50", 4),
        ]
    product_repo = FakeProductRepository(products)
    order_repo = order_repo or FakeOrderRepository()
    sink = sink or RecordingNotificationSink()
    handler = CreateOrderHandler(uow_factory(product_repo, order_repo), sink)
    return handler, product_repo, order_repo, sink


class TestCreateOrderHappyPath:

    def test_single_line_order(self):
        handler, product_repo, order_repo, _ = _setup()

        order_id = handler.handle("customer-1", [OrderItemSpec("P", 3)])

        order = order_repo.get_by_id(order_id)
        assert order is not None
        assert order.total == Money.of("300.00")
        assert order.status == OrderStatus.CREATED
        assert order.customer_id == "customer-1"
        assert product_repo.get_by_id("P").stock_quantity == 7

    def test_multi_line_order_conserves_stock(self):
        handler, product_repo, order_repo, _ = _setup()

        order_id = handler.handle("customer-1", [OrderItemSpec("P", 2), OrderItemSpec("Q", 4)])

        assert product_repo.get_by_id("P").stock_quantity == 8
        assert product_repo.get_by_id("Q").stock_quantity == 0
        order = order_repo.get_by_id(order_id)
        assert [i.product_id for i in order.items] == ["P", "Q"]
        assert order.total.amount == Decimal("302.00")

    def test_total_equals_sum_of_lines(self):
        handler, _, order_repo, _ = _setup()
        order_id = handler.handle("c", [OrderItemSpec("P", 1), OrderItemSpec("Q", 3)])
        order = order_repo.get_by_id(order_id)
        assert order.total.amount == sum(i.unit_price.amount * i.quantity.value for i in order.items)

    def test_same_product_on_two_lines(self):
        handler, product_repo, _, _ = _setup()
        handler.handle("c", [OrderItemSpec("P", 4), OrderItemSpec("P", 6)])
        assert product_repo.get_by_id("P").stock_quantity == 0

    def test_customer_id_is_trimmed(self):
        handler, _, order_repo, _ = _setup()
        order_id = handler.handle("  customer-1 ", [OrderItemSpec("P", 1)])
        assert order_repo.get_by_id(order_id).customer_id == "customer-1"

    def test_returns_distinct_ids(self):
        handler, _, _, _ = _setup()
        first = handler.handle("c", [OrderItemSpec("P", 1)])
        second = handler.handle("c", [OrderItemSpec("P", 1)])
        assert first != second


class TestCreateOrderPriceSnapshot:

    def test_later_price_change_does_not_touch_order(self):
        handler, product_repo, order_repo, _ = _setup()
        order_id = handler.handle("c", [OrderItemSpec("P", 2)])

        product = product_repo.get_by_id("P")
        product.update_price(Money.of("999.99"))
        product_repo.save(product)

        order = order_repo.get_by_id(order_id)
        assert order.items[0].unit_price == Money.of("100.00")
        assert order.total == Money.of("200.00")


class TestCreateOrderValidation:

    def test_empty_customer_rejected_before_any_read(self):
        handler, product_repo, order_repo, sink = _setup()

        with pytest.raises(InvalidRequestError) as exc_info:
            handler.handle("", [OrderItemSpec("P", 1)])

        assert exc_info.value.field == "customer_id"
        assert product_repo.calls == 0
        assert order_repo.list_all() == []
        assert sink.events == []

    def test_empty_item_list_rejected(self):
        handler, product_repo, _, _ = _setup()
        with pytest.raises(InvalidRequestError, match="at least one item"):
            handler.handle("c", [])
        assert product_repo.calls == 0

    def test_non_positive_quantity_names_the_line(self):
        handler, product_repo, _, _ = _setup()
        with pytest.raises(InvalidRequestError) as exc_info:
            handler.handle("c", [OrderItemSpec("P", 1), OrderItemSpec("Q", 0)])
        assert exc_info.value.field == "items[1].quantity"
        assert product_repo.calls == 0
        assert product_repo.get_by_id("P").stock_quantity == 10

    def test_blank_product_id_rejected(self):
        handler, _, _, _ = _setup()
        with pytest.raises(InvalidRequestError) as exc_info:
            handler.handle("c", [OrderItemSpec(" ", 1)])
        assert exc_info.value.field == "items[0].product_id"

    def test_non_string_product_id_is_coerced(self):
        handler, product_repo, order_repo, _ = _setup([_product("7", "5.00", 3)])
        order_id = handler.handle("c", [OrderItemSpec(7, 2)])
        assert order_repo.get_by_id(order_id).items[0].product_id == "7"
        assert product_repo.get_by_id("7").stock_quantity == 1


class TestCreateOrderFailures:

    def test_insufficient_stock(self):
        handler, product_repo, order_repo, sink = _setup([_product("P", "100.00", 1)])

        with pytest.raises(InsufficientStockError) as exc_info:
            handler.handle("c", [OrderItemSpec("P", 5)])

        assert exc_info.value.product_id == "P"
        assert exc_info.value.available == 1
        assert exc_info.value.requested == 5
        assert product_repo.get_by_id("P").stock_quantity == 1
        assert order_repo.list_all() == []
        assert sink.events == []

    def test_unknown_product(self):
        handler, _, order_repo, _ = _setup()

        with pytest.raises(EntityNotFoundError) as exc_info:
            handler.handle("c", [OrderItemSpec("missing", 2)])

        assert exc_info.value.entity_id == "missing"
        assert order_repo.list_all() == []

    def test_failure_on_later_line_restores_earlier_lines(self):
        handler, product_repo, order_repo, _ = _setup()

        with pytest.raises(InsufficientStockError):
            handler.handle("c", [OrderItemSpec("P", 3), OrderItemSpec("Q", 5)])

        assert product_repo.get_by_id("P").stock_quantity == 10
        assert product_repo.get_by_id("Q").stock_quantity == 4
        assert order_repo.list_all() == []

    def test_unknown_product_on_later_line_restores_earlier_lines(self):
        handler, product_repo, order_repo, _ = _setup()

        with pytest.raises(EntityNotFoundError):
            handler.handle("c", [OrderItemSpec("P", 3), OrderItemSpec("Q", 1), OrderItemSpec("X", 1)])

        assert product_repo.get_by_id("P").stock_quantity == 10
        assert product_repo.get_by_id("Q").stock_quantity == 4
        assert order_repo.list_all() == []

    def test_store_failure_on_order_insert_restores_stock(self):
        failing_orders = FakeOrderRepository(fail_on_add=OSError("disk full"))
        handler, product_repo, _, sink = _setup(order_repo=failing_orders)

        with capture_logs() as logs:
            with pytest.raises(OSError, match="disk full"):
                handler.handle("c", [OrderItemSpec("P", 3), OrderItemSpec("Q", 2)])

        assert product_repo.get_by_id("P").stock_quantity == 10
        assert product_repo.get_by_id("Q").stock_quantity == 4
        assert sink.events == []
        rolled_back = [e for e in logs if e["event"] == "Stock reservation rolled back"]
        assert {e["product_id"] for e in rolled_back} == {"P", "Q"}


class TestCreateOrderNotification:

    def test_event_published_after_commit(self):
        handler, _, order_repo, sink = _setup()

        order_id = handler.handle("customer-1", [OrderItemSpec("P", 3)])

        assert len(sink.events) == 1
        event = sink.events[0]
        assert event.order_id == order_id
        assert event.customer_id == "customer-1"
        assert event.total == Money.of("300.00")
        assert event.created_at == order_repo.get_by_id(order_id).created_at

    def test_sink_failure_does_not_fail_the_order(self):
        sink = FailingNotificationSink()
        handler, product_repo, order_repo, _ = _setup(sink=sink)

        with capture_logs() as logs:
            order_id = handler.handle("c", [OrderItemSpec("P", 3)])

        assert order_repo.get_by_id(order_id) is not None
        assert product_repo.get_by_id("P").stock_quantity == 7
        assert sink.attempts == 1
        failures = [e for e in logs if e["event"] == "Order notification failed"]
        assert len(failures) == 1
        assert failures[0]["log_level"] == "warning"
        assert failures[0]["order_id"] == order_id
