"""Integration tests for the order use cases that act on an existing order."""

import pytest

from orderdesk.application.change_order_status import ChangeOrderStatusHandler
from orderdesk.application.delete_order import DeleteOrderHandler
from orderdesk.application.manage_order_items import (
    AddOrderItemHandler,
    RemoveOrderItemHandler,
    UpdateOrderItemHandler,
)
from orderdesk.application.notifications import NotificationEvent, NotificationService
from orderdesk.application.show_order import ListOrdersHandler, ShowOrderHandler
from orderdesk.application.update_order import UpdateOrderHandler
from orderdesk.domain.exceptions import (
    EntityNotFoundError,
    IncompatibleCurrency,
    InvalidName,
    InvalidQuantity,
    InvalidTransition,
    ValidationError,
)
from orderdesk.domain.model.identifiers import OrderId, ProductId
from orderdesk.domain.model.order import Order, OrderAction, OrderStatus
from orderdesk.domain.model.product import Product
from orderdesk.domain.model.value_objects import CustomerInfo, Money
from orderdesk.infrastructure.persistence.memory_order_repository import InMemoryOrderRepository
from orderdesk.infrastructure.persistence.memory_product_repository import (
    InMemoryProductRepository,
)
from tests.fakes import RecordingChannel, SequentialIdGenerator


class _World:
    """Repositories, ids and a notification hub with one watching user."""

    def __init__(self) -> None:
        self.ids = SequentialIdGenerator()
        self.orders = InMemoryOrderRepository()
        self.products = InMemoryProductRepository([
            Product(ProductId("P1"), "Widget", Money.of("10.00")),
            Product(ProductId("P2"), "Gadget", Money.of("5.50")),
            Product(ProductId("P3"), "Import", Money.of("3.00", "USD")),
        ])
        self.notifications = NotificationService()
        self.watcher = RecordingChannel()
        self.notifications.add_client("watcher", self.watcher, "bob")

    def new_order(self, name: str = "Acme", email: str = "a@acme.com") -> Order:
        order = Order.create(CustomerInfo(name, "123456789", email), self.ids)
        return self.orders.save(order)

    @property
    def changes(self) -> int:
        return self.watcher.events.count(NotificationEvent.ORDER_CHANGE)


@pytest.fixture
def world() -> _World:
    return _World()


class TestChangeOrderStatus:

    def test_confirm(self, world):
        order = world.new_order()
        handler = ChangeOrderStatusHandler(world.orders, world.notifications)

        dto = handler.handle(order.id.value, OrderAction.CONFIRM, "alice")

        assert dto.status == "Confirmed"
        assert world.orders.find_by_id(order.id).status == OrderStatus.CONFIRMED
        assert world.changes == 1

    def test_full_lifecycle(self, world):
        order = world.new_order()
        handler = ChangeOrderStatusHandler(world.orders, world.notifications)
        for action in (
            OrderAction.CONFIRM,
            OrderAction.MARK_PAYMENT_RECEIVED,
            OrderAction.START_PRODUCTION,
            OrderAction.START_DELIVERY,
            OrderAction.COMPLETE_BILLING,
        ):
            dto = handler.handle(order.id.value, action, "alice")
        assert dto.status == "Project Billing"
        assert dto.available_actions == []
        assert world.changes == 5

    def test_invalid_transition_is_not_saved_or_broadcast(self, world):
        order = world.new_order()
        handler = ChangeOrderStatusHandler(world.orders, world.notifications)
        with pytest.raises(InvalidTransition):
            handler.handle(order.id.value, OrderAction.START_DELIVERY, "alice")
        stored = world.orders.find_by_id(order.id)
        assert stored.status == OrderStatus.CREATED
        assert stored.version == 1
        assert world.changes == 0

    def test_unknown_order(self, world):
        handler = ChangeOrderStatusHandler(world.orders, world.notifications)
        with pytest.raises(EntityNotFoundError, match="not found"):
            handler.handle("missing", OrderAction.CANCEL, "alice")


class TestOrderItemHandlers:

    def test_add_item_uses_catalog_price(self, world):
        order = world.new_order()
        handler = AddOrderItemHandler(
            world.orders, world.products, world.ids, world.notifications
        )
        dto = handler.handle(order.id.value, "P1", 3, "alice")
        assert dto.total == "30.00 EUR"
        assert dto.items[0].product_id == "P1"
        assert world.changes == 1

    def test_add_item_price_override(self, world):
        order = world.new_order()
        handler = AddOrderItemHandler(
            world.orders, world.products, world.ids, world.notifications
        )
        dto = handler.handle(order.id.value, "P1", 2, "alice", price="7.25")
        assert dto.items[0].unit_price == "7.25 EUR"
        assert dto.total == "14.50 EUR"

    def test_price_snapshot_survives_repricing(self, world):
        order = world.new_order()
        AddOrderItemHandler(
            world.orders, world.products, world.ids, world.notifications
        ).handle(order.id.value, "P1", 1, "alice")

        world.products.find_by_id(ProductId("P1")).update_price(Money.of("99.00"))

        assert world.orders.find_by_id(order.id).total_amount == Money.of("10.00")

    def test_add_unknown_product(self, world):
        order = world.new_order()
        handler = AddOrderItemHandler(
            world.orders, world.products, world.ids, world.notifications
        )
        with pytest.raises(EntityNotFoundError, match="Product not found"):
            handler.handle(order.id.value, "nope", 1, "alice")

    def test_add_product_in_other_currency(self, world):
        order = world.new_order()
        handler = AddOrderItemHandler(
            world.orders, world.products, world.ids, world.notifications
        )
        with pytest.raises(IncompatibleCurrency):
            handler.handle(order.id.value, "P3", 1, "alice")
        assert world.changes == 0

    def test_remove_item(self, world):
        order = world.new_order()
        add = AddOrderItemHandler(
            world.orders, world.products, world.ids, world.notifications
        )
        add.handle(order.id.value, "P1", 3, "alice")
        dto = add.handle(order.id.value, "P2", 1, "alice")
        assert dto.total == "35.50 EUR"

        remove = RemoveOrderItemHandler(world.orders, world.notifications)
        dto = remove.handle(order.id.value, dto.items[0].id, "alice")

        assert dto.total == "5.50 EUR"
        assert [i.product_id for i in dto.items] == ["P2"]
        assert world.changes == 3

    def test_update_item_quantity_and_price(self, world):
        order = world.new_order()
        dto = AddOrderItemHandler(
            world.orders, world.products, world.ids, world.notifications
        ).handle(order.id.value, "P1", 3, "alice")

        dto = UpdateOrderItemHandler(world.orders, world.notifications).handle(
            order.id.value, dto.items[0].id, "alice", quantity=5, price="9.00"
        )

        assert dto.items[0].quantity == 5
        assert dto.items[0].unit_price == "9.00 EUR"
        assert dto.total == "45.00 EUR"
        assert world.changes == 2

    def test_update_item_is_all_or_nothing(self, world):
        order = world.new_order()
        dto = AddOrderItemHandler(
            world.orders, world.products, world.ids, world.notifications
        ).handle(order.id.value, "P1", 3, "alice")

        with pytest.raises(InvalidQuantity):
            UpdateOrderItemHandler(world.orders, world.notifications).handle(
                order.id.value, dto.items[0].id, "alice", quantity=0, price="1.00"
            )

        stored = world.orders.find_by_id(order.id)
        assert stored.items[0].price == Money.of("10.00")
        assert stored.total_amount == Money.of("30.00")
        assert world.changes == 1

    def test_update_unknown_item(self, world):
        order = world.new_order()
        with pytest.raises(EntityNotFoundError, match="not found in order"):
            UpdateOrderItemHandler(world.orders, world.notifications).handle(
                order.id.value, "ghost", "alice", quantity=2
            )

    def test_remove_unknown_item(self, world):
        order = world.new_order()
        remove = RemoveOrderItemHandler(world.orders, world.notifications)
        with pytest.raises(EntityNotFoundError, match="Item"):
            remove.handle(order.id.value, "ghost", "alice")
        assert world.changes == 0


class TestUpdateAndDeleteOrder:

    def test_update_customer(self, world):
        order = world.new_order()
        handler = UpdateOrderHandler(world.orders, world.notifications)
        dto = handler.handle(
            order.id.value, "Acme d.o.o.", "987654321", "b@acme.com", "alice"
        )
        assert dto.customer_name == "Acme d.o.o."
        assert dto.tax_number == "987654321"
        assert dto.status == "Created"
        assert world.changes == 1

    def test_update_with_invalid_name(self, world):
        order = world.new_order()
        handler = UpdateOrderHandler(world.orders, world.notifications)
        with pytest.raises(InvalidName):
            handler.handle(order.id.value, " ", "987654321", "b@acme.com", "alice")
        assert world.orders.find_by_id(order.id).customer_info.name == "Acme"

    def test_delete(self, world):
        order = world.new_order()
        DeleteOrderHandler(world.orders, world.notifications).handle(
            order.id.value, "alice"
        )
        assert world.orders.find_by_id(order.id) is None
        assert world.changes == 1

    def test_delete_unknown(self, world):
        with pytest.raises(EntityNotFoundError):
            DeleteOrderHandler(world.orders, world.notifications).handle("x", "alice")
        assert world.changes == 0


class TestOrderQueries:

    def test_show(self, world):
        order = world.new_order()
        dto = ShowOrderHandler(world.orders).handle(order.id.value)
        assert dto.id == order.id.value
        assert dto.created_at.endswith("UTC")

    def test_show_unknown(self, world):
        with pytest.raises(EntityNotFoundError):
            ShowOrderHandler(world.orders).handle("missing")

    def test_list_pages(self, world):
        for n in range(5):
            world.new_order(name=f"Customer {n}")
        handler = ListOrdersHandler(world.orders)

        first = handler.handle(limit=2, offset=0)
        last = handler.handle(limit=2, offset=4)

        assert first.total == 5
        assert [o.customer_name for o in first.orders] == ["Customer 0", "Customer 1"]
        assert first.has_next
        assert len(last.orders) == 1
        assert not last.has_next

    def test_search(self, world):
        world.new_order(name="Acme", email="sales@acme.com")
        world.new_order(name="Globex", email="info@globex.com")
        world.new_order(name="Initech", email="acme-fan@initech.com")

        page = ListOrdersHandler(world.orders).handle(query="ACME")

        assert page.total == 2
        assert {o.customer_name for o in page.orders} == {"Acme", "Initech"}

    def test_search_by_id(self, world):
        world.new_order()
        target = world.new_order(name="Globex")
        page = ListOrdersHandler(world.orders).handle(query=target.id.value)
        assert [o.id for o in page.orders] == [target.id.value]

    def test_blank_query_lists_everything(self, world):
        world.new_order()
        world.new_order()
        assert ListOrdersHandler(world.orders).handle(query="   ").total == 2

    @pytest.mark.parametrize("limit, offset", [(0, 0), (-1, 0), (10, -1)])
    def test_bad_paging_rejected(self, world, limit, offset):
        with pytest.raises(ValidationError):
            ListOrdersHandler(world.orders).handle(limit=limit, offset=offset)
