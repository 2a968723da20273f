"""Integration tests for the CreateOrder use case.

Uses the in-memory repositories, no file I/O.
"""

import pytest

from orderdesk.application.create_order import CreateOrderHandler
from orderdesk.application.dto import OrderItemSpec
from orderdesk.application.notifications import NotificationEvent, NotificationService
from orderdesk.domain.exceptions import EntityNotFoundError, InvalidEmail, InvalidQuantity
from orderdesk.domain.model.identifiers import OrderId, ProductId
from orderdesk.domain.model.product import Product
from orderdesk.domain.model.value_objects import Money
from orderdesk.infrastructure.persistence.memory_order_repository import InMemoryOrderRepository
from orderdesk.infrastructure.persistence.memory_product_repository import (
    InMemoryProductRepository,
)
from tests.fakes import RecordingChannel, SequentialIdGenerator


def _setup(currency: str = "EUR"):
    products = [
        Product(id=ProductId("100001"), name="Widget", price=Money.of("15.00", currency)),
        Product(id=ProductId("100002"), name="Gadget", price=Money.of("25.00", currency)),
    ]
    order_repo = InMemoryOrderRepository()
    notifications = NotificationService()
    handler = CreateOrderHandler(
        order_repo,
        InMemoryProductRepository(products),
        SequentialIdGenerator(),
        notifications,
        currency=currency,
    )
    return handler, order_repo, notifications


class TestCreateOrderHappyPath:

    def test_creates_empty_order(self):
        handler, _, _ = _setup()
        dto = handler.handle("Acme", "123456789", "a@acme.com", user_id="alice")
        assert dto.id == "id-1"
        assert dto.status == "Created"
        assert dto.customer_name == "Acme"
        assert dto.items == []
        assert dto.total == "0.00 EUR"
        assert dto.available_actions == ["confirm", "cancel"]

    def test_creates_order_with_items(self):
        handler, _, _ = _setup()
        dto = handler.handle("Acme", "123456789", "a@acme.com", "alice", [
            OrderItemSpec("100001", 3),
            OrderItemSpec("100002", 2),
        ])
        assert dto.total == "95.00 EUR"
        assert [i.quantity for i in dto.items] == [3, 2]
        assert dto.items[0].unit_price == "15.00 EUR"
        assert dto.items[0].line_total == "45.00 EUR"

    def test_persists_order(self):
        handler, order_repo, _ = _setup()
        dto = handler.handle("Acme", "123456789", "a@acme.com", "alice")
        saved = order_repo.find_by_id(OrderId(dto.id))
        assert saved is not None
        assert saved.customer_info.email == "a@acme.com"
        assert saved.version == 1

    def test_uses_configured_currency(self):
        handler, _, _ = _setup(currency="RSD")
        dto = handler.handle("Acme", "123456789", "a@acme.com", "alice", [
            OrderItemSpec("100001", 1),
        ])
        assert dto.total == "15.00 RSD"

    def test_notifies_other_users(self):
        handler, _, notifications = _setup()
        alice, bob = RecordingChannel(), RecordingChannel()
        notifications.add_client("c1", alice, "alice")
        notifications.add_client("c2", bob, "bob")

        handler.handle("Acme", "123456789", "a@acme.com", "alice")

        assert alice.events == [NotificationEvent.CONNECTED]
        assert bob.events == [NotificationEvent.CONNECTED, NotificationEvent.ORDER_CHANGE]


class TestCreateOrderValidation:

    def test_unknown_product_saves_nothing(self):
        handler, order_repo, _ = _setup()
        with pytest.raises(EntityNotFoundError, match="Product not found"):
            handler.handle("Acme", "123456789", "a@acme.com", "alice", [
                OrderItemSpec("100001", 1),
                OrderItemSpec("999999", 1),
            ])
        assert order_repo.find_all() == []

    def test_invalid_email(self):
        handler, order_repo, _ = _setup()
        with pytest.raises(InvalidEmail):
            handler.handle("Acme", "123456789", "not-an-email", "alice")
        assert order_repo.find_all() == []

    def test_zero_quantity(self):
        handler, _, _ = _setup()
        with pytest.raises(InvalidQuantity):
            handler.handle("Acme", "123456789", "a@acme.com", "alice", [
                OrderItemSpec("100001", 0),
            ])

    def test_failure_sends_no_notification(self):
        handler, _, notifications = _setup()
        bob = RecordingChannel()
        notifications.add_client("c2", bob, "bob")
        with pytest.raises(InvalidEmail):
            handler.handle("Acme", "123456789", "nope", "alice")
        assert bob.events == [NotificationEvent.CONNECTED]
