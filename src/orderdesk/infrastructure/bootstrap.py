"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.  The one
``NotificationService`` of the process is created here and injected into
whatever needs it.
"""

from __future__ import annotations

from dataclasses import dataclass

from orderdesk.application.notifications import NotificationService
from orderdesk.domain.repository.order_repository import OrderRepository
from orderdesk.domain.repository.product_repository import ProductRepository
from orderdesk.domain.service.id_generator import IdGenerator
from orderdesk.infrastructure.config import Settings
from orderdesk.infrastructure.event_stream import EventStreamChannel
from orderdesk.infrastructure.id_generator import RandomIdGenerator
from orderdesk.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from orderdesk.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from orderdesk.infrastructure.persistence.memory_order_repository import (
    InMemoryOrderRepository,
)
from orderdesk.infrastructure.persistence.memory_product_repository import (
    InMemoryProductRepository,
)


@dataclass
class Container:
    settings: Settings
    order_repo: OrderRepository
    product_repo: ProductRepository
    id_generator: IdGenerator
    notifications: NotificationService

    def open_channel(self) -> EventStreamChannel:
        """A new subscriber channel sized from the settings."""
        return EventStreamChannel(max_buffered=self.settings.stream_buffer)


def build_container(settings: Settings) -> Container:
    order_repo: OrderRepository
    product_repo: ProductRepository
    if settings.storage == "memory":
        order_repo = InMemoryOrderRepository()
        product_repo = InMemoryProductRepository()
    else:
        order_repo = JsonOrderRepository(settings.data_dir / "orders.json")
        product_repo = JsonProductRepository(settings.data_dir / "products.json")

    return Container(
        settings=settings,
        order_repo=order_repo,
        product_repo=product_repo,
        id_generator=RandomIdGenerator(),
        notifications=NotificationService(),
    )
