"""Application service: Create Order use case.

Orchestrates the flow between repositories and the domain model.
Products are looked up so each line item captures the catalog price
at the moment the order is placed.
"""

from __future__ import annotations

import logging

from orderdesk.application.dto import OrderDTO, OrderItemSpec, order_to_dto
from orderdesk.application.notifications import NotificationService
from orderdesk.domain.exceptions import EntityNotFoundError
from orderdesk.domain.model.identifiers import ProductId
from orderdesk.domain.model.order import Order
from orderdesk.domain.model.value_objects import DEFAULT_CURRENCY, CustomerInfo
from orderdesk.domain.repository.order_repository import OrderRepository
from orderdesk.domain.repository.product_repository import ProductRepository
from orderdesk.domain.service.id_generator import IdGenerator

logger = logging.getLogger(__name__)


class CreateOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        id_generator: IdGenerator,
        notifications: NotificationService,
        currency: str = DEFAULT_CURRENCY,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo
        self._id_generator = id_generator
        self._notifications = notifications
        self._currency = currency

    def handle(
        self,
        customer_name: str,
        tax_number: str,
        email: str,
        user_id: str,
        item_specs: list[OrderItemSpec] | None = None,
    ) -> OrderDTO:
        """Create a new order in status Created.

        Steps:
        1. Validate the customer info (value object construction).
        2. Resolve each requested product and add it at its current price.
        3. Persist, then tell other users the order list changed.

        Nothing is saved if any step fails.
        """
        customer = CustomerInfo(name=customer_name, tax_number=tax_number, email=email)
        order = Order.create(customer, self._id_generator, currency=self._currency)

        for spec in item_specs or []:
            product = self._product_repo.find_by_id(ProductId(spec.product_id))
            if product is None:
                raise EntityNotFoundError(f"Product not found: '{spec.product_id}'")
            order.add_item(
                product.id, spec.quantity, product.price, self._id_generator
            )

        self._order_repo.save(order)
        logger.info(
            "Order %s created for %s with %d item(s)",
            order.id, customer.name, len(order.items),
        )
        self._notifications.notify_order_change(user_id)
        return order_to_dto(order)
