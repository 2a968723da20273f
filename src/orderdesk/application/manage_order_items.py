"""Application services: add, change and remove order line items."""

from __future__ import annotations

import logging

from orderdesk.application.dto import OrderDTO, order_to_dto
from orderdesk.application.notifications import NotificationService
from orderdesk.domain.exceptions import EntityNotFoundError
from orderdesk.domain.model.identifiers import OrderId, OrderItemId, ProductId
from orderdesk.domain.model.value_objects import Money
from orderdesk.domain.repository.order_repository import OrderRepository
from orderdesk.domain.repository.product_repository import ProductRepository
from orderdesk.domain.service.id_generator import IdGenerator

logger = logging.getLogger(__name__)


class AddOrderItemHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        id_generator: IdGenerator,
        notifications: NotificationService,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo
        self._id_generator = id_generator
        self._notifications = notifications

    def handle(
        self,
        order_id: str,
        product_id: str,
        quantity: int,
        user_id: str,
        price: str | None = None,
    ) -> OrderDTO:
        """Add *quantity* of a catalog product to an order.

        The unit price is a snapshot of the product's current price
        unless *price* overrides it (in the order's currency).
        """
        order = self._order_repo.find_by_id(OrderId(order_id))
        if order is None:
            raise EntityNotFoundError(f"Order {order_id} not found")

        product = self._product_repo.find_by_id(ProductId(product_id))
        if product is None:
            raise EntityNotFoundError(f"Product not found: '{product_id}'")

        unit_price = product.price if price is None else Money.of(price, order.currency)
        item = order.add_item(product.id, quantity, unit_price, self._id_generator)
        self._order_repo.save(order)

        logger.info(
            "Order %s: added item %s (%d x %s)",
            order.id, item.id, quantity, unit_price,
        )
        self._notifications.notify_order_change(user_id)
        return order_to_dto(order)


class RemoveOrderItemHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        notifications: NotificationService,
    ) -> None:
        self._order_repo = order_repo
        self._notifications = notifications

    def handle(self, order_id: str, order_item_id: str, user_id: str) -> OrderDTO:
        order = self._order_repo.find_by_id(OrderId(order_id))
        if order is None:
            raise EntityNotFoundError(f"Order {order_id} not found")

        if not order.remove_item(OrderItemId(order_item_id)):
            raise EntityNotFoundError(
                f"Item {order_item_id} not found in order {order_id}"
            )
        self._order_repo.save(order)

        logger.info("Order %s: removed item %s", order.id, order_item_id)
        self._notifications.notify_order_change(user_id)
        return order_to_dto(order)


class UpdateOrderItemHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        notifications: NotificationService,
    ) -> None:
        self._order_repo = order_repo
        self._notifications = notifications

    def handle(
        self,
        order_id: str,
        order_item_id: str,
        user_id: str,
        quantity: int | None = None,
        price: str | None = None,
    ) -> OrderDTO:
        """Change the quantity and/or unit price of one line item."""
        order = self._order_repo.find_by_id(OrderId(order_id))
        if order is None:
            raise EntityNotFoundError(f"Order {order_id} not found")

        new_price = None if price is None else Money.of(price, order.currency)
        order.update_item(OrderItemId(order_item_id), quantity=quantity, price=new_price)
        self._order_repo.save(order)

        logger.info("Order %s: updated item %s", order.id, order_item_id)
        self._notifications.notify_order_change(user_id)
        return order_to_dto(order)
