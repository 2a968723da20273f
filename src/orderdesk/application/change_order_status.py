"""Application service: move an order through its lifecycle.

Confirm, payment, production, delivery, billing and cancellation all
share the same load -> transition -> save -> notify flow; the
aggregate decides whether the transition is allowed.
"""

from __future__ import annotations

import logging

from orderdesk.application.dto import OrderDTO, order_to_dto
from orderdesk.application.notifications import NotificationService
from orderdesk.domain.exceptions import EntityNotFoundError
from orderdesk.domain.model.identifiers import OrderId
from orderdesk.domain.model.order import OrderAction
from orderdesk.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class ChangeOrderStatusHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        notifications: NotificationService,
    ) -> None:
        self._order_repo = order_repo
        self._notifications = notifications

    def handle(self, order_id: str, action: OrderAction, user_id: str) -> OrderDTO:
        order = self._order_repo.find_by_id(OrderId(order_id))
        if order is None:
            raise EntityNotFoundError(f"Order {order_id} not found")

        previous = order.status
        order.apply(action)
        self._order_repo.save(order)

        logger.info(
            "Order %s: %s -> %s", order.id, previous.value, order.status.value
        )
        self._notifications.notify_order_change(user_id)
        return order_to_dto(order)
