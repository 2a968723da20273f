"""Application service: Delete Order use case."""

from __future__ import annotations

import logging

from orderdesk.application.notifications import NotificationService
from orderdesk.domain.exceptions import EntityNotFoundError
from orderdesk.domain.model.identifiers import OrderId
from orderdesk.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class DeleteOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        notifications: NotificationService,
    ) -> None:
        self._order_repo = order_repo
        self._notifications = notifications

    def handle(self, order_id: str, user_id: str) -> None:
        if not self._order_repo.delete(OrderId(order_id)):
            raise EntityNotFoundError(f"Order {order_id} not found")

        logger.info("Order %s deleted", order_id)
        self._notifications.notify_order_change(user_id)
