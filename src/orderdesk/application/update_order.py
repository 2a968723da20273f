"""Application service: Update Order use case (customer details)."""

from __future__ import annotations

import logging

from orderdesk.application.dto import OrderDTO, order_to_dto
from orderdesk.application.notifications import NotificationService
from orderdesk.domain.exceptions import EntityNotFoundError
from orderdesk.domain.model.identifiers import OrderId
from orderdesk.domain.model.value_objects import CustomerInfo
from orderdesk.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class UpdateOrderHandler:

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
        customer_name: str,
        tax_number: str,
        email: str,
        user_id: str,
    ) -> OrderDTO:
        """Replace the customer details; status and items are kept."""
        order = self._order_repo.find_by_id(OrderId(order_id))
        if order is None:
            raise EntityNotFoundError(f"Order {order_id} not found")

        order.update_customer_info(
            CustomerInfo(name=customer_name, tax_number=tax_number, email=email)
        )
        self._order_repo.save(order)

        logger.info("Order %s: customer details updated", order.id)
        self._notifications.notify_order_change(user_id)
        return order_to_dto(order)
