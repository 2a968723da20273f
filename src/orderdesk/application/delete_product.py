"""Application service: Delete Product use case.

Existing orders keep their items: an item only references the product
id and carries its own price.
"""

from __future__ import annotations

import logging

from orderdesk.application.notifications import NotificationService
from orderdesk.domain.exceptions import EntityNotFoundError
from orderdesk.domain.model.identifiers import ProductId
from orderdesk.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class DeleteProductHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        notifications: NotificationService,
    ) -> None:
        self._product_repo = product_repo
        self._notifications = notifications

    def handle(self, product_id: str, user_id: str) -> None:
        if not self._product_repo.delete(ProductId(product_id)):
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        logger.info("Product %s deleted", product_id)
        self._notifications.notify_product_change(user_id)
