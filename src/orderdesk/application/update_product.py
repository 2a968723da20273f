"""Application service: Update Product use case."""

from __future__ import annotations

import logging

from orderdesk.application.dto import ProductDTO, product_to_dto
from orderdesk.application.notifications import NotificationService
from orderdesk.domain.exceptions import EntityNotFoundError
from orderdesk.domain.model.identifiers import ProductId
from orderdesk.domain.model.value_objects import Money
from orderdesk.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class UpdateProductHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        notifications: NotificationService,
    ) -> None:
        self._product_repo = product_repo
        self._notifications = notifications

    def handle(
        self,
        product_id: str,
        user_id: str,
        name: str | None = None,
        price: str | None = None,
        currency: str | None = None,
    ) -> ProductDTO:
        """Rename and/or reprice a product.

        This does NOT affect any existing orders; their items captured
        a price snapshot when they were added.
        """
        product = self._product_repo.find_by_id(ProductId(product_id))
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        if name is not None:
            product.rename(name)
        if price is not None:
            product.update_price(Money.of(price, currency or product.price.currency))
        self._product_repo.save(product)

        logger.info("Product %s updated", product.id)
        self._notifications.notify_product_change(user_id)
        return product_to_dto(product)
