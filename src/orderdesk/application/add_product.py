"""Application service: Add Product use case."""

from __future__ import annotations

import logging

from orderdesk.application.dto import ProductDTO, product_to_dto
from orderdesk.application.notifications import NotificationService
from orderdesk.domain.exceptions import ValidationError
from orderdesk.domain.model.identifiers import ProductId
from orderdesk.domain.model.product import Product
from orderdesk.domain.model.value_objects import DEFAULT_CURRENCY, Money
from orderdesk.domain.repository.product_repository import ProductRepository
from orderdesk.domain.service.id_generator import IdGenerator

logger = logging.getLogger(__name__)

# Retries when a generated product id is already taken.
_MAX_ID_ATTEMPTS = 20


class AddProductHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        id_generator: IdGenerator,
        notifications: NotificationService,
        currency: str = DEFAULT_CURRENCY,
    ) -> None:
        self._product_repo = product_repo
        self._id_generator = id_generator
        self._notifications = notifications
        self._currency = currency

    def handle(
        self,
        name: str,
        price: str,
        user_id: str,
        currency: str | None = None,
    ) -> ProductDTO:
        """Add a new product to the catalog."""
        product = Product(
            id=self._unused_product_id(),
            name=name,
            price=Money.of(price, currency or self._currency),
        )
        self._product_repo.save(product)

        logger.info("Product %s '%s' added at %s", product.id, product.name, product.price)
        self._notifications.notify_product_change(user_id)
        return product_to_dto(product)

    def _unused_product_id(self) -> ProductId:
        for _ in range(_MAX_ID_ATTEMPTS):
            candidate = ProductId(self._id_generator.product_id())
            if self._product_repo.find_by_id(candidate) is None:
                return candidate
        raise ValidationError("Could not allocate a free product ID")
