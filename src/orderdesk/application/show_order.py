"""Application services: Show Order and List Orders (queries)."""

from __future__ import annotations

from orderdesk.application.dto import OrderDTO, OrderPageDTO, order_to_dto
from orderdesk.domain.exceptions import EntityNotFoundError, ValidationError
from orderdesk.domain.model.identifiers import OrderId
from orderdesk.domain.repository.order_repository import OrderRepository

DEFAULT_PAGE_SIZE = 10


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: str) -> OrderDTO:
        order = self._order_repo.find_by_id(OrderId(order_id))
        if order is None:
            raise EntityNotFoundError(f"Order {order_id} not found")
        return order_to_dto(order)


class ListOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(
        self,
        query: str = "",
        limit: int = DEFAULT_PAGE_SIZE,
        offset: int = 0,
    ) -> OrderPageDTO:
        """Return one page of orders, optionally filtered by *query*."""
        if limit <= 0:
            raise ValidationError("Page size must be positive")
        if offset < 0:
            raise ValidationError("Page offset cannot be negative")

        if query.strip():
            page = self._order_repo.search_with_pagination(query, limit, offset)
        else:
            page = self._order_repo.find_with_pagination(limit, offset)

        return OrderPageDTO(
            orders=[order_to_dto(order) for order in page.orders],
            total=page.total,
            limit=limit,
            offset=offset,
        )
