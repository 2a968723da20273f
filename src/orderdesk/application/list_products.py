"""Application service: List Products use case (query)."""

from __future__ import annotations

from orderdesk.application.dto import ProductPageDTO, product_to_dto
from orderdesk.application.show_order import DEFAULT_PAGE_SIZE
from orderdesk.domain.exceptions import ValidationError
from orderdesk.domain.repository.product_repository import ProductRepository


class ListProductsHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        query: str = "",
        limit: int = DEFAULT_PAGE_SIZE,
        offset: int = 0,
    ) -> ProductPageDTO:
        if limit <= 0:
            raise ValidationError("Page size must be positive")
        if offset < 0:
            raise ValidationError("Page offset cannot be negative")

        if query.strip():
            page = self._product_repo.search_by_name_with_pagination(query, limit, offset)
        else:
            page = self._product_repo.find_with_pagination(limit, offset)

        return ProductPageDTO(
            products=[product_to_dto(p) for p in page.products],
            total=page.total,
            limit=limit,
            offset=offset,
        )
