"""In-memory implementation of ProductRepository."""

from __future__ import annotations

from orderdesk.domain.model.identifiers import ProductId
from orderdesk.domain.model.product import Product
from orderdesk.domain.repository.product_repository import (
    ProductPage,
    ProductRepository,
    product_matches,
)


class InMemoryProductRepository(ProductRepository):

    def __init__(self, products: list[Product] | None = None) -> None:
        self._store: dict[ProductId, Product] = {}
        for p in products or []:
            self._store[p.id] = p

    def find_by_id(self, product_id: ProductId) -> Product | None:
        return self._store.get(product_id)

    def find_all(self) -> list[Product]:
        return list(self._store.values())

    def find_with_pagination(self, limit: int, offset: int) -> ProductPage:
        products = self.find_all()
        return ProductPage(products=products[offset:offset + limit], total=len(products))

    def search_by_name_with_pagination(
        self, query: str, limit: int, offset: int
    ) -> ProductPage:
        matching = [p for p in self._store.values() if product_matches(p, query)]
        return ProductPage(products=matching[offset:offset + limit], total=len(matching))

    def save(self, product: Product) -> Product:
        self._store[product.id] = product
        return product

    def delete(self, product_id: ProductId) -> bool:
        return self._store.pop(product_id, None) is not None
