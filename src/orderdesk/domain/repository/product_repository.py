"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, in-memory)
live in the infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from orderdesk.domain.model.identifiers import ProductId
from orderdesk.domain.model.product import Product


@dataclass(frozen=True)
class ProductPage:
    products: list[Product]
    total: int


class ProductRepository(ABC):

    @abstractmethod
    def find_by_id(self, product_id: ProductId) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def find_all(self) -> list[Product]:
        """Return every product in the catalog."""

    @abstractmethod
    def find_with_pagination(self, limit: int, offset: int) -> ProductPage:
        """Return one page of products plus the total count."""

    @abstractmethod
    def search_by_name_with_pagination(
        self, query: str, limit: int, offset: int
    ) -> ProductPage:
        """Page of products whose id or name contains *query*."""

    @abstractmethod
    def save(self, product: Product) -> Product:
        """Persist a new or updated product."""

    @abstractmethod
    def delete(self, product_id: ProductId) -> bool:
        """Delete a product; False if it did not exist."""


def product_matches(product: Product, query: str) -> bool:
    needle = query.strip().lower()
    if not needle:
        return True
    return needle in product.id.value.lower() or needle in product.name.lower()
