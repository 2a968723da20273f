"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

import json
from decimal import Decimal
from pathlib import Path

from orderdesk.domain.model.identifiers import ProductId
from orderdesk.domain.model.product import Product
from orderdesk.domain.model.value_objects import DEFAULT_CURRENCY, Money
from orderdesk.domain.repository.product_repository import (
    ProductPage,
    ProductRepository,
    product_matches,
)


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- ProductRepository interface ------------------------------------------

    def find_by_id(self, product_id: ProductId) -> Product | None:
        return self._load().get(product_id.value)

    def find_all(self) -> list[Product]:
        return list(self._load().values())

    def find_with_pagination(self, limit: int, offset: int) -> ProductPage:
        products = self.find_all()
        return ProductPage(products=products[offset:offset + limit], total=len(products))

    def search_by_name_with_pagination(
        self, query: str, limit: int, offset: int
    ) -> ProductPage:
        matching = [p for p in self.find_all() if product_matches(p, query)]
        return ProductPage(products=matching[offset:offset + limit], total=len(matching))

    def save(self, product: Product) -> Product:
        products = self._load()
        products[product.id.value] = product
        self._persist(products)
        return product

    def delete(self, product_id: ProductId) -> bool:
        products = self._load()
        if products.pop(product_id.value, None) is None:
            return False
        self._persist(products)
        return True

    # --- Serialization helpers ------------------------------------------------

    def _load(self) -> dict[str, Product]:
        raw = json.loads(self._file_path.read_text(encoding="utf-8"))
        return {
            item["id"]: Product(
                id=ProductId(item["id"]),
                name=item["name"],
                price=Money(
                    Decimal(item["price"]), item.get("currency", DEFAULT_CURRENCY)
                ),
            )
            for item in raw
        }

    def _persist(self, products: dict[str, Product]) -> None:
        raw = [
            {
                "id": p.id.value,
                "name": p.name,
                "price": str(p.price.amount),
                "currency": p.price.currency,
            }
            for p in products.values()
        ]
        self._file_path.write_text(
            json.dumps(raw, indent=2) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
