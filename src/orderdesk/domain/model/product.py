"""Product aggregate.

Products live independently of orders. They have their own lifecycle:
prices change, products are added and removed from the catalog.
"""

from __future__ import annotations

from dataclasses import dataclass

from orderdesk.domain.exceptions import InvalidName
from orderdesk.domain.model.identifiers import ProductId
from orderdesk.domain.model.value_objects import Money


@dataclass
class Product:
    """A product in the catalog.

    Order items copy the product's price when they are added, so
    ``update_price`` never reaches into existing orders.
    """

    id: ProductId
    name: str
    price: Money

    def __post_init__(self) -> None:
        self.name = _validated_name(self.name)

    def rename(self, name: str) -> None:
        self.name = _validated_name(name)

    def update_price(self, new_price: Money) -> None:
        self.price = new_price


def _validated_name(name: str) -> str:
    if not name or not name.strip():
        raise InvalidName("Product name cannot be empty")
    return name.strip()
