"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from orderdesk.domain.model.order import Order
from orderdesk.domain.model.product import Product

_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M UTC"


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: a product and how many of it the customer wants."""

    product_id: str
    quantity: int


@dataclass(frozen=True)
class OrderItemDTO:
    """Output: a single line item as displayed to the user."""

    id: str
    product_id: str
    quantity: int
    unit_price: str  # formatted, e.g. "10.00 EUR"
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: str
    customer_name: str
    tax_number: str
    email: str
    status: str
    items: list[OrderItemDTO]
    total: str
    created_at: str
    updated_at: str
    available_actions: list[str]


@dataclass(frozen=True)
class OrderPageDTO:
    orders: list[OrderDTO]
    total: int
    limit: int
    offset: int

    @property
    def has_next(self) -> bool:
        return self.offset + len(self.orders) < self.total


@dataclass(frozen=True)
class ProductDTO:
    id: str
    name: str
    price: str


@dataclass(frozen=True)
class ProductPageDTO:
    products: list[ProductDTO]
    total: int
    limit: int
    offset: int


# --- Mapping ------------------------------------------------------------------


def order_to_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id.value,
        customer_name=order.customer_info.name,
        tax_number=order.customer_info.tax_number,
        email=order.customer_info.email,
        status=order.status.value,
        items=[
            OrderItemDTO(
                id=item.id.value,
                product_id=item.product_id.value,
                quantity=item.quantity,
                unit_price=str(item.price),
                line_total=str(item.total),
            )
            for item in order.items
        ],
        total=str(order.total_amount),
        created_at=order.created_at.strftime(_TIMESTAMP_FORMAT),
        updated_at=order.updated_at.strftime(_TIMESTAMP_FORMAT),
        available_actions=[action.value for action in order.available_transitions()],
    )


def product_to_dto(product: Product) -> ProductDTO:
    return ProductDTO(id=product.id.value, name=product.name, price=str(product.price))
