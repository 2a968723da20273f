"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from orderdesk.domain.model.identifiers import OrderId
from orderdesk.domain.model.order import Order


@dataclass(frozen=True)
class OrderPage:
    orders: list[Order]
    total: int


class OrderRepository(ABC):
    """Persistence boundary for orders.

    Lookups return ``None`` (or an empty page) instead of raising;
    turning a miss into an error is the caller's decision.

    ``save`` is optimistic: it raises ``ConcurrentModificationError``
    when the stored order has a different ``version`` than the one being
    saved, and bumps ``version`` on success.
    """

    @abstractmethod
    def find_by_id(self, order_id: OrderId) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def find_all(self) -> list[Order]:
        """Return every order, oldest first."""

    @abstractmethod
    def find_with_pagination(self, limit: int, offset: int) -> OrderPage:
        """Return one page of orders plus the total count."""

    @abstractmethod
    def search_with_pagination(self, query: str, limit: int, offset: int) -> OrderPage:
        """Like ``find_with_pagination`` but filtered by *query*.

        Matches id, customer name, tax number and email, case-insensitively.
        A blank query matches everything.
        """

    @abstractmethod
    def save(self, order: Order) -> Order:
        """Persist a new or updated order and return it."""

    @abstractmethod
    def delete(self, order_id: OrderId) -> bool:
        """Delete an order; False if it did not exist."""


def order_matches(order: Order, query: str) -> bool:
    """Shared search predicate for repository implementations."""
    needle = query.strip().lower()
    if not needle:
        return True
    haystack = (
        order.id.value,
        order.customer_info.name,
        order.customer_info.tax_number,
        order.customer_info.email,
    )
    return any(needle in value.lower() for value in haystack)
