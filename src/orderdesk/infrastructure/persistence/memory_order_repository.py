"""In-memory implementation of OrderRepository.

Orders live in a dict for the lifetime of the process; insertion order
is the listing order.
"""

from __future__ import annotations

from orderdesk.domain.exceptions import ConcurrentModificationError
from orderdesk.domain.model.identifiers import OrderId
from orderdesk.domain.model.order import Order
from orderdesk.domain.repository.order_repository import (
    OrderPage,
    OrderRepository,
    order_matches,
)


class InMemoryOrderRepository(OrderRepository):

    def __init__(self, orders: list[Order] | None = None) -> None:
        self._store: dict[OrderId, Order] = {}
        for order in orders or []:
            self._store[order.id] = order

    # --- OrderRepository interface --------------------------------------------

    def find_by_id(self, order_id: OrderId) -> Order | None:
        return self._store.get(order_id)

    def find_all(self) -> list[Order]:
        return list(self._store.values())

    def find_with_pagination(self, limit: int, offset: int) -> OrderPage:
        orders = self.find_all()
        return OrderPage(orders=orders[offset:offset + limit], total=len(orders))

    def search_with_pagination(self, query: str, limit: int, offset: int) -> OrderPage:
        matching = [o for o in self._store.values() if order_matches(o, query)]
        return OrderPage(orders=matching[offset:offset + limit], total=len(matching))

    def save(self, order: Order) -> Order:
        stored = self._store.get(order.id)
        if stored is not None and stored is not order and stored.version != order.version:
            raise ConcurrentModificationError(
                f"Order {order.id} was modified concurrently "
                f"(stored version {stored.version}, saving version {order.version})"
            )
        order.version += 1
        self._store[order.id] = order
        return order

    def delete(self, order_id: OrderId) -> bool:
        return self._store.pop(order_id, None) is not None
