"""JSON-file-backed implementation of OrderRepository.

Schema: one JSON array of order records.  Amounts are stored as decimal
strings and timestamps as ISO-8601, so a round trip is lossless.
"""

from __future__ import annotations

import json
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from orderdesk.domain.exceptions import ConcurrentModificationError
from orderdesk.domain.model.identifiers import OrderId, OrderItemId, ProductId
from orderdesk.domain.model.order import Order, OrderItem, OrderStatus
from orderdesk.domain.model.value_objects import DEFAULT_CURRENCY, CustomerInfo, Money
from orderdesk.domain.repository.order_repository import (
    OrderPage,
    OrderRepository,
    order_matches,
)


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- OrderRepository interface --------------------------------------------

    def find_by_id(self, order_id: OrderId) -> Order | None:
        for raw in self._load_raw():
            if raw["id"] == order_id.value:
                return self._to_domain(raw)
        return None

    def find_all(self) -> list[Order]:
        return [self._to_domain(raw) for raw in self._load_raw()]

    def find_with_pagination(self, limit: int, offset: int) -> OrderPage:
        records = self._load_raw()
        page = [self._to_domain(raw) for raw in records[offset:offset + limit]]
        return OrderPage(orders=page, total=len(records))

    def search_with_pagination(self, query: str, limit: int, offset: int) -> OrderPage:
        matching = [o for o in self.find_all() if order_matches(o, query)]
        return OrderPage(orders=matching[offset:offset + limit], total=len(matching))

    def save(self, order: Order) -> Order:
        orders = self._load_raw()
        record = self._to_raw(order)
        record["version"] = order.version + 1

        # Upsert: replace if exists, otherwise append
        for i, raw in enumerate(orders):
            if raw["id"] == order.id.value:
                if raw.get("version", 0) != order.version:
                    raise ConcurrentModificationError(
                        f"Order {order.id} was modified concurrently "
                        f"(stored version {raw.get('version', 0)}, "
                        f"saving version {order.version})"
                    )
                orders[i] = record
                break
        else:
            orders.append(record)

        self._persist_raw(orders)
        order.version = record["version"]
        return order

    def delete(self, order_id: OrderId) -> bool:
        orders = self._load_raw()
        remaining = [raw for raw in orders if raw["id"] != order_id.value]
        if len(remaining) == len(orders):
            return False
        self._persist_raw(remaining)
        return True

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id.value,
            "customer": {
                "name": order.customer_info.name,
                "tax_number": order.customer_info.tax_number,
                "email": order.customer_info.email,
            },
            "currency": order.currency,
            "status": order.status.value,
            "created_at": order.created_at.isoformat(),
            "updated_at": order.updated_at.isoformat(),
            "version": order.version,
            "items": [
                {
                    "id": item.id.value,
                    "product_id": item.product_id.value,
                    "quantity": item.quantity,
                    "unit_price": str(item.price.amount),
                    "currency": item.price.currency,
                }
                for item in order.items
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        currency = raw.get("currency", DEFAULT_CURRENCY)
        items = [
            OrderItem(
                id=OrderItemId(i["id"]),
                product_id=ProductId(i["product_id"]),
                quantity=i["quantity"],
                price=Money(Decimal(i["unit_price"]), i.get("currency", currency)),
            )
            for i in raw["items"]
        ]
        customer = raw["customer"]
        return Order(
            id=OrderId(raw["id"]),
            customer_info=CustomerInfo(
                name=customer["name"],
                tax_number=customer["tax_number"],
                email=customer["email"],
            ),
            currency=currency,
            status=OrderStatus(raw["status"]),
            items=items,
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
            version=raw.get("version", 0),
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, orders: list[dict]) -> None:
        self._file_path.write_text(
            json.dumps(orders, indent=2) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
