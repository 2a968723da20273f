"""Order aggregate: status lifecycle, line items and the running total.

The Order is an aggregate root that owns its line items.
All business invariants are enforced here.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum

from orderdesk.domain.exceptions import (
    AlreadyCanceled,
    EntityNotFoundError,
    IncompatibleCurrency,
    InvalidQuantity,
    InvalidTransition,
)
from orderdesk.domain.model.identifiers import OrderId, OrderItemId, ProductId
from orderdesk.domain.model.value_objects import DEFAULT_CURRENCY, CustomerInfo, Money
from orderdesk.domain.service.id_generator import IdGenerator


def _now() -> datetime:
    return datetime.now(timezone.utc)


class OrderStatus(Enum):
    CREATED = "Created"
    CONFIRMED = "Confirmed"
    CANCELED = "Canceled"
    PAYMENT_OF_ADVANCE = "Payment of Advance"
    PRODUCTION_AND_PACKAGING = "Production and Packaging"
    DELIVERY = "Delivery"
    PROJECT_BILLING = "Project Billing"

    @property
    def is_terminal(self) -> bool:
        return self in (OrderStatus.CANCELED, OrderStatus.PROJECT_BILLING)


class OrderAction(Enum):
    """Lifecycle operations; the value is the ``Order`` method name."""

    CONFIRM = "confirm"
    MARK_PAYMENT_RECEIVED = "mark_payment_received"
    START_PRODUCTION = "start_production"
    START_DELIVERY = "start_delivery"
    COMPLETE_BILLING = "complete_billing"
    CANCEL = "cancel"


# action -> (states it may be applied in, resulting state)
_TRANSITIONS: dict[OrderAction, tuple[frozenset[OrderStatus], OrderStatus]] = {
    OrderAction.CONFIRM: (
        frozenset({OrderStatus.CREATED}),
        OrderStatus.CONFIRMED,
    ),
    OrderAction.MARK_PAYMENT_RECEIVED: (
        frozenset({OrderStatus.CONFIRMED}),
        OrderStatus.PAYMENT_OF_ADVANCE,
    ),
    OrderAction.START_PRODUCTION: (
        frozenset({OrderStatus.PAYMENT_OF_ADVANCE}),
        OrderStatus.PRODUCTION_AND_PACKAGING,
    ),
    OrderAction.START_DELIVERY: (
        frozenset({OrderStatus.PRODUCTION_AND_PACKAGING}),
        OrderStatus.DELIVERY,
    ),
    OrderAction.COMPLETE_BILLING: (
        frozenset({OrderStatus.DELIVERY}),
        OrderStatus.PROJECT_BILLING,
    ),
    OrderAction.CANCEL: (
        frozenset({
            OrderStatus.CREATED,
            OrderStatus.CONFIRMED,
            OrderStatus.PAYMENT_OF_ADVANCE,
            OrderStatus.PRODUCTION_AND_PACKAGING,
        }),
        OrderStatus.CANCELED,
    ),
}


@dataclass(frozen=True)
class OrderItem:
    """One line of an order: which product, how many, at what unit price.

    Items are immutable.  The owning ``Order`` swaps in a changed copy
    (``update_item_quantity`` / ``update_item_price``) so its total is
    recalculated on every change.
    """

    id: OrderItemId
    product_id: ProductId
    quantity: int
    price: Money

    def __post_init__(self) -> None:
        _validate_quantity(self.quantity)

    @property
    def total(self) -> Money:
        return self.price.multiply(self.quantity)


def _validate_quantity(quantity: int) -> None:
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise InvalidQuantity(
            f"Quantity must be an integer, got {type(quantity).__name__}"
        )
    if quantity <= 0:
        raise InvalidQuantity("Quantity must be a positive integer")


@dataclass
class Order:
    """Aggregate root for customer orders.

    Use ``Order.create()`` for new orders.  The ``__init__`` accepts every
    field so repositories can reconstitute a persisted order as it was.

    ``total_amount`` is derived from ``items`` and recalculated on every
    item mutation; ``version`` belongs to the repository and is used to
    detect lost updates on save.
    """

    id: OrderId
    customer_info: CustomerInfo
    currency: str = DEFAULT_CURRENCY
    status: OrderStatus = OrderStatus.CREATED
    items: list[OrderItem] = field(default_factory=list)
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)
    version: int = 0
    total_amount: Money = field(init=False)

    def __post_init__(self) -> None:
        self.total_amount = Money.zero(self.currency)
        self.recalculate_total()

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        customer_info: CustomerInfo,
        id_generator: IdGenerator,
        currency: str = DEFAULT_CURRENCY,
    ) -> Order:
        now = _now()
        return Order(
            id=OrderId(id_generator.id()),
            customer_info=customer_info,
            currency=currency,
            created_at=now,
            updated_at=now,
        )

    # --- State transitions ----------------------------------------------------

    def confirm(self) -> None:
        """Created -> Confirmed."""
        self._transition(OrderAction.CONFIRM)

    def mark_payment_received(self) -> None:
        """Confirmed -> Payment of Advance."""
        self._transition(OrderAction.MARK_PAYMENT_RECEIVED)

    def start_production(self) -> None:
        """Payment of Advance -> Production and Packaging."""
        self._transition(OrderAction.START_PRODUCTION)

    def start_delivery(self) -> None:
        """Production and Packaging -> Delivery."""
        self._transition(OrderAction.START_DELIVERY)

    def complete_billing(self) -> None:
        """Delivery -> Project Billing."""
        self._transition(OrderAction.COMPLETE_BILLING)

    def cancel(self) -> None:
        """Any state before Delivery -> Canceled."""
        if self.status == OrderStatus.CANCELED:
            raise AlreadyCanceled(f"Order {self.id} is already canceled")
        self._transition(OrderAction.CANCEL)

    def apply(self, action: OrderAction) -> None:
        """Run the lifecycle method named by *action*."""
        getattr(self, action.value)()

    def available_transitions(self) -> list[OrderAction]:
        """Actions that would succeed from the current status."""
        return [
            action
            for action, (allowed, _) in _TRANSITIONS.items()
            if self.status in allowed
        ]

    # --- Customer -------------------------------------------------------------

    def update_customer_info(self, customer_info: CustomerInfo) -> None:
        self._assert_not_terminal("update")
        self.customer_info = customer_info
        self._touch()

    # --- Line items -----------------------------------------------------------

    def add_item(
        self,
        product_id: ProductId,
        quantity: int,
        price: Money,
        id_generator: IdGenerator,
    ) -> OrderItem:
        """Append a new line item and recalculate the total.

        Orders are single-currency: a price in any other currency than
        the order's is rejected before anything is changed.
        """
        self._assert_not_terminal("add items to")
        self._assert_order_currency(price)
        item = OrderItem(
            id=OrderItemId(id_generator.id()),
            product_id=product_id,
            quantity=quantity,
            price=price,
        )
        self._replace_items([*self.items, item])
        return item

    def remove_item(self, order_item_id: OrderItemId) -> bool:
        """Remove the item with *order_item_id*; False if there is none."""
        index = self._index_of(order_item_id)
        if index is None:
            return False
        self._assert_not_terminal("remove items from")
        self._replace_items(self.items[:index] + self.items[index + 1:])
        return True

    def update_item(
        self,
        order_item_id: OrderItemId,
        quantity: int | None = None,
        price: Money | None = None,
    ) -> OrderItem:
        """Swap in a copy of one item with a new quantity and/or price.

        Both changes are validated before either is applied.
        """
        self._assert_not_terminal("change items of")
        if price is not None:
            self._assert_order_currency(price)
        index = self._require_index(order_item_id)
        changes: dict[str, object] = {}
        if quantity is not None:
            changes["quantity"] = quantity
        if price is not None:
            changes["price"] = price
        item = replace(self.items[index], **changes)
        self._replace_items(self.items[:index] + [item] + self.items[index + 1:])
        return item

    def update_item_quantity(self, order_item_id: OrderItemId, quantity: int) -> OrderItem:
        return self.update_item(order_item_id, quantity=quantity)

    def update_item_price(self, order_item_id: OrderItemId, price: Money) -> OrderItem:
        return self.update_item(order_item_id, price=price)

    def find_item(self, order_item_id: OrderItemId) -> OrderItem | None:
        index = self._index_of(order_item_id)
        return None if index is None else self.items[index]

    def recalculate_total(self) -> Money:
        self.total_amount = self._sum(self.items)
        return self.total_amount

    # --- Internal helpers -----------------------------------------------------

    def _replace_items(self, items: list[OrderItem]) -> None:
        # Total first: a failure leaves items and total untouched.
        total = self._sum(items)
        self.items = items
        self.total_amount = total
        self._touch()

    def _sum(self, items: list[OrderItem]) -> Money:
        total = Money.zero(self.currency)
        for item in items:
            total = total.add(item.total)
        return total

    def _index_of(self, order_item_id: OrderItemId) -> int | None:
        for index, item in enumerate(self.items):
            if item.id == order_item_id:
                return index
        return None

    def _require_index(self, order_item_id: OrderItemId) -> int:
        index = self._index_of(order_item_id)
        if index is None:
            raise EntityNotFoundError(
                f"Item {order_item_id} not found in order {self.id}"
            )
        return index

    def _assert_order_currency(self, price: Money) -> None:
        if price.currency != self.currency:
            raise IncompatibleCurrency(
                f"Order {self.id} is in {self.currency}, cannot use an item price in "
                f"{price.currency}"
            )

    def _transition(self, action: OrderAction) -> None:
        allowed, target = _TRANSITIONS[action]
        if self.status not in allowed:
            expected = ", ".join(sorted(s.value for s in allowed))
            raise InvalidTransition(
                f"Cannot {action.value.replace('_', ' ')} order {self.id}: "
                f"current status is {self.status.value}, expected one of: {expected}"
            )
        self.status = target
        self._touch()

    def _assert_not_terminal(self, verb: str) -> None:
        if self.status.is_terminal:
            raise InvalidTransition(
                f"Cannot {verb} order {self.id} in {self.status.value} status"
            )

    def _touch(self) -> None:
        self.updated_at = _now()
