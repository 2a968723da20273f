"""Live change notifications for connected clients.

The service keeps one registry of open subscriber channels per process.
It is created once by the composition root and handed to every handler
that changes state, so tests can build isolated instances.

Delivery is best effort: events are written once, never acknowledged or
retried.  Channels are expected not to block on ``write`` (see
``EventStreamChannel`` for a buffered implementation).
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)


class NotificationEvent(Enum):
    CONNECTED = "connected"
    ORDER_CHANGE = "order-change"
    PRODUCT_CHANGE = "product-change"


class ChannelClosedError(Exception):
    """Raised by a channel that is written to after it was closed."""


class NotificationChannel(ABC):
    """An open, server-push-capable connection to one client."""

    @abstractmethod
    def write(self, event: NotificationEvent) -> None:
        """Push *event* to the client without blocking."""

    @abstractmethod
    def on_close(self, callback: Callable[[], None]) -> None:
        """Call *callback* once when the connection goes away.

        If the channel is already closed the callback runs immediately.
        """


@dataclass(frozen=True)
class Subscriber:
    channel: NotificationChannel
    user_id: str


class NotificationService:

    def __init__(self) -> None:
        self._clients: dict[str, Subscriber] = {}

    @property
    def client_count(self) -> int:
        return len(self._clients)

    def add_client(
        self, client_id: str, channel: NotificationChannel, user_id: str
    ) -> None:
        """Register a subscriber and greet it with a ``connected`` event.

        The client is dropped from the registry as soon as its channel
        closes, or right away if the greeting cannot be written.  A
        re-registered ``client_id`` is not affected by the old channel
        closing.
        """
        subscriber = Subscriber(channel=channel, user_id=user_id)
        self._clients[client_id] = subscriber
        logger.debug("Client %s subscribed (user=%r)", client_id, user_id)
        try:
            channel.write(NotificationEvent.CONNECTED)
        except (ChannelClosedError, OSError) as exc:
            logger.warning("Client %s gone before greeting: %s", client_id, exc)
            self._discard(client_id, subscriber)
            return
        channel.on_close(lambda: self._discard(client_id, subscriber))

    def remove_client(self, client_id: str) -> bool:
        removed = self._clients.pop(client_id, None) is not None
        if removed:
            logger.debug("Client %s unsubscribed", client_id)
        return removed

    def notify_order_change(self, exclude_user_id: str | None) -> int:
        """Tell every other user that the order list changed.

        Returns the number of channels the event was written to.
        """
        return self._broadcast(NotificationEvent.ORDER_CHANGE, exclude_user_id)

    def notify_product_change(self, exclude_user_id: str | None) -> int:
        """Tell every other user that the product catalog changed."""
        return self._broadcast(NotificationEvent.PRODUCT_CHANGE, exclude_user_id)

    # --- Internal helpers -----------------------------------------------------

    def _broadcast(self, event: NotificationEvent, exclude_user_id: str | None) -> int:
        # Anonymous changes are never broadcast.
        if not exclude_user_id:
            logger.debug("Skipping %s broadcast: no originating user", event.value)
            return 0

        delivered = 0
        for client_id, subscriber in list(self._clients.items()):
            if not subscriber.user_id or subscriber.user_id == exclude_user_id:
                continue
            try:
                subscriber.channel.write(event)
            except (ChannelClosedError, OSError) as exc:
                logger.warning(
                    "Dropping client %s after failed %s write: %s",
                    client_id, event.value, exc,
                )
                self._discard(client_id, subscriber)
                continue
            delivered += 1

        logger.debug(
            "Broadcast %s to %d client(s), excluding user %r",
            event.value, delivered, exclude_user_id,
        )
        return delivered

    def _discard(self, client_id: str, subscriber: Subscriber) -> None:
        # Only the registration that owns this channel may remove it.
        if self._clients.get(client_id) is subscriber:
            self.remove_client(client_id)
