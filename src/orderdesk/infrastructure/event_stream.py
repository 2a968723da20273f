"""Server-push event stream channel.

``EventStreamChannel`` is the transport side of ``NotificationService``:
writes land in a bounded per-subscriber buffer and a consumer (an HTTP
streaming response, a test) pulls them out as ``text/event-stream``
frames::

    data: {"type":"order-change"}

When the buffer is full the oldest event is dropped, so a stalled client
never slows down the broadcaster.
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections import deque
from collections.abc import AsyncIterator, Callable

from orderdesk.application.notifications import (
    ChannelClosedError,
    NotificationChannel,
    NotificationEvent,
)

logger = logging.getLogger(__name__)

DEFAULT_BUFFER_SIZE = 100


def format_event(event: NotificationEvent) -> str:
    """Render one event as a single server-sent-events frame."""
    payload = json.dumps({"type": event.value}, separators=(",", ":"))
    return f"data: {payload}\n\n"


class EventStreamChannel(NotificationChannel):

    def __init__(self, max_buffered: int = DEFAULT_BUFFER_SIZE) -> None:
        if max_buffered <= 0:
            raise ValueError("max_buffered must be positive")
        self._buffer: deque[NotificationEvent] = deque(maxlen=max_buffered)
        self._close_callbacks: list[Callable[[], None]] = []
        self._closed = False
        self._ready = asyncio.Event()
        self.dropped = 0

    @property
    def closed(self) -> bool:
        return self._closed

    # --- NotificationChannel interface ----------------------------------------

    def write(self, event: NotificationEvent) -> None:
        if self._closed:
            raise ChannelClosedError("Event stream is closed")
        if len(self._buffer) == self._buffer.maxlen:
            self.dropped += 1
            logger.debug("Event stream buffer full, dropping oldest event")
        self._buffer.append(event)
        self._ready.set()

    def on_close(self, callback: Callable[[], None]) -> None:
        if self._closed:
            callback()
        else:
            self._close_callbacks.append(callback)

    # --- Consumer side --------------------------------------------------------

    def close(self) -> None:
        """Mark the stream closed and run the close hooks exactly once."""
        if self._closed:
            return
        self._closed = True
        self._ready.set()
        callbacks, self._close_callbacks = self._close_callbacks, []
        for callback in callbacks:
            callback()

    def drain(self) -> list[str]:
        """Take every buffered event as a frame, without waiting."""
        frames = [format_event(event) for event in self._buffer]
        self._buffer.clear()
        return frames

    async def frames(self) -> AsyncIterator[str]:
        """Yield frames as events arrive until the channel is closed.

        Buffered events are still delivered after ``close()``.  If the
        consumer stops iterating (client disconnect, task cancellation)
        the channel closes itself.
        """
        try:
            while True:
                while self._buffer:
                    yield format_event(self._buffer.popleft())
                if self._closed:
                    return
                self._ready.clear()
                await self._ready.wait()
        finally:
            self.close()
