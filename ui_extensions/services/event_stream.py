"""Hot broadcast event stream.

One-shot UI events (navigation, snackbars, toasts) pushed from a view
model to whoever is currently listening.
"""

import asyncio
from typing import AsyncIterator, Generic, TypeVar

from ui_extensions.logging_config import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

_CLOSED = object()


class StreamClosedError(RuntimeError):
    """Raised when emitting on a closed stream."""

    pass


class BroadcastStream(Generic[T]):
    """Event stream that delivers each emitted item to every live subscriber.

    Each `async for` over the stream is an independent subscription with its
    own unbounded queue. Nothing is replayed: items emitted while nobody is
    subscribed are dropped. A subscription ends when the loop exits, is
    cancelled, or the stream is closed.

    Args:
        name: Stream name used in logs
    """

    def __init__(self, name: str = "events") -> None:
        self._name = name
        self._subscribers: list[asyncio.Queue] = []
        self._closed = False

    @property
    def name(self) -> str:
        return self._name

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    @property
    def closed(self) -> bool:
        return self._closed

    def emit(self, item: T) -> int:
        """Push an item to all current subscribers.

        Returns:
            Number of subscribers the item was queued for

        Raises:
            StreamClosedError: If the stream was closed
        """
        if self._closed:
            raise StreamClosedError(f"Cannot emit on closed stream {self._name!r}")

        for queue in list(self._subscribers):
            queue.put_nowait(item)

        if not self._subscribers:
            logger.debug("stream_event_dropped", stream=self._name, reason="no_subscribers")
        return len(self._subscribers)

    def close(self) -> None:
        """Close the stream; running subscriptions finish after draining."""
        if self._closed:
            return
        self._closed = True
        for queue in list(self._subscribers):
            queue.put_nowait(_CLOSED)
        logger.debug("stream_closed", stream=self._name, subscribers=len(self._subscribers))

    async def __aiter__(self) -> AsyncIterator[T]:
        if self._closed:
            return

        queue: asyncio.Queue = asyncio.Queue()
        self._subscribers.append(queue)
        logger.debug("stream_subscribed", stream=self._name, subscribers=len(self._subscribers))
        try:
            while True:
                item = await queue.get()
                if item is _CLOSED:
                    return
                yield item
        finally:
            self._subscribers.remove(queue)
            logger.debug("stream_unsubscribed", stream=self._name, subscribers=len(self._subscribers))
