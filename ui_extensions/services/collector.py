"""Lifecycle-scoped collection of event streams.

Responsibilities:
- Collect an async stream only while a lifecycle is at least a minimum state
- Restart collection when the stream or any restart key changes
- Always deliver to the most recent callback without restarting
- Cancel collection when the owning component goes away

Typical use from a screen's render function:

    effect = CollectorEffect(lifecycle)            # once per component
    effect.update(view_model.events, on_event)     # on every render
    ...
    effect.dispose()                               # component removed
"""

import asyncio
import inspect
from typing import Any, AsyncIterable, Awaitable, Callable, Generic, Optional, TypeVar, Union

from ui_extensions.logging_config import bind_context, get_logger
from ui_extensions.models.lifecycle import LifecycleState
from ui_extensions.services.lifecycle import Lifecycle, launch_immediately, repeat_on_lifecycle
from ui_extensions.state_logger import log_collector_state_change

logger = get_logger(__name__)

T = TypeVar("T")

EventCallback = Callable[[T], Union[Awaitable[None], None]]

DEFAULT_MIN_ACTIVE_STATE = LifecycleState.STARTED


async def _invoke(callback: EventCallback, item: Any) -> None:
    result = callback(item)
    if inspect.isawaitable(result):
        await result


async def collect_with_lifecycle(
        stream: AsyncIterable[T],
        lifecycle: Lifecycle,
        callback: EventCallback,
        min_active_state: LifecycleState = DEFAULT_MIN_ACTIVE_STATE,
) -> None:
    """Collect `stream` while `lifecycle` is at least `min_active_state`.

    Each time the lifecycle comes back up, a fresh iterator is taken from
    `stream`, so it should be re-iterable (a BroadcastStream, or any object
    whose __aiter__ returns a new iterator). The callback is called once per
    item, in order; it may be a plain function or a coroutine function.

    Returns once the lifecycle is DESTROYED.

    Args:
        stream: Async iterable of events
        lifecycle: Lifecycle gating the collection
        callback: Called with each event
        min_active_state: Lowest state in which events are delivered
    """

    async def collect() -> None:
        iterator = stream.__aiter__()
        try:
            async for item in iterator:
                await _invoke(callback, item)
        finally:
            aclose = getattr(iterator, "aclose", None)
            if aclose is not None:
                await aclose()

    await repeat_on_lifecycle(lifecycle, min_active_state, collect)


class CollectorEffect(Generic[T]):
    """Stream collection bound to a component's render lifetime.

    Call `update()` on every render. The running subscription is kept while
    the stream (compared by identity) and the restart keys (compared by
    equality) stay the same; otherwise it is cancelled and started again.
    The callback passed to the latest `update()` is the one that receives
    events.

    Args:
        lifecycle: Lifecycle of the owning component
        min_active_state: Lowest state in which events are delivered
        name: Name used in logs
    """

    def __init__(
            self,
            lifecycle: Lifecycle,
            min_active_state: LifecycleState = DEFAULT_MIN_ACTIVE_STATE,
            name: str = "collector",
    ) -> None:
        if min_active_state == LifecycleState.INITIALIZED:
            raise ValueError("CollectorEffect cannot start work with the INITIALIZED lifecycle state")

        self._lifecycle = lifecycle
        self._min_active_state = min_active_state
        self._name = name
        self._task: Optional[asyncio.Task] = None
        self._stream: Optional[AsyncIterable[T]] = None
        self._keys: tuple = ()
        self._callback: Optional[EventCallback] = None
        self._restart_count = 0
        self._disposed = False

    @property
    def is_active(self) -> bool:
        """True while a subscription task is running."""
        return self._task is not None and not self._task.done()

    @property
    def restart_count(self) -> int:
        """Number of times a running subscription was replaced."""
        return self._restart_count

    @property
    def keys(self) -> tuple:
        return self._keys

    @property
    def disposed(self) -> bool:
        return self._disposed

    def update(self, stream: AsyncIterable[T], callback: EventCallback, *keys: Any) -> bool:
        """Bind the effect to a stream, callback and restart keys.

        Must be called from a running event loop.

        Args:
            stream: Async iterable of events
            callback: Called with each event
            *keys: Restart keys; a change cancels and resubscribes

        Returns:
            True if a new subscription was started

        Raises:
            RuntimeError: If the effect was disposed
        """
        if self._disposed:
            raise RuntimeError(f"Collector {self._name!r} was disposed")

        self._callback = callback

        if self._task is not None and stream is self._stream and keys == self._keys:
            return False

        if self._task is None:
            reason = "initial"
        elif stream is not self._stream:
            reason = "stream_changed"
        else:
            reason = "keys_changed"

        if reason != "initial":
            self._restart_count += 1

        # Subscribe the replacement before cancelling the old subscription
        previous = self._task
        self._stream = stream
        self._keys = keys
        self._task = launch_immediately(self._collect(stream))
        self._task.add_done_callback(self._on_task_done)
        was_active = previous is not None and not previous.done()
        if was_active:
            previous.cancel()

        log_collector_state_change(
            collector=self._name,
            old_state="active" if was_active else "idle",
            new_state="active",
            reason=reason,
            restart_count=self._restart_count,
            min_active_state=self._min_active_state.name,
        )
        return True

    async def _collect(self, stream: AsyncIterable[T]) -> None:
        # Bound in this task's own context copy; collection tasks inherit it
        bind_context(collector=self._name)
        await collect_with_lifecycle(stream, self._lifecycle, self._deliver, self._min_active_state)

    async def _deliver(self, item: T) -> None:
        await _invoke(self._callback, item)

    def _on_task_done(self, task: asyncio.Task) -> None:
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error(
                "collector_failed",
                collector=self._name,
                error=str(error),
                error_type=type(error).__name__,
                exc_info=error,
            )
        elif task is self._task:
            log_collector_state_change(
                collector=self._name,
                old_state="active",
                new_state="finished",
                reason="lifecycle_destroyed",
            )

    def _cancel(self) -> bool:
        if self._task is None or self._task.done():
            return False
        self._task.cancel()
        return True

    def dispose(self) -> None:
        """Cancel the subscription; the component left the screen."""
        if self._disposed:
            return
        self._disposed = True
        was_active = self._cancel()
        log_collector_state_change(
            collector=self._name,
            old_state="active" if was_active else "idle",
            new_state="disposed",
            reason="dispose",
        )

    async def aclose(self) -> None:
        """Dispose and wait until the subscription task has stopped."""
        self.dispose()
        if self._task is not None and not self._task.done():
            await asyncio.wait([self._task])

    async def join(self) -> None:
        """Wait for the current subscription to finish, re-raising its error."""
        if self._task is not None:
            await self._task
