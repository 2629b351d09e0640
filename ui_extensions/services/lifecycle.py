"""Observable lifecycle and lifecycle-gated work.

Responsibilities:
- Track a component's lifecycle state and notify observers on change
- Reject transitions a real component can never make
- Run a coroutine only while the lifecycle is at or above a minimum state,
  relaunching it each time the state comes back up
"""

import asyncio
import contextvars
from typing import Any, Awaitable, Callable, Coroutine, Optional

from ui_extensions.logging_config import get_logger
from ui_extensions.models.lifecycle import LifecycleEvent, LifecycleState
from ui_extensions.state_logger import log_lifecycle_state_change

logger = get_logger(__name__)

LifecycleObserver = Callable[[LifecycleState], None]


class LifecycleError(RuntimeError):
    """Raised on an illegal lifecycle transition."""

    pass


class Lifecycle:
    """Lifecycle of a single UI component.

    Observers are called synchronously, in registration order, every time
    the state changes. Every observer is called even if an earlier one
    raises; the first error is re-raised afterwards. Not thread-safe: drive
    it from the event loop thread.

    Args:
        name: Component name used in logs
        initial_state: State to start in (default INITIALIZED)
    """

    def __init__(
            self,
            name: str = "component",
            initial_state: LifecycleState = LifecycleState.INITIALIZED,
    ) -> None:
        self._name = name
        self._state = initial_state
        self._observers: list[LifecycleObserver] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def current_state(self) -> LifecycleState:
        return self._state

    @property
    def observer_count(self) -> int:
        return len(self._observers)

    def add_observer(self, observer: LifecycleObserver) -> Callable[[], None]:
        """Register an observer.

        Returns:
            Callable that removes the observer again (safe to call twice)
        """
        self._observers.append(observer)

        def remove() -> None:
            self.remove_observer(observer)

        return remove

    def remove_observer(self, observer: LifecycleObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def set_current_state(self, state: LifecycleState, event: Optional[LifecycleEvent] = None) -> None:
        """Move the lifecycle to a new state and notify observers.

        Args:
            state: Target state
            event: Event that caused the move, for logging

        Raises:
            LifecycleError: If the lifecycle is destroyed, or the move is
                back to INITIALIZED, or straight from INITIALIZED to DESTROYED
        """
        old_state = self._state
        if state == old_state:
            return

        if old_state == LifecycleState.DESTROYED:
            raise LifecycleError(
                f"{self._name}: no event up from DESTROYED, cannot move to {state.name}"
            )
        if state == LifecycleState.INITIALIZED:
            raise LifecycleError(
                f"{self._name}: cannot move back to INITIALIZED from {old_state.name}"
            )
        if old_state == LifecycleState.INITIALIZED and state == LifecycleState.DESTROYED:
            raise LifecycleError(
                f"{self._name}: state must be at least CREATED to move to DESTROYED"
            )

        self._state = state
        log_lifecycle_state_change(
            owner=self._name,
            old_state=old_state,
            new_state=state,
            event=event,
            observers=len(self._observers),
        )

        errors = []
        for observer in list(self._observers):
            try:
                observer(state)
            except Exception as e:
                logger.error(
                    "lifecycle_observer_failed",
                    owner=self._name,
                    new_state=state.name,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                errors.append(e)

        if errors:
            raise errors[0]

    def handle_lifecycle_event(self, event: LifecycleEvent) -> None:
        """Apply a lifecycle event (ON_START, ON_STOP, ...)."""
        self.set_current_state(event.target_state, event=event)

    def __repr__(self) -> str:
        return f"Lifecycle(name={self._name!r}, state={self._state.name})"


def launch_immediately(
        coro: Coroutine[Any, Any, Any],
        context: Optional[contextvars.Context] = None,
) -> asyncio.Task:
    """Start `coro` as a task that runs up to its first suspension right away.

    Work such as subscribing to a stream happens before this returns, not on
    a later loop iteration. Must be called with the event loop running.

    Args:
        coro: Coroutine to run
        context: Context to run it in; a copy of the current one when omitted
    """
    return asyncio.Task(coro, loop=asyncio.get_running_loop(), context=context, eager_start=True)


async def repeat_on_lifecycle(
        lifecycle: Lifecycle,
        min_active_state: LifecycleState,
        block: Callable[[], Awaitable[None]],
) -> None:
    """Run `block` while the lifecycle is at least `min_active_state`.

    A new task running `block()` is launched every time the state reaches
    the minimum, and cancelled when it falls below. The task runs up to its
    first suspension inside the state change, so a subscription made there
    sees everything emitted after the lifecycle moved up. Returns once the
    lifecycle is DESTROYED (at once if it already is). Cancelling the
    caller cancels the running block.

    Args:
        lifecycle: Lifecycle to observe
        min_active_state: Lowest state in which `block` may run
        block: Coroutine function to run

    Raises:
        ValueError: If min_active_state is INITIALIZED
        Exception: Whatever `block` raises
    """
    if min_active_state == LifecycleState.INITIALIZED:
        raise ValueError("repeat_on_lifecycle cannot start work with the INITIALIZED lifecycle state")

    if lifecycle.current_state == LifecycleState.DESTROYED:
        return

    loop = asyncio.get_running_loop()
    # Blocks run in the caller's context, whoever moves the lifecycle
    context = contextvars.copy_context()
    finished: asyncio.Future = loop.create_future()
    job: Optional[asyncio.Task] = None
    # Launched blocks that have not finished yet, including cancelled ones
    pending: set[asyncio.Task] = set()

    def on_job_done(task: asyncio.Task) -> None:
        pending.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None and not finished.done():
            finished.set_exception(error)

    def on_state_changed(state: LifecycleState) -> None:
        nonlocal job
        if state >= min_active_state:
            if job is None:
                job = launch_immediately(block(), context=context.copy())
                pending.add(job)
                job.add_done_callback(on_job_done)
                logger.debug("lifecycle_block_launched", owner=lifecycle.name, state=state.name)
        elif job is not None:
            job.cancel()
            job = None
            logger.debug("lifecycle_block_cancelled", owner=lifecycle.name, state=state.name)

        if state == LifecycleState.DESTROYED and not finished.done():
            finished.set_result(None)

    remove_observer = lifecycle.add_observer(on_state_changed)
    try:
        on_state_changed(lifecycle.current_state)
        await finished
    finally:
        remove_observer()
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.wait(set(pending))
