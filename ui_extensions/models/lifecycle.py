"""Lifecycle state and event models.

States are ordered so that "at least STARTED" is a plain comparison.
"""

from enum import Enum, IntEnum
from typing import Optional


class LifecycleState(IntEnum):
    """Coarse-grained phase of a UI component's existence."""

    DESTROYED = 0  # Component is gone, no further events
    INITIALIZED = 1  # Constructed, not yet created
    CREATED = 2  # Created, or stopped after being started
    STARTED = 3  # Visible, or paused after being resumed
    RESUMED = 4  # In the foreground and interactive

    def is_at_least(self, state: "LifecycleState") -> bool:
        """Check whether this state is the same as or after the given one."""
        return self >= state


class LifecycleEvent(Enum):
    """Transitions dispatched to a lifecycle."""

    ON_CREATE = "on_create"
    ON_START = "on_start"
    ON_RESUME = "on_resume"
    ON_PAUSE = "on_pause"
    ON_STOP = "on_stop"
    ON_DESTROY = "on_destroy"

    @property
    def target_state(self) -> LifecycleState:
        """State the lifecycle is in after this event."""
        return _TARGET_STATES[self]

    @classmethod
    def upfrom(cls, state: LifecycleState) -> Optional["LifecycleEvent"]:
        """Event that moves a lifecycle up from the given state, if any."""
        return _UP_EVENTS.get(state)

    @classmethod
    def downfrom(cls, state: LifecycleState) -> Optional["LifecycleEvent"]:
        """Event that moves a lifecycle down from the given state, if any."""
        return _DOWN_EVENTS.get(state)


_TARGET_STATES = {
    LifecycleEvent.ON_CREATE: LifecycleState.CREATED,
    LifecycleEvent.ON_START: LifecycleState.STARTED,
    LifecycleEvent.ON_RESUME: LifecycleState.RESUMED,
    LifecycleEvent.ON_PAUSE: LifecycleState.STARTED,
    LifecycleEvent.ON_STOP: LifecycleState.CREATED,
    LifecycleEvent.ON_DESTROY: LifecycleState.DESTROYED,
}

_UP_EVENTS = {
    LifecycleState.INITIALIZED: LifecycleEvent.ON_CREATE,
    LifecycleState.CREATED: LifecycleEvent.ON_START,
    LifecycleState.STARTED: LifecycleEvent.ON_RESUME,
}

_DOWN_EVENTS = {
    LifecycleState.CREATED: LifecycleEvent.ON_DESTROY,
    LifecycleState.STARTED: LifecycleEvent.ON_STOP,
    LifecycleState.RESUMED: LifecycleEvent.ON_PAUSE,
}
