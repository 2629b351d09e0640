"""Stateful collaborators: density source, lifecycle, event streams, collectors."""

from ui_extensions.services.collector import CollectorEffect, collect_with_lifecycle
from ui_extensions.services.density import (
    DensityProvider,
    StaticDensityProvider,
    get_density_provider,
    reset_density_provider,
    set_density_provider,
)
from ui_extensions.services.event_stream import BroadcastStream, StreamClosedError
from ui_extensions.services.lifecycle import (
    Lifecycle,
    LifecycleError,
    launch_immediately,
    repeat_on_lifecycle,
)

__all__ = [
    "BroadcastStream",
    "CollectorEffect",
    "DensityProvider",
    "Lifecycle",
    "LifecycleError",
    "StaticDensityProvider",
    "StreamClosedError",
    "collect_with_lifecycle",
    "get_density_provider",
    "launch_immediately",
    "repeat_on_lifecycle",
    "reset_density_provider",
    "set_density_provider",
]
