"""Pydantic models and enums shared across the helpers."""

# Lifecycle models
from .lifecycle import (
    LifecycleEvent,
    LifecycleState,
)

# Configuration models
from .settings import (
    DisplayConfig,
    ExtensionsConfig,
    LoggingConfig,
)

__all__ = [
    # Lifecycle
    "LifecycleState",
    "LifecycleEvent",
    # Configuration
    "DisplayConfig",
    "LoggingConfig",
    "ExtensionsConfig",
]
