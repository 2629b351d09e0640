"""Simple state change logging for lifecycles and collectors.

Tracks state transitions with before/after values for debugging.
"""

from typing import Any, Optional

from ui_extensions.logging_config import get_logger

logger = get_logger(__name__)


def _short_name(state: Any) -> str:
    return getattr(state, "name", str(state))


def log_lifecycle_state_change(
    owner: str,
    old_state: Any,
    new_state: Any,
    event: Optional[Any] = None,
    **extra_context: Any,
) -> None:
    """Log lifecycle state change.

    Args:
        owner: Name of the component owning the lifecycle
        old_state: Previous state value
        new_state: New state value
        event: Lifecycle event that caused the change, if any
        **extra_context: Additional context (observer count, etc.)
    """
    logger.info(
        "lifecycle_state_changed",
        owner=owner,
        old_state=_short_name(old_state),
        new_state=_short_name(new_state),
        event=_short_name(event) if event is not None else None,
        **extra_context,
    )


def log_collector_state_change(
    collector: str,
    old_state: str,
    new_state: str,
    reason: Optional[str] = None,
    **extra_context: Any,
) -> None:
    """Log collector subscription change.

    Args:
        collector: Collector name
        old_state: Previous subscription state ("idle", "active", ...)
        new_state: New subscription state
        reason: Reason for the change (lifecycle, restart key, dispose)
        **extra_context: Additional context (restart count, min state, etc.)
    """
    logger.info(
        "collector_state_changed",
        collector=collector,
        old_state=old_state,
        new_state=new_state,
        reason=reason,
        **extra_context,
    )
