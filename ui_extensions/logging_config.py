"""Structured logging configuration using structlog.

Provides JSON or console logging with:
- Context bound per component (screen, collector) that follows the
  component's collection tasks
- Lifecycle states and events rendered by name, not by their int value
- Timestamp and log level
"""

import logging
import os
import sys
from contextlib import contextmanager
from enum import Enum
from typing import Any, Iterator

import structlog
from structlog.typing import EventDict, Processor

APP_NAME = "ui-extensions"


def add_app_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Add library-wide context to log events."""
    event_dict["app"] = APP_NAME
    return event_dict


def render_enum_names(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Log enum members (LifecycleState.STARTED, LifecycleEvent.ON_STOP) by name."""
    for key, value in event_dict.items():
        if isinstance(value, Enum):
            event_dict[key] = value.name
    return event_dict


def drop_debug_unless_enabled(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Drop DEBUG logs if debug mode is off."""
    if method_name == "debug" and not is_debug_mode():
        raise structlog.DropEvent
    return event_dict


def is_debug_mode() -> bool:
    """Check if debug mode is enabled via LOG_LEVEL environment variable."""
    return os.getenv("LOG_LEVEL", "INFO").upper() == "DEBUG"


def configure_logging(
    log_level: str = "INFO",
    json_format: bool = True,
    include_timestamp: bool = True,
) -> None:
    """Configure structlog for the library and its host application.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: If True, output JSON; if False, use colored console output
        include_timestamp: Include ISO8601 timestamps in logs
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=numeric_level,
    )

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        add_app_context,
        render_enum_names,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if numeric_level > logging.DEBUG:
        processors.append(drop_debug_unless_enabled)

    if json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=True,
                exception_formatter=structlog.dev.plain_traceback,
            )
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging_from_config(config: Any = None) -> None:
    """Configure logging from the `logging` section of the library config.

    Args:
        config: Config instance; the global one is used when omitted
    """
    if config is None:
        from ui_extensions.config import get_config

        config = get_config()

    settings = config.logging_settings
    configure_logging(
        log_level=settings.level,
        json_format=settings.format == "json",
        include_timestamp=settings.include_timestamp,
    )


def get_logger(name: str = __name__) -> structlog.stdlib.BoundLogger:
    """Get a configured logger instance.

    Args:
        name: Logger name (typically __name__ from calling module)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Bind context variables that will be included in all subsequent logs.

    Example:
        bind_context(screen="player", lifecycle="player-screen")
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def unbind_context(*keys: str) -> None:
    """Unbind context variables.

    Example:
        unbind_context("screen", "lifecycle")
    """
    structlog.contextvars.unbind_contextvars(*keys)


def clear_context() -> None:
    """Clear all context variables."""
    structlog.contextvars.clear_contextvars()


@contextmanager
def component_context(**kwargs: Any) -> Iterator[None]:
    """Bind context for the duration of a block.

    Tasks created inside the block (collection tasks, lifecycle-gated
    blocks) copy the context and keep it after the block exits.

    Example:
        with component_context(screen="player"):
            effect.update(view_model.events, on_event)
    """
    with structlog.contextvars.bound_contextvars(**kwargs):
        yield
