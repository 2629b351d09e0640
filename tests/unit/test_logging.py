"""Tests for structured logging functionality.

Tests logging configuration, context binding, and the processors.
"""

import os
from unittest.mock import MagicMock

import pytest
import structlog

from ui_extensions.logging_config import (
    APP_NAME,
    add_app_context,
    bind_context,
    clear_context,
    component_context,
    configure_logging,
    configure_logging_from_config,
    drop_debug_unless_enabled,
    get_logger,
    render_enum_names,
    unbind_context,
)
from ui_extensions.models.lifecycle import LifecycleEvent, LifecycleState


@pytest.fixture(scope="module")
def setup_logging():
    """Configure logging for all tests in this module."""
    log_level = os.getenv("LOG_LEVEL", "INFO")
    log_format = os.getenv("LOG_FORMAT", "console")
    json_mode = log_format.lower() == "json"

    configure_logging(log_level=log_level, json_format=json_mode)
    yield


@pytest.fixture(autouse=True)
def cleanup_context():
    """Ensure context is cleared before and after each test."""
    clear_context()
    yield
    clear_context()


class TestProcessors:
    """Test the custom structlog processors."""

    def test_add_app_context(self):
        event_dict = add_app_context(None, "info", {"event": "x"})
        assert event_dict["app"] == APP_NAME

    def test_render_enum_names(self):
        """Test that lifecycle enums are logged by name, not as ints."""
        event_dict = render_enum_names(
            None,
            "info",
            {"event": "x", "state": LifecycleState.STARTED, "cause": LifecycleEvent.ON_START, "count": 2},
        )
        assert event_dict == {"event": "x", "state": "STARTED", "cause": "ON_START", "count": 2}

    def test_drop_debug_when_not_in_debug_mode(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "INFO")
        with pytest.raises(structlog.DropEvent):
            drop_debug_unless_enabled(None, "debug", {"event": "x"})

    def test_keep_debug_in_debug_mode(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        event_dict = drop_debug_unless_enabled(None, "debug", {"event": "x"})
        assert event_dict == {"event": "x"}

    def test_keep_other_levels(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "INFO")
        assert drop_debug_unless_enabled(None, "info", {"event": "x"}) == {"event": "x"}


class TestBasicLogging:
    """Test basic logging at different levels."""

    def test_all_levels(self, setup_logging):
        """Test logging at all levels in sequence."""
        logger = get_logger("test.basic")

        logger.debug("debug_message", detail="Only visible in DEBUG mode")
        logger.info("info_message", screen="player")
        logger.warning("warning_message", density=0.75)
        logger.error("error_message", pattern="yyyy-qq")

    def test_exception_logging(self, setup_logging):
        logger = get_logger("test.exceptions")

        try:
            _ = 1 / 0
        except ZeroDivisionError as e:
            logger.error("calculation_failed", error=str(e), exc_info=True)


class TestRendererSelection:
    """Test the processor chain built by configure_logging."""

    def test_json_renderer(self):
        configure_logging(log_level="INFO", json_format=True)
        processors = structlog.get_config()["processors"]

        assert isinstance(processors[-1], structlog.processors.JSONRenderer)
        assert add_app_context in processors
        assert render_enum_names in processors
        assert drop_debug_unless_enabled in processors

    def test_console_renderer(self):
        configure_logging(log_level="INFO", json_format=False)
        processors = structlog.get_config()["processors"]

        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)

    def test_debug_level_keeps_debug_events(self):
        configure_logging(log_level="DEBUG", json_format=True)
        processors = structlog.get_config()["processors"]

        assert drop_debug_unless_enabled not in processors

    def test_timestamp_optional(self):
        configure_logging(include_timestamp=False)
        processors = structlog.get_config()["processors"]

        assert not any(isinstance(p, structlog.processors.TimeStamper) for p in processors)

        configure_logging(include_timestamp=True)
        processors = structlog.get_config()["processors"]

        assert any(isinstance(p, structlog.processors.TimeStamper) for p in processors)


class TestContextualLogging:
    """Test logging with bound context."""

    def test_bind_and_unbind(self, setup_logging):
        logger = get_logger("test.context")

        bind_context(screen="player", lifecycle="player-screen")
        assert structlog.contextvars.get_contextvars() == {
            "screen": "player",
            "lifecycle": "player-screen",
        }
        logger.info("rendered")

        unbind_context("lifecycle")
        assert structlog.contextvars.get_contextvars() == {"screen": "player"}

    def test_clear_context(self, setup_logging):
        bind_context(screen="player")
        clear_context()
        assert structlog.contextvars.get_contextvars() == {}

    def test_component_context_is_scoped(self, setup_logging):
        bind_context(screen="player")

        with component_context(collector="now-playing"):
            assert structlog.contextvars.get_contextvars() == {
                "screen": "player",
                "collector": "now-playing",
            }

        assert structlog.contextvars.get_contextvars() == {"screen": "player"}


class TestConfigureFromConfig:
    """Test configuring logging from library configuration."""

    def test_uses_logging_section(self, monkeypatch):
        calls = {}

        def fake_configure(**kwargs):
            calls.update(kwargs)

        monkeypatch.setattr("ui_extensions.logging_config.configure_logging", fake_configure)
        config = MagicMock()
        config.logging_settings.level = "WARNING"
        config.logging_settings.format = "console"
        config.logging_settings.include_timestamp = False

        configure_logging_from_config(config)

        assert calls == {"log_level": "WARNING", "json_format": False, "include_timestamp": False}
