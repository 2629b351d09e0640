"""Configuration management - loads ui_extensions.yaml and environment variables."""

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from ui_extensions.models import DisplayConfig, ExtensionsConfig, LoggingConfig

CONFIG_ENV_VAR = "UI_EXTENSIONS_CONFIG"
DEFAULT_CONFIG_PATH = Path("config/ui_extensions.yaml")


class ConfigurationError(Exception):
    """Raised when configuration is invalid or missing."""

    pass


class Config:
    """Library configuration loader and manager.

    Loads ui_extensions.yaml and provides validated access to:
    - Display metrics (fallback density)
    - Logging settings
    """

    def __init__(self, config_path: Optional[str] = None):
        """Initialize configuration loader.

        Args:
            config_path: Path to ui_extensions.yaml. If not provided, uses the
                        UI_EXTENSIONS_CONFIG env var or ./config/ui_extensions.yaml
        """
        self._explicit = bool(config_path or os.getenv(CONFIG_ENV_VAR))
        self._config_path = self._resolve_config_path(config_path)
        self._extensions_config: Optional[ExtensionsConfig] = None
        self._load_config()

    def _resolve_config_path(self, config_path: Optional[str]) -> Path:
        """Resolve configuration file path from argument, env var, or default."""
        if config_path:
            return Path(config_path)

        env_path = os.getenv(CONFIG_ENV_VAR)
        if env_path:
            return Path(env_path)

        return DEFAULT_CONFIG_PATH

    def _load_config(self) -> None:
        """Load and validate the configuration file."""
        if not self._config_path.exists():
            if self._explicit:
                raise ConfigurationError(
                    f"Configuration file not found: {self._config_path}\n"
                    f"Check the path or unset the {CONFIG_ENV_VAR} environment variable"
                )
            # Library use without a config file: built-in defaults
            self._extensions_config = ExtensionsConfig()
            return

        try:
            with open(self._config_path, encoding="utf-8") as f:
                raw_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Failed to parse YAML configuration: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Failed to read configuration: {e}") from e

        if not raw_config:
            raise ConfigurationError(f"Configuration file is empty: {self._config_path}")

        if not isinstance(raw_config, dict):
            raise ConfigurationError(
                f"Configuration root must be a mapping, got {type(raw_config).__name__}"
            )

        try:
            self._extensions_config = ExtensionsConfig(**raw_config)
        except ValidationError as e:
            raise ConfigurationError(f"Configuration validation failed:\n{e}") from e

    @property
    def settings(self) -> ExtensionsConfig:
        """Get validated configuration."""
        if self._extensions_config is None:
            raise ConfigurationError("Configuration not loaded")
        return self._extensions_config

    @property
    def config_path(self) -> Path:
        """Get path to configuration file."""
        return self._config_path

    @property
    def display_settings(self) -> DisplayConfig:
        """Get display settings.

        Returns:
            DisplayConfig with the fallback density
        """
        return self.settings.display

    @property
    def density(self) -> float:
        """Get configured display density (e.g., 2.75)."""
        return self.settings.display.density

    @property
    def logging_settings(self) -> LoggingConfig:
        """Get logging settings."""
        return self.settings.logging

    def reload(self) -> None:
        """Reload configuration from disk."""
        self._load_config()


# Global configuration instance
_config_instance: Optional[Config] = None


def get_config(config_path: Optional[str] = None) -> Config:
    """Get global configuration instance (singleton).

    Args:
        config_path: Optional path to configuration file (only used on first call)

    Returns:
        Config instance
    """
    global _config_instance
    if _config_instance is None:
        _config_instance = Config(config_path)
    return _config_instance


def reload_config() -> None:
    """Reload global configuration from disk."""
    global _config_instance
    if _config_instance:
        _config_instance.reload()
    else:
        _config_instance = Config()


def reset_config() -> None:
    """Drop the global configuration instance (for testing)."""
    global _config_instance
    _config_instance = None
