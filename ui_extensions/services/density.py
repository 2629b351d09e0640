"""Display density source for unit conversion.

Responsibilities:
- Define the capability converters read the density from
- Hold the process-wide default provider, built from configuration
- Allow tests and hosts to inject their own provider
"""

import math
import threading
from typing import Optional, Protocol

from ui_extensions.logging_config import get_logger

logger = get_logger(__name__)


class DensityProvider(Protocol):
    """Anything that can report the current display density."""

    def get_density(self) -> float:
        """Return pixels per density-independent unit."""
        ...


def validate_density(density: float) -> float:
    """Check that a density is a positive finite number.

    Raises:
        ValueError: If the density is zero, negative, NaN or infinite
    """
    if not math.isfinite(density) or density <= 0:
        raise ValueError(f"Density must be a positive finite number, got: {density}")
    return float(density)


class StaticDensityProvider:
    """Density provider backed by a single mutable value.

    Hosts update `density` on display or configuration changes; converters
    see the new value on their next call.
    """

    def __init__(self, density: float = 1.0) -> None:
        self._density = validate_density(density)

    @property
    def density(self) -> float:
        return self._density

    @density.setter
    def density(self, value: float) -> None:
        old_density = self._density
        self._density = validate_density(value)
        logger.info("display_density_changed", old_density=old_density, new_density=self._density)

    def get_density(self) -> float:
        return self._density

    def __repr__(self) -> str:
        return f"StaticDensityProvider(density={self._density})"


_density_provider: Optional[DensityProvider] = None
_provider_lock = threading.Lock()


def get_density_provider() -> DensityProvider:
    """Get or create the global density provider.

    The first call builds a StaticDensityProvider from the configured
    display density.
    """
    global _density_provider
    if _density_provider is None:
        with _provider_lock:
            if _density_provider is None:
                from ui_extensions.config import get_config

                density = get_config().density
                _density_provider = StaticDensityProvider(density)
                logger.info("density_provider_initialized", density=density)
    return _density_provider


def set_density_provider(provider: DensityProvider) -> None:
    """Replace the global density provider (e.g. with the host's metrics)."""
    global _density_provider
    with _provider_lock:
        _density_provider = provider
    logger.debug("density_provider_set", provider=repr(provider))


def reset_density_provider() -> None:
    """Drop the global density provider (for testing)."""
    global _density_provider
    with _provider_lock:
        _density_provider = None
