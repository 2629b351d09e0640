"""Pixel / density-independent unit conversion.

Both directions truncate toward zero, so converting back and forth is not
an exact inverse.
"""

from typing import Optional

from ui_extensions.services.density import DensityProvider, get_density_provider


def _current_density(provider: Optional[DensityProvider]) -> float:
    # Read on every call so display changes apply immediately
    if provider is None:
        provider = get_density_provider()
    return provider.get_density()


def px_to_dp(px: int, provider: Optional[DensityProvider] = None) -> int:
    """Convert pixels to density-independent units.

    Args:
        px: Length in pixels
        provider: Density source; the global provider when omitted

    Returns:
        Length in dp, truncated toward zero

    Examples:
        >>> from ui_extensions.services.density import StaticDensityProvider
        >>> px_to_dp(100, StaticDensityProvider(3.0))
        33
    """
    return int(px / _current_density(provider))


def dp_to_px(dp: int, provider: Optional[DensityProvider] = None) -> int:
    """Convert density-independent units to pixels.

    Args:
        dp: Length in dp
        provider: Density source; the global provider when omitted

    Returns:
        Length in pixels, truncated toward zero

    Examples:
        >>> from ui_extensions.services.density import StaticDensityProvider
        >>> dp_to_px(33, StaticDensityProvider(3.0))
        99
    """
    return int(dp * _current_density(provider))
