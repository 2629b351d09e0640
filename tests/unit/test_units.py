"""Tests for density providers and px/dp conversion."""

import math
from unittest.mock import MagicMock, patch

import pytest

from ui_extensions.services.density import (
    StaticDensityProvider,
    get_density_provider,
    reset_density_provider,
    set_density_provider,
    validate_density,
)
from ui_extensions.utils.units import dp_to_px, px_to_dp


class CountingDensityProvider:
    """Density provider that records how often it is read."""

    def __init__(self, density: float) -> None:
        self.density = density
        self.reads = 0

    def get_density(self) -> float:
        self.reads += 1
        return self.density


@pytest.fixture(autouse=True)
def clean_global_provider():
    """Make sure no test leaks a global provider."""
    reset_density_provider()
    yield
    reset_density_provider()


class TestStaticDensityProvider:
    """Test StaticDensityProvider validation and updates."""

    def test_reports_density(self):
        assert StaticDensityProvider(2.75).get_density() == 2.75

    def test_default_density(self):
        assert StaticDensityProvider().get_density() == 1.0

    @pytest.mark.parametrize("density", [0, -1.5, math.nan, math.inf])
    def test_rejects_invalid_density(self, density):
        """Test that non-positive and non-finite densities are rejected."""
        with pytest.raises(ValueError, match="positive finite"):
            StaticDensityProvider(density)

    def test_density_can_change(self):
        provider = StaticDensityProvider(2.0)
        provider.density = 3.0
        assert provider.get_density() == 3.0

    def test_invalid_update_keeps_old_value(self):
        provider = StaticDensityProvider(2.0)
        with pytest.raises(ValueError):
            provider.density = 0
        assert provider.get_density() == 2.0

    def test_validate_density_returns_float(self):
        assert validate_density(3) == 3.0
        assert isinstance(validate_density(3), float)


class TestPxToDp:
    """Test px_to_dp function."""

    def test_divides_by_density(self):
        assert px_to_dp(300, StaticDensityProvider(3.0)) == 100

    def test_truncates(self):
        """Test that fractional results are truncated, not rounded."""
        assert px_to_dp(100, StaticDensityProvider(3.0)) == 33
        assert px_to_dp(299, StaticDensityProvider(3.0)) == 99

    def test_truncates_toward_zero(self):
        assert px_to_dp(-100, StaticDensityProvider(3.0)) == -33

    def test_fractional_density(self):
        assert px_to_dp(100, StaticDensityProvider(2.75)) == 36

    def test_zero(self):
        assert px_to_dp(0, StaticDensityProvider(2.0)) == 0


class TestDpToPx:
    """Test dp_to_px function."""

    def test_multiplies_by_density(self):
        assert dp_to_px(16, StaticDensityProvider(3.0)) == 48

    def test_truncates(self):
        assert dp_to_px(10, StaticDensityProvider(2.75)) == 27
        assert dp_to_px(1, StaticDensityProvider(1.5)) == 1

    def test_truncates_toward_zero(self):
        assert dp_to_px(-1, StaticDensityProvider(1.5)) == -1


class TestDensityReadEveryCall:
    """Test that converters never cache the density."""

    def test_provider_read_on_each_call(self):
        provider = CountingDensityProvider(2.0)

        px_to_dp(100, provider)
        dp_to_px(100, provider)
        px_to_dp(100, provider)

        assert provider.reads == 3

    def test_display_change_applies_immediately(self):
        """Test that a density change is visible on the next call."""
        provider = StaticDensityProvider(2.0)
        assert dp_to_px(10, provider) == 20

        provider.density = 3.0
        assert dp_to_px(10, provider) == 30
        assert px_to_dp(30, provider) == 10


class TestRoundTrip:
    """Test the error introduced by truncation in both directions."""

    @pytest.mark.parametrize("density", [1.0, 1.5, 2.0, 2.625, 2.75, 3.0, 3.5, 4.0])
    def test_dp_px_dp_within_one(self, density):
        """Test dp -> px -> dp loses at most one unit for densities >= 1."""
        provider = StaticDensityProvider(density)
        for dp in range(0, 500):
            back = px_to_dp(dp_to_px(dp, provider), provider)
            assert 0 <= dp - back <= 1

    @pytest.mark.parametrize("density", [1.0, 1.5, 2.0, 2.75, 3.0])
    def test_px_dp_px_within_density(self, density):
        """Test px -> dp -> px loses less than density + 1 pixels."""
        provider = StaticDensityProvider(density)
        for px in range(0, 500):
            back = dp_to_px(px_to_dp(px, provider), provider)
            assert 0 <= px - back < density + 1

    def test_px_dp_px_within_one_at_unit_density(self):
        provider = StaticDensityProvider(1.0)
        for px in range(0, 500):
            assert dp_to_px(px_to_dp(px, provider), provider) == px


class TestGlobalProvider:
    """Test the process-wide density provider."""

    def test_built_from_config(self):
        """Test that the default provider uses the configured density."""
        mock_config = MagicMock()
        mock_config.density = 2.625
        with patch("ui_extensions.config.get_config", return_value=mock_config):
            provider = get_density_provider()

        assert provider.get_density() == 2.625
        assert dp_to_px(8) == 21

    def test_is_singleton(self):
        assert get_density_provider() is get_density_provider()

    def test_set_provider_used_by_converters(self):
        set_density_provider(StaticDensityProvider(4.0))
        assert dp_to_px(10) == 40
        assert px_to_dp(10) == 2

    def test_explicit_provider_wins(self):
        set_density_provider(StaticDensityProvider(4.0))
        assert dp_to_px(10, StaticDensityProvider(1.0)) == 10

    def test_reset(self):
        custom = StaticDensityProvider(4.0)
        set_density_provider(custom)
        reset_density_provider()
        assert get_density_provider() is not custom
