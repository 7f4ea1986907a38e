"""Shared pytest fixtures and configuration."""

from collections.abc import Iterator

import pytest

from quadtile.config import Settings
from quadtile.profile import Profile
from quadtile.utils.logging import (
    clear_correlation_context,
    configure_logging,
    reset_logging,
)


@pytest.fixture(autouse=True)
def reset_logging_context() -> Iterator[None]:
    """Reset correlation context and the log handler between tests."""
    clear_correlation_context()
    yield
    clear_correlation_context()
    reset_logging()


@pytest.fixture
def test_settings() -> Settings:
    """Create a Settings instance with test-safe defaults."""
    return Settings(
        LOG_LEVEL="DEBUG",
        LOG_FORMAT="console",
        DEFAULT_TILE_SIZE=256,
        _env_file=None,  # type: ignore[call-arg]
    )


@pytest.fixture
def configure_test_logging() -> Iterator[None]:
    """Configure logging for tests with console output."""
    configure_logging(level="DEBUG", log_format="console")
    yield


@pytest.fixture
def geodetic_profile() -> Profile:
    """Whole-earth EPSG:4326 profile with a 360x180 root tile."""
    return Profile.global_geodetic()


@pytest.fixture
def mercator_profile() -> Profile:
    """Square EPSG:3857 web mercator profile."""
    return Profile.spherical_mercator()


@pytest.fixture
def local_profile() -> Profile:
    """Projected profile over a 1024m x 512m site grid."""
    return Profile.local("EPSG:32633", 500000.0, 4000000.0, 501024.0, 4000512.0)
