"""Spatial reference profiles consumed by tile addresses.

Key Components:
    - ProfileKind: Geodetic, mercator or local coordinate system family
    - ProfileProtocol: The surface tile addresses depend on
    - Profile: Immutable quadtree profile with global presets

Example:
    from quadtile.profile import Profile

    mercator = Profile.spherical_mercator()
    mercator.tile_dimensions(2).width  # a quarter of the world width
"""

from quadtile.profile.types import (
    MERCATOR_HALF_EXTENT,
    Profile,
    ProfileKind,
    ProfileProtocol,
)

__all__ = [
    "MERCATOR_HALF_EXTENT",
    "Profile",
    "ProfileKind",
    "ProfileProtocol",
]
