"""Spatial reference profiles for tile pyramids.

A profile fixes the total extent covered by a pyramid, the coordinate
reference system that extent is expressed in, and how tiles shrink with
each level of detail. Tile addresses only consume the ``ProfileProtocol``
surface; ``Profile`` is the stock implementation for quadtree pyramids
whose level-0 tile covers the whole extent.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Protocol, Self

from pydantic import BaseModel, model_validator

from quadtile.exceptions import InvalidArgumentError
from quadtile.geometry.primitives import GeoExtent, SpatialReference, TileDimensions

# Half the equatorial circumference of the WGS84 sphere used by EPSG:3857
MERCATOR_HALF_EXTENT = 20037508.342789244


class ProfileKind(Enum):
    """Coordinate system family of a profile."""

    GEODETIC = "geodetic"
    MERCATOR = "mercator"
    LOCAL = "local"


class ProfileProtocol(Protocol):
    """Protocol defining what tile addresses need from a profile."""

    @property
    def extent(self) -> GeoExtent:
        """Total extent of the pyramid in native units."""
        ...

    @property
    def srs(self) -> SpatialReference:
        """Spatial reference passed through into tile extents."""
        ...

    @property
    def kind(self) -> ProfileKind:
        """Coordinate system family."""
        ...

    def tile_dimensions(self, level: int) -> TileDimensions:
        """Return the size of one tile at ``level`` in native units."""
        ...


class Profile(BaseModel, frozen=True):
    """Quadtree profile with a single root tile spanning the whole extent.

    Each level halves the tile width and height of the level above, so
    level ``n`` holds ``2**n`` tiles per axis. Profiles are immutable and
    hashable, which lets any number of tile addresses share one instance.

    Attributes:
        extent: Total extent, tagged with the profile's spatial reference.
        kind: Coordinate system family of ``extent.srs``.

    Example:
        >>> profile = Profile.global_geodetic()
        >>> profile.tile_dimensions(1).to_tuple()
        (180.0, 90.0)
    """

    extent: GeoExtent
    kind: ProfileKind

    @model_validator(mode="after")
    def _validate_area(self) -> Self:
        if self.extent.width <= 0 or self.extent.height <= 0:
            raise ValueError(
                f"Profile extent must have positive area, got "
                f"{self.extent.width} x {self.extent.height}"
            )
        return self

    @property
    def srs(self) -> SpatialReference:
        """Return the spatial reference of the profile extent."""
        return self.extent.srs

    def tile_dimensions(self, level: int) -> TileDimensions:
        """Return the size of one tile at a level of detail.

        The extent is scaled by an exact power of two, so dimensions at deep
        levels carry no rounding error from the levels above.

        Args:
            level: Zero-based level of detail.

        Returns:
            TileDimensions in the profile's native units.

        Raises:
            InvalidArgumentError: If level is negative or not an integer.
        """
        if isinstance(level, bool) or not isinstance(level, int) or level < 0:
            raise InvalidArgumentError(
                "Level must be a non-negative integer",
                argument="level",
                value=level,
            )
        return TileDimensions(
            width=math.ldexp(self.extent.width, -level),
            height=math.ldexp(self.extent.height, -level),
        )

    @classmethod
    def global_geodetic(cls) -> Self:
        """Create the whole-earth WGS84 latitude/longitude profile."""
        return cls(
            extent=GeoExtent(
                srs=SpatialReference(identifier="EPSG:4326"),
                xmin=-180.0,
                ymin=-90.0,
                xmax=180.0,
                ymax=90.0,
            ),
            kind=ProfileKind.GEODETIC,
        )

    @classmethod
    def spherical_mercator(cls) -> Self:
        """Create the square web mercator profile used by XYZ tile services."""
        return cls(
            extent=GeoExtent(
                srs=SpatialReference(identifier="EPSG:3857"),
                xmin=-MERCATOR_HALF_EXTENT,
                ymin=-MERCATOR_HALF_EXTENT,
                xmax=MERCATOR_HALF_EXTENT,
                ymax=MERCATOR_HALF_EXTENT,
            ),
            kind=ProfileKind.MERCATOR,
        )

    @classmethod
    def local(
        cls,
        srs: SpatialReference | str,
        xmin: float,
        ymin: float,
        xmax: float,
        ymax: float,
    ) -> Self:
        """Create a profile over a projected extent.

        Args:
            srs: Spatial reference, or its identifier string.
            xmin: West edge in projected units.
            ymin: South edge in projected units.
            xmax: East edge in projected units.
            ymax: North edge in projected units.

        Returns:
            Profile of kind LOCAL.

        Raises:
            pydantic.ValidationError: If the extent has no area.
        """
        if isinstance(srs, str):
            srs = SpatialReference(identifier=srs)
        return cls(
            extent=GeoExtent(srs=srs, xmin=xmin, ymin=ymin, xmax=xmax, ymax=ymax),
            kind=ProfileKind.LOCAL,
        )
