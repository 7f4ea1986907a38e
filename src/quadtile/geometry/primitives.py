"""Geometry primitives for quadtile.

This module provides immutable Pydantic models for the extents produced by
tile addresses:

- PixelExtent: integer bounds in the pixel space of a whole pyramid level,
  with (0, 0) at the top-left corner and y increasing downward.
- GeoExtent: floating-point bounds in a profile's native map units, tagged
  with the spatial reference they are expressed in, with y increasing
  northward.
- TileDimensions: width and height of one tile in map units.
"""

from __future__ import annotations

from typing import Self

from pydantic import BaseModel, Field, model_validator


class SpatialReference(BaseModel, frozen=True):
    """Opaque identity of a coordinate reference system.

    Attributes:
        identifier: Authority code or name, e.g. "EPSG:4326".
    """

    identifier: str = Field(..., min_length=1, description="CRS identifier")

    def __str__(self) -> str:
        return self.identifier


class PixelExtent(BaseModel, frozen=True):
    """A tile's bounds in pixel coordinates of its level.

    The maximum edges are exclusive, so two horizontally adjacent tiles share
    ``left.xmax == right.xmin``.

    Attributes:
        xmin: Left edge (pixels from the left of the level).
        ymin: Top edge (pixels from the top of the level).
        xmax: Right edge (exclusive).
        ymax: Bottom edge (exclusive).
    """

    xmin: int = Field(..., ge=0, description="Left edge")
    ymin: int = Field(..., ge=0, description="Top edge")
    xmax: int = Field(..., ge=0, description="Right edge (exclusive)")
    ymax: int = Field(..., ge=0, description="Bottom edge (exclusive)")

    @model_validator(mode="after")
    def _validate_ordering(self) -> Self:
        if self.xmax < self.xmin or self.ymax < self.ymin:
            raise ValueError("PixelExtent maximum edges must not precede minimum edges")
        return self

    @property
    def width(self) -> int:
        """Return the horizontal span in pixels."""
        return self.xmax - self.xmin

    @property
    def height(self) -> int:
        """Return the vertical span in pixels."""
        return self.ymax - self.ymin

    def to_tuple(self) -> tuple[int, int, int, int]:
        """Convert to (xmin, ymin, xmax, ymax) tuple."""
        return (self.xmin, self.ymin, self.xmax, self.ymax)


class TileDimensions(BaseModel, frozen=True):
    """Width and height of a single tile in a profile's map units.

    Attributes:
        width: Horizontal span of one tile (> 0).
        height: Vertical span of one tile (> 0).
    """

    width: float = Field(..., gt=0, description="Tile width in map units")
    height: float = Field(..., gt=0, description="Tile height in map units")

    def to_tuple(self) -> tuple[float, float]:
        """Convert to (width, height) tuple."""
        return (self.width, self.height)


class GeoExtent(BaseModel, frozen=True):
    """A rectangle in a profile's native coordinate units.

    Unlike pixel space, y grows northward here: ``ymax`` is the top edge.
    Zero-width or zero-height extents are allowed; a tile far below the
    float resolution of its profile collapses to one.

    Attributes:
        srs: Spatial reference the bounds are expressed in.
        xmin: West edge.
        ymin: South edge.
        xmax: East edge.
        ymax: North edge.
    """

    srs: SpatialReference
    xmin: float
    ymin: float
    xmax: float
    ymax: float

    @model_validator(mode="after")
    def _validate_ordering(self) -> Self:
        if self.xmax < self.xmin or self.ymax < self.ymin:
            raise ValueError(
                f"GeoExtent maximum edges must not precede minimum edges, got "
                f"x=[{self.xmin}, {self.xmax}], y=[{self.ymin}, {self.ymax}]"
            )
        return self

    @property
    def width(self) -> float:
        """Return the east-west span."""
        return self.xmax - self.xmin

    @property
    def height(self) -> float:
        """Return the north-south span."""
        return self.ymax - self.ymin

    @property
    def area(self) -> float:
        """Return the area in square map units."""
        return self.width * self.height

    @property
    def center(self) -> tuple[float, float]:
        """Return the center point as (x, y) tuple."""
        return ((self.xmin + self.xmax) / 2, (self.ymin + self.ymax) / 2)

    def to_tuple(self) -> tuple[float, float, float, float]:
        """Convert to (xmin, ymin, xmax, ymax) tuple."""
        return (self.xmin, self.ymin, self.xmax, self.ymax)

    def contains_point(self, x: float, y: float) -> bool:
        """Check if a point lies inside this extent (edges inclusive).

        Args:
            x: Horizontal coordinate in this extent's units.
            y: Vertical coordinate in this extent's units.

        Returns:
            True if the point is within the extent.
        """
        return self.xmin <= x <= self.xmax and self.ymin <= y <= self.ymax

    def intersects(self, other: GeoExtent) -> bool:
        """Check if this extent overlaps another with positive area.

        Extents in different spatial references never intersect; no
        reprojection is attempted.

        Args:
            other: Another GeoExtent.

        Returns:
            True if the interiors overlap.
        """
        if self.srs != other.srs:
            return False
        return not (
            other.xmin >= self.xmax
            or other.xmax <= self.xmin
            or other.ymin >= self.ymax
            or other.ymax <= self.ymin
        )

    def intersection(self, other: GeoExtent) -> GeoExtent | None:
        """Compute the overlap of two extents.

        Args:
            other: Another GeoExtent in the same spatial reference.

        Returns:
            GeoExtent covering the overlap, or None if there is none.
        """
        if not self.intersects(other):
            return None

        return GeoExtent(
            srs=self.srs,
            xmin=max(self.xmin, other.xmin),
            ymin=max(self.ymin, other.ymin),
            xmax=min(self.xmax, other.xmax),
            ymax=min(self.ymax, other.ymax),
        )
