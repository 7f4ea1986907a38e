"""Geometry module for quadtile.

Immutable extent models shared by profiles and tile addresses.

Key Components:
    - PixelExtent: Integer tile bounds in a level's pixel space
    - GeoExtent: Tile or profile bounds in native map units
    - TileDimensions: Size of one tile in map units
    - SpatialReference: Opaque CRS identity carried by GeoExtent

Example:
    from quadtile.geometry import GeoExtent, SpatialReference

    wgs84 = SpatialReference(identifier="EPSG:4326")
    world = GeoExtent(srs=wgs84, xmin=-180, ymin=-90, xmax=180, ymax=90)
    world.contains_point(10.0, 45.0)  # True
"""

from quadtile.geometry.primitives import (
    GeoExtent,
    PixelExtent,
    SpatialReference,
    TileDimensions,
)

__all__ = [
    "GeoExtent",
    "PixelExtent",
    "SpatialReference",
    "TileDimensions",
]
