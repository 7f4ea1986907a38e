"""Quadtree tile addressing for quadtile.

Public API:
    - TileAddress: (level, column, row) address with navigation and extents.
    - Quadrant: Child position within a parent tile.
    - TileID: Plain (level, x, y) named tuple.
    - map_size_tiles / map_size_pixels: Overflow-checked level sizes.
"""

from quadtile.tiles.address import (
    Quadrant,
    TileAddress,
    TileID,
    map_size_pixels,
    map_size_tiles,
)
from quadtile.tiles.constants import (
    MAX_LEVEL,
    PIXEL_COORDINATE_BITS,
    TILE_COORDINATE_BITS,
)

__all__ = [
    "MAX_LEVEL",
    "PIXEL_COORDINATE_BITS",
    "TILE_COORDINATE_BITS",
    "Quadrant",
    "TileAddress",
    "TileID",
    "map_size_pixels",
    "map_size_tiles",
]
