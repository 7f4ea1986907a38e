"""quadtile: quadtree tile addressing for raster map pyramids."""

from quadtile.exceptions import (
    ArithmeticOverflowError,
    InvalidArgumentError,
    InvalidQuadrantError,
    TileAddressError,
)
from quadtile.geometry import GeoExtent, PixelExtent, SpatialReference, TileDimensions
from quadtile.profile import Profile, ProfileKind, ProfileProtocol
from quadtile.tiles import (
    Quadrant,
    TileAddress,
    TileID,
    map_size_pixels,
    map_size_tiles,
)
from quadtile.utils.logging import configure_logging, get_logger

__version__ = "0.1.0"

__all__ = [
    "ArithmeticOverflowError",
    "GeoExtent",
    "InvalidArgumentError",
    "InvalidQuadrantError",
    "PixelExtent",
    "Profile",
    "ProfileKind",
    "ProfileProtocol",
    "Quadrant",
    "SpatialReference",
    "TileAddress",
    "TileAddressError",
    "TileDimensions",
    "TileID",
    "configure_logging",
    "get_logger",
    "map_size_pixels",
    "map_size_tiles",
]
