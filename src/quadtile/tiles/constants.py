"""Coordinate width limits for tile pyramids."""

# Column and row indices are unsigned 32-bit values
TILE_COORDINATE_BITS = 32

# Deepest level whose tiles-per-axis count (2**level) still fits the tile coordinate
MAX_LEVEL = TILE_COORDINATE_BITS - 1

# Pixel spans of a whole level are unsigned 64-bit values
PIXEL_COORDINATE_BITS = 64

QUADRANT_COUNT = 4
