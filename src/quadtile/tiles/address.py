"""Quadtree tile addressing.

A ``TileAddress`` names one tile of a raster pyramid by its level of detail
and its column/row at that level. Level 0 is a single root tile covering the
whole profile extent; every level below splits each tile into four
quadrants, so level ``n`` is a ``2**n`` by ``2**n`` grid.

Orientation Convention:
    Columns grow eastward from the profile's west edge. Rows grow
    *downward* from the profile's north edge, so row 0 is the northernmost
    row and pixel y grows in the same direction as row. Geographic y grows
    the opposite way (``ymax`` is north).

Quadrant Numbering:
    0 = top-left, 1 = top-right, 2 = bottom-left, 3 = bottom-right.
    Bit 0 of the quadrant is the column offset, bit 1 the row offset.
"""

from __future__ import annotations

import logging
import re
import threading
from enum import IntEnum
from typing import Any, NamedTuple, Self

from quadtile.config import settings
from quadtile.exceptions import (
    ArithmeticOverflowError,
    InvalidArgumentError,
    InvalidQuadrantError,
)
from quadtile.geometry.primitives import GeoExtent, PixelExtent
from quadtile.profile.types import ProfileKind, ProfileProtocol
from quadtile.tiles.constants import (
    MAX_LEVEL,
    PIXEL_COORDINATE_BITS,
    QUADRANT_COUNT,
    TILE_COORDINATE_BITS,
)
from quadtile.utils.logging import tile_context

logger = logging.getLogger(__name__)

_IDENTITY_PATTERN = re.compile(r"(\d+)_(\d+)_(\d+)", re.ASCII)


class Quadrant(IntEnum):
    """Position of a child tile within its parent."""

    TOP_LEFT = 0
    TOP_RIGHT = 1
    BOTTOM_LEFT = 2
    BOTTOM_RIGHT = 3

    @property
    def column_offset(self) -> int:
        """Return 1 for the right-hand quadrants, else 0."""
        return self & 1

    @property
    def row_offset(self) -> int:
        """Return 1 for the bottom quadrants, else 0."""
        return self >> 1


class TileID(NamedTuple):
    """Plain (level, x, y) triple for interop with tile servers.

    Attributes:
        level: Level of detail.
        x: Column index.
        y: Row index.
    """

    level: int
    x: int
    y: int


def _require_unsigned(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidArgumentError(
            f"{name.capitalize()} must be a non-negative integer",
            argument=name,
            value=value,
        )
    return value


def _require_tile_size(tile_size: Any) -> int:
    if isinstance(tile_size, bool) or not isinstance(tile_size, int) or tile_size <= 0:
        raise InvalidArgumentError(
            "Tile size must be a positive integer",
            argument="tile_size",
            value=tile_size,
        )
    return tile_size


def _resolve_tile_size(tile_size: int | None) -> int:
    if tile_size is None:
        tile_size = settings.DEFAULT_TILE_SIZE
    return _require_tile_size(tile_size)


def _require_level(level: Any) -> int:
    level = _require_unsigned("level", level)
    if level > MAX_LEVEL:
        raise InvalidArgumentError(
            f"Level must not exceed {MAX_LEVEL}",
            argument="level",
            value=level,
        )
    return level


def _require_quadrant(quadrant: Any) -> Quadrant:
    if isinstance(quadrant, bool) or not isinstance(quadrant, int):
        raise InvalidQuadrantError(quadrant)
    try:
        return Quadrant(quadrant)
    except ValueError:
        raise InvalidQuadrantError(quadrant) from None


def map_size_tiles(level: int) -> int:
    """Return the number of tiles along each axis of a level.

    Computed with an integer shift, so the count is exact at every level.

    Args:
        level: Zero-based level of detail.

    Returns:
        ``2**level``.

    Raises:
        InvalidArgumentError: If level is negative or not an integer.
        ArithmeticOverflowError: If level exceeds MAX_LEVEL (31), where the
            count no longer fits an unsigned 32-bit tile coordinate.
    """
    level = _require_unsigned("level", level)
    if level > MAX_LEVEL:
        logger.debug("Tile count overflow at level %d", level)
        raise ArithmeticOverflowError(
            f"Tile count 2**{level} overflows the tile coordinate",
            limit_bits=TILE_COORDINATE_BITS,
        )
    return 1 << level


def map_size_pixels(tile_size: int, level: int) -> int:
    """Return the pixel span of a whole level along one axis.

    Args:
        tile_size: Tile side length in pixels.
        level: Zero-based level of detail.

    Returns:
        ``tile_size << level``.

    Raises:
        InvalidArgumentError: If tile_size is not positive or level is negative.
        ArithmeticOverflowError: If the span does not fit an unsigned 64-bit
            pixel coordinate. A 256px tile reaches that limit past level 55.
    """
    tile_size = _require_tile_size(tile_size)
    level = _require_unsigned("level", level)
    # Check width before shifting: a huge level would otherwise allocate a huge int
    if tile_size.bit_length() + level > PIXEL_COORDINATE_BITS:
        logger.debug(
            "Map size overflow for tile size %d at level %d", tile_size, level
        )
        raise ArithmeticOverflowError(
            f"Map size {tile_size} << {level} overflows the pixel coordinate",
            limit_bits=PIXEL_COORDINATE_BITS,
        )
    return tile_size << level


class TileAddress:
    """Address of one tile in a quadtree pyramid.

    An address is a value: equality uses the level, column, row and profile.
    Hashing uses the triple only, so profiles need not be hashable. The
    profile is shared, never owned, and must be immutable.

    Levels are capped at MAX_LEVEL so column and row always fit the 32-bit
    tile coordinate. The constructor does not check that column and row lie
    inside the ``2**level`` grid; out-of-grid addresses simply produce
    extents outside the profile. Use ``is_valid()`` to check explicitly.

    Children are created lazily and cached on the instance, so navigating
    the same subtree twice reuses the same objects. The cache is filled under
    a per-instance lock and is safe to use from several threads.

    Usage:
        profile = Profile.global_geodetic()
        root = TileAddress.root(profile)
        tile = root.child(Quadrant.TOP_RIGHT).child(2)
        str(tile)                   # "2_2_1"
        tile.geographic_bounds()    # (0.0, 0.0, 90.0, 45.0)
        tile.parent() == root.child(1)
    """

    __slots__ = ("_children", "_column", "_level", "_lock", "_profile", "_row")

    def __init__(
        self,
        column: int,
        row: int,
        level: int,
        profile: ProfileProtocol,
    ) -> None:
        """Create an address.

        Args:
            column: Column index at ``level``, counted from the west edge.
            row: Row index at ``level``, counted from the north edge.
            level: Zero-based level of detail.
            profile: Shared profile defining extent and tile sizes.

        Raises:
            InvalidArgumentError: If column, row or level is negative or not
                an integer, or if level exceeds MAX_LEVEL (31).
        """
        self._column = _require_unsigned("column", column)
        self._row = _require_unsigned("row", row)
        self._level = _require_level(level)
        self._profile = profile
        self._children: list[TileAddress | None] = [None] * QUADRANT_COUNT
        self._lock = threading.Lock()

    @classmethod
    def root(cls, profile: ProfileProtocol) -> Self:
        """Return the level-0 address covering the whole profile."""
        return cls(0, 0, 0, profile)

    @classmethod
    def from_identity_string(cls, text: str, profile: ProfileProtocol) -> Self:
        """Parse an identity string produced by ``identity_string()``.

        Args:
            text: String of the form ``"<level>_<column>_<row>"``.
            profile: Profile the address belongs to.

        Returns:
            The address the string identifies.

        Raises:
            InvalidArgumentError: If the text is not a valid identity string.
        """
        match = _IDENTITY_PATTERN.fullmatch(text) if isinstance(text, str) else None
        if match is None:
            raise InvalidArgumentError(
                "Identity string must look like '<level>_<column>_<row>'",
                argument="text",
                value=text,
            )
        level, column, row = (int(group) for group in match.groups())
        return cls(column, row, level, profile)

    # --- Identity ---

    @property
    def column(self) -> int:
        """Return the column index."""
        return self._column

    @property
    def row(self) -> int:
        """Return the row index."""
        return self._row

    @property
    def level(self) -> int:
        """Return the level of detail."""
        return self._level

    @property
    def profile(self) -> ProfileProtocol:
        """Return the shared profile."""
        return self._profile

    @property
    def tile_xy(self) -> tuple[int, int]:
        """Return (column, row) tuple."""
        return (self._column, self._row)

    @property
    def tile_id(self) -> TileID:
        """Return the (level, x, y) triple."""
        return TileID(level=self._level, x=self._column, y=self._row)

    def identity_string(self) -> str:
        """Return ``"<level>_<column>_<row>"``.

        The string ignores the profile. Cache keys spanning several profiles
        must combine it with the profile's identity.
        """
        return f"{self._level}_{self._column}_{self._row}"

    def is_valid(self) -> bool:
        """Check that column and row lie inside the grid of this level."""
        return self._column >> self._level == 0 and self._row >> self._level == 0

    def __str__(self) -> str:
        return self.identity_string()

    def __repr__(self) -> str:
        return (
            f"TileAddress(column={self._column}, row={self._row}, "
            f"level={self._level}, srs={self._profile.srs})"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TileAddress):
            return NotImplemented
        return (
            self._level == other._level
            and self._column == other._column
            and self._row == other._row
            and (self._profile is other._profile or self._profile == other._profile)
        )

    def __hash__(self) -> int:
        return hash((self._level, self._column, self._row))

    def __copy__(self) -> TileAddress:
        # Copies share the profile but start with an empty child cache
        return TileAddress(self._column, self._row, self._level, self._profile)

    def __deepcopy__(self, memo: dict[int, Any]) -> TileAddress:
        return self.__copy__()

    # --- Quadtree navigation ---

    def child(self, quadrant: int) -> TileAddress:
        """Return the child address in a quadrant, one level deeper.

        Args:
            quadrant: 0 (top-left), 1 (top-right), 2 (bottom-left) or
                3 (bottom-right). ``Quadrant`` members are accepted.

        Returns:
            The cached child; repeated calls return the same object.

        Raises:
            InvalidQuadrantError: If quadrant is not one of 0-3.
            ArithmeticOverflowError: If this address is already at MAX_LEVEL.
        """
        quadrant = _require_quadrant(quadrant)
        child = self._children[quadrant]
        if child is not None:
            return child

        if self._level >= MAX_LEVEL:
            logger.debug("No children below tile %s at level %d", self, self._level)
            raise ArithmeticOverflowError(
                f"Level {self._level + 1} overflows the tile coordinate",
                limit_bits=TILE_COORDINATE_BITS,
            )

        with self._lock:
            child = self._children[quadrant]
            if child is None:
                child = TileAddress(
                    self._column * 2 + quadrant.column_offset,
                    self._row * 2 + quadrant.row_offset,
                    self._level + 1,
                    self._profile,
                )
                self._children[quadrant] = child
                if logger.isEnabledFor(logging.DEBUG):
                    with tile_context(str(child), child.level):
                        logger.debug("Cached child %s of tile %s", child, self)
        return child

    def children(self) -> tuple[TileAddress, TileAddress, TileAddress, TileAddress]:
        """Return all four children in quadrant order."""
        return (
            self.child(Quadrant.TOP_LEFT),
            self.child(Quadrant.TOP_RIGHT),
            self.child(Quadrant.BOTTOM_LEFT),
            self.child(Quadrant.BOTTOM_RIGHT),
        )

    def parent(self) -> TileAddress | None:
        """Return a new address for the enclosing tile one level up.

        Returns:
            The parent address, or None for a level-0 address.
        """
        if self._level == 0:
            return None
        return TileAddress(
            self._column // 2,
            self._row // 2,
            self._level - 1,
            self._profile,
        )

    # --- Extents ---

    def pixel_extent(self, tile_size: int | None = None) -> PixelExtent:
        """Return the tile's bounds in the pixel space of its level.

        Args:
            tile_size: Tile side length in pixels. Defaults to
                settings.DEFAULT_TILE_SIZE.

        Returns:
            PixelExtent with exclusive maximum edges.

        Raises:
            InvalidArgumentError: If tile_size is not a positive integer.
        """
        size = _resolve_tile_size(tile_size)
        xmin = self._column * size
        ymin = self._row * size
        return PixelExtent(xmin=xmin, ymin=ymin, xmax=xmin + size, ymax=ymin + size)

    def map_size_pixels(self, tile_size: int | None = None) -> int:
        """Return the pixel span of this address's level.

        See ``map_size_pixels`` for the overflow limit.

        Raises:
            InvalidArgumentError: If tile_size is not a positive integer.
        """
        return map_size_pixels(_resolve_tile_size(tile_size), self._level)

    def map_size_tiles(self) -> int:
        """Return the tiles per axis at this address's level."""
        return map_size_tiles(self._level)

    def geographic_extent(self) -> GeoExtent:
        """Return the tile's bounds in the profile's native units.

        Row 0 is the northernmost row: ``ymax`` is measured down from the
        profile's north edge and ``ymin`` lies one tile height below it.

        Every edge is computed from its own integer grid line, so neighbours
        share bit-identical edges and the children of a tile partition it
        exactly.

        Returns:
            GeoExtent tagged with the profile's spatial reference.
        """
        dims = self._profile.tile_dimensions(self._level)
        extent = self._profile.extent

        return GeoExtent(
            srs=self._profile.srs,
            xmin=extent.xmin + dims.width * self._column,
            ymin=extent.ymax - dims.height * (self._row + 1),
            xmax=extent.xmin + dims.width * (self._column + 1),
            ymax=extent.ymax - dims.height * self._row,
        )

    def geographic_bounds(self) -> tuple[float, float, float, float]:
        """Return (xmin, ymin, xmax, ymax) of ``geographic_extent()``."""
        return self.geographic_extent().to_tuple()

    # --- Coordinate system classification ---

    @property
    def kind(self) -> ProfileKind:
        """Return the profile's coordinate system family."""
        return self._profile.kind

    @property
    def is_geodetic(self) -> bool:
        """True if the profile is geodetic (latitude/longitude)."""
        return self._profile.kind is ProfileKind.GEODETIC

    @property
    def is_mercator(self) -> bool:
        """True if the profile is web mercator."""
        return self._profile.kind is ProfileKind.MERCATOR

    @property
    def is_projected(self) -> bool:
        """True if the profile is a local projected system."""
        return self._profile.kind is ProfileKind.LOCAL
