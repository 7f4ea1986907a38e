"""Unit tests for tile extents and pyramid sizes.

Covers pixel extents, overflow-checked map sizes, geographic extents and
the orientation convention (row 0 is the northernmost row).
"""

from __future__ import annotations

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from quadtile.config import settings as quadtile_settings
from quadtile.exceptions import ArithmeticOverflowError, InvalidArgumentError
from quadtile.geometry import GeoExtent, PixelExtent
from quadtile.profile import Profile
from quadtile.tiles import MAX_LEVEL, TileAddress, map_size_pixels, map_size_tiles

GEODETIC = Profile.global_geodetic()

# Mercator and the odd-sized local site have widths that are not binary fractions
PARTITION_PROFILES = [
    GEODETIC,
    Profile.spherical_mercator(),
    Profile.local("EPSG:32633", 0.0, 0.0, 1000.1, 700.3),
]


class TestPixelExtent:
    """Tests for TileAddress.pixel_extent."""

    def test_example(self, geodetic_profile: Profile) -> None:
        """Test tile 256, column 3, row 2 spans (768, 512)-(1024, 768)."""
        extent = TileAddress(3, 2, 4, geodetic_profile).pixel_extent(256)
        assert extent == PixelExtent(xmin=768, ymin=512, xmax=1024, ymax=768)

    def test_default_tile_size(self, geodetic_profile: Profile) -> None:
        """Test the configured default tile size is used when omitted."""
        size = quadtile_settings.DEFAULT_TILE_SIZE
        extent = TileAddress(1, 1, 1, geodetic_profile).pixel_extent()
        assert extent.to_tuple() == (size, size, 2 * size, 2 * size)

    def test_independent_of_profile(
        self, geodetic_profile: Profile, mercator_profile: Profile
    ) -> None:
        """Test pixel extents do not depend on the profile."""
        a = TileAddress(7, 1, 3, geodetic_profile).pixel_extent(512)
        b = TileAddress(7, 1, 3, mercator_profile).pixel_extent(512)
        assert a == b

    @pytest.mark.parametrize("tile_size", [0, -256, 256.0, True])
    def test_rejects_invalid_tile_size(
        self, geodetic_profile: Profile, tile_size: object
    ) -> None:
        """Test tile size must be a positive integer."""
        with pytest.raises(InvalidArgumentError, match="tile_size="):
            TileAddress.root(geodetic_profile).pixel_extent(tile_size)  # type: ignore[arg-type]


class TestMapSize:
    """Tests for map_size_tiles and map_size_pixels."""

    def test_examples(self) -> None:
        """Test tile 256 at level 4 spans 4096 pixels and 16 tiles."""
        assert map_size_pixels(256, 4) == 4096
        assert map_size_tiles(4) == 16

    def test_methods_use_address_level(self, geodetic_profile: Profile) -> None:
        """Test the method forms use the address's own level."""
        address = TileAddress(0, 0, 4, geodetic_profile)
        assert address.map_size_pixels(256) == 4096
        assert address.map_size_tiles() == 16

    def test_method_default_tile_size(self, geodetic_profile: Profile) -> None:
        """Test the method form falls back to the configured tile size."""
        address = TileAddress(0, 0, 3, geodetic_profile)
        assert address.map_size_pixels() == quadtile_settings.DEFAULT_TILE_SIZE << 3

    @pytest.mark.parametrize("tile_size", [0, -256, 256.0, True])
    def test_method_rejects_invalid_tile_size(
        self, geodetic_profile: Profile, tile_size: object
    ) -> None:
        """Test the method form validates tile_size like pixel_extent does."""
        address = TileAddress(0, 0, 4, geodetic_profile)
        with pytest.raises(InvalidArgumentError, match="tile_size="):
            address.map_size_pixels(tile_size)  # type: ignore[arg-type]

    def test_root_level(self) -> None:
        """Test level 0 is one tile wide."""
        assert map_size_tiles(0) == 1
        assert map_size_pixels(256, 0) == 256

    def test_tiles_exact_at_max_level(self) -> None:
        """Test tile counts are exact integers at the deepest level."""
        assert map_size_tiles(MAX_LEVEL) == 2**31

    def test_tiles_overflow_past_max_level(self) -> None:
        """Test the tile count fails once it no longer fits 32 bits."""
        with pytest.raises(ArithmeticOverflowError) as exc_info:
            map_size_tiles(MAX_LEVEL + 1)
        assert exc_info.value.limit_bits == 32

    def test_pixels_at_limit(self) -> None:
        """Test the largest representable pixel span."""
        assert map_size_pixels(256, 55) == 1 << 63

    def test_pixels_overflow(self) -> None:
        """Test pixel spans past 64 bits fail rather than wrap."""
        with pytest.raises(ArithmeticOverflowError) as exc_info:
            map_size_pixels(256, 56)
        assert exc_info.value.limit_bits == 64

    def test_pixels_huge_level_fails_fast(self) -> None:
        """Test absurd levels are rejected without building the number."""
        with pytest.raises(ArithmeticOverflowError):
            map_size_pixels(1, 10**12)

    @pytest.mark.parametrize("level", [-1, 2.0, None])
    def test_rejects_invalid_level(self, level: object) -> None:
        """Test levels must be non-negative integers."""
        with pytest.raises(InvalidArgumentError, match="level="):
            map_size_tiles(level)  # type: ignore[arg-type]
        with pytest.raises(InvalidArgumentError, match="level="):
            map_size_pixels(256, level)  # type: ignore[arg-type]

    @given(
        tile_size=st.integers(min_value=1, max_value=4096),
        level=st.integers(min_value=0, max_value=MAX_LEVEL),
    )
    def test_pixels_are_tiles_times_size(self, tile_size: int, level: int) -> None:
        """Test pixel span equals tile count times tile size."""
        assert map_size_pixels(tile_size, level) == map_size_tiles(level) * tile_size


class TestGeographicExtent:
    """Tests for TileAddress.geographic_extent."""

    def test_root_covers_profile(self, geodetic_profile: Profile) -> None:
        """Test the root tile spans (-180, -90, 180, 90)."""
        extent = TileAddress.root(geodetic_profile).geographic_extent()
        assert extent.to_tuple() == (-180.0, -90.0, 180.0, 90.0)
        assert extent.srs == geodetic_profile.srs

    def test_row_zero_is_north(self, geodetic_profile: Profile) -> None:
        """Test row 0 touches the north edge and the last row the south edge."""
        north = TileAddress(0, 0, 1, geodetic_profile).geographic_extent()
        south = TileAddress(0, 1, 1, geodetic_profile).geographic_extent()
        assert north.to_tuple() == (-180.0, 0.0, 0.0, 90.0)
        assert south.to_tuple() == (-180.0, -90.0, 0.0, 0.0)

    def test_column_grows_east(self, geodetic_profile: Profile) -> None:
        """Test higher columns lie further east."""
        extent = TileAddress(3, 1, 2, geodetic_profile).geographic_extent()
        assert extent.to_tuple() == (90.0, 0.0, 180.0, 45.0)

    def test_bounds_tuple(self, geodetic_profile: Profile) -> None:
        """Test geographic_bounds mirrors geographic_extent."""
        address = TileAddress(2, 1, 2, geodetic_profile)
        assert address.geographic_bounds() == address.geographic_extent().to_tuple()

    def test_mercator_quadrants(self, mercator_profile: Profile) -> None:
        """Test the web mercator level-1 top-right tile is the north-east quarter."""
        extent = TileAddress(1, 0, 1, mercator_profile).geographic_extent()
        half = mercator_profile.extent.xmax
        assert extent.to_tuple() == (0.0, 0.0, half, half)
        assert str(extent.srs) == "EPSG:3857"

    def test_local_profile_offset(self, local_profile: Profile) -> None:
        """Test projected extents are offset from the profile origin."""
        extent = TileAddress(1, 1, 2, local_profile).geographic_extent()
        assert extent.to_tuple() == (500256.0, 4000256.0, 500512.0, 4000384.0)

    def test_out_of_grid_lies_outside_profile(self, geodetic_profile: Profile) -> None:
        """Test an out-of-grid address yields bounds beyond the profile."""
        extent = TileAddress(2, 0, 1, geodetic_profile).geographic_extent()
        assert extent.xmin == 180.0
        assert extent.xmax == 360.0

    @pytest.mark.parametrize("profile", PARTITION_PROFILES, ids=lambda p: str(p.srs))
    @settings(max_examples=200)
    @given(
        level=st.integers(min_value=0, max_value=24),
        data=st.data(),
    )
    def test_children_partition_parent(
        self, profile: Profile, level: int, data: st.DataObject
    ) -> None:
        """Test the four children exactly tile the parent's extent."""
        size = 1 << level
        column = data.draw(st.integers(min_value=0, max_value=size - 1))
        row = data.draw(st.integers(min_value=0, max_value=size - 1))
        parent = TileAddress(column, row, level, profile)
        outer = parent.geographic_extent()
        tl, tr, bl, br = (c.geographic_extent() for c in parent.children())

        # Outer corners coincide with the parent
        assert (tl.xmin, tl.ymax) == (outer.xmin, outer.ymax)
        assert (tr.xmax, tr.ymax) == (outer.xmax, outer.ymax)
        assert (bl.xmin, bl.ymin) == (outer.xmin, outer.ymin)
        assert (br.xmax, br.ymin) == (outer.xmax, outer.ymin)

        # Shared edges meet with no gap or overlap
        assert tl.xmax == tr.xmin == bl.xmax == br.xmin
        assert tl.ymin == bl.ymax == tr.ymin == br.ymax

        # No two children overlap and their areas sum to the parent's
        children = [tl, tr, bl, br]
        for i, a in enumerate(children):
            for b in children[i + 1 :]:
                assert not a.intersects(b)
        assert sum(c.area for c in children) == pytest.approx(outer.area)

    @pytest.mark.parametrize("profile", PARTITION_PROFILES, ids=lambda p: str(p.srs))
    @given(level=st.integers(min_value=0, max_value=MAX_LEVEL))
    def test_row_extents_do_not_drift(self, profile: Profile, level: int) -> None:
        """Test the last row and column land exactly on the profile edges."""
        last = (1 << level) - 1
        extent = TileAddress(last, last, level, profile).geographic_extent()
        assert extent.xmax == profile.extent.xmax
        assert extent.ymin == profile.extent.ymin

    @pytest.mark.parametrize("profile", PARTITION_PROFILES, ids=lambda p: str(p.srs))
    @given(level=st.integers(min_value=1, max_value=MAX_LEVEL), data=st.data())
    def test_neighbours_share_edges(
        self, profile: Profile, level: int, data: st.DataObject
    ) -> None:
        """Test adjacent tiles meet on bit-identical edges."""
        last = (1 << level) - 1
        column = data.draw(st.integers(min_value=0, max_value=last - 1))
        row = data.draw(st.integers(min_value=0, max_value=last - 1))
        here = TileAddress(column, row, level, profile).geographic_extent()
        east = TileAddress(column + 1, row, level, profile).geographic_extent()
        south = TileAddress(column, row + 1, level, profile).geographic_extent()
        assert here.xmax == east.xmin
        assert here.ymin == south.ymax

    def test_deepest_mercator_tile(self, mercator_profile: Profile) -> None:
        """Test a tile at MAX_LEVEL still yields a well-formed extent."""
        last = (1 << MAX_LEVEL) - 1
        extent = TileAddress(last, 0, MAX_LEVEL, mercator_profile).geographic_extent()
        assert extent.xmax == mercator_profile.extent.xmax
        assert extent.ymax == mercator_profile.extent.ymax
        assert extent.xmin <= extent.xmax
        assert extent.ymin <= extent.ymax

    def test_result_is_geo_extent(self, geodetic_profile: Profile) -> None:
        assert isinstance(
            TileAddress.root(geodetic_profile).geographic_extent(), GeoExtent
        )
