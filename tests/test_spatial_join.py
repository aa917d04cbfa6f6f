"""Tests for the elevation spatial join and raster sampling."""

from __future__ import annotations

import warnings

import numpy as np
import pytest
from affine import Affine

from species_mapper.analysis.spatial_join import join_elevation
from species_mapper.datasources.elevation import RasterSurface
from species_mapper.schemas import OccurrenceRecord


def _record(lat: float, lon: float, elevation_m: float | None = None) -> OccurrenceRecord:
    return OccurrenceRecord(
        species="Elk",
        latitude=lat,
        longitude=lon,
        year=2015,
        month=6,
        month_abbrev="Jun",
        basis_of_record="OBSERVATION",
        elevation_m=elevation_m,
    )


class TestRasterSurface:
    """Test grid geometry and nearest-cell sampling."""

    def test_bounds(self, surface: RasterSurface) -> None:
        assert surface.bounds == (-108.0, 39.0, -104.0, 43.0)

    def test_shape(self, surface: RasterSurface) -> None:
        assert surface.shape == (4, 4)

    def test_sample_cell_containing_point(self, surface: RasterSurface) -> None:
        """A point inside a cell gets that cell's value."""
        assert surface.sample(-107.5, 42.5) == 3000.0
        assert surface.sample(-104.2, 39.1) == 1600.0

    def test_sample_on_cell_corner(self, surface: RasterSurface) -> None:
        """A shared corner belongs to the cell below-right of it."""
        assert surface.sample(-105.0, 40.0) == 1600.0

    @pytest.mark.parametrize(
        ("lon", "lat", "expected"),
        [
            (-104.0, 41.5, 2800.0),  # east edge -> last column
            (-106.5, 39.0, 1400.0),  # south edge -> last row
            (-104.0, 39.0, 1600.0),  # south-east corner
            (-108.0, 43.0, 3000.0),  # north-west corner
        ],
    )
    def test_sample_on_grid_edge(
        self, surface: RasterSurface, lon: float, lat: float, expected: float
    ) -> None:
        """The extent is closed, so edge points take the adjoining edge cell."""
        assert surface.sample(lon, lat) == expected

    def test_sample_emits_no_warnings(self, surface: RasterSurface) -> None:
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            assert surface.sample(-105.5, 39.5) == 1500.0

    def test_sample_nodata_returns_none(self, surface: RasterSurface) -> None:
        assert surface.sample(-106.0, 41.0) is None

    @pytest.mark.parametrize(("lon", "lat"), [(-110.0, 40.0), (-105.0, 45.0), (-103.9, 40.0)])
    def test_sample_outside_returns_none(
        self, surface: RasterSurface, lon: float, lat: float
    ) -> None:
        """Outside the extent is absent, never zero."""
        assert surface.sample(lon, lat) is None

    def test_values_read_only(self, surface: RasterSurface) -> None:
        with pytest.raises(ValueError):
            surface.values[0, 0] = 1.0

    def test_rejects_non_2d(self) -> None:
        with pytest.raises(ValueError, match="2-D"):
            RasterSurface(values=np.zeros(3), transform=Affine.identity())

    def test_value_range_ignores_nodata(self, surface: RasterSurface) -> None:
        assert surface.value_range() == (1300.0, 3300.0)

    def test_value_range_all_nodata(self) -> None:
        empty = RasterSurface(values=np.full((2, 2), np.nan), transform=Affine.identity())
        assert empty.value_range() is None


class TestJoinElevation:
    """Test attaching elevation to records."""

    def test_elk_scenario_elevations(self, surface: RasterSurface) -> None:
        """(40, -105) -> 1600 m; (41, -106) sits on no-data -> None."""
        joined = join_elevation([_record(40.0, -105.0), _record(41.0, -106.0)], surface)
        assert [r.elevation_m for r in joined] == [1600.0, None]

    def test_idempotent(self, surface: RasterSurface) -> None:
        """Joining twice equals joining once."""
        records = [_record(40.0, -105.0), _record(41.0, -106.0), _record(42.5, -107.5)]
        once = join_elevation(records, surface)
        twice = join_elevation(once, surface)
        assert once == twice

    def test_overwrites_existing_elevation(self, surface: RasterSurface) -> None:
        (joined,) = join_elevation([_record(40.0, -105.0, elevation_m=9999.0)], surface)
        assert joined.elevation_m == 1600.0

    def test_outside_extent_clears_elevation(self, surface: RasterSurface) -> None:
        (joined,) = join_elevation([_record(30.0, -90.0, elevation_m=500.0)], surface)
        assert joined.elevation_m is None

    def test_does_not_mutate_input(self, surface: RasterSurface) -> None:
        record = _record(40.0, -105.0)
        join_elevation([record], surface)
        assert record.elevation_m is None

    def test_preserves_order(self, surface: RasterSurface) -> None:
        records = [_record(42.5, -107.5), _record(39.5, -104.5)]
        joined = join_elevation(records, surface)
        assert [r.coordinate for r in joined] == [r.coordinate for r in records]
