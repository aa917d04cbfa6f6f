"""Tests for elevation raster cropping and GeoTIFF I/O."""

from __future__ import annotations

import shutil
from typing import TYPE_CHECKING
from unittest.mock import patch

import numpy as np
import pytest
import rasterio
from affine import Affine
from shapely.geometry import Polygon, box

from species_mapper.datasources.elevation import (
    NODATA,
    RasterSurface,
    crop_to_boundary,
    elevation_url,
    fetch_region_elevation,
    read_geotiff,
    write_geotiff,
)
from species_mapper.exceptions import DataUnavailableError

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def country_tif(tmp_path: Path) -> Path:
    """10x10 one-degree grid from (-110, 45) with value = 1000 + 10 * row + col."""
    values = 1000 + 10 * np.arange(10)[:, None] + np.arange(10)[None, :]
    path = tmp_path / "USA_elv_msk.tif"
    with rasterio.open(
        path,
        "w",
        driver="GTiff",
        height=10,
        width=10,
        count=1,
        dtype="float32",
        crs="EPSG:4326",
        transform=Affine(1.0, 0.0, -110.0, 0.0, -1.0, 45.0),
        nodata=NODATA,
    ) as dst:
        dst.write(values.astype("float32"), 1)
    return path


class TestElevationUrl:
    def test_country_in_filename(self) -> None:
        assert elevation_url("USA").endswith("/USA_elv_msk.tif")


class TestCropToBoundary:
    """Test masking a country raster to a region polygon."""

    def test_crops_to_polygon_extent(self, country_tif: Path) -> None:
        surface = crop_to_boundary(country_tif, box(-108.0, 40.0, -105.0, 43.0))

        assert surface.shape == (3, 3)
        assert surface.bounds == pytest.approx((-108.0, 40.0, -105.0, 43.0))
        # Upper-left cell of the crop is row 2, col 2 of the source
        assert surface.sample(-107.5, 42.5) == 1022.0

    def test_outside_polygon_keeps_elevation(self, country_tif: Path) -> None:
        # The north-east half of the extent lies outside the triangle
        triangle = Polygon([(-108.0, 40.0), (-105.0, 40.0), (-108.0, 43.0)])
        surface = crop_to_boundary(country_tif, triangle)

        assert surface.shape == (3, 3)
        assert surface.sample(-107.5, 40.5) == 1042.0
        assert surface.sample(-105.5, 42.5) == 1024.0

    def test_partial_edge_cells_kept(self, country_tif: Path) -> None:
        """Cells only partly inside an unaligned box are still sampled."""
        surface = crop_to_boundary(country_tif, box(-107.7, 40.3, -105.2, 42.8))

        assert surface.sample(-107.7, 42.8) == 1022.0
        assert surface.sample(-105.2, 40.3) == 1044.0

    def test_source_nodata_stays_nodata(self, tmp_path: Path) -> None:
        values = np.full((4, 4), 1500.0, dtype="float32")
        values[1, 1] = NODATA
        path = tmp_path / "holes.tif"
        with rasterio.open(
            path,
            "w",
            driver="GTiff",
            height=4,
            width=4,
            count=1,
            dtype="float32",
            crs="EPSG:4326",
            transform=Affine(1.0, 0.0, 0.0, 0.0, -1.0, 4.0),
            nodata=NODATA,
        ) as dst:
            dst.write(values, 1)

        surface = crop_to_boundary(path, Polygon([(0.0, 0.0), (4.0, 0.0), (0.0, 4.0)]))

        assert surface.sample(1.5, 2.5) is None
        assert surface.sample(3.5, 3.5) == 1500.0

    def test_no_overlap_raises(self, country_tif: Path) -> None:
        with pytest.raises(DataUnavailableError, match="overlap"):
            crop_to_boundary(country_tif, box(10.0, 10.0, 11.0, 11.0))

    def test_projected_raster_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "projected.tif"
        with rasterio.open(
            path,
            "w",
            driver="GTiff",
            height=2,
            width=2,
            count=1,
            dtype="float32",
            crs="EPSG:32613",
            transform=Affine(30.0, 0.0, 500000.0, 0.0, -30.0, 4400000.0),
        ) as dst:
            dst.write(np.ones((2, 2), dtype="float32"), 1)

        with pytest.raises(DataUnavailableError, match="lon/lat"):
            crop_to_boundary(path, box(-105.0, 39.0, -104.0, 40.0))


class TestGeoTiffRoundTrip:
    """Test persisting the cropped surface."""

    def test_nodata_survives(self, tmp_path: Path, surface: RasterSurface) -> None:
        path = write_geotiff(surface, tmp_path / "nested" / "region.tif")
        restored = read_geotiff(path)

        assert restored.shape == surface.shape
        assert restored.bounds == pytest.approx(surface.bounds)
        assert restored.sample(-105.0, 40.0) == 1600.0
        assert restored.sample(-106.0, 41.0) is None

    def test_written_with_nodata_value(self, tmp_path: Path, surface: RasterSurface) -> None:
        path = write_geotiff(surface, tmp_path / "region.tif")
        with rasterio.open(path) as src:
            assert src.nodata == NODATA
            assert src.read(1)[2, 2] == NODATA

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(DataUnavailableError, match="not found"):
            read_geotiff(tmp_path / "missing.tif")


class TestFetchRegionElevation:
    """Test download + crop with the network mocked out."""

    def test_downloads_and_crops(self, country_tif: Path) -> None:
        def fake_download(_url: str, dest: Path) -> Path:
            shutil.copy(country_tif, dest)
            return dest

        with patch(
            "species_mapper.datasources.elevation.raster.download", side_effect=fake_download
        ) as mock_download:
            surface = fetch_region_elevation("USA", box(-108.0, 40.0, -105.0, 43.0))

        assert mock_download.call_args.args[0] == elevation_url("USA")
        assert surface.shape == (3, 3)
