"""Elevation raster download, cropping and GeoTIFF I/O."""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np
import rasterio
import rasterio.mask
from shapely.geometry import box, mapping

from species_mapper.datasources.elevation import client
from species_mapper.datasources.elevation.surface import GEOGRAPHIC_CRS, RasterSurface
from species_mapper.exceptions import DataUnavailableError
from species_mapper.services.http import download

if TYPE_CHECKING:
    from shapely.geometry.base import BaseGeometry


def download_elevation(url: str, dest: Path) -> Path:
    """Download a country elevation GeoTIFF to ``dest``."""
    return download(url, dest)


def crop_to_boundary(src_path: Path, geometry: BaseGeometry) -> RasterSurface:
    """
    Crop a raster to the bounding box of a region polygon.

    Only the extent is cut. Cells inside the box but outside the polygon keep
    their elevation.

    Args:
        src_path: Single-band raster in a geographic (lon/lat) CRS.
        geometry: Region polygon in lon/lat.

    Returns:
        RasterSurface with NaN only where the source has no-data.

    Raises:
        DataUnavailableError: If the raster is projected or doesn't overlap.
    """
    with rasterio.open(src_path) as src:
        if src.crs is not None and not src.crs.is_geographic:
            msg = f"{src_path.name} is in {src.crs}; expected a lon/lat raster"
            raise DataUnavailableError(msg)
        try:
            extent = box(*geometry.bounds)
            data, transform = rasterio.mask.mask(
                src, [mapping(extent)], crop=True, filled=False, all_touched=True
            )
        except ValueError as exc:
            msg = f"{src_path.name} does not overlap the region boundary"
            raise DataUnavailableError(msg) from exc
        crs = src.crs.to_string() if src.crs is not None else GEOGRAPHIC_CRS

    band = np.ma.masked_invalid(data[0].astype("float64"))
    return RasterSurface(values=band.filled(np.nan), transform=transform, crs=crs)


def write_geotiff(surface: RasterSurface, path: Path) -> Path:
    """Persist a surface as a single-band float32 GeoTIFF."""
    path.parent.mkdir(parents=True, exist_ok=True)
    rows, cols = surface.shape
    data = np.where(np.isnan(surface.values), client.NODATA, surface.values).astype("float32")
    with rasterio.open(
        path,
        "w",
        driver="GTiff",
        height=rows,
        width=cols,
        count=1,
        dtype="float32",
        crs=surface.crs,
        transform=surface.transform,
        nodata=client.NODATA,
    ) as dst:
        dst.write(data, 1)
    return path


def read_geotiff(path: Path) -> RasterSurface:
    """Load a persisted single-band raster.

    Raises:
        DataUnavailableError: If the file doesn't exist.
    """
    if not path.exists():
        msg = f"Elevation raster not found: {path}"
        raise DataUnavailableError(msg)
    with rasterio.open(path) as src:
        band = src.read(1, masked=True).astype("float64")
        crs = src.crs.to_string() if src.crs is not None else GEOGRAPHIC_CRS
        transform = src.transform
    return RasterSurface(values=band.filled(np.nan), transform=transform, crs=crs)


def fetch_region_elevation(
    country: str,
    geometry: BaseGeometry,
    *,
    url: str | None = None,
) -> RasterSurface:
    """
    Download a country elevation raster and crop it to a region.

    Args:
        country: ISO3 country code.
        geometry: Region polygon used for cropping.
        url: Override the raster URL.

    Raises:
        requests.HTTPError: If the download fails.
        DataUnavailableError: If the raster can't be cropped to the region.
    """
    url = url or client.elevation_url(country)
    with tempfile.TemporaryDirectory() as tmp:
        raster_path = download_elevation(url, Path(tmp) / Path(url).name)
        return crop_to_boundary(raster_path, geometry)
