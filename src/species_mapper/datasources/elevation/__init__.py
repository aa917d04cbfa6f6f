"""Elevation raster data source.

Provides the elevation surface the occurrences are joined against: a country
raster downloaded once, cropped to the region's bounding box, and persisted as a
GeoTIFF for the standalone app.

Public API:
  - client: ELEVATION_URL_TEMPLATE, NODATA, elevation_url
  - surface: RasterSurface
  - raster: fetch_region_elevation, download_elevation, crop_to_boundary,
    read_geotiff, write_geotiff
"""

from species_mapper.datasources.elevation.client import (
    ELEVATION_URL_TEMPLATE,
    NODATA,
    elevation_url,
)
from species_mapper.datasources.elevation.raster import (
    crop_to_boundary,
    download_elevation,
    fetch_region_elevation,
    read_geotiff,
    write_geotiff,
)
from species_mapper.datasources.elevation.surface import RasterSurface

__all__ = [
    "ELEVATION_URL_TEMPLATE",
    "NODATA",
    "RasterSurface",
    "crop_to_boundary",
    "download_elevation",
    "elevation_url",
    "fetch_region_elevation",
    "read_geotiff",
    "write_geotiff",
]
