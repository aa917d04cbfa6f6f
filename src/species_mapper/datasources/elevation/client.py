"""Elevation raster download locations.

Country rasters are the 30 arc-second SRTM-derived grids, masked to the
country outline, as served by geodata.ucdavis.edu.
"""

from __future__ import annotations

ELEVATION_URL_TEMPLATE = "https://geodata.ucdavis.edu/geodata/elv/cntry/{country}_elv_msk.tif"

# Written in place of NaN when persisting rasters
NODATA = -9999.0


def elevation_url(country: str) -> str:
    """Masked elevation GeoTIFF URL for an ISO3 country code."""
    return ELEVATION_URL_TEMPLATE.format(country=country.upper())
