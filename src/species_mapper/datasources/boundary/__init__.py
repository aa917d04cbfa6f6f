"""GADM administrative boundary data source.

Downloads the level-1 (state/province) boundaries for a country and selects
one region. The region's extent bounds the occurrence search and its polygon
crops the elevation raster.

Public API:
  - client: GADM_URL_TEMPLATE, gadm_url
  - regions: RegionBoundary, fetch_region_boundary, select_region
"""

from species_mapper.datasources.boundary.client import GADM_URL_TEMPLATE, gadm_url
from species_mapper.datasources.boundary.regions import (
    RegionBoundary,
    fetch_region_boundary,
    select_region,
)

__all__ = [
    "GADM_URL_TEMPLATE",
    "RegionBoundary",
    "fetch_region_boundary",
    "gadm_url",
    "select_region",
]
