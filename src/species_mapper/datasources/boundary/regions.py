"""Region boundary fetching and selection."""

from __future__ import annotations

import tempfile
import zipfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import geopandas as gpd
from shapely.geometry import mapping, shape
from shapely.geometry.base import BaseGeometry

from species_mapper.datasources.boundary import client
from species_mapper.exceptions import DataUnavailableError
from species_mapper.reference.geography import BoundingBox
from species_mapper.services.http import download

# =============================================================================
# Data Model
# =============================================================================


@dataclass(frozen=True)
class RegionBoundary:
    """Polygon of one administrative region (lon/lat, EPSG:4326)."""

    country: str
    name: str
    geometry: BaseGeometry

    @property
    def bbox(self) -> BoundingBox:
        return BoundingBox.from_geometry(self.geometry)

    def to_dict(self) -> dict[str, Any]:
        """JSON-compatible form for the store."""
        return {
            "country": self.country,
            "name": self.name,
            "geometry": mapping(self.geometry),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RegionBoundary:
        return cls(
            country=data["country"],
            name=data["name"],
            geometry=shape(data["geometry"]),
        )


# =============================================================================
# Selection
# =============================================================================


def _extract_vector(archive_or_file: Path, workdir: Path) -> Path:
    """Return a readable vector file, unpacking a GADM ``.zip`` if needed."""
    if archive_or_file.suffix != ".zip":
        return archive_or_file
    with zipfile.ZipFile(archive_or_file) as zf:
        members = [m for m in zf.namelist() if m.endswith((".json", ".geojson"))]
        if not members:
            msg = f"No GeoJSON member in {archive_or_file.name}"
            raise DataUnavailableError(msg)
        return Path(zf.extract(members[0], path=workdir))


def select_region(
    path: Path,
    region: str,
    *,
    name_field: str = client.REGION_NAME_FIELD,
) -> BaseGeometry:
    """
    Read a boundary file and return the (dissolved) geometry of one region.

    Args:
        path: Vector file readable by geopandas.
        region: Value of ``name_field`` to select, e.g. ``"Colorado"``.
        name_field: Attribute column holding region names.

    Raises:
        DataUnavailableError: If no feature matches ``region``.
    """
    gdf = gpd.read_file(path)
    if gdf.crs is not None and gdf.crs.to_epsg() != 4326:
        gdf = gdf.to_crs(epsg=4326)
    match = gdf[gdf[name_field] == region]
    if match.empty:
        msg = f"Region {region!r} not found in {path.name} ({name_field})"
        raise DataUnavailableError(msg)
    return match.geometry.union_all()


# =============================================================================
# API Fetching
# =============================================================================


def fetch_region_boundary(
    country: str,
    region: str,
    *,
    url: str | None = None,
) -> RegionBoundary:
    """
    Download GADM level-1 boundaries and return one region's polygon.

    Args:
        country: ISO3 country code (``"USA"``).
        region: Level-1 region name (``"Colorado"``).
        url: Override the GADM archive URL (zip or plain GeoJSON).

    Raises:
        requests.HTTPError: If the download fails.
        DataUnavailableError: If the archive lacks the region.
    """
    url = url or client.gadm_url(country)
    with tempfile.TemporaryDirectory() as tmp:
        workdir = Path(tmp)
        fetched = download(url, workdir / Path(url).name)
        vector = _extract_vector(fetched, workdir)
        geometry = select_region(vector, region)
    return RegionBoundary(country=country, name=region, geometry=geometry)
