"""
Prefect flow for fetching the inputs of a mapping session.

Downloads the region boundary (GADM), per-species occurrences (GBIF) and the
elevation raster, normalizes the occurrences, and persists everything in the
data store. Sources that are still fresh are skipped.

Run locally:
    python -m species_mapper.flows.fetch

Run with Prefect dashboard:
    prefect server start &
    python -m species_mapper.flows.fetch
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import TYPE_CHECKING, Any

from prefect import flow, task
from prefect.cache_policies import NO_CACHE

from species_mapper.analysis.normalize import normalize_batches
from species_mapper.config import get_settings
from species_mapper.datasources import boundary as boundary_source
from species_mapper.datasources import elevation, gbif
from species_mapper.datasources.boundary import RegionBoundary
from species_mapper.serialization import TABLE_COLUMNS, records_to_rows
from species_mapper.store import DataStore, region_paths

if TYPE_CHECKING:
    from species_mapper.datasources.elevation import RasterSurface
    from species_mapper.schemas import OccurrenceRecord, SpeciesTarget

# Data store with tiered directories
store = DataStore(get_settings().data_dir)

REFERENCE_TTL = timedelta(days=90)
OCCURRENCE_TTL = timedelta(days=7)


@task(name="fetch-boundary", retries=2, retry_delay_seconds=5)
def fetch_boundary(country: str, region: str, url: str | None = None) -> RegionBoundary:
    """Fetch the GADM level-1 polygon for a region."""
    return boundary_source.fetch_region_boundary(country, region, url=url)


@task(name="save-boundary", cache_policy=NO_CACHE)
def save_boundary(boundary: RegionBoundary, path: Path) -> Path:
    """Save the region polygon via store."""
    return store.write(
        path,
        boundary.to_dict(),
        source="gadm.org",
        valid_until=datetime.now(UTC) + REFERENCE_TTL,
    )


@task(name="fetch-occurrences", retries=2, retry_delay_seconds=10, cache_policy=NO_CACHE)
def fetch_occurrences(target: SpeciesTarget, geometry: str, limit: int) -> list[dict[str, Any]]:
    """Fetch raw GBIF rows for one species inside the region's bounding box."""
    return gbif.fetch_occurrences(target.scientific_name, geometry, limit=limit)


@task(name="normalize-occurrences", cache_policy=NO_CACHE)
def normalize_occurrences(
    batches: list[tuple[str, list[dict[str, Any]]]],
) -> list[OccurrenceRecord]:
    """Deduplicate, project and merge the per-species batches."""
    return normalize_batches(batches)


@task(name="save-occurrences", cache_policy=NO_CACHE)
def save_occurrences(records: list[OccurrenceRecord], path: Path, region: str) -> Path:
    """Save the normalized (pre-join) occurrence table via store."""
    return store.write_table(
        path,
        records_to_rows(records),
        TABLE_COLUMNS,
        source="gbif.org",
        valid_until=datetime.now(UTC) + OCCURRENCE_TTL,
        region=region,
    )


@task(name="fetch-elevation", retries=2, retry_delay_seconds=10, cache_policy=NO_CACHE)
def fetch_elevation(
    country: str, boundary: RegionBoundary, url: str | None = None
) -> RasterSurface:
    """Download the country elevation raster and crop it to the region."""
    return elevation.fetch_region_elevation(country, boundary.geometry, url=url)


@task(name="save-elevation", cache_policy=NO_CACHE)
def save_elevation(surface: RasterSurface, path: Path) -> Path:
    """Write the cropped raster as GeoTIFF with sidecar metadata."""
    full = elevation.write_geotiff(surface, store.resolve(path))
    store.mark(
        path,
        source="geodata.ucdavis.edu",
        valid_until=datetime.now(UTC) + REFERENCE_TTL,
        shape=list(surface.shape),
    )
    return full


@flow(name="fetch-data", log_prints=True)
def fetch_all(country: str | None = None, region: str | None = None) -> dict[str, Any]:
    """
    Fetch boundary, occurrences and elevation for a region.

    This is the main Prefect flow that orchestrates data fetching.
    Sources whose stored copy is still fresh are skipped.
    """
    settings = get_settings()
    country = country or settings.country
    region = region or settings.region
    paths = region_paths(country, region)
    results: dict[str, Any] = {"country": country, "region": region}

    # --- Boundary ---
    if store.is_fresh(paths.boundary):
        print(f"{region} boundary is fresh, skipping fetch.")
        boundary = RegionBoundary.from_dict(store.read(paths.boundary))
    else:
        print(f"Fetching {region} boundary...")
        boundary = fetch_boundary(country, region, settings.resolved_boundary_url)
        saved = save_boundary(boundary, paths.boundary)
        print(f"Saved boundary to {saved}")

    bbox = boundary.bbox
    results["bbox"] = [bbox.west, bbox.south, bbox.east, bbox.north]

    # --- Occurrences ---
    if store.is_fresh(paths.occurrences):
        print("Occurrence table is fresh, skipping fetch.")
        results["occurrences"] = len(store.read_table(paths.occurrences) or [])
    else:
        geometry = bbox.as_wkt()
        batches: list[tuple[str, list[dict[str, Any]]]] = []
        for target in settings.species:
            print(f"Fetching {target.common_name} ({target.scientific_name})...")
            rows = fetch_occurrences(target, geometry, settings.occurrence_limit)
            print(f"  {len(rows)} rows with coordinates and dates")
            batches.append((target.common_name, rows))

        records = normalize_occurrences(batches)
        saved = save_occurrences(records, paths.occurrences, region)
        print(f"Saved {len(records)} unique occurrences to {saved}")
        results["occurrences"] = len(records)

    # --- Elevation ---
    if store.is_fresh(paths.elevation):
        print("Elevation raster is fresh, skipping fetch.")
    else:
        print(f"Fetching elevation for {region}...")
        surface = fetch_elevation(country, boundary, settings.resolved_elevation_url)
        saved = save_elevation(surface, paths.elevation)
        print(f"Saved {surface.shape[0]}x{surface.shape[1]} elevation grid to {saved}")

    results["elevation"] = str(store.resolve(paths.elevation))
    return results


if __name__ == "__main__":
    result = fetch_all()
    print(f"Flow complete: {result}")
