"""Build a session context from the files the fetch flow persisted."""

from __future__ import annotations

from typing import TYPE_CHECKING

from species_mapper.analysis.session import SessionContext, context_from_records
from species_mapper.datasources.elevation import RasterSurface, read_geotiff
from species_mapper.exceptions import DataUnavailableError
from species_mapper.serialization import records_from_rows
from species_mapper.store import DataStore, region_paths

if TYPE_CHECKING:
    from pathlib import Path

    from species_mapper.config import Settings
    from species_mapper.schemas import OccurrenceRecord


def load_records(store: DataStore, path: Path) -> list[OccurrenceRecord]:
    """Read the normalized occurrence table.

    Raises:
        DataUnavailableError: If the table hasn't been fetched.
        MalformedRecordError: If a row can't be parsed.
    """
    rows = store.read_table(path)
    if rows is None:
        msg = f"Occurrence table not found: {store.resolve(path)}"
        raise DataUnavailableError(msg)
    return records_from_rows(rows)


def load_surface(store: DataStore, path: Path) -> RasterSurface:
    """Read the cropped elevation raster (raises DataUnavailableError if missing)."""
    return read_geotiff(store.resolve(path))


def load_session_context(store: DataStore, settings: Settings) -> SessionContext:
    """Load the configured region's table and raster, then join them once."""
    paths = region_paths(settings.country, settings.region)
    records = load_records(store, paths.occurrences)
    surface = load_surface(store, paths.elevation)
    return context_from_records(records, surface)
