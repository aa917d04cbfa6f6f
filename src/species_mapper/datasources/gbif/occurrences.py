"""Occurrence fetching for a list of species."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from species_mapper.datasources.gbif import client

if TYPE_CHECKING:
    from collections.abc import Sequence

    from species_mapper.schemas import SpeciesTarget

# Per-species cap used by the tutorial
DEFAULT_LIMIT = 2000

# Rows missing any of these can't be placed on the map or the month filter
REQUIRED_FIELDS = ("decimalLatitude", "decimalLongitude", "year", "month")


def _is_complete(row: dict[str, Any]) -> bool:
    """Check a raw row has coordinates and a date. Range checks happen later."""
    return all(row.get(field) is not None for field in REQUIRED_FIELDS)


def fetch_occurrences(
    scientific_name: str,
    geometry: str,
    *,
    has_coordinate: bool = True,
    limit: int = DEFAULT_LIMIT,
) -> list[dict[str, Any]]:
    """
    Fetch raw occurrence rows for one species inside a geometry.

    Args:
        scientific_name: Name to match against the GBIF backbone.
        geometry: WKT polygon (counter-clockwise) bounding the search.
        has_coordinate: Only return georeferenced records.
        limit: Maximum rows to fetch before dropping incomplete ones.

    Returns:
        Raw GBIF rows in API order, excluding rows without coordinates,
        year or month.
    """
    params: dict[str, Any] = {
        "scientificName": scientific_name,
        "hasCoordinate": str(has_coordinate).lower(),
        "geometry": geometry,
    }
    raw = client.get_occurrences_paginated(params, limit=limit)
    return [row for row in raw if _is_complete(row)]


def fetch_species_batches(
    targets: Sequence[SpeciesTarget],
    geometry: str,
    *,
    limit: int = DEFAULT_LIMIT,
) -> list[tuple[str, list[dict[str, Any]]]]:
    """Fetch one batch per species, in list order, labelled with its common name."""
    return [
        (target.common_name, fetch_occurrences(target.scientific_name, geometry, limit=limit))
        for target in targets
    ]
