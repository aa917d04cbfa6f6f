"""Attach elevation sampled from a raster to each occurrence."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from species_mapper.datasources.elevation import RasterSurface
    from species_mapper.schemas import OccurrenceRecord


def join_elevation(
    records: Iterable[OccurrenceRecord],
    surface: RasterSurface,
) -> list[OccurrenceRecord]:
    """Sample ``surface`` at each record's (longitude, latitude).

    Uses the value of the cell containing the point. Points outside the grid
    or on no-data cells get ``elevation_m=None``. Any existing elevation is
    replaced, so joining twice gives the same result as joining once.

    Returns:
        New records in input order.
    """
    return [
        record.model_copy(
            update={"elevation_m": surface.sample(record.longitude, record.latitude)}
        )
        for record in records
    ]
