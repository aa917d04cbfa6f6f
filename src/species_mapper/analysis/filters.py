"""Filter predicates for the species / year / month / elevation controls."""

from __future__ import annotations

from typing import TYPE_CHECKING

from species_mapper.reference.months import MONTH_ABBREVIATIONS
from species_mapper.schemas import FilterCriteria

if TYPE_CHECKING:
    from collections.abc import Iterable

    from species_mapper.schemas import OccurrenceRecord


def _in_range(value: float, bounds: tuple[float, float]) -> bool:
    low, high = bounds
    return low <= value <= high


def matches(record: OccurrenceRecord, criteria: FilterCriteria) -> bool:
    """True if the record passes all four filters.

    A record without elevation never passes the elevation range.
    """
    return (
        record.species in criteria.species
        and _in_range(record.year, criteria.year_range)
        and record.month_abbrev in criteria.months
        and record.elevation_m is not None
        and _in_range(record.elevation_m, criteria.elevation_range)
    )


def filter_records(
    records: Iterable[OccurrenceRecord],
    criteria: FilterCriteria,
) -> list[OccurrenceRecord]:
    """Records matching ``criteria``, in input order. Never raises."""
    if not criteria.species or not criteria.months:
        return []
    return [record for record in records if matches(record, criteria)]


def select_all(
    species: Iterable[str],
    year_range: tuple[int, int],
    elevation_range: tuple[float, float],
) -> FilterCriteria:
    """Criteria with every species and month ticked, as the form starts out."""
    return FilterCriteria(
        species=frozenset(species),
        year_range=year_range,
        months=frozenset(MONTH_ABBREVIATIONS),
        elevation_range=elevation_range,
    )
