"""Flat-table serialization for occurrence records.

The persisted table keeps the column names of the GBIF download so the file
is readable on its own::

    species, decimalLatitude, decimalLongitude, year, month, basisOfRecord, year_char

``month`` is written as its abbreviation ("Jun"). Elevation is not stored;
it is joined again when the table is loaded.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from species_mapper.analysis.normalize import month_abbrev
from species_mapper.exceptions import MalformedRecordError
from species_mapper.reference.months import MONTH_ABBREVIATIONS
from species_mapper.schemas import OccurrenceRecord

if TYPE_CHECKING:
    from collections.abc import Iterable

TABLE_COLUMNS = [
    "species",
    "decimalLatitude",
    "decimalLongitude",
    "year",
    "month",
    "basisOfRecord",
    "year_char",
]


def records_to_rows(records: Iterable[OccurrenceRecord]) -> list[dict[str, Any]]:
    """Serialize records to table rows (pre-join columns only)."""
    return [
        {
            "species": r.species,
            "decimalLatitude": r.latitude,
            "decimalLongitude": r.longitude,
            "year": r.year,
            "month": r.month_abbrev,
            "basisOfRecord": r.basis_of_record,
            "year_char": r.year_char,
        }
        for r in records
    ]


def _month_number(value: Any) -> int:
    """Accept either an abbreviation or a month number."""
    if isinstance(value, str) and value.strip() in MONTH_ABBREVIATIONS:
        return MONTH_ABBREVIATIONS.index(value.strip()) + 1
    return MONTH_ABBREVIATIONS.index(month_abbrev(value)) + 1


def records_from_rows(rows: Iterable[dict[str, Any]]) -> list[OccurrenceRecord]:
    """Rebuild records from table rows, preserving row order.

    Raises:
        MalformedRecordError: If a row has an unreadable month or misses a column.
    """
    records: list[OccurrenceRecord] = []
    for row in rows:
        try:
            month = _month_number(row["month"])
            records.append(
                OccurrenceRecord(
                    species=str(row["species"]),
                    latitude=float(row["decimalLatitude"]),
                    longitude=float(row["decimalLongitude"]),
                    year=int(row["year"]),
                    month=month,
                    month_abbrev=MONTH_ABBREVIATIONS[month - 1],
                    basis_of_record=str(row.get("basisOfRecord") or ""),
                )
            )
        except KeyError as exc:
            msg = f"Occurrence table row is missing column {exc}: {row}"
            raise MalformedRecordError(msg) from None
    return records
