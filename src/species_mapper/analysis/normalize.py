"""Turn raw per-species occurrence batches into one table of records.

Per batch: tag with the display label, drop repeated coordinates (first row
wins), keep only the fields the map needs. Batches are then concatenated in
input order and each month is converted to its abbreviation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from species_mapper.exceptions import MalformedRecordError
from species_mapper.reference.months import MONTH_ABBREVIATIONS
from species_mapper.schemas import OccurrenceRecord

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence


def month_abbrev(month: Any) -> str:
    """Three-letter abbreviation for a month number (1 -> "Jan").

    Raises:
        MalformedRecordError: If ``month`` is missing, not a whole number,
            or outside 1-12.
    """
    if month is None or isinstance(month, bool):
        msg = f"Month must be a number 1-12, got {month!r}"
        raise MalformedRecordError(msg)
    try:
        number = float(month)
    except (TypeError, ValueError):
        msg = f"Month must be a number 1-12, got {month!r}"
        raise MalformedRecordError(msg) from None
    if not number.is_integer() or not 1 <= number <= 12:  # noqa: PLR2004
        msg = f"Month must be a number 1-12, got {month!r}"
        raise MalformedRecordError(msg)
    return MONTH_ABBREVIATIONS[int(number) - 1]


def _required(row: dict[str, Any], field: str) -> Any:
    value = row.get(field)
    if value is None:
        msg = f"Occurrence row is missing {field!r}: {row}"
        raise MalformedRecordError(msg)
    return value


def _to_record(row: dict[str, Any], label: str) -> OccurrenceRecord:
    """Project a raw GBIF row onto the record fields."""
    month = _required(row, "month")
    abbrev = month_abbrev(month)
    return OccurrenceRecord(
        species=label,
        latitude=float(_required(row, "decimalLatitude")),
        longitude=float(_required(row, "decimalLongitude")),
        year=int(_required(row, "year")),
        month=int(float(month)),
        month_abbrev=abbrev,
        basis_of_record=str(row.get("basisOfRecord") or ""),
    )


def normalize_batch(rows: Iterable[dict[str, Any]], label: str) -> list[OccurrenceRecord]:
    """
    Deduplicate and project one species' rows.

    Args:
        rows: Raw rows with ``decimalLatitude``, ``decimalLongitude``,
            ``year``, ``month`` and ``basisOfRecord`` (other keys ignored).
        label: Display name attached as ``species``.

    Returns:
        Records in input order; a row whose (lat, lon) was already seen in
        this batch is dropped silently.

    Raises:
        MalformedRecordError: If a kept row has a bad month or lacks a field.
    """
    seen: set[tuple[float, float]] = set()
    records: list[OccurrenceRecord] = []
    for row in rows:
        coordinate = (
            float(_required(row, "decimalLatitude")),
            float(_required(row, "decimalLongitude")),
        )
        if coordinate in seen:
            continue
        seen.add(coordinate)
        records.append(_to_record(row, label))
    return records


def normalize_batches(
    batches: Sequence[tuple[str, Iterable[dict[str, Any]]]],
) -> list[OccurrenceRecord]:
    """Normalize ``(label, rows)`` batches and concatenate them in order."""
    records: list[OccurrenceRecord] = []
    for label, rows in batches:
        records.extend(normalize_batch(rows, label))
    return records
