"""Per-session data and the filter reducer.

A ``SessionContext`` is built once (normalize, then join) and handed to the
web app and the static build explicitly. Every change to the form becomes a
``FilterChanged`` event; ``reduce_filter`` maps it to the visible records
without touching any rendering code.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from species_mapper.analysis.filters import filter_records
from species_mapper.analysis.normalize import normalize_batches
from species_mapper.analysis.spatial_join import join_elevation

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from species_mapper.datasources.elevation import RasterSurface
    from species_mapper.schemas import FilterCriteria, OccurrenceRecord


@dataclass(frozen=True)
class SessionContext:
    """Joined occurrences plus the surface they were joined against."""

    records: tuple[OccurrenceRecord, ...]
    surface: RasterSurface

    @property
    def species(self) -> list[str]:
        """Species labels in first-seen order."""
        return list(dict.fromkeys(r.species for r in self.records))

    @property
    def year_span(self) -> tuple[int, int] | None:
        if not self.records:
            return None
        years = [r.year for r in self.records]
        return (min(years), max(years))


@dataclass(frozen=True)
class FilterChanged:
    """The form's selection changed."""

    criteria: FilterCriteria


@dataclass(frozen=True)
class FilteredView:
    """Result of applying one selection to the session's records."""

    criteria: FilterCriteria
    records: tuple[OccurrenceRecord, ...]

    @property
    def count(self) -> int:
        return len(self.records)

    @property
    def is_empty(self) -> bool:
        return not self.records


def context_from_records(
    records: Iterable[OccurrenceRecord],
    surface: RasterSurface,
) -> SessionContext:
    """Join already-normalized records (e.g. loaded from the store)."""
    return SessionContext(records=tuple(join_elevation(records, surface)), surface=surface)


def build_session_context(
    batches: Sequence[tuple[str, Iterable[dict[str, Any]]]],
    surface: RasterSurface,
) -> SessionContext:
    """Normalize raw ``(label, rows)`` batches and join them with elevation.

    Raises:
        MalformedRecordError: If any kept row can't be normalized.
    """
    return context_from_records(normalize_batches(batches), surface)


def reduce_filter(context: SessionContext, event: FilterChanged) -> FilteredView:
    """Pure reducer: selection in, visible records out."""
    return FilteredView(
        criteria=event.criteria,
        records=tuple(filter_records(context.records, event.criteria)),
    )
