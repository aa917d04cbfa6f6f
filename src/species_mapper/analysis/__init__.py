"""Occurrence preparation and filtering: the domain logic layer.

Each module is a pure function over in-memory data that the flows and the
web app call in order:

  - normalize: raw GBIF batches -> deduplicated OccurrenceRecords
  - spatial_join: records + RasterSurface -> records with elevation_m
  - filters: records + FilterCriteria -> the visible subset
  - session: immutable per-session context and the filter reducer

Dependency rule: analysis/ imports from datasources/ models only.
It never fetches data or produces HTML.

Adding an analysis module
-------------------------
1. Create ``analysis/{name}.py`` with a pure function::

       from species_mapper.datasources.elevation import RasterSurface
       from species_mapper.schemas import OccurrenceRecord

       def summarize_something(
           records: Sequence[OccurrenceRecord],
           surface: RasterSurface,
       ) -> dict[str, float]:
           ...

2. Rules:
   - Import datasource *models* only (never call fetch functions here).
   - No I/O, no HTTP, no Prefect decorators.
   - Return models or dicts that renderers can consume.

3. Wire into ``flows/build.py`` and/or ``app/server.py``.

4. Re-export in ``__init__.py`` and add tests in ``tests/test_{name}.py``.
"""

from species_mapper.analysis.filters import filter_records, matches, select_all
from species_mapper.analysis.normalize import month_abbrev, normalize_batch, normalize_batches
from species_mapper.analysis.session import (
    FilterChanged,
    FilteredView,
    SessionContext,
    build_session_context,
    context_from_records,
    reduce_filter,
)
from species_mapper.analysis.spatial_join import join_elevation

__all__ = [
    "FilterChanged",
    "FilteredView",
    "SessionContext",
    "build_session_context",
    "context_from_records",
    "filter_records",
    "join_elevation",
    "matches",
    "month_abbrev",
    "normalize_batch",
    "normalize_batches",
    "reduce_filter",
    "select_all",
]
