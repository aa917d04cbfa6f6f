"""Species Mapper - GBIF occurrences joined with elevation, mapped and filtered.

Architecture::

    datasources/   External data (GBIF occurrences, GADM boundaries, elevation rasters)
    store.py       Tiered cache with TTL (reference → historical → derived)
    analysis/      Normalize occurrences, join elevation, filter by UI selections
    renderers/     Pure data → folium map / HTML fragments
    flows/         Prefect orchestration (fetch persists inputs, build renders site)
    app/           Shiny web form driving the filter engine
    services/      Shared utilities (HTTP client with retry)

Data flow: datasources → store → analysis (normalize → join) → filters → renderers

Extension points (see each package's docstring for step-by-step guides):
  - New data source:   datasources/__init__.py
  - New analysis:      analysis/__init__.py
  - New map layer:     renderers/__init__.py
"""

__version__ = "0.1.0"
__author__ = "Michael Howden"

from species_mapper.config import Settings
from species_mapper.schemas import FilterCriteria, OccurrenceRecord

__all__ = ["FilterCriteria", "OccurrenceRecord", "Settings", "__version__"]
