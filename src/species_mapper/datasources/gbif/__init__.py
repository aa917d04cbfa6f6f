"""GBIF species occurrence data source.

Searches the GBIF occurrence API for one species at a time inside a WKT
geometry and returns the raw result rows. Normalization lives in
``analysis.normalize``.

Public API:
  - client: OCCURRENCE_SEARCH, PAGE_SIZE, get_occurrences_paginated
  - occurrences: fetch_occurrences, fetch_species_batches, REQUIRED_FIELDS
"""

from species_mapper.datasources.gbif.client import (
    OCCURRENCE_SEARCH,
    PAGE_SIZE,
    get_occurrences_paginated,
)
from species_mapper.datasources.gbif.occurrences import (
    DEFAULT_LIMIT,
    REQUIRED_FIELDS,
    fetch_occurrences,
    fetch_species_batches,
)

__all__ = [
    "DEFAULT_LIMIT",
    "OCCURRENCE_SEARCH",
    "PAGE_SIZE",
    "REQUIRED_FIELDS",
    "fetch_occurrences",
    "fetch_species_batches",
    "get_occurrences_paginated",
]
