"""GBIF occurrence API client: URLs, paging limits, paginated search.

API docs: https://techdocs.gbif.org/en/openapi/v1/occurrence
"""

from __future__ import annotations

from typing import Any

from species_mapper.exceptions import QuotaExceededError
from species_mapper.services.http import session

API_BASE = "https://api.gbif.org/v1"
OCCURRENCE_SEARCH = f"{API_BASE}/occurrence/search"

# GBIF caps a single search page at 300 rows
PAGE_SIZE = 300

HTTP_TOO_MANY_REQUESTS = 429


def get_occurrences_paginated(params: dict[str, Any], limit: int) -> list[dict[str, Any]]:
    """
    Page through the occurrence search until ``limit`` rows or end of records.

    Args:
        params: Search parameters (``scientificName``, ``geometry``, ...).
            ``limit`` and ``offset`` are managed here.
        limit: Maximum number of rows to return.

    Returns:
        Raw result dicts in API order.

    Raises:
        QuotaExceededError: If GBIF still answers 429 after the session retries.
        requests.HTTPError: For any other non-2xx response.
    """
    rows: list[dict[str, Any]] = []
    offset = 0
    while len(rows) < limit:
        page_size = min(PAGE_SIZE, limit - len(rows))
        resp = session.get(
            OCCURRENCE_SEARCH,
            params={**params, "limit": page_size, "offset": offset},
        )
        if resp.status_code == HTTP_TOO_MANY_REQUESTS:
            msg = f"GBIF rate limit exceeded at offset {offset} for {params}"
            raise QuotaExceededError(msg)
        resp.raise_for_status()

        data = resp.json()
        page: list[dict[str, Any]] = data.get("results", [])
        rows.extend(page)
        offset += len(page)

        if data.get("endOfRecords", True) or not page:
            break

    return rows[:limit]
