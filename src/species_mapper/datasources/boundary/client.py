"""GADM download locations.

Data: https://gadm.org/data.html (version 4.1, mirrored by geodata.ucdavis.edu)
"""

from __future__ import annotations

GADM_URL_TEMPLATE = "https://geodata.ucdavis.edu/gadm/gadm4.1/json/gadm41_{country}_1.json.zip"

# Attribute holding the level-1 region name in GADM files
REGION_NAME_FIELD = "NAME_1"


def gadm_url(country: str) -> str:
    """Level-1 boundary archive URL for an ISO3 country code."""
    return GADM_URL_TEMPLATE.format(country=country.upper())
