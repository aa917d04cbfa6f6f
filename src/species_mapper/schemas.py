"""
Domain models for species mapper.

Pydantic models for data passed between the pipeline stages.
These define the canonical schema - datasources return raw rows, the
normalizer turns them into these.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

# =============================================================================
# Configuration
# =============================================================================


class SpeciesTarget(BaseModel):
    """A species to query by scientific name and display by common name."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    scientific_name: str = Field(..., description="Name sent to the occurrence search")
    common_name: str = Field(..., description="Label shown on the map and in filters")


# =============================================================================
# Occurrences
# =============================================================================


class OccurrenceRecord(BaseModel):
    """A single sighting, normalized and optionally joined with elevation.

    Records are immutable; the spatial join returns updated copies.
    """

    model_config = ConfigDict(frozen=True)

    species: str
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    year: int
    month: int = Field(..., ge=1, le=12)
    month_abbrev: str
    basis_of_record: str
    elevation_m: float | None = None

    @property
    def year_char(self) -> str:
        """Year as display text (no thousands separator in popups)."""
        return str(self.year)

    @property
    def coordinate(self) -> tuple[float, float]:
        return (self.latitude, self.longitude)


# =============================================================================
# Filtering
# =============================================================================


class FilterCriteria(BaseModel):
    """Current selection in the web form. All bounds are inclusive."""

    model_config = ConfigDict(frozen=True)

    species: frozenset[str] = Field(default_factory=frozenset)
    year_range: tuple[int, int]
    months: frozenset[str] = Field(default_factory=frozenset)
    elevation_range: tuple[float, float]
