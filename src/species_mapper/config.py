"""
Application settings.

Values come from environment variables prefixed with ``SPECIES_MAPPER_`` or a
local ``.env`` file, e.g.::

    SPECIES_MAPPER_REGION=Wyoming
    SPECIES_MAPPER_OCCURRENCE_LIMIT=500
"""

from __future__ import annotations

from datetime import date
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from species_mapper.datasources.boundary.client import gadm_url as default_boundary_url
from species_mapper.datasources.elevation.client import elevation_url as default_elevation_url
from species_mapper.reference.species import DEFAULT_SPECIES
from species_mapper.schemas import SpeciesTarget


class Settings(BaseSettings):
    """Runtime configuration for fetching, building and serving."""

    model_config = SettingsConfigDict(
        env_prefix="SPECIES_MAPPER_",
        env_file=".env",
        extra="ignore",
    )

    app_name: str = "species-mapper"
    app_env: str = "development"
    debug: bool = False

    data_dir: Path = Path("data")

    # Region of interest
    country: str = "USA"
    region: str = "Colorado"
    boundary_url: str | None = None
    elevation_url: str | None = None

    # Occurrence query
    species: list[SpeciesTarget] = Field(default_factory=lambda: list(DEFAULT_SPECIES))
    occurrence_limit: int = Field(default=2000, gt=0)

    # Web form
    app_host: str = "127.0.0.1"
    app_port: int = 8000
    year_min: int = 1800
    year_max: int = Field(default_factory=lambda: date.today().year)
    elevation_min: float = 1000.0
    elevation_max: float = 4500.0

    @property
    def resolved_boundary_url(self) -> str:
        return self.boundary_url or default_boundary_url(self.country)

    @property
    def resolved_elevation_url(self) -> str:
        return self.elevation_url or default_elevation_url(self.country)

    @property
    def species_labels(self) -> list[str]:
        """Display labels in query order."""
        return [target.common_name for target in self.species]


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings (read once)."""
    return Settings()
