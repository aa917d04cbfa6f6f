"""Default species list: Elk, Marmot, Tiger Salamander (Colorado's state amphibian)."""

from __future__ import annotations

from species_mapper.schemas import SpeciesTarget

DEFAULT_SPECIES: tuple[SpeciesTarget, ...] = (
    SpeciesTarget(scientific_name="Cervus canadensis", common_name="Elk"),
    SpeciesTarget(scientific_name="Marmota flaviventris", common_name="Yellow-bellied Marmot"),
    SpeciesTarget(scientific_name="Ambystoma mavortium", common_name="Western Tiger Salamander"),
)
