"""Geographic bounds for occurrence queries."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from shapely.geometry.base import BaseGeometry


@dataclass(frozen=True)
class BoundingBox:
    """West/south/east/north lon-lat bounding box."""

    west: float
    south: float
    east: float
    north: float

    @classmethod
    def from_geometry(cls, geometry: BaseGeometry) -> BoundingBox:
        """Extent of a shapely geometry."""
        west, south, east, north = geometry.bounds
        return cls(west=west, south=south, east=east, north=north)

    def as_wkt(self) -> str:
        """Counter-clockwise WKT polygon, the ring order GBIF expects."""
        w, s, e, n = self.west, self.south, self.east, self.north
        return f"POLYGON(({w} {s},{e} {s},{e} {n},{w} {n},{w} {s}))"

