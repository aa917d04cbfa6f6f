"""In-memory elevation raster with nearest-cell sampling."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
from affine import Affine

GEOGRAPHIC_CRS = "EPSG:4326"


@dataclass(frozen=True, eq=False)
class RasterSurface:
    """Single-band elevation grid referenced to lon/lat.

    ``values`` is a read-only float64 array (rows north → south) with no-data
    stored as NaN. ``transform`` maps (col, row) to (lon, lat) of the cell's
    upper-left corner, as rasterio does.
    """

    values: np.ndarray
    transform: Affine
    crs: str = GEOGRAPHIC_CRS

    def __post_init__(self) -> None:
        values = np.array(self.values, dtype="float64")
        if values.ndim != 2:
            msg = f"Raster values must be 2-D, got shape {values.shape}"
            raise ValueError(msg)
        values.setflags(write=False)
        object.__setattr__(self, "values", values)

    @property
    def shape(self) -> tuple[int, int]:
        return self.values.shape  # type: ignore[return-value]

    @property
    def bounds(self) -> tuple[float, float, float, float]:
        """(west, south, east, north) of the full grid."""
        rows, cols = self.shape
        xs = [self.transform.c, self.transform.c + cols * self.transform.a]
        ys = [self.transform.f, self.transform.f + rows * self.transform.e]
        return (min(xs), min(ys), max(xs), max(ys))

    def cell_index(self, lon: float, lat: float) -> tuple[int, int] | None:
        """Row/col of the cell containing the point, or None outside the grid.

        The extent is closed: a point on the east or south edge falls in the
        last column or row.
        """
        west, south, east, north = self.bounds
        if not (west <= lon <= east and south <= lat <= north):
            return None
        col_f, row_f = ~self.transform @ (lon, lat)
        rows, cols = self.shape
        row = min(max(math.floor(row_f), 0), rows - 1)
        col = min(max(math.floor(col_f), 0), cols - 1)
        return (row, col)

    def sample(self, lon: float, lat: float) -> float | None:
        """Elevation of the cell containing (lon, lat).

        Returns None outside the grid or on a no-data cell, never 0.
        """
        index = self.cell_index(lon, lat)
        if index is None:
            return None
        value = self.values[index]
        if np.isnan(value):
            return None
        return float(value)

    def value_range(self) -> tuple[float, float] | None:
        """(min, max) over valid cells, None if every cell is no-data."""
        if np.isnan(self.values).all():
            return None
        return (float(np.nanmin(self.values)), float(np.nanmax(self.values)))
