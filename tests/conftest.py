"""Shared fixtures: a small elevation grid and the Elk sample rows."""

from __future__ import annotations

from typing import Any

import numpy as np
import pytest
from affine import Affine

from species_mapper.datasources.elevation import RasterSurface

# 1-degree cells from (-108, 43) down to (-104, 39).
# (lat 40, lon -105) lands in row 3 / col 3; (lat 41, lon -106) in row 2 / col 2.
GRID = [
    [3000.0, 3100.0, 3200.0, 3300.0],
    [2500.0, 2600.0, 2700.0, 2800.0],
    [2000.0, 2100.0, np.nan, 2300.0],
    [1300.0, 1400.0, 1500.0, 1600.0],
]


@pytest.fixture
def surface() -> RasterSurface:
    return RasterSurface(
        values=np.array(GRID),
        transform=Affine(1.0, 0.0, -108.0, 0.0, -1.0, 43.0),
    )


@pytest.fixture
def elk_rows() -> list[dict[str, Any]]:
    """Three raw rows: one original, its duplicate from a later year, one elsewhere."""
    return [
        {
            "decimalLatitude": 40.0,
            "decimalLongitude": -105.0,
            "year": 2015,
            "month": 6,
            "basisOfRecord": "OBSERVATION",
        },
        {
            "decimalLatitude": 40.0,
            "decimalLongitude": -105.0,
            "year": 2016,
            "month": 6,
            "basisOfRecord": "OBSERVATION",
        },
        {
            "decimalLatitude": 41.0,
            "decimalLongitude": -106.0,
            "year": 2019,
            "month": 1,
            "basisOfRecord": "OBSERVATION",
        },
    ]
