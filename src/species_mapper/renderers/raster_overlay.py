"""Elevation raster colouring for the map overlay."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
from branca.colormap import LinearColormap

if TYPE_CHECKING:
    from species_mapper.datasources.elevation import RasterSurface

# R's terrain.colors(6): low green through tan to near-white peaks
ELEVATION_COLORS = ["#00a600", "#63c600", "#e6e600", "#eab64e", "#eeb99f", "#f2f2f2"]


def colorize_surface(
    surface: RasterSurface,
    vmin: float | None = None,
    vmax: float | None = None,
    colors: list[str] | None = None,
) -> np.ndarray:
    """
    Map elevation values to an RGBA image for ``folium.ImageOverlay``.

    Args:
        surface: Elevation grid; NaN cells become fully transparent.
        vmin: Value mapped to the first colour (default: surface minimum).
        vmax: Value mapped to the last colour (default: surface maximum).
        colors: Hex colour ramp (default: ``ELEVATION_COLORS``).

    Returns:
        uint8 array of shape (rows, cols, 4).
    """
    colors = colors or ELEVATION_COLORS
    values = surface.values
    valid = ~np.isnan(values)
    rgba = np.zeros((*values.shape, 4), dtype="uint8")
    if not valid.any():
        return rgba

    low = float(np.nanmin(values)) if vmin is None else vmin
    high = float(np.nanmax(values)) if vmax is None else vmax
    span = (high - low) or 1.0
    scaled = np.clip((np.where(valid, values, low) - low) / span, 0.0, 1.0)

    unit = LinearColormap(colors, vmin=0.0, vmax=1.0)
    stops = np.array(unit.index, dtype="float64")
    ramp = np.array([unit.rgb_bytes_tuple(stop) for stop in unit.index], dtype="float64")
    for channel in range(3):
        rgba[..., channel] = np.interp(scaled, stops, ramp[:, channel]).round().astype("uint8")
    rgba[..., 3] = np.where(valid, 255, 0)
    return rgba


def elevation_colormap(
    vmin: float,
    vmax: float,
    colors: list[str] | None = None,
) -> LinearColormap:
    """Legend matching ``colorize_surface``."""
    return LinearColormap(
        colors or ELEVATION_COLORS,
        vmin=vmin,
        vmax=vmax,
        caption="Elevation (m)",
    )
