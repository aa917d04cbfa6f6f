"""Leaflet map of occurrences over the elevation raster (via folium).

Points are grouped into one layer per species and coloured from the species
palette; each popup shows the record's metadata. The elevation raster sits
underneath with a legend.
"""

from __future__ import annotations

import html
from typing import TYPE_CHECKING

import folium

from species_mapper.renderers import render_template
from species_mapper.renderers.raster_overlay import colorize_surface, elevation_colormap
from species_mapper.renderers.species_palette import (
    FALLBACK_COLOR,
    SpeciesStyle,
    build_species_palette,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from species_mapper.datasources.elevation import RasterSurface
    from species_mapper.schemas import OccurrenceRecord

RASTER_OPACITY = 0.8
DEFAULT_TILES = "OpenStreetMap"
MARKER_RADIUS = 4


def _format_elevation(elevation_m: float | None) -> str:
    return "NA" if elevation_m is None else f"{elevation_m:.0f}"


def build_popup_html(record: OccurrenceRecord) -> str:
    """Popup body: record type, year, month and elevation."""
    return render_template(
        "occurrence_popup.html.j2",
        species=record.species,
        fields=[
            ("Record Type", record.basis_of_record),
            ("Year", record.year_char),
            ("Month", record.month_abbrev),
            ("Elevation (m)", _format_elevation(record.elevation_m)),
        ],
    )


def _layer_name(style: SpeciesStyle) -> str:
    """LayerControl entry with a coloured dot, doubling as the species legend."""
    return f'<span style="color:{style.color}">&#9679;</span> {html.escape(style.label)}'


def _add_elevation_layer(m: folium.Map, surface: RasterSurface) -> None:
    value_range = surface.value_range()
    if value_range is None:
        return
    vmin, vmax = value_range
    west, south, east, north = surface.bounds
    folium.raster_layers.ImageOverlay(
        image=colorize_surface(surface, vmin, vmax),
        bounds=[[south, west], [north, east]],
        opacity=RASTER_OPACITY,
        name="Elevation (m)",
    ).add_to(m)
    elevation_colormap(vmin, vmax).add_to(m)


def build_occurrence_map(
    records: Sequence[OccurrenceRecord],
    surface: RasterSurface,
    *,
    palette: dict[str, SpeciesStyle] | None = None,
    tiles: str = DEFAULT_TILES,
) -> folium.Map:
    """
    Build an interactive map of occurrences over the elevation surface.

    Args:
        records: Points to draw (already filtered). May be empty.
        surface: Elevation raster drawn beneath the points; also sets the view.
        palette: Species colours. Pass the full palette so colours and layer
            entries stay stable when some species are filtered out.
        tiles: Basemap name understood by folium.

    Returns:
        A folium Map; use ``embed_map_html`` or ``Map.save`` to output it.
    """
    west, south, east, north = surface.bounds
    m = folium.Map(
        location=[(south + north) / 2, (west + east) / 2],
        tiles=tiles,
        zoom_start=6,
        control_scale=True,
    )
    _add_elevation_layer(m, surface)

    palette = dict(palette) if palette else build_species_palette(r.species for r in records)
    groups: dict[str, folium.FeatureGroup] = {}
    for label, style in palette.items():
        groups[label] = folium.FeatureGroup(name=_layer_name(style)).add_to(m)

    for record in records:
        if record.species not in groups:
            style = SpeciesStyle(label=record.species, color=FALLBACK_COLOR)
            palette[record.species] = style
            groups[record.species] = folium.FeatureGroup(name=_layer_name(style)).add_to(m)
        color = palette[record.species].color
        folium.CircleMarker(
            location=(record.latitude, record.longitude),
            radius=MARKER_RADIUS,
            color=color,
            weight=1,
            fill=True,
            fill_color=color,
            fill_opacity=0.9,
            popup=folium.Popup(build_popup_html(record), max_width=260),
            tooltip=record.species,
        ).add_to(groups[record.species])

    folium.LayerControl(collapsed=False).add_to(m)
    m.fit_bounds([[south, west], [north, east]])
    return m


def embed_map_html(m: folium.Map) -> str:
    """Self-contained iframe markup for embedding the map in another page."""
    return m._repr_html_()
