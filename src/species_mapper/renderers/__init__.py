"""Pure rendering functions: records and rasters -> map objects / HTML.

All renderers follow the same pattern:
  - Input: OccurrenceRecords, RasterSurface, or plain values
  - Output: a folium Map or an HTML fragment string
  - No side effects, no I/O, no Prefect decorators

Used by flows/build.py (static page) and app/server.py (live form).

Public API:
  - occurrence_map: build_occurrence_map, build_popup_html, embed_map_html
  - raster_overlay: colorize_surface, elevation_colormap
  - species_palette: SpeciesStyle, build_species_palette

Adding a map layer
------------------
1. Create ``renderers/{name}.py`` with a function that takes data and a
   ``folium.Map`` (or returns a folium element)::

       def add_mylayer(m: folium.Map, data: ...) -> folium.Map:
           folium.GeoJson(..., name="My layer").add_to(m)
           return m

2. HTML inside popups or headers comes from a Jinja2 template in
   ``templates/{name}.html.j2`` rendered with ``render_template``.

3. Call it from ``build_occurrence_map`` before the ``LayerControl`` is added.

4. Add tests: call your function with sample data and assert the map HTML
   (``m.get_root().render()``) contains expected content.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import jinja2

# Shared Jinja2 environment for all renderers
_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"
_jinja_env = jinja2.Environment(
    loader=jinja2.FileSystemLoader(str(_TEMPLATE_DIR)),
    autoescape=True,
)


def render_template(template_name: str, **kwargs: Any) -> str:
    """Render a Jinja2 template by name."""
    return _jinja_env.get_template(template_name).render(**kwargs)
