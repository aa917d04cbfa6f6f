"""
Prefect flow for building a static map page from fetched data.

Loads the occurrence table and elevation raster, joins them, and writes a
single self-contained HTML map (every record, no filters) to the derived tier.

Run locally:
    python -m species_mapper.flows.build
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any

import folium
from prefect import flow, task
from prefect.cache_policies import NO_CACHE

from species_mapper.analysis.session import context_from_records
from species_mapper.app.context import load_records, load_surface
from species_mapper.config import get_settings
from species_mapper.exceptions import DataUnavailableError
from species_mapper.renderers import render_template
from species_mapper.renderers.occurrence_map import build_occurrence_map
from species_mapper.renderers.species_palette import build_species_palette
from species_mapper.store import DataStore, region_paths

if TYPE_CHECKING:
    from pathlib import Path

    from species_mapper.analysis.session import SessionContext
    from species_mapper.datasources.elevation import RasterSurface
    from species_mapper.schemas import OccurrenceRecord

# Data store with tiered directories; the site goes under derived/site/
store = DataStore(get_settings().data_dir)


# =============================================================================
# Data loading tasks
# =============================================================================


@task(name="load-occurrences")
def load_occurrences(path: Path) -> list[OccurrenceRecord] | None:
    """Load the normalized occurrence table from store."""
    try:
        return load_records(store, path)
    except DataUnavailableError:
        return None


@task(name="load-elevation")
def load_elevation(path: Path) -> RasterSurface | None:
    """Load the cropped elevation raster from store."""
    try:
        return load_surface(store, path)
    except DataUnavailableError:
        return None


# =============================================================================
# Main build task and flow
# =============================================================================


@task(name="build-html", cache_policy=NO_CACHE)
def build_html(context: SessionContext, region: str, species_labels: list[str]) -> str:
    """Render the full map page for every record in the session."""
    palette = build_species_palette([*species_labels, *context.species])
    m = build_occurrence_map(context.records, context.surface, palette=palette)
    header = render_template(
        "map_title.html.j2",
        title=f"Species of {region}",
        intro_html=render_template("intro.html.j2", region=region, interactive=False),
        count=len(context.records),
        updated=datetime.now().strftime("%Y-%m-%d %H:%M"),
    )
    m.get_root().html.add_child(folium.Element(header))
    return m.get_root().render()


@task(name="write-site")
def write_site(html: str) -> Path:
    """Write HTML to site directory."""
    site_dir = store.derived / "site"
    site_dir.mkdir(parents=True, exist_ok=True)
    output_path = site_dir / "index.html"
    with output_path.open("w") as f:
        f.write(html)
    return output_path


@flow(name="build-site", log_prints=True)
def build_all(country: str | None = None, region: str | None = None) -> dict[str, Any]:
    """
    Build the static map page from fetched data.

    This is the main Prefect flow that generates the static site.
    """
    settings = get_settings()
    country = country or settings.country
    region = region or settings.region
    paths = region_paths(country, region)

    print("Loading occurrences...")
    records = load_occurrences(paths.occurrences)
    if records is None:
        print("No occurrence table found. Run fetch flow first.")
        return {"error": "no occurrences"}

    print("Loading elevation...")
    surface = load_elevation(paths.elevation)
    if surface is None:
        print("No elevation raster found. Run fetch flow first.")
        return {"error": "no elevation"}

    print(f"Joining elevation onto {len(records)} occurrences...")
    context = context_from_records(records, surface)
    missing = sum(1 for r in context.records if r.elevation_m is None)
    if missing:
        print(f"Warning: {missing} occurrences fall outside the elevation raster.")

    print("Building HTML...")
    html = build_html(context, region, settings.species_labels)

    print("Writing site...")
    output_path = write_site(html)

    print(f"Site built: {output_path}")
    return {"pages": 1, "records": len(context.records), "output": str(output_path)}


if __name__ == "__main__":
    result = build_all()
    print(f"Flow complete: {result}")
