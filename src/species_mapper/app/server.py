"""
Shiny app: a filter form next to the occurrence map.

The form has four controls (species, year range, months, elevation range).
Every change is turned into a ``FilterChanged`` event and reduced against the
session context; only the map and the match count are re-rendered.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from shiny import App, Inputs, Outputs, Session, reactive, render, ui

from species_mapper.analysis.session import FilterChanged, FilteredView, reduce_filter
from species_mapper.reference.months import MONTH_ABBREVIATIONS
from species_mapper.renderers import render_template
from species_mapper.renderers.occurrence_map import build_occurrence_map, embed_map_html
from species_mapper.renderers.species_palette import build_species_palette
from species_mapper.schemas import FilterCriteria

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from species_mapper.analysis.session import SessionContext
    from species_mapper.config import Settings
    from species_mapper.renderers.species_palette import SpeciesStyle


def criteria_from_inputs(
    species: Iterable[str] | None,
    year: tuple[int, int],
    months: Iterable[str] | None,
    elevation: tuple[float, float],
) -> FilterCriteria:
    """Translate raw form values into filter criteria.

    An unticked checkbox group arrives as ``None`` or an empty tuple; both
    mean "nothing selected".
    """
    low_year, high_year = year
    low_elev, high_elev = elevation
    return FilterCriteria(
        species=frozenset(species or ()),
        year_range=(int(low_year), int(high_year)),
        months=frozenset(months or ()),
        elevation_range=(float(low_elev), float(high_elev)),
    )


def match_summary(view: FilteredView) -> str:
    if view.is_empty:
        return "No occurrences match the current filters."
    noun = "occurrence" if view.count == 1 else "occurrences"
    return f"Showing {view.count} {noun}."


def build_ui(context: SessionContext, settings: Settings) -> ui.Tag:
    """Page layout: title and intro, form in the sidebar, map in the main panel."""
    species = list(dict.fromkeys([*settings.species_labels, *context.species]))
    return ui.page_fluid(
        ui.panel_title(f"Species of {settings.region}"),
        ui.HTML(render_template("intro.html.j2", region=settings.region, interactive=True)),
        ui.layout_sidebar(
            ui.sidebar(
                ui.input_checkbox_group(
                    "species", "Species:", choices=species, selected=species
                ),
                ui.input_slider(
                    "year",
                    "Year:",
                    min=settings.year_min,
                    max=settings.year_max,
                    value=(settings.year_min, settings.year_max),
                    step=1,
                    sep="",
                ),
                ui.input_checkbox_group(
                    "month",
                    "Month:",
                    choices=list(MONTH_ABBREVIATIONS),
                    selected=list(MONTH_ABBREVIATIONS),
                    inline=True,
                ),
                ui.input_slider(
                    "elevation",
                    "Elevation (m):",
                    min=settings.elevation_min,
                    max=settings.elevation_max,
                    value=(settings.elevation_min, settings.elevation_max),
                ),
                width=320,
            ),
            ui.output_text("match_count"),
            ui.output_ui("occurrence_map"),
        ),
    )


def make_server(
    context: SessionContext, palette: dict[str, SpeciesStyle]
) -> Callable[[Inputs, Outputs, Session], None]:
    """Server function wiring the form inputs to the map and match count."""

    def server(input: Inputs, output: Outputs, session: Session) -> None:  # noqa: A002, ARG001
        @reactive.calc
        def view() -> FilteredView:
            criteria = criteria_from_inputs(
                input.species(), input.year(), input.month(), input.elevation()
            )
            return reduce_filter(context, FilterChanged(criteria))

        @output
        @render.text
        def match_count() -> str:
            return match_summary(view())

        @output
        @render.ui
        def occurrence_map() -> ui.HTML:
            m = build_occurrence_map(view().records, context.surface, palette=palette)
            return ui.HTML(embed_map_html(m))

    return server


def create_app(context: SessionContext, settings: Settings) -> App:
    """
    Build the Shiny app for one session.

    Args:
        context: Joined records and surface, loaded once at startup.
        settings: Region name and slider bounds.

    Returns:
        A ``shiny.App`` ready for ``shiny.run_app``.
    """
    # Full palette up front so colours don't shift as species are toggled
    palette = build_species_palette([*settings.species_labels, *context.species])
    return App(build_ui(context, settings), make_server(context, palette))
