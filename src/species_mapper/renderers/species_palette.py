"""Species colours for map markers and the layer legend."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

# ColorBrewer Dark2 (qualitative, 8 classes)
DARK2 = [
    "#1b9e77",  # teal
    "#d95f02",  # orange
    "#7570b3",  # purple
    "#e7298a",  # pink
    "#66a61e",  # green
    "#e6ab02",  # mustard
    "#a6761d",  # brown
    "#666666",  # grey
]

FALLBACK_COLOR = "#888888"


@dataclass
class SpeciesStyle:
    """Visual style for a species on the map."""

    label: str
    color: str


def build_species_palette(labels: Iterable[str]) -> dict[str, SpeciesStyle]:
    """Assign Dark2 colours to species labels in first-seen order.

    Colours repeat after eight species.
    """
    palette: dict[str, SpeciesStyle] = {}
    for label in labels:
        if label in palette:
            continue
        color = DARK2[len(palette) % len(DARK2)]
        palette[label] = SpeciesStyle(label=label, color=color)
    return palette
