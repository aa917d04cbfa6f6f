"""Interactive web form over a loaded session.

- context: load the stored table and raster into a ``SessionContext``
- server: the Shiny UI, server function and ``create_app``
"""

from species_mapper.app.context import load_session_context
from species_mapper.app.server import create_app, criteria_from_inputs

__all__ = ["create_app", "criteria_from_inputs", "load_session_context"]
