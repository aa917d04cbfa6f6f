"""Static reference data.

Constants that don't change with API calls, such as the default species list
and the month lookup.

Adding a new module:
1. Create ``reference/{name}.py`` with constants/dataclasses
2. Re-export from this ``__init__.py``
"""

from species_mapper.reference.geography import BoundingBox as BoundingBox
from species_mapper.reference.months import MONTH_ABBREVIATIONS as MONTH_ABBREVIATIONS
from species_mapper.reference.species import DEFAULT_SPECIES as DEFAULT_SPECIES
