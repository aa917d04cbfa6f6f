"""External data source integrations.

Each subdirectory is one data source with a consistent structure:

    datasources/{name}/
    ├── __init__.py       # Public API re-exports
    ├── client.py         # API URLs, constants, paging
    ├── models.py         # Dataclasses for fetched data (optional)
    └── {feature}.py      # Fetch functions (one per endpoint/concept)

Current sources:
  - gbif:       species occurrence search (raw rows)
  - boundary:   GADM administrative boundaries (shapely geometry)
  - elevation:  country elevation raster, cropped to a boundary (RasterSurface)

Adding a new datasource
-----------------------
1. Create ``datasources/{name}/`` with files above.
   See ``boundary/`` for a minimal example, ``gbif/`` for a paginated one.

2. Write fetch functions that return dicts or dataclasses::

       from species_mapper.services.http import session

       def fetch_something(region) -> dict[str, Any]:
           resp = session.get(API_URL, params={...})
           resp.raise_for_status()
           return resp.json()

3. Re-export public API in ``__init__.py`` with ``__all__``.

4. Wire into the pipeline (see ``flows/fetch.py``):
   - Add a ``@task`` that calls your fetch function
   - Pick a store tier + path (e.g. ``reference/mydata.json``)
   - Call ``store.write(path, data, source="...", valid_until=...)``
   - Add the task call to ``fetch_all()``

5. Add tests in ``tests/test_{name}.py``.
"""
