"""
Prefect flows for the data pipeline.

Flows:
- fetch: Download the region boundary, GBIF occurrences and elevation raster
- build: Join elevation onto occurrences and write a static map page

Usage (local):
    python -m species_mapper.flows.fetch
    python -m species_mapper.flows.build

Usage (Prefect):
    prefect server start  # Optional, for dashboard
    prefect deployment run 'fetch-data/default'
"""
