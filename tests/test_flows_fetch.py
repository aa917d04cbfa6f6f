"""
Tests for the fetch flow module.
"""

from __future__ import annotations

import json
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import TYPE_CHECKING, Any
from unittest.mock import Mock, patch

from shapely.geometry import box

from species_mapper.datasources.boundary import RegionBoundary
from species_mapper.datasources.elevation import read_geotiff, write_geotiff
from species_mapper.flows import fetch
from species_mapper.schemas import SpeciesTarget
from species_mapper.store import DataStore, region_paths

if TYPE_CHECKING:
    import pytest

    from species_mapper.datasources.elevation import RasterSurface

COLORADO = RegionBoundary("USA", "Colorado", box(-109.06, 36.99, -102.04, 41.0))
PATHS = region_paths("USA", "Colorado")


class TestFetchOccurrencesTask:
    """Test the per-species fetch task."""

    @patch("species_mapper.datasources.gbif.client.session.get")
    def test_queries_scientific_name_in_bbox(self, mock_get: Mock) -> None:
        mock_response = Mock()
        mock_response.status_code = 200
        mock_response.json.return_value = {
            "results": [
                {
                    "decimalLatitude": 40.0,
                    "decimalLongitude": -105.0,
                    "year": 2015,
                    "month": 6,
                    "basisOfRecord": "OBSERVATION",
                }
            ],
            "endOfRecords": True,
        }
        mock_response.raise_for_status = Mock()
        mock_get.return_value = mock_response
        target = SpeciesTarget(scientific_name="Cervus canadensis", common_name="Elk")

        rows = fetch.fetch_occurrences(target, COLORADO.bbox.as_wkt(), 2000)

        assert len(rows) == 1
        params = mock_get.call_args.kwargs["params"]
        assert params["scientificName"] == "Cervus canadensis"
        assert params["geometry"].startswith("POLYGON((-109.06 36.99")
        assert params["hasCoordinate"] == "true"


class TestSaveTasks:
    """Test persisting each source."""

    def test_save_boundary(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(fetch, "store", DataStore(tmp_path))

        saved = fetch.save_boundary(COLORADO, PATHS.boundary)

        envelope = json.loads(saved.read_text())
        assert envelope["meta"]["source"] == "gadm.org"
        assert envelope["data"]["name"] == "Colorado"
        assert envelope["data"]["geometry"]["type"] == "Polygon"

    def test_save_occurrences(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        elk_rows: list[dict[str, Any]],
    ) -> None:
        ds = DataStore(tmp_path)
        monkeypatch.setattr(fetch, "store", ds)
        records = fetch.normalize_occurrences([("Elk", elk_rows)])

        saved = fetch.save_occurrences(records, PATHS.occurrences, "Colorado")

        assert saved == tmp_path / "historical/occurrences/usa_colorado.csv"
        assert len(ds.read_table(PATHS.occurrences) or []) == 2
        assert ds.read_meta(PATHS.occurrences)["region"] == "Colorado"
        assert ds.is_fresh(PATHS.occurrences)

    def test_save_elevation(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, surface: RasterSurface
    ) -> None:
        ds = DataStore(tmp_path)
        monkeypatch.setattr(fetch, "store", ds)

        saved = fetch.save_elevation(surface, PATHS.elevation)

        assert read_geotiff(saved).sample(-105.0, 40.0) == 1600.0
        assert ds.read_meta(PATHS.elevation)["shape"] == [4, 4]
        assert ds.is_fresh(PATHS.elevation)


class TestFetchAllFlow:
    """Test the main fetch flow."""

    @patch("species_mapper.flows.fetch.elevation.fetch_region_elevation")
    @patch("species_mapper.flows.fetch.gbif.fetch_occurrences")
    @patch("species_mapper.flows.fetch.boundary_source.fetch_region_boundary")
    def test_fetch_all(
        self,
        mock_boundary: Mock,
        mock_occurrences: Mock,
        mock_elevation: Mock,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        elk_rows: list[dict[str, Any]],
        surface: RasterSurface,
    ) -> None:
        """Fetch boundary, every species and the raster, then persist them."""
        monkeypatch.setattr(fetch, "store", DataStore(tmp_path))
        mock_boundary.return_value = COLORADO
        mock_occurrences.return_value = elk_rows
        mock_elevation.return_value = surface

        result = fetch.fetch_all(country="USA", region="Colorado")

        assert result["region"] == "Colorado"
        assert result["bbox"] == [-109.06, 36.99, -102.04, 41.0]
        # Default species list has three targets, two unique rows each
        assert mock_occurrences.call_count == 3
        assert result["occurrences"] == 6
        assert mock_elevation.call_args.args[1].equals(COLORADO.geometry)

        assert (tmp_path / "reference/boundary/usa_colorado.json").exists()
        assert (tmp_path / "historical/occurrences/usa_colorado.csv").exists()
        assert (tmp_path / "reference/elevation/usa_colorado.tif").exists()
        assert (tmp_path / "reference/elevation/usa_colorado.tif.meta.json").exists()

    @patch("species_mapper.flows.fetch.elevation.fetch_region_elevation")
    @patch("species_mapper.flows.fetch.gbif.fetch_occurrences")
    @patch("species_mapper.flows.fetch.boundary_source.fetch_region_boundary")
    def test_fresh_sources_skipped(
        self,
        mock_boundary: Mock,
        mock_occurrences: Mock,
        mock_elevation: Mock,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        surface: RasterSurface,
    ) -> None:
        """Nothing is downloaded when every stored file is still valid."""
        ds = DataStore(tmp_path)
        monkeypatch.setattr(fetch, "store", ds)
        future = datetime.now(UTC) + timedelta(days=1)
        ds.write(PATHS.boundary, COLORADO.to_dict(), source="test", valid_until=future)
        ds.write_table(
            PATHS.occurrences,
            [{"species": "Elk"}],
            ["species"],
            source="test",
            valid_until=future,
        )
        write_geotiff(surface, ds.resolve(PATHS.elevation))
        ds.mark(PATHS.elevation, source="test", valid_until=future)

        result = fetch.fetch_all(country="USA", region="Colorado")

        mock_boundary.assert_not_called()
        mock_occurrences.assert_not_called()
        mock_elevation.assert_not_called()
        assert result["occurrences"] == 1
        assert result["elevation"] == str(tmp_path / Path("reference/elevation/usa_colorado.tif"))
