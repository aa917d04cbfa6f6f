"""Tiered data store with freshness-aware caching.

Manages the files a session is built from, organized into tiers by update
frequency:
  - reference/: Static data, 90-day TTL (region boundary, elevation GeoTIFF)
  - historical/: Slow-changing, 7-day TTL (normalized occurrence table)
  - derived/: Computed outputs, always rebuilt (static map site)

JSON files are wrapped in a metadata envelope with ``valid_until`` so the
fetch flow can skip sources that are still fresh.

Tables (CSV) and rasters (GeoTIFF) stay in their native format; freshness
metadata lives in a sidecar ``.meta.json`` next to them.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import pandas as pd


class DataStore:
    """Manages read/write of cached data files with TTL."""

    def __init__(self, base_dir: Path) -> None:
        self.base = base_dir
        self.reference = base_dir / "reference"
        self.historical = base_dir / "historical"
        self.derived = base_dir / "derived"

    # -- JSON envelopes -------------------------------------------------------

    def read(self, path: Path) -> Any | None:
        """Read data payload from a metadata-enveloped JSON file.

        Returns the ``data`` field, or None if the file doesn't exist.
        """
        envelope = self.read_raw(path)
        if envelope is None:
            return None
        return envelope.get("data", envelope)

    def read_raw(self, path: Path) -> dict[str, Any] | None:
        """Read the full envelope (meta + data) from a JSON file."""
        full = self.resolve(path)
        if not full.exists():
            return None
        with full.open() as f:
            result: dict[str, Any] = json.load(f)
        return result

    def write(
        self,
        path: Path,
        data: Any,
        source: str,
        valid_until: datetime | None = None,
        **params: Any,
    ) -> Path:
        """Write data wrapped in a metadata envelope.

        Args:
            path: Relative path under base_dir (e.g. ``reference/boundary.json``).
            data: Payload to store under the ``data`` key.
            source: Data source identifier (e.g. ``"gadm.org"``).
            valid_until: Expiry timestamp. None means derived/no-cache.
            **params: Extra metadata fields (region, query params, etc.).

        Returns:
            Absolute path of the written file.
        """
        full = self.resolve(path)
        full.parent.mkdir(parents=True, exist_ok=True)
        envelope = {"meta": self._build_meta(source, valid_until, params), "data": data}
        with full.open("w") as f:
            json.dump(envelope, f, indent=2)
        return full

    # -- Tables ---------------------------------------------------------------

    def write_table(
        self,
        path: Path,
        rows: list[dict[str, Any]],
        columns: list[str],
        source: str,
        valid_until: datetime | None = None,
        **params: Any,
    ) -> Path:
        """Write rows as CSV with a sidecar metadata file.

        Column order follows ``columns``; missing keys become empty cells.
        """
        full = self.resolve(path)
        full.parent.mkdir(parents=True, exist_ok=True)
        pd.DataFrame(rows, columns=columns).to_csv(full, index=False)
        self.mark(path, source, valid_until, rows=len(rows), **params)
        return full

    def read_table(self, path: Path) -> list[dict[str, Any]] | None:
        """Read a CSV table as a list of row dicts, or None if missing."""
        full = self.resolve(path)
        if not full.exists():
            return None
        df = pd.read_csv(full, keep_default_na=False, na_values=[""])
        df = df.astype(object).where(df.notna(), None)
        rows: list[dict[str, Any]] = df.to_dict(orient="records")
        return rows

    # -- Native files ---------------------------------------------------------

    def mark(
        self,
        path: Path,
        source: str,
        valid_until: datetime | None = None,
        **params: Any,
    ) -> Path:
        """Write the sidecar ``.meta.json`` for a file already in the store.

        Use after writing a GeoTIFF or table in place.
        """
        full = self.resolve(path)
        meta_path = full.with_suffix(full.suffix + ".meta.json")
        meta_path.parent.mkdir(parents=True, exist_ok=True)
        with meta_path.open("w") as f:
            json.dump({"meta": self._build_meta(source, valid_until, params)}, f, indent=2)
        return meta_path

    def resolve(self, path: Path) -> Path:
        """Absolute path under the store base; refuses paths that escape it."""
        full = self.base / path if not path.is_absolute() else path
        try:
            full.resolve().relative_to(self.base.resolve())
        except ValueError:
            msg = f"Path escapes store base directory: {path}"
            raise ValueError(msg) from None
        return full

    # -- Metadata -------------------------------------------------------------

    @staticmethod
    def _build_meta(
        source: str, valid_until: datetime | None, params: dict[str, Any]
    ) -> dict[str, Any]:
        meta: dict[str, Any] = {
            "source": source,
            "fetched_at": datetime.now(UTC).isoformat(),
        }
        if valid_until is not None:
            meta["valid_until"] = valid_until.isoformat()
        if params:
            meta.update(params)
        return meta

    def read_meta(self, path: Path) -> dict[str, Any]:
        """Read metadata from either a sidecar .meta.json or a JSON envelope."""
        full = self.resolve(path)
        sidecar = full.with_suffix(full.suffix + ".meta.json")
        if sidecar.exists():
            with sidecar.open() as f:
                result: dict[str, Any] = json.load(f)
            return result.get("meta", {})

        # Fall back to embedded metadata in JSON files
        if full.suffix == ".json" and full.exists():
            with full.open() as f:
                envelope: dict[str, Any] = json.load(f)
            return envelope.get("meta", {})

        return {}

    def is_fresh(self, path: Path) -> bool:
        """Check if a file exists and hasn't expired.

        Works with both JSON envelopes and sidecar .meta.json files.
        Returns False if the file is missing, has no ``valid_until``, or
        the expiry time has passed.
        """
        full = self.resolve(path)
        if not full.exists():
            return False

        valid_until = self.read_meta(path).get("valid_until")
        if valid_until is None:
            return False

        expiry = datetime.fromisoformat(valid_until)
        if expiry.tzinfo is None:
            expiry = expiry.replace(tzinfo=UTC)
        return datetime.now(UTC) < expiry


# =============================================================================
# Region file layout
# =============================================================================


@dataclass(frozen=True)
class RegionPaths:
    """Store-relative paths of the files one region's session is built from."""

    boundary: Path
    elevation: Path
    occurrences: Path


def region_paths(country: str, region: str) -> RegionPaths:
    """Paths for a region, e.g. ``reference/elevation/usa_colorado.tif``."""
    slug = f"{country}_{region}".lower().replace(" ", "_")
    return RegionPaths(
        boundary=Path("reference/boundary") / f"{slug}.json",
        elevation=Path("reference/elevation") / f"{slug}.tif",
        occurrences=Path("historical/occurrences") / f"{slug}.csv",
    )
