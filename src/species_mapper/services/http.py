"""
Shared HTTP client with automatic retry and backoff.

Provides a pre-configured ``requests.Session`` that retries on transient
network errors (timeouts, connection resets, 429/502/503/504) with exponential
backoff.  GBIF searches and the boundary/raster downloads all go through it.

Usage::

    from species_mapper.services.http import session

    resp = session.get("https://api.gbif.org/v1/occurrence/search", params={...})
    resp.raise_for_status()
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

if TYPE_CHECKING:
    from pathlib import Path

#: GBIF asks clients to back off on 429; geodata mirrors flap with 50x.
DEFAULT_RETRY = Retry(
    total=4,
    backoff_factor=2,  # 0s, 2s, 4s, 8s between retries
    status_forcelist=[429, 502, 503, 504],
    allowed_methods=["GET", "HEAD"],
    raise_on_status=False,  # callers inspect the final status
)

DEFAULT_TIMEOUT = 60  # seconds; raster archives are large

DOWNLOAD_CHUNK_BYTES = 1 << 20


def create_session(
    retry: Retry | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> requests.Session:
    """
    Build a ``requests.Session`` with retry adapter mounted.

    Args:
        retry: Custom retry strategy (defaults to ``DEFAULT_RETRY``).
        timeout: Default timeout applied to every request.
    """
    s = requests.Session()
    adapter = HTTPAdapter(max_retries=retry or DEFAULT_RETRY)
    s.mount("https://", adapter)
    s.mount("http://", adapter)
    s.headers["User-Agent"] = "species-mapper/0.1 (GBIF occurrence + elevation tutorial)"

    # Inject a default timeout so callers don't need to pass ``timeout=``.
    _original_send = s.send

    def _send_with_timeout(
        prepared: requests.PreparedRequest, **kwargs: object
    ) -> requests.Response:
        kwargs.setdefault("timeout", timeout)
        return _original_send(prepared, **kwargs)  # type: ignore[arg-type]

    s.send = _send_with_timeout  # type: ignore[method-assign]
    return s


def download(url: str, dest: Path, client: requests.Session | None = None) -> Path:
    """Stream ``url`` to ``dest``, creating parent directories.

    Raises:
        requests.HTTPError: If the final response is not 2xx.
    """
    client = client or session
    dest.parent.mkdir(parents=True, exist_ok=True)
    with client.get(url, stream=True) as resp:
        resp.raise_for_status()
        with dest.open("wb") as f:
            for chunk in resp.iter_content(chunk_size=DOWNLOAD_CHUNK_BYTES):
                f.write(chunk)
    return dest


#: Module-level session; import and use directly.
session: requests.Session = create_session()
