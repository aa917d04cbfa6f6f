"""Error types raised while building a mapping session.

Network failures are not wrapped: ``requests`` exceptions propagate from the
datasources unchanged. Filtering never raises; an empty result is a valid state.
"""

from __future__ import annotations


class SpeciesMapperError(Exception):
    """Base class for errors raised by this package."""


class MalformedRecordError(SpeciesMapperError, ValueError):
    """An occurrence row carries a value that cannot be normalized (e.g. month 13)."""


class DataUnavailableError(SpeciesMapperError):
    """A boundary, raster or occurrence table could not be obtained."""


class QuotaExceededError(SpeciesMapperError):
    """The upstream API kept rate limiting us after all retries."""
