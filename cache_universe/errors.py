"""Exception types.

Only conditions the caller must handle out-of-band are exceptions. Soft
gameplay failures (empty cache, empty inventory, unknown cache) are reported
through ``State.message`` and never raised.
"""


class CacheUniverseError(Exception):
    """Base class for errors raised by this package."""


class CorruptSessionError(CacheUniverseError):
    """A persisted session blob could not be decoded."""


class GeolocationUnavailable(CacheUniverseError):
    """The geolocation source is denied or unavailable."""
