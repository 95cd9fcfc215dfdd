"""Geolocation feeds.

A feed is a cancellable stream of position samples. Consumers iterate it;
after :meth:`GeolocationFeed.cancel` no further sample is delivered, even if
the underlying source still has some. Sources that cannot deliver positions
at all (permission denied, no hardware) raise
:class:`cache_universe.errors.GeolocationUnavailable` from iteration.
"""

from typing import Iterable, Iterator, Optional

from cache_universe.components import LatLng
from cache_universe.errors import GeolocationUnavailable


class GeolocationFeed:
    """Base cancellable position stream.

    Subclasses implement :meth:`_next_sample`, returning ``None`` once the
    source is exhausted.
    """

    def __init__(self) -> None:
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        """Tear down the subscription; iteration stops before the next sample."""
        self._cancelled = True

    def _next_sample(self) -> Optional[LatLng]:
        raise NotImplementedError

    def __iter__(self) -> Iterator[LatLng]:
        while not self._cancelled:
            sample = self._next_sample()
            if sample is None or self._cancelled:
                return
            yield sample


class ScriptedFeed(GeolocationFeed):
    """Replays a fixed sequence of samples in order."""

    def __init__(self, samples: Iterable[LatLng]) -> None:
        super().__init__()
        self._samples = iter(list(samples))

    def _next_sample(self) -> Optional[LatLng]:
        return next(self._samples, None)


class UnavailableFeed(GeolocationFeed):
    """Feed standing in for a denied or missing geolocation source."""

    def __init__(self, reason: str = "Geolocation is not available") -> None:
        super().__init__()
        self.reason = reason

    def _next_sample(self) -> Optional[LatLng]:
        raise GeolocationUnavailable(self.reason)
