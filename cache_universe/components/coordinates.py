"""Continuous geographic coordinate component."""

from dataclasses import dataclass


@dataclass(frozen=True)
class LatLng:
    """Latitude / longitude pair in degrees.

    Attributes:
        lat: Latitude (north positive).
        lng: Longitude (east positive).
    """

    lat: float
    lng: float
