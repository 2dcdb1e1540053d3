"""
Shared Value Types for Geodetic Computations.

These small immutable types are the currency passed between the
projection, geodesic, rhumb-line and magnetic-field components. Unlike
raw tuples, they validate their contents once at construction and name
their fields.

Conventions
-----------
- Angles are in DEGREES throughout, matching the grid and navigation
  conventions of the consuming code.
- Latitude must lie in [-90, 90]; a value outside is a construction
  error and is never clamped.
- Longitude is unconstrained on input and normalized to (-180, 180].
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from common.geomath import ang_normalize, check_latitude


class Hemisphere(Enum):
    """Hemisphere of a projected coordinate."""
    NORTHERN = "n"
    SOUTHERN = "s"

    @classmethod
    def from_latitude(cls, latitude: float) -> 'Hemisphere':
        """Northern for latitude >= 0 (including +0 and -0), else southern."""
        return cls.SOUTHERN if latitude < 0 else cls.NORTHERN

    @property
    def is_northern(self) -> bool:
        return self is Hemisphere.NORTHERN


@dataclass(frozen=True)
class GeoCoordinate:
    """A geographic coordinate on the ellipsoid.

    Attributes
    ----------
    latitude : float
        Geodetic latitude in DEGREES. Range: [-90, 90].
    longitude : float
        Longitude in DEGREES, normalized to (-180, 180].

    Raises
    ------
    CoordinateRangeError
        If the latitude lies outside [-90, 90] or is NaN.

    Examples
    --------
    >>> coord = GeoCoordinate(latitude=-31.9398, longitude=475.0)
    >>> coord.longitude
    115.0
    """
    latitude: float
    longitude: float

    def __post_init__(self):
        check_latitude(self.latitude)
        object.__setattr__(self, "longitude", ang_normalize(self.longitude))

    def as_tuple(self) -> Tuple[float, float]:
        return self.latitude, self.longitude


@dataclass(frozen=True)
class GeodesicPosition:
    """A point reached along a geodesic.

    Attributes
    ----------
    coordinate : GeoCoordinate
        The position.
    azimuth : float
        Forward azimuth at the position, degrees in [-180, 180].
    arc_length : float
        Spherical arc length from the origin of the line, degrees.
    """
    coordinate: GeoCoordinate
    azimuth: float
    arc_length: float
