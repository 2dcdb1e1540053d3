"""
Reference Ellipsoid Model.

An ellipsoid of revolution is fixed by two numbers, its equatorial
radius a and its flattening f = (a - b) / a. Every other component of
the system (geodesic and rhumb solvers, map projections, magnetic field
synthesis) derives what it needs from these two values, so they are
validated here once and never mutated afterwards.

Scientific Context
------------------
Domain: Geodesy, Earth geometry
Model: Oblate (f > 0) or prolate (f < 0) ellipsoid of revolution; the
sphere is the special case f = 0.

Derived Parameters
------------------
- b = a (1 - f): polar semi-axis
- e² = f (2 - f): first eccentricity squared (negative if prolate)
- e'² = e² / (1 - e²): second eccentricity squared
- n = f / (2 - f): third flattening

References
----------
- NIMA TR8350.2: WGS84 parameters
- Torge, W. (2001). Geodesy (3rd ed.). de Gruyter.
"""

import math
from dataclasses import dataclass
from functools import lru_cache
from typing import Tuple

from scipy.special import ellipeinc

from common.constants import GeodeticConstants
from common.errors import ConstructionError, ConstructionErrorKind
from common.geomath import check_latitude, sincosd, sq


@dataclass(frozen=True)
class Ellipsoid:
    """An immutable ellipsoid of revolution.

    Attributes
    ----------
    equatorial_radius : float
        Semi-major axis a in meters. Must be positive and finite.
    flattening : float
        Flattening f. Must be finite and below 1 so that the polar
        semi-axis is positive. Negative values describe a prolate body.
    name : str
        Identifier for the ellipsoid.

    Raises
    ------
    ConstructionError
        EQUATORIAL_RADIUS if a <= 0, POLAR_SEMI_AXIS if f >= 1.
    """
    equatorial_radius: float
    flattening: float
    name: str = "custom"

    def __post_init__(self):
        a = self.equatorial_radius
        if not (math.isfinite(a) and a > 0):
            raise ConstructionError(ConstructionErrorKind.EQUATORIAL_RADIUS, a)
        if not (math.isfinite(self.flattening) and self.polar_semi_axis > 0):
            raise ConstructionError(
                ConstructionErrorKind.POLAR_SEMI_AXIS, self.polar_semi_axis
            )

    @property
    def polar_semi_axis(self) -> float:
        """Semi-minor axis b = a(1 - f) in meters."""
        return self.equatorial_radius * (1 - self.flattening)

    @property
    def e2(self) -> float:
        """First eccentricity squared e² = f(2 - f)."""
        return self.flattening * (2 - self.flattening)

    @property
    def ep2(self) -> float:
        """Second eccentricity squared e'² = e² / (1 - f)²."""
        return self.e2 / sq(1 - self.flattening)

    @property
    def third_flattening(self) -> float:
        """Third flattening n = f / (2 - f)."""
        return self.flattening / (2 - self.flattening)

    @property
    def signed_eccentricity(self) -> float:
        """Eccentricity, carrying the sign of the flattening."""
        return math.copysign(math.sqrt(abs(self.e2)), self.flattening)

    def prime_vertical_radius(self, latitude: float) -> float:
        """Radius of curvature in the prime vertical N(phi), meters."""
        s, _ = sincosd(check_latitude(latitude))
        return self.equatorial_radius / math.sqrt(1 - self.e2 * sq(s))

    def meridian_radius(self, latitude: float) -> float:
        """Radius of curvature in the meridian M(phi), meters."""
        s, _ = sincosd(check_latitude(latitude))
        return (self.equatorial_radius * (1 - self.e2)
                / (1 - self.e2 * sq(s)) ** 1.5)

    def parallel_radius(self, latitude: float) -> float:
        """Radius of the circle of latitude, N(phi) cos(phi), meters."""
        s, c = sincosd(check_latitude(latitude))
        return self.equatorial_radius * c / math.sqrt(1 - self.e2 * sq(s))

    def meridian_distance(self, latitude: float) -> float:
        """Distance along the meridian from the equator to `latitude`, meters.

        Uses the closed form in terms of the incomplete elliptic integral
        of the second kind:

            m(phi) = a [E(phi | e²) - e² sin(phi) cos(phi) / sqrt(1 - e² sin²(phi))]
        """
        s, c = sincosd(check_latitude(latitude))
        phi = math.radians(latitude)
        return self.equatorial_radius * (
            float(ellipeinc(phi, self.e2))
            - self.e2 * s * c / math.sqrt(1 - self.e2 * sq(s))
        )

    @property
    def quarter_meridian(self) -> float:
        """Distance from the equator to a pole along a meridian, meters."""
        return self.meridian_distance(90.0)

    def geodetic_to_ecef(
        self,
        latitude: float,
        longitude: float,
        height: float = 0.0
    ) -> Tuple[float, float, float]:
        """Convert geodetic coordinates to Earth-Centered Earth-Fixed (ECEF).

        Parameters
        ----------
        latitude, longitude : float
            Geodetic position in degrees.
        height : float
            Height above the ellipsoid in meters.

        Returns
        -------
        Tuple[float, float, float]
            (X, Y, Z) coordinates in meters.
        """
        sphi, cphi = sincosd(check_latitude(latitude))
        slam, clam = sincosd(longitude)
        n = self.equatorial_radius / math.sqrt(1 - self.e2 * sq(sphi))
        x = (n + height) * cphi * clam
        y = (n + height) * cphi * slam
        z = (n * (1 - self.e2) + height) * sphi
        return x, y, z


@lru_cache(maxsize=None)
def wgs84() -> Ellipsoid:
    """The WGS84 ellipsoid, built on first use and shared thereafter."""
    return Ellipsoid(
        equatorial_radius=GeodeticConstants.WGS84_EQUATORIAL_RADIUS.value,
        flattening=GeodeticConstants.WGS84_FLATTENING.value,
        name="WGS84",
    )
