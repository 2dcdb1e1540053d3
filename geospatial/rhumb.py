"""
Rhumb Lines (Loxodromes) on an Ellipsoid of Revolution.

A rhumb line crosses every meridian at the same azimuth. On a Mercator
chart it is a straight line, which is why it was the navigator's course
of choice, although it is generally longer than the geodesic.

Scientific Context
------------------
In terms of the isometric latitude psi (the Mercator northing divided by
the equatorial radius) a rhumb line is the straight line

    lambda - lambda1 = tan(alpha) (psi - psi1)

and the distance along it is

    s = (M2 - M1) / cos(alpha)

where M is the meridian distance from the equator. When the two points
share (nearly) the same latitude this quotient is ill-conditioned, so the
distance is evaluated instead as hypot(lambda12, psi12) times the mean of
the parallel radius r = dM/dpsi over [psi1, psi2], the mean being found
by Gauss-Legendre quadrature when psi12 is small.

A rhumb line with a non-meridional azimuth spirals around a pole an
infinite number of times while covering a finite distance. A direct
problem whose meridian distance would overshoot the pole has no
solution and is rejected.

References
----------
- Karney, C.F.F. (2024). The area of rhumb polygons. Stud. Geophys. Geod. 68, 99-120.
- Bowring, B.R. (1983). The geodesic inverse problem. Bulletin Géodésique, 57, 109-120.
"""

import math
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

import numpy as np

from common.errors import ModelDomainError, ModelDomainErrorKind
from common.geomath import (
    ang_diff, ang_normalize, atan2d, check_latitude, sincosd, sq, tand, tauf,
    taupf,
)
from common.logging_config import get_logger
from common.types import GeoCoordinate
from common.units import Scalar, as_magnitude
from geospatial.ellipsoid import Ellipsoid, wgs84

logger = get_logger(__name__)

# Gauss-Legendre order used for the mean parallel radius over short psi spans
QUADRATURE_ORDER = 12
# Beyond this |psi12| the quotient M12 / psi12 is well conditioned
PSI_QUOTIENT_THRESHOLD = 0.1


@dataclass(frozen=True)
class RhumbResult:
    """Solution of a direct or inverse rhumb-line problem.

    Attributes
    ----------
    lat1, lon1 : float
        Origin in degrees.
    azimuth : float
        Constant azimuth of the line in degrees, [-180, 180].
    lat2, lon2 : float
        Destination in degrees.
    distance : float
        Distance along the rhumb line in meters.
    """
    lat1: float
    lon1: float
    azimuth: float
    lat2: float
    lon2: float
    distance: float

    @property
    def destination(self) -> GeoCoordinate:
        return GeoCoordinate(self.lat2, self.lon2)


class RhumbSolver:
    """Solver for rhumb-line problems on one ellipsoid.

    Parameters
    ----------
    ellipsoid : Ellipsoid, optional
        Reference ellipsoid (default: WGS84).

    Examples
    --------
    >>> rhumb = RhumbSolver()
    >>> r = rhumb.inverse(0.0, 0.0, 0.0, 1.0)
    >>> r.azimuth
    90.0
    >>> round(r.distance, 3)
    111319.491
    """

    def __init__(self, ellipsoid: Optional[Ellipsoid] = None):
        self.ellipsoid = ellipsoid if ellipsoid is not None else wgs84()
        self._a = self.ellipsoid.equatorial_radius
        self._es = self.ellipsoid.signed_eccentricity
        self._e2m = 1 - self.ellipsoid.e2
        self._quarter_meridian = self.ellipsoid.quarter_meridian
        nodes, weights = np.polynomial.legendre.leggauss(QUADRATURE_ORDER)
        self._nodes = nodes
        self._weights = weights

    def __repr__(self) -> str:
        return f"RhumbSolver(name={self.ellipsoid.name!r})"

    # ------------------------------------------------------------------
    # Auxiliary latitudes
    # ------------------------------------------------------------------

    def isometric_latitude(self, latitude: float) -> float:
        """Isometric latitude psi in radians; infinite at the poles."""
        if abs(latitude) == 90:
            return math.copysign(math.inf, latitude)
        return math.asinh(taupf(tand(latitude), self._es))

    def _parallel_radius_psi(self, psi: float) -> float:
        tau = tauf(math.sinh(psi), self._es)
        return self._a / math.sqrt(1 + self._e2m * sq(tau))

    def _mean_parallel_radius(self, lat1, lat2, psi1, psi2, m12) -> float:
        """Mean of dM/dpsi over [psi1, psi2]."""
        psi12 = psi2 - psi1
        if lat1 == lat2:
            return self.ellipsoid.parallel_radius(lat1)
        if abs(psi12) > PSI_QUOTIENT_THRESHOLD:
            return m12 / psi12
        mid, half = (psi1 + psi2) / 2, psi12 / 2
        values = [self._parallel_radius_psi(mid + half * x) for x in self._nodes]
        return float(np.dot(self._weights, values)) / 2

    def meridian_latitude(self, meridian_distance: float) -> float:
        """Latitude in degrees at `meridian_distance` meters from the equator.

        Inverts `Ellipsoid.meridian_distance` by Newton's method.
        """
        q = self._quarter_meridian
        if abs(meridian_distance) >= q:
            return math.copysign(90.0, meridian_distance)
        lat = 90 * meridian_distance / q
        for _ in range(10):
            dlat = math.degrees(
                (self.ellipsoid.meridian_distance(lat) - meridian_distance)
                / self.ellipsoid.meridian_radius(lat)
            )
            lat = max(-90.0, min(90.0, lat - dlat))
            if abs(dlat) < 1e-14:
                break
        return lat

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    def line(self, lat1: Scalar, lon1: Scalar, azimuth: Scalar) -> 'RhumbLine':
        """Rhumb line from (lat1, lon1) with constant `azimuth`."""
        return RhumbLine(self, lat1, lon1, azimuth)

    def direct(
        self,
        lat1: Scalar,
        lon1: Scalar,
        azimuth: Scalar,
        distance: Scalar
    ) -> RhumbResult:
        """Solve the direct rhumb problem.

        Raises
        ------
        CoordinateRangeError
            LATITUDE if lat1 lies outside [-90, 90].
        ModelDomainError
            POLE_CROSSING if the line would pass over a pole.
        """
        return self.line(lat1, lon1, azimuth).solve(distance)

    def inverse(
        self,
        lat1: Scalar,
        lon1: Scalar,
        lat2: Scalar,
        lon2: Scalar
    ) -> RhumbResult:
        """Solve the inverse rhumb problem.

        Of the two rhumb lines joining points separated by exactly 180
        degrees of longitude, the eastward one is returned.

        Raises
        ------
        CoordinateRangeError
            LATITUDE if either latitude lies outside [-90, 90].
        """
        lat1 = check_latitude(as_magnitude(lat1, "degree"))
        lat2 = check_latitude(as_magnitude(lat2, "degree"))
        lon1 = as_magnitude(lon1, "degree")
        lon2 = as_magnitude(lon2, "degree")

        lon12 = ang_diff(lon1, lon2)[0]
        if lon12 == -180:
            lon12 = 180.0
        lam12 = math.radians(lon12)
        m12 = (self.ellipsoid.meridian_distance(lat2)
               - self.ellipsoid.meridian_distance(lat1))

        if lat1 != lat2 and (abs(lat1) == 90 or abs(lat2) == 90):
            # A pole is reached only along a meridian
            azimuth = 0.0 if m12 > 0 else 180.0
            distance = abs(m12)
        else:
            psi1 = self.isometric_latitude(lat1)
            psi2 = self.isometric_latitude(lat2)
            psi12 = 0.0 if lat1 == lat2 else psi2 - psi1
            azimuth = atan2d(lam12, psi12)
            mean_r = self._mean_parallel_radius(lat1, lat2, psi1, psi2, m12)
            distance = math.hypot(lam12, psi12) * mean_r

        return RhumbResult(
            lat1=lat1, lon1=ang_normalize(lon1), azimuth=azimuth,
            lat2=lat2, lon2=ang_normalize(lon2), distance=distance,
        )


class RhumbLine:
    """A rhumb line from (lat1, lon1) with constant azimuth.

    Built by `RhumbSolver.line`. Immutable; positions are computed in
    closed form apart from the latitude inversion.
    """

    def __init__(self, solver: RhumbSolver, lat1: Scalar, lon1: Scalar, azimuth: Scalar):
        self._solver = solver
        self._lat1 = check_latitude(as_magnitude(lat1, "degree"))
        self._lon1 = as_magnitude(lon1, "degree")
        self._azimuth = ang_normalize(as_magnitude(azimuth, "degree"))
        self._salp, self._calp = sincosd(self._azimuth)
        self._m1 = solver.ellipsoid.meridian_distance(self._lat1)
        self._psi1 = solver.isometric_latitude(self._lat1)

    @property
    def origin(self) -> GeoCoordinate:
        return GeoCoordinate(self._lat1, self._lon1)

    @property
    def azimuth(self) -> float:
        return self._azimuth

    def position(self, distance: Scalar) -> GeoCoordinate:
        """Point at signed `distance` meters along the line."""
        return self.solve(distance).destination

    def solve(self, distance: Scalar) -> RhumbResult:
        """Full direct solution at signed `distance` meters along the line.

        Raises
        ------
        ModelDomainError
            POLE_CROSSING if the meridian distance reached lies beyond a pole.
        """
        s = as_magnitude(distance, "m")
        solver = self._solver
        m2 = self._m1 + s * self._calp
        if abs(m2) > solver._quarter_meridian:
            raise ModelDomainError(
                ModelDomainErrorKind.POLE_CROSSING,
                s,
                (-solver._quarter_meridian, solver._quarter_meridian),
            )
        lat2 = self._lat1 if self._calp == 0 else solver.meridian_latitude(m2)

        if self._salp == 0 or abs(self._lat1) == 90 or abs(lat2) == 90:
            # Meridional course, or an endpoint at a pole where the
            # longitude is fixed to that of the origin
            lam12 = 0.0
        else:
            psi2 = solver.isometric_latitude(lat2)
            mean_r = solver._mean_parallel_radius(
                self._lat1, lat2, self._psi1, psi2, m2 - self._m1
            )
            lam12 = s * self._salp / mean_r

        lon2 = ang_normalize(ang_normalize(self._lon1) + math.degrees(lam12))
        return RhumbResult(
            lat1=self._lat1, lon1=ang_normalize(self._lon1), azimuth=self._azimuth,
            lat2=lat2, lon2=lon2, distance=s,
        )


@lru_cache(maxsize=None)
def wgs84_rhumb() -> RhumbSolver:
    """The WGS84 rhumb-line solver, built on first use and shared thereafter."""
    return RhumbSolver(wgs84())
