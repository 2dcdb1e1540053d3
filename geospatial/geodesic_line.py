"""
Geodesic Lines.

A geodesic line is fixed by an origin and the azimuth there. Building it
performs all the work that does not depend on the distance travelled:
locating the line's equatorial crossing on the auxiliary sphere and
evaluating the series coefficients for the distance, reduced-length and
longitude integrals. Positions at any signed distance (or spherical arc
length) are then cheap to compute and need no iteration.

Lines are immutable after construction and hold no scratch state, so one
line can be queried concurrently.
"""

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from common.geomath import (
    ang_normalize, ang_round, atan2d, check_latitude, norm2, sincosd, sq,
)
from common.types import GeoCoordinate, GeodesicPosition
from common.units import Scalar, as_magnitude
from geospatial import geodesic_series as series

if TYPE_CHECKING:
    from geospatial.geodesic import GeodesicSolver


@dataclass(frozen=True)
class GeodesicResult:
    """Full solution of a direct or inverse geodesic problem.

    Attributes
    ----------
    lat1, lon1 : float
        Origin in degrees.
    azi1 : float
        Azimuth at the origin, degrees in [-180, 180].
    lat2, lon2 : float
        Destination in degrees.
    azi2 : float
        Forward azimuth at the destination, degrees in [-180, 180].
    distance : float
        Signed distance along the geodesic in meters.
    arc_length : float
        Arc length on the auxiliary sphere in degrees. A magnitude above
        180 means the geodesic is not the shortest path.
    reduced_length : float
        Reduced length m12 in meters.
    scale12, scale21 : float
        Geodesic scales M12 and M21 (dimensionless).
    """
    lat1: float
    lon1: float
    azi1: float
    lat2: float
    lon2: float
    azi2: float
    distance: float
    arc_length: float
    reduced_length: float
    scale12: float
    scale21: float

    @property
    def destination(self) -> GeoCoordinate:
        return GeoCoordinate(self.lat2, self.lon2)


class GeodesicLine:
    """A geodesic starting at (lat1, lon1) with azimuth azi1.

    Parameters
    ----------
    solver : GeodesicSolver
        Solver carrying the ellipsoid and its precomputed constants.
    lat1, lon1 : float
        Origin in degrees; lat1 must lie in [-90, 90].
    azi1 : float
        Azimuth at the origin in degrees.
    distance : float, optional
        Length of the line when it was built from a solved problem.

    Notes
    -----
    At a pole the azimuth is interpreted as the limit of approaching the
    pole along the meridian of longitude lon1.
    """

    def __init__(
        self,
        solver: 'GeodesicSolver',
        lat1: Scalar,
        lon1: Scalar,
        azi1: Scalar,
        distance: Optional[Scalar] = None,
        _salp1: float = math.nan,
        _calp1: float = math.nan,
    ):
        lat1 = check_latitude(as_magnitude(lat1, "degree"))
        lon1 = as_magnitude(lon1, "degree")
        azi1 = as_magnitude(azi1, "degree")

        self._solver = solver
        self._a = solver.ellipsoid.equatorial_radius
        self._f = solver.ellipsoid.flattening
        self._b = solver.ellipsoid.polar_semi_axis
        self._f1 = 1 - self._f
        self._lat1 = lat1
        self._lon1 = lon1

        if math.isnan(_salp1) or math.isnan(_calp1):
            self._azi1 = ang_normalize(azi1)
            self._salp1, self._calp1 = sincosd(ang_round(self._azi1))
        else:
            self._azi1 = azi1
            self._salp1, self._calp1 = _salp1, _calp1

        sbet1, cbet1 = sincosd(ang_round(lat1))
        sbet1 *= self._f1
        sbet1, cbet1 = norm2(sbet1, cbet1)
        cbet1 = max(solver.tiny, cbet1)
        self._dn1 = math.sqrt(1 + solver.ellipsoid.ep2 * sq(sbet1))

        # Evaluate alp0 from sin(alp1) * cos(bet1) = sin(alp0)
        self._salp0 = self._salp1 * cbet1
        self._calp0 = math.hypot(self._calp1, self._salp1 * sbet1)
        # sig1 is the arc length from the northward equatorial crossing
        self._ssig1 = sbet1
        self._somg1 = self._salp0 * sbet1
        self._csig1 = self._comg1 = (
            self._calp1 * cbet1 if sbet1 != 0 or self._calp1 != 0 else 1.0
        )
        self._ssig1, self._csig1 = norm2(self._ssig1, self._csig1)

        self._k2 = sq(self._calp0) * solver.ellipsoid.ep2
        eps = series.expansion_parameter(self._k2)

        self._a1m1 = series.a1m1f(eps)
        self._c1a = series.c1f(eps)
        self._b11 = series.sin_cos_series(True, self._ssig1, self._csig1, self._c1a)
        s, c = math.sin(self._b11), math.cos(self._b11)
        self._stau1 = self._ssig1 * c + self._csig1 * s
        self._ctau1 = self._csig1 * c - self._ssig1 * s
        self._c1pa = series.c1pf(eps)

        self._a2m1 = series.a2m1f(eps)
        self._c2a = series.c2f(eps)
        self._b21 = series.sin_cos_series(True, self._ssig1, self._csig1, self._c2a)

        self._c3a = series.c3f(solver.c3x, eps)
        self._a3c = -self._f * self._salp0 * series.a3f(solver.a3x, eps)
        self._b31 = series.sin_cos_series(True, self._ssig1, self._csig1, self._c3a)

        self._distance = None if distance is None else as_magnitude(distance, "m")

    @property
    def origin(self) -> GeoCoordinate:
        return GeoCoordinate(self._lat1, self._lon1)

    @property
    def azimuth(self) -> float:
        """Azimuth at the origin in degrees."""
        return self._azi1

    @property
    def ellipsoid(self):
        return self._solver.ellipsoid

    @property
    def distance(self) -> Optional[float]:
        """Length of the line in meters, or None for an open-ended line."""
        return self._distance

    @property
    def arc_length(self) -> Optional[float]:
        """Arc length of the line in degrees, or None for an open-ended line."""
        if self._distance is None:
            return None
        return self.solve(self._distance).arc_length

    @property
    def equatorial_azimuth(self) -> float:
        """Azimuth where the line crosses the equator northwards, degrees."""
        return atan2d(self._salp0, self._calp0)

    def position(self, distance: Scalar) -> GeodesicPosition:
        """Position at signed `distance` (meters) from the origin.

        Returns
        -------
        GeodesicPosition
            The coordinate, the forward azimuth there and the arc length
            from the origin in degrees.
        """
        result = self.solve(distance)
        return GeodesicPosition(result.destination, result.azi2, result.arc_length)

    def position_arc(self, arc_length: Scalar) -> GeodesicPosition:
        """Position at signed `arc_length` (degrees on the auxiliary sphere)."""
        result = self._gen_position(True, as_magnitude(arc_length, "degree"))
        return GeodesicPosition(result.destination, result.azi2, result.arc_length)

    def solve(self, distance: Scalar) -> GeodesicResult:
        """Full direct solution at signed `distance` meters along the line."""
        return self._gen_position(False, as_magnitude(distance, "m"))

    def _gen_position(self, arcmode: bool, s12_a12: float) -> GeodesicResult:
        b = self._b
        c1a = self._c1a
        if arcmode:
            sig12 = math.radians(s12_a12)
            ssig12, csig12 = sincosd(s12_a12)
            b12 = 0.0
        else:
            # Interpret s12_a12 as distance
            tau12 = s12_a12 / (b * (1 + self._a1m1))
            s, c = math.sin(tau12), math.cos(tau12)
            b12 = -series.sin_cos_series(
                True,
                self._stau1 * c + self._ctau1 * s,
                self._ctau1 * c - self._stau1 * s,
                self._c1pa,
            )
            sig12 = tau12 - (b12 - self._b11)
            ssig12, csig12 = math.sin(sig12), math.cos(sig12)
            if abs(self._f) > 0.01:
                # The reverted series loses accuracy for large flattening,
                # so take one Newton step on the distance equation
                ssig2 = self._ssig1 * csig12 + self._csig1 * ssig12
                csig2 = self._csig1 * csig12 - self._ssig1 * ssig12
                b12 = series.sin_cos_series(True, ssig2, csig2, c1a)
                serr = ((1 + self._a1m1) * (sig12 + (b12 - self._b11))
                        - s12_a12 / b)
                sig12 = sig12 - serr / math.sqrt(1 + self._k2 * sq(ssig2))
                ssig12, csig12 = math.sin(sig12), math.cos(sig12)

        ssig2 = self._ssig1 * csig12 + self._csig1 * ssig12
        csig2 = self._csig1 * csig12 - self._ssig1 * ssig12
        dn2 = math.sqrt(1 + self._k2 * sq(ssig2))
        if arcmode or abs(self._f) > 0.01:
            b12 = series.sin_cos_series(True, ssig2, csig2, c1a)
        ab1 = (1 + self._a1m1) * (b12 - self._b11)

        sbet2 = self._calp0 * ssig2
        cbet2 = math.hypot(self._salp0, self._calp0 * csig2)
        if cbet2 == 0:
            # The line passes through a pole
            cbet2 = csig2 = self._solver.tiny
        salp2 = self._salp0
        calp2 = self._calp0 * csig2

        s12 = b * ((1 + self._a1m1) * sig12 + ab1) if arcmode else s12_a12

        somg2 = self._salp0 * ssig2
        comg2 = csig2
        omg12 = math.atan2(somg2 * self._comg1 - comg2 * self._somg1,
                           comg2 * self._comg1 + somg2 * self._somg1)
        lam12 = omg12 + self._a3c * (
            sig12 + (series.sin_cos_series(True, ssig2, csig2, self._c3a) - self._b31)
        )
        lon12 = math.degrees(lam12)
        lon2 = ang_normalize(ang_normalize(self._lon1) + ang_normalize(lon12))
        lat2 = atan2d(sbet2, self._f1 * cbet2)
        azi2 = atan2d(salp2, calp2)

        b22 = series.sin_cos_series(True, ssig2, csig2, self._c2a)
        ab2 = (1 + self._a2m1) * (b22 - self._b21)
        j12 = (self._a1m1 - self._a2m1) * sig12 + (ab1 - ab2)
        m12 = b * ((dn2 * (self._csig1 * ssig2) - self._dn1 * (self._ssig1 * csig2))
                   - self._csig1 * csig2 * j12)
        t = self._k2 * (ssig2 - self._ssig1) * (ssig2 + self._ssig1) / (self._dn1 + dn2)
        big_m12 = csig12 + (t * ssig2 - csig2 * j12) * self._ssig1 / self._dn1
        big_m21 = csig12 - (t * self._ssig1 - self._csig1 * j12) * ssig2 / dn2

        a12 = s12_a12 if arcmode else math.degrees(sig12)
        return GeodesicResult(
            lat1=self._lat1, lon1=ang_normalize(self._lon1), azi1=self._azi1,
            lat2=lat2, lon2=lon2, azi2=azi2,
            distance=s12, arc_length=a12, reduced_length=m12,
            scale12=big_m12, scale21=big_m21,
        )
