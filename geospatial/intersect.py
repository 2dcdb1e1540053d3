"""
Intersection of Two Geodesics.

Given two geodesic lines, each fixed by an origin and an azimuth, find
the signed distances (s1, s2) along them at which they cross.

Implementation
--------------
The solution is refined iteratively from an initial guess (by default
both origins). At each step the current points P1 and P2 on the two
lines are joined by the inverse geodesic, and the problem is replaced by
its spherical analogue: on a sphere of radius a, P1 and P2 lie on the
equator a distance d apart, and each line leaves its point at an
azimuth measured relative to the joining geodesic. The two great circles
meet at a pair of antipodal points; the one nearer to P1 and P2 gives
the corrections to s1 and s2. The spherical model is exact to first
order in the distance between the current points, so the iteration
converges quickly once the points are close.

Only the intersection nearest the initial guess is sought; no global
search is attempted.

References
----------
- Karney, C.F.F. (2023). Geodesic intersections. Journal of Surveying
  Engineering, 150(3), 04024005.
"""

import math
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from common.geomath import sincosd
from common.logging_config import get_logger
from common.types import GeoCoordinate
from common.units import Scalar, as_magnitude
from geospatial.geodesic import GeodesicSolver, wgs84_geodesic
from geospatial.geodesic_line import GeodesicLine

logger = get_logger(__name__)


@dataclass(frozen=True)
class IntersectionPoint:
    """Closest point of two geodesic lines.

    Attributes
    ----------
    s1, s2 : float
        Signed distances along the first and second line, meters.
    coordinate : GeoCoordinate
        The crossing point as reached along the first line.
    separation : float
        Distance between the two lines' points at (s1, s2), meters.
    iterations : int
        Number of refinement steps taken.
    """
    s1: float
    s2: float
    coordinate: GeoCoordinate
    separation: float
    iterations: int


class Intersect:
    """Find where two geodesic lines cross.

    Parameters
    ----------
    solver : GeodesicSolver, optional
        Solver for the inverse problems between the current points
        (default: the shared WGS84 solver). Its ellipsoid should match
        that of the lines.

    Examples
    --------
    >>> geod = wgs84_geodesic()
    >>> s1, s2 = Intersect(geod).closest(geod.line(0, 0, 45), geod.line(0, 10, 315))
    >>> round(s1) == round(s2)
    True
    """

    maxit = 50
    tol = 1e-7

    def __init__(self, solver: Optional[GeodesicSolver] = None):
        self.solver = solver if solver is not None else wgs84_geodesic()
        self._r = self.solver.ellipsoid.equatorial_radius

    def closest(
        self,
        line1: GeodesicLine,
        line2: GeodesicLine,
        s1: Scalar = 0.0,
        s2: Scalar = 0.0
    ) -> Tuple[float, float]:
        """Signed distances (s1, s2) at which the lines cross.

        Parameters
        ----------
        line1, line2 : GeodesicLine
            The two lines.
        s1, s2 : float
            Starting estimates along each line, meters.
        """
        result = self.solve(line1, line2, s1, s2)
        return result.s1, result.s2

    def solve(
        self,
        line1: GeodesicLine,
        line2: GeodesicLine,
        s1: Scalar = 0.0,
        s2: Scalar = 0.0
    ) -> IntersectionPoint:
        """Crossing of two lines with the point and diagnostics."""
        s1 = as_magnitude(s1, "m")
        s2 = as_magnitude(s2, "m")
        iterations = 0
        while True:
            p1 = line1.solve(s1)
            p2 = line2.solve(s2)
            join = self.solver.inverse(p1.lat2, p1.lon2, p2.lat2, p2.lon2)
            if join.distance <= self.tol or iterations >= self.maxit:
                break
            iterations += 1
            ds1, ds2 = self._spherical_step(
                join.distance, p1.azi2 - join.azi1, p2.azi2 - join.azi2
            )
            s1 += ds1
            s2 += ds2
            if max(abs(ds1), abs(ds2)) <= self.tol:
                p1 = line1.solve(s1)
                p2 = line2.solve(s2)
                join = self.solver.inverse(p1.lat2, p1.lon2, p2.lat2, p2.lon2)
                break

        logger.debug(
            "Geodesic intersection after %d iterations, separation %.3g m",
            iterations, join.distance,
        )
        return IntersectionPoint(
            s1=s1, s2=s2, coordinate=p1.destination,
            separation=join.distance, iterations=iterations,
        )

    def _spherical_step(self, d: float, dalp1: float, dalp2: float) -> Tuple[float, float]:
        """Corrections to (s1, s2) from the spherical model.

        `dalp1` and `dalp2` are the azimuths of the lines relative to the
        geodesic joining the current points, at each point.
        """
        sig = d / self._r
        ssig, csig = math.sin(sig), math.cos(sig)
        pa = np.array([1.0, 0.0, 0.0])
        pb = np.array([csig, ssig, 0.0])
        north = np.array([0.0, 0.0, 1.0])
        east_a = np.array([0.0, 1.0, 0.0])
        east_b = np.array([-ssig, csig, 0.0])
        # The joining geodesic heads due east in this frame
        sa, ca = sincosd(90 + dalp1)
        sb, cb = sincosd(90 + dalp2)
        ta = sa * east_a + ca * north
        tb = sb * east_b + cb * north
        x = np.cross(np.cross(pa, ta), np.cross(pb, tb))
        norm = np.linalg.norm(x)
        if norm == 0:
            # The lines lie on one great circle
            return 0.0, 0.0
        x /= norm
        best = None
        for cand in (x, -x):
            a1 = math.atan2(float(cand @ ta), float(cand @ pa))
            a2 = math.atan2(float(cand @ tb), float(cand @ pb))
            if best is None or abs(a1) + abs(a2) < abs(best[0]) + abs(best[1]):
                best = (a1, a2)
        return best[0] * self._r, best[1] * self._r
