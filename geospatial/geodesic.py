"""
Geodesic Direct and Inverse Problems on an Ellipsoid of Revolution.

This module solves the two classical geodesic problems:

- Direct: given an origin, an azimuth and a distance, find the
  destination and the azimuth there.
- Inverse: given two points, find the shortest distance between them
  and the azimuths at both ends.

Both are valid for any pair of points, including nearly antipodal ones,
and for oblate and prolate ellipsoids.

Scientific Context
------------------
Domain: Geodesy, differential geometry on curved surfaces
Model: Geodesic on an ellipsoid of revolution, mapped onto an auxiliary
sphere (Bessel's method) with sixth-order series for the distance and
longitude integrals.

Implementation
--------------
The inverse problem reduces to finding the azimuth alp1 at the first
point for which the geodesic reaches the longitude of the second. A
first guess comes from a short-line approximation or, for nearly
antipodal points, from the astroid solution of the limiting problem.
Newton's method then refines alp1 while maintaining a bracket on the
root; if a Newton step leaves the bracket or the iteration budget is
spent, the solver bisects the bracket instead, which guarantees
convergence for all configurations.

References
----------
- Karney, C.F.F. (2013). Algorithms for geodesics. Journal of Geodesy, 87(1), 43-55.
- GeographicLib: https://geographiclib.sourceforge.io/
"""

import math
from functools import lru_cache
from typing import Optional, Tuple

from common.geomath import (
    DIGITS, EPSILON, MIN_VALUE,
    ang_diff, ang_round, atan2d, cbrt, check_latitude, norm2, sincosd, sq,
)
from common.logging_config import get_logger
from common.units import Scalar, as_magnitude
from geospatial import geodesic_series as series
from geospatial.ellipsoid import Ellipsoid, wgs84
from geospatial.geodesic_line import GeodesicLine, GeodesicResult

logger = get_logger(__name__)


class GeodesicSolver:
    """Solver for geodesic problems on one ellipsoid.

    Parameters
    ----------
    ellipsoid : Ellipsoid, optional
        Reference ellipsoid (default: WGS84). Its validation guarantees a
        positive equatorial radius and polar semi-axis.

    Notes
    -----
    The solver holds only constants derived from the ellipsoid; every
    call allocates its own working storage, so one instance may be
    shared freely between threads.

    Examples
    --------
    >>> solver = GeodesicSolver()
    >>> result = solver.inverse(-41.32, 174.81, 40.96, -5.50)
    >>> round(result.distance)
    19959679
    """

    maxit1 = 20
    maxit2 = maxit1 + DIGITS + 10
    tiny = math.sqrt(MIN_VALUE)
    tol0 = EPSILON
    tol1 = 200 * tol0
    tol2 = math.sqrt(tol0)
    tolb = tol0 * tol2
    xthresh = 1000 * tol2

    def __init__(self, ellipsoid: Optional[Ellipsoid] = None):
        self.ellipsoid = ellipsoid if ellipsoid is not None else wgs84()
        self._a = self.ellipsoid.equatorial_radius
        self._f = self.ellipsoid.flattening
        self._f1 = 1 - self._f
        self._b = self.ellipsoid.polar_semi_axis
        self._ep2 = self.ellipsoid.ep2
        self._n = self.ellipsoid.third_flattening
        # Threshold below which the short-line approximation is used
        self._etol2 = 0.1 * self.tol2 / math.sqrt(
            max(0.001, abs(self._f)) * min(1.0, 1 - self._f / 2) / 2
        )
        self.a3x = series.a3_coefficients(self._n)
        self.c3x = series.c3_coefficients(self._n)

    def __repr__(self) -> str:
        return (f"GeodesicSolver(a={self._a!r}, f={self._f!r}, "
                f"name={self.ellipsoid.name!r})")

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    def direct(
        self,
        lat1: Scalar,
        lon1: Scalar,
        azi1: Scalar,
        distance: Scalar
    ) -> GeodesicResult:
        """Solve the direct geodesic problem.

        Parameters
        ----------
        lat1, lon1 : float
            Origin in degrees.
        azi1 : float
            Azimuth at the origin in degrees.
        distance : float or pint.Quantity
            Signed distance in meters.

        Returns
        -------
        GeodesicResult
            Destination, forward azimuth there, arc length and the
            differential quantities m12, M12, M21.

        Raises
        ------
        CoordinateRangeError
            If lat1 lies outside [-90, 90].
        """
        return GeodesicLine(self, lat1, lon1, azi1).solve(distance)

    def inverse(
        self,
        lat1: Scalar,
        lon1: Scalar,
        lat2: Scalar,
        lon2: Scalar
    ) -> GeodesicResult:
        """Solve the inverse geodesic problem.

        Parameters
        ----------
        lat1, lon1 : float
            First point in degrees.
        lat2, lon2 : float
            Second point in degrees.

        Returns
        -------
        GeodesicResult
            Shortest distance, azimuths at both ends, arc length and the
            differential quantities m12, M12, M21.

        Raises
        ------
        CoordinateRangeError
            If either latitude lies outside [-90, 90].
        """
        lat1 = check_latitude(as_magnitude(lat1, "degree"))
        lat2 = check_latitude(as_magnitude(lat2, "degree"))
        lon1 = as_magnitude(lon1, "degree")
        lon2 = as_magnitude(lon2, "degree")
        a12, s12, salp1, calp1, salp2, calp2, m12, big_m12, big_m21 = (
            self._gen_inverse(lat1, lon1, lat2, lon2)
        )
        return GeodesicResult(
            lat1=lat1, lon1=lon1, azi1=atan2d(salp1, calp1),
            lat2=lat2, lon2=lon2, azi2=atan2d(salp2, calp2),
            distance=s12, arc_length=a12, reduced_length=m12,
            scale12=big_m12, scale21=big_m21,
        )

    def line(self, lat1: Scalar, lon1: Scalar, azi1: Scalar) -> GeodesicLine:
        """Open-ended geodesic line from (lat1, lon1) with azimuth azi1."""
        return GeodesicLine(self, lat1, lon1, azi1)

    def direct_line(
        self,
        lat1: Scalar,
        lon1: Scalar,
        azi1: Scalar,
        distance: Scalar
    ) -> GeodesicLine:
        """Geodesic line of the given length, as defined by a direct problem."""
        return GeodesicLine(self, lat1, lon1, azi1, distance=distance)

    def inverse_line(
        self,
        lat1: Scalar,
        lon1: Scalar,
        lat2: Scalar,
        lon2: Scalar
    ) -> GeodesicLine:
        """Geodesic line joining two points, as defined by an inverse problem."""
        lat1 = check_latitude(as_magnitude(lat1, "degree"))
        lat2 = check_latitude(as_magnitude(lat2, "degree"))
        lon1 = as_magnitude(lon1, "degree")
        lon2 = as_magnitude(lon2, "degree")
        _, s12, salp1, calp1, _, _, _, _, _ = self._gen_inverse(lat1, lon1, lat2, lon2)
        azi1 = atan2d(salp1, calp1)
        # Carry the unrounded sine/cosine so the line reproduces the solve
        return GeodesicLine(self, lat1, lon1, azi1, distance=s12,
                            _salp1=salp1, _calp1=calp1)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _lengths(
        self, eps, sig12, ssig1, csig1, dn1, ssig2, csig2, dn2, cbet1, cbet2
    ) -> Tuple[float, float, float, float, float]:
        """Distance, reduced length and geodesic scales on the unit-b sphere."""
        a1 = series.a1m1f(eps)
        c1a = series.c1f(eps)
        a2 = series.a2m1f(eps)
        c2a = series.c2f(eps)
        m0x = a1 - a2
        a1 += 1
        a2 += 1
        b1 = (series.sin_cos_series(True, ssig2, csig2, c1a)
              - series.sin_cos_series(True, ssig1, csig1, c1a))
        s12b = a1 * (sig12 + b1)
        b2 = (series.sin_cos_series(True, ssig2, csig2, c2a)
              - series.sin_cos_series(True, ssig1, csig1, c2a))
        j12 = m0x * sig12 + (a1 * b1 - a2 * b2)
        # Missing a factor of b; the cancellation is avoided by this ordering
        m12b = (dn2 * (csig1 * ssig2) - dn1 * (ssig1 * csig2)
                - csig1 * csig2 * j12)
        csig12 = csig1 * csig2 + ssig1 * ssig2
        t = self._ep2 * (cbet1 - cbet2) * (cbet1 + cbet2) / (dn1 + dn2)
        big_m12 = csig12 + (t * ssig2 - csig2 * j12) * ssig1 / dn1
        big_m21 = csig12 - (t * ssig1 - csig1 * j12) * ssig2 / dn2
        return s12b, m12b, m0x, big_m12, big_m21

    @staticmethod
    def _astroid(x: float, y: float) -> float:
        """Solve k⁴ + 2k³ - (x² + y² - 1)k² - 2y²k - y² = 0 for the positive root."""
        p = sq(x)
        q = sq(y)
        r = (p + q - 1) / 6
        if not (q == 0 and r <= 0):
            s = p * q / 4
            r2 = sq(r)
            r3 = r * r2
            disc = s * (s + 2 * r3)
            u = r
            if disc >= 0:
                t3 = s + r3
                # Pick the sign of the sqrt to maximize |t3|
                t3 += -math.sqrt(disc) if t3 < 0 else math.sqrt(disc)
                t = cbrt(t3)
                u += t + (r2 / t if t != 0 else 0)
            else:
                ang = math.atan2(math.sqrt(-disc), -(s + r3))
                u += 2 * r * math.cos(ang / 3)
            v = math.sqrt(sq(u) + q)
            uv = q / (v - u) if u < 0 else u + v
            w = (uv - q) / (2 * v)
            k = uv / (math.sqrt(uv + sq(w)) + w)
        else:
            # y = 0 with |x| <= 1
            k = 0.0
        return k

    def _inverse_start(
        self, sbet1, cbet1, dn1, sbet2, cbet2, dn2, lam12, slam12, clam12
    ):
        """Starting estimate of alp1 for the Newton iteration.

        Returns sig12 >= 0 when the short-line approximation is already
        accurate, in which case alp2 is also returned.
        """
        sig12 = -1.0
        salp2 = calp2 = dnm = math.nan
        sbet12 = sbet2 * cbet1 - cbet2 * sbet1
        cbet12 = cbet2 * cbet1 + sbet2 * sbet1
        sbet12a = sbet2 * cbet1 + cbet2 * sbet1
        shortline = cbet12 >= 0 and sbet12 < 0.5 and cbet2 * lam12 < 0.5
        if shortline:
            sbetm2 = sq(sbet1 + sbet2)
            sbetm2 /= sbetm2 + sq(cbet1 + cbet2)
            dnm = math.sqrt(1 + self._ep2 * sbetm2)
            omg12 = lam12 / (self._f1 * dnm)
            somg12, comg12 = math.sin(omg12), math.cos(omg12)
        else:
            somg12, comg12 = slam12, clam12

        salp1 = cbet2 * somg12
        if comg12 >= 0:
            calp1 = sbet12 + cbet2 * sbet1 * sq(somg12) / (1 + comg12)
        else:
            calp1 = sbet12a - cbet2 * sbet1 * sq(somg12) / (1 - comg12)

        ssig12 = math.hypot(salp1, calp1)
        csig12 = sbet1 * sbet2 + cbet1 * cbet2 * comg12

        if shortline and ssig12 < self._etol2:
            # Really short lines
            salp2 = cbet1 * somg12
            calp2 = sbet12 - cbet1 * sbet2 * (
                sq(somg12) / (1 + comg12) if comg12 >= 0 else 1 - comg12
            )
            salp2, calp2 = norm2(salp2, calp2)
            sig12 = math.atan2(ssig12, csig12)
        elif (abs(self._n) > 0.1 or csig12 >= 0
              or ssig12 >= 6 * abs(self._n) * math.pi * sq(cbet1)):
            # Nothing to do, the zeroth-order spherical estimate is fine
            pass
        else:
            # Nearly antipodal: scale to the astroid problem
            lam12x = math.atan2(-slam12, -clam12)
            if self._f >= 0:
                k2 = sq(sbet1) * self._ep2
                eps = series.expansion_parameter(k2)
                lamscale = self._f * cbet1 * series.a3f(self.a3x, eps) * math.pi
                betscale = lamscale * cbet1
                x = lam12x / lamscale
                y = sbet12a / betscale
            else:
                cbet12a = cbet2 * cbet1 - sbet2 * sbet1
                bet12a = math.atan2(sbet12a, cbet12a)
                _, m12b, m0, _, _ = self._lengths(
                    self._n, math.pi + bet12a, sbet1, -cbet1, dn1,
                    sbet2, cbet2, dn2, cbet1, cbet2,
                )
                x = -1 + m12b / (cbet1 * cbet2 * m0 * math.pi)
                betscale = (sbet12a / x if x < -0.01
                            else -self._f * sq(cbet1) * math.pi)
                lamscale = betscale / cbet1
                y = lam12x / lamscale

            if y > -self.tol1 and x > -1 - self.xthresh:
                if self._f >= 0:
                    salp1 = min(1.0, -x)
                    calp1 = -math.sqrt(1 - sq(salp1))
                else:
                    calp1 = max(0.0 if x > -self.tol1 else -1.0, x)
                    salp1 = math.sqrt(1 - sq(calp1))
            else:
                k = self._astroid(x, y)
                omg12a = lamscale * (-x * k / (1 + k) if self._f >= 0
                                     else -y * (1 + k) / k)
                somg12, comg12 = math.sin(omg12a), -math.cos(omg12a)
                salp1 = cbet2 * somg12
                calp1 = sbet12a - cbet2 * sbet1 * sq(somg12) / (1 - comg12)

        if not salp1 <= 0:
            salp1, calp1 = norm2(salp1, calp1)
        else:
            salp1, calp1 = 1.0, 0.0
        return sig12, salp1, calp1, salp2, calp2, dnm

    def _lambda12(
        self, sbet1, cbet1, dn1, sbet2, cbet2, dn2, salp1, calp1,
        slam120, clam120, diffp
    ):
        """Longitude error of the geodesic with azimuth alp1, and its derivative."""
        if sbet1 == 0 and calp1 == 0:
            # Break degeneracy of equatorial line
            calp1 = -self.tiny

        salp0 = salp1 * cbet1
        calp0 = math.hypot(calp1, salp1 * sbet1)

        ssig1 = sbet1
        somg1 = salp0 * sbet1
        csig1 = comg1 = calp1 * cbet1
        ssig1, csig1 = norm2(ssig1, csig1)

        # Enforce symmetries where cbet2 == cbet1 to keep alp2 exact
        salp2 = salp0 / cbet2 if cbet2 != cbet1 else salp1
        if cbet2 != cbet1 or abs(sbet2) != -sbet1:
            calp2 = math.sqrt(
                sq(calp1 * cbet1)
                + ((cbet2 - cbet1) * (cbet1 + cbet2) if cbet1 < -sbet1
                   else (sbet1 - sbet2) * (sbet1 + sbet2))
            ) / cbet2
        else:
            calp2 = abs(calp1)

        ssig2 = sbet2
        somg2 = salp0 * sbet2
        csig2 = comg2 = calp2 * cbet2
        ssig2, csig2 = norm2(ssig2, csig2)

        sig12 = math.atan2(max(0.0, csig1 * ssig2 - ssig1 * csig2),
                           csig1 * csig2 + ssig1 * ssig2)
        somg12 = max(0.0, comg1 * somg2 - somg1 * comg2)
        comg12 = comg1 * comg2 + somg1 * somg2
        # eta = omg12 - lam120
        eta = math.atan2(somg12 * clam120 - comg12 * slam120,
                         comg12 * clam120 + somg12 * slam120)

        k2 = sq(calp0) * self._ep2
        eps = series.expansion_parameter(k2)
        c3a = series.c3f(self.c3x, eps)
        b312 = (series.sin_cos_series(True, ssig2, csig2, c3a)
                - series.sin_cos_series(True, ssig1, csig1, c3a))
        domg12 = -self._f * series.a3f(self.a3x, eps) * salp0 * (sig12 + b312)
        lam12 = eta + domg12

        if diffp:
            if calp2 == 0:
                dlam12 = -2 * self._f1 * dn1 / sbet1
            else:
                _, dlam12, _, _, _ = self._lengths(
                    eps, sig12, ssig1, csig1, dn1, ssig2, csig2, dn2, cbet1, cbet2
                )
                dlam12 *= self._f1 / (calp2 * cbet2)
        else:
            dlam12 = math.nan

        return (lam12, salp2, calp2, sig12, ssig1, csig1, ssig2, csig2,
                eps, dlam12)

    def _gen_inverse(self, lat1: float, lon1: float, lat2: float, lon2: float):
        """Core of the inverse solution; latitudes are already validated.

        Returns (a12, s12, salp1, calp1, salp2, calp2, m12, M12, M21).
        """
        # Compute longitude difference exactly, then reduce to [0, 180]
        lon12, lon12s = ang_diff(lon1, lon2)
        lonsign = 1.0 if lon12 >= 0 else -1.0
        lon12 = lonsign * ang_round(lon12)
        lon12s = ang_round((180 - lon12) - lonsign * lon12s)
        lam12 = math.radians(lon12)
        if lon12 > 90:
            slam12, clam12 = sincosd(lon12s)
            clam12 = -clam12
        else:
            slam12, clam12 = sincosd(lon12)

        lat1 = ang_round(lat1)
        lat2 = ang_round(lat2)
        # Swap points so that |lat1| >= |lat2|, then make lat1 <= 0
        swapp = -1.0 if abs(lat1) < abs(lat2) else 1.0
        if swapp < 0:
            lonsign *= -1
            lat2, lat1 = lat1, lat2
        latsign = 1.0 if lat1 < 0 else -1.0
        lat1 *= latsign
        lat2 *= latsign

        sbet1, cbet1 = sincosd(lat1)
        sbet1 *= self._f1
        sbet1, cbet1 = norm2(sbet1, cbet1)
        cbet1 = max(self.tiny, cbet1)

        sbet2, cbet2 = sincosd(lat2)
        sbet2 *= self._f1
        sbet2, cbet2 = norm2(sbet2, cbet2)
        cbet2 = max(self.tiny, cbet2)

        # Keep |bet1| == |bet2| exact when the latitudes mirror each other
        if cbet1 < -sbet1:
            if cbet2 == cbet1:
                sbet2 = math.copysign(sbet1, sbet2)
        else:
            if abs(sbet2) == -sbet1:
                cbet2 = cbet1

        dn1 = math.sqrt(1 + self._ep2 * sq(sbet1))
        dn2 = math.sqrt(1 + self._ep2 * sq(sbet2))

        a12 = s12x = m12x = big_m12 = big_m21 = math.nan
        salp1 = calp1 = salp2 = calp2 = math.nan

        meridian = lat1 == -90 or slam12 == 0
        if meridian:
            # Endpoints on a single full meridian
            calp1, salp1 = clam12, slam12
            calp2, salp2 = 1.0, 0.0
            ssig1, csig1 = sbet1, calp1 * cbet1
            ssig2, csig2 = sbet2, calp2 * cbet2
            sig12 = math.atan2(max(0.0, csig1 * ssig2 - ssig1 * csig2),
                               csig1 * csig2 + ssig1 * ssig2)
            s12x, m12x, _, big_m12, big_m21 = self._lengths(
                self._n, sig12, ssig1, csig1, dn1, ssig2, csig2, dn2, cbet1, cbet2
            )
            # A negative reduced length means the meridian is not the
            # shortest path (only possible on prolate ellipsoids)
            if sig12 < 1 or m12x >= 0:
                if sig12 < 3 * self.tiny or (sig12 < self.tol0 and (s12x < 0 or m12x < 0)):
                    sig12 = m12x = s12x = 0.0
                m12x *= self._b
                s12x *= self._b
                a12 = math.degrees(sig12)
            else:
                meridian = False

        if not meridian and sbet1 == 0 and (self._f <= 0 or lon12s >= self._f * 180):
            # Geodesic runs along the equator
            calp1 = calp2 = 0.0
            salp1 = salp2 = 1.0
            s12x = self._a * lam12
            sig12 = lam12 / self._f1
            m12x = self._b * math.sin(sig12)
            big_m12 = big_m21 = math.cos(sig12)
            a12 = lon12 / self._f1
        elif not meridian:
            sig12, salp1, calp1, salp2, calp2, dnm = self._inverse_start(
                sbet1, cbet1, dn1, sbet2, cbet2, dn2, lam12, slam12, clam12
            )
            if sig12 >= 0:
                # Short line: the starting estimate is already the answer
                s12x = sig12 * self._b * dnm
                m12x = sq(dnm) * self._b * math.sin(sig12 / dnm)
                big_m12 = big_m21 = math.cos(sig12 / dnm)
                a12 = math.degrees(sig12)
            else:
                sig12, s12x, m12x, big_m12, big_m21, salp1, calp1, salp2, calp2 = (
                    self._solve_azimuth(sbet1, cbet1, dn1, sbet2, cbet2, dn2,
                                        salp1, calp1, slam12, clam12)
                )
                a12 = math.degrees(sig12)

        s12 = 0.0 + s12x
        m12 = 0.0 + m12x

        if swapp < 0:
            salp2, salp1 = salp1, salp2
            calp2, calp1 = calp1, calp2
            big_m21, big_m12 = big_m12, big_m21

        salp1 *= swapp * lonsign
        calp1 *= swapp * latsign
        salp2 *= swapp * lonsign
        calp2 *= swapp * latsign

        return a12, s12, salp1, calp1, salp2, calp2, m12, big_m12, big_m21

    def _solve_azimuth(
        self, sbet1, cbet1, dn1, sbet2, cbet2, dn2, salp1, calp1, slam12, clam12
    ):
        """Find alp1 by Newton's method, bisecting whenever Newton misbehaves."""
        numit = 0
        tripn = tripb = False
        # Bracket [alp1a, alp1b] on the root, initially [0, pi]
        salp1a, calp1a = self.tiny, 1.0
        salp1b, calp1b = self.tiny, -1.0
        bisections = 0
        while numit < self.maxit2:
            (v, salp2, calp2, sig12, ssig1, csig1, ssig2, csig2,
             eps, dv) = self._lambda12(
                sbet1, cbet1, dn1, sbet2, cbet2, dn2, salp1, calp1,
                slam12, clam12, numit < self.maxit1,
            )
            if tripb or not abs(v) >= (8 if tripn else 1) * self.tol0:
                break
            # Update bracket
            if v > 0 and (numit > self.maxit1 or calp1 / salp1 > calp1b / salp1b):
                salp1b, calp1b = salp1, calp1
            elif v < 0 and (numit > self.maxit1 or calp1 / salp1 < calp1a / salp1a):
                salp1a, calp1a = salp1, calp1
            numit += 1
            if numit < self.maxit1 and dv > 0:
                dalp1 = -v / dv
                sdalp1, cdalp1 = math.sin(dalp1), math.cos(dalp1)
                nsalp1 = salp1 * cdalp1 + calp1 * sdalp1
                if nsalp1 > 0 and abs(dalp1) < math.pi:
                    calp1 = calp1 * cdalp1 - salp1 * sdalp1
                    salp1 = nsalp1
                    salp1, calp1 = norm2(salp1, calp1)
                    # Stop iterating once the Newton step is tiny
                    tripn = abs(v) <= 16 * self.tol0
                    continue
            # Newton stepped outside the bracket or is exhausted: bisect
            salp1 = (salp1a + salp1b) / 2
            calp1 = (calp1a + calp1b) / 2
            salp1, calp1 = norm2(salp1, calp1)
            tripn = False
            tripb = (abs(salp1a - salp1) + (calp1a - calp1) < self.tolb
                     or abs(salp1 - salp1b) + (calp1 - calp1b) < self.tolb)
            bisections += 1

        if bisections:
            logger.debug(
                "Inverse solve used %d bisection steps in %d iterations",
                bisections, numit,
            )

        s12x, m12x, _, big_m12, big_m21 = self._lengths(
            eps, sig12, ssig1, csig1, dn1, ssig2, csig2, dn2, cbet1, cbet2
        )
        m12x *= self._b
        s12x *= self._b
        return sig12, s12x, m12x, big_m12, big_m21, salp1, calp1, salp2, calp2


# ----------------------------------------------------------------------
# Process-wide shared instances
# ----------------------------------------------------------------------

@lru_cache(maxsize=None)
def wgs84_geodesic() -> GeodesicSolver:
    """The WGS84 geodesic solver, built on first use and shared thereafter."""
    return GeodesicSolver(wgs84())


@lru_cache(maxsize=None)
def unit_geodesic_line() -> GeodesicLine:
    """A 1 m WGS84 geodesic starting at (0, 0) heading due north.

    A fixed reference instance, convenient as a default value and in tests.
    """
    return wgs84_geodesic().direct_line(0.0, 0.0, 0.0, 1.0)


def geodesic_inverse(lat1: Scalar, lon1: Scalar, lat2: Scalar, lon2: Scalar) -> GeodesicResult:
    """Solve the inverse problem on WGS84.

    Examples
    --------
    >>> result = geodesic_inverse(-41.32, 174.81, 40.96, -5.50)
    >>> round(result.distance / 1000, 1)
    19959.7
    """
    return wgs84_geodesic().inverse(lat1, lon1, lat2, lon2)


def geodesic_direct(lat1: Scalar, lon1: Scalar, azi1: Scalar, distance: Scalar) -> GeodesicResult:
    """Solve the direct problem on WGS84."""
    return wgs84_geodesic().direct(lat1, lon1, azi1, distance)
