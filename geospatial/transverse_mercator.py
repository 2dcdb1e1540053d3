"""
Transverse Mercator Projection.

The Transverse Mercator projection is the conformal map of the ellipsoid
whose central meridian is projected at constant scale k0. It underlies
UTM and most national grids.

Two interchangeable numerical strategies are provided:

1. Krüger series (default): the ellipsoid is first mapped conformally to
   a sphere, the spherical Transverse Mercator is applied, and the result
   is corrected by a sixth-order trigonometric series in the third
   flattening n. Accurate to a few nanometres within 3900 km of the
   central meridian on Earth; fast.

2. Exact (Lee/Thompson): the mapping is written in terms of Jacobi
   elliptic functions with modulus e. It is valid over the whole
   ellipsoid and for any eccentricity e < 1, at the cost of a Newton
   iteration in the complex plane. The standard domain mirrors the
   southern hemisphere onto the northern one, which leaves a cut along
   the equator more than (1 - e) 90 degrees from the central meridian.
   With `extended=True` the southern hemisphere beyond that longitude is
   mapped without the mirror, so the projection is continuous across
   the whole equator.

No false easting or northing is applied here; that is the job of the
UTM layer.

References
----------
- Karney, C.F.F. (2011). Transverse Mercator with an accuracy of a few
  nanometers. Journal of Geodesy, 85(8), 475-485.
- Lee, L.P. (1976). Conformal Projections Based on Elliptic Functions.
  Cartographica, 13(1), Monograph 16.
- Krüger, L. (1912). Konforme Abbildung des Erdellipsoids in der Ebene.
"""

import cmath
import math
from functools import lru_cache
from typing import Optional, Tuple

from scipy.special import ellipe, ellipeinc, ellipj, ellipk

from common.constants import GeodeticConstants
from common.errors import (
    ConstructionError, ConstructionErrorKind,
    CoordinateRangeError, CoordinateRangeErrorKind,
)
from common.geomath import (
    EPSILON, ang_diff, ang_normalize, atan2d, cbrt, check_latitude, eatanhe,
    sincosd, sq, tauf, taupf,
)
from common.logging_config import get_logger
from common.units import Scalar, as_magnitude
from geospatial.ellipsoid import Ellipsoid, wgs84
from geospatial.projections import GeographicPoint, ProjectedPoint, ProjectionAdapter

logger = get_logger(__name__)

# Krüger series coefficients: for each j, the polynomial in n starting at n^j.
_ALPHA = (
    (1 / 2, -2 / 3, 5 / 16, 41 / 180, -127 / 288, 7891 / 37800),
    (13 / 48, -3 / 5, 557 / 1440, 281 / 630, -1983433 / 1935360),
    (61 / 240, -103 / 140, 15061 / 26880, 167603 / 181440),
    (49561 / 161280, -179 / 168, 6601661 / 7257600),
    (34729 / 80640, -3418889 / 1995840),
    (212378941 / 319334400,),
)

_BETA = (
    (1 / 2, -2 / 3, 37 / 96, -1 / 360, -81 / 512, 96199 / 604800),
    (1 / 48, 1 / 15, -437 / 1440, 46 / 105, -1118711 / 3870720),
    (17 / 480, -37 / 840, -209 / 4480, 5569 / 90720),
    (4397 / 161280, -11 / 504, -830251 / 7257600),
    (4583 / 161280, -108847 / 3991680),
    (20648693 / 638668800,),
)


def _series_coefficients(table, n: float) -> Tuple[float, ...]:
    coeffs = [0.0]
    for j, poly in enumerate(table, start=1):
        coeffs.append(sum(c * n ** (j + i) for i, c in enumerate(poly)))
    return tuple(coeffs)


class _KruegerSeries:
    """Sixth-order Krüger series implementation."""

    def __init__(self, ellipsoid: Ellipsoid, k0: float):
        n = ellipsoid.third_flattening
        self._k0 = k0
        self._e2 = ellipsoid.e2
        self._es = ellipsoid.signed_eccentricity
        self._e2m = 1 - self._e2
        # Scale factor of the conformal sphere at the pole
        self._c = math.sqrt(self._e2m) * math.exp(eatanhe(1.0, self._es))
        # Rectifying radius over a
        self._b1 = (1 + sq(n) / 4 + n ** 4 / 64 + n ** 6 / 256) / (1 + n)
        self._a1 = self._b1 * ellipsoid.equatorial_radius
        self._alp = _series_coefficients(_ALPHA, n)
        self._bet = _series_coefficients(_BETA, n)

    def forward(self, lon0: float, lat: float, lon: float) -> ProjectedPoint:
        lon = ang_diff(lon0, lon)[0]
        # Fold into the first quadrant; restore the signs at the end
        latsign = math.copysign(1.0, lat)
        lonsign = math.copysign(1.0, lon)
        lat *= latsign
        lon *= lonsign
        backside = lon > 90
        if backside:
            if lat == 0:
                latsign = -1.0
            lon = 180 - lon
        sphi, cphi = sincosd(lat)
        slam, clam = sincosd(lon)

        if lat != 90:
            tau = sphi / cphi
            taup = taupf(tau, self._es)
            if math.hypot(taup, clam) == 0:
                raise CoordinateRangeError(
                    CoordinateRangeErrorKind.PROJECTION_SINGULARITY, lon0 + lonsign * lon
                )
            xip = math.atan2(taup, clam)
            etap = math.asinh(slam / math.hypot(taup, clam))
            gamma = atan2d(slam * taup, clam * math.hypot(1.0, taup))
            k = (math.sqrt(self._e2m + self._e2 * sq(cphi)) * math.hypot(1.0, tau)
                 / math.hypot(taup, clam))
        else:
            xip = math.pi / 2
            etap = 0.0
            gamma = lon
            k = self._c

        zp = complex(xip, etap)
        z = zp
        dz = complex(1.0, 0.0)
        for j in range(1, len(self._alp)):
            z += self._alp[j] * cmath.sin(2 * j * zp)
            dz += 2 * j * self._alp[j] * cmath.cos(2 * j * zp)
        xi, eta = z.real, z.imag

        gamma -= atan2d(dz.imag, dz.real)
        k *= self._b1 * abs(dz)
        y = self._a1 * self._k0 * (math.pi - xi if backside else xi) * latsign
        x = self._a1 * self._k0 * eta * lonsign
        if backside:
            gamma = 180 - gamma
        gamma = ang_normalize(gamma * latsign * lonsign)
        return ProjectedPoint(x, y, gamma, k * self._k0)

    def reverse(self, lon0: float, x: float, y: float) -> GeographicPoint:
        xi = y / (self._a1 * self._k0)
        eta = x / (self._a1 * self._k0)
        xisign = math.copysign(1.0, xi)
        etasign = math.copysign(1.0, eta)
        xi *= xisign
        eta *= etasign
        backside = xi > math.pi / 2
        if backside:
            xi = math.pi - xi

        z = complex(xi, eta)
        zp = z
        dzp = complex(1.0, 0.0)
        for j in range(1, len(self._bet)):
            zp -= self._bet[j] * cmath.sin(2 * j * z)
            dzp -= 2 * j * self._bet[j] * cmath.cos(2 * j * z)
        xip, etap = zp.real, zp.imag

        gamma = atan2d(dzp.imag, dzp.real)
        k = self._b1 / abs(dzp)
        # Spherical Transverse Mercator inverse on the conformal sphere
        s = math.sinh(etap)
        c = max(0.0, math.cos(xip))
        r = math.hypot(s, c)
        if r != 0:
            lon = atan2d(s, c)
            taup = math.sin(xip) / r
            tau = tauf(taup, self._es)
            lat = atan2d(tau, 1.0)
            gamma += atan2d(math.sin(xip) * math.tanh(etap), c)
            k *= (math.sqrt(self._e2m + self._e2 / (1 + sq(tau)))
                  * math.hypot(1.0, tau) * r)
        else:
            lat = 90.0
            lon = 0.0
            k *= self._c

        lat *= xisign
        if backside:
            lon = 180 - lon
        lon *= etasign
        lon = ang_normalize(lon + ang_normalize(lon0))
        if backside:
            gamma = 180 - gamma
        gamma = ang_normalize(gamma * xisign * etasign)
        return GeographicPoint(lat, lon, gamma, k * self._k0)


class _ExactLee:
    """Exact Transverse Mercator using Jacobi elliptic functions.

    The map is the composition of Thompson's conformal map of the
    ellipsoid onto the w = u + iv plane with Lee's map of that plane onto
    the projected plane sigma = xi + i eta.
    """

    numit = 10
    tol = EPSILON
    tol2 = 0.1 * EPSILON
    taytol = EPSILON ** 0.6
    overflow = 1 / sq(EPSILON)

    def __init__(self, ellipsoid: Ellipsoid, k0: float, extended: bool):
        self._a = ellipsoid.equatorial_radius
        self._k0 = k0
        self._extended = extended
        self._mu = ellipsoid.e2
        self._mv = 1 - self._mu
        self._e = math.sqrt(self._mu)
        self._es = self._e
        # Complete integrals for the two parameters
        self._ku = float(ellipk(self._mu))
        self._eu = float(ellipe(self._mu))
        self._kv = float(ellipk(self._mv))
        self._ev = float(ellipe(self._mv))
        self._kev = self._kv - self._ev

    # Elliptic function helpers ----------------------------------------

    @staticmethod
    def _sncndn(x: float, m: float):
        sn, cn, dn, ph = ellipj(x, m)
        return float(sn), float(cn), float(dn), float(ph)

    # Thompson map: w -> zeta = psi + i lam -----------------------------

    def _zeta(self, snu, cnu, dnu, snv, cnv, dnv) -> Tuple[float, float]:
        mu, mv, e = self._mu, self._mv, self._e
        d1 = math.sqrt(sq(cnu) + mv * sq(snu * snv))
        d2 = math.sqrt(mu * sq(cnu) + mv * sq(cnv))
        t1 = snu * dnv / d1 if d1 != 0 else math.copysign(self.overflow, snu)
        t2 = (math.sinh(e * math.asinh(e * snu / d2)) if d2 != 0
              else math.copysign(self.overflow, snu))
        taup = t1 * math.hypot(1.0, t2) - t2 * math.hypot(1.0, t1)
        lam = ((math.atan2(dnu * snv, cnu * cnv)
                - e * math.atan2(e * cnu * snv, dnu * cnv))
               if d1 != 0 and d2 != 0 else 0.0)
        return taup, lam

    def _dwdzeta(self, snu, cnu, dnu, snv, cnv, dnv) -> Tuple[float, float]:
        mu, mv = self._mu, self._mv
        d = mv * sq(sq(cnv) + mu * sq(snu * snv))
        du = cnu * dnu * dnv * (sq(cnv) - mu * sq(snu * snv)) / d
        dv = -snu * snv * cnv * (sq(dnu * dnv) + mu * sq(cnu)) / d
        return du, dv

    def _zetainv0(self, psi: float, lam: float) -> Tuple[float, float, bool]:
        e, mv = self._e, self._mv
        retval = False
        if (psi < -e * math.pi / 4 and lam > (1 - 2 * e) * math.pi / 2
                and psi < lam - (1 - e) * math.pi / 2):
            # Near the singular point at zeta = i (1 - e) pi / 2 reached from below
            psix = 1 - psi / e
            lamx = (math.pi / 2 - lam) / e
            u = (math.asinh(math.sin(lamx) / math.hypot(math.cos(lamx), math.sinh(psix)))
                 * (1 + self._mu / 2))
            v = math.atan2(math.cos(lamx), math.sinh(psix)) * (1 + self._mu / 2)
            u = self._ku - u
            v = self._kv - v
        elif psi < e * math.pi / 2 and lam > (1 - 2 * e) * math.pi / 2:
            # zeta has a triple zero of its derivative at w0 = i K'; invert
            # the cubic term of the Taylor expansion there
            dlam = lam - (1 - e) * math.pi / 2
            rad = math.hypot(psi, dlam)
            ang = math.atan2(dlam - psi, psi + dlam) - 0.75 * math.pi
            retval = rad < e * self.taytol
            rad = cbrt(3 / (mv * e) * rad)
            ang /= 3
            u = rad * math.cos(ang)
            v = rad * math.sin(ang) + self._kv
        else:
            # Spherical Transverse Mercator, scaled to the elliptic periods
            v = math.asinh(math.sin(lam) / math.hypot(math.cos(lam), math.sinh(psi)))
            u = math.atan2(math.sinh(psi), math.cos(lam))
            u *= self._ku / (math.pi / 2)
            v *= self._ku / (math.pi / 2)
        return u, v, retval

    def _zetainv(self, taup: float, lam: float) -> Tuple[float, float]:
        psi = math.asinh(taup)
        scal = 1 / math.hypot(1.0, taup)
        u, v, done = self._zetainv0(psi, lam)
        if done:
            return u, v
        stol2 = self.tol2 / sq(max(psi, 1.0))
        trip = 0
        for _ in range(self.numit + 1):
            snu, cnu, dnu, _ = self._sncndn(u, self._mu)
            snv, cnv, dnv, _ = self._sncndn(v, self._mv)
            tau1, lam1 = self._zeta(snu, cnu, dnu, snv, cnv, dnv)
            du1, dv1 = self._dwdzeta(snu, cnu, dnu, snv, cnv, dnv)
            tau1 = (tau1 - taup) * scal
            lam1 -= lam
            delu = tau1 * du1 - lam1 * dv1
            delv = tau1 * dv1 + lam1 * du1
            u -= delu
            v -= delv
            if trip:
                break
            if not sq(delu) + sq(delv) >= stol2 * self._pole_factor(u, v):
                trip += 1
        self._check_converged(u, v, trip, delu, delv, math.degrees(lam))
        return u, v

    def _check_converged(self, u: float, v: float, trip: int, delu: float, delv: float, value: float) -> None:
        # Newton stalled far from a root
        stalled = not trip and not sq(delu) + sq(delv) < self.taytol
        if stalled or not (math.isfinite(u) and math.isfinite(v)):
            raise CoordinateRangeError(CoordinateRangeErrorKind.PROJECTION_SINGULARITY, value)

    # Lee map: w -> sigma = xi + i eta ----------------------------------

    def _sigma(self, u, snu, cnu, dnu, phu, v, snv, cnv, dnv, phv) -> Tuple[float, float]:
        mu, mv = self._mu, self._mv
        d = mu * sq(cnu) + mv * sq(cnv)
        xi = float(ellipeinc(phu, mu)) - mu * snu * cnu * dnu / d
        eta = v - float(ellipeinc(phv, mv)) + mv * snv * cnv * dnv / d
        return xi, eta

    def _dwdsigma(self, snu, cnu, dnu, snv, cnv, dnv) -> Tuple[float, float]:
        mu, mv = self._mu, self._mv
        d = mv * sq(sq(cnv) + mu * sq(snu * snv))
        dnr = dnu * cnv * dnv
        dni = -mu * snu * cnu * snv
        du = (sq(dnr) - sq(dni)) / d
        dv = 2 * dnr * dni / d
        return du, dv

    def _sigmainv0(self, xi: float, eta: float) -> Tuple[float, float, bool]:
        mv = self._mv
        retval = False
        if (eta > 1.25 * self._kev
                or (xi < -0.25 * self._eu and xi < eta - self._kev)):
            # sigma has a simple pole at w0 = K + i K'
            x = xi - self._eu
            y = eta - self._kev
            r2 = sq(x) + sq(y)
            u = self._ku + x / r2
            v = self._kv - y / r2
        elif ((eta > 0.75 * self._kev and xi < 0.25 * self._eu)
              or eta > self._kev):
            # sigma' and sigma'' vanish at w0 = i K'; invert the cubic term
            deta = eta - self._kev
            rad = math.hypot(xi, deta)
            ang = math.atan2(deta - xi, xi + deta) - 0.75 * math.pi
            retval = rad < 2 * self.taytol
            rad = cbrt(3 / mv * rad)
            ang /= 3
            u = rad * math.cos(ang)
            v = rad * math.sin(ang) + self._kv
        else:
            # Correct in the limit e -> 0
            u = xi * self._ku / self._eu
            v = eta * self._ku / self._eu
        return u, v, retval

    def _sigmainv(self, xi: float, eta: float) -> Tuple[float, float]:
        u, v, done = self._sigmainv0(xi, eta)
        if done:
            return u, v
        trip = 0
        for _ in range(self.numit + 1):
            snu, cnu, dnu, phu = self._sncndn(u, self._mu)
            snv, cnv, dnv, phv = self._sncndn(v, self._mv)
            xi1, eta1 = self._sigma(u, snu, cnu, dnu, phu, v, snv, cnv, dnv, phv)
            du1, dv1 = self._dwdsigma(snu, cnu, dnu, snv, cnv, dnv)
            xi1 -= xi
            eta1 -= eta
            delu = xi1 * du1 - eta1 * dv1
            delv = xi1 * dv1 + eta1 * du1
            u -= delu
            v -= delv
            if trip:
                break
            if not sq(delu) + sq(delv) >= self.tol2 * self._pole_factor(u, v):
                trip += 1
        self._check_converged(u, v, trip, delu, delv, eta)
        return u, v

    def _scale(self, tau, snu, cnu, dnu, snv, cnv, dnv) -> Tuple[float, float]:
        mu, mv = self._mu, self._mv
        sec2 = 1 + sq(tau)
        gamma = math.atan2(mv * snu * snv * cnv, cnu * dnu * dnv)
        k = (math.sqrt(mv + mu / sec2) * math.sqrt(sec2)
             * math.sqrt((mv * sq(snv) + sq(cnu * dnv))
                         / (mu * sq(cnu) + mv * sq(cnv))))
        return math.degrees(gamma), k

    # Extended domain ----------------------------------------------------
    #
    # The w rectangle [0, K] x [0, K'] covers the northern quadrant together
    # with the southern strip (1 - e) 90 < lon <= 90; its edge v = K' is the
    # southern half of the meridian (1 - e) 90 and maps to eta = K' - E'.
    # The rest of the southern hemisphere is the mirror image u < 0. The
    # standard domain mirrors the whole southern hemisphere, leaving a cut
    # along the equator beyond (1 - e) 90; the extended domain keeps the
    # southern strip on the rectangle so the map is continuous across it.

    def _southern_sheet_geographic(self, lat: float, lon: float) -> bool:
        """True if (lat, lon), lon folded into [0, 90], lies on the southern strip."""
        return self._extended and -90 < lat < 0 and lon > 90 * (1 - self._e)

    def _southern_sheet_projected(self, xi: float, eta: float) -> bool:
        """True if (xi, eta), eta >= 0, is the image of the southern strip."""
        return self._extended and eta > self._kev and (xi < 0 or xi > 2 * self._eu)

    def _pole_factor(self, u: float, v: float) -> float:
        """Squared distance to w0 = K + i K', capped at 1.

        Toward the south pole of the strip w approaches w0 exponentially
        and the Newton tolerance has to shrink with the distance.
        """
        return min(1.0, sq(self._ku - u) + sq(self._kv - v))

    def _check_pole_distance(self, u: float, v: float, value: float) -> None:
        # Closer to w0 than sqrt(eps) the position is lost to rounding
        if self._pole_factor(u, v) < EPSILON:
            raise CoordinateRangeError(CoordinateRangeErrorKind.PROJECTION_SINGULARITY, value)

    # Projection ---------------------------------------------------------

    def forward(self, lon0: float, lat: float, lon: float) -> ProjectedPoint:
        lon = ang_diff(lon0, lon)[0]
        lonsign = -1.0 if math.copysign(1.0, lon) < 0 else 1.0
        lon *= lonsign
        backside = lon > 90
        if backside:
            lon = 180 - lon
        unfolded = self._southern_sheet_geographic(lat, lon)
        latsign = -1.0 if not unfolded and math.copysign(1.0, lat) < 0 else 1.0
        lat *= latsign
        if backside and lat == 0:
            latsign = -1.0
        lam = math.radians(lon)

        if lat == 90:
            u, v = self._ku, 0.0
        elif lat == 0 and lon == 90 * (1 - self._e):
            u, v = 0.0, self._kv
        else:
            sphi, cphi = sincosd(lat)
            u, v = self._zetainv(taupf(sphi / cphi, self._es), lam)
            if unfolded:
                self._check_pole_distance(u, v, lat)

        snu, cnu, dnu, phu = self._sncndn(u, self._mu)
        snv, cnv, dnv, phv = self._sncndn(v, self._mv)
        xi, eta = self._sigma(u, snu, cnu, dnu, phu, v, snv, cnv, dnv, phv)
        if backside:
            xi = 2 * self._eu - xi
        y = xi * self._a * self._k0 * latsign
        x = eta * self._a * self._k0 * lonsign

        if lat == 90:
            gamma, k = lon, 1.0
        else:
            # Recompute (tau, lam) from (u, v) to improve accuracy of the scale
            taup, _ = self._zeta(snu, cnu, dnu, snv, cnv, dnv)
            tau = tauf(taup, self._es)
            gamma, k = self._scale(tau, snu, cnu, dnu, snv, cnv, dnv)
        if backside:
            gamma = 180 - gamma
        gamma = ang_normalize(gamma * latsign * lonsign)
        return ProjectedPoint(x, y, gamma, k * self._k0)

    def reverse(self, lon0: float, x: float, y: float) -> GeographicPoint:
        xi = y / (self._a * self._k0)
        eta = x / (self._a * self._k0)
        etasign = -1.0 if math.copysign(1.0, eta) < 0 else 1.0
        eta *= etasign
        unfolded = self._southern_sheet_projected(xi, eta)
        xisign = -1.0 if not unfolded and math.copysign(1.0, xi) < 0 else 1.0
        xi *= xisign
        backside = xi > self._eu
        if backside:
            xi = 2 * self._eu - xi

        if xi == 0 and eta == self._kev:
            u, v = 0.0, self._kv
        else:
            u, v = self._sigmainv(xi, eta)
            if self._extended:
                self._check_pole_distance(u, v, y)

        snu, cnu, dnu, _ = self._sncndn(u, self._mu)
        snv, cnv, dnv, _ = self._sncndn(v, self._mv)
        if v != 0 or u != self._ku:
            taup, lam = self._zeta(snu, cnu, dnu, snv, cnv, dnv)
            tau = tauf(taup, self._es)
            lat = math.degrees(math.atan(tau))
            lon = math.degrees(lam)
            gamma, k = self._scale(tau, snu, cnu, dnu, snv, cnv, dnv)
        else:
            lat, lon, gamma, k = 90.0, 0.0, 0.0, 1.0

        lat *= xisign
        if backside:
            lon = 180 - lon
        lon *= etasign
        lon = ang_normalize(lon + ang_normalize(lon0))
        if backside:
            gamma = 180 - gamma
        gamma = ang_normalize(gamma * xisign * etasign)
        return GeographicPoint(lat, lon, gamma, k * self._k0)


class TransverseMercatorProjector(ProjectionAdapter):
    """Transverse Mercator projection on one ellipsoid.

    A conformal (angle-preserving) projection suitable for regions that
    extend primarily north-south. This is the basis for UTM.

    Parameters
    ----------
    ellipsoid : Ellipsoid, optional
        Reference ellipsoid (default: WGS84). Its construction rejects a
        non-positive equatorial radius and a flattening >= 1.
    central_scale : float
        Scale factor k0 on the central meridian (default: 0.9996 for UTM).
    exact : bool
        Use the exact elliptic-function formulation instead of the Krüger
        series. Requires 0 < f < 1.
    extended : bool
        Map the southern hemisphere beyond (1 - e) 90 degrees from the
        central meridian on the sheet continuous with the northern
        hemisphere, removing the cut along that part of the equator.
        Requires `exact`.

    Raises
    ------
    ConstructionError
        SCALE_FACTOR if k0 <= 0, EXTENDED_WITHOUT_EXACT if `extended` is
        requested without `exact`, FLATTENING if `exact` is requested for
        a non-oblate ellipsoid.

    Examples
    --------
    >>> tm = TransverseMercatorProjector()
    >>> p = tm.forward(117.0, -31.94028333, 115.96695)
    >>> round(p.x + 500000, 3), round(p.y + 10000000, 3)
    (402357.369, 6465717.701)
    """

    def __init__(
        self,
        ellipsoid: Optional[Ellipsoid] = None,
        central_scale: float = GeodeticConstants.UTM_CENTRAL_SCALE.value,
        exact: bool = False,
        extended: bool = False
    ):
        self._ellipsoid = ellipsoid if ellipsoid is not None else wgs84()
        if not (math.isfinite(central_scale) and central_scale > 0):
            raise ConstructionError(ConstructionErrorKind.SCALE_FACTOR, central_scale)
        if extended and not exact:
            raise ConstructionError(ConstructionErrorKind.EXTENDED_WITHOUT_EXACT, extended)
        if exact and not self._ellipsoid.flattening > 0:
            raise ConstructionError(
                ConstructionErrorKind.FLATTENING, self._ellipsoid.flattening
            )
        self._k0 = central_scale
        self._exact = exact
        self._extended = extended
        if exact:
            self._impl = _ExactLee(self._ellipsoid, central_scale, extended)
        else:
            self._impl = _KruegerSeries(self._ellipsoid, central_scale)
        logger.debug("Built %s", self.name)

    @property
    def name(self) -> str:
        mode = "exact" if self._exact else "series"
        if self._extended:
            mode += ", extended"
        return f"Transverse Mercator ({mode}, k0={self._k0}, {self._ellipsoid.name})"

    @property
    def ellipsoid(self) -> Ellipsoid:
        return self._ellipsoid

    @property
    def central_scale(self) -> float:
        return self._k0

    @property
    def exact(self) -> bool:
        return self._exact

    @property
    def extended(self) -> bool:
        return self._extended

    def proj4_string(self, origin: float) -> str:
        return (f"+proj=tmerc +lat_0=0 +lon_0={origin!r} +k_0={self._k0!r} "
                f"+x_0=0 +y_0=0 {self._ellipsoid_proj4()} +units=m +no_defs")

    def forward(self, central_meridian: Scalar, latitude: Scalar, longitude: Scalar) -> ProjectedPoint:
        """Project a geographic point.

        Parameters
        ----------
        central_meridian : float
            Longitude of the central meridian in degrees.
        latitude, longitude : float
            Point to project in degrees.

        Returns
        -------
        ProjectedPoint
            Easting and northing from the origin on the central meridian at
            the equator, with convergence and scale at the point.

        Raises
        ------
        CoordinateRangeError
            LATITUDE if the latitude lies outside [-90, 90];
            PROJECTION_SINGULARITY for the series method at the points on
            the equator 90 degrees from the central meridian.
        """
        lat = check_latitude(as_magnitude(latitude, "degree"))
        return self._impl.forward(
            as_magnitude(central_meridian, "degree"), lat, as_magnitude(longitude, "degree")
        )

    def reverse(self, central_meridian: Scalar, x: Scalar, y: Scalar) -> GeographicPoint:
        """Recover the geographic point from projected coordinates.

        Parameters
        ----------
        central_meridian : float
            Longitude of the central meridian in degrees.
        x, y : float
            Easting and northing from the projection origin in meters.

        Returns
        -------
        GeographicPoint
            Latitude, longitude, convergence and scale.
        """
        return self._impl.reverse(
            as_magnitude(central_meridian, "degree"), as_magnitude(x, "m"), as_magnitude(y, "m")
        )


@lru_cache(maxsize=None)
def utm_projector() -> TransverseMercatorProjector:
    """The WGS84 Transverse Mercator with the UTM scale factor, shared."""
    return TransverseMercatorProjector(wgs84(), GeodeticConstants.UTM_CENTRAL_SCALE.value)
