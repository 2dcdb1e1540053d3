"""
Angle Arithmetic and Auxiliary-Latitude Helpers.

Geodetic algorithms lose accuracy quickly when angles are reduced
carelessly: sin(radians(180)) is not zero, and a longitude difference
computed as lon2 - lon1 can be off by 360. The helpers here perform the
reductions exactly in degrees before converting to radians, and carry
the rounding error of sums where it matters.

The conformal latitude helpers `taupf` and `tauf` convert between
tan(phi) and tan(chi), where chi is the conformal latitude. They are
shared by the Transverse Mercator, Polar Stereographic and rhumb-line
code.

References
----------
- Karney, C.F.F. (2011). Transverse Mercator with an accuracy of a few
  nanometers. Journal of Geodesy, 85(8), 475-485.
- Karney, C.F.F. (2013). Algorithms for geodesics. Journal of Geodesy,
  87(1), 43-55.
"""

import math
from typing import Sequence, Tuple

import numpy as np

from common.errors import CoordinateRangeError, CoordinateRangeErrorKind


DIGITS = 53
EPSILON = math.ldexp(1.0, 1 - DIGITS)
MIN_VALUE = math.ldexp(1.0, -1022)


def sq(x: float) -> float:
    return x * x


def cbrt(x: float) -> float:
    return float(np.cbrt(x))


def norm2(x: float, y: float) -> Tuple[float, float]:
    """Scale (x, y) to unit length."""
    r = math.hypot(x, y)
    return x / r, y / r


def error_free_sum(u: float, v: float) -> Tuple[float, float]:
    """Return s = round(u + v) and the rounding error t = u + v - s."""
    s = u + v
    up = s - v
    vpp = s - up
    up -= u
    vpp -= v
    t = -(up + vpp)
    return s, t


def polyval(n: int, p: Sequence[float], s: int, x: float) -> float:
    """Evaluate the degree-n polynomial with coefficients p[s:s+n+1] at x.

    Coefficients are ordered from the highest power down (Horner's rule).
    """
    y = float(p[s]) if n >= 0 else 0.0
    while n > 0:
        n -= 1
        s += 1
        y = y * x + p[s]
    return y


def ang_round(x: float) -> float:
    """Round tiny angles so that small values are exactly representable.

    Values smaller than 1/16 are coarsened to multiples of 2^-57, which
    keeps subsequent subtractions from 90 exact.
    """
    z = 1 / 16.0
    y = abs(x)
    if y < z:
        y = z - (z - y)
    return math.copysign(y, x) if x != 0 else 0.0


def ang_normalize(x: float) -> float:
    """Reduce an angle in degrees to the range (-180, 180]."""
    y = math.remainder(x, 360.0)
    return 180.0 if y == -180 else y


def ang_diff(x: float, y: float) -> Tuple[float, float]:
    """Exact difference y - x of two angles, reduced to (-180, 180].

    Returns
    -------
    Tuple[float, float]
        (d, e) where d is the rounded difference and e the rounding error.
    """
    d, t = error_free_sum(ang_normalize(-x), ang_normalize(y))
    d = ang_normalize(d)
    return error_free_sum(-180.0 if d == 180 and t > 0 else d, t)


def sincosd(x: float) -> Tuple[float, float]:
    """Sine and cosine of an angle in degrees, exact at multiples of 90."""
    r = math.fmod(x, 360.0)
    q = 0 if math.isnan(r) else int(round(r / 90))
    r -= 90 * q
    r = math.radians(r)
    s = math.sin(r)
    c = math.cos(r)
    q = q % 4
    if q == 1:
        s, c = c, -s
    elif q == 2:
        s, c = -s, -c
    elif q == 3:
        s, c = -c, s
    # Remove the sign of zero results
    return s + 0.0, c + 0.0


def atan2d(y: float, x: float) -> float:
    """atan2 in degrees with results exact at multiples of 45."""
    if abs(y) > abs(x):
        q = 2
        x, y = y, x
    else:
        q = 0
    if x < 0:
        q += 1
        x = -x
    ang = math.degrees(math.atan2(y, x))
    if q == 1:
        ang = (180 if y >= 0 else -180) - ang
    elif q == 2:
        ang = 90 - ang
    elif q == 3:
        ang = -90 + ang
    return ang


def tand(x: float) -> float:
    s, c = sincosd(x)
    return s / c if c != 0 else math.copysign(1 / EPSILON**2, s)


def check_latitude(lat: float) -> float:
    """Return the latitude unchanged, or raise if it lies outside [-90, 90]."""
    if not (-90.0 <= lat <= 90.0):
        raise CoordinateRangeError(
            CoordinateRangeErrorKind.LATITUDE, lat, (-90.0, 90.0)
        )
    return lat


def eatanhe(x: float, es: float) -> float:
    """e * atanh(e * x), continued to prolate ellipsoids where es < 0."""
    return es * math.atanh(es * x) if es > 0 else -es * math.atan(es * x)


def taupf(tau: float, es: float) -> float:
    """tan(chi) from tan(phi) for signed eccentricity es."""
    if math.isinf(tau):
        return tau
    tau1 = math.hypot(1.0, tau)
    sig = math.sinh(eatanhe(tau / tau1, es))
    return math.hypot(1.0, sig) * tau - sig * tau1


def tauf(taup: float, es: float) -> float:
    """tan(phi) from tan(chi) by Newton's method (inverse of `taupf`)."""
    numit = 5
    tol = math.sqrt(EPSILON) / 10
    taumax = 2 / math.sqrt(EPSILON)
    e2m = 1 - sq(es)
    # Starting guess good to better than 1e-3 for |taup| < 70
    tau = taup * math.exp(eatanhe(1.0, es)) if abs(taup) > 70 else taup / e2m
    stol = tol * max(1.0, abs(taup))
    if not abs(tau) < taumax:
        return tau
    for _ in range(numit):
        taupa = taupf(tau, es)
        dtau = ((taup - taupa) * (1 + e2m * sq(tau))
                / (e2m * math.hypot(1.0, tau) * math.hypot(1.0, taupa)))
        tau += dtau
        if not abs(dtau) >= stol:
            break
    return tau
