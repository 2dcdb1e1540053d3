"""
Series Expansions for Geodesics on an Ellipsoid of Revolution.

The geodesic problems are solved by mapping the ellipsoid onto an
auxiliary sphere. Distances and longitudes on the ellipsoid then follow
from integrals whose integrands are expanded in the small parameter

    eps = (sqrt(1 + k²) - 1) / (sqrt(1 + k²) + 1),   k = e' cos(alpha0)

and, for the longitude integral, the third flattening n. The expansions
are carried to sixth order, which gives full double precision for
|f| < 1/50 and remains accurate (well below a micrometre on Earth-sized
bodies) for the flattenings of the planets.

Each coefficient table below stores, for every output coefficient, the
numerator polynomial (highest power first) followed by its denominator.

References
----------
- Karney, C.F.F. (2013). Algorithms for geodesics. Journal of Geodesy,
  87(1), 43-55. Equations (15)-(25).
"""

import math
from typing import List, Sequence

from common.geomath import polyval, sq

GEODESIC_ORDER = 6
NA1 = NC1 = NC1P = NA2 = NC2 = NA3 = NC3 = GEODESIC_ORDER

_A1M1_COEFF = (1, 4, 64, 0, 256)

_C1_COEFF = (
    -1, 6, -16, 32,
    -9, 64, -128, 2048,
    9, -16, 768,
    3, -5, 512,
    -7, 1280,
    -7, 2048,
)

_C1P_COEFF = (
    205, -432, 768, 1536,
    4005, -4736, 3840, 12288,
    -225, 116, 384,
    -7173, 2695, 7680,
    3467, 7680,
    38081, 61440,
)

_A2M1_COEFF = (25, 36, 64, 0, 256)

_C2_COEFF = (
    1, 2, 16, 32,
    35, 64, 384, 2048,
    15, 80, 768,
    7, 35, 512,
    63, 1280,
    77, 2048,
)

_A3_COEFF = (
    -3, 128,
    -2, -3, 64,
    -1, -3, -1, 16,
    3, -1, -2, 8,
    1, -1, 2,
    1, 1,
)

_C3_COEFF = (
    3, 128,
    2, 5, 128,
    -1, 3, 3, 64,
    -1, 0, 1, 8,
    -1, 1, 4,
    5, 256,
    1, 3, 128,
    -3, -2, 3, 64,
    1, -3, 2, 32,
    7, 512,
    -10, 9, 384,
    5, -9, 5, 192,
    7, 512,
    -14, 7, 512,
    21, 2560,
)


def a1m1f(eps: float) -> float:
    """A1 - 1, the scale of the distance integral I1."""
    m = NA1 // 2
    t = polyval(m, _A1M1_COEFF, 0, sq(eps)) / _A1M1_COEFF[m + 1]
    return (t + eps) / (1 - eps)


def _fourier_coefficients(coeff: Sequence[int], order: int, eps: float) -> List[float]:
    """Evaluate a table of sine-series coefficients c[1..order] at eps."""
    c = [0.0] * (order + 1)
    eps2 = sq(eps)
    d = eps
    o = 0
    for l in range(1, order + 1):
        m = (order - l) // 2
        c[l] = d * polyval(m, coeff, o, eps2) / coeff[o + m + 1]
        o += m + 2
        d *= eps
    return c


def c1f(eps: float) -> List[float]:
    """Coefficients C1[l] of the sine series for the distance integral I1."""
    return _fourier_coefficients(_C1_COEFF, NC1, eps)


def c1pf(eps: float) -> List[float]:
    """Coefficients C1'[l] of the reverted series giving sigma from tau."""
    return _fourier_coefficients(_C1P_COEFF, NC1P, eps)


def a2m1f(eps: float) -> float:
    """A2 - 1, the scale of the integral I2 used for the reduced length."""
    m = NA2 // 2
    t = polyval(m, _A2M1_COEFF, 0, sq(eps)) / _A2M1_COEFF[m + 1]
    return t * (1 - eps) - eps


def c2f(eps: float) -> List[float]:
    """Coefficients C2[l] of the sine series for the integral I2."""
    return _fourier_coefficients(_C2_COEFF, NC2, eps)


def a3_coefficients(n: float) -> List[float]:
    """Polynomial in eps (highest power first) giving A3 for third flattening n."""
    a3x = []
    o = 0
    for j in range(NA3 - 1, -1, -1):
        m = min(NA3 - j - 1, j)
        a3x.append(polyval(m, _A3_COEFF, o, n) / _A3_COEFF[o + m + 1])
        o += m + 2
    return a3x


def c3_coefficients(n: float) -> List[float]:
    """Polynomials in eps giving C3[l] for third flattening n."""
    c3x = []
    o = 0
    for l in range(1, NC3):
        for j in range(NC3 - 1, l - 1, -1):
            m = min(NC3 - j - 1, j)
            c3x.append(polyval(m, _C3_COEFF, o, n) / _C3_COEFF[o + m + 1])
            o += m + 2
    return c3x


def a3f(a3x: Sequence[float], eps: float) -> float:
    return polyval(NA3 - 1, a3x, 0, eps)


def c3f(c3x: Sequence[float], eps: float) -> List[float]:
    c = [0.0] * NC3
    mult = 1.0
    o = 0
    for l in range(1, NC3):
        m = NC3 - l - 1
        mult *= eps
        c[l] = mult * polyval(m, c3x, o, eps)
        o += m + 1
    return c


def sin_cos_series(sinp: bool, sinx: float, cosx: float, c: Sequence[float]) -> float:
    """Evaluate a Fourier series by Clenshaw summation.

    With sinp True this is sum(c[i] * sin(2i x), i = 1..n); otherwise
    sum(c[i] * cos((2i+1) x), i = 0..n-1).
    """
    k = len(c)
    n = k - (1 if sinp else 0)
    ar = 2 * (cosx - sinx) * (cosx + sinx)
    y1 = 0.0
    if n & 1:
        k -= 1
        y0 = c[k]
    else:
        y0 = 0.0
    n = n // 2
    while n:
        n -= 1
        k -= 1
        y1 = ar * y0 - y1 + c[k]
        k -= 1
        y0 = ar * y1 - y0 + c[k]
    return 2 * sinx * cosx * y0 if sinp else cosx * (y0 - y1)


def expansion_parameter(k2: float) -> float:
    """eps = k² / (2 (1 + sqrt(1 + k²)) + k²), accurate for small k²."""
    return k2 / (2 * (1 + math.sqrt(1 + k2)) + k2)
