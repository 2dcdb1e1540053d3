"""
Spherical Harmonic Synthesis of an Internal Magnetic Field.

The main field of the Earth is the gradient of a scalar potential

    V(r, theta, lambda) = a * sum_{n=1}^{N} (a/r)^(n+1)
                          * sum_{m=0}^{n} (g_nm cos(m lambda) + h_nm sin(m lambda)) P_nm(cos theta)

where a is the reference radius, (r, theta, lambda) are geocentric
radius, colatitude and longitude, g_nm and h_nm are the Gauss
coefficients and P_nm are the associated Legendre functions in Schmidt
semi-normalized (or fully normalized) form. B = -grad V.

Scientific Context
------------------
The synthesis is performed in geocentric spherical coordinates and the
horizontal/vertical components are then rotated by the difference
between geocentric and geodetic latitude, so that the result refers to
the local ellipsoidal vertical.

Implementation
--------------
Legendre functions and their colatitude derivatives are generated by the
standard forward column recursion, one degree at a time and vectorized
over the orders with numpy. The east component involves P_nm / sin(theta),
which has a finite limit at the poles; the colatitude sine is floored at
a tiny positive value there so the limit is reproduced.

References
----------
- Chulliat, A. et al. (2020). The US/UK World Magnetic Model for
  2020-2025: Technical Report. NOAA NCEI.
- Heiskanen, W.A. & Moritz, H. (1967). Physical Geodesy, ch. 1.
"""

import math
from typing import Tuple

import numpy as np
from numpy.typing import NDArray

from common.geomath import MIN_VALUE, atan2d

_TINY = math.sqrt(MIN_VALUE)


def legendre_functions(
    degree: int,
    cos_theta: float,
    sin_theta: float,
    normalization: str = "schmidt"
) -> Tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Associated Legendre functions P[n, m] and dP[n, m]/dtheta.

    Parameters
    ----------
    degree : int
        Maximum degree N.
    cos_theta, sin_theta : float
        Cosine and sine of the colatitude.
    normalization : str
        "schmidt" for Schmidt semi-normalized, "full" for fully normalized.

    Returns
    -------
    Tuple[NDArray, NDArray]
        Lower-triangular (N+1, N+1) arrays indexed [n, m].

    Examples
    --------
    >>> p, dp = legendre_functions(2, 0.0, 1.0)
    >>> float(p[2, 0])
    -0.5
    """
    t, u = cos_theta, sin_theta
    p = np.zeros((degree + 1, degree + 1))
    dp = np.zeros((degree + 1, degree + 1))
    p[0, 0] = 1.0
    if degree >= 1:
        p[1, 0], dp[1, 0] = t, -u
        p[1, 1], dp[1, 1] = u, t
    for n in range(2, degree + 1):
        m = np.arange(n)
        root = np.sqrt(n * n - m * m)
        a = (2 * n - 1) / root
        b = np.sqrt((n - 1) ** 2 - m * m) / root
        p[n, :n] = a * t * p[n - 1, :n] - b * p[n - 2, :n]
        dp[n, :n] = a * (t * dp[n - 1, :n] - u * p[n - 1, :n]) - b * dp[n - 2, :n]
        # Sectoral term
        c = math.sqrt((2 * n - 1) / (2 * n))
        p[n, n] = c * u * p[n - 1, n - 1]
        dp[n, n] = c * (t * p[n - 1, n - 1] + u * dp[n - 1, n - 1])
    if normalization == "full":
        scale = np.sqrt(2 * np.arange(degree + 1) + 1.0)[:, None]
        p *= scale
        dp *= scale
    return p, dp


def synthesize(
    g: NDArray[np.float64],
    h: NDArray[np.float64],
    radius: float,
    r: float,
    cos_theta: float,
    sin_theta: float,
    longitude: float,
    normalization: str = "schmidt"
) -> Tuple[float, float, float]:
    """Field components in the geocentric spherical frame.

    Parameters
    ----------
    g, h : NDArray
        Gauss coefficients indexed [n, m], nT.
    radius : float
        Reference radius a of the expansion, meters.
    r : float
        Geocentric radius of the point, meters.
    cos_theta, sin_theta : float
        Cosine and sine of the geocentric colatitude.
    longitude : float
        Longitude in degrees.
    normalization : str
        Normalization of the coefficients.

    Returns
    -------
    Tuple[float, float, float]
        (north, east, down) components relative to the geocentric
        vertical, in the units of the coefficients.
    """
    degree = g.shape[0] - 1
    u = max(sin_theta, _TINY)
    p, dp = legendre_functions(degree, cos_theta, u, normalization)

    m = np.arange(degree + 1)
    lam = math.radians(longitude)
    cml = np.cos(m * lam)
    sml = np.sin(m * lam)
    gc = g * cml + h * sml
    gs = g * sml - h * cml

    n = np.arange(degree + 1)
    q = (radius / r) ** (n + 2)

    b_r = np.sum(q * (n + 1) * np.sum(gc * p, axis=1))
    b_theta = -np.sum(q * np.sum(gc * dp, axis=1))
    b_lambda = np.sum(q * np.sum(m * gs * p, axis=1)) / u

    return float(-b_theta), float(b_lambda), float(-b_r)


def field_components(bx: float, by: float, bz: float) -> Tuple[float, float, float, float]:
    """Declination, inclination, horizontal and total intensity.

    Parameters
    ----------
    bx, by, bz : float
        East, north and up components.

    Returns
    -------
    Tuple[float, float, float, float]
        Declination and inclination in degrees, horizontal and total
        intensity in the units of the inputs. Declination is positive
        east of true north; inclination is positive downwards.
    """
    h = math.hypot(bx, by)
    f = math.hypot(h, bz)
    d = atan2d(bx, by)
    i = atan2d(-bz, h)
    return d, i, h, f
