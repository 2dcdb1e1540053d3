"""
Polar Stereographic Projection.

The ellipsoidal polar stereographic projection maps one hemisphere
conformally onto a plane tangent (or, with k0 < 1, secant) at the pole.
Meridians become straight lines radiating from the pole and parallels
become concentric circles. It is the projection underlying UPS.

Scientific Context
------------------
The radial coordinate is a function of the conformal latitude chi only:

    rho = 2 k0 a / c * tan(pi/4 - chi/2),  c = (1 - f) exp(e atanh e)

and the polar angle equals the longitude. The projection is exact in
closed form, so no series or iteration is required except for the
conformal-to-geodetic latitude inversion shared with Transverse Mercator.

References
----------
- Snyder, J.P. (1987). Map Projections - A Working Manual, ch. 21.
- Karney, C.F.F. (2011). Transverse Mercator with an accuracy of a few
  nanometers. Journal of Geodesy, 85(8), 475-485 (tau/taup helpers).
"""

import math
from functools import lru_cache
from typing import Optional

from common.constants import GeodeticConstants
from common.errors import ConstructionError, ConstructionErrorKind
from common.geomath import (
    EPSILON, ang_normalize, atan2d, check_latitude, eatanhe, sincosd, sq, tand,
    tauf, taupf,
)
from common.logging_config import get_logger
from common.units import Scalar, as_magnitude
from geospatial.ellipsoid import Ellipsoid, wgs84
from geospatial.projections import GeographicPoint, ProjectedPoint, ProjectionAdapter

logger = get_logger(__name__)


class PolarStereographicProjector(ProjectionAdapter):
    """Polar stereographic projection about either pole.

    Parameters
    ----------
    ellipsoid : Ellipsoid, optional
        Reference ellipsoid (default: WGS84).
    central_scale : float
        Scale factor at the pole (default: 0.994 for UPS).

    Raises
    ------
    ConstructionError
        SCALE_FACTOR if the scale factor is not positive.
    """

    def __init__(
        self,
        ellipsoid: Optional[Ellipsoid] = None,
        central_scale: float = GeodeticConstants.UPS_CENTRAL_SCALE.value
    ):
        self._ellipsoid = ellipsoid if ellipsoid is not None else wgs84()
        if not (math.isfinite(central_scale) and central_scale > 0):
            raise ConstructionError(ConstructionErrorKind.SCALE_FACTOR, central_scale)
        self._k0 = central_scale
        self._a = self._ellipsoid.equatorial_radius
        self._e2 = self._ellipsoid.e2
        self._es = self._ellipsoid.signed_eccentricity
        self._e2m = 1 - self._e2
        self._c = (1 - self._ellipsoid.flattening) * math.exp(eatanhe(1.0, self._es))

    @property
    def name(self) -> str:
        return f"Polar Stereographic (k0={self._k0}, {self._ellipsoid.name})"

    @property
    def ellipsoid(self) -> Ellipsoid:
        return self._ellipsoid

    @property
    def central_scale(self) -> float:
        return self._k0

    def proj4_string(self, origin: float) -> str:
        lat0 = 90 if origin else -90
        return (f"+proj=stere +lat_0={lat0} +lon_0=0 +k_0={self._k0!r} "
                f"+x_0=0 +y_0=0 {self._ellipsoid_proj4()} +units=m +no_defs")

    def forward(self, northern: bool, latitude: Scalar, longitude: Scalar) -> ProjectedPoint:
        """Project a point about the north (`northern`) or south pole.

        The point may lie in either hemisphere; the projection diverges
        only at the opposite pole.

        Returns
        -------
        ProjectedPoint
            x and y from the pole in meters, with convergence and scale.
        """
        lat = check_latitude(as_magnitude(latitude, "degree"))
        lon = as_magnitude(longitude, "degree")
        lat *= 1 if northern else -1
        tau = tand(lat)
        secphi = math.hypot(1.0, tau)
        taup = taupf(tau, self._es)
        rho = math.hypot(1.0, taup) + abs(taup)
        if taup >= 0:
            rho = 1 / rho if lat != 90 else 0.0
        rho *= 2 * self._k0 * self._a / self._c
        if lat != 90:
            k = rho / self._a * secphi * math.sqrt(self._e2m + self._e2 / sq(secphi))
        else:
            k = self._k0
        x, y = sincosd(lon)
        x *= rho
        y *= -rho if northern else rho
        gamma = ang_normalize(lon if northern else -lon)
        return ProjectedPoint(x, y, gamma, k)

    def reverse(self, northern: bool, x: Scalar, y: Scalar) -> GeographicPoint:
        """Recover the geographic point from x and y measured from the pole."""
        x = as_magnitude(x, "m")
        y = as_magnitude(y, "m")
        rho = math.hypot(x, y)
        t = rho / (2 * self._k0 * self._a / self._c) if rho != 0 else sq(EPSILON)
        taup = (1 / t - t) / 2
        tau = tauf(taup, self._es)
        secphi = math.hypot(1.0, tau)
        if rho != 0:
            k = rho / self._a * secphi * math.sqrt(self._e2m + self._e2 / sq(secphi))
        else:
            k = self._k0
        lat = (1 if northern else -1) * atan2d(tau, 1.0)
        lon = atan2d(x, -y if northern else y)
        gamma = ang_normalize(lon if northern else -lon)
        return GeographicPoint(lat, lon, gamma, k)


@lru_cache(maxsize=None)
def ups_projector() -> PolarStereographicProjector:
    """The WGS84 polar stereographic projection with the UPS scale factor, shared."""
    return PolarStereographicProjector(wgs84(), GeodeticConstants.UPS_CENTRAL_SCALE.value)
