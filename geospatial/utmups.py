"""
Universal Transverse Mercator and Universal Polar Stereographic Grids.

UTM/UPS is the composite grid system that covers the whole Earth:

- UTM: 60 Transverse Mercator zones between 80S and 84N, with central
  scale 0.9996, false easting 500 km, and false northing 10 000 km in
  the southern hemisphere.
- UPS: polar stereographic about each pole, with scale 0.994 at the pole
  and a false origin of 2000 km on both axes.

A grid coordinate is only meaningful inside its validity window. The
windows are part of the public contract and are enforced on both the
forward and the reverse conversion; MGRS limits shrink every window by
100 km.

Implementation
--------------
Zone selection lives in `geospatial.zones`; the two projectors are the
shared WGS84 instances from `utm_projector()` and `ups_projector()`, so
no per-call construction cost is paid.

References
----------
- DMA TM 8358.2 (1989). The Universal Grids: UTM and UPS.
- NGA.SIG.0012_2.0.0_UTMUPS (2014).
"""

import operator
from dataclasses import dataclass
from typing import Tuple, Union

from pyproj import CRS

from common.constants import (
    GRID_BOUNDS, GeodeticConstants, MAX_UTM_ZONE, UPS_NORTH_MIN_LATITUDE,
    UPS_SOUTH_MAX_LATITUDE, UPS_ZONE, UTM_MAX_CENTRAL_MERIDIAN_OFFSET,
)
from common.errors import CoordinateRangeError, CoordinateRangeErrorKind
from common.geomath import ang_diff, check_latitude
from common.logging_config import get_logger
from common.types import GeoCoordinate, Hemisphere
from common.units import Scalar, as_magnitude
from geospatial.polar_stereographic import ups_projector
from geospatial.transverse_mercator import utm_projector
from geospatial.zones import INVALID_ZONE, ZoneSpec, central_meridian, standard_zone

logger = get_logger(__name__)

_UTM_FALSE_EASTING = GeodeticConstants.UTM_FALSE_EASTING.value
_UTM_SOUTH_FALSE_NORTHING = GeodeticConstants.UTM_SOUTH_FALSE_NORTHING.value
_UPS_FALSE_ORIGIN = GeodeticConstants.UPS_FALSE_ORIGIN.value
_MGRS_PADDING = GeodeticConstants.MGRS_PADDING.value


def check_zone(zone) -> int:
    """Return `zone` as an int, raising ZONE unless it is an integer in [0, 60]."""
    try:
        value = operator.index(zone)
    except TypeError:
        value = None
    if value is None or not UPS_ZONE <= value <= MAX_UTM_ZONE:
        raise CoordinateRangeError(
            CoordinateRangeErrorKind.ZONE, zone, (UPS_ZONE, MAX_UTM_ZONE)
        )
    return value


@dataclass(frozen=True)
class UTMUPSCoordinate:
    """A validated UTM or UPS grid coordinate.

    Attributes
    ----------
    zone : int
        1..60 for UTM, 0 for UPS.
    hemisphere : Hemisphere
        Northern or southern.
    easting, northing : float
        False-origin-shifted grid coordinates in meters.
    convergence : float
        Meridian convergence in degrees.
    scale : float
        Point scale factor.
    coordinate : GeoCoordinate
        The geographic point represented.

    Raises
    ------
    CoordinateRangeError
        ZONE if the zone is not an integer in [0, 60], otherwise one of
        the easting/northing kinds if the grid position lies outside the
        standard validity window.
    """
    zone: int
    hemisphere: Hemisphere
    easting: float
    northing: float
    convergence: float
    scale: float
    coordinate: GeoCoordinate

    def __post_init__(self):
        object.__setattr__(self, "zone", check_zone(self.zone))
        check_grid_coordinates(
            self.zone != UPS_ZONE, self.hemisphere.is_northern, self.easting, self.northing
        )

    @property
    def is_ups(self) -> bool:
        return self.zone == UPS_ZONE

    @property
    def is_northern(self) -> bool:
        return self.hemisphere.is_northern

    @property
    def epsg_code(self) -> int:
        """EPSG code of the WGS84 grid this coordinate belongs to."""
        base = 32600 if self.is_northern else 32700
        return base + (61 if self.is_ups else self.zone)

    def to_crs(self) -> CRS:
        """pyproj CRS for this coordinate's zone and hemisphere."""
        return CRS.from_epsg(self.epsg_code)

    def __str__(self) -> str:
        zone = "UPS" if self.is_ups else f"{self.zone:02d}"
        return f"{zone}{self.hemisphere.value} {self.easting:.3f} {self.northing:.3f}"


def grid_bounds(
    utm: bool,
    northern: bool,
    mgrs_limits: bool = False
) -> Tuple[Tuple[float, float], Tuple[float, float]]:
    """Permitted ((min_easting, max_easting), (min_northing, max_northing))."""
    (emin, emax), (nmin, nmax) = GRID_BOUNDS[(utm, northern)]
    if mgrs_limits:
        pad = _MGRS_PADDING
        return (emin + pad, emax - pad), (nmin + pad, nmax - pad)
    return (emin, emax), (nmin, nmax)


def check_grid_coordinates(
    utm: bool,
    northern: bool,
    easting: float,
    northing: float,
    mgrs_limits: bool = False
) -> None:
    """Raise unless (easting, northing) lies in the validity window.

    Raises
    ------
    CoordinateRangeError
        UTM_EASTING, UTM_NORTHING, UPS_EASTING or UPS_NORTHING. Easting is
        checked first.
    """
    (emin, emax), (nmin, nmax) = grid_bounds(utm, northern, mgrs_limits)
    if not (emin <= easting <= emax):
        kind = (CoordinateRangeErrorKind.UTM_EASTING if utm
                else CoordinateRangeErrorKind.UPS_EASTING)
        raise CoordinateRangeError(kind, easting, (emin, emax))
    if not (nmin <= northing <= nmax):
        kind = (CoordinateRangeErrorKind.UTM_NORTHING if utm
                else CoordinateRangeErrorKind.UPS_NORTHING)
        raise CoordinateRangeError(kind, northing, (nmin, nmax))


def utmups_forward(
    latitude: Scalar,
    longitude: Scalar,
    spec: Union[ZoneSpec, int] = ZoneSpec.STANDARD,
    mgrs_limits: bool = False
) -> UTMUPSCoordinate:
    """Convert a geographic point to UTM or UPS.

    Parameters
    ----------
    latitude, longitude : float
        Point in degrees.
    spec : ZoneSpec or int
        Zone specification; see `geospatial.zones.standard_zone`.
    mgrs_limits : bool
        Enforce the narrower MGRS validity windows.

    Returns
    -------
    UTMUPSCoordinate

    Raises
    ------
    CoordinateRangeError
        LATITUDE, ZONE_SPEC, INVALID_ZONE, LONGITUDE_FROM_CENTRAL_MERIDIAN,
        UPS_LATITUDE or one of the easting/northing kinds, checked in that
        order.

    Examples
    --------
    >>> c = utmups_forward(-31.94028333, 115.96695)
    >>> c.zone, c.hemisphere.value, round(c.easting, 3), round(c.northing, 3)
    (50, 's', 402357.369, 6465717.701)
    """
    lat = check_latitude(as_magnitude(latitude, "degree"))
    lon = as_magnitude(longitude, "degree")
    hemisphere = Hemisphere.from_latitude(lat)
    northern = hemisphere.is_northern
    zone = standard_zone(lat, lon, spec)
    if zone == INVALID_ZONE:
        raise CoordinateRangeError(CoordinateRangeErrorKind.INVALID_ZONE, spec)

    utm = zone != UPS_ZONE
    if utm:
        lon0 = central_meridian(zone)
        dlon = ang_diff(lon0, lon)[0]
        if abs(dlon) > UTM_MAX_CENTRAL_MERIDIAN_OFFSET:
            raise CoordinateRangeError(
                CoordinateRangeErrorKind.LONGITUDE_FROM_CENTRAL_MERIDIAN,
                lon,
                (lon0 - UTM_MAX_CENTRAL_MERIDIAN_OFFSET, lon0 + UTM_MAX_CENTRAL_MERIDIAN_OFFSET),
            )
        p = utm_projector().forward(lon0, lat, lon)
        easting = p.x + _UTM_FALSE_EASTING
        northing = p.y + (0.0 if northern else _UTM_SOUTH_FALSE_NORTHING)
    else:
        if not (lat >= UPS_NORTH_MIN_LATITUDE if northern else lat < UPS_SOUTH_MAX_LATITUDE):
            limits = (UPS_NORTH_MIN_LATITUDE, 90.0) if northern else (-90.0, UPS_SOUTH_MAX_LATITUDE)
            raise CoordinateRangeError(CoordinateRangeErrorKind.UPS_LATITUDE, lat, limits)
        p = ups_projector().forward(northern, lat, lon)
        easting = p.x + _UPS_FALSE_ORIGIN
        northing = p.y + _UPS_FALSE_ORIGIN

    check_grid_coordinates(utm, northern, easting, northing, mgrs_limits)
    return UTMUPSCoordinate(
        zone=zone,
        hemisphere=hemisphere,
        easting=easting,
        northing=northing,
        convergence=p.convergence,
        scale=p.scale,
        coordinate=GeoCoordinate(lat, lon),
    )


def utmups_reverse(
    zone: int,
    hemisphere: Union[Hemisphere, bool],
    easting: Scalar,
    northing: Scalar,
    mgrs_limits: bool = False
) -> UTMUPSCoordinate:
    """Convert a UTM or UPS grid coordinate to geographic.

    Parameters
    ----------
    zone : int
        0 for UPS, 1..60 for UTM.
    hemisphere : Hemisphere or bool
        Hemisphere, or True for northern.
    easting, northing : float
        Grid coordinates in meters.
    mgrs_limits : bool
        Enforce the narrower MGRS validity windows.

    Raises
    ------
    CoordinateRangeError
        ZONE if the zone is outside [0, 60], then one of the
        easting/northing kinds.

    Examples
    --------
    >>> c = utmups_reverse(50, Hemisphere.SOUTHERN, 402357.369285629, 6465717.701277924)
    >>> round(c.coordinate.latitude, 6), round(c.coordinate.longitude, 6)
    (-31.940283, 115.96695)
    """
    if isinstance(hemisphere, bool):
        hemisphere = Hemisphere.NORTHERN if hemisphere else Hemisphere.SOUTHERN
    northern = hemisphere.is_northern
    zone = check_zone(zone)
    easting = as_magnitude(easting, "m")
    northing = as_magnitude(northing, "m")
    utm = zone != UPS_ZONE
    check_grid_coordinates(utm, northern, easting, northing, mgrs_limits)

    if utm:
        x = easting - _UTM_FALSE_EASTING
        y = northing - (0.0 if northern else _UTM_SOUTH_FALSE_NORTHING)
        g = utm_projector().reverse(central_meridian(zone), x, y)
    else:
        g = ups_projector().reverse(
            northern, easting - _UPS_FALSE_ORIGIN, northing - _UPS_FALSE_ORIGIN
        )
    return UTMUPSCoordinate(
        zone=zone,
        hemisphere=hemisphere,
        easting=easting,
        northing=northing,
        convergence=g.convergence,
        scale=g.scale,
        coordinate=GeoCoordinate(g.latitude, g.longitude),
    )
