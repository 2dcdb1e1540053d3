"""
UTM/UPS Zone Selection.

Maps a geographic point and a zone specification to a zone number:
0 for UPS, 1..60 for UTM. The standard rules follow the military grid
definition:

- UTM covers latitudes [-80, 84) in 60 zones, each 6 degrees wide, with
  zone 1 centred on 177W.
- The latitude band [56, 64) is widened for southwest Norway: zone 32
  extends west to 3E at the expense of zone 31.
- The band [72, 84) over Svalbard uses four 12-degree zones, 31, 33, 35
  and 37, in place of zones 31 to 37.
- Everything poleward of the UTM region is UPS.

Latitude bands are the 8-degree MGRS letter bands indexed -10..9 from the
band starting at -80. The top band X is 12 degrees tall and shares
index 9 with nothing above it.

References
----------
- DMA TM 8358.2 (1989). The Universal Grids: UTM and UPS.
- NGA.SIG.0012_2.0.0_UTMUPS (2014).
"""

import math
from enum import IntEnum
from typing import Union

from common.constants import (
    MAX_UTM_ZONE, MIN_UTM_ZONE, UPS_ZONE, UTM_MAX_LATITUDE, UTM_MIN_LATITUDE,
)
from common.errors import CoordinateRangeError, CoordinateRangeErrorKind
from common.geomath import ang_normalize
from common.units import Scalar, as_magnitude


class ZoneSpec(IntEnum):
    """Symbolic zone specifications.

    A non-negative integer in [1, 60] selects that UTM zone manually and
    0 forces UPS; the negative values request a rule.
    """
    INVALID = -4
    MATCH = -3
    UTM = -2
    STANDARD = -1
    UPS = 0


# Returned for ZoneSpec.INVALID; never a usable zone
INVALID_ZONE = int(ZoneSpec.INVALID)


def parse_zone_spec(spec: Union[ZoneSpec, int]) -> Union[ZoneSpec, int]:
    """Validate a raw zone specification.

    Returns the matching `ZoneSpec` for the symbolic values and the plain
    integer for a manual UTM zone.

    Raises
    ------
    CoordinateRangeError
        ZONE_SPEC for values that are neither symbolic nor a UTM zone.
    """
    value = int(spec)
    if value != spec:
        raise CoordinateRangeError(CoordinateRangeErrorKind.ZONE_SPEC, spec)
    if MIN_UTM_ZONE <= value <= MAX_UTM_ZONE:
        return value
    try:
        return ZoneSpec(value)
    except ValueError as e:
        raise CoordinateRangeError(
            CoordinateRangeErrorKind.ZONE_SPEC, spec, (int(ZoneSpec.INVALID), MAX_UTM_ZONE)
        ) from e


def central_meridian(zone: int) -> float:
    """Longitude in degrees of the central meridian of UTM `zone`."""
    return 6.0 * zone - 183


def latitude_band(latitude: Scalar) -> int:
    """MGRS latitude band index in [-10, 9] for a latitude in degrees."""
    ilat = math.floor(as_magnitude(latitude, "degree"))
    return max(-10, min(9, (ilat + 80) // 8 - 10))


def utm_zone(latitude: Scalar, longitude: Scalar) -> int:
    """Standard UTM zone of a point, honouring the Norway and Svalbard rules.

    The latitude is not checked against the UTM region; the caller decides
    whether the point belongs to UTM at all.

    Examples
    --------
    >>> utm_zone(-31.94, 115.97)
    50
    >>> utm_zone(60.0, 4.0)
    32
    >>> utm_zone(78.0, 20.0)
    33
    """
    ilon = math.floor(ang_normalize(as_magnitude(longitude, "degree")))
    if ilon == 180:
        ilon = -180
    zone = (ilon + 186) // 6
    band = latitude_band(latitude)
    if band == 7 and zone == 31 and ilon >= 3:
        # Southwest Norway
        zone = 32
    elif band == 9 and 0 <= ilon < 42:
        # Svalbard
        zone = 2 * ((ilon + 183) // 12) + 1
    return zone


def standard_zone(
    latitude: Scalar,
    longitude: Scalar,
    spec: Union[ZoneSpec, int] = ZoneSpec.STANDARD
) -> int:
    """Select the zone for a point under a zone specification.

    Parameters
    ----------
    latitude, longitude : float
        Point in degrees. The latitude is assumed already validated.
    spec : ZoneSpec or int
        INVALID yields `INVALID_ZONE`; a manual zone in [1, 60] is returned
        as is; UPS yields 0; UTM forces the standard UTM zone; STANDARD
        and MATCH choose UTM inside [-80, 84) and UPS outside.

    Returns
    -------
    int
        0 for UPS, 1..60 for UTM, or `INVALID_ZONE`.

    Raises
    ------
    CoordinateRangeError
        ZONE_SPEC for an unrecognized specification.
    """
    spec = parse_zone_spec(spec)
    if spec is ZoneSpec.INVALID:
        return INVALID_ZONE
    if not isinstance(spec, ZoneSpec):
        return spec
    if spec is ZoneSpec.UPS:
        return UPS_ZONE
    lat = as_magnitude(latitude, "degree")
    if spec is ZoneSpec.UTM or UTM_MIN_LATITUDE <= lat < UTM_MAX_LATITUDE:
        return utm_zone(lat, longitude)
    return UPS_ZONE
