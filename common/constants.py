"""
Geodetic Constants for Ellipsoidal Computations.

This module provides the defining constants of the WGS84 reference
ellipsoid together with the fixed parameters of the UTM and UPS grid
systems. All constants are defined with SI units (angles in degrees)
and are traceable to authoritative sources.

References
----------
- WGS84 parameters: NIMA TR8350.2, Third Edition, 2000
- UTM/UPS grid definitions: DMA TM 8358.2, The Universal Grids, 1989
- MGRS limits: NGA.SIG.0012_2.0.0_UTMUPS, 2014
"""

from dataclasses import dataclass
from typing import Final


@dataclass(frozen=True)
class Constant:
    """A defining constant with uncertainty and provenance.

    Attributes
    ----------
    value : float
        The nominal value of the constant.
    uncertainty : float
        The standard uncertainty (1-sigma) of the constant. Zero for
        defining constants.
    unit : str
        The unit of the constant.
    source : str
        Reference for the constant value.
    description : str
        Human-readable description of the constant.
    """
    value: float
    uncertainty: float
    unit: str
    source: str
    description: str


class GeodeticConstants:
    """Registry of geodetic constants used throughout the system.

    All constants are class attributes with full metadata including
    uncertainty bounds and authoritative sources.

    Earth Geometry (WGS84)
    ----------------------
    The defining parameters of the WGS84 ellipsoid. Every derived
    quantity (polar semi-axis, eccentricity) is computed from these two
    by `geospatial.ellipsoid.Ellipsoid`.

    Grid Systems
    ------------
    Scale factors, false origins and validity ranges of UTM and UPS.
    The validity ranges are part of the public contract: coordinates
    outside them are rejected rather than silently accepted.
    """

    # =========================================================================
    # WGS84 Ellipsoid Parameters
    # Reference: NIMA TR8350.2, Third Edition, 2000
    # =========================================================================

    WGS84_EQUATORIAL_RADIUS: Final[Constant] = Constant(
        value=6_378_137.0,
        uncertainty=0.0,  # Defined exactly
        unit="m",
        source="WGS84, NIMA TR8350.2",
        description="Equatorial radius (semi-major axis) of the WGS84 ellipsoid"
    )

    WGS84_FLATTENING: Final[Constant] = Constant(
        value=1 / 298.257223563,
        uncertainty=0.0,  # Defined exactly
        unit="dimensionless",
        source="WGS84, NIMA TR8350.2",
        description="Flattening of the WGS84 ellipsoid"
    )

    WGS84_ANGULAR_VELOCITY: Final[Constant] = Constant(
        value=7.292115e-5,
        uncertainty=0.0,
        unit="rad/s",
        source="WGS84, NIMA TR8350.2",
        description="Nominal mean angular velocity of the Earth"
    )

    WGS84_GRAVITATIONAL_CONSTANT: Final[Constant] = Constant(
        value=3.986004418e14,
        uncertainty=8.0e5,
        unit="m^3/s^2",
        source="WGS84, NIMA TR8350.2",
        description="Geocentric gravitational constant GM including the atmosphere"
    )

    # =========================================================================
    # Universal Transverse Mercator
    # Reference: DMA TM 8358.2
    # =========================================================================

    UTM_CENTRAL_SCALE: Final[Constant] = Constant(
        value=0.9996,
        uncertainty=0.0,
        unit="dimensionless",
        source="DMA TM 8358.2",
        description="Scale factor on the central meridian of each UTM zone"
    )

    UTM_FALSE_EASTING: Final[Constant] = Constant(
        value=500_000.0,
        uncertainty=0.0,
        unit="m",
        source="DMA TM 8358.2",
        description="Easting assigned to the central meridian of each UTM zone"
    )

    UTM_SOUTH_FALSE_NORTHING: Final[Constant] = Constant(
        value=10_000_000.0,
        uncertainty=0.0,
        unit="m",
        source="DMA TM 8358.2",
        description="Northing assigned to the equator in the southern hemisphere"
    )

    # =========================================================================
    # Universal Polar Stereographic
    # Reference: DMA TM 8358.2
    # =========================================================================

    UPS_CENTRAL_SCALE: Final[Constant] = Constant(
        value=0.994,
        uncertainty=0.0,
        unit="dimensionless",
        source="DMA TM 8358.2",
        description="Scale factor at the pole for UPS"
    )

    UPS_FALSE_ORIGIN: Final[Constant] = Constant(
        value=2_000_000.0,
        uncertainty=0.0,
        unit="m",
        source="DMA TM 8358.2",
        description="Easting and northing assigned to the pole in UPS"
    )

    # =========================================================================
    # Validity Ranges
    # Reference: NGA.SIG.0012_2.0.0_UTMUPS
    # =========================================================================

    MGRS_PADDING: Final[Constant] = Constant(
        value=100_000.0,
        uncertainty=0.0,
        unit="m",
        source="NGA.SIG.0012_2.0.0_UTMUPS",
        description="Amount every validity range shrinks by under MGRS limits"
    )


# Validity ranges in metres, keyed by (is_utm, is_northern).
# Each entry is ((min_easting, max_easting), (min_northing, max_northing)).
GRID_BOUNDS: Final[dict] = {
    (True, True): ((0.0, 1_000_000.0), (-9_100_000.0, 9_600_000.0)),
    (True, False): ((0.0, 1_000_000.0), (900_000.0, 19_600_000.0)),
    (False, True): ((1_200_000.0, 2_800_000.0), (1_200_000.0, 2_800_000.0)),
    (False, False): ((700_000.0, 3_300_000.0), (700_000.0, 3_300_000.0)),
}

# Zone numbering
UPS_ZONE: Final[int] = 0
MIN_UTM_ZONE: Final[int] = 1
MAX_UTM_ZONE: Final[int] = 60

# Latitudes bounding the standard UTM region, [min, max)
UTM_MIN_LATITUDE: Final[float] = -80.0
UTM_MAX_LATITUDE: Final[float] = 84.0

# Latitudes a point must reach before it is treated as polar
UPS_NORTH_MIN_LATITUDE: Final[float] = 83.5
UPS_SOUTH_MAX_LATITUDE: Final[float] = -79.5

# Largest longitude offset from a UTM central meridian accepted by forward
UTM_MAX_CENTRAL_MERIDIAN_OFFSET: Final[float] = 60.0
