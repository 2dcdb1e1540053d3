"""
Geospatial Module: Geodesics, Rhumb Lines and Grid Projections.

All Earth-surface calculations system-wide originate from this module.

This module provides:
- The reference ellipsoid model
- Geodesic direct/inverse problems, geodesic lines and intersections
- Rhumb-line direct/inverse problems
- Transverse Mercator and Polar Stereographic projections
- UTM/UPS zone selection and grid coordinates
"""

from geospatial.ellipsoid import Ellipsoid, wgs84

from geospatial.geodesic import (
    GeodesicSolver,
    wgs84_geodesic,
    unit_geodesic_line,
    geodesic_inverse,
    geodesic_direct,
)
from geospatial.geodesic_line import GeodesicLine, GeodesicResult
from geospatial.intersect import Intersect, IntersectionPoint
from geospatial.rhumb import RhumbSolver, RhumbLine, RhumbResult, wgs84_rhumb

from geospatial.projections import (
    ProjectionAdapter,
    ProjectedPoint,
    GeographicPoint,
)
from geospatial.transverse_mercator import TransverseMercatorProjector, utm_projector
from geospatial.polar_stereographic import PolarStereographicProjector, ups_projector

from geospatial.zones import (
    ZoneSpec,
    INVALID_ZONE,
    central_meridian,
    latitude_band,
    standard_zone,
    utm_zone,
)
from geospatial.utmups import (
    UTMUPSCoordinate,
    grid_bounds,
    check_grid_coordinates,
    check_zone,
    utmups_forward,
    utmups_reverse,
)

__all__ = [
    # Ellipsoid
    "Ellipsoid",
    "wgs84",
    # Geodesics
    "GeodesicSolver",
    "GeodesicLine",
    "GeodesicResult",
    "wgs84_geodesic",
    "unit_geodesic_line",
    "geodesic_inverse",
    "geodesic_direct",
    "Intersect",
    "IntersectionPoint",
    # Rhumb lines
    "RhumbSolver",
    "RhumbLine",
    "RhumbResult",
    "wgs84_rhumb",
    # Projections
    "ProjectionAdapter",
    "ProjectedPoint",
    "GeographicPoint",
    "TransverseMercatorProjector",
    "utm_projector",
    "PolarStereographicProjector",
    "ups_projector",
    # UTM/UPS
    "ZoneSpec",
    "INVALID_ZONE",
    "central_meridian",
    "latitude_band",
    "standard_zone",
    "utm_zone",
    "UTMUPSCoordinate",
    "grid_bounds",
    "check_grid_coordinates",
    "check_zone",
    "utmups_forward",
    "utmups_reverse",
]
