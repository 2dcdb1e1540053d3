"""
Conformal Map Projections: Common Interface and Result Types.

The Transverse Mercator and Polar Stereographic projectors share one
interface so that the UTM/UPS layer can dispatch on zone number without
caring which projection sits underneath. Both are conformal, so local
distortion is fully described by two numbers at each point:

- convergence (gamma): the bearing of grid north, clockwise from true
  north, in degrees
- scale (k): ratio of projected to true distance, dimensionless

Implementation
--------------
Projectors are immutable once constructed and keep no scratch state, so
they can be shared between threads without locking. Each projector can
describe itself as a PROJ string, which lets callers hand the same
projection to `pyproj` for interoperability.

References
----------
- Snyder, J.P. (1987). Map Projections - A Working Manual. USGS Prof. Paper 1395.
- Karney, C.F.F. (2011). Transverse Mercator with an accuracy of a few
  nanometers. Journal of Geodesy, 85(8), 475-485.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from pyproj import CRS

from geospatial.ellipsoid import Ellipsoid


@dataclass(frozen=True)
class ProjectedPoint:
    """Result of a forward projection.

    Attributes
    ----------
    x : float
        Easting relative to the projection origin, meters.
    y : float
        Northing relative to the projection origin, meters.
    convergence : float
        Meridian convergence in degrees.
    scale : float
        Point scale factor.
    """
    x: float
    y: float
    convergence: float
    scale: float


@dataclass(frozen=True)
class GeographicPoint:
    """Result of a reverse projection.

    Attributes
    ----------
    latitude, longitude : float
        Geographic position in degrees, longitude in (-180, 180].
    convergence : float
        Meridian convergence in degrees.
    scale : float
        Point scale factor.
    """
    latitude: float
    longitude: float
    convergence: float
    scale: float


class ProjectionAdapter(ABC):
    """Abstract base class for the conformal projectors.

    All projections in this system implement this interface to ensure
    consistent handling of coordinates and distortions.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name of the projection."""
        pass

    @property
    @abstractmethod
    def ellipsoid(self) -> Ellipsoid:
        """Ellipsoid the projection is defined on."""
        pass

    @property
    @abstractmethod
    def central_scale(self) -> float:
        """Scale factor on the central meridian or at the pole."""
        pass

    @abstractmethod
    def proj4_string(self, origin: float) -> str:
        """PROJ definition string for the projection about `origin`.

        `origin` is the central meridian (Transverse Mercator) or a
        hemisphere flag (Polar Stereographic, truthy for north).
        """
        pass

    def to_crs(self, origin: float) -> CRS:
        """pyproj CRS equivalent to this projection about `origin`."""
        return CRS.from_proj4(self.proj4_string(origin))

    def _ellipsoid_proj4(self) -> str:
        e = self.ellipsoid
        if e.flattening == 0:
            return f"+R={e.equatorial_radius!r}"
        return f"+a={e.equatorial_radius!r} +b={e.polar_semi_axis!r}"
