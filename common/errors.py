"""
Error Taxonomy for Geodetic Computations.

Every failure raised by this system belongs to one of a small number of
families. Each family is a single exception type tagged with a `kind`
enumeration and carrying the offending value, so callers can either
catch the family as a whole or branch on the precise condition:

- ConstructionError: invalid parameters for an ellipsoid or projector
- CoordinateRangeError: an input coordinate, zone or grid value outside
  its documented range
- ModelDomainError: a request outside the domain a model supports
- ModelNotFoundError: magnetic model files that cannot be located
- ModelFormatError: magnetic model files that exist but cannot be parsed

All errors are raised at the point of detection, before any partial
result is produced.
"""

from enum import Enum
from typing import Any, Optional


class GeodeticError(Exception):
    """Base class of every error raised by the geodetic core."""


class ConstructionErrorKind(Enum):
    EQUATORIAL_RADIUS = "equatorial radius must be positive and finite"
    POLAR_SEMI_AXIS = "polar semi-axis must be positive and finite"
    FLATTENING = "flattening is outside the range supported by this algorithm"
    SCALE_FACTOR = "central scale factor must be positive and finite"
    EXTENDED_WITHOUT_EXACT = "extended domain requires the exact formulation"


class CoordinateRangeErrorKind(Enum):
    LATITUDE = "latitude must lie in [-90, 90] degrees"
    ZONE = "zone must lie in [0, 60]"
    ZONE_SPEC = "unrecognized zone specification"
    INVALID_ZONE = "zone specification selects no zone"
    UTM_EASTING = "UTM easting outside the permitted range"
    UTM_NORTHING = "UTM northing outside the permitted range"
    UPS_EASTING = "UPS easting outside the permitted range"
    UPS_NORTHING = "UPS northing outside the permitted range"
    LONGITUDE_FROM_CENTRAL_MERIDIAN = "longitude more than 60 degrees from the central meridian"
    UPS_LATITUDE = "latitude outside the polar region covered by UPS"
    PROJECTION_SINGULARITY = "point maps to infinity under the projection"


class ModelDomainErrorKind(Enum):
    DATE = "date outside the validity window of the model"
    HEIGHT = "height outside the validity window of the model"
    POLE_CROSSING = "rhumb line passes over a pole"


class ConstructionError(GeodeticError, ValueError):
    """Invalid construction parameters for an ellipsoid or projector.

    Parameters
    ----------
    kind : ConstructionErrorKind
        Which construction constraint was violated.
    value : Any
        The offending parameter value.
    """

    def __init__(self, kind: ConstructionErrorKind, value: Any):
        self.kind = kind
        self.value = value
        super().__init__(f"{kind.value} (got {value!r})")


class CoordinateRangeError(GeodeticError, ValueError):
    """A coordinate, zone or grid value outside its permitted range.

    Parameters
    ----------
    kind : CoordinateRangeErrorKind
        Which range was violated.
    value : Any
        The offending value.
    limits : tuple of float, optional
        The closed range the value should have fallen in, when one applies.
    """

    def __init__(
        self,
        kind: CoordinateRangeErrorKind,
        value: Any,
        limits: Optional[tuple] = None
    ):
        self.kind = kind
        self.value = value
        self.limits = limits
        message = f"{kind.value} (got {value!r}"
        if limits is not None:
            message += f", expected [{limits[0]}, {limits[1]}]"
        super().__init__(message + ")")


class ModelDomainError(GeodeticError, ValueError):
    """A request outside the domain supported by a model or solver.

    Parameters
    ----------
    kind : ModelDomainErrorKind
        Which domain check failed.
    value : Any
        The offending value.
    limits : tuple of float, optional
        The validity window that was violated.
    """

    def __init__(
        self,
        kind: ModelDomainErrorKind,
        value: Any,
        limits: Optional[tuple] = None
    ):
        self.kind = kind
        self.value = value
        self.limits = limits
        message = f"{kind.value} (got {value!r}"
        if limits is not None:
            message += f", valid window {limits[0]} to {limits[1]}"
        super().__init__(message + ")")


class ModelNotFoundError(GeodeticError, LookupError):
    """The metadata or coefficient file of a magnetic model is missing."""

    def __init__(self, name: str, path: Any):
        self.name = name
        self.value = path
        super().__init__(f"magnetic model {name!r} not found at {path}")


class ModelFormatError(GeodeticError, ValueError):
    """A magnetic model file exists but its content is malformed."""

    def __init__(self, path: Any, reason: str):
        self.value = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")
