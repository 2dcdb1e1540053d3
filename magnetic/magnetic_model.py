"""
Geomagnetic Field Models.

Evaluates the Earth's main (core) magnetic field from a spherical
harmonic model such as the World Magnetic Model (WMM), the International
Geomagnetic Reference Field (IGRF) or the Enhanced Magnetic Model (EMM).
Only the internal field is represented; fields of ionospheric and
magnetospheric origin, with their daily and annual variations, are not.

Scientific Context
------------------
Domain: Geomagnetism
Model: Gauss coefficients tabulated at epochs, linearly interpolated in
time between epochs and extrapolated with the secular-variation set
after the last one.

Components
----------
The field is returned in local geodetic axes:
- Bx: east component, nT
- By: north component, nT
- Bz: up component, nT (the conventional Z points down)

From these follow declination D (east of true north), inclination I
(below the horizontal), horizontal intensity H and total intensity F.

Model Registry
--------------
`world_magnetic_model` and `enhanced_magnetic_model` choose among named
models by date through explicit ordered tables of validity windows.

References
----------
- Chulliat, A. et al. (2020). The US/UK World Magnetic Model for
  2020-2025: Technical Report. NOAA NCEI.
- Alken, P. et al. (2021). International Geomagnetic Reference Field:
  the thirteenth generation. Earth, Planets and Space, 73, 49.
"""

import math
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np
import xarray as xr
from numpy.typing import NDArray

from common.errors import (
    ModelDomainError, ModelDomainErrorKind, ModelNotFoundError,
)
from common.geomath import check_latitude
from common.logging_config import get_logger
from common.units import Q_, Scalar, as_magnitude
from geospatial.ellipsoid import Ellipsoid, wgs84
from magnetic.dates import DateLike, fractional_year
from magnetic.harmonics import field_components, synthesize
from magnetic.model_io import (
    COEFFICIENT_SUFFIX, METADATA_SUFFIX, CoefficientSet, ModelMetadata,
    read_coefficients, read_metadata,
)

logger = get_logger(__name__)

MODEL_PATH_ENV = "MAGNETIC_MODEL_PATH"
DEFAULT_MODEL_DIRECTORY = Path.home() / ".local" / "share" / "geographiclib" / "magnetic"

KNOWN_MODELS = (
    "emm2010", "emm2015", "emm2017",
    "igrf11", "igrf12", "igrf13", "igrf14",
    "wmm2010", "wmm2015", "wmm2015v2", "wmm2020", "wmm2025", "wmmhr2025",
)


@dataclass(frozen=True)
class ModelWindow:
    """A named model and the fractional-year window [start, end) it serves."""
    start: float
    end: float
    name: str


# Ordered (window -> model) tables; a date is served by the first window containing it
WORLD_MAGNETIC_MODELS: Tuple[ModelWindow, ...] = (
    ModelWindow(2010.0, 2015.0, "emm2010"),
    ModelWindow(2015.0, 2020.0, "wmm2015v2"),
    ModelWindow(2020.0, 2025.0, "wmm2020"),
    ModelWindow(2025.0, 2030.0, "wmmhr2025"),
)

ENHANCED_MAGNETIC_MODELS: Tuple[ModelWindow, ...] = (
    ModelWindow(2000.0, 2010.0, "emm2015"),
    ModelWindow(2010.0, 2015.0, "emm2010"),
    ModelWindow(2015.0, 2022.0, "emm2017"),
)


@dataclass(frozen=True)
class MagneticField:
    """Field vector in local geodetic axes.

    Attributes
    ----------
    bx, by, bz : float
        East, north and up components in nT (nT/year for rates).
    """
    bx: float
    by: float
    bz: float

    def as_quantities(self) -> Tuple[Q_, Q_, Q_]:
        return Q_(self.bx, "nT"), Q_(self.by, "nT"), Q_(self.bz, "nT")


@dataclass(frozen=True)
class FieldComponents:
    """Derived description of a field vector.

    Attributes
    ----------
    declination : float
        Angle of the horizontal field east of true north, degrees.
    inclination : float
        Dip of the field below the horizontal, degrees.
    horizontal_field : float
        Horizontal intensity H, nT.
    total_field : float
        Total intensity F, nT.
    """
    declination: float
    inclination: float
    horizontal_field: float
    total_field: float

    @classmethod
    def from_field(cls, field: MagneticField) -> 'FieldComponents':
        return cls(*field_components(field.bx, field.by, field.bz))

    def as_quantities(self) -> Tuple[Q_, Q_, Q_, Q_]:
        return (Q_(self.declination, "degree"), Q_(self.inclination, "degree"),
                Q_(self.horizontal_field, "nT"), Q_(self.total_field, "nT"))


def model_directory(directory: Optional[Union[str, Path]] = None) -> Path:
    """Directory holding magnetic model files.

    The explicit argument wins, then the MAGNETIC_MODEL_PATH environment
    variable, then ~/.local/share/geographiclib/magnetic.
    """
    if directory is not None:
        return Path(directory)
    env = os.getenv(MODEL_PATH_ENV)
    if env:
        return Path(env)
    return DEFAULT_MODEL_DIRECTORY


class MagneticModel:
    """A spherical harmonic model of the main geomagnetic field.

    Instances are immutable after construction and may be evaluated
    concurrently.

    Parameters
    ----------
    metadata : ModelMetadata
        Parsed model header.
    coefficients : sequence of CoefficientSet
        NumModels epoch sets, one rate set, then NumConstants constant sets.
    ellipsoid : Ellipsoid, optional
        Ellipsoid the geodetic inputs refer to (default: WGS84).

    Examples
    --------
    >>> model = MagneticModel.load("wmm2025")                 # doctest: +SKIP
    >>> model.components(2025.5, -31.94, 115.97).declination  # doctest: +SKIP
    -0.6...
    """

    def __init__(
        self,
        metadata: ModelMetadata,
        coefficients: Sequence[CoefficientSet],
        ellipsoid: Optional[Ellipsoid] = None
    ):
        expected = metadata.num_models + 1 + metadata.num_constants
        if len(coefficients) != expected:
            raise ValueError(
                f"model {metadata.name} needs {expected} coefficient sets, got {len(coefficients)}"
            )
        self._metadata = metadata
        self._ellipsoid = ellipsoid if ellipsoid is not None else wgs84()
        self._degree = max(cs.degree for cs in coefficients)
        self._order = max(cs.order for cs in coefficients)

        padded = [cs.padded(self._degree) for cs in coefficients]
        nmodels = metadata.num_models
        self._g = np.stack([g for g, _ in padded[:nmodels + 1]])
        self._h = np.stack([h for _, h in padded[:nmodels + 1]])
        self._g_const = sum((g for g, _ in padded[nmodels + 1:]), np.zeros_like(self._g[0]))
        self._h_const = sum((h for _, h in padded[nmodels + 1:]), np.zeros_like(self._h[0]))
        for arr in (self._g, self._h, self._g_const, self._h_const):
            arr.setflags(write=False)

    @classmethod
    def load(
        cls,
        name: str,
        directory: Optional[Union[str, Path]] = None,
        ellipsoid: Optional[Ellipsoid] = None
    ) -> 'MagneticModel':
        """Load the model files `<name>.wmm` and `<name>.wmm.cof`.

        Raises
        ------
        ModelNotFoundError
            If either file is missing.
        ModelFormatError
            If either file is malformed.
        """
        root = model_directory(directory)
        meta_path = root / f"{name}{METADATA_SUFFIX}"
        cof_path = root / f"{name}{COEFFICIENT_SUFFIX}"
        for path in (meta_path, cof_path):
            if not path.is_file():
                raise ModelNotFoundError(name, path)
        metadata = read_metadata(meta_path)
        coefficients = read_coefficients(cof_path, metadata)
        model = cls(metadata, coefficients, ellipsoid)
        logger.debug(
            "Loaded magnetic model %s (epoch %s, degree %d) from %s",
            name, metadata.epoch, model.degree, root,
        )
        return model

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._metadata.name

    @property
    def description(self) -> str:
        return self._metadata.description

    @property
    def release_date(self) -> str:
        return self._metadata.release_date

    @property
    def epoch(self) -> float:
        return self._metadata.epoch

    @property
    def radius(self) -> float:
        """Reference radius of the expansion, meters."""
        return self._metadata.radius

    @property
    def min_height(self) -> float:
        return self._metadata.min_height

    @property
    def max_height(self) -> float:
        return self._metadata.max_height

    @property
    def min_time(self) -> float:
        return self._metadata.min_time

    @property
    def max_time(self) -> float:
        return self._metadata.max_time

    @property
    def degree(self) -> int:
        return self._degree

    @property
    def order(self) -> int:
        return self._order

    @property
    def ellipsoid(self) -> Ellipsoid:
        return self._ellipsoid

    def __repr__(self) -> str:
        return (f"MagneticModel(name={self.name!r}, epoch={self.epoch}, "
                f"degree={self.degree}, window=[{self.min_time}, {self.max_time}))")

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    def _validate(self, time: DateLike, latitude: Scalar, height: Scalar) -> Tuple[float, float, float]:
        lat = check_latitude(as_magnitude(latitude, "degree"))
        h = as_magnitude(height, "m")
        if not (self.min_height <= h <= self.max_height):
            raise ModelDomainError(
                ModelDomainErrorKind.HEIGHT, h, (self.min_height, self.max_height)
            )
        t = fractional_year(time)
        if not (self.min_time <= t < self.max_time):
            raise ModelDomainError(
                ModelDomainErrorKind.DATE, t, (self.min_time, self.max_time)
            )
        return t, lat, h

    def _coefficients_at(self, t: float) -> Tuple[NDArray, NDArray, NDArray, NDArray]:
        """(g, h) at fractional year t and their rates of change."""
        nmodels = self._metadata.num_models
        dt0 = self._metadata.delta_epoch
        dt = t - self.epoch
        n = max(min(int(math.floor(dt / dt0)), nmodels - 1), 0)
        dt -= n * dt0
        if n + 1 < nmodels:
            g_rate = (self._g[n + 1] - self._g[n]) / dt0
            h_rate = (self._h[n + 1] - self._h[n]) / dt0
        else:
            g_rate = self._g[nmodels]
            h_rate = self._h[nmodels]
        g = self._g[n] + dt * g_rate + self._g_const
        h = self._h[n] + dt * h_rate + self._h_const
        return g, h, g_rate, h_rate

    def _to_geodetic_axes(self, lat: float, lon: float, height: float, g, h) -> MagneticField:
        x, y, z = self._ellipsoid.geodetic_to_ecef(lat, lon, height)
        p = math.hypot(x, y)
        r = math.hypot(p, z)
        north_c, east, down_c = synthesize(
            g, h, self.radius, r, z / r, p / r, lon, self._metadata.normalization
        )
        # Rotate from the geocentric to the geodetic vertical
        delta = math.atan2(z, p) - math.radians(lat)
        cd, sd = math.cos(delta), math.sin(delta)
        north = north_c * cd - down_c * sd
        down = north_c * sd + down_c * cd
        return MagneticField(bx=east, by=north, bz=-down)

    def field(
        self,
        time: DateLike,
        latitude: Scalar,
        longitude: Scalar,
        height: Scalar = 0.0
    ) -> MagneticField:
        """Field vector at a point and time.

        Parameters
        ----------
        time : float or date
            Fractional year, or a calendar date converted by
            `magnetic.dates.fractional_year`.
        latitude, longitude : float
            Geodetic position in degrees.
        height : float
            Height above the ellipsoid in meters.

        Returns
        -------
        MagneticField
            East, north and up components in nT.

        Raises
        ------
        CoordinateRangeError
            LATITUDE, checked first.
        ModelDomainError
            HEIGHT, then DATE, before any synthesis runs.
        """
        t, lat, h = self._validate(time, latitude, height)
        g, hc, _, _ = self._coefficients_at(t)
        return self._to_geodetic_axes(lat, as_magnitude(longitude, "degree"), h, g, hc)

    def field_with_rates(
        self,
        time: DateLike,
        latitude: Scalar,
        longitude: Scalar,
        height: Scalar = 0.0
    ) -> Tuple[MagneticField, MagneticField]:
        """Field vector and its rate of change in nT/year."""
        t, lat, h = self._validate(time, latitude, height)
        g, hc, g_rate, h_rate = self._coefficients_at(t)
        lon = as_magnitude(longitude, "degree")
        field = self._to_geodetic_axes(lat, lon, h, g, hc)
        rates = self._to_geodetic_axes(lat, lon, h, g_rate, h_rate)
        return field, rates

    def components(
        self,
        time: DateLike,
        latitude: Scalar,
        longitude: Scalar,
        height: Scalar = 0.0
    ) -> FieldComponents:
        """Declination, inclination, horizontal and total intensity."""
        return FieldComponents.from_field(self.field(time, latitude, longitude, height))

    def field_grid(
        self,
        time: DateLike,
        latitudes: Sequence[float],
        longitudes: Sequence[float],
        height: Scalar = 0.0
    ) -> xr.Dataset:
        """Evaluate the field over a latitude/longitude grid.

        Returns
        -------
        xr.Dataset
            Variables bx, by, bz, declination, inclination,
            horizontal_field and total_field on (latitude, longitude).
        """
        lats = np.asarray(latitudes, dtype=float)
        lons = np.asarray(longitudes, dtype=float)
        names = ("bx", "by", "bz", "declination", "inclination",
                 "horizontal_field", "total_field")
        data = {name: np.empty((lats.size, lons.size)) for name in names}

        t, _, h = self._validate(time, 0.0, height)
        g, hc, _, _ = self._coefficients_at(t)
        for i, lat in enumerate(lats):
            check_latitude(float(lat))
            for j, lon in enumerate(lons):
                f = self._to_geodetic_axes(float(lat), float(lon), h, g, hc)
                c = FieldComponents.from_field(f)
                values = (f.bx, f.by, f.bz, c.declination, c.inclination,
                          c.horizontal_field, c.total_field)
                for name, value in zip(names, values):
                    data[name][i, j] = value

        units = {"bx": "nT", "by": "nT", "bz": "nT", "declination": "degree",
                 "inclination": "degree", "horizontal_field": "nT", "total_field": "nT"}
        return xr.Dataset(
            data_vars={
                name: (("latitude", "longitude"), data[name], {"units": units[name]})
                for name in names
            },
            coords={
                "latitude": ("latitude", lats, {"units": "degree"}),
                "longitude": ("longitude", lons, {"units": "degree"}),
            },
            attrs={
                "model": self.name,
                "time": t,
                "height": h,
            },
        )


# ----------------------------------------------------------------------
# Named model registry
# ----------------------------------------------------------------------

@lru_cache(maxsize=None)
def _cached_model(name: str, directory: Path) -> MagneticModel:
    return MagneticModel.load(name, directory)


def load_model(name: str, directory: Optional[Union[str, Path]] = None) -> MagneticModel:
    """Load a named model once per directory and share it thereafter."""
    return _cached_model(name, model_directory(directory))


def select_model(table: Sequence[ModelWindow], time: DateLike) -> str:
    """Name of the model whose window in `table` contains `time`.

    Raises
    ------
    ModelDomainError
        DATE if no window contains the date.
    """
    t = fractional_year(time)
    for window in table:
        if window.start <= t < window.end:
            return window.name
    raise ModelDomainError(
        ModelDomainErrorKind.DATE, t, (table[0].start, table[-1].end)
    )


def _registry_components(
    table: Sequence[ModelWindow],
    time: DateLike,
    latitude: Scalar,
    longitude: Scalar,
    height: Scalar,
    directory: Optional[Union[str, Path]]
) -> FieldComponents:
    """Evaluate the model in `table` serving `time`.

    The height window belongs to a model, so once latitude passes the date
    is checked next to select that model. Its own height and date checks
    then run in the usual order.
    """
    check_latitude(as_magnitude(latitude, "degree"))
    name = select_model(table, time)
    logger.info("Selected magnetic model %s for %.4f", name, fractional_year(time))
    return load_model(name, directory).components(time, latitude, longitude, height)


def world_magnetic_model(
    time: DateLike,
    latitude: Scalar,
    longitude: Scalar,
    height: Scalar = 0.0,
    directory: Optional[Union[str, Path]] = None
) -> FieldComponents:
    """Field components from the World Magnetic Model serving `time`.

    Covers [2010, 2030); see `WORLD_MAGNETIC_MODELS`.

    Raises
    ------
    CoordinateRangeError
        LATITUDE.
    ModelDomainError
        DATE if no model covers `time`, otherwise HEIGHT from the selected
        model.
    ModelNotFoundError
        If the selected model files are missing.
    """
    return _registry_components(
        WORLD_MAGNETIC_MODELS, time, latitude, longitude, height, directory
    )


def enhanced_magnetic_model(
    time: DateLike,
    latitude: Scalar,
    longitude: Scalar,
    height: Scalar = 0.0,
    directory: Optional[Union[str, Path]] = None
) -> FieldComponents:
    """Field components from the Enhanced Magnetic Model serving `time`.

    Covers [2000, 2022); see `ENHANCED_MAGNETIC_MODELS`.
    """
    return _registry_components(
        ENHANCED_MAGNETIC_MODELS, time, latitude, longitude, height, directory
    )


def available_models(directory: Optional[Union[str, Path]] = None) -> List[str]:
    """Names of the known models whose files are present in `directory`."""
    root = model_directory(directory)
    return [
        name for name in KNOWN_MODELS
        if (root / f"{name}{METADATA_SUFFIX}").is_file()
        and (root / f"{name}{COEFFICIENT_SUFFIX}").is_file()
    ]
