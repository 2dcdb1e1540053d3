"""
Self-Consistency Checks for the Geodetic Core.

This module verifies that forward and inverse operations undo each other
to within stated tolerances over randomly sampled inputs. The checks
exercise the public operations only and can be run against any
ellipsoid, so they double as acceptance tests for non-Earth bodies.

Check Categories
----------------
1. Geodesic round trip: direct then inverse recovers distance and azimuth
2. UTM round trip: reverse, forward, reverse recovers the grid and
   geographic coordinates
3. Rhumb round trip: direct then inverse recovers distance and azimuth
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import numpy as np

from common.geomath import ang_diff
from common.logging_config import get_logger
from common.types import Hemisphere
from geospatial.geodesic import GeodesicSolver, wgs84_geodesic
from geospatial.rhumb import RhumbSolver, wgs84_rhumb
from geospatial.utmups import utmups_forward, utmups_reverse

logger = get_logger(__name__)


@dataclass
class ValidationResult:
    """Result of a consistency check.

    Attributes
    ----------
    test_name : str
        Name of the check.
    passed : bool
        Whether every sample stayed within tolerance.
    max_error : float
        Largest error observed, in the units of `tolerance`.
    tolerance : float
        Permitted error.
    message : str
        Description of the result.
    details : dict
        Additional details, including the worst sample.
    """
    test_name: str
    passed: bool
    max_error: float
    tolerance: float
    message: str
    details: Dict[str, Any] = field(default_factory=dict)


def _result(test_name: str, errors: np.ndarray, tolerance: float, worst: Dict[str, Any]) -> ValidationResult:
    max_error = float(np.max(errors)) if errors.size else 0.0
    passed = max_error <= tolerance
    num_violations = int(np.sum(errors > tolerance))
    if not passed:
        logger.warning(f"{test_name}: {num_violations} samples exceed {tolerance:g}")
    return ValidationResult(
        test_name=test_name,
        passed=passed,
        max_error=max_error,
        tolerance=tolerance,
        message=f"{test_name}: {num_violations} violations in {errors.size} samples",
        details={"num_violations": num_violations, "worst_sample": worst},
    )


def check_geodesic_round_trip(
    solver: Optional[GeodesicSolver] = None,
    samples: int = 200,
    max_distance: float = 1.0e7,
    distance_tolerance: float = 1e-8,
    azimuth_tolerance: float = 1e-9,
    seed: int = 0
) -> List[ValidationResult]:
    """Solve random direct problems and invert them.

    Returns
    -------
    List[ValidationResult]
        One result for distance (meters) and one for azimuth (degrees).
    """
    solver = solver if solver is not None else wgs84_geodesic()
    rng = np.random.default_rng(seed)
    lat1 = rng.uniform(-89.0, 89.0, samples)
    lon1 = rng.uniform(-180.0, 180.0, samples)
    azi1 = rng.uniform(-180.0, 180.0, samples)
    s12 = rng.uniform(1.0e4, max_distance, samples)

    distance_errors = np.empty(samples)
    azimuth_errors = np.empty(samples)
    for i in range(samples):
        direct = solver.direct(lat1[i], lon1[i], azi1[i], s12[i])
        inverse = solver.inverse(lat1[i], lon1[i], direct.lat2, direct.lon2)
        distance_errors[i] = abs(inverse.distance - s12[i])
        azimuth_errors[i] = abs(ang_diff(azi1[i], inverse.azi1)[0])

    worst = int(np.argmax(distance_errors))
    sample = {"lat1": lat1[worst], "lon1": lon1[worst], "azi1": azi1[worst], "s12": s12[worst]}
    return [
        _result("geodesic_distance_round_trip", distance_errors, distance_tolerance, sample),
        _result("geodesic_azimuth_round_trip", azimuth_errors, azimuth_tolerance, sample),
    ]


def check_utm_round_trip(
    samples: int = 200,
    grid_tolerance: float = 1e-6,
    angle_tolerance: float = 1e-9,
    seed: int = 0
) -> List[ValidationResult]:
    """Round trip random UTM grid coordinates through reverse and forward.

    Eastings are drawn from [100, 900] km and northings from the part of
    each hemisphere's window below 81 degrees of latitude.

    Returns
    -------
    List[ValidationResult]
        One result for the grid coordinates (meters) and one for the
        geographic coordinates (degrees).
    """
    rng = np.random.default_rng(seed)
    zones = rng.integers(1, 61, samples)
    northern = rng.random(samples) < 0.5
    eastings = rng.uniform(1.0e5, 9.0e5, samples)
    northings = np.where(
        northern, rng.uniform(0.0, 9.0e6, samples), rng.uniform(1.0e6, 1.0e7, samples)
    )

    grid_errors = np.empty(samples)
    angle_errors = np.empty(samples)
    for i in range(samples):
        hemisphere = Hemisphere.NORTHERN if northern[i] else Hemisphere.SOUTHERN
        zone = int(zones[i])
        first = utmups_reverse(zone, hemisphere, eastings[i], northings[i])
        forward = utmups_forward(first.coordinate.latitude, first.coordinate.longitude, zone)
        second = utmups_reverse(zone, forward.hemisphere, forward.easting, forward.northing)
        grid_errors[i] = max(abs(forward.easting - eastings[i]),
                             abs(forward.northing - northings[i]))
        angle_errors[i] = max(
            abs(second.coordinate.latitude - first.coordinate.latitude),
            abs(ang_diff(first.coordinate.longitude, second.coordinate.longitude)[0]),
        )

    worst = int(np.argmax(grid_errors))
    sample = {"zone": int(zones[worst]), "northern": bool(northern[worst]),
              "easting": eastings[worst], "northing": northings[worst]}
    return [
        _result("utm_grid_round_trip", grid_errors, grid_tolerance, sample),
        _result("utm_geographic_round_trip", angle_errors, angle_tolerance, sample),
    ]


def check_rhumb_round_trip(
    solver: Optional[RhumbSolver] = None,
    samples: int = 100,
    max_distance: float = 4.0e6,
    distance_tolerance: float = 1e-6,
    azimuth_tolerance: float = 1e-9,
    seed: int = 0
) -> List[ValidationResult]:
    """Solve random direct rhumb problems that stay clear of the poles and invert them."""
    solver = solver if solver is not None else wgs84_rhumb()
    rng = np.random.default_rng(seed)
    lat1 = rng.uniform(-45.0, 45.0, samples)
    lon1 = rng.uniform(-180.0, 180.0, samples)
    azi = rng.uniform(-180.0, 180.0, samples)
    s12 = rng.uniform(1.0e3, max_distance, samples)

    distance_errors = np.empty(samples)
    azimuth_errors = np.empty(samples)
    for i in range(samples):
        direct = solver.direct(lat1[i], lon1[i], azi[i], s12[i])
        inverse = solver.inverse(lat1[i], lon1[i], direct.lat2, direct.lon2)
        distance_errors[i] = abs(inverse.distance - s12[i])
        azimuth_errors[i] = abs(ang_diff(azi[i], inverse.azimuth)[0])

    worst = int(np.argmax(distance_errors))
    sample = {"lat1": lat1[worst], "lon1": lon1[worst], "azimuth": azi[worst], "s12": s12[worst]}
    return [
        _result("rhumb_distance_round_trip", distance_errors, distance_tolerance, sample),
        _result("rhumb_azimuth_round_trip", azimuth_errors, azimuth_tolerance, sample),
    ]


class ConsistencyChecker:
    """Runs every round-trip check with one seed and sample count.

    Parameters
    ----------
    samples : int
        Samples per check.
    seed : int
        Seed of the random generator.
    """

    def __init__(self, samples: int = 100, seed: int = 0):
        self.samples = samples
        self.seed = seed

    def check_all(self) -> List[ValidationResult]:
        results = []
        results.extend(check_geodesic_round_trip(samples=self.samples, seed=self.seed))
        results.extend(check_utm_round_trip(samples=self.samples, seed=self.seed))
        results.extend(check_rhumb_round_trip(samples=self.samples, seed=self.seed))
        passed = sum(r.passed for r in results)
        logger.info(f"Consistency checks: {passed}/{len(results)} passed")
        return results
