"""Tests for the round-trip consistency checks."""

from __future__ import annotations

import pytest

from geospatial.ellipsoid import Ellipsoid
from geospatial.geodesic import GeodesicSolver
from geospatial.rhumb import RhumbSolver
from validation import (
    ConsistencyChecker,
    ValidationResult,
    check_geodesic_round_trip,
    check_rhumb_round_trip,
    check_utm_round_trip,
)


class TestChecks:
    """Each check reports one result per measured quantity."""

    def test_geodesic(self) -> None:
        results = check_geodesic_round_trip(samples=25, seed=1)
        assert [r.test_name for r in results] == [
            "geodesic_distance_round_trip", "geodesic_azimuth_round_trip"
        ]
        for r in results:
            assert r.passed, r.message
            assert 0.0 <= r.max_error <= r.tolerance

    def test_utm(self) -> None:
        results = check_utm_round_trip(samples=25, seed=2)
        assert [r.test_name for r in results] == [
            "utm_grid_round_trip", "utm_geographic_round_trip"
        ]
        assert all(r.passed for r in results), [r.message for r in results]

    def test_rhumb(self) -> None:
        results = check_rhumb_round_trip(samples=25, seed=3)
        assert [r.test_name for r in results] == [
            "rhumb_distance_round_trip", "rhumb_azimuth_round_trip"
        ]
        assert all(r.passed for r in results), [r.message for r in results]

    def test_other_ellipsoid(self) -> None:
        mars = Ellipsoid(3396190.0, 1 / 169.8944472, name="Mars")
        geodesic = check_geodesic_round_trip(GeodesicSolver(mars), samples=20, max_distance=5.0e6)
        rhumb = check_rhumb_round_trip(RhumbSolver(mars), samples=20, max_distance=2.0e6)
        assert all(r.passed for r in geodesic + rhumb)

    def test_failure_reported(self) -> None:
        """An impossible tolerance turns into a failed result, not an exception."""
        results = check_geodesic_round_trip(samples=10, distance_tolerance=-1.0)
        distance = results[0]
        assert not distance.passed
        assert distance.details["num_violations"] == 10
        assert set(distance.details["worst_sample"]) == {"lat1", "lon1", "azi1", "s12"}

    def test_reproducible(self) -> None:
        first = check_rhumb_round_trip(samples=10, seed=7)
        second = check_rhumb_round_trip(samples=10, seed=7)
        assert [r.max_error for r in first] == [r.max_error for r in second]


class TestConsistencyChecker:
    """All checks run together."""

    def test_check_all(self) -> None:
        results = ConsistencyChecker(samples=20).check_all()
        assert len(results) == 6
        assert all(isinstance(r, ValidationResult) for r in results)
        failed = [r.message for r in results if not r.passed]
        assert not failed

    def test_settings(self) -> None:
        checker = ConsistencyChecker(samples=5, seed=3)
        assert (checker.samples, checker.seed) == (5, 3)


class TestValidationResult:
    def test_defaults(self) -> None:
        result = ValidationResult("x", True, 0.0, 1.0, "ok")
        assert result.details == {}

    @pytest.mark.parametrize("passed", [True, False])
    def test_fields(self, passed: bool) -> None:
        result = ValidationResult("x", passed, 2.0, 1.0, "m", {"k": 1})
        assert result.passed is passed
        assert result.details["k"] == 1
