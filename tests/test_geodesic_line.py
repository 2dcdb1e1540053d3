"""Tests for geodesic lines and their intersection."""

from __future__ import annotations

import math

import pytest

from geospatial.ellipsoid import wgs84
from geospatial.geodesic import GeodesicSolver, unit_geodesic_line, wgs84_geodesic
from geospatial.intersect import Intersect, IntersectionPoint


@pytest.fixture(scope="module")
def solver() -> GeodesicSolver:
    return wgs84_geodesic()


class TestGeodesicLine:
    """Position queries along a precomputed line."""

    def test_inverse_line_reaches_endpoint(self, solver: GeodesicSolver) -> None:
        line = solver.inverse_line(-41.32, 174.81, 40.96, -5.50)
        assert line.distance == pytest.approx(19959679.267, abs=1e-3)
        end = line.solve(line.distance)
        assert end.lat2 == pytest.approx(40.96, abs=1e-9)
        assert end.lon2 == pytest.approx(-5.50, abs=1e-9)

    def test_direct_line_matches_direct(self, solver: GeodesicSolver) -> None:
        line = solver.direct_line(10.0, 20.0, 30.0, 4.0e6)
        expected = solver.direct(10.0, 20.0, 30.0, 4.0e6)
        assert line.distance == 4.0e6
        assert line.arc_length == pytest.approx(expected.arc_length, abs=1e-12)
        end = line.position(4.0e6)
        assert end.coordinate.latitude == pytest.approx(expected.lat2, abs=1e-12)
        assert end.coordinate.longitude == pytest.approx(expected.lon2, abs=1e-12)
        assert end.azimuth == pytest.approx(expected.azi2, abs=1e-12)

    def test_intermediate_points_agree_with_direct(self, solver: GeodesicSolver) -> None:
        line = solver.line(-31.94, 115.97, 75.0)
        for s in (-3.0e6, 0.0, 1.0e5, 7.5e6, 2.5e7):
            expected = solver.direct(-31.94, 115.97, 75.0, s)
            got = line.solve(s)
            assert got.lat2 == pytest.approx(expected.lat2, abs=1e-12)
            assert got.lon2 == pytest.approx(expected.lon2, abs=1e-12)

    def test_open_line_has_no_length(self, solver: GeodesicSolver) -> None:
        line = solver.line(0.0, 0.0, 45.0)
        assert line.distance is None
        assert line.arc_length is None
        assert line.origin.as_tuple() == (0.0, 0.0)
        assert line.azimuth == 45.0

    def test_position_by_arc_length(self, solver: GeodesicSolver) -> None:
        """A meridian reaches the pole after 90 degrees of arc."""
        line = solver.line(0.0, 0.0, 0.0)
        position = line.position_arc(90.0)
        assert position.coordinate.latitude == pytest.approx(90.0, abs=1e-9)
        assert position.arc_length == 90.0
        assert line.solve(wgs84().quarter_meridian).lat2 == pytest.approx(90.0, abs=1e-9)

    def test_equatorial_azimuth(self, solver: GeodesicSolver) -> None:
        assert solver.line(0.0, 0.0, 60.0).equatorial_azimuth == pytest.approx(60.0, abs=1e-12)
        # Clairaut: sin(alp0) = sin(alp1) cos(beta1)
        line = solver.line(45.0, 0.0, 90.0)
        assert line.equatorial_azimuth < 90.0

    def test_immutable_under_queries(self, solver: GeodesicSolver) -> None:
        """Repeated queries in any order give identical answers."""
        line = solver.line(12.0, 34.0, 56.0)
        first = line.solve(1.0e6)
        line.solve(-5.0e6)
        line.position_arc(170.0)
        assert line.solve(1.0e6) == first


class TestUnitLine:
    """The shared 1 m reference line."""

    def test_properties(self) -> None:
        line = unit_geodesic_line()
        assert line.distance == 1.0
        assert line.azimuth == 0.0
        assert line.origin.as_tuple() == (0.0, 0.0)

    def test_shared_instance(self) -> None:
        assert unit_geodesic_line() is unit_geodesic_line()

    def test_end_point(self) -> None:
        end = unit_geodesic_line().position(1.0)
        expected = math.degrees(1.0 / wgs84().meridian_radius(0.0))
        assert end.coordinate.latitude == pytest.approx(expected, rel=1e-9)
        assert end.coordinate.longitude == 0.0
        assert end.azimuth == 0.0


class TestIntersect:
    """Closest approach of two geodesic lines."""

    def test_symmetric_crossing(self, solver: GeodesicSolver) -> None:
        """Mirror-image lines cross on the mirror meridian at equal distances."""
        line1 = solver.line(0.0, 0.0, 45.0)
        line2 = solver.line(0.0, 10.0, 315.0)
        point = Intersect(solver).solve(line1, line2)
        assert isinstance(point, IntersectionPoint)
        assert point.s1 == pytest.approx(point.s2, abs=1e-6)
        assert point.coordinate.longitude == pytest.approx(5.0, abs=1e-9)
        assert point.coordinate.latitude > 0
        assert point.separation < 1e-6

    def test_equator_and_meridian(self, solver: GeodesicSolver) -> None:
        equator = solver.line(0.0, 0.0, 90.0)
        meridian = solver.line(10.0, 5.0, 180.0)
        s1, s2 = Intersect(solver).closest(equator, meridian)
        assert s1 == pytest.approx(wgs84().equatorial_radius * math.radians(5.0), abs=1e-6)
        assert s2 == pytest.approx(wgs84().meridian_distance(10.0), abs=1e-6)

    def test_crossing_behind_origin(self, solver: GeodesicSolver) -> None:
        """Distances are signed; the crossing may lie behind either origin."""
        equator = solver.line(0.0, 0.0, 90.0)
        meridian = solver.line(10.0, -5.0, 0.0)
        s1, s2 = Intersect(solver).closest(equator, meridian)
        assert s1 < 0
        assert s2 < 0
        assert solver.line(0.0, 0.0, 90.0).solve(s1).lon2 == pytest.approx(-5.0, abs=1e-9)

    def test_starting_estimates(self, solver: GeodesicSolver) -> None:
        line1 = solver.line(0.0, 0.0, 45.0)
        line2 = solver.line(0.0, 10.0, 315.0)
        intersect = Intersect()
        cold = intersect.closest(line1, line2)
        warm = intersect.closest(line1, line2, *cold)
        assert warm == pytest.approx(cold, abs=1e-6)
