"""Tests for UTM/UPS zone selection."""

from __future__ import annotations

import math

import numpy as np
import pytest

from common.errors import CoordinateRangeError, CoordinateRangeErrorKind
from geospatial.zones import (
    INVALID_ZONE,
    ZoneSpec,
    central_meridian,
    latitude_band,
    parse_zone_spec,
    standard_zone,
    utm_zone,
)


class TestCentralMeridian:
    """Central meridians are 6 degrees apart starting at -177."""

    @pytest.mark.parametrize("zone, lon0", [(1, -177.0), (31, 3.0), (50, 117.0), (60, 177.0)])
    def test_values(self, zone: int, lon0: float) -> None:
        assert central_meridian(zone) == lon0


class TestLatitudeBand:
    """MGRS latitude bands, 8 degrees tall, clamped at both ends."""

    @pytest.mark.parametrize(
        "lat, band",
        [(-90.0, -10), (-80.0, -10), (-72.1, -10), (0.0, 0), (-0.5, -1),
         (56.0, 7), (63.9, 7), (72.0, 9), (83.9, 9), (90.0, 9)],
    )
    def test_values(self, lat: float, band: int) -> None:
        assert latitude_band(lat) == band


class TestUtmZone:
    """Standard zones with the Norway and Svalbard exceptions."""

    @pytest.mark.parametrize(
        "lat, lon, zone",
        [(-31.94, 115.97, 50), (47.6514, 106.8216, 48), (0.0, -180.0, 1),
         (0.0, 180.0, 1), (0.0, 179.9, 60), (0.0, 0.0, 31), (0.0, -0.1, 30),
         (0.0, 540.0, 1)],
    )
    def test_standard(self, lat: float, lon: float, zone: int) -> None:
        assert utm_zone(lat, lon) == zone

    @pytest.mark.parametrize(
        "lat, lon, zone",
        [(60.0, 3.0, 32), (60.0, 2.9, 31), (56.0, 4.0, 32), (55.9, 4.0, 31),
         (64.0, 4.0, 31), (60.0, 9.0, 32), (60.0, 12.0, 33)],
    )
    def test_norway(self, lat: float, lon: float, zone: int) -> None:
        assert utm_zone(lat, lon) == zone

    @pytest.mark.parametrize(
        "lon, zone",
        [(0.0, 31), (8.9, 31), (9.0, 33), (20.9, 33), (21.0, 35), (32.9, 35),
         (33.0, 37), (41.9, 37), (42.0, 38), (-0.1, 30)],
    )
    def test_svalbard(self, lon: float, zone: int) -> None:
        assert utm_zone(78.0, lon) == zone

    def test_piecewise_constant_in_longitude(self) -> None:
        """Away from the exceptions the zone only changes at 6-degree boundaries."""
        lons = np.linspace(-179.95, 179.95, 3600)
        for lat in (-79.9, -45.0, 0.0, 30.0, 55.0):
            zones = [utm_zone(lat, lon) for lon in lons]
            expected = [math.floor((lon + 186) / 6) for lon in lons]
            assert zones == expected

    def test_independent_of_latitude(self) -> None:
        for lon in (-120.5, -3.2, 10.0, 101.0):
            zones = {utm_zone(lat, lon) for lat in np.linspace(-80.0, 55.9, 50)}
            assert len(zones) == 1


class TestStandardZone:
    """Zone specifications."""

    def test_utm_region(self) -> None:
        assert standard_zone(-80.0, 0.0) == 31
        assert standard_zone(83.99, 0.0) == 31

    @pytest.mark.parametrize("lat", [-80.0001, -90.0, 84.0, 90.0])
    def test_polar_region(self, lat: float) -> None:
        assert standard_zone(lat, 0.0) == 0

    def test_match_behaves_like_standard(self) -> None:
        assert standard_zone(10.0, 10.0, ZoneSpec.MATCH) == standard_zone(10.0, 10.0)
        assert standard_zone(88.0, 10.0, ZoneSpec.MATCH) == 0

    def test_force_utm(self) -> None:
        assert standard_zone(88.0, 10.0, ZoneSpec.UTM) == 33
        assert standard_zone(-88.0, 10.0, ZoneSpec.UTM) == 32

    def test_force_ups(self) -> None:
        assert standard_zone(10.0, 10.0, ZoneSpec.UPS) == 0
        assert standard_zone(10.0, 10.0, 0) == 0

    def test_manual(self) -> None:
        assert standard_zone(10.0, 10.0, 17) == 17

    def test_invalid(self) -> None:
        assert standard_zone(10.0, 10.0, ZoneSpec.INVALID) == INVALID_ZONE
        assert standard_zone(10.0, 10.0, -4) == INVALID_ZONE

    @pytest.mark.parametrize("spec", [61, -5, 100, 2.5])
    def test_unrecognized_spec(self, spec) -> None:
        with pytest.raises(CoordinateRangeError) as exc:
            standard_zone(10.0, 10.0, spec)
        assert exc.value.kind is CoordinateRangeErrorKind.ZONE_SPEC

    def test_parse_zone_spec(self) -> None:
        assert parse_zone_spec(-1) is ZoneSpec.STANDARD
        assert parse_zone_spec(0) is ZoneSpec.UPS
        assert parse_zone_spec(42) == 42
