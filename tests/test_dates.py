"""Tests for fractional-year conversion."""

from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from magnetic.dates import fractional_year


class TestFractionalYear:
    """Calendar dates to fractional years."""

    def test_start_of_year(self) -> None:
        assert fractional_year(date(2024, 1, 1)) == 2024.0
        assert fractional_year(datetime(2025, 1, 1)) == 2025.0

    def test_mid_august(self) -> None:
        # 227 days into a 365-day year
        assert fractional_year(date(2025, 8, 16)) == pytest.approx(2025 + 227 / 365, abs=1e-12)
        assert round(fractional_year(date(2025, 8, 16)), 4) == 2025.6219

    def test_leap_year(self) -> None:
        # 183 of 366 days
        assert fractional_year(date(2024, 7, 2)) == 2024.5

    def test_datetime_includes_time_of_day(self) -> None:
        assert fractional_year(datetime(2023, 1, 1, 12)) == pytest.approx(2023 + 0.5 / 365, abs=1e-12)

    def test_aware_datetime(self) -> None:
        when = datetime(2024, 7, 2, tzinfo=timezone.utc)
        assert fractional_year(when) == pytest.approx(2024.5, abs=1e-12)

    @pytest.mark.parametrize("text", ["2024-07-02", "2024-07-02T00:00:00", "2024-07-02T00:00:00+00:00"])
    def test_iso_strings(self, text: str) -> None:
        assert fractional_year(text) == pytest.approx(2024.5, abs=1e-12)

    @pytest.mark.parametrize("value", [2025.5, 2020, -44.0])
    def test_numbers_unchanged(self, value) -> None:
        result = fractional_year(value)
        assert isinstance(result, float)
        assert result == value

    def test_bad_string(self) -> None:
        with pytest.raises(ValueError):
            fractional_year("mid-August")
