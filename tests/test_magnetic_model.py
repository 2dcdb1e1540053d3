"""Tests for magnetic model files, field evaluation and the model registry.

The fixtures write a synthetic axial dipole, g10 = -29000 nT at epoch
2020 with a secular variation of +10 nT/year, in the binary model
format. Its field has a closed form, so every component can be checked
exactly.

Test Strategy
-------------
1. **File format**: write/read round trip and every malformed-file path.
2. **Field values**: dipole components at the equator and pole, time
   interpolation and rates.
3. **Validation order**: latitude, then height, then date.
4. **Registry**: date-based model selection and directory resolution.
"""

from __future__ import annotations

import dataclasses
import math
from datetime import date
from pathlib import Path

import numpy as np
import pytest

from common.errors import (
    CoordinateRangeError,
    CoordinateRangeErrorKind,
    ModelDomainError,
    ModelDomainErrorKind,
    ModelFormatError,
    ModelNotFoundError,
)
from geospatial.ellipsoid import Ellipsoid, wgs84
from magnetic.magnetic_model import (
    DEFAULT_MODEL_DIRECTORY,
    ENHANCED_MAGNETIC_MODELS,
    MODEL_PATH_ENV,
    WORLD_MAGNETIC_MODELS,
    FieldComponents,
    MagneticModel,
    available_models,
    enhanced_magnetic_model,
    load_model,
    model_directory,
    select_model,
    world_magnetic_model,
)
from magnetic.model_io import (
    CoefficientSet,
    ModelMetadata,
    read_coefficients,
    read_metadata,
    write_model,
)

RADIUS = 6371200.0
G10 = -29000.0
G10_RATE = 10.0


# ===================================================================
# FIXTURES
# ===================================================================


def _dipole_sets(g10: float = G10, rate: float = G10_RATE):
    def dipole(value: float) -> CoefficientSet:
        g = np.zeros((2, 2))
        g[1, 0] = value
        return CoefficientSet(degree=1, order=0, g=g, h=np.zeros((2, 2)))
    return [dipole(g10), dipole(rate)]


def _metadata(name: str = "dipole", **overrides) -> ModelMetadata:
    fields = dict(
        name=name,
        description="Synthetic axial dipole",
        release_date="2020-01-01",
        radius=RADIUS,
        num_models=1,
        num_constants=0,
        epoch=2020.0,
        delta_epoch=5.0,
        min_time=2020.0,
        max_time=2025.0,
        min_height=-1000.0,
        max_height=850000.0,
        normalization="schmidt",
        model_id="DIPOLE01",
    )
    fields.update(overrides)
    return ModelMetadata(**fields)


@pytest.fixture
def model_files(tmp_path: Path):
    metadata = _metadata()
    meta_path, cof_path = write_model(tmp_path, metadata, _dipole_sets())
    return metadata, meta_path, cof_path


@pytest.fixture
def dipole(model_files, tmp_path: Path) -> MagneticModel:
    return MagneticModel.load("dipole", tmp_path)


# ===================================================================
# FILE FORMAT
# ===================================================================


class TestModelFiles:
    """Binary coefficient and text metadata files."""

    def test_file_names(self, model_files) -> None:
        _, meta_path, cof_path = model_files
        assert meta_path.name == "dipole.wmm"
        assert cof_path.name == "dipole.wmm.cof"
        assert meta_path.read_text().startswith("WMMF-1\n")

    def test_metadata_round_trip(self, model_files) -> None:
        metadata, meta_path, _ = model_files
        assert read_metadata(meta_path) == metadata

    def test_coefficient_round_trip(self, model_files) -> None:
        metadata, _, cof_path = model_files
        sets = read_coefficients(cof_path, metadata)
        assert len(sets) == 2
        for got, expected in zip(sets, _dipole_sets()):
            assert (got.degree, got.order) == (1, 0)
            np.testing.assert_array_equal(got.g, expected.g)
            np.testing.assert_array_equal(got.h, expected.h)

    def test_coefficient_file_size(self, model_files) -> None:
        # ID, then per set: two int32 and two float64 cosine terms
        _, _, cof_path = model_files
        assert cof_path.stat().st_size == 8 + 2 * (2 * 4 + 2 * 8)

    def test_comments_and_unknown_keys_ignored(self, model_files) -> None:
        metadata, meta_path, _ = model_files
        text = meta_path.read_text().replace(
            "WMMF-1\n", "WMMF-1\n# generated for tests\n\nConversionDate 2020-01-01\n"
        )
        meta_path.write_text(text)
        assert read_metadata(meta_path) == metadata

    def test_bad_format_line(self, model_files) -> None:
        _, meta_path, _ = model_files
        meta_path.write_text(meta_path.read_text().replace("WMMF-1", "WMMX-1", 1))
        with pytest.raises(ModelFormatError) as exc:
            read_metadata(meta_path)
        assert exc.value.value == meta_path

    @pytest.mark.parametrize(
        "old, new",
        [("Radius 6371200.0", "Radius abc"),
         ("Radius 6371200.0", "Radius -1.0"),
         ("NumModels 1", "NumModels 0"),
         ("DeltaEpoch 5.0", "DeltaEpoch 0.0"),
         ("Normalization schmidt", "Normalization other"),
         ("ID DIPOLE01", "ID DIPOLE"),
         ("ByteOrder 0", "ByteOrder 1")],
    )
    def test_bad_values(self, model_files, old: str, new: str) -> None:
        _, meta_path, _ = model_files
        text = meta_path.read_text()
        assert old in text
        meta_path.write_text(text.replace(old, new))
        with pytest.raises(ModelFormatError):
            read_metadata(meta_path)

    @pytest.mark.parametrize(
        "byte_order, normalization, expected",
        [("little", "Schmidt", "schmidt"),
         ("Little", "SCHMIDT", "schmidt"),
         ("0", "Full", "full")],
    )
    def test_keywords_case_insensitive(
        self, model_files, byte_order: str, normalization: str, expected: str
    ) -> None:
        metadata, meta_path, _ = model_files
        text = meta_path.read_text()
        text = text.replace("ByteOrder 0", f"ByteOrder {byte_order}")
        text = text.replace("Normalization schmidt", f"Normalization {normalization}")
        meta_path.write_text(text)
        parsed = read_metadata(meta_path)
        assert parsed.normalization == expected
        assert parsed == dataclasses.replace(metadata, normalization=expected)

    def test_id_mismatch(self, model_files) -> None:
        metadata, _, cof_path = model_files
        with pytest.raises(ModelFormatError) as exc:
            read_coefficients(cof_path, dataclasses.replace(metadata, model_id="OTHER001"))
        assert "ID" in exc.value.reason

    def test_truncated(self, model_files) -> None:
        metadata, _, cof_path = model_files
        cof_path.write_bytes(cof_path.read_bytes()[:-8])
        with pytest.raises(ModelFormatError) as exc:
            read_coefficients(cof_path, metadata)
        assert "truncated" in exc.value.reason

    def test_trailing_data(self, model_files) -> None:
        metadata, _, cof_path = model_files
        cof_path.write_bytes(cof_path.read_bytes() + bytes(8))
        with pytest.raises(ModelFormatError) as exc:
            read_coefficients(cof_path, metadata)
        assert "extra" in exc.value.reason

    def test_write_checks_set_count(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError):
            write_model(tmp_path, _metadata(), _dipole_sets()[:1])

    def test_write_checks_id_length(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError):
            write_model(tmp_path, _metadata(model_id="SHORT"), _dipole_sets())


class TestLoad:
    """Locating model files."""

    def test_properties(self, dipole: MagneticModel) -> None:
        assert dipole.name == "dipole"
        assert dipole.description == "Synthetic axial dipole"
        assert dipole.epoch == 2020.0
        assert dipole.radius == RADIUS
        assert (dipole.degree, dipole.order) == (1, 0)
        assert (dipole.min_time, dipole.max_time) == (2020.0, 2025.0)
        assert (dipole.min_height, dipole.max_height) == (-1000.0, 850000.0)
        assert dipole.ellipsoid is wgs84()
        assert "dipole" in repr(dipole)

    def test_missing_model(self, tmp_path: Path) -> None:
        with pytest.raises(ModelNotFoundError) as exc:
            MagneticModel.load("wmm2025", tmp_path)
        assert exc.value.name == "wmm2025"
        assert exc.value.value == tmp_path / "wmm2025.wmm"

    def test_missing_coefficients(self, model_files, tmp_path: Path) -> None:
        _, _, cof_path = model_files
        cof_path.unlink()
        with pytest.raises(ModelNotFoundError) as exc:
            MagneticModel.load("dipole", tmp_path)
        assert exc.value.value == cof_path

    def test_not_found_is_lookup_error(self, tmp_path: Path) -> None:
        with pytest.raises(LookupError):
            MagneticModel.load("nothing", tmp_path)

    def test_wrong_number_of_sets(self) -> None:
        with pytest.raises(ValueError):
            MagneticModel(_metadata(), _dipole_sets()[:1])


# ===================================================================
# FIELD VALUES
# ===================================================================


class TestDipoleField:
    """Closed-form field of an axial dipole."""

    def test_equator(self, dipole: MagneticModel) -> None:
        field = dipole.field(2020.0, 0.0, 0.0)
        scale = (RADIUS / wgs84().equatorial_radius) ** 3
        assert field.by == pytest.approx(-G10 * scale, rel=1e-12)
        assert field.bx == pytest.approx(0.0, abs=1e-9)
        assert field.bz == pytest.approx(0.0, abs=1e-9)

    def test_independent_of_longitude(self, dipole: MagneticModel) -> None:
        reference = dipole.field(2020.0, 20.0, 0.0)
        for lon in (-170.0, -45.0, 90.0, 180.0):
            field = dipole.field(2020.0, 20.0, lon)
            assert field.by == pytest.approx(reference.by, rel=1e-12)
            assert field.bz == pytest.approx(reference.bz, rel=1e-12)
            assert field.bx == pytest.approx(0.0, abs=1e-9)

    def test_north_pole(self, dipole: MagneticModel) -> None:
        field = dipole.field(2020.0, 90.0, 0.0)
        scale = (RADIUS / wgs84().polar_semi_axis) ** 3
        assert field.bz == pytest.approx(2 * G10 * scale, rel=1e-12)
        assert field.by == pytest.approx(0.0, abs=1e-6)
        assert field.bx == pytest.approx(0.0, abs=1e-6)

    def test_south_pole_points_up(self, dipole: MagneticModel) -> None:
        assert dipole.field(2020.0, -90.0, 0.0).bz > 0

    def test_total_intensity_is_rotation_invariant(self, dipole: MagneticModel) -> None:
        lat = 45.0
        x, y, z = wgs84().geodetic_to_ecef(lat, 0.0, 0.0)
        r = math.hypot(x, z)
        cos_theta, sin_theta = z / r, x / r
        expected = abs(G10) * (RADIUS / r) ** 3 * math.hypot(sin_theta, 2 * cos_theta)
        c = dipole.components(2020.0, lat, 0.0)
        assert c.total_field == pytest.approx(expected, rel=1e-12)

    def test_sphere_inclination(self, model_files, tmp_path: Path) -> None:
        """On a sphere of the reference radius, tan(I) = 2 tan(latitude)."""
        model = MagneticModel.load("dipole", tmp_path, Ellipsoid(RADIUS, 0.0))
        for lat in (-60.0, -10.0, 30.0, 75.0):
            field = model.field(2020.0, lat, 0.0)
            assert field.by == pytest.approx(-G10 * math.cos(math.radians(lat)), rel=1e-12)
            assert field.bz == pytest.approx(2 * G10 * math.sin(math.radians(lat)), rel=1e-12)
            c = model.components(2020.0, lat, 0.0)
            assert math.tan(math.radians(c.inclination)) == pytest.approx(
                2 * math.tan(math.radians(lat)), rel=1e-12
            )

    def test_height_weakens_field(self, dipole: MagneticModel) -> None:
        ground = dipole.components(2020.0, 30.0, 0.0, 0.0)
        orbit = dipole.components(2020.0, 30.0, 0.0, 400000.0)
        assert orbit.total_field < ground.total_field

    def test_secular_variation(self, dipole: MagneticModel) -> None:
        """Beyond the last epoch the rate set extrapolates the coefficients."""
        scale = (RADIUS / wgs84().equatorial_radius) ** 3
        field = dipole.field(2022.0, 0.0, 0.0)
        assert field.by == pytest.approx(-(G10 + 2 * G10_RATE) * scale, rel=1e-12)

    def test_rates(self, dipole: MagneticModel) -> None:
        scale = (RADIUS / wgs84().equatorial_radius) ** 3
        field, rates = dipole.field_with_rates(2022.0, 0.0, 0.0)
        assert field == dipole.field(2022.0, 0.0, 0.0)
        assert rates.by == pytest.approx(-G10_RATE * scale, rel=1e-12)
        assert rates.bx == pytest.approx(0.0, abs=1e-12)

    def test_interpolation_between_epochs(self, tmp_path: Path) -> None:
        metadata = _metadata(name="twoepoch", num_models=2, model_id="TWOEPOCH", max_time=2030.0)
        sets = _dipole_sets(-29000.0)[:1] + _dipole_sets(-28900.0)
        write_model(tmp_path, metadata, sets)
        model = MagneticModel.load("twoepoch", tmp_path)
        scale = (RADIUS / wgs84().equatorial_radius) ** 3
        field, rates = model.field_with_rates(2022.5, 0.0, 0.0)
        assert field.by == pytest.approx(28950.0 * scale, rel=1e-12)
        assert rates.by == pytest.approx(-20.0 * scale, rel=1e-12)

    def test_dates_accepted(self, dipole: MagneticModel) -> None:
        by_date = dipole.field(date(2022, 1, 1), 10.0, 20.0)
        by_string = dipole.field("2022-01-01", 10.0, 20.0)
        by_number = dipole.field(2022.0, 10.0, 20.0)
        assert by_date == by_number
        assert by_string == by_number

    def test_components(self, dipole: MagneticModel) -> None:
        c = dipole.components(2020.0, 0.0, 0.0)
        assert isinstance(c, FieldComponents)
        assert c.declination == pytest.approx(0.0, abs=1e-12)
        assert c.inclination == pytest.approx(0.0, abs=1e-9)
        assert c.horizontal_field == pytest.approx(c.total_field)

    def test_quantities(self, dipole: MagneticModel) -> None:
        field = dipole.field(2020.0, 0.0, 0.0)
        bx, by, bz = field.as_quantities()
        assert by.to("T").magnitude == pytest.approx(field.by * 1e-9)
        declination, _, _, total = dipole.components(2020.0, 0.0, 0.0).as_quantities()
        assert str(declination.units) == "degree"
        assert total.to("uT").magnitude == pytest.approx(field.by * 1e-3)


class TestValidationOrder:
    """Inputs are checked before any synthesis, latitude first."""

    def test_latitude_first(self, dipole: MagneticModel) -> None:
        with pytest.raises(CoordinateRangeError) as exc:
            dipole.field(1900.0, 95.0, 0.0, 1.0e7)
        assert exc.value.kind is CoordinateRangeErrorKind.LATITUDE

    def test_height_before_date(self, dipole: MagneticModel) -> None:
        with pytest.raises(ModelDomainError) as exc:
            dipole.field(1900.0, 0.0, 0.0, 1.0e7)
        assert exc.value.kind is ModelDomainErrorKind.HEIGHT
        assert exc.value.limits == (-1000.0, 850000.0)

    @pytest.mark.parametrize("height", [-1000.0, 850000.0])
    def test_height_bounds_inclusive(self, dipole: MagneticModel, height: float) -> None:
        dipole.field(2020.0, 0.0, 0.0, height)

    @pytest.mark.parametrize("height", [-1000.1, 850000.1])
    def test_height_rejected(self, dipole: MagneticModel, height: float) -> None:
        with pytest.raises(ModelDomainError) as exc:
            dipole.field(2020.0, 0.0, 0.0, height)
        assert exc.value.kind is ModelDomainErrorKind.HEIGHT

    @pytest.mark.parametrize("time", [2019.999, 2025.0, 2030.0])
    def test_date_rejected(self, dipole: MagneticModel, time: float) -> None:
        with pytest.raises(ModelDomainError) as exc:
            dipole.field(time, 0.0, 0.0)
        assert exc.value.kind is ModelDomainErrorKind.DATE
        assert "valid window" in str(exc.value)

    def test_window_start_inclusive(self, dipole: MagneticModel) -> None:
        dipole.field(2020.0, 0.0, 0.0)
        dipole.field(2024.999, 0.0, 0.0)


class TestFieldGrid:
    """Gridded evaluation returned as an xarray Dataset."""

    def test_grid(self, dipole: MagneticModel) -> None:
        lats = [-30.0, 0.0, 30.0]
        lons = [0.0, 90.0]
        grid = dipole.field_grid(2021.0, lats, lons)
        assert grid.sizes["latitude"] == 3
        assert grid.sizes["longitude"] == 2
        assert grid.attrs["model"] == "dipole"
        assert grid.attrs["time"] == 2021.0
        assert grid.attrs["height"] == 0.0
        assert grid["by"].attrs["units"] == "nT"
        assert grid["declination"].attrs["units"] == "degree"
        point = dipole.field(2021.0, 30.0, 90.0)
        assert float(grid["by"].sel(latitude=30.0, longitude=90.0)) == pytest.approx(point.by, rel=1e-14)
        assert float(grid["bz"].sel(latitude=30.0, longitude=90.0)) == pytest.approx(point.bz, rel=1e-14)
        np.testing.assert_allclose(grid["declination"].values, 0.0, atol=1e-9)

    def test_grid_validates(self, dipole: MagneticModel) -> None:
        with pytest.raises(CoordinateRangeError):
            dipole.field_grid(2021.0, [0.0, 91.0], [0.0])
        with pytest.raises(ModelDomainError):
            dipole.field_grid(2026.0, [0.0], [0.0])


# ===================================================================
# REGISTRY
# ===================================================================


class TestRegistry:
    """Selecting a named model by date."""

    @pytest.mark.parametrize(
        "time, name",
        [(2010.0, "emm2010"), (2014.99, "emm2010"), (2015.0, "wmm2015v2"),
         (2022.5, "wmm2020"), (2025.0, "wmmhr2025"), (date(2027, 3, 1), "wmmhr2025")],
    )
    def test_world_table(self, time, name: str) -> None:
        assert select_model(WORLD_MAGNETIC_MODELS, time) == name

    @pytest.mark.parametrize(
        "time, name", [(2000.0, "emm2015"), (2012.0, "emm2010"), (2016.0, "emm2017"), (2021.9, "emm2017")]
    )
    def test_enhanced_table(self, time: float, name: str) -> None:
        assert select_model(ENHANCED_MAGNETIC_MODELS, time) == name

    @pytest.mark.parametrize("time", [2009.0, 2030.0])
    def test_world_outside(self, time: float) -> None:
        with pytest.raises(ModelDomainError) as exc:
            select_model(WORLD_MAGNETIC_MODELS, time)
        assert exc.value.kind is ModelDomainErrorKind.DATE
        assert exc.value.limits == (2010.0, 2030.0)

    def test_enhanced_outside(self) -> None:
        with pytest.raises(ModelDomainError):
            select_model(ENHANCED_MAGNETIC_MODELS, 2022.0)

    def test_world_magnetic_model(self, tmp_path: Path) -> None:
        write_model(tmp_path, _metadata(name="wmm2020", model_id="WMM2020A"), _dipole_sets())
        c = world_magnetic_model(2022.5, 0.0, 0.0, directory=tmp_path)
        expected = MagneticModel.load("wmm2020", tmp_path).components(2022.5, 0.0, 0.0)
        assert c == expected

    def test_world_magnetic_model_from_environment(self, tmp_path: Path, monkeypatch) -> None:
        write_model(tmp_path, _metadata(name="wmm2020", model_id="WMM2020A"), _dipole_sets())
        monkeypatch.setenv(MODEL_PATH_ENV, str(tmp_path))
        assert world_magnetic_model(2021.0, 10.0, 10.0).total_field > 0

    def test_latitude_checked_before_date(self, tmp_path: Path) -> None:
        with pytest.raises(CoordinateRangeError):
            world_magnetic_model(1900.0, 95.0, 0.0, directory=tmp_path)

    def test_date_checked_before_loading(self, tmp_path: Path) -> None:
        with pytest.raises(ModelDomainError):
            enhanced_magnetic_model(1990.0, 0.0, 0.0, directory=tmp_path)

    def test_date_selects_model_before_height(self, tmp_path: Path) -> None:
        """The height window belongs to a model, so a date outside every window wins."""
        write_model(tmp_path, _metadata(name="wmm2020", model_id="WMM2020A"), _dipole_sets())
        with pytest.raises(ModelDomainError) as exc:
            world_magnetic_model(2031.0, 0.0, 0.0, 1.0e7, directory=tmp_path)
        assert exc.value.kind is ModelDomainErrorKind.DATE
        with pytest.raises(ModelDomainError) as exc:
            world_magnetic_model(2022.5, 0.0, 0.0, 1.0e7, directory=tmp_path)
        assert exc.value.kind is ModelDomainErrorKind.HEIGHT

    def test_missing_model_file(self, tmp_path: Path) -> None:
        with pytest.raises(ModelNotFoundError) as exc:
            enhanced_magnetic_model(2005.0, 0.0, 0.0, directory=tmp_path)
        assert exc.value.name == "emm2015"

    def test_load_model_is_shared(self, model_files, tmp_path: Path) -> None:
        assert load_model("dipole", tmp_path) is load_model("dipole", str(tmp_path))

    def test_available_models(self, model_files, tmp_path: Path) -> None:
        assert available_models(tmp_path) == []
        write_model(tmp_path, _metadata(name="wmm2020", model_id="WMM2020A"), _dipole_sets())
        write_model(tmp_path, _metadata(name="emm2017", model_id="EMM2017A"), _dipole_sets())
        assert available_models(tmp_path) == ["emm2017", "wmm2020"]


class TestModelDirectory:
    """Resolution of the model directory."""

    def test_explicit(self, monkeypatch, tmp_path: Path) -> None:
        monkeypatch.setenv(MODEL_PATH_ENV, "/elsewhere")
        assert model_directory(str(tmp_path)) == tmp_path

    def test_environment(self, monkeypatch, tmp_path: Path) -> None:
        monkeypatch.setenv(MODEL_PATH_ENV, str(tmp_path))
        assert model_directory() == tmp_path

    def test_default(self, monkeypatch) -> None:
        monkeypatch.delenv(MODEL_PATH_ENV, raising=False)
        assert model_directory() == DEFAULT_MODEL_DIRECTORY
