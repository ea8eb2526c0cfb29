import dataclasses

import pint
import pytest

from common.units import Q_
from geospatial.coordinate_models import (
    AIRY_1830,
    AIRY_1830_MODIFIED,
    GRS80,
    INTERNATIONAL_1924,
    WGS84,
    GridReference,
)
from geospatial.errors import InvalidProjectionDefinitionError, UnknownGridSystemError
from geospatial.projections import (
    GRID_SYSTEMS,
    IRISH_GRID,
    IRISH_TRANSVERSE_MERCATOR,
    OSGB36_NATIONAL_GRID,
    ProjectionDefinition,
    get_grid_system,
    utm_zone,
)


def _definition(**overrides) -> ProjectionDefinition:
    params = dict(
        ellipsoid=AIRY_1830,
        scale_factor=0.9996012717,
        origin_easting=400000.0,
        origin_northing=-100000.0,
        origin_latitude=49.0,
        origin_longitude=-2.0,
    )
    params.update(overrides)
    return ProjectionDefinition(**params)


def test_national_grid_constants() -> None:
    grid = OSGB36_NATIONAL_GRID
    assert grid.ellipsoid is AIRY_1830
    assert grid.scale_factor == 0.9996012717
    assert grid.origin_easting == 400000.0
    assert grid.origin_northing == -100000.0
    assert grid.origin_latitude == 49.0
    assert grid.origin_longitude == -2.0


def test_irish_grids_use_their_own_ellipsoids() -> None:
    assert IRISH_GRID.ellipsoid is AIRY_1830_MODIFIED
    assert IRISH_TRANSVERSE_MERCATOR.ellipsoid is GRS80
    assert IRISH_GRID.origin_longitude == IRISH_TRANSVERSE_MERCATOR.origin_longitude == -8.0


def test_name_not_part_of_equality() -> None:
    assert _definition(name="custom") == OSGB36_NATIONAL_GRID


def test_immutable() -> None:
    with pytest.raises(dataclasses.FrozenInstanceError):
        OSGB36_NATIONAL_GRID.scale_factor = 1.0


@pytest.mark.parametrize(
    "name, expected",
    [
        ("OSGB36", OSGB36_NATIONAL_GRID),
        ("osgb36", OSGB36_NATIONAL_GRID),
        ("irish grid", IRISH_GRID),
        ("Irish-Grid", IRISH_GRID),
        (" itm ", IRISH_TRANSVERSE_MERCATOR),
    ],
)
def test_get_grid_system(name: str, expected: ProjectionDefinition) -> None:
    assert get_grid_system(name) is expected


def test_unknown_grid_system() -> None:
    with pytest.raises(UnknownGridSystemError):
        get_grid_system("mars grid")
    with pytest.raises(KeyError):
        get_grid_system("")


def test_registry_is_complete() -> None:
    assert set(GRID_SYSTEMS) == {"OSGB36", "IRISH_GRID", "ITM"}


@pytest.mark.parametrize(
    "overrides",
    [
        {"origin_latitude": 90.0},
        {"origin_latitude": -90.0},
        {"origin_latitude": 123.0},
        {"origin_longitude": 180.0},
        {"origin_longitude": -180.0},
        {"origin_longitude": float("nan")},
        {"origin_easting": float("inf")},
        {"origin_northing": float("nan")},
        {"scale_factor": 0.0},
        {"scale_factor": -0.9996},
        {"scale_factor": float("nan")},
    ],
)
def test_invalid_definitions_rejected(overrides: dict) -> None:
    with pytest.raises(InvalidProjectionDefinitionError):
        _definition(**overrides)


def test_invalid_definition_is_value_error() -> None:
    with pytest.raises(ValueError):
        _definition(origin_latitude=91.0)


def test_origin_quantities_converted() -> None:
    grid = _definition(
        origin_easting=Q_(400, "km"),
        origin_northing=Q_(-100, "km"),
        origin_latitude=Q_(0.855211333477221, "radian"),
    )
    assert grid.origin_easting == pytest.approx(400000.0)
    assert grid.origin_northing == pytest.approx(-100000.0)
    assert grid.origin_latitude == pytest.approx(49.0, abs=1e-9)


class TestUtmZone:
    @pytest.mark.parametrize("zone, meridian", [(1, -177.0), (30, -3.0), (31, 3.0), (60, 177.0)])
    def test_central_meridian(self, zone: int, meridian: float) -> None:
        assert utm_zone(zone).origin_longitude == meridian

    def test_northern_hemisphere(self) -> None:
        zone = utm_zone(30)
        assert zone.ellipsoid is WGS84
        assert zone.scale_factor == 0.9996
        assert zone.origin_easting == 500000.0
        assert zone.origin_northing == 0.0
        assert zone.origin_latitude == 0.0
        assert zone.name == "UTM zone 30N"

    def test_southern_hemisphere(self) -> None:
        zone = utm_zone(56, southern=True)
        assert zone.origin_northing == 10000000.0
        assert zone.name == "UTM zone 56S"

    def test_custom_ellipsoid(self) -> None:
        assert utm_zone(31, ellipsoid=INTERNATIONAL_1924).ellipsoid is INTERNATIONAL_1924

    @pytest.mark.parametrize("zone", [0, 61, -5, True, 30.0, "30"])
    def test_invalid_zone(self, zone) -> None:
        with pytest.raises(InvalidProjectionDefinitionError):
            utm_zone(zone)


class TestCrsInterop:
    def test_proj4_string(self) -> None:
        proj4 = OSGB36_NATIONAL_GRID.proj4_string
        assert "+proj=tmerc" in proj4
        assert "+lat_0=49.0" in proj4
        assert "+lon_0=-2.0" in proj4
        assert "+k_0=0.9996012717" in proj4
        assert "+x_0=400000.0" in proj4
        assert "+y_0=-100000.0" in proj4
        assert "+a=6377563.396" in proj4
        assert "+b=6356256.909" in proj4

    def test_to_crs(self) -> None:
        crs = OSGB36_NATIONAL_GRID.to_crs()
        assert crs.is_projected
        assert crs.geodetic_crs is not None


class TestReference:
    def test_rounds_by_default(self) -> None:
        ref = OSGB36_NATIONAL_GRID.reference(651409.903, 313177.270)
        assert ref == GridReference(651410, 313177)

    def test_exact(self) -> None:
        ref = OSGB36_NATIONAL_GRID.reference(651409.903, 313177.270, exact=True)
        assert ref.easting == 651409.903
        assert ref.precise

    def test_quantities(self) -> None:
        ref = OSGB36_NATIONAL_GRID.reference(Q_(651.409, "km"), Q_(313177, "m"))
        assert ref == GridReference(651409, 313177)

    def test_incompatible_units(self) -> None:
        with pytest.raises(pint.DimensionalityError):
            OSGB36_NATIONAL_GRID.reference(Q_(3, "second"), 0)
        with pytest.raises(pint.DimensionalityError):
            OSGB36_NATIONAL_GRID.reference(0, Q_(3, "degree"))
