"""Round trips against PROJ's forward Transverse Mercator."""

import numpy as np
import pytest
from pyproj import Transformer

from geospatial.coordinate_models import GridReference
from geospatial.inverse_projection import grid_to_geographic, grid_to_geographic_batch
from geospatial.projections import (
    IRISH_GRID,
    IRISH_TRANSVERSE_MERCATOR,
    OSGB36_NATIONAL_GRID,
    ProjectionDefinition,
    utm_zone,
)


def _forward(grid: ProjectionDefinition) -> Transformer:
    crs = grid.to_crs()
    return Transformer.from_crs(crs.geodetic_crs, crs, always_xy=True)


NATIONAL_GRIDS = [
    (OSGB36_NATIONAL_GRID, (50.0, 58.5)),
    (IRISH_GRID, (51.5, 55.3)),
    (IRISH_TRANSVERSE_MERCATOR, (51.5, 55.3)),
]

# Far from the origin latitude the truncated arc series drifts by ~0.1 mm
ALL_GRIDS = NATIONAL_GRIDS + [
    (utm_zone(31), (0.5, 60.0)),
    (utm_zone(19, southern=True), (-55.0, -0.5)),
]


def _grid_id(value):
    return getattr(value, "name", None)


@pytest.mark.parametrize("grid, lat_range", NATIONAL_GRIDS, ids=_grid_id)
@pytest.mark.parametrize("lon_offset", [-1.0, -0.3, 0.0, 0.4, 1.0])
def test_roundtrip_near_central_meridian(grid, lat_range, lon_offset: float) -> None:
    transformer = _forward(grid)
    for lat in np.linspace(lat_range[0], lat_range[1], 7):
        lon = grid.origin_longitude + lon_offset
        x, y = transformer.transform(lon, lat)
        point = grid_to_geographic(GridReference.exact(x, y), grid)
        assert point.latitude == pytest.approx(lat, abs=1e-9)
        assert point.longitude == pytest.approx(lon, abs=1e-9)


@pytest.mark.parametrize("grid, lat_range", ALL_GRIDS, ids=_grid_id)
@pytest.mark.parametrize("lon_offset", [-3.0, -0.7, 2.5, 3.0])
def test_roundtrip_edge_of_zone(grid, lat_range, lon_offset: float) -> None:
    transformer = _forward(grid)
    lats = np.linspace(lat_range[0], lat_range[1], 5)
    lons = np.full_like(lats, grid.origin_longitude + lon_offset)
    xs, ys = transformer.transform(lons, lats)

    got_lats, got_lons = grid_to_geographic_batch(xs, ys, grid, round_to_metre=False)

    np.testing.assert_allclose(got_lats, lats, rtol=0, atol=1e-8)
    np.testing.assert_allclose(got_lons, lons, rtol=0, atol=1e-8)


def test_whole_metre_rounding_error_is_bounded() -> None:
    transformer = _forward(OSGB36_NATIONAL_GRID)
    x, y = transformer.transform(-1.4, 53.2)
    point = grid_to_geographic(GridReference(x, y), OSGB36_NATIONAL_GRID)
    # Half a metre is roughly 4.5e-6° of latitude and 7.5e-6° of longitude at 53°N
    assert point.latitude == pytest.approx(53.2, abs=6e-6)
    assert point.longitude == pytest.approx(-1.4, abs=9e-6)
