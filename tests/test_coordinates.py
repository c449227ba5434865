# tests/test_coordinates.py
import math

import pytest

from sea_router.core.errors import InvalidCoordinate
from sea_router.services.coordinates import (
    adjust_for_antimeridian,
    antimeridian_bridge,
    bridge_line,
    crosses_antimeridian,
    great_circle_km,
    normalize_longitude,
    seat_on_antimeridian,
    validate_position,
)


def test_validate_position_accepts_range_limits():
    assert validate_position((179.0, -90.0)) == (179.0, -90.0)
    assert validate_position([0, 90]) == (0.0, 90.0)
    # -180 and 180 are the same meridian
    assert validate_position((-180.0, 0.0)) == (180.0, 0.0)


@pytest.mark.parametrize(
    "position",
    [
        (180.5, 0.0),
        (-181.0, 0.0),
        (0.0, 90.01),
        (0.0, -91.0),
        (math.nan, 0.0),
        (0.0, math.inf),
        (-math.inf, 0.0),
        ("east", 10.0),
        (None, 10.0),
        (1.0,),
        (1.0, 2.0, 3.0),
    ],
)
def test_validate_position_rejects_bad_values(position):
    with pytest.raises(InvalidCoordinate) as excinfo:
        validate_position(position)
    assert excinfo.value.kind == "InvalidCoordinate"


@pytest.mark.parametrize(
    "lon, expected",
    [
        (0.0, 0.0),
        (180.0, 180.0),
        (-180.0, 180.0),
        (190.0, -170.0),
        (-190.0, 170.0),
        (540.0, 180.0),
        (-359.5, 0.5),
        (45.25, 45.25),
    ],
)
def test_normalize_longitude(lon, expected):
    assert normalize_longitude(lon) == pytest.approx(expected)


def test_adjust_for_antimeridian_shifts_destination_only_when_spanning():
    assert adjust_for_antimeridian((179.5, 10.0), (-179.5, 10.0)) == (180.5, 10.0)
    assert adjust_for_antimeridian((-179.5, 10.0), (179.5, 10.0)) == (-180.5, 10.0)
    assert adjust_for_antimeridian((10.0, 0.0), (20.0, 0.0)) == (20.0, 0.0)
    # exactly 180 apart is not spanning
    assert adjust_for_antimeridian((-90.0, 0.0), (90.0, 0.0)) == (90.0, 0.0)


def test_crosses_antimeridian():
    assert crosses_antimeridian((179.9, 0.0), (-179.9, 0.0))
    assert crosses_antimeridian((180.0, 0.0), (-180.0, 0.0))
    assert not crosses_antimeridian((170.0, 0.0), (179.9, 0.0))
    assert not crosses_antimeridian((-90.0, 0.0), (90.0, 0.0))


def test_antimeridian_bridge_interpolates_crossing_latitude():
    bridge = antimeridian_bridge((179.5, 10.0), (-179.5, 12.0))
    assert bridge[0] == (180.0, pytest.approx(11.0))
    assert bridge[1] == (-180.0, pytest.approx(11.0))

    westward = antimeridian_bridge((-179.0, 0.0), (178.0, 3.0))
    assert [p[0] for p in westward] == [-180.0, 180.0]
    assert westward[0][1] == pytest.approx(1.0)


def test_antimeridian_bridge_empty_when_not_crossing():
    assert antimeridian_bridge((0.0, 0.0), (10.0, 5.0)) == []


def test_antimeridian_bridge_leaves_out_endpoints_on_the_dateline():
    assert antimeridian_bridge((180.0, 10.0), (-179.6, 10.0)) == [(-180.0, 10.0)]
    assert antimeridian_bridge((179.6, 10.0), (-180.0, 10.0)) == [(180.0, 10.0)]
    assert antimeridian_bridge((180.0, 0.0), (-180.0, 0.0)) == []


def test_seat_on_antimeridian():
    assert seat_on_antimeridian((180.0, 10.0), (-179.0, 10.0)) == (-180.0, 10.0)
    assert seat_on_antimeridian((-180.0, 10.0), (179.0, 10.0)) == (180.0, 10.0)
    assert seat_on_antimeridian((180.0, 10.0), (179.0, 10.0)) == (180.0, 10.0)
    assert seat_on_antimeridian((179.0, 0.0), (-179.0, 0.0)) == (179.0, 0.0)


def test_bridge_line_keeps_two_points_each_side_of_a_short_crossing():
    assert bridge_line([(179.95, 10.0), (-179.9, 10.0)]) == [
        (179.95, 10.0), (180.0, 10.0), (-180.0, 10.0), (-179.9, 10.0),
    ]


def test_bridge_line_seats_end_points_on_the_dateline():
    assert bridge_line([(180.0, 10.0), (-179.6, 10.0), (-179.0, 10.0)]) == [
        (-180.0, 10.0), (-179.6, 10.0), (-179.0, 10.0),
    ]
    assert bridge_line([(-179.6, 10.0), (180.0, 10.0)]) == [(-179.6, 10.0), (-180.0, 10.0)]
    assert bridge_line([(180.0, 0.0), (-180.0, 0.0), (-179.0, 0.0)]) == [(-180.0, 0.0), (-179.0, 0.0)]


def test_bridge_line_short_input():
    assert bridge_line([]) == []
    assert bridge_line([(1.0, 2.0)]) == [(1.0, 2.0)]
    assert bridge_line([(0.0, 0.0), (0.0, 0.0), (1.0, 0.0)]) == [(0.0, 0.0), (1.0, 0.0)]


def test_great_circle_is_symmetric_across_dateline():
    # 1 degree of longitude on the equator, whichever way it is written
    one_degree = great_circle_km((0.0, 0.0), (1.0, 0.0))
    assert one_degree == pytest.approx(111.2, abs=0.1)
    assert great_circle_km((179.5, 0.0), (-179.5, 0.0)) == pytest.approx(one_degree)
    assert great_circle_km((179.5, 0.0), (180.5, 0.0)) == pytest.approx(one_degree)
