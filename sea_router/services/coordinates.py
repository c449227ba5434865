# sea_router/services/coordinates.py
import math
from typing import List, Sequence

import osmnx as ox

from sea_router.core.errors import InvalidCoordinate
from sea_router.models.route import Position


def validate_position(position: Sequence[float]) -> Position:
    """
    Check a (lon, lat) pair and return it as a normalised float tuple.

    Raises InvalidCoordinate for anything that is not two finite numbers
    inside [-180, 180] x [-90, 90].
    """
    if position is None or len(position) != 2:
        raise InvalidCoordinate(f"Expected a (longitude, latitude) pair, got {position!r}")

    try:
        lon = float(position[0])
        lat = float(position[1])
    except (TypeError, ValueError):
        raise InvalidCoordinate(f"Coordinate values must be numbers, got {position!r}")

    if not (math.isfinite(lon) and math.isfinite(lat)):
        raise InvalidCoordinate(f"Coordinate values must be finite, got ({lon}, {lat})")
    if not -180.0 <= lon <= 180.0:
        raise InvalidCoordinate(f"Longitude must be between -180 and 180, got {lon}")
    if not -90.0 <= lat <= 90.0:
        raise InvalidCoordinate(f"Latitude must be between -90 and 90, got {lat}")

    return (normalize_longitude(lon), lat)


def normalize_longitude(lon: float) -> float:
    """
    Reduce a longitude modulo 360 into (-180, 180].
    """
    if -180.0 < lon <= 180.0:
        return lon
    wrapped = math.fmod(lon + 180.0, 360.0)
    if wrapped <= 0.0:
        wrapped += 360.0
    return wrapped - 180.0


def adjust_for_antimeridian(origin: Position, destination: Position) -> Position:
    """
    Shift the destination longitude by +/-360 so it lies within 180 degrees of
    the origin.

    Only meant for search input and straight interpolation; the shifted value
    can fall outside [-180, 180] and must never reach the output geometry.
    """
    dlon = destination[0] - origin[0]
    if dlon > 180.0:
        return (destination[0] - 360.0, destination[1])
    if dlon < -180.0:
        return (destination[0] + 360.0, destination[1])
    return destination


def crosses_antimeridian(a: Position, b: Position) -> bool:
    # Covers the exact 180 <-> -180 transition (|dlon| == 360)
    return abs(b[0] - a[0]) > 180.0


def antimeridian_bridge(a: Position, b: Position) -> List[Position]:
    """
    Boundary points for a straight leg a -> b that crosses the dateline.

    Returns [(+/-180, lat), (-/+180, lat)] at the crossing latitude, in travel
    order, or an empty list when the leg does not cross. A boundary point
    equal to `a` or `b` is left out.
    """
    if not crosses_antimeridian(a, b):
        return []

    shifted = adjust_for_antimeridian(a, b)
    if shifted[0] == a[0]:
        # a -> b is an exact 180 <-> -180 step: nothing lies between them
        return []
    boundary = 180.0 if shifted[0] > a[0] else -180.0

    t = (boundary - a[0]) / (shifted[0] - a[0])
    lat = a[1] + t * (b[1] - a[1])

    return [p for p in ((boundary, lat), (-boundary, lat)) if p != a and p != b]


def seat_on_antimeridian(point: Position, neighbor: Position) -> Position:
    """
    Write a point lying exactly on the dateline with the sign of `neighbor`'s
    side, so the two do not look like a crossing.
    """
    if abs(point[0]) == 180.0 and crosses_antimeridian(point, neighbor):
        return (-point[0], point[1])
    return point


def bridge_line(points: Sequence[Position]) -> List[Position]:
    """
    Make a polyline safe to cut at the dateline.

    Every step that crosses gets its boundary points, and points sitting on
    +/-180 take the sign of the side they connect to. Consecutive duplicates
    are dropped. Splitting the result at the dateline never leaves a
    single-point piece unless the input had fewer than two distinct points.
    """
    line: List[Position] = []

    for point in points:
        if line:
            point = seat_on_antimeridian(point, line[-1])
            for p in antimeridian_bridge(line[-1], point):
                if line[-1] != p:
                    line.append(p)
        if not line or line[-1] != point:
            line.append(point)

    if len(line) >= 2:
        first = seat_on_antimeridian(line[0], line[1])
        if first == line[1]:
            del line[0]
        else:
            line[0] = first

    return line


def great_circle_m(a: Position, b: Position) -> float:
    """
    Great-circle distance between two (lon, lat) positions, in metres.
    """
    return float(ox.distance.great_circle(a[1], a[0], b[1], b[0]))


def great_circle_km(a: Position, b: Position) -> float:
    return great_circle_m(a, b) / 1000.0
