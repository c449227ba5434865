# sea_router/services/geometry.py
from typing import List, Sequence

from sea_router.core.logger import logger
from sea_router.models.route import Position, RouteGeometry, StitchedRoute
from sea_router.services.coordinates import crosses_antimeridian


def segment(route: StitchedRoute) -> RouteGeometry:
    """
    Split a stitched route into dateline-safe line segments.
    """
    return RouteGeometry(segments=split_at_antimeridian(route.coordinates))


def split_at_antimeridian(coordinates: Sequence[Position]) -> List[List[Position]]:
    """
    Cut a coordinate sequence wherever two consecutive points lie on opposite
    sides of the antimeridian (longitude jump above 180 degrees, which also
    catches an exact 180 -> -180 step).

    Map widgets would otherwise draw the wrap-around line across the whole
    globe. Pieces with fewer than two points cannot form a line and are
    dropped; otherwise concatenating the pieces gives back `coordinates`.
    """
    pieces: List[List[Position]] = []
    current: List[Position] = []

    for point in coordinates:
        if current and crosses_antimeridian(current[-1], point):
            pieces.append(current)
            current = []
        current.append(point)
    if current:
        pieces.append(current)

    segments = [piece for piece in pieces if len(piece) >= 2]
    if len(segments) != len(pieces):
        logger.warning(
            f"Dropped {len(pieces) - len(segments)} single-point piece(s) "
            "while splitting at the antimeridian"
        )

    return segments
