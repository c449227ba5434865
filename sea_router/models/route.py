# sea_router/models/route.py
from dataclasses import dataclass, field
from typing import List, Tuple

# (longitude, latitude) in decimal degrees, GeoJSON order
Position = Tuple[float, float]

# One traversable two-point segment of the maritime network
Edge = Tuple[Position, Position]


@dataclass(frozen=True)
class PathSegment:
    """
    Result of one origin/destination search on the routing graph.

    `positions` runs from the vertex nearest the origin to the vertex nearest
    the destination; `distance_m` is the summed edge length in metres.
    """
    positions: List[Position]
    distance_m: float


@dataclass
class Leg:
    """
    Accounting for one consecutive waypoint pair of a stitched route.

    When `fallback` is True the pair could not be routed on the graph and the
    leg is a direct great-circle connection between the raw endpoints
    (`direct_km`); `path` is then empty.
    """
    origin: Position
    destination: Position
    origin_access_km: float = 0.0
    graph_km: float = 0.0
    destination_access_km: float = 0.0
    direct_km: float = 0.0
    fallback: bool = False
    path: List[Position] = field(default_factory=list, repr=False)

    @property
    def distance_km(self) -> float:
        return (
            self.origin_access_km
            + self.graph_km
            + self.destination_access_km
            + self.direct_km
        )


@dataclass
class StitchedRoute:
    coordinates: List[Position] = field(default_factory=list)
    distance_km: float = 0.0
    legs: List[Leg] = field(default_factory=list)

    @property
    def fallback_count(self) -> int:
        return sum(1 for leg in self.legs if leg.fallback)


@dataclass(frozen=True)
class RouteGeometry:
    """
    Dateline-safe geometry of a stitched route.

    A single segment renders as a LineString, several as a MultiLineString.
    """
    segments: List[List[Position]]

    @property
    def type(self) -> str:
        return "LineString" if len(self.segments) <= 1 else "MultiLineString"

    @property
    def coordinates(self) -> list:
        if not self.segments:
            return []
        if len(self.segments) == 1:
            return [list(p) for p in self.segments[0]]
        return [[list(p) for p in seg] for seg in self.segments]

    def to_geojson(self) -> dict:
        return {"type": self.type, "coordinates": self.coordinates}
