# sea_router/services/routing_service.py

from time import perf_counter
from typing import List, Optional, Sequence, Tuple

from sea_router.core.config import settings
from sea_router.core.errors import InsufficientWaypoints, PathNotFound
from sea_router.core.logger import logger
from sea_router.models.route import Leg, PathSegment, Position, StitchedRoute
from sea_router.models.routing import (
    LegProperties,
    MultiRouteRequest,
    PassageCollection,
    PassageFeature,
    PassageProperties,
    PassageRequest,
    RouteFeature,
    RouteGeometry,
    RouteProperties,
)
from sea_router.services.coordinates import (
    bridge_line,
    great_circle_km,
    validate_position,
)
from sea_router.services.geometry import segment, split_at_antimeridian
from sea_router.services.graph_manager import GraphManager, RoutingGraph
from sea_router.services.pathfinding import find_path
from sea_router.services.ports import PortDirectory


def validate_waypoints(waypoints: Optional[Sequence[Sequence[float]]]) -> List[Position]:
    """
    Validate and normalise every waypoint up front.

    Any bad value aborts the whole request before a single search runs.
    """
    count = len(waypoints) if waypoints is not None else 0
    if count < 2:
        raise InsufficientWaypoints(f"At least 2 waypoints are required, got {count}")
    return [validate_position(w) for w in waypoints]


def compose_route(
    graph: RoutingGraph,
    waypoints: Sequence[Sequence[float]],
    tolerance_m: float,
) -> StitchedRoute:
    """
    Route every consecutive waypoint pair on `graph` and stitch the results.

    Each pair contributes its access leg from the raw origin to the network,
    the network path, and the access leg from the network to the raw
    destination. A pair that cannot be routed becomes a direct great-circle
    leg flagged as fallback instead of failing the request. The point shared
    by two pairs is written once, and steps across the dateline carry their
    boundary points.
    """
    points = validate_waypoints(waypoints)
    route = StitchedRoute()

    _append(route.coordinates, points[0])

    for i, (origin, destination) in enumerate(zip(points[:-1], points[1:])):
        try:
            path = find_path(graph, origin, destination, tolerance_m)
        except PathNotFound as exc:
            logger.warning(f"Pair {i}: {exc.message}; falling back to a direct great-circle leg")
            leg = _direct_leg(route.coordinates, origin, destination)
        else:
            leg = _graph_leg(route.coordinates, origin, destination, path)

        route.legs.append(leg)
        route.distance_km += leg.distance_km

    route.coordinates = bridge_line(route.coordinates)
    return route


def _graph_leg(
    coords: List[Position],
    origin: Position,
    destination: Position,
    path: PathSegment,
) -> Leg:
    first_wp = path.positions[0]
    last_wp = path.positions[-1]

    for p in path.positions:
        _append(coords, p)
    _append(coords, destination)

    return Leg(
        origin=origin,
        destination=destination,
        origin_access_km=great_circle_km(origin, first_wp),
        graph_km=path.distance_m / 1000.0,
        destination_access_km=great_circle_km(last_wp, destination),
        path=list(path.positions),
    )


def _direct_leg(coords: List[Position], origin: Position, destination: Position) -> Leg:
    _append(coords, destination)

    return Leg(
        origin=origin,
        destination=destination,
        direct_km=great_circle_km(origin, destination),
        fallback=True,
    )


def _append(coords: List[Position], point: Position) -> None:
    if not coords or coords[-1] != point:
        coords.append(point)


class RoutingService:
    """
    High-level sea routing service:
    - obtains the shared routing graph (built on first use)
    - stitches per-pair network paths into one route
    - splits the route geometry at the antimeridian
    - resolves port names for single-pair passage requests
    """

    def __init__(
        self,
        graph_manager: GraphManager | None = None,
        ports: PortDirectory | None = None,
        tolerance_km: float | None = None,
    ) -> None:
        self.graph_manager = graph_manager or GraphManager()
        self.ports = ports or PortDirectory()
        self.tolerance_km = settings.SNAP_TOLERANCE_KM if tolerance_km is None else tolerance_km
        logger.info("RoutingService initialised (snap tolerance {:.1f} km).", self.tolerance_km)

    @property
    def tolerance_m(self) -> float:
        return self.tolerance_km * 1000.0

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    def compute_multi_route(self, request: MultiRouteRequest) -> RouteFeature:
        """
        Main entry point for the /multi-routes endpoint.

        1. Validate the waypoints (no graph access on bad input).
        2. Get the shared routing graph.
        3. Stitch the per-pair routes.
        4. Split the geometry at the antimeridian.
        """
        t0 = perf_counter()

        waypoints = [(c.lon, c.lat) for c in request.coordinates]
        logger.info("Received multi-route request with {} waypoints", len(waypoints))
        validate_waypoints(waypoints)

        graph = self.graph_manager.get_graph()
        route = compose_route(graph, waypoints, self.tolerance_m)
        geometry = segment(route)

        logger.info(
            f"Route summary: distance={route.distance_km:.2f} km, legs={len(route.legs)}, "
            f"fallbacks={route.fallback_count}, segments={len(geometry.segments)}, "
            f"time={(perf_counter() - t0) * 1000.0:.2f} ms"
        )

        return RouteFeature(
            geometry=RouteGeometry(**geometry.to_geojson()),
            properties=RouteProperties(
                total_distance=route.distance_km,
                route_count=len(route.legs),
                segment_count=len(geometry.segments),
                fallback_count=route.fallback_count,
                legs=[_leg_properties(leg) for leg in route.legs],
            ),
        )

    def compute_passage(self, request: PassageRequest) -> PassageCollection:
        """
        Entry point for the /waypoints endpoint: one origin/destination pair,
        reported as origin connection, main route and destination connection.
        """
        origin, destination, route_name = self._resolve_endpoints(request)
        logger.info("Received passage request {}", route_name)

        validate_waypoints([origin, destination])
        graph = self.graph_manager.get_graph()
        route = compose_route(graph, [origin, destination], self.tolerance_m)
        leg = route.legs[0]

        logger.info(
            f"Origin to first waypoint: {leg.origin_access_km:.3f} km, "
            f"waypoint distance: {leg.graph_km:.3f} km, "
            f"last waypoint to destination: {leg.destination_access_km:.3f} km, "
            f"total: {route.distance_km:.3f} km"
        )

        return PassageCollection(features=_passage_features(leg, route, route_name))

    def search_ports(self, query: str):
        return self.ports.search(query)

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    def _resolve_endpoints(self, request: PassageRequest) -> Tuple[Position, Position, str]:
        if request.from_port and request.to_port:
            origin = self.ports.lookup(request.from_port)
            destination = self.ports.lookup(request.to_port)
            return origin, destination, f"{request.from_port} -> {request.to_port}"

        if request.origin is not None and request.destination is not None:
            o, d = request.origin, request.destination
            name = f"[{o.lon:f},{o.lat:f}] to [{d.lon:f},{d.lat:f}]"
            return (o.lon, o.lat), (d.lon, d.lat), name

        raise InsufficientWaypoints(
            "Insufficient parameters. Provide origin/destination port names "
            "or full coordinates for both."
        )


def _leg_properties(leg: Leg) -> LegProperties:
    return LegProperties(
        origin=list(leg.origin),
        destination=list(leg.destination),
        distance_km=leg.distance_km,
        origin_access_km=leg.origin_access_km,
        graph_km=leg.graph_km,
        destination_access_km=leg.destination_access_km,
        fallback=leg.fallback,
    )


def _line_geometry(points: Sequence[Position]) -> RouteGeometry:
    line = bridge_line(points)
    segments = split_at_antimeridian(line)
    if len(segments) > 1:
        return RouteGeometry(
            type="MultiLineString",
            coordinates=[[list(p) for p in seg] for seg in segments],
        )
    return RouteGeometry(type="LineString", coordinates=[list(p) for p in line])


def _passage_features(leg: Leg, route: StitchedRoute, route_name: str) -> List[PassageFeature]:
    features: List[PassageFeature] = []
    origin, destination = leg.origin, leg.destination

    if leg.fallback:
        features.append(
            PassageFeature(
                id="main_route",
                geometry=_line_geometry(route.coordinates),
                properties=PassageProperties(
                    o_coords=list(origin),
                    d_coords=list(destination),
                    o_to_wp_dist=0.0,
                    wp_to_d_dist=0.0,
                    wp_dist=leg.direct_km,
                    total_dist=route.distance_km,
                    route_name=route_name,
                    fallback=True,
                ),
            )
        )
        return features

    first_wp, last_wp = leg.path[0], leg.path[-1]

    features.append(
        PassageFeature(
            id="origin_connection",
            geometry=_line_geometry([origin, first_wp]),
            properties=PassageProperties(
                o_coords=list(origin),
                d_coords=list(first_wp),
                o_to_wp_dist=leg.origin_access_km,
                wp_to_d_dist=0.0,
                wp_dist=0.0,
                total_dist=leg.origin_access_km,
                route_name=f"{route_name} - Origin Connection",
            ),
        )
    )
    features.append(
        PassageFeature(
            id="main_route",
            geometry=_line_geometry(leg.path),
            properties=PassageProperties(
                o_coords=list(origin),
                d_coords=list(destination),
                o_to_wp_dist=leg.origin_access_km,
                wp_to_d_dist=leg.destination_access_km,
                wp_dist=leg.graph_km,
                total_dist=route.distance_km,
                route_name=route_name,
            ),
        )
    )
    features.append(
        PassageFeature(
            id="destination_connection",
            geometry=_line_geometry([last_wp, destination]),
            properties=PassageProperties(
                o_coords=list(last_wp),
                d_coords=list(destination),
                o_to_wp_dist=0.0,
                wp_to_d_dist=leg.destination_access_km,
                wp_dist=0.0,
                total_dist=leg.destination_access_km,
                route_name=f"{route_name} - Destination Connection",
            ),
        )
    )
    return features
