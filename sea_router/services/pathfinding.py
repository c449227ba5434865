# sea_router/services/pathfinding.py
from time import perf_counter
from typing import Any, List, Tuple

import networkx as nx
import numpy as np
import osmnx as ox

from sea_router.core.errors import PathNotFound
from sea_router.core.logger import logger
from sea_router.models.route import PathSegment, Position
from sea_router.services.coordinates import adjust_for_antimeridian
from sea_router.services.graph_manager import RoutingGraph


def nearest_vertex(graph: RoutingGraph, position: Position) -> Tuple[Any, float]:
    """
    Return the graph node closest to `position` and its great-circle distance
    in metres.

    Longitudes shifted by +/-360 (see adjust_for_antimeridian) resolve to the
    same vertex as their unshifted value.
    """
    dists = ox.distance.great_circle(position[1], position[0], graph.lats, graph.lons)
    idx = int(np.argmin(dists))
    return graph.nodes[idx], float(dists[idx])


def search_path(
    graph: RoutingGraph,
    origin: Position,
    destination: Position,
    tolerance_m: float,
) -> Tuple[List[Position], float]:
    """
    Shortest path between the vertices nearest to origin and destination.

    The search runs from the destination vertex, so the returned positions
    are ordered destination-first: element 0 is the vertex nearest the
    destination, the last element the vertex nearest the origin. The float
    is the summed edge length in metres.

    Raises PathNotFound when either endpoint has no vertex within
    `tolerance_m` or the two vertices are not connected.
    """
    origin_node, origin_gap = nearest_vertex(graph, origin)
    if origin_gap > tolerance_m:
        raise PathNotFound(
            f"No network vertex within {tolerance_m / 1000.0:.1f} km of origin "
            f"({origin[0]:.5f}, {origin[1]:.5f}); nearest is {origin_gap / 1000.0:.1f} km away"
        )

    destination_node, destination_gap = nearest_vertex(graph, destination)
    if destination_gap > tolerance_m:
        raise PathNotFound(
            f"No network vertex within {tolerance_m / 1000.0:.1f} km of destination "
            f"({destination[0]:.5f}, {destination[1]:.5f}); "
            f"nearest is {destination_gap / 1000.0:.1f} km away"
        )

    try:
        length, nodes = nx.bidirectional_dijkstra(
            graph.graph,
            destination_node,
            origin_node,
            weight="weight",
        )
    except nx.NetworkXNoPath:
        raise PathNotFound(
            f"Origin ({origin[0]:.5f}, {origin[1]:.5f}) and destination "
            f"({destination[0]:.5f}, {destination[1]:.5f}) are not connected on the network"
        )

    return [graph.position(n) for n in nodes], float(length)


def find_path(
    graph: RoutingGraph,
    origin: Position,
    destination: Position,
    tolerance_m: float,
) -> PathSegment:
    """
    Route one origin/destination pair on the graph.

    The destination is shifted across the antimeridian for the search when
    the pair spans it. The search result is reversed so the segment starts
    at the vertex nearest the origin.
    """
    t0 = perf_counter()

    search_destination = adjust_for_antimeridian(origin, destination)
    if search_destination != destination:
        logger.info(
            f"Pair spans the antimeridian; searching towards lon {search_destination[0]:.5f} "
            f"instead of {destination[0]:.5f}"
        )

    positions, distance_m = search_path(graph, origin, search_destination, tolerance_m)

    # search_path is destination-first
    positions.reverse()

    logger.info(
        f"Path found with {len(positions)} vertices, {distance_m / 1000.0:.1f} km "
        f"in {(perf_counter() - t0) * 1000.0:.2f} ms"
    )
    return PathSegment(positions=positions, distance_m=distance_m)
