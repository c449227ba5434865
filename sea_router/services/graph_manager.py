# sea_router/services/graph_manager.py
import threading
from dataclasses import dataclass
from time import perf_counter
from typing import Any, Hashable, Iterable, List, Optional, Tuple

import networkx as nx
import numpy as np
import osmnx as ox

from sea_router.core.config import settings
from sea_router.core.errors import GraphUnavailable
from sea_router.core.logger import logger
from sea_router.models.route import Edge, Position
from sea_router.services.coordinates import normalize_longitude
from sea_router.services.graph_preparer import (
    iter_edges,
    load_feature_collection,
    load_split_cache,
    split_lines,
    write_split_cache,
)

NodeKey = Tuple[int, int]


@dataclass(frozen=True, eq=False)
class RoutingGraph:
    """
    Read-only maritime routing graph.

    `graph` is an undirected networkx graph whose nodes carry `x` (lon) and
    `y` (lat) and whose edges carry `length`/`weight` in metres. `nodes`,
    `lons` and `lats` are parallel arrays used for nearest-vertex lookups.
    Nothing mutates an instance after build_routing_graph() returns it.
    """
    graph: nx.Graph
    nodes: List[Hashable]
    lons: np.ndarray
    lats: np.ndarray

    def position(self, node: Any) -> Position:
        data = self.graph.nodes[node]
        return (data["x"], data["y"])

    def number_of_nodes(self) -> int:
        return self.graph.number_of_nodes()

    def number_of_edges(self) -> int:
        return self.graph.number_of_edges()


def build_routing_graph(
    edges: Iterable[Edge],
    merge_tolerance_deg: float = 1e-5,
) -> RoutingGraph:
    """
    Build the routing graph from two-point edges.

    Endpoints that agree to within `merge_tolerance_deg` on both axes become
    one node; longitudes are compared after normalisation so that points on
    -180 and 180 join the two sides of the dateline. Where several edges link
    the same pair of nodes the shortest one is kept.
    """
    edge_list = list(edges)
    if not edge_list:
        raise GraphUnavailable("Maritime network dataset contains no navigable segments")

    arr = np.asarray(edge_list, dtype=float)
    lengths = ox.distance.great_circle(arr[:, 0, 1], arr[:, 0, 0], arr[:, 1, 1], arr[:, 1, 0])
    lengths = np.atleast_1d(lengths)

    G = nx.Graph()
    num_loops = 0

    for (a, b), length in zip(edge_list, lengths):
        u = _node_key(a, merge_tolerance_deg)
        v = _node_key(b, merge_tolerance_deg)
        if u == v:
            num_loops += 1
            continue

        for key, (lon, lat) in ((u, a), (v, b)):
            if key not in G:
                G.add_node(key, x=lon, y=lat)

        length_m = float(length)
        if G.has_edge(u, v) and G[u][v]["weight"] <= length_m:
            continue
        G.add_edge(u, v, length=length_m, weight=length_m)

    nodes = list(G.nodes)
    lons = np.array([G.nodes[n]["x"] for n in nodes], dtype=float)
    lats = np.array([G.nodes[n]["y"] for n in nodes], dtype=float)

    logger.info(
        f"Routing graph built: {G.number_of_nodes()} nodes, {G.number_of_edges()} edges "
        f"({num_loops} zero-length segments skipped)"
    )

    return RoutingGraph(graph=G, nodes=nodes, lons=lons, lats=lats)


def _node_key(position: Position, tolerance: float) -> NodeKey:
    lon, lat = position
    return (int(round(normalize_longitude(lon) / tolerance)), int(round(lat / tolerance)))


class GraphManager:
    # Owns the process-wide routing graph: built once, on first use.

    def __init__(
        self,
        dataset_path: Optional[str] = None,
        split_dataset_path: Optional[str] = None,
        write_split_cache: Optional[bool] = None,
        merge_tolerance_deg: Optional[float] = None,
    ) -> None:
        self.dataset_path = dataset_path or settings.DATASET_PATH
        self.split_dataset_path = split_dataset_path or settings.SPLIT_DATASET_PATH
        self.write_split_cache = (
            settings.WRITE_SPLIT_CACHE if write_split_cache is None else write_split_cache
        )
        self.merge_tolerance_deg = merge_tolerance_deg or settings.NODE_MERGE_TOLERANCE_DEG

        self._graph: Optional[RoutingGraph] = None
        self._lock = threading.Lock()
        logger.info("GraphManager initialised (graph will be built on first request).")

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    @property
    def is_loaded(self) -> bool:
        return self._graph is not None

    def get_graph(self) -> RoutingGraph:
        """
        Return the shared routing graph, building it on the first call.

        Only one thread performs the build; concurrent callers wait on the
        lock and then read the finished graph. A failed build raises
        GraphUnavailable and leaves nothing cached, so the next call retries.
        """
        graph = self._graph
        if graph is not None:
            return graph

        with self._lock:
            if self._graph is None:
                self._graph = self._build_graph()
            return self._graph

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    def _build_graph(self) -> RoutingGraph:
        t0 = perf_counter()

        graph = self._build_from_split_cache()
        if graph is None:
            logger.info("Reading raw dataset {}", self.dataset_path)
            raw = load_feature_collection(self.dataset_path)
            fc = split_lines(raw)
            logger.info(
                f"Split {len(raw['features'])} navigable lines into "
                f"{len(fc['features'])} two-point segments"
            )
            graph = build_routing_graph(iter_edges(fc), self.merge_tolerance_deg)
            if self.write_split_cache:
                write_split_cache(fc, self.split_dataset_path)

        logger.info("Routing graph ready in {:.2f} ms", (perf_counter() - t0) * 1000.0)
        return graph

    def _build_from_split_cache(self) -> Optional[RoutingGraph]:
        # The cache is only a shortcut: anything wrong with it means None
        fc = load_split_cache(self.split_dataset_path)
        if fc is None:
            return None

        logger.info("Using split dataset {}", self.split_dataset_path)
        try:
            return build_routing_graph(iter_edges(fc), self.merge_tolerance_deg)
        except GraphUnavailable as exc:
            logger.warning(
                "Split dataset {} is unusable ({}); rebuilding from the raw dataset",
                self.split_dataset_path,
                exc.message,
            )
            return None
