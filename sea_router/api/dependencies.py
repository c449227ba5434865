# sea_router/api/dependencies.py
from functools import lru_cache

from sea_router.core.config import settings
from sea_router.services.graph_manager import GraphManager
from sea_router.services.ports import PortDirectory
from sea_router.services.routing_service import RoutingService


# Single shared instances: the routing graph is built once per process and
# then read concurrently by every request.

@lru_cache(maxsize=1)
def get_graph_manager() -> GraphManager:
    return GraphManager()


@lru_cache(maxsize=1)
def get_port_directory() -> PortDirectory:
    return PortDirectory.from_file(settings.PORTS_PATH)


@lru_cache(maxsize=1)
def get_routing_service() -> RoutingService:
    return RoutingService(
        graph_manager=get_graph_manager(),
        ports=get_port_directory(),
    )
