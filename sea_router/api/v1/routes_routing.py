# sea_router/api/v1/routes_routing.py
from fastapi import APIRouter, Depends

from sea_router.api.dependencies import get_routing_service
from sea_router.models.routing import (
    ErrorResponse,
    MultiRouteRequest,
    PassageCollection,
    PassageRequest,
    RouteFeature,
)
from sea_router.services.routing_service import RoutingService

router = APIRouter(tags=["routing"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    503: {"model": ErrorResponse},
}


@router.post(
    "/multi-routes",
    response_model=RouteFeature,
    responses=ERROR_RESPONSES,
    summary="Compute a sea route through an ordered list of waypoints",
)
def multi_routes(
    request: MultiRouteRequest,
    service: RoutingService = Depends(get_routing_service),
) -> RouteFeature:
    """
    Compute one continuous sea route visiting the given coordinates in order.

    - Snaps every waypoint pair onto the maritime network and runs a
      shortest-path search between them.
    - Pairs that cannot be routed are joined by a direct great-circle line
      and flagged with `fallback` in the leg properties.
    - Routes crossing the antimeridian come back as a MultiLineString.
    """
    return service.compute_multi_route(request)


@router.post(
    "/waypoints",
    response_model=PassageCollection,
    responses=ERROR_RESPONSES,
    summary="Compute a sea passage between two ports or coordinates",
)
def waypoints(
    request: PassageRequest,
    service: RoutingService = Depends(get_routing_service),
) -> PassageCollection:
    return service.compute_passage(request)
