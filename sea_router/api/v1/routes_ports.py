# sea_router/api/v1/routes_ports.py
from typing import List

from fastapi import APIRouter, Depends, Query

from sea_router.api.dependencies import get_routing_service
from sea_router.models.routing import Port
from sea_router.services.routing_service import RoutingService

router = APIRouter(
    prefix="/ports",
    tags=["ports"],
)


@router.get("", response_model=List[Port], summary="Search ports by name or country")
def search_ports(
    search: str = Query("", description="Substring of the port or country name"),
    service: RoutingService = Depends(get_routing_service),
) -> List[Port]:
    return service.search_ports(search)
