# sea_router/api/v1/routes_health.py
from fastapi import APIRouter, Depends

from sea_router.api.dependencies import get_routing_service
from sea_router.core.config import settings
from sea_router.services.routing_service import RoutingService

router = APIRouter(
    prefix="/health",
    tags=["health"],
)


@router.get("/", summary="Health check")
async def health_check(service: RoutingService = Depends(get_routing_service)):
    """
    Simple health check endpoint to verify that the API is running.

    `graph_loaded` stays False until the first routing request has built the
    maritime graph.
    """
    return {
        "status": "ok",
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "graph_loaded": service.graph_manager.is_loaded,
    }
