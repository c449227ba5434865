# sea_router/main.py

from pathlib import Path

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles

from sea_router.api.v1 import routes_health, routes_ports, routes_routing
from sea_router.core.config import settings
from sea_router.core.errors import RouteError
from sea_router.core.logger import logger
from sea_router.core.logging_config import setup_logging

# BASE_DIR = .../sea_router
BASE_DIR = Path(__file__).resolve().parent
# PROJECT_ROOT = parent of sea_router → .../
PROJECT_ROOT = BASE_DIR.parent
# STATIC_DIR = .../static
STATIC_DIR = PROJECT_ROOT / "static"
INDEX_FILE = STATIC_DIR / "index.html"


def create_app() -> FastAPI:
    setup_logging(settings.LOG_LEVEL, settings.LOG_FILE)

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Sea route API over a maritime network graph, with a Leaflet frontend served from /map.",
    )

    # Routers
    app.include_router(routes_health.router, prefix="", tags=["health"])
    app.include_router(routes_routing.router, prefix="", tags=["routing"])
    app.include_router(routes_ports.router, prefix="", tags=["ports"])

    @app.exception_handler(RouteError)
    async def route_error_handler(request: Request, exc: RouteError) -> JSONResponse:
        logger.warning("{} on {}: {}", exc.kind, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    # Serve /static/* from the static folder at project root
    app.mount("/static", StaticFiles(directory=STATIC_DIR, check_dir=False), name="static")

    @app.get("/map")
    async def map_page() -> FileResponse:
        """
        Serve the frontend map page from static/index.html
        """
        logger.info("Serving /map from {}", INDEX_FILE)

        if not INDEX_FILE.exists():
            logger.error("index.html not found at {}", INDEX_FILE)
            raise HTTPException(status_code=404, detail="index.html not found")

        return FileResponse(INDEX_FILE)

    return app


app = create_app()
