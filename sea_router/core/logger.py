# sea_router/core/logger.py
from loguru import logger

from sea_router.core.config import settings
from sea_router.core.logging_config import setup_logging

# stdout sink at the configured level; create_app() re-runs this with LOG_FILE
setup_logging(settings.LOG_LEVEL)

__all__ = ["logger"]
