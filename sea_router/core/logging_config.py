# sea_router/core/logging_config.py
from pathlib import Path
from typing import Optional

from loguru import logger
import sys

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """
    Configure application-wide logging using loguru.

    Always logs to stdout; when `log_file` is given the same records are
    appended to that file as well (its parent folder is created if needed).
    """
    # Remove default handler added by loguru / sea_router.core.logger
    logger.remove()

    logger.add(
        sys.stdout,
        level=level,
        format=LOG_FORMAT,
        enqueue=True,
        backtrace=True,
        diagnose=True,
    )

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            level=level,
            format=LOG_FORMAT,
            colorize=False,
            enqueue=True,
        )
