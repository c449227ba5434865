# sea_router/core/config.py
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables (.env file).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    APP_NAME: str = "Sea Route Engine"
    APP_VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"

    LOG_LEVEL: str = "INFO"
    # Extra log sink, e.g. "temp/runtime.log"
    LOG_FILE: Optional[str] = None

    # Raw maritime network (multi-point LineStrings)
    DATASET_PATH: str = "dataset/marnet_densified_v2.geojson"
    # Same network decomposed into two-point LineStrings
    SPLIT_DATASET_PATH: str = "dataset/splitCoords.geojson"
    WRITE_SPLIT_CACHE: bool = True

    PORTS_PATH: str = "dataset/ports.json"

    # How far a requested point may be snapped onto the network
    SNAP_TOLERANCE_KM: float = 500.0
    # Vertices closer than this (per axis, degrees) are the same graph node
    NODE_MERGE_TOLERANCE_DEG: float = 1e-5


settings = Settings()
