from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    google_maps_api_key: str = ""
    map_zoom: int = 17
    map_width_px: int = 640
    map_height_px: int = 640
    map_type: str = "satellite"
    platform_margin: float = 1.25  # Platform extent relative to the mapped area

    start_lat: float = 45.8664544
    start_lng: float = 25.7981645

    # Roof types the host page allows; a single entry is added automatically
    available_building_types: list[str] = ["flat", "saddle", "hipped"]

    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:8000",
    ]
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "env_prefix": "PLANNER_"}


settings = Settings()
