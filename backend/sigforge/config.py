"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    sigforge_env: str = "development"
    sigforge_log_level: str = "debug"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Fonts: local directory checked before downloading from the catalog
    font_dir: str = ""
    font_timeout_s: float = 10.0

    # CJK stroke data
    stroke_data_url: str = "https://cdn.jsdelivr.net/npm/hanzi-writer-data@2.0/data/{char}.json"
    stroke_timeout_s: float = 5.0
    stroke_cache_size: int = 2048

    # Raster export
    max_raster_side: int = 800
    gif_fps: float = 30.0
    max_gif_frames: int = 300

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
