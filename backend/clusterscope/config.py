"""Application configuration from environment variables."""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings

_DEFAULT_DATA_DIR = Path(__file__).resolve().parent.parent / "data"


class Settings(BaseSettings):
    clusterscope_env: str = "development"
    clusterscope_log_level: str = "debug"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Corpus
    data_dir: Path = _DEFAULT_DATA_DIR
    datasets: dict[str, str] = {"SUV": "suv_points.json", "Pickup": "pu_points.json"}
    code_table_file: str | None = "demos-mapping.json"

    # Sessions kept in memory before the oldest is evicted
    max_sessions: int = 256

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
