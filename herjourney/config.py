"""Application configuration loaded from environment variables."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """All configuration is loaded from environment variables (or .env file)."""

    # --- App ---
    app_name: str = "HerJourney"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"
    environment: str = "development"  # development | staging | production

    # --- State storage ---
    state_backend: Literal["file", "memory"] = "file"
    state_file: Path = Path("data/herjourney_state.json")

    # --- Care calculations ---
    care_config_path: Path | None = None  # defaults to the bundled care_config.yaml

    # --- Premium ---
    premium_demo_code: str = "PREMIUM-ACCESS"

    # --- CORS ---
    cors_origins: list[str] = ["http://localhost:3000"]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
