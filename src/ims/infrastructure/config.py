"""Runtime settings, read from ``IMS_*`` environment variables or ``.env``."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# When installed in editable mode the project root is the repo root.
PROJECT_ROOT = Path(__file__).resolve().parents[3]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="IMS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    DATA_DIR: Path = PROJECT_ROOT / "data"
    EXPORT_DIR: Path = PROJECT_ROOT / "exports"

    LOW_STOCK_THRESHOLD: int = 10
    PAGE_SIZE: int = 10

    # Recorded as ``delivered_by`` when the CLI is not told who is working
    DEFAULT_STAFF: str = "staff"

    LOG_LEVEL: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    return Settings()
