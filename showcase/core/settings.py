from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Application
    app_name: str = "Showcase Pagination"
    debug: bool = False
    log_level: str = "INFO"
    logs_dir: Path = Path("logs")

    # Which lesson store backs the page
    store_backend: Literal["hosted", "sql", "memory"] = "hosted"

    # Hosted content store
    content_project_id: str = "v90vmunx"
    content_dataset: str = "production"
    content_api_version: str = "2023-10-01"
    content_use_cdn: bool = True
    content_perspective: str = "published"
    content_token: str | None = None
    content_document_type: str = "lesson"

    # Local database - SQLite by default
    database_url: str = "sqlite:///./lessons.db"

    # HTTP client
    http_timeout_seconds: int = 30
    http_max_retries: int = 3

    # Pagination
    default_per_page: int = 3
    max_per_page: int = 50

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"

    @field_validator("content_api_version")
    @classmethod
    def validate_api_version(cls, v):
        # Accept both "2023-10-01" and "v2023-10-01"
        return v[1:] if v.startswith("v") else v

    @field_validator("default_per_page", "max_per_page")
    @classmethod
    def validate_per_page(cls, v):
        if v < 1:
            raise ValueError("per page values must be at least 1")
        return v


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
