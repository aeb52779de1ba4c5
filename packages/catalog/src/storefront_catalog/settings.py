"""
Runtime settings for the storefront catalog.

Loaded from ``STOREFRONT_*`` environment variables (or a ``.env`` file).
Engine components never read settings themselves; the app factory passes
the relevant values to their constructors.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Storage
    mongo_url: str = "mongodb://localhost:27017"
    mongo_database: str = "storefront"
    products_collection: str = "products"
    enquiries_collection: str = "enquiries"
    storage_timeout: float = Field(10.0, gt=0)

    # Paging
    default_page_size: int = Field(10, ge=1)
    max_page_size: int = Field(100, ge=1)

    # Application
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="STOREFRONT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @model_validator(mode="after")
    def _page_sizes_consistent(self) -> Settings:
        if self.default_page_size > self.max_page_size:
            raise ValueError("default_page_size cannot exceed max_page_size")
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached settings instance; environment is read once per process."""
    return Settings()


__all__ = ["Settings", "get_settings"]
