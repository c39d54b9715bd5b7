"""Application configuration via pydantic settings."""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "gst-billing"
    app_version: str = "1.0.0"
    app_env: str = "development"

    seller_state_name: str = "Delhi"
    seller_state_code: str = "07"

    storage_dir: str = ".billing-data"
    remote_sync_url: Optional[str] = None
    remote_sync_key: Optional[str] = None
    remote_sync_table: str = "user_data"

    api_key: Optional[str] = None
    log_level: str = "INFO"
    log_json: bool = True

    @property
    def remote_sync_enabled(self) -> bool:
        return bool(self.remote_sync_url and self.remote_sync_key)

    @property
    def seller_place_of_supply(self) -> str:
        return f"{self.seller_state_name} ({self.seller_state_code})"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
