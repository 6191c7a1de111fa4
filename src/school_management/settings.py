"""
school_management.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for all layers.
- Hide secrets from repr/logging (e.g., JWT secret).
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="SM_", case_sensitive=False)

    # `dev`/`test` create tables on startup and expose the dev token endpoint.
    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "school-management-api"
    log_level: str = "INFO"
    # False switches to the structlog console renderer.
    log_json: bool = True

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Auth
    jwt_alg: str = "HS256"
    jwt_issuer: str = "school-management"
    jwt_audience: str = "school-management-api"
    jwt_secret: str = Field(default="dev-secret-change-me-0123456789abcdef", repr=False)

    # Persistence
    database_url: str = "sqlite+aiosqlite:///./school_management.db"
    db_echo: bool = False

    # Listing
    default_page_size: int = Field(default=10, ge=1)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Tests build `Settings(...)` directly and pass it to `create_app`; only the
# runtime entrypoint and request dependencies go through `get_settings`.
