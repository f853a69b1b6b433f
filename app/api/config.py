"""
Configuration module.
Owns: Environment variables, settings validation.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# Project root
BASE_DIR = Path(__file__).resolve().parents[2]


class Settings(BaseSettings):
    # ======================
    # Database
    # ======================
    database_url: str = Field(..., min_length=1, alias="DATABASE_URL")
    db_pool_size: int = Field(default=10, ge=1, alias="DB_POOL_SIZE")
    db_max_overflow: int = Field(default=5, ge=0, alias="DB_MAX_OVERFLOW")
    db_timeout_seconds: float = Field(
        default=5.0,
        gt=0,
        alias="DB_TIMEOUT_SECONDS",
        description="Upper bound for pool checkout and for each store operation",
    )
    db_create_schema: bool = Field(default=True, alias="DB_CREATE_SCHEMA")

    # ======================
    # Auth
    # ======================
    jwt_secret: str = Field(..., min_length=1, alias="JWT_SECRET")
    # Tokens are signed with the shared secret, so only HMAC algorithms apply
    jwt_algorithm: Literal["HS256", "HS384", "HS512"] = Field(
        default="HS256", alias="JWT_ALGORITHM"
    )
    token_ttl_hours: int = Field(default=24, ge=1, alias="TOKEN_TTL_HOURS")
    bcrypt_rounds: int = Field(default=12, ge=4, le=31, alias="BCRYPT_ROUNDS")

    # ======================
    # Service
    # ======================
    service_env: str = Field(default="dev", alias="SERVICE_ENV")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=8080, ge=1, le=65535, alias="PORT")
    shutdown_timeout_seconds: int = Field(
        default=5,
        ge=0,
        alias="SHUTDOWN_TIMEOUT_SECONDS",
        description="Grace period for in-flight requests after SIGTERM/SIGINT",
    )

    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        env_file_encoding="utf-8",
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
