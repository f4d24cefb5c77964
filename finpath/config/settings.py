from enum import StrEnum
from functools import lru_cache
import os

from pydantic import Field, PostgresDsn, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppEnv(StrEnum):
    dev = "dev"
    stage = "stage"
    prod = "prod"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=(os.getenv("ENV_FILE", ".env"), ".env.dev", ".env.stage", ".env.prod"),
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        env_prefix="",
    )


    app_env: AppEnv = Field(default=AppEnv.dev, alias="APP_ENV", description="Application environment (dev/stage/prod)")

    pg_dsn: PostgresDsn | str = Field(default="", alias="PG_DSN", validation_alias="PG_DSN")
    pg_connect_timeout_seconds: int = Field(default=5, alias="PG_CONNECT_TIMEOUT_SECONDS")
    pg_statement_timeout_ms: int = Field(default=5000, alias="PG_STATEMENT_TIMEOUT_MS")

    jwt_secret_key: SecretStr = Field(default=SecretStr(""), alias="JWT_SECRET_KEY")

    cors_allow_origins: str = Field(default="", alias="CORS_ALLOW_ORIGINS")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    roadmap_max_steps: int = Field(default=6, ge=1, alias="ROADMAP_MAX_STEPS")
    roadmap_clamp_progress: bool = Field(default=False, alias="ROADMAP_CLAMP_PROGRESS")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
