import logging
from functools import lru_cache

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEV_JWT_SECRET_KEY = "dev-only-secret-key-min-32-characters-long"
_PRODUCTION_ENVS = {"prod", "production"}

logger = logging.getLogger("app.config")


class Settings(BaseSettings):
    app_name: str = "Studio Ops API"
    app_version: str = "0.1.0"
    app_env: str = "local"
    app_debug: bool = True
    api_port: int = 8000
    jwt_secret_key: str = DEV_JWT_SECRET_KEY
    jwt_algorithm: str = "HS256"
    session_cookie_name: str = "auth-token"
    session_ttl_days: int = 7
    store_backend: str = "memory"
    firebase_project_id: str | None = None
    firebase_credentials_file: str | None = None
    metrics_enabled: bool = False
    otel_enabled: bool = False
    otel_exporter_endpoint: str | None = None
    otel_console_exporter: bool = False
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False)

    @property
    def is_production(self) -> bool:
        return self.app_env.lower() in _PRODUCTION_ENVS

    @model_validator(mode="after")
    def _check_signing_secret(self) -> "Settings":
        if self.jwt_secret_key == DEV_JWT_SECRET_KEY:
            if self.is_production:
                raise ValueError("JWT_SECRET_KEY must be set in production")
            logger.warning("jwt_secret_default", extra={"status": "dev-secret"})
        return self


@lru_cache
def get_settings() -> Settings:
    return Settings()
